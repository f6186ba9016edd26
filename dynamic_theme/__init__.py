"""Infer a page's brand color and apply it as a theme accent."""

from .colors import HSLA, ensure_readable_color, hex_to_hsla, is_usable_color, normalize_color
from .config import ConfigError, ThemeConfig, configure_logging, load_config
from .engine import InferenceEngine, InferenceRequest, RequestState
from .pipeline import ColorMemory, ColorPipeline, Resolution, ThemeColor, is_supported_url
from .sources import BrowserContentSource, ContentSource, HttpContentSource, StaticContentSource
from .stylesheet import StylesheetSink

__version__ = "0.1.0"

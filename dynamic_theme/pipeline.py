"""Resolution order for a page's theme color.

Cheap sources go first: the user's custom overrides, the per-host memory, the
built-in known-site table and the favicon. Only when all of them miss is the
page markup requested and run through the extraction strategies.
"""

import logging
from typing import NamedTuple
from urllib.parse import urlparse

from .colors import HSLA, ensure_readable_color, hex_to_hsla, is_usable_color, normalize_color
from .config import ThemeConfig
from .dom import parse_markup
from .favicon import extract_favicon_color
from .palette import KNOWN_SITE_COLORS, match_site_color
from .prominent import find_prominent_color
from .strategies import extract_css_variable_color, extract_framework_color, extract_meta_color
from .visual import extract_visual_color

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")

# Markup strategies in priority order; the first usable color wins
MARKUP_STRATEGIES = [
    ("theme-meta", extract_meta_color),
    ("css-variables", extract_css_variable_color),
    ("framework", extract_framework_color),
    ("visual", extract_visual_color),
    ("prominent", find_prominent_color),
]


class ThemeColor(NamedTuple):
    hex: str
    hsla: HSLA


class Resolution(NamedTuple):
    color: str
    source: str


def is_supported_url(url):
    """Only http(s) pages are themed."""
    if not url:
        return False
    return urlparse(url).scheme.lower() in SUPPORTED_SCHEMES


def hostname_for(url):
    return (urlparse(url).hostname or "").lower() if url else ""


class ColorMemory:
    """Last resolved color per hostname. Entries live until the process exits."""

    def __init__(self):
        self._colors = {}

    def get(self, hostname):
        return self._colors.get(hostname)

    def remember(self, hostname, color):
        if hostname and color:
            self._colors[hostname] = color

    def __contains__(self, hostname):
        return hostname in self._colors

    def __len__(self):
        return len(self._colors)


class ColorPipeline:
    def __init__(self, config=None, memory=None, known_sites=KNOWN_SITE_COLORS,
                 strategies=MARKUP_STRATEGIES):
        self.config = config or ThemeConfig()
        self.memory = memory if memory is not None else ColorMemory()
        self.known_sites = known_sites
        self.strategies = strategies

    def theme_color(self, color):
        """Make a color readable and attach its HSLA breakdown for the sink."""
        readable = ensure_readable_color(color, self.config.default_color)
        return ThemeColor(readable, hex_to_hsla(readable))

    def default_theme(self):
        default = self.config.default_color
        hex_color = normalize_color(default) or "#000000"
        try:
            hsla = hex_to_hsla(default.strip())
        except (AttributeError, ValueError):
            hsla = hex_to_hsla(hex_color)
        return ThemeColor(hex_color, hsla)

    def match_override(self, hostname):
        """Custom, cached, then known-site color for a host."""
        if self.config.use_custom_colors:
            color = normalize_color(match_site_color(hostname, self.config.custom_colors))
            if color:
                logger.debug("Found custom site color for %s: %s", hostname, color)
                return Resolution(color, "custom")

        if self.config.use_cached_colors:
            color = self.memory.get(hostname)
            if color:
                logger.debug("Using cached color for %s: %s", hostname, color)
                return Resolution(color, "cache")

        color = normalize_color(match_site_color(hostname, self.known_sites))
        if color:
            logger.debug("Found known site color for %s: %s", hostname, color)
            return Resolution(color, "known")
        return None

    def extract_from_markup(self, markup):
        """Run the markup strategies in order and return the first usable hit."""
        soup = parse_markup(markup)
        for name, strategy in self.strategies:
            color = strategy(soup)
            if is_usable_color(color):
                logger.debug("Strategy %s produced %s", name, color)
                return Resolution(color, name)
            logger.debug("Strategy %s found nothing", name)
        return None

    async def resolve(self, hostname, load_markup=None, load_favicon=None):
        """Resolve a host's color, loading favicon and markup only when needed.

        ``load_markup`` and ``load_favicon`` are zero-argument coroutine
        functions; either may be omitted. Returns a Resolution or None.
        """
        resolution = self.match_override(hostname)

        if resolution is None and load_favicon is not None:
            try:
                color = extract_favicon_color(await load_favicon())
            except Exception as e:
                logger.debug("Favicon lookup failed for %s: %s", hostname, e)
                color = None
            if color:
                logger.debug("Found color from favicon: %s", color)
                resolution = Resolution(color, "favicon")

        if resolution is None and load_markup is not None:
            markup = await load_markup()
            if markup:
                resolution = self.extract_from_markup(markup)

        if resolution is not None:
            self.memory.remember(hostname, resolution.color)
        return resolution

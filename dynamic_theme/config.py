"""Preferences record consumed by the pipeline and the engine."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(ValueError):
    """Raised when a preferences file cannot be read or decoded."""


@dataclass
class ThemeConfig:
    enabled: bool = True
    default_color: str = "#000000ff"
    contrast_active: float = 0.45
    contrast_inactive: float = 0.3
    contrast_search_bar: float = 0.45
    use_custom_colors: bool = False
    custom_colors: list = field(default_factory=list)
    enable_logging: bool = True
    use_cached_colors: bool = True

    @classmethod
    def from_dict(cls, data):
        """Build a config from the JSON record; missing keys keep their defaults."""
        defaults = cls()
        dev = data.get("devOptions") or {}
        custom = [
            {"domain": str(entry["domain"]), "color": str(entry["color"])}
            for entry in data.get("customColors") or []
            if entry.get("domain") and entry.get("color")
        ]
        return cls(
            enabled=bool(data.get("enabled", defaults.enabled)),
            default_color=data.get("defaultColor", defaults.default_color),
            contrast_active=float(data.get("contrastActive", defaults.contrast_active)),
            contrast_inactive=float(data.get("contrastInactive", defaults.contrast_inactive)),
            contrast_search_bar=float(data.get("contrastSearchBar", defaults.contrast_search_bar)),
            use_custom_colors=bool(data.get("useCustomColors", defaults.use_custom_colors)),
            custom_colors=custom,
            enable_logging=bool(dev.get("enableLogging", defaults.enable_logging)),
            use_cached_colors=bool(dev.get("usedCachedColors", defaults.use_cached_colors)),
        )

    def to_dict(self):
        return {
            "enabled": self.enabled,
            "defaultColor": self.default_color,
            "contrastActive": self.contrast_active,
            "contrastInactive": self.contrast_inactive,
            "contrastSearchBar": self.contrast_search_bar,
            "useCustomColors": self.use_custom_colors,
            "customColors": list(self.custom_colors),
            "devOptions": {
                "enableLogging": self.enable_logging,
                "usedCachedColors": self.use_cached_colors,
            },
        }


def load_config(path):
    """Read a preferences JSON file into a ThemeConfig."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return ThemeConfig.from_dict(data)


def configure_logging(config):
    """Route the package's log level from devOptions.enableLogging."""
    logger = logging.getLogger("dynamic_theme")
    logger.setLevel(logging.DEBUG if config.enable_logging else logging.WARNING)
    return logger

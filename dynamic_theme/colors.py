"""Color parsing, HSL conversion, and the usability/readability filters."""

from __future__ import annotations

import math
import re
from typing import NamedTuple

import webcolors

# Admission thresholds for accent colors
MIN_BRIGHTNESS = 30
MAX_BRIGHTNESS = 225
MIN_SATURATION = 0.1

# Readability adjustment against white overlay text
MAX_LUMINANCE = 0.5
DARKEN_FACTOR = 0.6

HEX_DIGITS = set("0123456789abcdef")

COLOR_TOKEN_RE = re.compile(r'#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)', re.I)
NUMBER_RE = re.compile(r'-?\d*\.?\d+%?')


class HSLA(NamedTuple):
    h: int
    s: int
    l: int
    a: float


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def resolve_named_color(name):
    """Best-effort lookup of a CSS named color ("rebeccapurple" -> "#663399")."""
    try:
        return webcolors.name_to_hex(name.strip().lower())
    except ValueError:
        return None


def _channel(token):
    """Convert an rgb() component (number or percentage) to an int in 0-255."""
    if token.endswith("%"):
        value = float(token[:-1]) * 255 / 100
    else:
        value = float(token)
    return max(0, min(255, int(value)))


def _alpha(token):
    if token.endswith("%"):
        return float(token[:-1]) / 100
    return float(token)


def _normalize_hex(value):
    digits = value[1:]
    if not digits or any(c not in HEX_DIGITS for c in digits):
        return None

    if len(digits) in (3, 4):
        if len(digits) == 4 and digits[3] == "0":
            return None
        digits = "".join(c * 2 for c in digits[:3])
    elif len(digits) == 8:
        if digits[6:] == "00":
            return None
        digits = digits[:6]
    elif len(digits) != 6:
        return None

    return f"#{digits}"


def _normalize_rgb(value):
    numbers = NUMBER_RE.findall(value)
    if len(numbers) < 3:
        return None
    try:
        if len(numbers) >= 4 and _alpha(numbers[3]) == 0:
            return None
        r, g, b = (_channel(n) for n in numbers[:3])
    except ValueError:
        return None
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_color(raw, resolve_name=resolve_named_color):
    """Normalize a raw CSS color to canonical ``#rrggbb`` form.

    Returns None for transparent or unparseable input. Syntaxes other than
    hex and rgb()/rgba() are handed to ``resolve_name`` once; its answer is
    normalized without a resolver so lookups never recurse further.
    """
    if not raw or not isinstance(raw, str):
        return None

    value = raw.strip().lower()
    if not value or value == "transparent":
        return None

    if value.startswith("#"):
        return _normalize_hex(value)

    if value.startswith("rgb"):
        return _normalize_rgb(value)

    if resolve_name is None:
        return None

    resolved = resolve_name(value)
    if not resolved or resolved.strip().lower() == value:
        return None
    return normalize_color(resolved, resolve_name=None)


def hex_to_rgba(hex_color):
    """Split ``#rrggbb`` or ``#rrggbbaa`` into an (r, g, b, a) tuple of ints."""
    digits = hex_color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) not in (6, 8):
        raise ValueError(f"not a hex color: {hex_color!r}")
    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    a = int(digits[6:8], 16) if len(digits) == 8 else 255
    return r, g, b, a


def brightness(r, g, b):
    """Perceived brightness on a 0-255 scale."""
    return (r * 299 + g * 587 + b * 114) / 1000


def saturation(r, g, b):
    """HSV-style saturation, (max - min) / max."""
    high = max(r, g, b)
    if high == 0:
        return 0.0
    return (high - min(r, g, b)) / high


def relative_luminance(r, g, b):
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255


def is_usable_color(hex_color):
    """Return True if the color reads as an accent (not too dark, light, or gray)."""
    if not hex_color:
        return False

    color = hex_color.lower()
    if color in ("#ffffff", "#000000"):
        return False

    try:
        r, g, b, _ = hex_to_rgba(color)
    except ValueError:
        return False

    if not MIN_BRIGHTNESS <= brightness(r, g, b) <= MAX_BRIGHTNESS:
        return False
    if saturation(r, g, b) < MIN_SATURATION:
        return False
    return True


def ensure_readable_color(color, default="#000000"):
    """Darken colors too bright to sit behind white text.

    Invalid input falls back to ``default``.
    """
    hex_color = normalize_color(color)
    if not hex_color:
        return normalize_color(default) or "#000000"

    r, g, b, _ = hex_to_rgba(hex_color)
    if relative_luminance(r, g, b) <= MAX_LUMINANCE:
        return hex_color

    r, g, b = (math.floor(c * DARKEN_FACTOR) for c in (r, g, b))
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_hsla(hex_color):
    """Convert a hex color to HSLA (h in degrees, s and l in percent)."""
    r, g, b, a = hex_to_rgba(hex_color)
    r, g, b, a = r / 255, g / 255, b / 255, a / 255

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        hue = sat = 0.0
    else:
        delta = high - low
        sat = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6

    return HSLA(
        h=_round_half_up(hue * 360) % 360,
        s=_round_half_up(sat * 100),
        l=_round_half_up(lightness * 100),
        a=round(a, 2),
    )


def find_color_tokens(text):
    """Return hex and rgb()/rgba() tokens from a CSS value, in order."""
    if not text:
        return []
    return COLOR_TOKEN_RE.findall(text)


def first_usable(candidates, resolve_name=resolve_named_color):
    """Normalize each raw candidate and return the first usable one."""
    for raw in candidates:
        color = normalize_color(raw, resolve_name=resolve_name)
        if is_usable_color(color):
            return color
    return None

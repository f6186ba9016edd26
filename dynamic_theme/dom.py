"""Markup parsing and the element readers shared by the strategies.

Static markup has no layout engine behind it. Geometry and computed colors
come from ``data-dt-*`` stamps written by the browser content source when it
serialized the page; without them, sizes fall back to ``width``/``height``
attributes and inline pixel sizes, and anything still unknown is left as None.
"""

import logging
import re
from typing import NamedTuple, Optional

import cssutils
import soupsieve as sv
from bs4 import BeautifulSoup, Tag

from .colors import find_color_tokens, first_usable, is_usable_color, normalize_color
from .palette import BRAND_CONTAINERS, BRAND_KEYWORDS

cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

RECT_ATTR = "data-dt-rect"
COLOR_ATTR = "data-dt-color"
BACKGROUND_ATTR = "data-dt-background"

PX_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*(?:px)?\s*$', re.I)

BRAND_CONTAINER_SELECTOR = ", ".join(BRAND_CONTAINERS)


class Box(NamedTuple):
    x: Optional[float]
    y: Optional[float]
    width: Optional[float]
    height: Optional[float]

    @property
    def area(self):
        return (self.width or 0) * (self.height or 0)


def parse_markup(markup):
    """Parse serialized page markup into a BeautifulSoup tree."""
    return BeautifulSoup(markup or "", "html.parser")


def inline_style(tag):
    """Return the element's inline declarations as {property: value}."""
    raw = tag.get("style") if isinstance(tag, Tag) else None
    if not raw:
        return {}
    declarations = {}
    for prop in cssutils.parseStyle(raw):
        declarations[prop.name.lower()] = prop.value
    return declarations


def class_names(tag):
    """Return the element's class list whatever shape the parser gave it."""
    value = tag.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def attr_text(tag, name):
    value = tag.get(name)
    if not value:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _px(value):
    if value is None:
        return None
    match = PX_RE.match(str(value))
    return float(match.group(1)) if match else None


def element_box(tag):
    """Return the element's layout box; unknown coordinates are None."""
    stamp = tag.get(RECT_ATTR)
    if stamp:
        try:
            x, y, width, height = (float(part) for part in stamp.split(","))
            return Box(x, y, width, height)
        except ValueError:
            logger.debug("Ignoring malformed rect stamp %r", stamp)

    style = inline_style(tag)
    width = _px(style.get("width")) if "width" in style else _px(tag.get("width"))
    height = _px(style.get("height")) if "height" in style else _px(tag.get("height"))
    return Box(None, None, width, height)


def is_smaller_than(box, min_width, min_height):
    """True only when a known dimension falls below the minimum."""
    if box.width is not None and box.width < min_width:
        return True
    if box.height is not None and box.height < min_height:
        return True
    return False


def element_depth(tag):
    """Number of ancestors between the element and the document root."""
    return sum(1 for _ in tag.parents)


def _has_brand_keyword(text):
    text = text.lower()
    return any(keyword in text for keyword in BRAND_KEYWORDS)


def is_brand_element(tag):
    """Guess whether an element is part of a logo or brand mark."""
    if tag is None:
        return False

    for name in ("id", "class", "alt", "src"):
        if _has_brand_keyword(attr_text(tag, name)):
            return True

    parent = tag.parent
    if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
        if _has_brand_keyword(attr_text(parent, "id")) or _has_brand_keyword(attr_text(parent, "class")):
            return True

    return sv.closest(BRAND_CONTAINER_SELECTOR, tag) is not None


def stamped_color(tag, attr=COLOR_ATTR):
    """Return a usable computed color recorded by the browser source, if any."""
    color = normalize_color(tag.get(attr))
    return color if is_usable_color(color) else None


def inline_background_color(tag):
    """First usable color from inline background-color / background."""
    style = inline_style(tag)

    value = style.get("background-color")
    if value:
        color = first_usable(find_color_tokens(value) or [value])
        if color:
            return color

    value = style.get("background")
    if value and "gradient" not in value.lower():
        return first_usable(find_color_tokens(value) or [value])
    return None


def gradient_colors(tag):
    """Raw color stops of an inline gradient background."""
    style = inline_style(tag)
    for name in ("background-image", "background"):
        value = style.get(name)
        if value and "gradient" in value.lower():
            return find_color_tokens(value)
    return []


def extract_background_color(tag):
    """Inline background, then the stamped computed background, then a gradient stop."""
    if tag is None:
        return None

    color = inline_background_color(tag)
    if color:
        return color

    color = stamped_color(tag, BACKGROUND_ATTR)
    if color:
        return color

    return first_usable(gradient_colors(tag))

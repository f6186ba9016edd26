"""Static extraction strategies: declared metadata, CSS variables, utility classes.

Each strategy takes a parsed document and returns a canonical, usable color
or None.
"""

import logging
import re

from .colors import first_usable, is_usable_color, normalize_color
from .dom import class_names, element_box, inline_background_color, is_smaller_than
from .palette import class_shade_color

logger = logging.getLogger(__name__)

MIN_ELEMENT_SIZE = 20

# (attribute, value) pairs tried after <meta name="theme-color">
ALTERNATE_META = [
    ("property", "og:theme-color"),
    ("name", "og:theme-color"),
    ("name", "msapplication-TileColor"),
    ("name", "apple-mobile-web-app-status-bar-style"),
    ("name", "color-scheme"),
    ("name", "theme-color-light"),
    ("name", "theme-color-dark"),
]

BRAND_VARIABLES = [
    "--primary",
    "--primary-color",
    "--color-primary",
    "--brand",
    "--brand-color",
    "--color-brand",
    "--theme",
    "--theme-color",
    "--color-theme",
    "--accent",
    "--accent-color",
    "--color-accent",
    "--main",
    "--main-color",
    "--color-main",
    "--bg-primary",
    "--background-primary",
    "--tw-bg-primary",
    "--tw-primary",
]

VARIABLE_PATTERNS = [
    re.compile(r'(?<![\w-])' + re.escape(name) + r'\s*:\s*([^;}]+)', re.I)
    for name in BRAND_VARIABLES
]

ROOT_BLOCK_RE = re.compile(r':root\s*\{([^}]*)\}', re.I)
BODY_BLOCK_RE = re.compile(r'(?<![\w.#-])body\s*\{([^}]*)\}', re.I)

UTILITY_SELECTORS = [
    ".bg-primary",
    ".bg-blue-500",
    ".bg-blue-600",
    ".bg-indigo-500",
    ".bg-indigo-600",
    ".bg-purple-500",
    ".bg-purple-600",
    ".bg-red-500",
    ".bg-red-600",
    ".bg-green-500",
    ".bg-green-600",
    ".bg-pink-500",
    ".bg-pink-600",
    ".bg-yellow-500",
    ".bg-yellow-600",
    '[class*="bg-primary"]',
    '[class*="primary-bg"]',
    ".btn-primary",
    ".button-primary",
    ".primary-button",
    ".navbar-primary",
    ".primary-bg",
    ".cta",
    ".cta-primary",
    ".btn-cta",
    ".button-cta",
    ".action-button",
    ".main-action",
    ".primary-action",
]

BUTTON_SELECTOR = 'button, [role="button"], a.btn, a.button, .btn, .button'


def _meta_contents(soup, attr, value):
    """Content of every <meta> whose attr equals value (case-insensitive)."""
    wanted = value.lower()
    contents = []
    for meta in soup.find_all("meta"):
        key = meta.get(attr)
        if key and key.strip().lower() == wanted:
            content = (meta.get("content") or "").strip()
            if content:
                contents.append(content)
    return contents


def extract_meta_color(soup):
    """Declared theme-color metadata, then vendor and alternate meta names."""
    color = first_usable(_meta_contents(soup, "name", "theme-color"))
    if color:
        logger.debug("Found meta theme-color: %s", color)
        return color

    for attr, value in ALTERNATE_META:
        candidates = [c for c in _meta_contents(soup, attr, value) if c.lower() != "default"]
        color = first_usable(candidates)
        if color:
            logger.debug("Found color from meta %s=%s: %s", attr, value, color)
            return color
    return None


def _match_brand_variable(declarations):
    for pattern in VARIABLE_PATTERNS:
        match = pattern.search(declarations)
        if match:
            color = normalize_color(match.group(1).strip())
            if is_usable_color(color):
                return color
    return None


def extract_css_variable_color(soup):
    """Brand-like custom properties from inline styles and :root/body blocks."""
    for element in soup.find_all(style=True):
        color = _match_brand_variable(element.get("style", ""))
        if color:
            logger.debug("Found CSS variable color in inline style: %s", color)
            return color

    for style_tag in soup.find_all("style"):
        css_text = style_tag.get_text()
        if not css_text:
            continue
        for block_re in (ROOT_BLOCK_RE, BODY_BLOCK_RE):
            for match in block_re.finditer(css_text):
                color = _match_brand_variable(match.group(1))
                if color:
                    logger.debug("Found CSS variable color in stylesheet: %s", color)
                    return color
    return None


def _shade_class_color(element):
    for name in class_names(element):
        color = normalize_color(class_shade_color(name))
        if is_usable_color(color):
            return color
    return None


def extract_framework_color(soup):
    """Utility-class conventions (Bootstrap, Tailwind) and inline button backgrounds."""
    seen = set()
    for selector in UTILITY_SELECTORS:
        for element in soup.select(selector):
            if id(element) in seen:
                continue
            seen.add(id(element))

            if is_smaller_than(element_box(element), MIN_ELEMENT_SIZE, MIN_ELEMENT_SIZE):
                continue

            color = inline_background_color(element) or _shade_class_color(element)
            if color:
                logger.debug("Found framework color via %s: %s", selector, color)
                return color

    for button in soup.select(BUTTON_SELECTOR):
        if is_smaller_than(element_box(button), MIN_ELEMENT_SIZE, MIN_ELEMENT_SIZE):
            continue
        color = inline_background_color(button)
        if color:
            logger.debug("Found button background color: %s", color)
            return color
    return None

"""Visual extraction strategy: logos and other brand marks.

Candidate SVGs, images and icon glyphs are ranked by how much they look like
a logo (naming, position, size). The first ten are inspected in rank order
and the first usable color wins. Header/nav backgrounds and the first few
visual elements on the page are the fallbacks.
"""

import logging
import re
from collections import defaultdict
from typing import NamedTuple

from .colors import find_color_tokens, first_usable, is_usable_color, normalize_color
from .dom import (
    class_names,
    element_box,
    extract_background_color,
    inline_style,
    is_brand_element,
    is_smaller_than,
    stamped_color,
)
from .palette import TEXT_SHADE_RE, class_shade_color, filename_color

logger = logging.getLogger(__name__)

MAX_RANKED_ELEMENTS = 10
MAX_GENERAL_ELEMENTS = 5
MAX_ANCESTOR_LEVELS = 3

ICON_SELECTOR = "i[class*='icon'], i[class*='fa'], span[class*='icon']"

SVG_SHAPES = ["path", "circle", "rect", "polygon", "polyline", "ellipse", "line"]

HEADER_SELECTORS = [
    "header", ".header", "#header",
    "nav", ".nav", "#nav",
    ".navbar", ".top-bar", ".hero", ".banner",
]

SVG_STYLE_FILL_RE = re.compile(r'fill\s*:\s*(#[0-9a-f]{3,8}|rgba?\([^)]*\))', re.I)

EMPTY_PAINT = {"", "none", "transparent", "currentcolor", "inherit"}


class BrandCandidate(NamedTuple):
    score: int
    top: float
    left: float
    order: int
    kind: str
    element: object


def _paint(value):
    if value is None:
        return None
    value = value.strip()
    if value.lower() in EMPTY_PAINT or value.lower().startswith("url("):
        return None
    return value


def _first_usable_paint(values):
    return first_usable(p for p in (_paint(v) for v in values) if p)


def extract_svg_color(svg):
    """Color of an SVG: own paint, then the majority child paint, then <style>."""
    style = inline_style(svg)
    color = _first_usable_paint([
        svg.get("fill"),
        svg.get("color"),
        style.get("fill"),
        style.get("color"),
    ])
    if color:
        return color

    weights = defaultdict(float)
    for shape in svg.find_all(SVG_SHAPES):
        shape_style = inline_style(shape)
        fill = _paint(shape.get("fill") or shape_style.get("fill"))
        stroke = _paint(shape.get("stroke") or shape_style.get("stroke"))

        fill = normalize_color(fill)
        if is_usable_color(fill):
            weights[fill] += 1
        stroke = normalize_color(stroke)
        if is_usable_color(stroke):
            weights[stroke] += 0.5

    if weights:
        return max(weights, key=weights.get)

    for style_tag in svg.find_all("style"):
        color = first_usable(SVG_STYLE_FILL_RE.findall(style_tag.get_text()))
        if color:
            return color
    return None


def extract_image_color(img):
    """Color for an <img>: border, ancestor backgrounds, then file-name keywords."""
    style = inline_style(img)
    for name in ("border-color", "border"):
        color = first_usable(find_color_tokens(style.get(name, "")))
        if color:
            return color

    parent = img.parent
    for _ in range(MAX_ANCESTOR_LEVELS):
        if parent is None or parent.name in (None, "[document]"):
            break
        color = extract_background_color(parent)
        if color:
            return color
        parent = parent.parent

    color = normalize_color(filename_color(img.get("src")))
    return color if is_usable_color(color) else None


def extract_icon_color(icon):
    """Color for an icon glyph: computed, inline, then class-encoded shade."""
    color = stamped_color(icon)
    if color:
        return color

    color = first_usable(find_color_tokens(inline_style(icon).get("color", "")))
    if color:
        return color

    for name in class_names(icon):
        color = normalize_color(class_shade_color(name, TEXT_SHADE_RE))
        if is_usable_color(color):
            return color
    return None


def _score_candidate(element, kind):
    """Return (logo-likelihood score, box); the score is None for tiny elements."""
    box = element_box(element)
    src = element.get("src") or ""

    if kind == "icon":
        if is_smaller_than(box, 5, 5):
            return None, box
        score = 30 if is_brand_element(element) else 0
        if box.y is not None and box.y < 200:
            score += 10
        return score, box

    if is_smaller_than(box, 10, 10):
        return None, box
    if kind == "img" and "data:image/svg+xml" in src and is_smaller_than(box, 24, 24):
        return None, box

    score = 50 if is_brand_element(element) else 0
    if box.y is not None and box.y < 200:
        score += 20
    if box.x is not None and box.x < 200:
        score += 10
    if box.width is not None and box.height is not None:
        if 20 < box.width < 300 and 20 < box.height < 200:
            score += 10
    return score, box


def rank_brand_elements(soup):
    """Score every SVG, image and icon and return them best first."""
    candidates = []
    seen = set()
    groups = [
        ("svg", soup.find_all("svg")),
        ("img", soup.find_all("img")),
        ("icon", soup.select(ICON_SELECTOR)),
    ]
    order = 0
    for kind, elements in groups:
        for element in elements:
            if id(element) in seen:
                continue
            seen.add(id(element))
            score, box = _score_candidate(element, kind)
            order += 1
            if score is None:
                continue
            top = box.y if box.y is not None else float("inf")
            left = box.x if box.x is not None else float("inf")
            candidates.append(BrandCandidate(score, top, left, order, kind, element))

    candidates.sort(key=lambda c: (-c.score, c.top, c.left, c.order))
    return candidates


EXTRACTORS = {
    "svg": extract_svg_color,
    "img": extract_image_color,
    "icon": extract_icon_color,
}


def extract_visual_color(soup):
    """Brand color from logos, then header backgrounds, then any early visual."""
    ranked = rank_brand_elements(soup)[:MAX_RANKED_ELEMENTS]
    logger.debug("Found %d potential brand elements to analyze", len(ranked))

    for candidate in ranked:
        color = EXTRACTORS[candidate.kind](candidate.element)
        if is_usable_color(color):
            logger.debug("Found brand color %s from %s element", color, candidate.kind)
            return color

    for selector in HEADER_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        color = extract_background_color(element)
        if color:
            logger.debug("Found color %s from %s background", color, selector)
            return color

    for element in soup.find_all(["svg", "img"], limit=MAX_GENERAL_ELEMENTS):
        color = EXTRACTORS[element.name](element)
        if is_usable_color(color):
            logger.debug("Found color %s from general %s element", color, element.name)
            return color
    return None

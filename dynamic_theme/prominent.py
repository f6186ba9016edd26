"""Prominent-element scoring, the last strategy in the chain.

Instead of taking the first match, every structural element matched by the
selector list votes for its background color. Votes for the same hex add up
and the highest total wins.
"""

import logging
from collections import defaultdict

from soupsieve import SelectorSyntaxError

from .colors import is_usable_color, normalize_color
from .dom import (
    class_names,
    element_box,
    element_depth,
    extract_background_color,
    gradient_colors,
    inline_background_color,
    is_smaller_than,
)
from .palette import EMPHASIS_CLASS_RE, class_shade_color

logger = logging.getLogger(__name__)

MIN_ELEMENT_SIZE = 20
EMPHASIS_BOOST = 5

# Ordered by importance; earlier selectors carry more weight
PRIORITY_SELECTORS = [
    # headers and primary navigation
    "header",
    "nav",
    "#header",
    "#nav",
    ".header",
    ".navbar",
    ".navigation",
    # logo containers
    '[class*="logo"]',
    '[id*="logo"]',
    '[class*="brand"]',
    '[id*="brand"]',
    # site headers
    ".site-header",
    ".main-header",
    ".page-header",
    ".global-header",
    # app bars and mastheads
    "#masthead",
    ".masthead",
    "#appbar",
    "#app-bar",
    ".app-header",
    # primary actions
    "button.primary",
    ".primary-button",
    ".btn-primary",
    ".cta-button",
    # hero sections
    ".hero",
    ".banner",
    ".jumbotron",
    ".showcase",
    ".feature",
    # drawers and sidebars
    ".drawer",
    ".sidebar",
    "#sidebar",
    "#drawer",
    ".side-menu",
    "#side-menu",
    # generic containers
    ".container-fluid > div:first-child",
    ".wrapper > div:first-child",
    "main > div:first-child",
    "body > div:first-child",
]


def score_candidates(soup, selectors=PRIORITY_SELECTORS):
    """Return {hex: accumulated score} over every matching element."""
    scores = defaultdict(float)
    total = len(selectors)

    for index, selector in enumerate(selectors):
        try:
            elements = soup.select(selector)
        except SelectorSyntaxError:
            logger.debug("Skipping unsupported selector %s", selector)
            continue

        for element in elements:
            box = element_box(element)
            if is_smaller_than(box, MIN_ELEMENT_SIZE, MIN_ELEMENT_SIZE):
                continue

            base = total - index
            if any(EMPHASIS_CLASS_RE.search(name) for name in class_names(element)):
                base += EMPHASIS_BOOST

            area = box.area
            depth = element_depth(element)

            color = inline_background_color(element)
            if color:
                scores[color] += base * 10 + area / 10000 - depth * 0.5

            for raw in gradient_colors(element):
                stop = normalize_color(raw)
                if is_usable_color(stop):
                    scores[stop] += base * 8 + area / 15000

            for name in class_names(element):
                shade = normalize_color(class_shade_color(name))
                if is_usable_color(shade):
                    scores[shade] += base * 15

    return dict(scores)


def find_prominent_color(soup):
    """Highest-scoring background color, else the body background."""
    scores = score_candidates(soup)
    if scores:
        best = max(scores, key=scores.get)
        logger.debug("Scored %d candidate colors, best is %s", len(scores), best)
        return best

    body = soup.body
    if body is None:
        return None

    color = extract_background_color(body) or normalize_color(body.get("bgcolor"))
    if is_usable_color(color):
        logger.debug("Using body background color: %s", color)
        return color
    return None

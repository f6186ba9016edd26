"""Favicon pixel histogram."""

import io
import logging
from collections import Counter

from PIL import Image, UnidentifiedImageError

from .colors import is_usable_color

logger = logging.getLogger(__name__)

MIN_ICON_SIZE = 16
MIN_ALPHA = 127


def _is_near_white(r, g, b):
    return r > 240 and g > 240 and b > 240


def _is_near_black(r, g, b):
    return r < 15 and g < 15 and b < 15


def favicon_histogram(image):
    """Count opaque, non-white, non-black pixels of a PIL image by hex color."""
    size = max(image.width, image.height, MIN_ICON_SIZE)
    rgba = image.convert("RGBA")
    if rgba.size != (size, size):
        rgba = rgba.resize((size, size), Image.NEAREST)

    counts = Counter()
    for r, g, b, a in rgba.getdata():
        if a < MIN_ALPHA:
            continue
        if _is_near_white(r, g, b) or _is_near_black(r, g, b):
            continue
        counts[f"#{r:02x}{g:02x}{b:02x}"] += 1
    return counts


def extract_favicon_color(data):
    """Most frequent usable favicon color (falling back to the runner-up).

    ``data`` is the raw image file; anything Pillow cannot decode yields None.
    """
    if not data:
        return None

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            counts = favicon_histogram(image)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug("Could not decode favicon: %s", e)
        return None

    for color, _ in counts.most_common(2):
        if is_usable_color(color):
            return color

    logger.debug("No usable color found in favicon")
    return None

"""Pytest configuration and shared fixtures for the dynamic-theme test suite."""

import struct
import zlib

import pytest

from dynamic_theme.config import ThemeConfig
from dynamic_theme.dom import parse_markup


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that require external services (Playwright, network)"
    )


# ---------------------------------------------------------------------------
# Sample HTML fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def html_meta_and_button():
    """Page that declares a theme color and also has a Tailwind blue button."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="theme-color" content="#112233">
    <title>Declared Theme</title>
</head>
<body>
    <header><a href="/">Home</a></header>
    <button class="bg-blue-500 text-white" style="width: 120px; height: 40px">Sign up</button>
</body>
</html>"""


@pytest.fixture
def html_red_logo():
    """Page whose only brand signal is a red SVG logo in the header."""
    return """<!DOCTYPE html>
<html lang="en">
<head><title>Logo Only</title></head>
<body>
    <header>
        <a href="/" class="site-logo">
            <svg width="120" height="40" viewBox="0 0 120 40">
                <path d="M0 0h40v40H0z" fill="#FF0000"></path>
                <path d="M50 0h40v40H50z" fill="#ff0000"></path>
                <circle cx="105" cy="20" r="10" stroke="#1a73e8" fill="none"></circle>
            </svg>
        </a>
    </header>
    <main><p>Plain content with no color declarations.</p></main>
</body>
</html>"""


@pytest.fixture
def html_css_variables():
    """Page that exposes its brand color through a :root custom property."""
    return """<!DOCTYPE html>
<html>
<head>
    <style>
        :root {
            --text-primary: #333333;
            --primary-color: #e63946;
            --spacing: 8px;
        }
        .card { --primary: #00ff00; }
    </style>
</head>
<body><p>Hello</p></body>
</html>"""


@pytest.fixture
def html_prominent_header():
    """Page with no declared color but a colored header background."""
    return """<!DOCTYPE html>
<html>
<body>
    <header style="background-color: rgb(44, 62, 160); width: 1280px; height: 80px">
        <span>Site</span>
    </header>
    <section class="content"><p>Body copy</p></section>
</body>
</html>"""


@pytest.fixture
def html_blank():
    """Page with nothing colorful on it."""
    return """<!DOCTYPE html>
<html><head><title>Blank</title></head>
<body><p>Just text.</p></body>
</html>"""


@pytest.fixture
def parse():
    """Parse an HTML string into a BeautifulSoup tree."""
    return parse_markup


@pytest.fixture
def config():
    """Default configuration record."""
    return ThemeConfig()


# ---------------------------------------------------------------------------
# Sample image fixtures
# ---------------------------------------------------------------------------

def _chunk(chunk_type, data):
    raw = chunk_type + data
    return struct.pack(">I", len(data)) + raw + struct.pack(">I", zlib.crc32(raw) & 0xFFFFFFFF)


def create_png(width, height, pixel_at):
    """Build a minimal RGBA PNG as bytes; ``pixel_at(x, y)`` returns (r, g, b, a).

    Uses raw zlib-compressed IDAT chunks -- no Pillow dependency needed
    for fixture creation itself.
    """
    signature = b'\x89PNG\r\n\x1a\n'
    ihdr = _chunk(b'IHDR', struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0))  # 8-bit RGBA

    raw_rows = b''
    for y in range(height):
        raw_rows += b'\x00'  # filter byte
        for x in range(width):
            raw_rows += bytes(pixel_at(x, y))
    idat = _chunk(b'IDAT', zlib.compress(raw_rows))
    iend = _chunk(b'IEND', b'')
    return signature + ihdr + idat + iend


@pytest.fixture
def favicon_mostly_orange():
    """16x16 icon: orange body, a white border and a transparent corner."""
    def pixel_at(x, y):
        if x < 4 and y < 4:
            return (0, 0, 0, 0)
        if x in (0, 15) or y in (0, 15):
            return (255, 255, 255, 255)
        return (255, 120, 0, 255)
    return create_png(16, 16, pixel_at)


@pytest.fixture
def favicon_gray_then_green():
    """16x16 icon dominated by gray with a smaller green band."""
    def pixel_at(x, y):
        if y < 4:
            return (40, 160, 70, 255)
        return (128, 128, 128, 255)
    return create_png(16, 16, pixel_at)


@pytest.fixture
def favicon_monochrome():
    """8x8 icon of black and white pixels only."""
    def pixel_at(x, y):
        return (0, 0, 0, 255) if (x + y) % 2 else (255, 255, 255, 255)
    return create_png(8, 8, pixel_at)

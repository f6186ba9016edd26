"""Unit tests for dynamic_theme/dom.py and the shared lookup tables."""

import pytest

from dynamic_theme.dom import (
    Box,
    element_box,
    element_depth,
    extract_background_color,
    inline_background_color,
    inline_style,
    is_brand_element,
    is_smaller_than,
)
from dynamic_theme.palette import (
    KNOWN_SITE_COLORS,
    class_shade_color,
    domain_matches,
    filename_color,
    match_site_color,
)


# ---------------------------------------------------------------------------
# Geometry tests
# ---------------------------------------------------------------------------

class TestElementBox:
    """Tests for reading layout from stamps, attributes, and inline sizes."""

    def test_reads_rect_stamp(self, parse):
        soup = parse('<div data-dt-rect="10,20,100,50"></div>')
        box = element_box(soup.div)
        assert box == Box(10.0, 20.0, 100.0, 50.0)
        assert box.area == 5000.0

    def test_falls_back_to_size_attributes(self, parse):
        soup = parse('<img src="a.png" width="120" height="40">')
        assert element_box(soup.img) == Box(None, None, 120.0, 40.0)

    def test_inline_px_size_wins_over_attributes(self, parse):
        soup = parse('<img width="120" height="40" style="width: 64px; height: 32px">')
        box = element_box(soup.img)
        assert (box.width, box.height) == (64.0, 32.0), f"Got {box}"

    def test_malformed_stamp_ignored(self, parse):
        soup = parse('<div data-dt-rect="oops" width="30"></div>')
        assert element_box(soup.div).width == 30.0

    def test_unknown_geometry_has_zero_area(self, parse):
        soup = parse('<div></div>')
        box = element_box(soup.div)
        assert box == Box(None, None, None, None)
        assert box.area == 0

    def test_unknown_geometry_is_never_too_small(self):
        assert not is_smaller_than(Box(None, None, None, None), 20, 20)

    def test_known_small_dimension_is_too_small(self):
        assert is_smaller_than(Box(None, None, 100.0, 10.0), 20, 20)

    def test_depth_counts_ancestors(self, parse):
        soup = parse('<html><body><div><span>x</span></div></body></html>')
        # span -> div -> body -> html -> document
        assert element_depth(soup.span) == 4


# ---------------------------------------------------------------------------
# Style and brand predicate tests
# ---------------------------------------------------------------------------

class TestStyleReaders:
    """Tests for inline declaration and background readers."""

    def test_inline_style_declarations(self, parse):
        soup = parse('<div style="COLOR: red; width: 10px"></div>')
        style = inline_style(soup.div)
        assert "color" in style, f"Property names should be lowercased, got {style}"
        assert style["width"] == "10px"

    def test_inline_style_missing(self, parse):
        soup = parse('<div></div>')
        assert inline_style(soup.div) == {}

    def test_background_color_declaration(self, parse):
        soup = parse('<div style="background-color: #E63946"></div>')
        assert inline_background_color(soup.div) == "#e63946"

    def test_background_shorthand(self, parse):
        soup = parse('<div style="background: rgb(44, 62, 160) no-repeat"></div>')
        assert inline_background_color(soup.div) == "#2c3ea0"

    def test_gradient_not_used_as_plain_background(self, parse):
        soup = parse('<div style="background: linear-gradient(#e63946, #2c3ea0)"></div>')
        assert inline_background_color(soup.div) is None
        assert extract_background_color(soup.div) == "#e63946", "First gradient stop expected"

    def test_stamped_background_used(self, parse):
        soup = parse('<nav data-dt-background="rgb(230, 57, 70)"></nav>')
        assert extract_background_color(soup.nav) == "#e63946"

    def test_unusable_background_rejected(self, parse):
        soup = parse('<div style="background-color: #ffffff"></div>')
        assert extract_background_color(soup.div) is None

    @pytest.mark.parametrize("markup", [
        '<img alt="Company Logo" src="x.png">',
        '<img id="brand-mark" src="x.png">',
        '<div class="site-logo"><img src="x.png"></div>',
        '<header><div><img src="x.png"></div></header>',
    ])
    def test_brand_elements_detected(self, parse, markup):
        soup = parse(markup)
        assert is_brand_element(soup.img), f"Expected brand element in {markup}"

    def test_plain_content_image_not_brand(self, parse):
        soup = parse('<main><p><img src="photo.jpg" alt="Team photo"></p></main>')
        assert not is_brand_element(soup.img)


# ---------------------------------------------------------------------------
# Lookup table tests
# ---------------------------------------------------------------------------

class TestPalette:
    """Tests for shade classes, filename keywords, and site matching."""

    def test_shade_class_lookup(self):
        assert class_shade_color("bg-red-600") == "#DC2626"

    @pytest.mark.parametrize("name", ["bg-red-800", "bg-magenta-500", "text-red-500", "xbg-red-500"])
    def test_non_matching_shade_classes(self, name):
        assert class_shade_color(name) is None

    def test_filename_keyword(self):
        assert filename_color("/static/logo-blue@2x.png") == "#1a73e8"

    def test_filename_without_keyword(self):
        assert filename_color("/static/logo.png") is None

    @pytest.mark.parametrize("hostname, domain, expected", [
        ("github.com", "github.com", True),
        ("www.github.com", "github.com", True),
        ("gist.GitHub.com", "github.com", True),
        ("dropbox.com", "x.com", False),
        ("notgithub.com", "github.com", False),
        ("github.com.evil.io", "github.com", False),
    ])
    def test_domain_matches_at_label_boundaries(self, hostname, domain, expected):
        assert domain_matches(hostname, domain) is expected

    def test_known_site_lookup(self):
        assert match_site_color("www.github.com", KNOWN_SITE_COLORS) == "#171515"

    def test_dropbox_not_claimed_by_x(self):
        assert match_site_color("www.dropbox.com", KNOWN_SITE_COLORS) == "#0061FF"

    def test_first_entry_wins(self):
        entries = [{"domain": "example.com", "color": "#111111"},
                   {"domain": "example.com", "color": "#222222"}]
        assert match_site_color("example.com", entries) == "#111111"

    def test_known_table_size(self):
        assert len(KNOWN_SITE_COLORS) == 35

"""Unit tests for dynamic_theme/colors.py."""

import pytest

from dynamic_theme.colors import (
    HSLA,
    ensure_readable_color,
    find_color_tokens,
    first_usable,
    hex_to_hsla,
    hex_to_rgba,
    is_usable_color,
    normalize_color,
    resolve_named_color,
)


# ---------------------------------------------------------------------------
# Normalization tests
# ---------------------------------------------------------------------------

class TestNormalizeColor:
    """Tests for raw CSS color normalization."""

    @pytest.mark.parametrize("raw", ["#1a2b3c", "#abcdef", "#000000", "#ffffff"])
    def test_lowercase_hex_unchanged(self, raw):
        assert normalize_color(raw) == raw, f"Canonical hex {raw} should pass through unchanged"

    def test_uppercase_hex_lowercased(self):
        assert normalize_color("#FF5500") == "#ff5500"

    def test_short_hex_expanded(self):
        assert normalize_color("#f50") == "#ff5500", "3-digit hex should expand to 6 digits"

    def test_short_hex_with_alpha_expanded(self):
        assert normalize_color("#f50a") == "#ff5500"

    def test_eight_digit_hex_drops_alpha(self):
        assert normalize_color("#11223380") == "#112233"

    @pytest.mark.parametrize("raw", ["#11223300", "#f500"])
    def test_zero_alpha_hex_is_transparent(self, raw):
        assert normalize_color(raw) is None, f"{raw} is fully transparent"

    def test_rgb_zero_padded(self):
        assert normalize_color("rgb(1, 2, 3)") == "#010203"

    def test_rgba_keeps_channels(self):
        assert normalize_color("rgba(255, 0, 128, 0.5)") == "#ff0080"

    def test_rgba_zero_alpha_is_transparent(self):
        assert normalize_color("rgba(0, 0, 0, 0)") is None

    def test_rgb_percentages_scaled(self):
        assert normalize_color("rgb(100%, 0%, 50%)") == "#ff007f"

    def test_rgb_values_clamped(self):
        assert normalize_color("rgb(300, -20, 10)") == "#ff000a"

    @pytest.mark.parametrize("raw", [None, "", "   ", "transparent", "#12", "#12345", "#ggg", "rgb(1, 2)"])
    def test_invalid_input_returns_none(self, raw):
        assert normalize_color(raw) is None, f"Expected None for {raw!r}"

    def test_named_color_resolved(self):
        assert normalize_color("RebeccaPurple") == "#663399"

    def test_unknown_name_returns_none(self):
        assert normalize_color("not-a-color") is None

    def test_resolver_is_injectable(self):
        result = normalize_color("brand", resolve_name=lambda name: "RGB(10, 20, 30)")
        assert result == "#0a141e"

    def test_resolver_answer_not_resolved_again(self):
        calls = []

        def resolver(name):
            calls.append(name)
            return "another-name"

        assert normalize_color("brand", resolve_name=resolver) is None
        assert calls == ["brand"], f"Resolver should be consulted once, got {calls}"

    def test_resolve_named_color_unknown(self):
        assert resolve_named_color("blurple") is None


# ---------------------------------------------------------------------------
# Usability / readability tests
# ---------------------------------------------------------------------------

class TestUsability:
    """Tests for the accent-color admission filter."""

    @pytest.mark.parametrize("color", [None, "", "#ffffff", "#000000"])
    def test_rejects_empty_and_extremes(self, color):
        assert not is_usable_color(color)

    def test_rejects_too_dark(self):
        # brightness of #0a0a40 is well under 30
        assert not is_usable_color("#0a0a40")

    def test_rejects_too_light(self):
        assert not is_usable_color("#f0f0ff")

    def test_rejects_gray(self):
        assert not is_usable_color("#808080"), "Mid gray has zero saturation"

    @pytest.mark.parametrize("color", ["#ff0000", "#1877f2", "#2c3ea0"])
    def test_accepts_accent_colors(self, color):
        assert is_usable_color(color), f"{color} should be usable"

    def test_brightness_lower_bound_inclusive(self):
        # #112233: (17*299 + 34*587 + 51*114) / 1000 = 30.855
        assert is_usable_color("#112233")

    def test_ensure_readable_keeps_dark_colors(self):
        assert ensure_readable_color("#1877f2") == "#1877f2"

    def test_ensure_readable_darkens_bright_colors(self):
        # luminance of #ffff00 is 0.9278; each channel * 0.6 floors to 153
        assert ensure_readable_color("#ffff00") == "#999900"

    def test_ensure_readable_idempotent_on_readable_output(self):
        once = ensure_readable_color("#1877f2")
        assert ensure_readable_color(once) == once

    def test_ensure_readable_invalid_uses_default(self):
        assert ensure_readable_color("garbage-value", default="#336699") == "#336699"

    def test_ensure_readable_default_alpha_stripped(self):
        assert ensure_readable_color(None, default="#000000ff") == "#000000"


# ---------------------------------------------------------------------------
# Conversion tests
# ---------------------------------------------------------------------------

class TestConversions:
    """Tests for RGBA/HSLA conversion and token scanning."""

    def test_hex_to_rgba_default_alpha(self):
        assert hex_to_rgba("#102030") == (16, 32, 48, 255)

    def test_hex_to_rgba_with_alpha(self):
        assert hex_to_rgba("#10203080") == (16, 32, 48, 128)

    def test_hex_to_rgba_rejects_bad_length(self):
        with pytest.raises(ValueError):
            hex_to_rgba("#12345")

    def test_hsla_of_pure_red(self):
        assert hex_to_hsla("#ff0000") == HSLA(0, 100, 50, 1.0)

    def test_hsla_of_gray_has_no_hue(self):
        hsla = hex_to_hsla("#808080")
        assert (hsla.h, hsla.s) == (0, 0)
        assert hsla.l == 50

    def test_hsla_of_blue_hue(self):
        assert hex_to_hsla("#0000ff").h == 240

    def test_hsla_alpha_from_eight_digit_hex(self):
        assert hex_to_hsla("#000000ff").a == 1.0
        assert hex_to_hsla("#00000080").a == 0.5

    def test_hsla_rounds_half_up(self):
        # #1877f2: h = 214.4, s = 89.2, l = 52.2
        assert hex_to_hsla("#1877f2") == HSLA(214, 89, 52, 1.0)

    def test_find_color_tokens_in_order(self):
        tokens = find_color_tokens("linear-gradient(90deg, #FF0000 0%, rgba(0, 0, 255, 0.5) 100%)")
        assert tokens == ["#FF0000", "rgba(0, 0, 255, 0.5)"]

    def test_find_color_tokens_empty(self):
        assert find_color_tokens(None) == []

    def test_first_usable_skips_unusable(self):
        assert first_usable(["#ffffff", "transparent", "#e63946"]) == "#e63946"

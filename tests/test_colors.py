"""Tests for the canonical color model."""

import pytest

from shellshade.colors import (
    FALLBACK_COLORS,
    AnsiColors,
    CanonicalTheme,
    ThemeSettings,
    component_to_byte,
    hex_to_rgb,
    is_valid_hex_color,
    normalize_hex,
    rgb_to_hex,
)
from shellshade.errors import FormatError
from shellshade.slug import slugify


class TestHexColors:
    @pytest.mark.parametrize("value", ["#000000", "#ffffff", "#1A1b26", "#abcdef"])
    def test_valid(self, value):
        assert is_valid_hex_color(value)

    @pytest.mark.parametrize("value", ["000000", "#fff", "#1234567", "#gggggg", "", None, 0x1A1B26, "#1a1b26 "])
    def test_invalid(self, value):
        assert not is_valid_hex_color(value)

    def test_normalize_lowercases(self):
        assert normalize_hex("#1A1B26") == "#1a1b26"

    def test_normalize_is_idempotent(self):
        once = normalize_hex("#C0CAF5")
        assert normalize_hex(once) == once

    def test_normalize_rejects_bad_value(self):
        with pytest.raises(FormatError):
            normalize_hex("#12345")

    def test_format_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            normalize_hex("red")

    def test_rgb_helpers(self):
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert rgb_to_hex(255, 128, 0) == "#ff8000"


class TestComponentToByte:
    def test_endpoints(self):
        assert component_to_byte(0.0) == 0
        assert component_to_byte(1.0) == 255

    def test_rounds_half_up(self):
        # 0.5 * 255 = 127.5
        assert component_to_byte(0.5) == 128

    def test_clamps_out_of_range(self):
        assert component_to_byte(1.2) == 255
        assert component_to_byte(-0.3) == 0

    def test_infinity_clamps(self):
        assert component_to_byte(float("inf")) == 255
        assert component_to_byte(float("-inf")) == 0

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            component_to_byte(float("nan"))


class TestThemeModel:
    def test_colors_are_normalized_on_construction(self, tokyo_night):
        assert tokyo_night.colors.background == "#1a1b26"

    def test_uppercase_input_is_lowercased(self):
        ansi = AnsiColors.from_list(["#ABCDEF"] * 16)
        assert ansi.bright_white == "#abcdef"

    def test_invalid_color_rejected(self):
        with pytest.raises(FormatError):
            AnsiColors.from_list(["#abc"] * 16)

    def test_from_list_requires_sixteen(self):
        with pytest.raises(FormatError):
            AnsiColors.from_list(["#000000"] * 8)

    def test_normal_and_bright_views(self, tokyo_night):
        ansi = tokyo_night.colors.ansi
        assert list(ansi.normal) == ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]
        assert ansi.normal["red"] == "#f7768e"
        assert ansi.bright["red"] == "#ff899d"

    def test_dict_uses_camel_case_keys(self, tokyo_night):
        data = tokyo_night.to_dict()
        assert data["colors"]["cursorText"] == "#1a1b26"
        assert data["colors"]["ansi"]["brightBlack"] == "#414868"
        assert data["settings"]["fontFamily"] == "SF Mono"

    def test_dict_round_trip(self, tokyo_night):
        assert CanonicalTheme.from_dict(tokyo_night.to_dict()) == tokyo_night

    def test_extended_slots_are_optional(self):
        assert FALLBACK_COLORS.link is None
        assert "link" not in FALLBACK_COLORS.to_dict()

    def test_slot_lookup(self, tokyo_night):
        assert tokyo_night.colors.slot("bright_cyan") == "#a4daff"
        assert tokyo_night.colors.slot("selection") == "#283457"


class TestThemeSettings:
    def test_defaults(self):
        settings = ThemeSettings()
        assert settings.font_size == 13
        assert settings.cursor_style == "block"
        assert settings.cursor_blink is True

    def test_unknown_cursor_style(self):
        with pytest.raises(ValueError):
            ThemeSettings(cursor_style="hollow")

    @pytest.mark.parametrize(
        "kwargs",
        [{"font_size": 13.5}, {"font_size": False}, {"line_height": "tall"}, {"cursor_blink": 1}, {"font_family": None}],
    )
    def test_wrong_types_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ThemeSettings(**kwargs)

    def test_integer_line_height_allowed(self):
        assert ThemeSettings(line_height=2).line_height == 2

    def test_from_partial_dict(self):
        settings = ThemeSettings.from_dict({"fontSize": 15, "cursorStyle": "beam"})
        assert settings.font_size == 15
        assert settings.cursor_style == "beam"
        assert settings.line_height == 1.2


class TestSlugify:
    def test_basic(self):
        assert slugify("Tokyo Night") == "tokyo-night"

    def test_underscore_separator(self):
        assert slugify("Tokyo Night", "_") == "tokyo_night"

    def test_collapses_punctuation(self):
        assert slugify("  Catppuccin -- Mocha!! ") == "catppuccin-mocha"

    def test_empty_name(self):
        assert slugify("***") == "theme"

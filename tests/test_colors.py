"""Tests for colour string translation."""

import pytest

from cardsmith.formatting.colors import color_to_string, translate_color_string


class TestTranslateColorString:
    """Tests for translate_color_string."""

    def test_named_color(self):
        assert translate_color_string("Red") == (255, 0, 0, 255)

    def test_hash_hex(self):
        assert translate_color_string("#00FF00") == (0, 255, 0, 255)

    def test_hash_hex_with_alpha(self):
        assert translate_color_string("#0000FF80") == (0, 0, 255, 128)

    def test_0x_prefix(self):
        assert translate_color_string("0x102030") == (16, 32, 48, 255)

    def test_bare_hex(self):
        assert translate_color_string("ffffff") == (255, 255, 255, 255)

    def test_decimal_components(self):
        assert translate_color_string("10, 20, 30") == (10, 20, 30, 255)
        assert translate_color_string("10,20,30,40") == (10, 20, 30, 40)

    def test_surrounding_whitespace(self):
        assert translate_color_string("  black ") == (0, 0, 0, 255)

    @pytest.mark.parametrize("value", ["", "notacolor", "1,2", "300,0,0", "#12345"])
    def test_invalid_values(self, value: str):
        with pytest.raises(ValueError):
            translate_color_string(value)


class TestColorToString:
    """Tests for color_to_string."""

    def test_formats_rgba_hex(self):
        assert color_to_string((255, 0, 16, 255)) == "#FF0010FF"

    def test_parses_back(self):
        color = (1, 2, 3, 4)
        assert translate_color_string(color_to_string(color)) == color

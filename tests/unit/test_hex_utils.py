"""Unit tests for dspal.formats.hex_utils color strings."""

import pytest

from dspal.formats.hex_utils import (
    format_color,
    format_color_rows,
    parse_color,
    parse_color_rows,
)


class TestColorStrings:
    """Tests for format_color() and parse_color()."""

    def test_format(self):
        assert format_color((248, 0, 128)) == "F80080"

    def test_parse(self):
        assert parse_color("F80080") == (248, 0, 128)

    def test_parse_with_hash(self):
        assert parse_color("#0808F8") == (8, 8, 248)

    def test_parse_lowercase(self):
        assert parse_color("f8f8f8") == (248, 248, 248)

    def test_parse_wrong_length_raises_error(self):
        with pytest.raises(ValueError, match="expected RRGGBB"):
            parse_color("FFF")

    def test_parse_non_hex_raises_error(self):
        with pytest.raises(ValueError):
            parse_color("GG0000")


class TestColorRows:
    """Tests for format_color_rows() and parse_color_rows()."""

    def test_sixteen_per_row(self):
        colors = [(i, 0, 0) for i in range(40)]
        rows = format_color_rows(colors)
        assert len(rows) == 3
        assert len(rows[0].split()) == 16
        assert len(rows[2].split()) == 8

    def test_empty_palette(self):
        assert format_color_rows([]) == []
        assert parse_color_rows([]) == []

    def test_roundtrip(self):
        colors = [(i * 8 % 256, 248 - i, 16) for i in range(20)]
        assert parse_color_rows(format_color_rows(colors)) == colors

    def test_custom_row_width(self):
        assert len(format_color_rows([(0, 0, 0)] * 8, per_row=4)) == 2

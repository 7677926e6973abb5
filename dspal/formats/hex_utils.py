"""
Nintendo DS Palette Codec - Hex Color Strings

Parsing and formatting of the "RRGGBB" color strings used in palette
JSON files. A palette is stored as rows of space-separated colors.
"""

from typing import List

from ..core.colors import Color

COLORS_PER_ROW = 16


def format_color(color: Color) -> str:
    """
    Format an RGB tuple as an uppercase hex string.

    Example:
        >>> format_color((248, 0, 128))
        'F80080'
    """
    r, g, b = color
    return f"{r:02X}{g:02X}{b:02X}"


def parse_color(text: str) -> Color:
    """
    Parse an "RRGGBB" hex string (a leading '#' is accepted).

    Raises:
        ValueError: If the string is not 6 hex digits
    """
    digits = text.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid color {text!r}, expected RRGGBB")
    value = int(digits, 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def format_color_rows(colors: List[Color], per_row: int = COLORS_PER_ROW) -> List[str]:
    """
    Format a palette as rows of space-separated hex colors.

    Args:
        colors: Palette to format
        per_row: Colors per row (default: 16, one 4bpp palette)

    Returns:
        List of row strings; empty for an empty palette
    """
    return [
        " ".join(format_color(c) for c in colors[start : start + per_row])
        for start in range(0, len(colors), per_row)
    ]


def parse_color_rows(rows: List[str]) -> List[Color]:
    """Parse rows produced by format_color_rows() back into a flat palette."""
    return [parse_color(token) for row in rows for token in row.split()]

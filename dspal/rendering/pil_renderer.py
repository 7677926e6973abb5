"""
Nintendo DS Palette Codec - PIL Renderer

PIL-based rendering of palette sets as swatch sheets.
Used by the visualize tool to create static PNG previews.
"""

from typing import Sequence

try:
    from PIL import Image, ImageDraw
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.colors import Color

SWATCH_SIZE = 16  # Pixels per color swatch
SWATCHES_PER_ROW = 16
SLOT_GAP = 2  # Pixels between palette slots
BACKGROUND_COLOR: Color = (0x20, 0x20, 0x20)
EMPTY_SLOT_COLOR: Color = (0x40, 0x40, 0x40)


def slot_rows(palette: Sequence[Color], per_row: int = SWATCHES_PER_ROW) -> int:
    """Number of swatch rows a palette slot occupies (empty slots take one)."""
    return max(1, -(-len(palette) // per_row))


def render_palettes_to_image(
    palettes: Sequence[Sequence[Color]],
    swatch_size: int = SWATCH_SIZE,
    per_row: int = SWATCHES_PER_ROW,
) -> Image.Image:
    """
    Render a palette set to a PIL Image.

    Each slot starts on a new swatch row; slots are separated by a small
    gap. Empty slots are drawn as a single crossed-out row so that slot
    positions stay readable in sparse (index-remapped) sets.

    Args:
        palettes: Palette set, one list of colors per slot
        swatch_size: Width/height of one color swatch in pixels
        per_row: Swatches per row

    Returns:
        PIL Image object
    """
    total_rows = sum(slot_rows(palette, per_row) for palette in palettes)
    gaps = max(0, len(palettes) - 1) * SLOT_GAP
    img_width = per_row * swatch_size
    img_height = max(swatch_size, total_rows * swatch_size + gaps)

    img = Image.new("RGB", (img_width, img_height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(img)

    y = 0
    for palette in palettes:
        if not palette:
            draw.rectangle(
                [0, y, img_width - 1, y + swatch_size - 1], fill=EMPTY_SLOT_COLOR
            )
            draw.line([0, y, img_width - 1, y + swatch_size - 1], fill=BACKGROUND_COLOR)
        for i, color in enumerate(palette):
            x = (i % per_row) * swatch_size
            row_y = y + (i // per_row) * swatch_size
            draw.rectangle(
                [x, row_y, x + swatch_size - 1, row_y + swatch_size - 1],
                fill=tuple(color),
            )
        y += slot_rows(palette, per_row) * swatch_size + SLOT_GAP

    return img


def render_palette_strip(palette: Sequence[Color], swatch_size: int = SWATCH_SIZE) -> Image.Image:
    """Render a single palette as one horizontal strip of swatches."""
    width = max(1, len(palette)) * swatch_size
    img = Image.new("RGB", (width, swatch_size), EMPTY_SLOT_COLOR)
    draw = ImageDraw.Draw(img)
    for i, color in enumerate(palette):
        x = i * swatch_size
        draw.rectangle([x, 0, x + swatch_size - 1, swatch_size - 1], fill=tuple(color))
    return img

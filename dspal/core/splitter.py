"""
Nintendo DS Palette Codec - Palette Splitting

Partitions a flat color buffer into sub-palettes, optionally remapped
through a PCMP index table, and flattens them back for writing.
"""

from typing import List, Optional, Sequence

from .colors import Color
from .errors import ArgumentError
from .palette_data import ColorDepth

# Type alias for a set of sub-palettes; unreferenced slots are empty lists
PaletteSet = List[List[Color]]


def palette_count(num_colors: int, colors_per_palette: int) -> int:
    """
    Number of physical palettes in a buffer with no index table.

    A trailing partial palette counts as a palette.

    Args:
        num_colors: Length of the flat color buffer
        colors_per_palette: 16 or 256

    Returns:
        ceil(num_colors / colors_per_palette)
    """
    return -(-num_colors // colors_per_palette)


def split_palettes(
    colors_per_palette: int,
    num_palettes: int,
    flat_colors: Sequence[Color],
    indices: Optional[Sequence[int]] = None,
) -> PaletteSet:
    """
    Split a flat color buffer into sub-palettes.

    Physical palette i is the run flat_colors[i*cpp : (i+1)*cpp]. Without an
    index table it lands in slot i; with one it lands in slot indices[i].
    Slots nobody targets stay empty. If two physical palettes target the
    same slot, the later one wins.

    Args:
        colors_per_palette: 16 or 256
        num_palettes: Number of physical palettes to read
        flat_colors: Decoded PLTT color buffer
        indices: Optional slot per physical palette (from PCMP)

    Returns:
        List of slots, max(indices) + 1 long with an index table,
        num_palettes long without

    Raises:
        ArgumentError: If indices is given and its length is not num_palettes
    """
    if indices is not None and len(indices) != num_palettes:
        raise ArgumentError(
            f"Index table has {len(indices)} entries, expected {num_palettes}"
        )

    if indices:
        palettes: PaletteSet = [[] for _ in range(max(indices) + 1)]
    else:
        palettes = [[] for _ in range(num_palettes)]

    total_colors = len(flat_colors)
    for i in range(num_palettes):
        slot = indices[i] if indices is not None else i
        start = i * colors_per_palette
        copy_count = min(colors_per_palette, total_colors - start)
        if copy_count <= 0:
            # Buffer ran out before this palette; leave the slot empty
            continue
        palettes[slot] = list(flat_colors[start : start + copy_count])

    return palettes


def flatten_palettes(palettes: Sequence[Sequence[Color]]) -> List[Color]:
    """
    Concatenate sub-palettes in slot order.

    Inverse of split_palettes() when no two physical palettes share a slot.

    Args:
        palettes: Slots to concatenate; empty slots contribute nothing

    Returns:
        Flat color buffer
    """
    flat: List[Color] = []
    for palette in palettes:
        flat.extend(palette)
    return flat


def infer_depth(palettes: Sequence[Sequence[Color]]) -> ColorDepth:
    """
    Pick the depth to write for a palette set.

    Only the first slot is inspected: more than 16 colors means 8bpp.
    Mixed-size sets are therefore written with the first slot's depth.

    Args:
        palettes: Palette set about to be written

    Returns:
        DEPTH_256 if slot 0 holds more than 16 colors, else DEPTH_16
    """
    if palettes and len(palettes[0]) > 0x10:
        return ColorDepth.DEPTH_256
    return ColorDepth.DEPTH_16

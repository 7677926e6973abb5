"""
Nintendo DS Palette Codec - Packed Colors

Conversion between the DS 15-bit packed color (BGR555, little-endian)
and 8-bit RGB tuples.

Bit layout of each 16-bit color: [X BBBBB GGGGG RRRRR]
- R = red (bits 0-4)
- G = green (bits 5-9)
- B = blue (bits 10-14)
- X = unused (bit 15, always written as 0)
"""

from typing import List, Sequence, Tuple

import numpy as np

from .errors import FormatError

# Type alias for RGB color
Color = Tuple[int, int, int]

BYTES_PER_COLOR = 2


def bgr555_to_rgb(value: int) -> Color:
    """
    Convert a packed BGR555 value to an RGB tuple.

    Each 5-bit channel is widened by shifting left 3 bits, so the
    conversion is exactly reversed by rgb_to_bgr555().

    Args:
        value: 16-bit packed color

    Returns:
        (r, g, b) tuple with values 0-248
    """
    r = (value & 0x1F) << 3
    g = ((value >> 5) & 0x1F) << 3
    b = ((value >> 10) & 0x1F) << 3
    return (r, g, b)


def rgb_to_bgr555(color: Color) -> int:
    """
    Convert an RGB tuple to a packed BGR555 value.

    Args:
        color: (r, g, b) tuple with values 0-255

    Returns:
        16-bit packed color (bit 15 clear)

    Raises:
        ValueError: If a channel is outside 0-255
    """
    r, g, b = color
    for name, channel in (("red", r), ("green", g), ("blue", b)):
        if not 0 <= channel <= 255:
            raise ValueError(f"Invalid {name} value {channel}. Must be 0-255")
    return (r >> 3) | ((g >> 3) << 5) | ((b >> 3) << 10)


def decode_colors(data: bytes) -> List[Color]:
    """
    Decode a buffer of packed colors.

    Args:
        data: Raw bytes, 2 per color

    Returns:
        List of RGB tuples, len(data) // 2 entries

    Raises:
        FormatError: If the buffer length is odd
    """
    if len(data) % BYTES_PER_COLOR:
        raise FormatError(f"Odd color buffer length {len(data)}")
    if not data:
        return []

    packed = np.frombuffer(data, dtype="<u2")
    channels = np.empty((len(packed), 3), dtype=np.uint8)
    channels[:, 0] = (packed & 0x1F) << 3
    channels[:, 1] = ((packed >> 5) & 0x1F) << 3
    channels[:, 2] = ((packed >> 10) & 0x1F) << 3
    return [tuple(int(c) for c in row) for row in channels]


def encode_colors(colors: Sequence[Color]) -> bytes:
    """
    Encode RGB tuples as packed colors.

    Args:
        colors: Sequence of (r, g, b) tuples with values 0-255

    Returns:
        2 bytes per color, little-endian

    Raises:
        ValueError: If a color is not an (r, g, b) tuple or a channel is
            outside 0-255
    """
    if not len(colors):
        return b""

    channels = np.asarray(colors, dtype=np.int32)
    if channels.ndim != 2 or channels.shape[1] != 3:
        raise ValueError("Colors must be (r, g, b) tuples")
    if channels.min() < 0 or channels.max() > 255:
        raise ValueError("Color channel values must be 0-255")

    packed = (channels[:, 0] >> 3) | ((channels[:, 1] >> 3) << 5) | ((channels[:, 2] >> 3) << 10)
    return packed.astype("<u2").tobytes()

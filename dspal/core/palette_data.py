"""
Nintendo DS Palette Codec - Palette Data Block (PLTT)

Parses and serializes the raw color buffer of an NCLR file together with
its declared color depth.

Payload layout (offsets relative to block start, i.e. after the 8-byte
block header):
    0x00  u32  depth code (3 = 16 colors, 4 = 256 colors)
    0x04  u32  multi-palette flag (opaque, passed through)
    0x08  u32  declared palette size (diagnostic only)
    0x0C  u32  palette offset (expected 0x10)
    0x10  ...  packed colors, 2 bytes each
"""

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Sequence, Union

from .byte_reader import ByteReader
from .colors import BYTES_PER_COLOR, Color, decode_colors, encode_colors
from .diagnostics import DiagnosticLog
from .errors import FormatError

PLTT_TAG = "PLTT"

BLOCK_HEADER_SIZE = 0x08  # Tag + size, handled by the container
PLTT_HEADER_SIZE = 0x10
PALETTE_OFFSET = 0x10  # Always written, regardless of what was read

MULTI_PALETTE_8BPP = 1


class ColorDepth(IntEnum):
    """Color depth codes stored in the PLTT block."""

    UNKNOWN = 0
    DEPTH_16 = 3  # 4bpp, 16 colors per palette
    DEPTH_256 = 4  # 8bpp, 256 colors per palette

    @classmethod
    def from_code(cls, code: int) -> "ColorDepth":
        """Map a raw depth code to a ColorDepth, UNKNOWN for anything else."""
        if code in (cls.DEPTH_16, cls.DEPTH_256):
            return cls(code)
        return cls.UNKNOWN

    @property
    def colors_per_palette(self) -> int:
        """
        Number of colors in one sub-palette of this depth.

        Raises:
            FormatError: If the depth is UNKNOWN
        """
        if self is ColorDepth.DEPTH_256:
            return 0x100
        if self is ColorDepth.DEPTH_16:
            return 0x10
        raise FormatError("Cannot split palette with unknown color depth")


def serialize_palette_data(
    colors: Sequence[Color],
    depth: Union[ColorDepth, int],
    multi_palette_flag: int,
) -> bytes:
    """
    Build a PLTT block payload.

    Args:
        colors: Flat color buffer
        depth: Depth code to store
        multi_palette_flag: Opaque flag to store unchanged

    Returns:
        Payload bytes (without the 8-byte block header)
    """
    palette_bytes = encode_colors(colors)
    header = struct.pack(
        "<IIII", int(depth), multi_palette_flag, len(palette_bytes), PALETTE_OFFSET
    )
    return header + palette_bytes


@dataclass
class PaletteDataBlock:
    """Decoded PLTT block."""

    depth_code: int = ColorDepth.DEPTH_16
    multi_palette_flag: int = 0
    colors: List[Color] = field(default_factory=list)

    @property
    def depth(self) -> ColorDepth:
        return ColorDepth.from_code(self.depth_code)

    @depth.setter
    def depth(self, value: ColorDepth):
        self.depth_code = int(value)

    @classmethod
    def parse(
        cls,
        reader: ByteReader,
        block_start: int,
        block_size: int,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> "PaletteDataBlock":
        """
        Parse a PLTT block.

        The palette size field is not trusted: when the file carries a PCMP
        block the field may be stale, so the payload length is derived from
        the block size instead.

        Args:
            reader: Reader over the whole container
            block_start: Offset of the first payload byte (after tag + size)
            block_size: Block size from the block header (header-inclusive)
            diagnostics: Log receiving non-fatal findings

        Returns:
            Parsed PaletteDataBlock

        Raises:
            FormatError: On a negative or odd derived size, or a seek/read
                outside the stream
        """
        if diagnostics is None:
            diagnostics = DiagnosticLog()

        actual_size = block_size - BLOCK_HEADER_SIZE - PLTT_HEADER_SIZE
        if actual_size < 0:
            raise FormatError(
                f"PLTT block size 0x{block_size:X} is smaller than its header"
            )
        if actual_size % BYTES_PER_COLOR:
            raise FormatError(f"PLTT palette length {actual_size} is odd")

        reader.seek(block_start)
        depth_code = reader.read_u32()
        multi_palette_flag = reader.read_u32()
        declared_size = reader.read_u32()
        palette_offset = reader.read_u32()

        if declared_size != actual_size:
            diagnostics.warn(
                PLTT_TAG,
                f"Palette size field 0x{declared_size:X} differs from actual "
                f"size 0x{actual_size:X}",
                block_start + 0x08,
            )
        if palette_offset != PALETTE_OFFSET:
            diagnostics.warn(
                PLTT_TAG,
                f"Palette offset 0x{palette_offset:X} differs from 0x{PALETTE_OFFSET:X}",
                block_start + 0x0C,
            )
        if ColorDepth.from_code(depth_code) is ColorDepth.UNKNOWN:
            diagnostics.warn(PLTT_TAG, f"Unknown color format {depth_code}", block_start)

        reader.seek(block_start + palette_offset)
        colors = decode_colors(reader.read(actual_size))

        # Flag meaning is unconfirmed; it is only ever seen set on 8bpp files
        if (
            multi_palette_flag == MULTI_PALETTE_8BPP
            and ColorDepth.from_code(depth_code) is not ColorDepth.DEPTH_256
            and len(colors) < 0x100
        ):
            diagnostics.warn(
                PLTT_TAG,
                "Multi-palette flag set on a palette that is not multi-palette 8bpp",
                block_start + 0x04,
            )

        return cls(depth_code, multi_palette_flag, colors)

    def serialize(self) -> bytes:
        """Serialize this block's payload with its stored depth and flag."""
        return serialize_palette_data(self.colors, self.depth_code, self.multi_palette_flag)

"""
Nintendo DS Palette Codec - Palette Index Table Block (PCMP)

Optional block mapping each physical palette in the PLTT color buffer to
the logical palette slot it is loaded into.

Payload layout (offsets relative to block start):
    0x00  u16    palette count
    0x02  u16    constant (0xBEEF in every known file)
    0x04  u32    data offset (expected 0x08)
    0x08  u16[]  palette slot per physical palette
"""

import struct
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .byte_reader import ByteReader
from .diagnostics import DiagnosticLog

PCMP_TAG = "PCMP"

PCMP_CONSTANT = 0xBEEF
INDEX_DATA_OFFSET = 0x08


def serialize_index_table(indices: Sequence[int], sentinel: int = PCMP_CONSTANT) -> bytes:
    """
    Build a PCMP block payload.

    Args:
        indices: Logical slot for each physical palette
        sentinel: Constant to store (passed through from the parsed block)

    Returns:
        Payload bytes (without the 8-byte block header)
    """
    count = len(indices)
    return struct.pack(f"<HHI{count}H", count, sentinel, INDEX_DATA_OFFSET, *indices)


@dataclass
class IndexTableBlock:
    """Decoded PCMP block."""

    indices: List[int] = field(default_factory=list)
    sentinel: int = PCMP_CONSTANT

    @property
    def count(self) -> int:
        return len(self.indices)

    @classmethod
    def parse(
        cls,
        reader: ByteReader,
        block_start: int,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> "IndexTableBlock":
        """
        Parse a PCMP block.

        Args:
            reader: Reader over the whole container
            block_start: Offset of the first payload byte (after tag + size)
            diagnostics: Log receiving non-fatal findings

        Returns:
            Parsed IndexTableBlock

        Raises:
            FormatError: If the data offset or the index entries fall
                outside the stream
        """
        if diagnostics is None:
            diagnostics = DiagnosticLog()

        reader.seek(block_start)
        count = reader.read_u16()
        sentinel = reader.read_u16()
        data_offset = reader.read_u32()

        reader.seek(block_start + data_offset)
        indices = reader.read_u16_array(count)

        if count == 0:
            diagnostics.warn(PCMP_TAG, "Index table declares 0 palettes", block_start)
        if sentinel != PCMP_CONSTANT:
            diagnostics.warn(
                PCMP_TAG,
                f"Constant 0x{sentinel:04X} differs from 0x{PCMP_CONSTANT:04X}",
                block_start + 0x02,
            )

        return cls(indices, sentinel)

    def serialize(self) -> bytes:
        """Serialize this block's payload."""
        return serialize_index_table(self.indices, self.sentinel)

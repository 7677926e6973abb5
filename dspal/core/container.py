"""
Nintendo DS Palette Codec - Nitro Block Container

Minimal reader/writer for the generic Nitro file container used by NCLR
(and the other DS graphics formats).

File header (0x10 bytes):
    0x00  4    magic ("RLCN" for NCLR)
    0x04  u16  byte order mark (0xFEFF)
    0x06  u16  version
    0x08  u32  file size
    0x0C  u16  header size (0x10)
    0x0E  u16  block count

Each block: 4-byte tag stored reversed ("TTLP" for PLTT), u32 block size
including the 8-byte block header, then the payload.
"""

import struct
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .byte_reader import ByteReader
from .diagnostics import DiagnosticLog
from .errors import FormatError, MissingBlockError

FILE_HEADER_SIZE = 0x10
BLOCK_HEADER_SIZE = 0x08
BYTE_ORDER_MARK = 0xFEFF
DEFAULT_VERSION = 0x0100

CONTAINER_TAG = "NTR"  # Diagnostics source for file-level findings


@dataclass
class NitroBlock:
    """
    One tagged block.

    `offset` is where the block header sat in the parsed file, or None for
    blocks created or replaced after parsing.
    """

    tag: str
    payload: bytes
    offset: Optional[int] = None

    @property
    def size(self) -> int:
        """Block size including the 8-byte header."""
        return BLOCK_HEADER_SIZE + len(self.payload)

    def to_bytes(self) -> bytes:
        return self.tag[::-1].encode("ascii") + struct.pack("<I", self.size) + self.payload


class NitroContainer:
    """
    Ordered list of tagged blocks behind a Nitro file header.

    Usage:
        container = NitroContainer.parse(data)
        if container.contains("PCMP"):
            block = container.get_block("PCMP")
    """

    def __init__(self, magic: str, version: int = DEFAULT_VERSION):
        """
        Create an empty container.

        Args:
            magic: 4-character file magic as stored on disk
            version: Format version stored in the header
        """
        if len(magic) != 4:
            raise ValueError(f"Magic must be 4 characters, got {magic!r}")
        self.magic = magic
        self.version = version
        self.blocks: List[NitroBlock] = []
        self.data = b""

    @classmethod
    def parse(cls, data: bytes, diagnostics: Optional[DiagnosticLog] = None) -> "NitroContainer":
        """
        Parse a Nitro file.

        Args:
            data: Complete file contents
            diagnostics: Log receiving non-fatal findings

        Returns:
            Parsed container

        Raises:
            FormatError: If the header is truncated or a block runs past
                the end of the data
        """
        if diagnostics is None:
            diagnostics = DiagnosticLog()

        reader = ByteReader(data)
        try:
            magic = reader.read(4).decode("ascii")
        except UnicodeDecodeError:
            raise FormatError("File magic is not ASCII")
        bom = reader.read_u16()
        version = reader.read_u16()
        file_size = reader.read_u32()
        header_size = reader.read_u16()
        num_blocks = reader.read_u16()

        if bom != BYTE_ORDER_MARK:
            diagnostics.warn(CONTAINER_TAG, f"Unexpected byte order mark 0x{bom:04X}", 0x04)
        if header_size != FILE_HEADER_SIZE:
            diagnostics.warn(
                CONTAINER_TAG, f"Header size 0x{header_size:X} differs from 0x10", 0x0C
            )
        if file_size != len(data):
            diagnostics.warn(
                CONTAINER_TAG,
                f"File size field 0x{file_size:X} differs from actual size 0x{len(data):X}",
                0x08,
            )

        container = cls(magic, version)
        container.data = reader.data

        reader.seek(header_size)
        for _ in range(num_blocks):
            offset = reader.tell()
            try:
                tag = reader.read(4)[::-1].decode("ascii")
            except UnicodeDecodeError:
                raise FormatError(f"Block tag at 0x{offset:X} is not ASCII")
            size = reader.read_u32()
            if size < BLOCK_HEADER_SIZE:
                raise FormatError(f"Block '{tag}' at 0x{offset:X} has invalid size 0x{size:X}")
            payload = reader.read(size - BLOCK_HEADER_SIZE)
            container.blocks.append(NitroBlock(tag, payload, offset))

        return container

    def find_block(self, tag: str, position: int = 0) -> Optional[NitroBlock]:
        """
        Find the Nth block with a given tag.

        Args:
            tag: Block tag (e.g. "PLTT")
            position: Which occurrence to return (0-based)

        Returns:
            The block, or None if there are not enough blocks with this tag
        """
        matches = [block for block in self.blocks if block.tag == tag]
        if position < len(matches):
            return matches[position]
        return None

    def get_block(self, tag: str, position: int = 0) -> NitroBlock:
        """
        Get the Nth block with a given tag.

        Raises:
            MissingBlockError: If no such block exists
        """
        block = self.find_block(tag, position)
        if block is None:
            raise MissingBlockError(tag)
        return block

    def contains(self, tag: str) -> bool:
        """Check whether any block has the given tag."""
        return any(block.tag == tag for block in self.blocks)

    def set_block(self, tag: str, payload: bytes, position: int = 0) -> NitroBlock:
        """
        Replace the Nth block with a tag, or append it if missing.

        Args:
            tag: Block tag
            payload: New payload (without the 8-byte block header)
            position: Which occurrence to replace

        Returns:
            The new block
        """
        if len(tag) != 4:
            raise ValueError(f"Block tag must be 4 characters, got {tag!r}")

        new_block = NitroBlock(tag, bytes(payload))
        old_block = self.find_block(tag, position)
        if old_block is None:
            self.blocks.append(new_block)
        else:
            self.blocks[self.blocks.index(old_block)] = new_block
        return new_block

    def open_block(self, block: NitroBlock) -> Tuple[ByteReader, int]:
        """
        Get a reader bounded to one block's window.

        Parsed blocks are read in place so offsets stay absolute; new blocks
        are read from their own bytes.

        Args:
            block: Block belonging to this container

        Returns:
            Tuple of (reader, offset of the first payload byte)
        """
        if block.offset is None:
            return ByteReader(block.to_bytes()), BLOCK_HEADER_SIZE
        end = block.offset + block.size
        return ByteReader(self.data, end=end), block.offset + BLOCK_HEADER_SIZE

    def to_bytes(self) -> bytes:
        """
        Serialize the container.

        File size, block sizes and block count are recomputed.
        """
        body = b"".join(block.to_bytes() for block in self.blocks)
        header = self.magic.encode("ascii") + struct.pack(
            "<HHIHH",
            BYTE_ORDER_MARK,
            self.version,
            FILE_HEADER_SIZE + len(body),
            FILE_HEADER_SIZE,
            len(self.blocks),
        )
        return header + body

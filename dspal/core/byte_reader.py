"""
Nintendo DS Palette Codec - Byte Reader

Bounds-checked little-endian reader over an in-memory byte buffer.
Every out-of-range seek or read raises FormatError.
"""

from typing import Optional

from .errors import FormatError


class ByteReader:
    """
    Positioned reader over a bytes buffer.

    Block codecs seek relative to their block start, so the reader keeps
    an explicit cursor rather than slicing. An optional end bound limits
    reads to one block's window inside a larger container buffer.
    """

    def __init__(self, data: bytes, position: int = 0, end: Optional[int] = None):
        """
        Wrap a byte buffer.

        Args:
            data: Buffer to read from
            position: Initial cursor position
            end: Readable limit (default: end of data)
        """
        self.data = bytes(data)
        self.end = len(self.data) if end is None else min(end, len(self.data))
        self.position = 0
        self.seek(position)

    def __len__(self) -> int:
        return self.end

    def tell(self) -> int:
        return self.position

    def seek(self, position: int):
        """
        Move the cursor to an absolute position.

        Seeking exactly to the end is allowed (a following zero-length read
        succeeds); anything past it is a format error.

        Raises:
            FormatError: If position is negative or past the end bound
        """
        if position < 0 or position > self.end:
            raise FormatError(
                f"Seek to 0x{position:X} outside stream (end 0x{self.end:X})"
            )
        self.position = position

    def read(self, length: int) -> bytes:
        """
        Read raw bytes and advance the cursor.

        Args:
            length: Number of bytes to read

        Returns:
            Exactly `length` bytes

        Raises:
            FormatError: If length is negative or runs past the end bound
        """
        if length < 0:
            raise FormatError(f"Negative read length {length}")
        end = self.position + length
        if end > self.end:
            raise FormatError(
                f"Read of {length} bytes at 0x{self.position:X} runs past end "
                f"of stream (end 0x{self.end:X})"
            )
        chunk = self.data[self.position : end]
        self.position = end
        return chunk

    def read_u16(self) -> int:
        """Read 16-bit little-endian unsigned value."""
        data = self.read(2)
        return data[0] | (data[1] << 8)

    def read_u32(self) -> int:
        """Read 32-bit little-endian unsigned value."""
        data = self.read(4)
        return data[0] | (data[1] << 8) | (data[2] << 16) | (data[3] << 24)

    def read_u16_array(self, count: int) -> list[int]:
        """
        Read `count` consecutive 16-bit little-endian values.

        Raises:
            FormatError: If the array runs past the end bound
        """
        data = self.read(count * 2)
        return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]

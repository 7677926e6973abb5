"""Shared pytest fixtures that build NCLR byte images in memory."""

import struct

import pytest


def pack_colors(raw_colors):
    """Pack raw 15-bit color values as little-endian u16."""
    return struct.pack(f"<{len(raw_colors)}H", *raw_colors)


def make_block(tag, payload):
    """Build a Nitro block: reversed tag, header-inclusive size, payload."""
    return tag[::-1].encode("ascii") + struct.pack("<I", 8 + len(payload)) + payload


def make_pltt_payload(raw_colors, depth=3, flag=0, declared_size=None, palette_offset=0x10):
    """Build a PLTT payload; declared_size defaults to the real size."""
    palette = pack_colors(raw_colors)
    if declared_size is None:
        declared_size = len(palette)
    header = struct.pack("<IIII", depth, flag, declared_size, palette_offset)
    # Any gap between the header and the palette offset is padding
    padding = b"\x00" * max(0, palette_offset - 0x10)
    return header + padding + palette


def make_pcmp_payload(indices, sentinel=0xBEEF, data_offset=0x08, count=None):
    """Build a PCMP payload; count defaults to len(indices)."""
    if count is None:
        count = len(indices)
    header = struct.pack("<HHI", count, sentinel, data_offset)
    return header + struct.pack(f"<{len(indices)}H", *indices)


def make_nclr(blocks, magic="RLCN", file_size=None):
    """Wrap (tag, payload) pairs in a Nitro file header."""
    body = b"".join(make_block(tag, payload) for tag, payload in blocks)
    if file_size is None:
        file_size = 0x10 + len(body)
    header = magic.encode("ascii") + struct.pack(
        "<HHIHH", 0xFEFF, 0x0100, file_size, 0x10, len(blocks)
    )
    return header + body


@pytest.fixture
def ramp_colors():
    """Factory for distinct raw colors: value i encodes red=i%32, green=i//32."""

    def _ramp(count):
        return [(i % 32) | (((i // 32) % 32) << 5) for i in range(count)]

    return _ramp


@pytest.fixture
def simple_nclr(ramp_colors):
    """NCLR with two full 16-color palettes and no index table."""
    return make_nclr([("PLTT", make_pltt_payload(ramp_colors(32)))])


@pytest.fixture
def remapped_nclr(ramp_colors):
    """NCLR with three 16-color palettes remapped to slots 2, 0, 5."""
    return make_nclr(
        [
            ("PLTT", make_pltt_payload(ramp_colors(48))),
            ("PCMP", make_pcmp_payload([2, 0, 5])),
        ]
    )


@pytest.fixture
def nclr_256(ramp_colors):
    """NCLR with one full 256-color palette and the multi-palette flag set."""
    return make_nclr([("PLTT", make_pltt_payload(ramp_colors(256), depth=4, flag=1))])

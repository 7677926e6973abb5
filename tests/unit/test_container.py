"""Unit tests for the Nitro block container (dspal.core.container)."""

import struct

import pytest

from conftest import make_block, make_nclr
from dspal.core.container import NitroContainer
from dspal.core.diagnostics import DiagnosticLog
from dspal.core.errors import FormatError, MissingBlockError


class TestContainerParse:
    """Tests for NitroContainer.parse()."""

    def test_blocks_in_order(self):
        data = make_nclr([("PLTT", b"\x01\x02"), ("PCMP", b"\x03\x04\x05\x06")])
        container = NitroContainer.parse(data)
        assert container.magic == "RLCN"
        assert [b.tag for b in container.blocks] == ["PLTT", "PCMP"]
        assert container.blocks[1].payload == b"\x03\x04\x05\x06"

    def test_tags_stored_reversed(self):
        data = make_nclr([("PLTT", b"")])
        assert data[0x10:0x14] == b"TTLP"
        assert NitroContainer.parse(data).blocks[0].tag == "PLTT"

    def test_block_offsets(self):
        data = make_nclr([("PLTT", b"\x00" * 4), ("PCMP", b"")])
        container = NitroContainer.parse(data)
        assert container.blocks[0].offset == 0x10
        assert container.blocks[1].offset == 0x10 + 8 + 4

    def test_file_size_mismatch_warns(self):
        log = DiagnosticLog()
        NitroContainer.parse(make_nclr([("PLTT", b"")], file_size=0x999), log)
        assert any("File size" in d.message for d in log)

    def test_clean_file_has_no_diagnostics(self):
        log = DiagnosticLog()
        NitroContainer.parse(make_nclr([("PLTT", b"\x00\x00")]), log)
        assert not log

    def test_truncated_header_raises_error(self):
        with pytest.raises(FormatError):
            NitroContainer.parse(b"RLCN\xFF\xFE")

    def test_block_past_end_raises_error(self):
        data = make_nclr([("PLTT", b"\x00" * 8)])
        with pytest.raises(FormatError, match="runs past end"):
            NitroContainer.parse(data[:-4])

    def test_missing_blocks_raise_error(self):
        """Block count larger than the blocks present is fatal."""
        data = bytearray(make_nclr([("PLTT", b"")]))
        data[0x0E] = 2
        with pytest.raises(FormatError):
            NitroContainer.parse(bytes(data))

    def test_block_size_too_small_raises_error(self):
        data = make_nclr([]) + b"TTLP" + struct.pack("<I", 4)
        data = data[:0x0E] + b"\x01\x00" + data[0x10:]
        with pytest.raises(FormatError, match="invalid size"):
            NitroContainer.parse(data)


class TestContainerLookup:
    """Tests for block lookup and replacement."""

    def test_get_block(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"\x01")]))
        assert container.get_block("PLTT").payload == b"\x01"

    def test_get_block_by_position(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"\x01"), ("PLTT", b"\x02")]))
        assert container.get_block("PLTT", 1).payload == b"\x02"

    def test_get_missing_block_raises_error(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"")]))
        with pytest.raises(MissingBlockError, match="PCMP"):
            container.get_block("PCMP")

    def test_find_missing_block_returns_none(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"")]))
        assert container.find_block("PLTT", 1) is None

    def test_contains(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"")]))
        assert container.contains("PLTT")
        assert not container.contains("PCMP")

    def test_set_block_replaces_in_place(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"\x01"), ("PCMP", b"")]))
        container.set_block("PLTT", b"\x09\x09")
        assert [b.tag for b in container.blocks] == ["PLTT", "PCMP"]
        assert container.blocks[0].payload == b"\x09\x09"
        assert container.blocks[0].offset is None

    def test_set_block_appends(self):
        container = NitroContainer("RLCN")
        container.set_block("PLTT", b"")
        container.set_block("PCMP", b"")
        assert [b.tag for b in container.blocks] == ["PLTT", "PCMP"]

    def test_open_block_bounds_to_window(self):
        """A reader for the first block cannot see the second block."""
        data = make_nclr([("PLTT", b"\x00" * 4), ("PCMP", b"\xFF" * 4)])
        container = NitroContainer.parse(data)
        reader, start = container.open_block(container.blocks[0])
        assert start == 0x18
        assert len(reader) == 0x1C
        with pytest.raises(FormatError):
            reader.seek(0x1D)

    def test_open_new_block(self):
        container = NitroContainer("RLCN")
        block = container.set_block("PLTT", b"\x01\x02")
        reader, start = container.open_block(block)
        reader.seek(start)
        assert reader.read(2) == b"\x01\x02"


class TestContainerWrite:
    """Tests for NitroContainer.to_bytes()."""

    def test_roundtrip(self):
        data = make_nclr([("PLTT", b"\x01\x02\x03\x04"), ("PCMP", b"\x05\x06")])
        assert NitroContainer.parse(data).to_bytes() == data

    def test_recomputes_sizes(self):
        container = NitroContainer.parse(make_nclr([("PLTT", b"")], file_size=0x999))
        container.set_block("PLTT", b"\x00" * 6)
        data = container.to_bytes()
        assert struct.unpack("<I", data[0x08:0x0C])[0] == len(data)
        assert struct.unpack("<I", data[0x14:0x18])[0] == 8 + 6

    def test_empty_container(self):
        data = NitroContainer("RLCN").to_bytes()
        assert data == b"RLCN" + struct.pack("<HHIHH", 0xFEFF, 0x0100, 0x10, 0x10, 0)

    def test_invalid_magic_length_raises_error(self):
        with pytest.raises(ValueError, match="4 characters"):
            NitroContainer("RLC")

    def test_make_block_matches_block_bytes(self):
        container = NitroContainer("RLCN")
        block = container.set_block("PCMP", b"\xAA")
        assert block.to_bytes() == make_block("PCMP", b"\xAA")

"""
Nintendo DS Palette Codec - NCLR File

Reads and writes NCLR palette files: a Nitro container holding a PLTT
color block and an optional PCMP index table.

Index table limitation: the PCMP block is kept exactly as read and is not
regenerated from the palette set on write, because the meaning of its
palette count relative to the PLTT buffer is not known. Changing the
number or placement of sub-palettes in a file with a PCMP block therefore
produces a table that no longer matches the colors.
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .colors import Color
from .container import CONTAINER_TAG, NitroContainer
from .diagnostics import Diagnostic, DiagnosticLog
from .errors import FormatError
from .index_table import PCMP_TAG, IndexTableBlock
from .palette_data import PLTT_TAG, ColorDepth, PaletteDataBlock
from .splitter import PaletteSet, flatten_palettes, infer_depth, palette_count, split_palettes

NCLR_MAGIC = "RLCN"


class NclrFile:
    """
    NCLR palette file.

    Usage:
        nclr = NclrFile.from_file("title.nclr")
        palette = nclr.get_palette(0)
        nclr.set_palettes(edited)
        nclr.save("title_edited.nclr")
    """

    def __init__(
        self,
        container: Optional[NitroContainer] = None,
        diagnostics: Optional[DiagnosticLog] = None,
    ):
        """
        Wrap a parsed container, or create an empty 16-color file.

        Args:
            container: Parsed Nitro container (default: new empty NCLR)
            diagnostics: Log receiving non-fatal findings

        Raises:
            MissingBlockError: If the container has no PLTT block
            FormatError: If the blocks are structurally invalid
        """
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.pltt: PaletteDataBlock = PaletteDataBlock()
        self.pcmp: Optional[IndexTableBlock] = None
        self._pcmp_payload: Optional[bytes] = None

        if container is None:
            self.container = NitroContainer(NCLR_MAGIC)
            self.container.set_block(PLTT_TAG, self.pltt.serialize())
            self._palettes: PaletteSet = []
        else:
            self.container = container
            self._palettes = self.load(container)

    # ------------------------------------------------------------------
    # Construction / output
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(
        cls, data: bytes, diagnostics: Optional[DiagnosticLog] = None
    ) -> "NclrFile":
        """Parse an NCLR file from memory."""
        if diagnostics is None:
            diagnostics = DiagnosticLog()
        container = NitroContainer.parse(data, diagnostics)
        return cls(container, diagnostics)

    @classmethod
    def from_file(
        cls,
        path: str,
        on_diagnostic: Optional[Callable[[Diagnostic], None]] = None,
    ) -> "NclrFile":
        """
        Load an NCLR file from disk.

        Args:
            path: Path to the .nclr file
            on_diagnostic: Called with each non-fatal finding while parsing

        Returns:
            Parsed NclrFile
        """
        with open(path, "rb") as f:
            data = f.read()
        return cls.from_bytes(data, DiagnosticLog(callback=on_diagnostic))

    def to_bytes(self) -> bytes:
        """Serialize the current palette set as NCLR file bytes."""
        self.store(self.container, self._palettes)
        return self.container.to_bytes()

    def save(self, path: str):
        """Write the current palette set to an NCLR file."""
        Path(path).write_bytes(self.to_bytes())

    # ------------------------------------------------------------------
    # Block <-> palette set
    # ------------------------------------------------------------------

    def load(self, container: NitroContainer) -> PaletteSet:
        """
        Read the palette set from a container.

        Args:
            container: Parsed Nitro container

        Returns:
            Freshly built palette set

        Raises:
            MissingBlockError: If the container has no PLTT block
            FormatError: If a block is malformed or the depth is unknown
        """
        if container.magic != NCLR_MAGIC:
            self.diagnostics.warn(
                CONTAINER_TAG, f"File magic {container.magic!r} is not {NCLR_MAGIC!r}", 0
            )

        pltt_block = container.get_block(PLTT_TAG)
        reader, block_start = container.open_block(pltt_block)
        self.pltt = PaletteDataBlock.parse(reader, block_start, pltt_block.size, self.diagnostics)

        self.pcmp = None
        self._pcmp_payload = None
        if container.contains(PCMP_TAG):
            pcmp_block = container.get_block(PCMP_TAG)
            reader, block_start = container.open_block(pcmp_block)
            self.pcmp = IndexTableBlock.parse(reader, block_start, self.diagnostics)
            self._pcmp_payload = pcmp_block.payload

        for tag in (PLTT_TAG, PCMP_TAG):
            extra = container.find_block(tag, 1)
            if extra is not None:
                self.diagnostics.warn(
                    tag, f"Multiple {tag} blocks; using the first", extra.offset
                )

        if self.pltt.depth is ColorDepth.UNKNOWN:
            raise FormatError(
                f"Cannot split palette: unknown color format {self.pltt.depth_code}"
            )
        colors_per_palette = self.pltt.depth.colors_per_palette

        if self.pcmp is not None:
            indices: Optional[List[int]] = self.pcmp.indices
            num_palettes = self.pcmp.count
        else:
            indices = None
            num_palettes = palette_count(len(self.pltt.colors), colors_per_palette)

        return split_palettes(colors_per_palette, num_palettes, self.pltt.colors, indices)

    def store(self, container: NitroContainer, palettes: Sequence[Sequence[Color]]):
        """
        Write a palette set into a container.

        The PLTT block is rebuilt with a depth inferred from the first
        sub-palette and the multi-palette flag read on load. A PCMP block
        read on load is written back unchanged.

        Args:
            container: Container to update
            palettes: Palette set to write
        """
        self.pltt.depth = infer_depth(palettes)
        self.pltt.colors = flatten_palettes(palettes)
        container.set_block(PLTT_TAG, self.pltt.serialize())

        if self._pcmp_payload is not None and not container.contains(PCMP_TAG):
            container.set_block(PCMP_TAG, self._pcmp_payload)

    # ------------------------------------------------------------------
    # Palette access
    # ------------------------------------------------------------------

    @property
    def palettes(self) -> PaletteSet:
        """Copy of the current palette set."""
        return [list(palette) for palette in self._palettes]

    def set_palettes(self, palettes: Sequence[Sequence[Color]]):
        """Replace the palette set written by to_bytes()/save()."""
        self._palettes = [list(palette) for palette in palettes]

    def get_palette(self, index: int) -> List[Color]:
        """
        Get one sub-palette.

        Raises:
            IndexError: If index is out of range
        """
        return list(self._palettes[index])

    @property
    def num_palettes(self) -> int:
        return len(self._palettes)

    @property
    def depth(self) -> ColorDepth:
        return self.pltt.depth

    @property
    def multi_palette_flag(self) -> int:
        return self.pltt.multi_palette_flag

    @property
    def index_table(self) -> Optional[List[int]]:
        """Slot per physical palette from the PCMP block, or None."""
        if self.pcmp is None:
            return None
        return list(self.pcmp.indices)

"""
Nintendo DS Palette Codec - Palette JSON Model

Holds an NCLR palette set in editable form and handles loading from and
saving to JSON files.
"""

import json
from typing import Any, Dict, List, Optional

from . import hex_utils
from ..core.colors import Color
from ..core.nclr import NclrFile
from ..core.palette_data import ColorDepth

FORMAT_NAME = "nclr"


class PaletteData:
    """Editable palette set with the NCLR metadata needed to write it back."""

    def __init__(self):
        self.palettes: List[List[Color]] = []
        self.depth: ColorDepth = ColorDepth.DEPTH_16
        self.multi_palette_flag: int = 0
        self.index_table: Optional[List[int]] = None
        self.filepath: Optional[str] = None

    @classmethod
    def from_nclr(cls, nclr: NclrFile) -> "PaletteData":
        """Copy the palette set and metadata out of a parsed NCLR file."""
        data = cls()
        data.palettes = nclr.palettes
        data.depth = nclr.depth
        data.multi_palette_flag = nclr.multi_palette_flag
        data.index_table = nclr.index_table
        return data

    def apply_to(self, nclr: NclrFile):
        """
        Replace the palette set of an NCLR file.

        Depth and index table are not copied: the NCLR writer infers depth
        from the first palette and keeps its own index table.
        """
        nclr.set_palettes(self.palettes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": FORMAT_NAME,
            "depth": self.depth.name,
            "multi_palette_flag": self.multi_palette_flag,
            "index_table": self.index_table,
            "palettes": [
                {"slot": slot, "colors": hex_utils.format_color_rows(palette)}
                for slot, palette in enumerate(self.palettes)
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaletteData":
        """
        Build from a parsed JSON document.

        Raises:
            ValueError: If the document is not a palette file, a key or depth
                name is missing or unknown, or slots are out of order
        """
        if not isinstance(data, dict) or data.get("format") != FORMAT_NAME:
            raise ValueError(f"Not a palette file (expected format {FORMAT_NAME!r})")

        result = cls()
        try:
            result.depth = ColorDepth[data.get("depth", "DEPTH_16")]
            result.multi_palette_flag = data.get("multi_palette_flag", 0)
            result.index_table = data.get("index_table")

            for expected_slot, entry in enumerate(data["palettes"]):
                if entry["slot"] != expected_slot:
                    raise ValueError(
                        f"Palette slot {entry['slot']} out of order, expected {expected_slot}"
                    )
                result.palettes.append(hex_utils.parse_color_rows(entry["colors"]))
        except KeyError as e:
            raise ValueError(f"Invalid palette file: missing {e}") from e

        return result

    def load(self, path: str):
        """Load palette data from JSON file."""
        with open(path, "r") as f:
            loaded = self.from_dict(json.load(f))

        self.palettes = loaded.palettes
        self.depth = loaded.depth
        self.multi_palette_flag = loaded.multi_palette_flag
        self.index_table = loaded.index_table
        self.filepath = path

    def save(self, path: Optional[str] = None):
        """Save palette data to JSON file."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
            f.write("\n")

        self.filepath = path

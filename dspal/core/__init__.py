"""
Core NCLR functionality.

This package contains the Nitro block container, the PLTT and PCMP block
codecs, palette splitting, and packed color conversion.
"""

from .container import NitroBlock, NitroContainer
from .diagnostics import Diagnostic, DiagnosticLog
from .errors import ArgumentError, FormatError, MissingBlockError, PaletteError
from .index_table import IndexTableBlock
from .nclr import NclrFile
from .palette_data import ColorDepth, PaletteDataBlock
from .splitter import flatten_palettes, infer_depth, split_palettes

__all__ = [
    "NitroBlock",
    "NitroContainer",
    "Diagnostic",
    "DiagnosticLog",
    "PaletteError",
    "FormatError",
    "MissingBlockError",
    "ArgumentError",
    "IndexTableBlock",
    "NclrFile",
    "ColorDepth",
    "PaletteDataBlock",
    "split_palettes",
    "flatten_palettes",
    "infer_depth",
]

"""
Nintendo DS Palette Codec - Exceptions

Fatal error types raised by the block codecs and the NCLR container.
Survivable anomalies are reported as diagnostics instead (see diagnostics.py).
"""


class PaletteError(Exception):
    """Base class for all palette codec errors."""

    pass


class FormatError(PaletteError, ValueError):
    """Raised when container bytes are structurally invalid."""

    pass


class MissingBlockError(PaletteError):
    """Raised when a required block is absent from the container."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Required block '{tag}' not found in container")


class ArgumentError(PaletteError, ValueError):
    """Raised when caller-supplied arguments are inconsistent."""

    pass

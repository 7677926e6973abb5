"""
Nintendo DS Palette Codec - Parse Diagnostics

Non-fatal anomalies found while parsing (size mismatches, unexpected
constants, unknown depth codes) are recorded here rather than raised.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional


@dataclass(frozen=True)
class Diagnostic:
    """A single surprising-but-survivable finding."""

    block: str
    message: str
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.offset is None:
            return f"{self.block}: {self.message}"
        return f"{self.block} @ 0x{self.offset:X}: {self.message}"


class DiagnosticLog:
    """
    Ordered collection of diagnostics for one parse.

    Usage:
        log = DiagnosticLog(callback=lambda d: print(f"Warning: {d}"))
        nclr = NclrFile.from_bytes(data, diagnostics=log)
        for diag in log:
            ...
    """

    def __init__(self, callback: Optional[Callable[[Diagnostic], None]] = None):
        """
        Create an empty log.

        Args:
            callback: Called with each diagnostic as soon as it is recorded
        """
        self._records: list[Diagnostic] = []
        self._callback = callback

    def warn(self, block: str, message: str, offset: Optional[int] = None) -> Diagnostic:
        """
        Record a diagnostic.

        Args:
            block: Tag of the block being parsed (e.g. "PLTT")
            message: Human-readable description
            offset: Stream offset the finding refers to, if any

        Returns:
            The recorded Diagnostic
        """
        diag = Diagnostic(block, message, offset)
        self._records.append(diag)
        if self._callback is not None:
            self._callback(diag)
        return diag

    def for_block(self, block: str) -> list[Diagnostic]:
        """Return diagnostics recorded for a single block tag."""
        return [d for d in self._records if d.block == block]

    @property
    def records(self) -> list[Diagnostic]:
        return list(self._records)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

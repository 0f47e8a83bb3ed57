"""
Port interfaces for the application layer.

These are the interfaces that infrastructure adapters must implement.
"""

from typing import Any, Iterator, Protocol, runtime_checkable

from clefview.core.models import LogEntry

__all__ = [
    "LogSourcePort",
    "NormalizerPort",
]


@runtime_checkable
class LogSourcePort(Protocol):
    """
    Port for log source adapters.

    Implementations provide raw log lines, one record per line.
    """

    def read_lines(self) -> Iterator[str]:
        """Read raw log lines from the source."""
        ...

    def metadata(self) -> dict[str, str]:
        """Get source metadata (path, type, size, etc.)."""
        ...


@runtime_checkable
class NormalizerPort(Protocol):
    """
    Port for record normalization.

    Implementations turn one raw line or decoded record into a LogEntry,
    raising MalformedEntryError for unrecoverable input.
    """

    def normalize(self, record: Any, encoding: str | None = None) -> LogEntry:
        """Normalize a decoded record."""
        ...

    def parse_line(self, line: str, encoding: str | None = None) -> LogEntry:
        """Decode and normalize a raw line."""
        ...

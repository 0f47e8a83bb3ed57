"""
Per-file summary statistics.
"""

from typing import Iterable

from clefview.core.models import LogEntry, LogFileInfo

__all__ = ["build_file_info"]


def build_file_info(path: str, entries: Iterable[LogEntry]) -> LogFileInfo:
    """
    Scan a file's entries once and summarize them.

    Levels are listed in order of first appearance. The date range spans
    the earliest and latest parsable timestamps, compared as instants;
    entries whose timestamp cannot be parsed do not contribute to it.

    Args:
        path: Identifier of the source file
        entries: The file's entries, in file order (not modified)

    Returns:
        LogFileInfo for the file
    """
    total_count = 0
    levels: dict[str, None] = {}
    earliest = None
    latest = None

    for entry in entries:
        total_count += 1
        levels.setdefault(entry.level, None)

        ts = entry.parsed_timestamp
        if ts is None:
            continue
        if earliest is None or ts < earliest:
            earliest = ts
        if latest is None or ts > latest:
            latest = ts

    return LogFileInfo(
        path=path,
        total_count=total_count,
        log_levels=tuple(levels),
        date_range=(earliest, latest) if earliest is not None else None,
    )

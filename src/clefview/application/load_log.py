"""
Load log file use case.

Orchestrates reading, normalization and summary for one log file.
"""

import logging
import warnings
from typing import Iterator

from clefview.application.ports import LogSourcePort, NormalizerPort
from clefview.core.exceptions import MalformedEntryError
from clefview.core.models import LoadResult, LogEntry
from clefview.engine.summary import build_file_info

__all__ = ["LoadLogFileUseCase", "MAX_RECORDED_ERRORS"]

logger = logging.getLogger(__name__)

# Skipped-record messages kept on a LoadResult; the count is always exact
MAX_RECORDED_ERRORS = 100


class LoadLogFileUseCase:
    """
    Use case: Load every entry of a log file and summarize it.

    Orchestrates: source -> decode -> normalize -> summary

    Malformed records are skipped and counted; one bad line never aborts
    the load. Blank lines are ignored and not counted.

    Example:
        use_case = LoadLogFileUseCase(
            source=FileStreamSource("app.clef"),
            normalizer=registry,
        )
        result = use_case.execute()
        print(result.info.total_count, result.skipped_count)
    """

    def __init__(
        self,
        source: LogSourcePort,
        normalizer: NormalizerPort,
        encoding: str | None = None,
        max_recorded_errors: int = MAX_RECORDED_ERRORS,
    ):
        """
        Initialize the use case.

        Args:
            source: Log source adapter
            normalizer: Normalizer registry or single normalizer adapter
            encoding: Optional encoding name to skip per-record detection
            max_recorded_errors: Cap on skipped-record messages kept
        """
        self.source = source
        self.normalizer = normalizer
        self.encoding = encoding
        self.max_recorded_errors = max_recorded_errors
        self._skipped = 0
        self._errors: list[str] = []
        self._overflow_warned = False

    def iter_entries(self) -> Iterator[LogEntry]:
        """
        Normalize the source lazily.

        Yields:
            LogEntry for each recoverable record, in file order
        """
        for line_number, line in enumerate(self.source.read_lines(), 1):
            stripped = line.strip()
            if not stripped:
                continue
            try:
                yield self.normalizer.parse_line(stripped, encoding=self.encoding)
            except MalformedEntryError as e:
                self._record_skip(line_number, e)

    def execute(self) -> LoadResult:
        """
        Load and summarize the whole source.

        Returns:
            LoadResult with entries, summary and skip statistics
        """
        self._skipped = 0
        self._errors = []
        self._overflow_warned = False

        path = self.source.metadata().get("path", "<unknown>")
        entries = list(self.iter_entries())
        info = build_file_info(path, entries)

        logger.info(
            "Loaded %d entries from %s (%d skipped)",
            info.total_count, path, self._skipped,
        )
        return LoadResult(
            info=info,
            entries=entries,
            skipped_count=self._skipped,
            errors=list(self._errors),
        )

    def _record_skip(self, line_number: int, error: MalformedEntryError) -> None:
        self._skipped += 1
        logger.debug("Skipping line %d: %s", line_number, error.message)

        if len(self._errors) < self.max_recorded_errors:
            self._errors.append(f"line {line_number}: {error.message}")
        elif not self._overflow_warned:
            warnings.warn(
                f"More than {self.max_recorded_errors} malformed records. "
                "Further skip messages are not recorded.",
                UserWarning,
                stacklevel=2,
            )
            self._overflow_warned = True

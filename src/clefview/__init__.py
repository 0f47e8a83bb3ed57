"""
clefview - Normalize, summarize and filter structured log files.

Loads CLEF (compact JSON) and verbose JSON logs into one entry model,
computes per-file statistics, and filters large entry sets off the calling
thread.

Usage:
    from clefview import load_file, filter_entries, FilterSpec

    # Load and summarize a file
    result = load_file("app.clef")
    print(result.info.total_count, result.info.log_levels)

    # Filter synchronously
    errors = filter_entries(result.entries, FilterSpec(selected_levels={"Error"}))

    # Filter in a worker, keeping only the latest response
    from clefview import FilterWorkerClient
    with FilterWorkerClient(on_result=show) as client:
        client.submit(result.entries, FilterSpec(search_text="disk"))
"""

__version__ = "0.1.0"

from clefview.core.models import (
    LogEntry,
    LogFileInfo,
    FilterSpec,
    LoadResult,
)
from clefview.core.exceptions import (
    ClefViewError,
    MalformedEntryError,
    UnparsableTimestampError,
    ProtocolMismatchError,
    ConfigurationError,
)
from clefview.parsers import (
    NormalizerRegistry,
    registry,
    normalize_record,
    parse_line,
)
from clefview.engine import build_file_info, filter_entries
from clefview.worker import FilterWorkerClient, FilterResponse, handle_request

__all__ = [
    # Version
    "__version__",
    # Core models
    "LogEntry",
    "LogFileInfo",
    "FilterSpec",
    "LoadResult",
    # Exceptions
    "ClefViewError",
    "MalformedEntryError",
    "UnparsableTimestampError",
    "ProtocolMismatchError",
    "ConfigurationError",
    # Normalization
    "NormalizerRegistry",
    "registry",
    "normalize_record",
    "parse_line",
    # Engine
    "build_file_info",
    "filter_entries",
    # Worker
    "FilterWorkerClient",
    "FilterResponse",
    "handle_request",
    # Convenience functions
    "load_file",
]


def load_file(file_path: str, encoding: str | None = None) -> LoadResult:
    """
    Load a log file, skipping malformed records.

    Args:
        file_path: Path to the log file
        encoding: Optional record encoding ("compact" or "verbose") to skip
            per-record detection

    Returns:
        LoadResult with entries, summary and skip statistics

    Raises:
        FileNotFoundError: If the file does not exist
    """
    from clefview.application.load_log import LoadLogFileUseCase
    from clefview.infrastructure import FileStreamSource

    use_case = LoadLogFileUseCase(
        source=FileStreamSource(file_path),
        normalizer=registry,
        encoding=encoding,
    )
    return use_case.execute()

"""
Core data models, limits and exceptions for clefview.
"""

from clefview.core.models import (
    PropertyValue,
    LogEntry,
    LogFileInfo,
    FilterSpec,
    LoadResult,
    paginate,
)
from clefview.core.exceptions import (
    ClefViewError,
    MalformedEntryError,
    UnparsableTimestampError,
    ProtocolMismatchError,
    ConfigurationError,
)
from clefview.core.timestamps import parse_timestamp
from clefview.core.limits import (
    MAX_LINE_LENGTH,
    MAX_JSON_DEPTH,
    DEFAULT_LEVEL,
    DEFAULT_TIMESTAMP,
    LineTooLongError,
    SecurityValidationError,
    validate_line_length,
    validate_json_depth,
)

__all__ = [
    "PropertyValue",
    "LogEntry",
    "LogFileInfo",
    "FilterSpec",
    "LoadResult",
    "paginate",
    "ClefViewError",
    "MalformedEntryError",
    "UnparsableTimestampError",
    "ProtocolMismatchError",
    "ConfigurationError",
    "parse_timestamp",
    # Limits
    "MAX_LINE_LENGTH",
    "MAX_JSON_DEPTH",
    "DEFAULT_LEVEL",
    "DEFAULT_TIMESTAMP",
    "LineTooLongError",
    "SecurityValidationError",
    "validate_line_length",
    "validate_json_depth",
]

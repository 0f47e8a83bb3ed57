"""
Input limits and record defaults for clefview.

Every normalizer applies the same bounds to raw lines before decoding them,
and the same defaults to records that omit a required field.
"""

from typing import Any

from clefview.core.exceptions import ClefViewError

__all__ = [
    # Limits and defaults
    "MAX_LINE_LENGTH",
    "MAX_JSON_DEPTH",
    "DEFAULT_LEVEL",
    "DEFAULT_TIMESTAMP",
    # Exceptions
    "SecurityValidationError",
    "LineTooLongError",
    # Validators
    "validate_line_length",
    "validate_json_depth",
]


# =============================================================================
# Limits and Defaults
# =============================================================================

# Longest accepted line, in UTF-8 bytes
MAX_LINE_LENGTH = 10 * 1024 * 1024

# Deepest accepted container nesting inside one record
MAX_JSON_DEPTH = 50

# Level given to records without one (CLEF omits @l for Information)
DEFAULT_LEVEL = "Information"

# Timestamp given to records without one. Never parses as a date, so such
# records never match a date filter or widen a file's date range.
DEFAULT_TIMESTAMP = "Unknown"


# =============================================================================
# Exceptions
# =============================================================================

class SecurityValidationError(ClefViewError):
    """A raw line or record is outside the accepted input limits."""

    def __init__(
        self,
        message: str,
        validation_type: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.validation_type = validation_type


class LineTooLongError(SecurityValidationError):
    """A line is longer than the configured maximum."""

    def __init__(self, line_length: int, max_length: int = MAX_LINE_LENGTH):
        super().__init__(
            f"Line is {line_length:,} bytes, limit is {max_length:,}",
            validation_type="line_length",
            details={"line_length": line_length, "max_length": max_length},
        )


# =============================================================================
# Validators
# =============================================================================

def validate_line_length(line: str, max_length: int = MAX_LINE_LENGTH) -> None:
    """
    Reject a line whose UTF-8 encoding exceeds `max_length` bytes.

    Raises:
        LineTooLongError: If the line is too long
    """
    # A character never takes more than 4 bytes in UTF-8
    if len(line) * 4 <= max_length:
        return
    size = len(line.encode("utf-8", errors="replace"))
    if size > max_length:
        raise LineTooLongError(size, max_length)


def validate_json_depth(data: Any, max_depth: int = MAX_JSON_DEPTH) -> int:
    """
    Walk a decoded JSON value and measure its nesting.

    The top-level value is at depth 0; each enclosing object or array adds
    one level.

    Returns:
        The greatest depth reached

    Raises:
        SecurityValidationError: If any value sits deeper than max_depth
    """
    deepest = 0
    pending = [(data, 0)]
    while pending:
        value, depth = pending.pop()
        if depth > max_depth:
            raise SecurityValidationError(
                f"Record is nested {depth} levels deep, limit is {max_depth}",
                validation_type="json_depth",
                details={"depth": depth, "max_depth": max_depth},
            )
        deepest = max(deepest, depth)

        if isinstance(value, dict):
            pending.extend((child, depth + 1) for child in value.values())
        elif isinstance(value, list):
            pending.extend((child, depth + 1) for child in value)

    return deepest

"""
Custom exceptions for clefview.
"""

__all__ = [
    "ClefViewError",
    "MalformedEntryError",
    "UnparsableTimestampError",
    "ProtocolMismatchError",
    "ConfigurationError",
]


class ClefViewError(Exception):
    """Base exception for all clefview errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class MalformedEntryError(ClefViewError):
    """Raised when a raw record cannot be normalized into a LogEntry."""

    def __init__(
        self,
        message: str,
        line: str | None = None,
        line_number: int | None = None,
        encoding: str | None = None,
    ):
        details = {}
        if line is not None:
            details["line"] = line[:100] + "..." if len(line) > 100 else line
        if line_number is not None:
            details["line_number"] = line_number
        if encoding is not None:
            details["encoding"] = encoding
        super().__init__(message, details)
        self.line = line
        self.line_number = line_number
        self.encoding = encoding


class UnparsableTimestampError(ClefViewError):
    """Raised when a timestamp value cannot be interpreted as a point in time."""

    def __init__(self, value: object):
        super().__init__(
            f"Cannot interpret {value!r} as a timestamp",
            {"value": value},
        )
        self.value = value


class ProtocolMismatchError(ClefViewError):
    """
    A worker response that does not answer the latest outstanding request.

    The worker client discards these; they are never raised to callers.
    """

    def __init__(self, request_id: int | None, latest_request_id: int | None):
        super().__init__(
            "Worker response does not match the latest request",
            {"request_id": request_id, "latest_request_id": latest_request_id},
        )
        self.request_id = request_id
        self.latest_request_id = latest_request_id


class ConfigurationError(ClefViewError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key

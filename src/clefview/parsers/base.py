"""
Base normalizer class for clefview record encodings.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Iterator

from clefview.core.exceptions import MalformedEntryError
from clefview.core.limits import (
    MAX_JSON_DEPTH,
    MAX_LINE_LENGTH,
    SecurityValidationError,
    validate_json_depth,
    validate_line_length,
)
from clefview.core.models import LogEntry

__all__ = ["BaseNormalizer", "decode_line"]


def decode_line(
    line: str,
    max_length: int = MAX_LINE_LENGTH,
    max_depth: int = MAX_JSON_DEPTH,
) -> dict[str, Any]:
    """
    Decode one JSON log line into a raw record.

    Args:
        line: Raw log line
        max_length: Maximum accepted line length in bytes
        max_depth: Maximum accepted JSON nesting depth

    Returns:
        The decoded JSON object

    Raises:
        MalformedEntryError: If the line is too long, not JSON, too deeply
            nested, or not a JSON object
    """
    try:
        validate_line_length(line, max_length)
        data = json.loads(line)
        validate_json_depth(data, max_depth)
    except SecurityValidationError as e:
        raise MalformedEntryError(e.message, line=line[:200]) from e
    except json.JSONDecodeError as e:
        raise MalformedEntryError(f"JSON decode error: {e}", line=line) from e

    if not isinstance(data, dict):
        raise MalformedEntryError("JSON is not an object", line=line)
    return data


class BaseNormalizer(ABC):
    """
    Base class for record normalizers.

    Subclasses must implement:
        - normalize(record: dict) -> LogEntry
        - can_normalize(record: dict) -> bool

    Attributes:
        name: Unique identifier of the encoding this normalizer handles
        canonical_keys: Record keys mapped onto LogEntry fields; every other
            key is folded into LogEntry.properties
    """

    name: str = "base"
    canonical_keys: tuple[str, ...] = ()

    @abstractmethod
    def normalize(self, record: dict[str, Any]) -> LogEntry:
        """
        Normalize one decoded record.

        Args:
            record: Decoded JSON object

        Returns:
            LogEntry with required fields defaulted

        Raises:
            MalformedEntryError: If the record has neither message nor
                template, or a field has an unusable shape
        """
        pass

    @abstractmethod
    def can_normalize(self, record: dict[str, Any]) -> bool:
        """Whether the record is written in this normalizer's encoding."""
        pass

    def parse_line(self, line: str) -> LogEntry:
        """Decode and normalize a single JSON line."""
        return self.normalize(decode_line(line.strip()))

    def normalize_stream(self, records: Iterator[dict[str, Any]]) -> Iterator[LogEntry]:
        """
        Normalize a stream of records, skipping malformed ones.

        Yields:
            LogEntry for each record that could be normalized
        """
        for record in records:
            try:
                yield self.normalize(record)
            except MalformedEntryError:
                continue

    def _require_mapping(self, record: Any) -> dict[str, Any]:
        if not isinstance(record, dict):
            raise MalformedEntryError(
                "Record is not an object", encoding=self.name
            )
        return record

    def _resolve_message(
        self, message: Any, template: Any
    ) -> tuple[str, str | None]:
        """
        Pick the display message and the template worth keeping.

        The template stands in for a missing message; it is only kept
        separately when it differs from the message.
        """
        if message is None and template is None:
            raise MalformedEntryError(
                "Record has neither a message nor a template", encoding=self.name
            )
        if message is not None and not isinstance(message, str):
            raise MalformedEntryError("Message is not a string", encoding=self.name)
        if template is not None and not isinstance(template, str):
            raise MalformedEntryError("Template is not a string", encoding=self.name)

        if message is None:
            message = template
        if template == message or not template:
            template = None
        return message, template

    def _renderings(self, value: Any) -> list[str] | None:
        if value is None:
            return None
        if not isinstance(value, list):
            raise MalformedEntryError(
                "Render arguments are not a list", encoding=self.name
            )
        return [str(item) for item in value]

    @staticmethod
    def _optional_text(value: Any) -> str | None:
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

"""
Verbose (long field name) JSON normalizer.
"""

from typing import Any

from clefview.core.exceptions import MalformedEntryError
from clefview.core.limits import DEFAULT_LEVEL, DEFAULT_TIMESTAMP
from clefview.core.models import LogEntry
from clefview.parsers.base import BaseNormalizer

__all__ = ["VerboseNormalizer"]


class VerboseNormalizer(BaseNormalizer):
    """
    Normalize records whose field names match LogEntry directly.

    This is also the shape LogEntry.to_dict produces, so previously exported
    entries load back unchanged. Unknown top-level keys are folded into
    `properties`; on a name clash the nested `properties` value wins.
    """

    name = "verbose"
    canonical_keys = (
        "timestamp", "level", "message", "template",
        "exception", "eventId", "properties", "renderings",
    )

    def normalize(self, record: dict[str, Any]) -> LogEntry:
        record = self._require_mapping(record)
        message, template = self._resolve_message(
            record.get("message"), record.get("template")
        )

        nested = record.get("properties")
        if nested is not None and not isinstance(nested, dict):
            raise MalformedEntryError("Properties is not an object", encoding=self.name)

        properties = {
            key: value
            for key, value in record.items()
            if key not in self.canonical_keys
        }
        properties.update(nested or {})

        return LogEntry(
            timestamp=self._optional_text(record.get("timestamp")) or DEFAULT_TIMESTAMP,
            level=self._optional_text(record.get("level")) or DEFAULT_LEVEL,
            message=message,
            template=template,
            exception=self._optional_text(record.get("exception")),
            event_id=self._optional_text(record.get("eventId")),
            properties=properties or None,
            renderings=self._renderings(record.get("renderings")),
        )

    def can_normalize(self, record: dict[str, Any]) -> bool:
        return "message" in record or "template" in record

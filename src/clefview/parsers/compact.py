"""
Compact Log Event Format (CLEF) normalizer.
"""

from typing import Any

from clefview.core.limits import DEFAULT_LEVEL, DEFAULT_TIMESTAMP
from clefview.core.models import LogEntry
from clefview.parsers.base import BaseNormalizer

__all__ = ["CompactNormalizer"]


class CompactNormalizer(BaseNormalizer):
    """
    Normalize CLEF records (Serilog's compact JSON format).

    Reserved keys:
        @t  timestamp          @m  rendered message
        @mt message template   @l  level (absent = Information)
        @x  exception          @i  event id
        @r  render arguments

    Other keys are event properties. A property whose own name starts with
    `@` is written with a doubled `@@` prefix, which is removed here.
    """

    name = "compact"
    canonical_keys = ("@t", "@m", "@mt", "@l", "@x", "@i", "@r")

    def normalize(self, record: dict[str, Any]) -> LogEntry:
        record = self._require_mapping(record)
        message, template = self._resolve_message(record.get("@m"), record.get("@mt"))

        properties = {}
        for key, value in record.items():
            if key in self.canonical_keys:
                continue
            if key.startswith("@@"):
                key = key[1:]
            properties[key] = value

        return LogEntry(
            timestamp=self._optional_text(record.get("@t")) or DEFAULT_TIMESTAMP,
            level=self._optional_text(record.get("@l")) or DEFAULT_LEVEL,
            message=message,
            template=template,
            exception=self._optional_text(record.get("@x")),
            event_id=self._optional_text(record.get("@i")),
            properties=properties or None,
            renderings=self._renderings(record.get("@r")),
        )

    def can_normalize(self, record: dict[str, Any]) -> bool:
        return any(key in record for key in self.canonical_keys)

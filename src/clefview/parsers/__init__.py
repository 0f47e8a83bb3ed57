"""
Normalizer registry and built-in record encodings for clefview.
"""

import logging
from typing import Any, Type

from clefview.core.exceptions import MalformedEntryError
from clefview.core.models import LogEntry
from clefview.parsers.base import BaseNormalizer, decode_line

__all__ = [
    "NormalizerRegistry",
    "registry",
    "BaseNormalizer",
    "decode_line",
    "normalize_record",
    "parse_line",
]

logger = logging.getLogger(__name__)


class NormalizerRegistry:
    """
    Central registry for record normalizers.

    Dispatches each raw record to the first registered normalizer that
    recognizes its shape, so the encoding is decided once per record.

    Usage:
        from clefview.parsers import registry

        entry = registry.normalize({"@t": "...", "@mt": "Started"})
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._normalizers: dict[str, BaseNormalizer] = {}

    def register(self, normalizer_class: Type[BaseNormalizer]) -> None:
        """
        Register a normalizer class.

        Normalizers are consulted in registration order during detection.
        """
        instance = normalizer_class()
        self._normalizers[instance.name] = instance

    def get_normalizer(self, name: str) -> BaseNormalizer | None:
        """Get the normalizer registered under `name`, if any."""
        return self._normalizers.get(name)

    def detect(self, record: dict[str, Any]) -> BaseNormalizer | None:
        """
        Find the normalizer for a record's encoding.

        Returns:
            The first normalizer whose can_normalize accepts the record
        """
        for normalizer in self._normalizers.values():
            if normalizer.can_normalize(record):
                return normalizer
        return None

    def normalize(self, record: Any, encoding: str | None = None) -> LogEntry:
        """
        Normalize a raw record in any registered encoding.

        Args:
            record: Decoded JSON object
            encoding: Optional encoding name to skip detection

        Raises:
            MalformedEntryError: If the record is unrecoverable or no
                normalizer recognizes it
        """
        if not isinstance(record, dict):
            raise MalformedEntryError("Record is not an object")

        if encoding is not None:
            normalizer = self.get_normalizer(encoding)
            if normalizer is None:
                raise MalformedEntryError(f"Unknown encoding: {encoding}")
        else:
            normalizer = self.detect(record)
            if normalizer is None:
                raise MalformedEntryError(
                    "Record matches no known encoding",
                    line=str(sorted(record))[:100],
                )

        return normalizer.normalize(record)

    def parse_line(self, line: str, encoding: str | None = None) -> LogEntry:
        """Decode one JSON line and normalize it."""
        return self.normalize(decode_line(line.strip()), encoding=encoding)

    def list_encodings(self) -> list[str]:
        """List all registered encoding names."""
        return list(self._normalizers.keys())


# Global registry instance
registry = NormalizerRegistry()


def _register_builtin_normalizers() -> None:
    """Register all built-in normalizers."""
    from clefview.parsers.compact import CompactNormalizer
    from clefview.parsers.verbose import VerboseNormalizer

    # Compact first: its reserved @-keys never occur in verbose records
    registry.register(CompactNormalizer)
    registry.register(VerboseNormalizer)
    logger.debug("Registered encodings: %s", registry.list_encodings())


_register_builtin_normalizers()


def normalize_record(record: Any, encoding: str | None = None) -> LogEntry:
    """Normalize a raw record using the global registry."""
    return registry.normalize(record, encoding=encoding)


def parse_line(line: str, encoding: str | None = None) -> LogEntry:
    """Decode and normalize one JSON line using the global registry."""
    return registry.parse_line(line, encoding=encoding)

"""
Core data models for clefview.

These dataclasses define the normalized log entry schema, the per-file
summary and the filter specification. Every normalizer converts its
encoding into these common models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Any

from clefview.core.exceptions import ConfigurationError, MalformedEntryError
from clefview.core.timestamps import parse_timestamp

__all__ = [
    "PropertyValue",
    "LogEntry",
    "LogFileInfo",
    "FilterSpec",
    "LoadResult",
    "paginate",
]


# JSON value carried in LogEntry.properties
PropertyValue = str | int | float | bool | None | dict[str, Any] | list[Any]


@dataclass(frozen=True)
class LogEntry:
    """
    One normalized log record.

    Created once by a normalizer and never mutated afterwards. `timestamp`
    keeps the source text; `parsed_timestamp` gives the instant it denotes.
    """
    timestamp: str
    level: str
    message: str
    template: str | None = None
    exception: str | None = None
    event_id: str | None = None
    properties: dict[str, PropertyValue] | None = None
    renderings: list[str] | None = None

    def __hash__(self) -> int:
        # Mapping and list fields are left out; equal entries still hash equal
        return hash((
            self.timestamp, self.level, self.message,
            self.template, self.exception, self.event_id,
        ))

    @cached_property
    def parsed_timestamp(self) -> datetime | None:
        """Aware datetime for `timestamp`, or None if it is unparsable."""
        return parse_timestamp(self.timestamp)

    def formatted_timestamp(self, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Return formatted timestamp string or the raw value."""
        if self.parsed_timestamp:
            return self.parsed_timestamp.strftime(fmt)
        return self.timestamp

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the verbose message shape, omitting absent fields."""
        result: dict[str, Any] = {
            "timestamp": self.timestamp,
            "level": self.level,
            "message": self.message,
        }
        if self.template is not None:
            result["template"] = self.template
        if self.exception is not None:
            result["exception"] = self.exception
        if self.event_id is not None:
            result["eventId"] = self.event_id
        if self.properties is not None:
            result["properties"] = self.properties
        if self.renderings is not None:
            result["renderings"] = self.renderings
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        """
        Deserialize from the shape produced by `to_dict`.

        Raises:
            MalformedEntryError: If a required field is missing or a field
                has the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedEntryError("Entry is not an object")

        missing = [k for k in ("timestamp", "level", "message") if k not in data]
        if missing:
            raise MalformedEntryError(
                f"Entry is missing required fields: {', '.join(missing)}"
            )

        wrong = [k for k in ("timestamp", "level", "message") if not isinstance(data[k], str)]
        wrong += [
            k for k in ("template", "exception", "eventId")
            if data.get(k) is not None and not isinstance(data[k], str)
        ]
        if data.get("properties") is not None and not isinstance(data["properties"], dict):
            wrong.append("properties")
        if data.get("renderings") is not None and not isinstance(data["renderings"], list):
            wrong.append("renderings")
        if wrong:
            raise MalformedEntryError(
                f"Entry fields have the wrong type: {', '.join(wrong)}"
            )

        return cls(
            timestamp=data["timestamp"],
            level=data["level"],
            message=data["message"],
            template=data.get("template"),
            exception=data.get("exception"),
            event_id=data.get("eventId"),
            properties=data.get("properties"),
            renderings=data.get("renderings"),
        )


@dataclass(frozen=True)
class LogFileInfo:
    """Aggregate metadata about one loaded log file."""
    path: str
    total_count: int
    log_levels: tuple[str, ...] = ()
    date_range: tuple[datetime, datetime] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {
            "path": self.path,
            "totalCount": self.total_count,
            "logLevels": list(self.log_levels),
        }
        if self.date_range is not None:
            result["dateRange"] = [
                self.date_range[0].isoformat(),
                self.date_range[1].isoformat(),
            ]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogFileInfo":
        """Deserialize from dictionary."""
        date_range = None
        if data.get("dateRange"):
            start, end = data["dateRange"]
            date_range = (
                parse_timestamp(start, strict=True),
                parse_timestamp(end, strict=True),
            )
        return cls(
            path=data["path"],
            total_count=data["totalCount"],
            log_levels=tuple(data.get("logLevels", [])),
            date_range=date_range,
        )


@dataclass(frozen=True)
class FilterSpec:
    """
    Which entries to keep.

    An empty level set, blank search text, or a date range that does not
    have exactly two endpoints each mean "no restriction" on that axis.
    """
    selected_levels: frozenset[str] = frozenset()
    search_text: str = ""
    date_range: tuple[datetime | str, ...] | None = None

    def __post_init__(self):
        object.__setattr__(self, "selected_levels", frozenset(self.selected_levels))
        if self.date_range is not None:
            object.__setattr__(self, "date_range", tuple(self.date_range))

    @property
    def has_level_filter(self) -> bool:
        return bool(self.selected_levels)

    @property
    def has_search_filter(self) -> bool:
        return bool(self.search_text.strip())

    @property
    def has_date_filter(self) -> bool:
        return self.date_range is not None and len(self.date_range) == 2

    def is_identity(self) -> bool:
        """True when no predicate is active."""
        return not (self.has_level_filter or self.has_search_filter or self.has_date_filter)

    def date_bounds(self) -> tuple[datetime, datetime] | None:
        """
        Inclusive bounds of the date predicate as aware datetimes.

        Raises:
            UnparsableTimestampError: If an endpoint cannot be interpreted
        """
        if not self.has_date_filter:
            return None
        start, end = self.date_range
        return (
            parse_timestamp(start, strict=True),
            parse_timestamp(end, strict=True),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the worker message shape."""
        date_range = None
        if self.date_range is not None:
            date_range = [
                d.isoformat() if isinstance(d, datetime) else d
                for d in self.date_range
            ]
        return {
            "selectedLevels": sorted(self.selected_levels),
            "searchText": self.search_text,
            "dateRange": date_range,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FilterSpec":
        """Deserialize from the worker message shape."""
        date_range = data.get("dateRange")
        return cls(
            selected_levels=frozenset(data.get("selectedLevels") or ()),
            search_text=data.get("searchText") or "",
            date_range=tuple(date_range) if date_range is not None else None,
        )


def paginate(entries: list[LogEntry], offset: int = 0, limit: int | None = None) -> list[LogEntry]:
    """
    Return a window of `entries`.

    Args:
        entries: Entries to slice
        offset: Index of the first entry to return
        limit: Maximum number of entries, or None for all remaining

    Raises:
        ConfigurationError: If offset or limit is negative
    """
    if offset < 0:
        raise ConfigurationError("offset must not be negative", config_key="offset")
    if limit is None:
        return entries[offset:]
    if limit < 0:
        raise ConfigurationError("limit must not be negative", config_key="limit")
    return entries[offset:offset + limit]


@dataclass
class LoadResult:
    """Result of loading one log file."""
    info: LogFileInfo
    entries: list[LogEntry] = field(default_factory=list)
    skipped_count: int = 0
    errors: list[str] = field(default_factory=list)

    def page(self, offset: int = 0, limit: int | None = None) -> list[LogEntry]:
        """Return a window of the loaded entries (see `paginate`)."""
        return paginate(self.entries, offset, limit)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "info": self.info.to_dict(),
            "skippedCount": self.skipped_count,
            "errors": self.errors,
            "entries": [e.to_dict() for e in self.entries],
        }

"""
Timestamp interpretation for clefview.

Log sources write timestamps with varying precision and offsets, so values
are compared as instants, never as strings.
"""

from datetime import datetime, timezone

from dateutil import parser as dateutil_parser

from clefview.core.exceptions import UnparsableTimestampError

__all__ = ["parse_timestamp", "ensure_aware"]

# Two defaults differing in year, month and day. A value parsed against both
# gives the same result only if it spells out a full date itself.
_DISAGREEING_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: object, strict: bool = False) -> datetime | None:
    """
    Interpret a timestamp value as a timezone-aware point in time.

    ISO 8601 is tried first (the CLEF `@t` format), then dateutil's general
    parser. The general parser must find a complete date in the text; it is
    never completed from the current date, so "12" or "May" are unparsable.
    Naive results are taken to be UTC.

    Args:
        value: A datetime or a timestamp string
        strict: Raise instead of returning None when the value is unusable

    Returns:
        Aware datetime, or None if the value cannot be interpreted

    Raises:
        UnparsableTimestampError: If strict and the value cannot be interpreted
    """
    if isinstance(value, datetime):
        return ensure_aware(value)

    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return ensure_aware(dateutil_parser.isoparse(text))
        except (ValueError, OverflowError):
            pass
        try:
            first, second = (
                dateutil_parser.parse(text, default=default)
                for default in _DISAGREEING_DEFAULTS
            )
        except (ValueError, OverflowError, TypeError):
            pass
        else:
            if first == second:
                return ensure_aware(first)

    if strict:
        raise UnparsableTimestampError(value)
    return None

"""
Filter engine for log entries.

Predicates are callables that accept a LogEntry and return bool. An entry
is kept only when every active predicate accepts it (logical AND).
"""

from datetime import datetime
from typing import Callable, Iterable, Iterator

from clefview.core.models import FilterSpec, LogEntry

__all__ = [
    "Predicate",
    "FilterChain",
    "level_predicate",
    "search_predicate",
    "date_predicate",
    "build_predicates",
    "filter_entries",
]

Predicate = Callable[[LogEntry], bool]


class FilterChain:
    """
    Apply multiple predicates in sequence (logical AND).

    Usage:
        chain = FilterChain()
        chain.add(level_predicate({"Error"}))
        chain.add(search_predicate("disk"))

        results = list(chain.apply(entries))
    """

    def __init__(self, predicates: Iterable[Predicate] = ()):
        self._predicates: list[Predicate] = list(predicates)

    def add(self, predicate: Predicate) -> "FilterChain":
        """Append a predicate and return self for chaining."""
        self._predicates.append(predicate)
        return self

    def matches(self, entry: LogEntry) -> bool:
        """Return True if all predicates accept the entry."""
        return all(p(entry) for p in self._predicates)

    def apply(self, entries: Iterable[LogEntry]) -> Iterator[LogEntry]:
        """Yield entries that pass every predicate, in input order."""
        for entry in entries:
            if self.matches(entry):
                yield entry

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"FilterChain({len(self._predicates)} predicates)"


def level_predicate(levels: Iterable[str]) -> Predicate:
    """Keep entries whose level is exactly one of `levels`."""
    allowed = frozenset(levels)

    def matches(entry: LogEntry) -> bool:
        return entry.level in allowed

    return matches


def search_predicate(text: str) -> Predicate:
    """Keep entries whose message, template or level contains `text`, ignoring case."""
    term = text.lower()

    def matches(entry: LogEntry) -> bool:
        if term in entry.message.lower():
            return True
        if entry.template is not None and term in entry.template.lower():
            return True
        return term in entry.level.lower()

    return matches


def date_predicate(start: datetime, end: datetime) -> Predicate:
    """
    Keep entries timestamped within [start, end], inclusive.

    Entries with an unparsable timestamp are rejected.
    """
    def matches(entry: LogEntry) -> bool:
        ts = entry.parsed_timestamp
        return ts is not None and start <= ts <= end

    return matches


def build_predicates(spec: FilterSpec) -> list[Predicate]:
    """
    Build the active predicates of a filter spec.

    Raises:
        UnparsableTimestampError: If a date range endpoint is unparsable
    """
    predicates: list[Predicate] = []

    if spec.has_level_filter:
        predicates.append(level_predicate(spec.selected_levels))

    if spec.has_search_filter:
        predicates.append(search_predicate(spec.search_text))

    bounds = spec.date_bounds()
    if bounds is not None:
        predicates.append(date_predicate(*bounds))

    return predicates


def filter_entries(entries: Iterable[LogEntry], spec: FilterSpec) -> list[LogEntry]:
    """
    Return the entries that satisfy every active predicate of `spec`.

    Relative order is preserved and neither argument is modified. With no
    active predicate the result is a new list equal to the input.

    Raises:
        UnparsableTimestampError: If a date range endpoint is unparsable
    """
    chain = FilterChain(build_predicates(spec))
    return list(chain.apply(entries))

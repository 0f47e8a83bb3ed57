"""
Message shapes exchanged with the filter worker.

Messages are plain JSON-compatible dicts so they can cross a process
boundary:

    request  = {"requestId": 7, "logEntries": [...], "filters": {...}}
    response = {"requestId": 7, "logEntries": [...], "skippedCount": 0}
    response = {"requestId": 7, "logEntries": [], "error": "..."}

`requestId` is chosen by the caller and echoed back unchanged so that a
response can be matched to the request that produced it.
An entry dict that does not decode is skipped and counted in `skippedCount`;
only an invalid `filters` value turns the whole response into an error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from clefview.core.exceptions import ClefViewError, MalformedEntryError
from clefview.core.models import FilterSpec, LogEntry
from clefview.engine.filters import FilterChain, build_predicates

__all__ = [
    "FilterResponse",
    "encode_request",
    "handle_request",
]

logger = logging.getLogger(__name__)


@dataclass
class FilterResponse:
    """Decoded worker response."""
    request_id: int | None
    log_entries: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    skipped_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def entries(self) -> list[LogEntry]:
        """The surviving entries as LogEntry objects."""
        return [LogEntry.from_dict(e) for e in self.log_entries]

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> "FilterResponse":
        return cls(
            request_id=message.get("requestId"),
            log_entries=message.get("logEntries") or [],
            error=message.get("error"),
            skipped_count=message.get("skippedCount", 0),
        )


def encode_request(
    request_id: int,
    entries: Iterable[LogEntry | dict[str, Any]],
    spec: FilterSpec,
) -> dict[str, Any]:
    """
    Build a request message.

    Args:
        request_id: Correlation token echoed back in the response
        entries: LogEntry objects or already serialized entry dicts
        spec: Filter to apply

    Returns:
        Request message dict
    """
    return {
        "requestId": request_id,
        "logEntries": [
            e.to_dict() if isinstance(e, LogEntry) else e
            for e in entries
        ],
        "filters": spec.to_dict(),
    }


def handle_request(message: dict[str, Any]) -> dict[str, Any]:
    """
    Run one filter request. This is the worker-side entry point.

    Stateless: everything needed is in `message`. Surviving entries are
    returned as the very dicts the request carried, so every field comes
    back unaltered. Entry dicts that do not decode never match and are
    counted instead. Exactly one response is produced per request; invalid
    filters yield an empty result with an `error` string.
    """
    request_id = message.get("requestId")
    raw_entries = message.get("logEntries") or []

    try:
        spec = FilterSpec.from_dict(message.get("filters") or {})
        chain = FilterChain(build_predicates(spec))
    except ClefViewError as e:
        logger.warning("Filter request %s rejected: %s", request_id, e)
        return {"requestId": request_id, "logEntries": [], "error": str(e)}

    kept = []
    skipped = 0
    for raw in raw_entries:
        try:
            entry = LogEntry.from_dict(raw)
        except MalformedEntryError as e:
            skipped += 1
            logger.debug("Filter request %s skipping entry: %s", request_id, e.message)
            continue
        if chain.matches(entry):
            kept.append(raw)

    logger.debug(
        "Filter request %s kept %d of %d entries (%d skipped)",
        request_id, len(kept), len(raw_entries), skipped,
    )
    return {"requestId": request_id, "logEntries": kept, "skippedCount": skipped}

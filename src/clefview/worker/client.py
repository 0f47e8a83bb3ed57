"""
Filter worker client.

Runs the filter engine in an isolated executor so large filter operations
do not block the caller, and hands back only the response to the most
recently issued request.
"""

import copy
import logging
import threading
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Callable, Iterable

from clefview.core.exceptions import ConfigurationError, ProtocolMismatchError
from clefview.core.models import FilterSpec, LogEntry
from clefview.worker.protocol import FilterResponse, encode_request, handle_request

__all__ = ["FilterWorkerClient", "EXECUTOR_KINDS"]

logger = logging.getLogger(__name__)

EXECUTOR_KINDS = ("process", "thread")

ResultCallback = Callable[[FilterResponse], None]


class FilterWorkerClient:
    """
    Asynchronous request/response channel to a single filter worker.

    Each request gets a monotonically increasing id. Responses may complete
    out of order; a response whose id is not the latest issued is stale and
    is dropped instead of being delivered.

    Example:
        with FilterWorkerClient(on_result=render) as client:
            client.submit(entries, FilterSpec(search_text="disk"))
            client.submit(entries, FilterSpec(search_text="disk full"))
            # render() only ever sees the "disk full" result
    """

    def __init__(
        self,
        on_result: ResultCallback | None = None,
        executor: str = "process",
    ):
        """
        Initialize the client.

        Args:
            on_result: Called with each current (non-stale) response, on the
                executor's completion thread. Other threads calling submit()
                wait until it returns; it may itself call submit().
            executor: "process" for a separate worker process, "thread" for
                an in-process worker thread

        Raises:
            ConfigurationError: If executor is not a known kind
        """
        if executor not in EXECUTOR_KINDS:
            raise ConfigurationError(
                f"Unknown executor kind: {executor!r} (expected one of {EXECUTOR_KINDS})",
                config_key="executor",
            )
        self.on_result = on_result
        self.executor_kind = executor
        self._executor: Executor | None = None
        self._lock = threading.RLock()
        self._last_request_id = 0
        self._discarded_count = 0

    @property
    def latest_request_id(self) -> int | None:
        """Id of the most recently issued request, or None before the first."""
        with self._lock:
            return self._last_request_id or None

    @property
    def discarded_count(self) -> int:
        """Number of stale responses dropped so far."""
        with self._lock:
            return self._discarded_count

    def is_current(self, request_id: int | None) -> bool:
        """Whether `request_id` identifies the most recently issued request."""
        with self._lock:
            return request_id is not None and request_id == self._last_request_id

    def submit(
        self,
        entries: Iterable[LogEntry | dict[str, Any]],
        spec: FilterSpec,
        callback: ResultCallback | None = None,
    ) -> Future:
        """
        Issue a filter request without waiting for it.

        Args:
            entries: Entries to filter (copied into the request)
            spec: Filter to apply
            callback: Overrides on_result for this request

        Returns:
            Future resolving to the raw response message
        """
        with self._lock:
            self._last_request_id += 1
            request_id = self._last_request_id

        message = encode_request(request_id, entries, spec)
        if self.executor_kind == "thread":
            # Threads share memory; the worker must not see caller objects
            message = copy.deepcopy(message)

        future = self._get_executor().submit(handle_request, message)
        deliver_to = callback or self.on_result
        future.add_done_callback(lambda f: self._on_done(f, deliver_to))
        logger.debug("Issued filter request %d (%d entries)", request_id, len(message["logEntries"]))
        return future

    def filter(
        self,
        entries: Iterable[LogEntry | dict[str, Any]],
        spec: FilterSpec,
        timeout: float | None = None,
    ) -> FilterResponse:
        """Issue a request and block until its response arrives."""
        future = self.submit(entries, spec, callback=_ignore)
        return FilterResponse.from_message(future.result(timeout=timeout))

    def close(self) -> None:
        """Shut down the worker, waiting for in-flight requests."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "FilterWorkerClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _get_executor(self) -> Executor:
        if self._executor is None:
            if self.executor_kind == "process":
                self._executor = ProcessPoolExecutor(max_workers=1)
            else:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="clefview-filter"
                )
        return self._executor

    def _check_current(self, response: FilterResponse) -> None:
        if response.request_id != self._last_request_id:
            self._discarded_count += 1
            raise ProtocolMismatchError(response.request_id, self._last_request_id)

    def _on_done(self, future: Future, callback: ResultCallback | None) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Filter worker failed: %s", exc)
            return

        response = FilterResponse.from_message(future.result())
        # Held through delivery: submit() cannot issue a newer id in between
        with self._lock:
            try:
                self._check_current(response)
            except ProtocolMismatchError as e:
                logger.debug("Discarding stale filter response: %s", e)
                return

            if callback is not None:
                callback(response)


def _ignore(response: FilterResponse) -> None:
    pass

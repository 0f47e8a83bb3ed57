"""
Off-thread filtering for clefview.

The worker is a pure function over a request message; the client runs it
in an isolated executor and discards stale responses.
"""

from clefview.worker.protocol import FilterResponse, encode_request, handle_request
from clefview.worker.client import FilterWorkerClient, EXECUTOR_KINDS

__all__ = [
    "FilterResponse",
    "encode_request",
    "handle_request",
    "FilterWorkerClient",
    "EXECUTOR_KINDS",
]

"""
Application layer for clefview.

Contains use cases that orchestrate the core engine and infrastructure
adapters. This layer coordinates the flow but contains no business logic.
"""

from clefview.application.load_log import LoadLogFileUseCase
from clefview.application.ports import LogSourcePort, NormalizerPort

__all__ = [
    "LoadLogFileUseCase",
    "LogSourcePort",
    "NormalizerPort",
]

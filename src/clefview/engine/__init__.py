"""
Summary statistics and filtering over normalized entries.
"""

from clefview.engine.summary import build_file_info
from clefview.engine.filters import (
    Predicate,
    FilterChain,
    level_predicate,
    search_predicate,
    date_predicate,
    build_predicates,
    filter_entries,
)

__all__ = [
    "build_file_info",
    "Predicate",
    "FilterChain",
    "level_predicate",
    "search_predicate",
    "date_predicate",
    "build_predicates",
    "filter_entries",
]

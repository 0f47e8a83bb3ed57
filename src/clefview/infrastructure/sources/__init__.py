"""
Source adapters for clefview.

These implement the LogSourcePort interface for input sources.
"""

from clefview.infrastructure.sources.file_source import FileStreamSource

__all__ = ["FileStreamSource"]

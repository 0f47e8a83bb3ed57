"""
Infrastructure layer for clefview.

Contains adapters that implement the ports defined in the application layer.
"""

from clefview.infrastructure.sources import FileStreamSource

__all__ = ["FileStreamSource"]

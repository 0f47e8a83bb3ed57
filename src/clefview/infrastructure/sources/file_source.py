"""
Log file source.
"""

from pathlib import Path
from typing import Iterator

__all__ = ["FileStreamSource"]


class FileStreamSource:
    """
    Streams the lines of one log file.

    The file is opened lazily on each `read_lines()` call and read one line
    at a time, so multi-gigabyte logs never sit in memory as raw text.
    Undecodable bytes are replaced rather than aborting the read.

    Example:
        source = FileStreamSource("logs/app.clef")
        for line in source.read_lines():
            handle(line)
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8", errors: str = "replace"):
        """
        Args:
            path: Log file to read
            encoding: Text encoding of the file
            errors: Codec error handler passed to open()

        Raises:
            FileNotFoundError: If `path` is not an existing file
        """
        self.path = Path(path)
        self.encoding = encoding
        self.errors = errors

        if not self.path.is_file():
            raise FileNotFoundError(f"Log file not found: {self.path}")

    def read_lines(self) -> Iterator[str]:
        """Yield each line with its line terminator removed."""
        with self.path.open(encoding=self.encoding, errors=self.errors, newline="") as handle:
            for raw in handle:
                yield raw.rstrip("\r\n")

    def metadata(self) -> dict[str, str]:
        """Describe the file: type, path, name and size in bytes."""
        return {
            "source_type": "file",
            "path": str(self.path),
            "name": self.path.name,
            "size_bytes": str(self.path.stat().st_size),
        }

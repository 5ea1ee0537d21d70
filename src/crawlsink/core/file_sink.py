"""Append-only file writer bound to a single path."""

from pathlib import Path
from typing import BinaryIO

from ..errors import ClosedSinkError, SinkError


class FileSink:
    """Writes newline-terminated chunks to one file, flushing each write."""

    def __init__(self, path: str | Path, append: bool = False):
        self.path = Path(path)
        self._file: BinaryIO | None = None
        self._count = 0
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "ab" if append else "wb")
        except OSError as e:
            raise SinkError(f"could not open {self.path}") from e

    def __enter__(self) -> "FileSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file is not None:
            self.close()

    def write(self, data: bytes):
        """Append data followed by a newline."""
        if self._file is None:
            raise ClosedSinkError(f"write to closed sink {self.path}")
        try:
            self._file.write(data + b"\n")
            self._file.flush()
        except OSError as e:
            raise SinkError(f"could not write to {self.path}") from e
        self._count += 1

    def close(self):
        """Close the underlying file."""
        if self._file is None:
            raise ClosedSinkError(f"sink {self.path} already closed")
        file, self._file = self._file, None
        try:
            file.close()
        except OSError as e:
            raise SinkError(f"could not close {self.path}") from e

    @property
    def closed(self) -> bool:
        return self._file is None

    @property
    def count(self) -> int:
        """Number of chunks written."""
        return self._count

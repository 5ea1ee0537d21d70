"""Core output components."""

from .file_sink import FileSink
from .protocols import Console, Response, Writer

__all__ = ["Console", "FileSink", "Response", "Writer"]

"""Concurrency-safe output sink for crawl results."""

from .archive import ResponseArchiver, response_file_name
from .core import FileSink, Response, Writer
from .errors import (
    ArchiveError,
    ClosedSinkError,
    ConfigValidationError,
    EncodingError,
    FormatError,
    InvalidFieldError,
    OutputError,
    SinkError,
)
from .formatter import Formatter, decolorize
from .output import StandardWriter
from .result import Result

__version__ = "0.1.0"

__all__ = [
    "ArchiveError",
    "ClosedSinkError",
    "ConfigValidationError",
    "EncodingError",
    "FileSink",
    "FormatError",
    "Formatter",
    "InvalidFieldError",
    "OutputError",
    "Response",
    "ResponseArchiver",
    "Result",
    "SinkError",
    "StandardWriter",
    "Writer",
    "decolorize",
    "response_file_name",
]

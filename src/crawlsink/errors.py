"""Exception hierarchy for the output sink."""


class OutputError(Exception):
    """Base class for all output sink errors."""


class ConfigValidationError(OutputError):
    """Invalid writer configuration, raised at construction time."""

    def __init__(self, message: str, option: str | None = None):
        super().__init__(message)
        self.option = option


class InvalidFieldError(ConfigValidationError):
    """A requested field name is not part of the Result schema."""

    def __init__(self, field: str):
        super().__init__(f"invalid field specified: {field!r}")
        self.field = field


class EncodingError(OutputError):
    """A result could not be encoded; the event is dropped."""


class FormatError(EncodingError):
    """Unrecoverable failure while formatting a result."""


class SinkError(OutputError):
    """Underlying storage failed to open, write or close."""


class ClosedSinkError(SinkError):
    """Write or close attempted on a sink that is already closed."""


class ArchiveError(OutputError):
    """Response archival failed (directory or single response)."""

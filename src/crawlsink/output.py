"""Concurrency-safe output writer for crawl results."""

import logging
import threading
from pathlib import Path

import typer

from .archive import DEFAULT_RESPONSE_DIR, ResponseArchiver
from .config import OutputSettings
from .core import Console, FileSink, Response
from .errors import (
    ArchiveError,
    ConfigValidationError,
    EncodingError,
    FormatError,
    InvalidFieldError,
    SinkError,
)
from .fields import FieldStore, validate_field_names
from .formatter import Formatter, decolorize
from .result import Result

LOGGER = logging.getLogger(__name__)

STORE_FIELDS_DIR = "crawl_output"


class StandardWriter:
    """Writes results to the console and an optional output file.

    Field storage, encoding and both emissions for one result happen under a
    single lock, so concurrent writers never interleave lines. Response
    archival runs outside that lock.
    """

    def __init__(
        self,
        colors: bool = True,
        json_output: bool = False,
        verbose: bool = False,
        output_file: str | Path | None = None,
        fields: str | list[str] = "",
        store_fields: str | list[str] = "",
        store_response: bool = False,
        store_response_dir: str | Path | None = None,
        store_fields_dir: str | Path = STORE_FIELDS_DIR,
        append_output: bool = False,
        console: Console | None = None,
    ):
        try:
            output_fields = validate_field_names(fields)
        except InvalidFieldError as e:
            raise ConfigValidationError(f"could not validate fields: {e}", option="fields") from e
        try:
            stored_fields = validate_field_names(store_fields)
        except InvalidFieldError as e:
            raise ConfigValidationError(
                f"could not validate store fields: {e}", option="store_fields"
            ) from e

        self.json_output = json_output
        self.formatter = Formatter(
            json_output=json_output,
            colors=colors,
            verbose=verbose,
            fields=output_fields,
        )
        self.console: Console = console or typer.echo
        self.field_store = FieldStore(store_fields_dir, stored_fields) if stored_fields else None
        self._lock = threading.Lock()

        self.output_file: FileSink | None = None
        if output_file:
            try:
                self.output_file = FileSink(output_file, append=append_output)
            except SinkError as e:
                raise SinkError(f"could not create output file: {e}") from e
            LOGGER.debug("Writing output to %s", self.output_file.path)

        # Built last: it wipes the previous run's archive
        self.archiver: ResponseArchiver | None = None
        if store_response:
            try:
                self.archiver = ResponseArchiver(store_response_dir or DEFAULT_RESPONSE_DIR)
            except ArchiveError:
                if self.output_file is not None:
                    self.output_file.close()
                raise

    @classmethod
    def from_settings(cls, settings: OutputSettings, console: Console | None = None) -> "StandardWriter":
        """Build a writer from OutputSettings."""
        return cls(
            colors=settings.colors,
            json_output=settings.json_output,
            verbose=settings.verbose,
            output_file=settings.output_file,
            fields=settings.fields,
            store_fields=settings.store_fields,
            store_response=settings.store_response,
            store_response_dir=settings.store_response_dir,
            store_fields_dir=settings.store_fields_dir,
            append_output=settings.append_output,
            console=console,
        )

    def write(self, result: Result | None, response: Response | None = None) -> None:
        """Write result to screen and file, then archive response if enabled."""
        if result is not None:
            self._write_result(result)

        if self.archiver is not None and response is not None:
            try:
                self.archiver.write(response)
            except ArchiveError as e:
                raise ArchiveError(f"could not store response: {e}") from e

    def _write_result(self, result: Result):
        with self._lock:
            if self.field_store is not None:
                try:
                    self.field_store.store(result)
                except SinkError as e:
                    raise SinkError(f"could not store fields: {e}") from e

            try:
                data = self.formatter.format(result)
            except EncodingError as e:
                raise FormatError(f"could not format output: {e}") from e
            if not data:
                return

            self.console(data.decode("utf-8"))
            if self.output_file is not None:
                if not self.json_output:
                    data = decolorize(data)
                try:
                    self.output_file.write(data)
                except SinkError as e:
                    raise SinkError(f"could not write to output: {e}") from e

    def close(self) -> None:
        """Close the output file, if any."""
        if self.output_file is not None:
            self.output_file.close()

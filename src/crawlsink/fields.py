"""Field name validation and per-field value storage."""

import threading
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .errors import InvalidFieldError, SinkError
from .result import SCHEMA, Result

FIELD_NAMES = tuple(SCHEMA)


def parse_field_names(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated field list, dropping blanks."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


def validate_field_names(value: str | Iterable[str] | None) -> list[str]:
    """Return the parsed field names, or raise for the first unknown one.

    Matching is case-sensitive against FIELD_NAMES.
    """
    names = parse_field_names(value)
    for name in names:
        if name not in SCHEMA:
            raise InvalidFieldError(name)
    return names


def single_line(text: str) -> str:
    """Replace CR and LF with spaces so a value stays on one line."""
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def get_field_value(result: Result, name: str) -> str:
    """Get the string value of a schema field ("" if unset)."""
    attr, _ = SCHEMA[name]
    value = getattr(result, attr)
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class FieldStore:
    """Appends requested field values to one file per field name."""

    def __init__(self, directory: str | Path, fields: list[str]):
        self.directory = Path(directory)
        self.fields = list(fields)
        self._locks = {name: threading.Lock() for name in self.fields}

    def path_for(self, name: str) -> Path:
        """Side file for a field name."""
        return self.directory / f"{name}.txt"

    def store(self, result: Result):
        """Append each configured field of result to its side file."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"could not create field directory {self.directory}") from e

        for name in self.fields:
            line = single_line(get_field_value(result, name)) + "\n"
            with self._locks[name]:
                try:
                    with open(self.path_for(name), "a", encoding="utf-8") as f:
                        f.write(line)
                except OSError as e:
                    raise SinkError(f"could not store field {name}") from e

"""Encoding of results into JSON lines or decorated text."""

import json
import re

import typer

from .errors import FormatError
from .fields import get_field_value, single_line
from .result import Result

DECOLORIZER = re.compile(rb"\x1b\[[0-9;]*[a-zA-Z]")

DEFAULT_FIELDS = ["Method", "URL", "Source", "Tag", "Attribute"]
VERBOSE_FIELDS = ["Timestamp", *DEFAULT_FIELDS, "Body"]


def decolorize(data: bytes) -> bytes:
    """Strip ANSI escape sequences from data.

    Repeats until nothing matches, since removing one sequence can join the
    bytes around it into another.
    """
    data, count = DECOLORIZER.subn(b"", data)
    while count:
        data, count = DECOLORIZER.subn(b"", data)
    return data


class Formatter:
    """Turns a Result into the bytes of one output line.

    An empty return value means the event has nothing to emit.
    """

    def __init__(
        self,
        json_output: bool = False,
        colors: bool = True,
        verbose: bool = False,
        fields: list[str] | None = None,
    ):
        self.json_output = json_output
        self.colors = colors
        self.verbose = verbose
        self.fields = list(fields) if fields else []

    def format(self, result: Result) -> bytes:
        """Encode result in the configured mode."""
        try:
            if self.json_output:
                return self.format_json(result)
            return self.format_screen(result)
        except (TypeError, ValueError) as e:
            raise FormatError(f"could not encode result: {e}") from e

    def format_json(self, result: Result) -> bytes:
        """Encode result as one JSON object."""
        output = result.to_dict(self.fields or None)
        if not output:
            return b""
        return json.dumps(output, ensure_ascii=False).encode("utf-8")

    def format_screen(self, result: Result) -> bytes:
        """Render result as one human-readable line."""
        if self.fields:
            wanted = set(self.fields)
        elif self.verbose:
            wanted = set(VERBOSE_FIELDS)
        else:
            wanted = set(DEFAULT_FIELDS)

        def value(name: str) -> str:
            return single_line(get_field_value(result, name)) if name in wanted else ""

        segments = []
        if timestamp := value("Timestamp"):
            segments.append(f"[{self._style(timestamp, typer.colors.WHITE)}]")
        if method := value("Method"):
            segments.append(f"[{self._style(method, typer.colors.CYAN)}]")
        if url := value("URL"):
            segments.append(url)
        if source := value("Source"):
            segments.append(f"[{self._style(source, typer.colors.BLUE)}]")

        tag, attribute = value("Tag"), value("Attribute")
        if tag and attribute:
            segments.append(
                f"[{self._style(tag, typer.colors.YELLOW)}:"
                f"{self._style(attribute, typer.colors.GREEN)}]"
            )
        elif tag:
            segments.append(f"[{self._style(tag, typer.colors.YELLOW)}]")
        elif attribute:
            segments.append(f"[{self._style(attribute, typer.colors.GREEN)}]")

        if body := value("Body"):
            segments.append(body)

        return " ".join(segments).encode("utf-8")

    def _style(self, text: str, color: str) -> str:
        if not self.colors:
            return text
        return typer.style(text, fg=color)

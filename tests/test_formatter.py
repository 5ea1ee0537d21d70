"""Tests for formatter module."""

import json
from datetime import datetime, timezone

import pytest

from crawlsink.errors import EncodingError, FormatError
from crawlsink.formatter import Formatter, decolorize
from crawlsink.result import Result


@pytest.fixture
def result():
    return Result(
        timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        method="POST",
        body="q=1",
        url="http://example.com/search",
        source="form",
        tag="form",
        attribute="action",
    )


class TestDecolorize:
    @pytest.mark.parametrize(
        "data, expected",
        [
            (b"\x1b[31mred\x1b[0m", b"red"),
            (b"\x1b[1;32;40mbold\x1b[0m plain", b"bold plain"),
            (b"no color", b"no color"),
            (b"\x1b[Kclear", b"clear"),
            (b"", b""),
        ],
    )
    def test_strips_sequences(self, data, expected):
        """Should remove ANSI escape sequences."""
        assert decolorize(data) == expected

    @pytest.mark.parametrize(
        "data",
        [
            b"\x1b[31mred\x1b[0m",
            b"\x1b\x1b[31m[31mnested\x1b[0m",
            b"[GET] \x1b[36mhttp://x\x1b[0m",
        ],
    )
    def test_idempotent(self, data):
        """Decolorizing twice should equal decolorizing once."""
        once = decolorize(data)
        assert decolorize(once) == once


class TestFormatJson:
    def test_omits_default_fields(self):
        """Unset fields should not appear in the record."""
        formatter = Formatter(json_output=True)
        data = json.loads(formatter.format(Result(url="http://x/a", tag="a")))
        assert data == {"endpoint": "http://x/a", "tag": "a"}

    def test_all_default_is_empty(self):
        """An all-default result should encode to zero bytes."""
        formatter = Formatter(json_output=True)
        assert formatter.format(Result()) == b""

    def test_timestamp_is_iso(self, result):
        """Timestamps should serialize as ISO 8601."""
        formatter = Formatter(json_output=True)
        data = json.loads(formatter.format(result))
        assert data["timestamp"] == "2024-01-02T03:04:05+00:00"

    def test_field_subset(self, result):
        """Only requested fields should be written."""
        formatter = Formatter(json_output=True, fields=["URL", "Method"])
        data = json.loads(formatter.format(result))
        assert data == {"endpoint": "http://example.com/search", "method": "POST"}

    def test_subset_with_no_values_is_empty(self):
        """A subset whose fields are all unset should be suppressed."""
        formatter = Formatter(json_output=True, fields=["Body"])
        assert formatter.format(Result(url="http://x/a")) == b""

    def test_no_color_codes(self, result):
        """JSON output should never be colorized."""
        formatter = Formatter(json_output=True, colors=True)
        assert b"\x1b" not in formatter.format(result)

    def test_unencodable_value(self):
        """Unencodable values should raise FormatError."""
        formatter = Formatter(json_output=True)
        with pytest.raises(FormatError) as exc_info:
            formatter.format(Result(method=object()))
        assert isinstance(exc_info.value, EncodingError)


class TestFormatScreen:
    def test_default_fields(self, result):
        """Default line should hold method, URL, source, tag and attribute."""
        formatter = Formatter(colors=False)
        line = formatter.format(result)
        assert line == b"[POST] http://example.com/search [form] [form:action]"

    def test_verbose_adds_timestamp_and_body(self, result):
        """Verbose mode should add timestamp and body."""
        formatter = Formatter(colors=False, verbose=True)
        line = formatter.format(result)
        assert line == (
            b"[2024-01-02T03:04:05+00:00] [POST] http://example.com/search "
            b"[form] [form:action] q=1"
        )

    def test_field_subset(self, result):
        """Configured fields replace the default set."""
        formatter = Formatter(colors=False, verbose=True, fields=["URL", "Attribute"])
        assert formatter.format(result) == b"http://example.com/search [action]"

    def test_url_only(self):
        """Missing metadata should be skipped."""
        formatter = Formatter(colors=False)
        assert formatter.format(Result(url="http://x/a")) == b"http://x/a"

    def test_empty_result(self):
        """A result with no visible fields should encode to zero bytes."""
        formatter = Formatter(colors=False)
        assert formatter.format(Result(body="hidden")) == b""

    def test_body_kept_on_one_line(self):
        """Multi-line bodies should not break the line."""
        formatter = Formatter(colors=False, verbose=True)
        line = formatter.format(Result(url="http://x/a", body="a=1\nb=2"))
        assert line == b"http://x/a a=1 b=2"

    def test_colors(self, result):
        """Colored output should decolorize to the plain line."""
        plain = Formatter(colors=False).format(result)
        colored = Formatter(colors=True).format(result)
        assert b"\x1b[" in colored
        assert decolorize(colored) == plain

    def test_line_breaks_in_any_field(self):
        """CR and LF in any field should not split the line."""
        formatter = Formatter(colors=False, verbose=True)
        result = Result(
            method="GE\nT",
            url="http://x/a\nb",
            source="body\r\nx",
            tag="a\r",
            attribute="hr\nef",
            body="q\r\n1",
        )
        line = formatter.format(result)
        assert b"\n" not in line
        assert b"\r" not in line
        assert line == b"[GE T] http://x/a b [body x] [a :hr ef] q 1"

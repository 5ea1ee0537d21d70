"""Protocol definitions for output components."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from ..result import Result

# Receives one rendered output line (without trailing newline)
Console = Callable[[str], None]


@dataclass
class Response:
    """HTTP response container."""

    url: str
    status: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    request_url: str | None = None
    method: str = "GET"
    http_version: str = "HTTP/1.1"

    @property
    def reason(self) -> str:
        """Reason phrase for the status code."""
        return httpx.codes.get_reason_phrase(self.status)

    @property
    def archive_url(self) -> str:
        """URL the response is archived under (the original request URL)."""
        return self.request_url or self.url

    def raw(self) -> bytes:
        """Render status line, headers and body as raw HTTP bytes."""
        head = [f"{self.http_version} {self.status} {self.reason}".rstrip()]
        head.extend(f"{name}: {value}" for name, value in self.headers.items())
        return ("\r\n".join(head) + "\r\n\r\n").encode("latin-1", errors="replace") + self.content

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> "Response":
        """Adapt an httpx response, keeping the original request URL."""
        request = resp.request
        return cls(
            url=str(resp.url),
            status=resp.status_code,
            content=resp.content,
            headers=dict(resp.headers),
            request_url=str(request.url),
            method=request.method,
            http_version=resp.http_version,
        )


@runtime_checkable
class Writer(Protocol):
    """Protocol for result writers."""

    def write(self, result: Result | None, response: Response | None = None) -> None:
        """Write the result to screen and/or file, archiving response if given."""
        ...

    def close(self) -> None:
        """Release the output file."""
        ...

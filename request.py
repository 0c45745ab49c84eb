"""HTTP request-line parser."""

from dataclasses import dataclass
from urllib.parse import urlsplit

ALLOWED_HTTP_VERSIONS = {"HTTP/1.1", "HTTP/1.0"}


class HTTPRequestParseError(ValueError):
    """Raised when the bytes read from a client do not start with a request line."""


@dataclass(slots=True)
class HTTPRequest:
    method: str
    path: str
    http_version: str
    raw_target: str = "/"

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Parse the request line from a head possibly cut short by the read buffer.

        Header lines are not interpreted; only the first line must be complete.
        """
        request_line, separator, _rest = raw.partition(b"\r\n")
        if not separator:
            raise HTTPRequestParseError("Incomplete request line")

        line = request_line.decode("iso-8859-1")
        if not line:
            raise HTTPRequestParseError("Missing request line")

        first_line_parts = line.split(" ")
        if len(first_line_parts) != 3:
            raise HTTPRequestParseError("Invalid request line")

        method, target, http_version = first_line_parts
        if not method or not target or not http_version:
            raise HTTPRequestParseError("Request line contains empty tokens")

        if http_version not in ALLOWED_HTTP_VERSIONS:
            raise HTTPRequestParseError(f"Unsupported HTTP version {http_version}")

        return cls(
            method=method.upper(),
            path=urlsplit(target).path or "/",
            raw_target=target,
            http_version=http_version,
        )

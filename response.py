"""HTTP response model and wire framing."""

import enum
from dataclasses import dataclass

from config import HTTP_VERSION

NOT_FOUND_PAGE = "<html><body><h1>404 NOT FOUND</h1></body></html>"
FORBIDDEN_PAGE = "<html><body><h1>403 Forbidden</h1></body></html>"


class ResponseStatus(enum.Enum):
    OK = (200, "OK")
    NOT_FOUND = (404, "NOT FOUND")
    FORBIDDEN = (403, "FORBIDDEN")

    def __init__(self, code: int, text: str) -> None:
        self.code = code
        self.text = text

    def __str__(self) -> str:
        return f"{self.code} {self.text}"


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    status: ResponseStatus
    content_type: str
    body: str = ""
    binary_payload: bytes | None = None
    accept_ranges: bool = False
    version: str = HTTP_VERSION

    def __post_init__(self) -> None:
        if self.binary_payload is not None and self.body:
            raise ValueError("Response cannot carry both a text body and a binary payload")

    @property
    def status_code(self) -> int:
        return self.status.code

    @property
    def encoded_body(self) -> bytes:
        return self.body.encode("utf-8")

    @property
    def content_length(self) -> int:
        if self.binary_payload is not None:
            return len(self.binary_payload)
        return len(self.encoded_body)

    def header_lines(self) -> list[str]:
        lines = [
            f"{self.version} {self.status}",
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.content_length}",
        ]
        # File responses advertise byte ranges; Range request headers are still
        # ignored and the full entity is sent with 200.
        if self.accept_ranges:
            lines.append("Accept-Ranges: bytes")
        return lines

    def text_section(self) -> bytes:
        """Status line, headers, blank line and the text body, if any."""
        head = "\r\n".join(self.header_lines()).encode("iso-8859-1") + b"\r\n\r\n"
        return head + self.encoded_body

    def to_bytes(self) -> bytes:
        if self.binary_payload is None:
            return self.text_section()
        return self.text_section() + self.binary_payload


def text_response(status: ResponseStatus, body: str, content_type: str = "text/html") -> HTTPResponse:
    return HTTPResponse(status=status, content_type=content_type, body=body)


def not_found() -> HTTPResponse:
    return text_response(ResponseStatus.NOT_FOUND, NOT_FOUND_PAGE)


def forbidden() -> HTTPResponse:
    return text_response(ResponseStatus.FORBIDDEN, FORBIDDEN_PAGE)

"""Unit tests for HTTP request-line parsing."""

import pytest

from request import HTTPRequest, HTTPRequestParseError


def test_parse_get_keeps_path_encoded_and_drops_query() -> None:
    raw = (
        b"GET /my%20docs/file.txt?download=1 HTTP/1.1\r\n"
        b"Host: localhost\r\n"
        b"User-Agent: pytest\r\n"
        b"\r\n"
    )

    request = HTTPRequest.from_bytes(raw)

    assert request.method == "GET"
    assert request.path == "/my%20docs/file.txt"
    assert request.raw_target == "/my%20docs/file.txt?download=1"
    assert request.http_version == "HTTP/1.1"


def test_truncated_head_still_parses_request_line() -> None:
    raw = b"GET /a.txt HTTP/1.0\r\nHost: localhost\r\nX-Long: abc"

    request = HTTPRequest.from_bytes(raw)

    assert request.path == "/a.txt"
    assert request.http_version == "HTTP/1.0"


def test_incomplete_request_line_raises() -> None:
    with pytest.raises(HTTPRequestParseError, match="Incomplete request line"):
        HTTPRequest.from_bytes(b"GET /a.txt HTT")


def test_missing_request_line_raises() -> None:
    with pytest.raises(HTTPRequestParseError, match="Missing request line"):
        HTTPRequest.from_bytes(b"\r\nHost: localhost\r\n\r\n")


def test_invalid_request_line_raises_value_error() -> None:
    raw = b"BROKEN-LINE\r\nHost: localhost\r\n\r\n"

    with pytest.raises(ValueError, match="Invalid request line"):
        HTTPRequest.from_bytes(raw)


def test_unsupported_version_raises() -> None:
    with pytest.raises(HTTPRequestParseError, match="Unsupported HTTP version"):
        HTTPRequest.from_bytes(b"GET / HTTP/9.9\r\n\r\n")


def test_any_method_is_accepted() -> None:
    request = HTTPRequest.from_bytes(b"post / HTTP/1.1\r\n\r\n")

    assert request.method == "POST"
    assert request.path == "/"

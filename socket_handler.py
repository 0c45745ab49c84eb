"""Low-level socket read/write utilities."""

from __future__ import annotations

import socket
from typing import BinaryIO

from config import BUFFER_SIZE
from response import HTTPResponse

HEADER_TERMINATOR = b"\r\n\r\n"


class HTTPReadError(Exception):
    """Raised when a client request cannot be read from the socket."""


class SocketTimeoutError(HTTPReadError):
    """Raised when a client times out while sending request bytes."""


class PeerResetError(HTTPReadError):
    """Raised when the peer resets the connection mid-request."""


def read_http_request(client_socket: socket.socket, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read a request head, consuming at most ``buffer_size`` bytes.

    Stops at the blank line ending the headers, when the buffer is full or
    when the peer closes its side. Returns ``b""`` for a peer that closed
    without sending anything.
    """
    buffer = bytearray()
    while len(buffer) < buffer_size and HEADER_TERMINATOR not in buffer:
        try:
            chunk = client_socket.recv(buffer_size - len(buffer))
        except socket.timeout as exc:
            raise SocketTimeoutError("Timed out waiting for request bytes") from exc
        except ConnectionError as exc:
            raise PeerResetError("Peer reset the connection") from exc
        if not chunk:
            break
        buffer.extend(chunk)
    return bytes(buffer)


def write_http_response(sink: BinaryIO, response: HTTPResponse) -> int:
    """Write the text section, then the binary payload if any, and flush."""
    text_section = response.text_section()
    sink.write(text_section)
    bytes_sent = len(text_section)
    if response.binary_payload is not None:
        sink.write(response.binary_payload)
        bytes_sent += len(response.binary_payload)
    sink.flush()
    return bytes_sent

"""Request path decoding and mapping onto the server root."""

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

_BROKEN_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class PathDecodeError(ValueError):
    """Raised when a request path carries malformed percent-encoding."""


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    decoded: str
    candidate: Path


def decode_request_path(request_path: str) -> str:
    """Percent-decode a request path exactly once, rejecting malformed escapes."""
    if _BROKEN_ESCAPE.search(request_path):
        raise PathDecodeError(f"Malformed percent escape in {request_path!r}")

    try:
        decoded = unquote(request_path, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise PathDecodeError(f"Escapes in {request_path!r} are not valid UTF-8") from exc

    if "\x00" in decoded:
        raise PathDecodeError("Request path contains a NUL character")
    return decoded


def resolve_request_path(request_path: str, root: Path) -> ResolvedPath:
    decoded = decode_request_path(request_path)
    # Joining an absolute path would discard the root.
    relative = decoded.lstrip("/")
    return ResolvedPath(decoded=decoded or "/", candidate=root / relative)

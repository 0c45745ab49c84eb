"""Map a request path onto the server root and build the response."""

from __future__ import annotations

import enum
import logging
import stat
from pathlib import Path

from content_types import classify_content, decode_text
from guard import Verdict, check_path, is_missing_error
from listing import render_listing
from paths import PathDecodeError, resolve_request_path
from response import HTTPResponse, ResponseStatus, forbidden, not_found

logger = logging.getLogger(__name__)


class ResourceKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


def classify_resource(path: Path) -> ResourceKind:
    """Stat ``path`` once; only an entry that cannot exist counts as missing.

    Absent entries and over-long names are missing. Other ``OSError``
    subclasses (permission errors, I/O errors) propagate. Entries that are
    neither regular files nor directories are reported as missing.
    """
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        if is_missing_error(exc):
            return ResourceKind.MISSING
        raise

    if stat.S_ISREG(mode):
        return ResourceKind.FILE
    if stat.S_ISDIR(mode):
        return ResourceKind.DIRECTORY
    return ResourceKind.MISSING


def file_response(path: Path) -> HTTPResponse:
    data = path.read_bytes()
    descriptor = classify_content(path, data)
    if descriptor.is_text:
        return HTTPResponse(
            status=ResponseStatus.OK,
            content_type=descriptor.mime_type,
            body=decode_text(data),
            accept_ranges=True,
        )
    return HTTPResponse(
        status=ResponseStatus.OK,
        content_type=descriptor.mime_type,
        binary_payload=data,
        accept_ranges=True,
    )


def directory_response(path: Path, request_path: str) -> HTTPResponse:
    return HTTPResponse(
        status=ResponseStatus.OK,
        content_type="text/html",
        body=render_listing(path, request_path),
    )


def synthesize_response(request_path: str, root: Path) -> HTTPResponse:
    """Serve ``request_path`` from ``root``.

    Returns 403 for malformed escapes and for anything the traversal guard
    refuses, 404 for allowed paths that do not exist, and 200 with the file
    contents or a directory listing otherwise. Filesystem errors met while
    reading propagate as ``OSError`` so no partial response is produced.
    """
    root = root.absolute()
    try:
        resolved = resolve_request_path(request_path, root)
    except PathDecodeError as exc:
        logger.warning("Rejecting undecodable path: %s", exc)
        return forbidden()

    if check_path(resolved.candidate, root) is Verdict.DENIED:
        return forbidden()

    kind = classify_resource(resolved.candidate)
    logger.debug("Resolved %s to %s (%s)", resolved.decoded, resolved.candidate, kind.value)
    if kind is ResourceKind.FILE:
        return file_response(resolved.candidate)
    if kind is ResourceKind.DIRECTORY:
        return directory_response(resolved.candidate, resolved.decoded)
    return not_found()

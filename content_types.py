"""MIME type detection for served files."""

from dataclasses import dataclass
from pathlib import Path

import filetype

from config import SNIFF_BYTES

DEFAULT_MIME_TYPE = "application/octet-stream"

EXTENSION_MIME_TYPES: dict[str, str] = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "mp4": "video/mp4",
    "txt": "text/plain",
    "toml": "text/plain",
    "lock": "text/plain",
}


@dataclass(frozen=True, slots=True)
class ContentDescriptor:
    mime_type: str

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")

    @property
    def is_binary(self) -> bool:
        return not self.is_text


def sniff_mime_type(data: bytes) -> str | None:
    """Match the leading bytes against known binary signatures."""
    kind = filetype.guess(data[:SNIFF_BYTES])
    if kind is None:
        return None
    return kind.mime


def mime_type_from_extension(file_path: Path) -> str:
    extension = file_path.suffix.removeprefix(".").lower()
    return EXTENSION_MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)


def classify_content(file_path: Path, data: bytes) -> ContentDescriptor:
    mime_type = sniff_mime_type(data) if data else None
    if mime_type is None:
        mime_type = mime_type_from_extension(file_path)
    return ContentDescriptor(mime_type=mime_type)


def decode_text(data: bytes) -> str:
    """Render file bytes as text, replacing invalid UTF-8 sequences with U+FFFD."""
    return data.decode("utf-8", errors="replace")

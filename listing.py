"""HTML directory listing."""

import html
import os
from pathlib import Path, PurePosixPath
from urllib.parse import quote, unquote

LISTING_HEAD = "<html><body><h1>Directory Listing</h1><ul>"
LISTING_TAIL = "</ul></body></html>"


def encode_entry_name(name: str) -> str:
    """Percent-encode one entry name for use as a single URL path segment."""
    return quote(name, safe="", errors="surrogateescape")


def decode_entry_name(encoded: str) -> str:
    return unquote(encoded, errors="surrogateescape")


def display_text(name: str) -> str:
    # Undecodable filename bytes arrive as surrogates; show them as U+FFFD.
    readable = name.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    return html.escape(readable, quote=False)


def parent_href(request_path: str) -> str:
    parent = PurePosixPath("/" + request_path.strip("/")).parent
    return quote(str(parent), safe="/")


def entry_href(request_path: str, name: str) -> str:
    prefix = request_path.strip("/")
    if not prefix:
        return "/" + encode_entry_name(name)
    return f"/{quote(prefix, safe='/')}/{encode_entry_name(name)}"


def render_listing(directory: Path, request_path: str) -> str:
    """Render an index of ``directory`` as reached through ``request_path``.

    The first item links to the parent of the request path. Each entry links
    to its escaped URL while the visible text keeps the raw name, with a
    trailing slash for subdirectories.
    """
    with os.scandir(directory) as scanner:
        entries = sorted(scanner, key=lambda entry: entry.name)

    parts = [LISTING_HEAD, f'<li><a href="{parent_href(request_path)}">up</a></li>']
    for entry in entries:
        display_name = entry.name + "/" if entry.is_dir() else entry.name
        parts.append(
            f'<li><a href="{entry_href(request_path, entry.name)}">'
            f"{display_text(display_name)}</a></li>"
        )
    parts.append(LISTING_TAIL)
    return "".join(parts)

"""Unit tests for directory listing rendering."""

import re
from pathlib import Path

import pytest

from listing import (
    decode_entry_name,
    encode_entry_name,
    entry_href,
    parent_href,
    render_listing,
)


def _links(html: str) -> list[tuple[str, str]]:
    return re.findall(r'<li><a href="([^"]*)">([^<]*)</a></li>', html)


def test_listing_has_up_link_and_one_item_per_entry(tmp_path: Path) -> None:
    (tmp_path / "one.txt").write_text("1")
    (tmp_path / "two.txt").write_text("2")
    (tmp_path / "sub").mkdir()

    html = render_listing(tmp_path, "/docs")

    assert html.startswith("<html><body><h1>Directory Listing</h1><ul>")
    assert html.endswith("</ul></body></html>")
    assert html.count("<li>") == 4
    assert _links(html) == [
        ("/", "up"),
        ("/docs/one.txt", "one.txt"),
        ("/docs/sub", "sub/"),
        ("/docs/two.txt", "two.txt"),
    ]


def test_reserved_characters_escaped_in_link_only(tmp_path: Path) -> None:
    (tmp_path / "my file#1.txt").write_text("x")

    html = render_listing(tmp_path, "/")

    assert _links(html)[1] == ("/my%20file%231.txt", "my file#1.txt")


def test_request_prefix_is_escaped(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("x")

    html = render_listing(tmp_path, "/my docs")

    assert _links(html)[0] == ("/", "up")
    assert _links(html)[1] == ("/my%20docs/a.txt", "a.txt")


def test_display_text_is_html_escaped(tmp_path: Path) -> None:
    (tmp_path / "<b>&.txt").write_text("x")

    html = render_listing(tmp_path, "/")

    assert "&lt;b&gt;&amp;.txt</a>" in html
    assert "/%3Cb%3E%26.txt" in html


def test_empty_directory_only_lists_up_link(tmp_path: Path) -> None:
    html = render_listing(tmp_path, "/")

    assert _links(html) == [("/", "up")]


@pytest.mark.parametrize(
    ("request_path", "expected"),
    [("/", "/"), ("/photos", "/"), ("/photos/", "/"), ("/a/b/c", "/a/b"), ("", "/")],
)
def test_parent_href(request_path: str, expected: str) -> None:
    assert parent_href(request_path) == expected


@pytest.mark.parametrize(
    ("request_path", "expected"),
    [
        ("/", "/cat.png"),
        ("/photos", "/photos/cat.png"),
        ("/photos/", "/photos/cat.png"),
        ("//photos//", "/photos/cat.png"),
    ],
)
def test_entry_href_avoids_duplicate_slashes(request_path: str, expected: str) -> None:
    assert entry_href(request_path, "cat.png") == expected


@pytest.mark.parametrize("name", ["plain.txt", "a b#c?d&e=f%g.txt", "café ☕.md", "semi;colon"])
def test_entry_name_escaping_round_trips(name: str) -> None:
    encoded = encode_entry_name(name)

    assert "/" not in encoded
    assert " " not in encoded
    assert decode_entry_name(encoded) == name

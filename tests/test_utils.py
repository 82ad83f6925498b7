from __future__ import annotations

import datetime as dt

import pytest

from hexo_import.errors import UsageError
from hexo_import.fetch import Fetcher, normalize_document_url, split_document_lines
from hexo_import.utils import parse_stamp, sanitize_title, site_image_path, stamp_for

from .fakes import FakeSession


def test_sanitize_title() -> None:
    assert sanitize_title("A/B Testing") == "A／B_Testing"
    assert sanitize_title("Hello World") == "Hello_World"


def test_parse_stamp_date_only() -> None:
    published, post_id = parse_stamp("20200716")
    assert published == dt.datetime(2020, 7, 16)
    assert post_id == "a"


def test_parse_stamp_with_post_id() -> None:
    published, post_id = parse_stamp("20200716b")
    assert published == dt.datetime(2020, 7, 16)
    assert post_id == "b"
    assert stamp_for(published, post_id) == "20200716b"


def test_parse_stamp_defaults_to_today() -> None:
    published, post_id = parse_stamp(None, today=dt.date(2021, 1, 2))
    assert published == dt.datetime(2021, 1, 2)
    assert post_id == "a"


@pytest.mark.parametrize("token", ["2020716", "2020-07-16", "20201340", "20200230", "abcdefgh", "2020071612"])
def test_parse_stamp_rejects_invalid_tokens(token: str) -> None:
    with pytest.raises(UsageError):
        parse_stamp(token)


def test_site_image_path() -> None:
    assert site_image_path("20200716a", "pic.png") == "/images/20200716a/pic.png"


def test_normalize_document_url() -> None:
    assert normalize_document_url("https://qiita.com/u/items/abc") == "https://qiita.com/u/items/abc.md"
    assert normalize_document_url("https://qiita.com/u/items/abc.md") == "https://qiita.com/u/items/abc.md"


def test_split_document_lines_only_breaks_on_newline() -> None:
    text = "title: Hello\x0cWorld\r\ntags: go sql\nauthor: A B\n\n\n---\nbody\n"
    assert split_document_lines(text) == [
        "title: Hello\x0cWorld",
        "tags: go sql",
        "author: A B",
        "",
        "",
        "---",
        "body",
    ]


def test_split_document_lines_edges() -> None:
    assert split_document_lines("") == []
    assert split_document_lines("\n") == [""]
    assert split_document_lines("one\r\ntwo") == ["one", "two"]


def test_get_lines_keeps_header_window_aligned() -> None:
    session = FakeSession()
    session.add_text("https://example.com/a.md", "title: Hello\x0cWorld\ntags: go sql\nauthor: A\n\n\n---\nbody\n")
    lines = Fetcher(session, timeout=5).get_lines("https://example.com/a.md")
    assert len(lines) == 7
    assert lines[5] == "---"

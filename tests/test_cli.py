from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from hexo_import import cli, importer

from .fakes import FakeSession

ARTICLE_URL = "https://qiita.com/alice/items/abc123"

ARTICLE = "\n".join(
    [
        "title: A/B Testing",
        "tags: go database",
        "author: Alice",
        "",
        "",
        "---",
        "Intro with **bold**.",
        *[""] * 6,
        "![pic.png](https://example.com/x/pic.png)",
        "```go:main.go",
        "package main",
        "```",
    ]
)


@pytest.fixture
def fake_session(monkeypatch: pytest.MonkeyPatch, make_image: Callable[..., bytes]) -> FakeSession:
    session = FakeSession()
    session.add_text(ARTICLE_URL + ".md", ARTICLE)
    session.add("https://example.com/x/pic.png", make_image(1600, 800), "image/png")
    monkeypatch.setattr(importer, "create_session", lambda config: session)
    return session


def test_cli_imports_post(tmp_path: Path, fake_session: FakeSession) -> None:
    exit_code = cli.main([ARTICLE_URL, "20200716", "--blog-root", str(tmp_path), "--timeout", "7"])

    assert exit_code == 0
    post = tmp_path / "_posts" / "20200716a_A／B_Testing.md"
    text = post.read_text(encoding="utf-8")
    assert text.startswith('title: "A/B Testing"\ndate: 2020/07/16 00:00:00\ntag:\n  - database\n')
    assert "postid:" not in text
    assert "category:\n  - Programming\n" in text
    assert "thumbnail: /images/20200716a/thumbnail.png\n" in text
    assert 'lede: "Intro with bold."\n' in text
    assert '<img src="/images/20200716a/pic.png" alt="pic.png" width="1200" height="600" loading="lazy">\n' in text
    assert "```go main.go\n" in text

    image_dir = tmp_path / "images" / "20200716a"
    assert (image_dir / "pic.png").exists()
    assert (image_dir / "thumbnail.png").exists()
    assert all(timeout == 7 for _, timeout in fake_session.calls)
    assert fake_session.closed


def test_cli_writes_custom_post_id(tmp_path: Path, fake_session: FakeSession) -> None:
    assert cli.main([ARTICLE_URL + ".md", "20200716c", "--blog-root", str(tmp_path)]) == 0

    post = tmp_path / "_posts" / "20200716c_A／B_Testing.md"
    assert "postid: c\n" in post.read_text(encoding="utf-8")
    assert (tmp_path / "images" / "20200716c" / "thumbnail.png").exists()


def test_cli_blog_root_from_environment(
    tmp_path: Path, fake_session: FakeSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HEXO_IMPORT_BLOG_ROOT", str(tmp_path))
    assert cli.main([ARTICLE_URL, "20200716"]) == 0
    assert (tmp_path / "_posts" / "20200716a_A／B_Testing.md").exists()


def test_cli_rejects_invalid_date(tmp_path: Path, fake_session: FakeSession) -> None:
    assert cli.main([ARTICLE_URL, "2020-07-16", "--blog-root", str(tmp_path)]) == cli.EXIT_USAGE
    assert fake_session.calls == []


def test_cli_rejects_empty_url(tmp_path: Path, fake_session: FakeSession) -> None:
    assert cli.main(["", "--blog-root", str(tmp_path)]) == cli.EXIT_USAGE


def test_cli_reports_missing_document(tmp_path: Path, fake_session: FakeSession) -> None:
    exit_code = cli.main(["https://qiita.com/alice/items/missing", "20200716", "--blog-root", str(tmp_path)])
    assert exit_code == cli.EXIT_FAILURE
    assert not (tmp_path / "_posts").exists()


def test_cli_reports_empty_document(tmp_path: Path, fake_session: FakeSession) -> None:
    fake_session.add_text("https://qiita.com/alice/items/empty.md", "")
    exit_code = cli.main(["https://qiita.com/alice/items/empty", "20200716", "--blog-root", str(tmp_path)])
    assert exit_code == cli.EXIT_FAILURE

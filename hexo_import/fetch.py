"""HTTP retrieval of source documents and image bytes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import requests

from .config import ImportConfig
from .errors import FetchError

logger = logging.getLogger("hexo_import")


@dataclass
class FetchedResource:
    """Body and content type of a successful GET."""

    url: str
    content: bytes
    content_type: Optional[str]


def normalize_document_url(url: str, suffix: str = ".md") -> str:
    """Point the URL at the raw Markdown export of the article."""
    if not url.endswith(suffix):
        return url + suffix
    return url


def split_document_lines(text: str) -> List[str]:
    r"""Split on ``\n`` only, dropping a trailing ``\r`` from each line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def create_session(config: ImportConfig) -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    return session


class Fetcher:
    """Thin wrapper over a ``requests`` session with a fixed timeout."""

    def __init__(self, session: requests.Session, timeout: float) -> None:
        self.session = session
        self.timeout = timeout

    def get(self, url: str) -> FetchedResource:
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, f"cannot access url ({exc})") from exc
        return FetchedResource(
            url=url,
            content=resp.content,
            content_type=resp.headers.get("Content-Type"),
        )

    def get_lines(self, url: str) -> List[str]:
        """Fetch a UTF-8 text resource and split it into lines."""
        resource = self.get(url)
        text = resource.content.decode("utf-8", errors="replace")
        logger.info("Fetched %s (%d bytes)", url, len(resource.content))
        return split_document_lines(text)

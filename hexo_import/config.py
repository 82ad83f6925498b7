"""Configuration objects and constants for the importer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

MAX_IMAGE_WIDTH = 1200
MAX_THUMBNAIL_WIDTH = 300
DEFAULT_POST_ID = "a"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "hexo-import/0.1"
BLOG_ROOT_ENV = "HEXO_IMPORT_BLOG_ROOT"


def default_blog_root() -> Path:
    """Return the Hexo ``source`` directory, honouring the environment override."""
    override = os.getenv(BLOG_ROOT_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / "tech-blog" / "source"


@dataclass
class ImportConfig:
    """Top-level settings that control fetching and post generation."""

    blog_root: Path
    max_image_width: int = MAX_IMAGE_WIDTH
    max_thumbnail_width: int = MAX_THUMBNAIL_WIDTH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    document_suffix: str = ".md"

    @property
    def posts_root(self) -> Path:
        return self.blog_root / "_posts"

    @property
    def images_root(self) -> Path:
        return self.blog_root / "images"

    @classmethod
    def from_env(cls, blog_root: Optional[Path] = None, **overrides) -> "ImportConfig":
        root = blog_root if blog_root is not None else default_blog_root()
        return cls(blog_root=Path(root).expanduser(), **overrides)

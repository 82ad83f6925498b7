"""High-level orchestration for importing one article as a Hexo post."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional

from .categories import TagClassifier
from .config import DEFAULT_POST_ID, ImportConfig
from .errors import StorageError
from .fetch import Fetcher, create_session, normalize_document_url
from .images import ImageAcquirer
from .markdown import compose_post
from .models import ImportResult
from .transform import DocumentTransformer
from .utils import sanitize_title, stamp_for

logger = logging.getLogger("hexo_import")


def build_post_path(config: ImportConfig, stamp: str, title: str) -> Path:
    """Return ``_posts/<stamp>_<title>.md`` for the given title."""
    return config.posts_root / f"{stamp}_{sanitize_title(title)}.md"


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(path, exc) from exc
    return path


def import_post(
    url: str,
    config: ImportConfig,
    publish_date: dt.datetime,
    post_id: str = DEFAULT_POST_ID,
    fetcher: Optional[Fetcher] = None,
    classifier: Optional[TagClassifier] = None,
) -> ImportResult:
    """Fetch ``url`` and write it, with its images, into the blog tree."""
    stamp = stamp_for(publish_date, post_id)
    image_dir = ensure_directory(config.images_root / stamp)

    owns_session = fetcher is None
    if fetcher is None:
        fetcher = Fetcher(create_session(config), config.request_timeout)

    try:
        document_url = normalize_document_url(url, config.document_suffix)
        logger.info("Loading %s", document_url)
        lines = fetcher.get_lines(document_url)

        transformer = DocumentTransformer(
            acquirer=ImageAcquirer(fetcher, config.max_thumbnail_width),
            classifier=classifier or TagClassifier(),
            image_dir=image_dir,
            stamp=stamp,
            max_image_width=config.max_image_width,
        )
        result = transformer.transform(lines, publish_date, post_id, source=document_url)
    finally:
        if owns_session:
            fetcher.session.close()

    post_path = build_post_path(config, stamp, result.source_title)
    ensure_directory(post_path.parent)
    try:
        post_path.write_text(compose_post(result.metadata, result.body_lines), encoding="utf-8")
    except OSError as exc:
        raise StorageError(post_path, exc) from exc
    logger.info("Saved post to %s", post_path)

    return ImportResult(
        post_path=post_path,
        image_dir=image_dir,
        metadata=result.metadata,
        image_count=len(result.images),
    )

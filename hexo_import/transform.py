"""Line-by-line conversion of an exported article into a Hexo post body."""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .categories import TagClassifier
from .errors import EmptyDocumentError
from .images import THUMBNAIL_STEM, ImageAcquirer, extract_image_reference
from .models import ImageDescriptor, PostMetadata, TransformResult
from .utils import site_image_path, split_extension

logger = logging.getLogger("hexo_import")

HEADER_LINES = 6
LEDE_FIRST_LINE = 7
LEDE_LAST_LINE = 13

LINK_TARGET_PATTERN = re.compile(r"\(.*\)")
CODE_FENCE = "```"


def strip_lede_markup(line: str) -> str:
    """Drop link targets and bold markers so the lede reads as plain text."""
    return LINK_TARGET_PATTERN.sub("", line).replace("**", "")


def rewrite_code_fence(line: str) -> str:
    """Turn ```` ```lang:caption ```` into Hexo's ```` ```lang caption ````."""
    if line.startswith(CODE_FENCE):
        return line.replace(":", " ", 1)
    return line


def quote(value: str) -> str:
    return f'"{value}"'


def render_image_tag(stamp: str, image: ImageDescriptor) -> str:
    return (
        f'<img src="{site_image_path(stamp, image.file_name)}" alt="{image.alt_text}" '
        f'width="{image.width}" height="{image.height}" loading="lazy">'
    )


def disambiguate(file_name: str, occurrence: int) -> str:
    """Insert ``_<occurrence>`` before the extension of a repeated name."""
    stem, ext = split_extension(file_name)
    return f"{stem}_{occurrence}{ext}"


def claim_file_name(file_name: str, occurrences: Counter, stored: Set[str]) -> str:
    """Pick the on-disk name for the next image called ``file_name``.

    Repeats get ``_2``, ``_3``... in order of appearance. A candidate that an
    earlier image already took, or that would shadow the thumbnail, moves on
    to the next index.
    """
    occurrences[file_name] += 1
    count = occurrences[file_name]
    candidate = file_name if count == 1 else disambiguate(file_name, count)
    while candidate in stored or split_extension(candidate)[0] == THUMBNAIL_STEM:
        count += 1
        occurrences[file_name] = count
        candidate = disambiguate(file_name, count)
    stored.add(candidate)
    return candidate


class DocumentTransformer:
    """Scan a source document once, collecting metadata and rewriting lines.

    The first six lines are the export's header (``title:``, ``tags:``,
    ``author:``) and never reach the body. Lines 7-13 additionally feed the
    lede. Image lines are downloaded into ``image_dir`` and replaced by local
    ``<img>`` tags; the first image also becomes the post thumbnail.
    """

    def __init__(
        self,
        acquirer: ImageAcquirer,
        classifier: TagClassifier,
        image_dir: Path,
        stamp: str,
        max_image_width: int,
    ) -> None:
        self.acquirer = acquirer
        self.classifier = classifier
        self.image_dir = image_dir
        self.stamp = stamp
        self.max_image_width = max_image_width

    def transform(
        self,
        lines: Iterable[str],
        publish_date: dt.datetime,
        post_id: str,
        source: str = "<document>",
    ) -> TransformResult:
        title = ""
        author = ""
        tags: List[str] = []
        lede = ""
        thumbnail_pending = True
        thumbnail: Optional[ImageDescriptor] = None
        occurrences: Counter = Counter()
        stored: Set[str] = set()
        images: List[ImageDescriptor] = []
        body: List[str] = []

        line_no = 0
        for line in lines:
            line_no += 1

            if line_no <= HEADER_LINES:
                if line.startswith("title"):
                    title = line[len("title: ") :]
                elif line.startswith("tags"):
                    tags = line[len("tags: ") :].split(" ")
                elif line.startswith("author"):
                    author = line[len("author: ") :]
                continue

            if LEDE_FIRST_LINE <= line_no <= LEDE_LAST_LINE:
                if line.strip(" ") and not line.startswith("#"):
                    lede += strip_lede_markup(line)

            image = extract_image_reference(line)
            if image.has_image:
                image.max_width_px = self.max_image_width
                image.file_name = claim_file_name(image.file_name, occurrences, stored)

                image = self.acquirer.acquire(self.image_dir, image)
                stored.add(image.file_name)
                images.append(image)
                if thumbnail_pending:
                    thumbnail = self.acquirer.synthesize_thumbnail(self.image_dir, image)
                    thumbnail_pending = False
                body.append(render_image_tag(self.stamp, image))
                continue

            body.append(rewrite_code_fence(line))

        if line_no == 0:
            raise EmptyDocumentError(source)

        category, remaining_tags = self.classifier.categorize(tags)

        thumbnail_path = ""
        if thumbnail is not None:
            thumbnail_path = site_image_path(self.stamp, thumbnail.file_name)
        else:
            logger.warning("No images in %s; thumbnail left empty", source)

        metadata = PostMetadata(
            title=title if title.startswith('"') else quote(title),
            publish_date=publish_date,
            post_id=post_id,
            tags=remaining_tags,
            category=category,
            thumbnail_path=thumbnail_path,
            author=author,
            lede=quote(lede),
        )
        logger.debug(
            "Scanned %d lines from %s: %d image(s), category %s",
            line_no,
            source,
            len(images),
            category,
        )
        return TransformResult(
            metadata=metadata,
            body_lines=body,
            source_title=title,
            images=images,
            thumbnail=thumbnail,
        )

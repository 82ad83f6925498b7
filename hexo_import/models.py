"""Data models used throughout the import pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class ImageDescriptor:
    """Image reference found on one line, filled in as it is downloaded."""

    source_url: str = ""
    file_name: str = ""
    alt_text: str = ""
    has_image: bool = False
    max_width_px: int = 0
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class PostMetadata:
    """Front matter values for the generated post."""

    title: str
    publish_date: dt.datetime
    post_id: str
    tags: List[str]
    category: str
    thumbnail_path: str
    author: str
    lede: str
    featured: bool = True


@dataclass
class TransformResult:
    """Output of a single document scan."""

    metadata: PostMetadata
    body_lines: List[str]
    source_title: str = ""
    images: List[ImageDescriptor] = field(default_factory=list)
    thumbnail: Optional[ImageDescriptor] = None


@dataclass
class ImportResult:
    """Where an imported post and its assets ended up."""

    post_path: Path
    image_dir: Path
    metadata: PostMetadata
    image_count: int

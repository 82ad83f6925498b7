"""Hexo front matter rendering."""

from __future__ import annotations

from typing import Iterable, List

from .config import DEFAULT_POST_ID
from .models import PostMetadata

DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
FRONT_MATTER_END = "---"


def render_front_matter(metadata: PostMetadata) -> str:
    """Serialize post metadata into Hexo's front matter block."""
    lines: List[str] = [
        f"title: {metadata.title}",
        f"date: {metadata.publish_date.strftime(DATE_FORMAT)}",
    ]
    if metadata.post_id and metadata.post_id != DEFAULT_POST_ID:
        lines.append(f"postid: {metadata.post_id}")
    lines.append("tag:")
    lines.extend(f"  - {tag}" for tag in metadata.tags)
    lines.append("category:")
    lines.append(f"  - {metadata.category}")
    lines.append(f"thumbnail: {metadata.thumbnail_path}")
    lines.append(f"author: {metadata.author}")
    lines.append(f"featured: {'true' if metadata.featured else 'false'}")
    lines.append(f"lede: {metadata.lede}")
    lines.append(FRONT_MATTER_END)
    return "\n".join(lines) + "\n"


def compose_post(metadata: PostMetadata, body_lines: Iterable[str]) -> str:
    """Generate the final post text including front matter."""
    body = "".join(f"{line}\n" for line in body_lines)
    return render_front_matter(metadata) + body

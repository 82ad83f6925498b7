"""Image reference extraction, downloading and resizing."""

from __future__ import annotations

import html
import io
import logging
import re
from dataclasses import replace
from pathlib import Path, PurePosixPath
from typing import Dict, Optional
from urllib.parse import urlparse

from filetype import guess
from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError, ImageParseError, StorageError
from .fetch import Fetcher
from .models import ImageDescriptor
from .utils import split_extension

logger = logging.getLogger("hexo_import")

MAX_FILE_NAME_CHARS = 100
TRUNCATED_STEM_CHARS = 15
THUMBNAIL_STEM = "thumbnail"

ATTRIBUTE_PATTERN = re.compile(
    r"""\s*([A-Za-z_:][-A-Za-z0-9_:.]*)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'))?"""
)

# Pillow format names keyed by normalized extension
ENCODERS: Dict[str, str] = {".jpg": "JPEG", ".png": "PNG", ".gif": "GIF"}


def infer_image_extension(content_type: Optional[str], data: bytes) -> Optional[str]:
    """Extension for extensionless downloads, from the signature or ``Content-Type``."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        mime = kind.mime
    elif content_type and content_type.startswith("image/"):
        mime = content_type.split(";")[0].strip().lower()
    else:
        return None
    ext = mime.split("/", 1)[1]
    if not ext.isalnum():
        return None
    return "jpg" if ext == "jpeg" else ext


def normalize_extension(file_name: str) -> str:
    """Lower-cased extension with ``.jpeg`` folded into ``.jpg``."""
    ext = split_extension(file_name)[1].lower()
    return ".jpg" if ext == ".jpeg" else ext


def _parse_img_attributes(line: str) -> Dict[str, str]:
    start = line.index("<img")
    end = line.find(">", start)
    if end == -1:
        raise ImageParseError(line, "unterminated <img> tag")

    inner = line[start + len("<img") : end].rstrip()
    if inner.endswith("/"):
        inner = inner[:-1]
    if inner and not inner[0].isspace():
        raise ImageParseError(line, "malformed <img> tag")

    attributes: Dict[str, str] = {}
    pos = 0
    while pos < len(inner):
        if inner[pos:].strip() == "":
            break
        match = ATTRIBUTE_PATTERN.match(inner, pos)
        if not match or match.end() == pos:
            raise ImageParseError(line, f"unexpected text {inner[pos:].strip()!r}")
        name = match.group(1).lower()
        if name in attributes:
            raise ImageParseError(line, f"duplicate attribute {name!r}")
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[name] = html.unescape(value or "")
        pos = match.end()
        if pos < len(inner) and not inner[pos].isspace():
            raise ImageParseError(line, f"unexpected text {inner[pos:].strip()!r}")

    if not attributes.get("src"):
        raise ImageParseError(line, "missing src attribute")
    return attributes


def _name_from_url(url: str) -> str:
    parsed = urlparse(url)
    segment = parsed.path.rstrip("/").rsplit("/", 1)[-1]
    return segment or parsed.netloc


def _local_file_name(line: str, name: str) -> str:
    """Reduce an article-supplied name to a bare file name inside the image directory."""
    base = PurePosixPath(name.replace("\\", "/")).name
    if base in ("", ".", ".."):
        raise ImageParseError(line, f"no usable file name in {name!r}")
    return base


def _inline_url(line: str) -> str:
    url_start = line.find("https")
    if url_start == -1:
        url_start = line.index("](") + 2
    url_end = line.find(")", url_start)
    if url_end == -1:
        url_end = len(line)
    # a quoted caption may follow the URL
    return line[url_start:url_end].split(" ")[0]


def extract_image_reference(line: str) -> ImageDescriptor:
    """Detect an image reference on a single Markdown line.

    Two forms are recognized, inline ``![name](https://...)`` links first and
    ``<img src="...">`` tags second. Lines without either yield a descriptor
    with ``has_image`` unset.
    """
    if "![" in line and "](" in line:
        name_start = line.index("![") + 2
        name_end = line.find("]", name_start)
        if name_end == -1:
            name_end = len(line)
        url = _inline_url(line)
        file_name = line[name_start:name_end].replace(" ", "_")
        if not file_name:
            file_name = _name_from_url(url).replace(" ", "_")
        file_name = _local_file_name(line, file_name)
        if len(file_name) > MAX_FILE_NAME_CHARS:
            # pasted screenshots come with meaningless long names
            file_name = file_name[:TRUNCATED_STEM_CHARS] + split_extension(file_name)[1]

        return ImageDescriptor(
            source_url=url,
            file_name=file_name,
            alt_text=file_name,
            has_image=True,
        )

    if "<img" in line and "src=" in line:
        attributes = _parse_img_attributes(line)
        url = attributes["src"]
        alt_text = attributes.get("alt", "")
        file_name = alt_text.replace(" ", "_") or _name_from_url(url).replace(" ", "_")
        file_name = _local_file_name(line, file_name)
        return ImageDescriptor(
            source_url=url,
            file_name=file_name,
            alt_text=alt_text,
            has_image=True,
        )

    return ImageDescriptor()


class ImageAcquirer:
    """Download images into the post's asset directory, shrinking wide ones."""

    def __init__(self, fetcher: Fetcher, thumbnail_width: int) -> None:
        self.fetcher = fetcher
        self.thumbnail_width = thumbnail_width

    def acquire(self, directory: Path, descriptor: ImageDescriptor) -> ImageDescriptor:
        """Fetch ``descriptor.source_url`` and store it under ``directory``."""
        resource = self.fetcher.get(descriptor.source_url)
        data = resource.content

        if not split_extension(descriptor.file_name)[1]:
            extension = infer_image_extension(resource.content_type, data)
            if extension:
                descriptor.file_name = f"{descriptor.file_name}.{extension}"

        payload = data
        if descriptor.max_width_px:
            payload = self._resize(descriptor, data)

        destination = directory / descriptor.file_name
        try:
            destination.write_bytes(payload)
        except OSError as exc:
            raise StorageError(destination, exc) from exc
        logger.debug(
            "Saved %s (%dx%d) from %s",
            destination,
            descriptor.width,
            descriptor.height,
            descriptor.source_url,
        )
        return descriptor

    def _resize(self, descriptor: ImageDescriptor, data: bytes) -> bytes:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            detected = guess(data)
            kind = detected.mime if detected else "unknown content"
            raise ImageDecodeError(
                f"cannot decode image {descriptor.source_url} ({kind}): {exc}"
            ) from exc

        width, height = image.size
        descriptor.width, descriptor.height = width, height
        if width <= descriptor.max_width_px:
            return data

        target_width = descriptor.max_width_px
        target_height = max(1, round(height * target_width / width))
        ext = normalize_extension(descriptor.file_name)
        image_format = ENCODERS.get(ext)
        if image_format is None:
            logger.warning(
                "Unknown extension %r for %s; keeping original bytes",
                ext,
                descriptor.file_name,
            )
            return data

        buffer = io.BytesIO()
        options = {"quality": 100} if image_format == "JPEG" else {}
        try:
            resized = image.resize((target_width, target_height), Image.Resampling.LANCZOS)
            if image_format == "JPEG" and resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")
            resized.save(buffer, format=image_format, **options)
        except (ValueError, OSError) as exc:
            raise ImageDecodeError(
                f"cannot encode {descriptor.file_name} as {image_format}: {exc}"
            ) from exc
        descriptor.width, descriptor.height = resized.size
        return buffer.getvalue()

    def synthesize_thumbnail(self, directory: Path, source: ImageDescriptor) -> ImageDescriptor:
        """Store a small ``thumbnail.<ext>`` copy of the given image."""
        thumbnail = replace(
            source,
            file_name=THUMBNAIL_STEM + split_extension(source.file_name)[1],
            alt_text="",
            max_width_px=self.thumbnail_width,
            width=0,
            height=0,
        )
        return self.acquire(directory, thumbnail)

"""Utility helpers for string normalization and path handling."""

from __future__ import annotations

import datetime as dt
import posixpath
import re
from typing import Optional, Tuple

from .config import DEFAULT_POST_ID
from .errors import UsageError

STAMP_PATTERN = re.compile(r"^\d{8}$")
FULLWIDTH_SLASH = "／"


def sanitize_title(title: str) -> str:
    """Turn a post title into a file-name token Hexo accepts."""
    return title.replace("/", FULLWIDTH_SLASH).replace(" ", "_")


def parse_stamp(token: Optional[str], today: Optional[dt.date] = None) -> Tuple[dt.datetime, str]:
    """Split a ``YYYYMMDD`` or ``YYYYMMDDx`` token into a date and post ID.

    An empty token means today's date with the default post ID.
    """
    if not token:
        day = today or dt.date.today()
        return dt.datetime(day.year, day.month, day.day), DEFAULT_POST_ID

    post_id = DEFAULT_POST_ID
    ymd = token
    if len(token) == 9:
        ymd, post_id = token[:8], token[8:]
    if not STAMP_PATTERN.match(ymd):
        raise UsageError(f"date must be YYYYMMDD format: {token!r}")
    try:
        published = dt.datetime.strptime(ymd, "%Y%m%d")
    except ValueError as exc:
        raise UsageError(f"date is not a valid calendar date: {token!r}") from exc
    return published, post_id


def stamp_for(published: dt.datetime, post_id: str) -> str:
    """Directory token used for the post file name and its image folder."""
    return published.strftime("%Y%m%d") + post_id


def site_image_path(stamp: str, file_name: str) -> str:
    """Public URL path of an image stored under ``source/images``."""
    return posixpath.join("/images", stamp, file_name)


def split_extension(file_name: str) -> Tuple[str, str]:
    """Split a name into stem and extension the way ``path.Ext`` would."""
    ext = posixpath.splitext(file_name)[1]
    if not ext:
        return file_name, ""
    return file_name[: -len(ext)], ext

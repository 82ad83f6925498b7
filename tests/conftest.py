from __future__ import annotations

import io
from typing import Callable

import pytest
from PIL import Image

from .fakes import FakeSession


def _encode(width: int, height: int, fmt: str = "PNG", color: str = "red") -> bytes:
    image = Image.new("RGB", (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    return _encode


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()

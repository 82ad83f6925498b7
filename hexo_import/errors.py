"""Exception types raised by the import pipeline."""

from __future__ import annotations


class HexoImportError(Exception):
    """Base class for every fatal import failure."""


class UsageError(HexoImportError):
    """Missing or malformed command-line input."""


class FetchError(HexoImportError):
    """A document or image could not be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url


class EmptyDocumentError(FetchError):
    """The document URL answered but yielded no lines."""

    def __init__(self, url: str) -> None:
        super().__init__(url, "document not found or empty")


class ImageParseError(HexoImportError):
    """An embedded ``<img>`` tag could not be interpreted."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"image tag parse: {reason}: {line}")
        self.line = line


class ImageDecodeError(HexoImportError):
    """Downloaded bytes are not a decodable raster image."""


class StorageError(HexoImportError):
    """A local directory or file could not be created or written."""

    def __init__(self, path, exc: OSError) -> None:
        super().__init__(f"cannot write {path}: {exc}")
        self.path = path

"""Import exported Markdown articles into a Hexo blog."""

from .categories import TagClassifier
from .config import ImportConfig
from .errors import HexoImportError
from .importer import import_post
from .markdown import compose_post, render_front_matter
from .transform import DocumentTransformer

__all__ = [
    "DocumentTransformer",
    "HexoImportError",
    "ImportConfig",
    "TagClassifier",
    "compose_post",
    "import_post",
    "render_front_matter",
]

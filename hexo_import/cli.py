"""Command-line entry point for the Hexo importer."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_REQUEST_TIMEOUT, ImportConfig
from .errors import HexoImportError, UsageError
from .importer import import_post
from .utils import parse_stamp

logger = logging.getLogger("hexo_import.cli")

EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import an exported Markdown article as a Hexo post with local images.",
    )
    parser.add_argument("url", help="Article URL; '.md' is appended when missing")
    parser.add_argument(
        "stamp",
        nargs="?",
        default=None,
        help="Publish date as YYYYMMDD, optionally followed by a one-letter post ID",
    )
    parser.add_argument(
        "--blog-root",
        type=Path,
        default=None,
        help="Hexo source directory (default: $HEXO_IMPORT_BLOG_ROOT or ~/tech-blog/source)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request HTTP timeout in seconds",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(list(sys.argv[1:] if argv is None else argv))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    start = time.perf_counter()
    try:
        if not args.url:
            raise UsageError("URL is required")
        publish_date, post_id = parse_stamp(args.stamp)
        config = ImportConfig.from_env(args.blog_root, request_timeout=args.timeout)
        result = import_post(args.url, config, publish_date, post_id)
    except UsageError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE
    except HexoImportError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE

    logger.info(
        "Finished in %.2fs (%d image(s) -> %s)",
        time.perf_counter() - start,
        result.image_count,
        result.image_dir,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Page Manifest - Build offline delivery manifests for pages and fragments."""

import argparse
import sys
from functools import partial
from pathlib import Path

from config import Config
from fetcher import fetch_metadata
from git_utils import is_file_dirty
from logging_setup import get_logger, log_build_summary, setup_logging, write_progress
from manifest import create_manifest, load_page_lookup, write_manifest


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build offline delivery manifests for pages and their resources",
    )
    parser.add_argument(
        "pages",
        nargs="*",
        help="Page paths to build (default: every page in the index)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.toml)",
    )
    parser.add_argument(
        "-H", "--host",
        type=str,
        default=None,
        help="Override host that serves the published resources",
    )
    parser.add_argument(
        "-p", "--pages-source",
        type=str,
        default=None,
        help="Override page index location (URL or JSON file)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=None,
        help="Override directory manifests are written to",
    )
    parser.add_argument(
        "-u", "--updated",
        action="append",
        default=None,
        help="Page path that was just regenerated (repeatable)",
    )

    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only warnings and errors)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to file (always DEBUG level)",
    )

    return parser.parse_args()


def main() -> int:
    args = parse_args()

    verbosity = 1 if args.verbose else (-1 if args.quiet else 0)
    setup_logging(verbosity=verbosity, log_file=args.log_file)
    logger = get_logger()

    logger.debug("Loading configuration...")
    config = Config.load(
        config_path=args.config,
        host_override=args.host,
        pages_source_override=args.pages_source,
        output_dir_override=args.output_dir,
        updated_pages_override=args.updated,
    )

    logger.info("Host: %s", config.host)
    logger.info("Page index: %s", config.pages_source)
    logger.info("Output directory: %s", config.output_dir)

    logger.debug("Loading page index...")
    try:
        page_lookup = load_page_lookup(config.pages_source, timeout=config.request_timeout)
    except Exception as e:
        logger.error("Error loading page index: %s", e)
        return 1

    pages = args.pages or list(page_lookup)
    missing = [page for page in pages if page not in page_lookup]
    if missing:
        logger.error("Pages not found in index: %s", ", ".join(missing))
        return 1

    logger.info("Building manifests for %d pages", len(pages))

    fetch = partial(fetch_metadata, timeout=config.request_timeout)
    is_dirty = partial(is_file_dirty, repo_root=config.repo_root)
    skipped: list[tuple[str, str]] = []

    def on_unavailable(resource_path: str, page_path: str) -> None:
        skipped.append((resource_path, page_path))
        logger.debug("resource %s not available for page %s", resource_path, page_path)

    total = len(pages)
    written = 0
    failed_pages: list[str] = []
    for i, page_path in enumerate(pages):
        manifest, _ = create_manifest(
            config.host,
            page_lookup,
            page_path,
            config.updated_flags,
            fetch=fetch,
            is_dirty=is_dirty,
            on_unavailable=on_unavailable,
        )
        try:
            out_path = write_manifest(manifest, config.output_dir, page_path)
        except ValueError as e:
            failed_pages.append(page_path)
            logger.warning("Not writing manifest for %s: %s", page_path, e)
        else:
            written += 1
            logger.debug("Wrote %s (%d entries)", out_path, len(manifest.entries))
        write_progress(i + 1, total, page_path)

    if total:
        print()  # Newline after progress line

    log_build_summary(logger, written, skipped, failed_pages)

    if failed_pages:
        return 1

    logger.info("All manifests written to %s", config.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())

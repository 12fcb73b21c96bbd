"""Logging configuration for page-manifest."""

import logging
import sys
from pathlib import Path


LOGGER_NAME = "page_manifest"


def setup_logging(
    verbosity: int = 0,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the page-manifest logger.

    Args:
        verbosity: -1 for quiet (WARNING+), 0 for normal (INFO), 1 for verbose (DEBUG)
        log_file: Optional path to write logs to file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    if verbosity < 0:
        console_handler.setLevel(logging.WARNING)
    elif verbosity > 0:
        console_handler.setLevel(logging.DEBUG)
    else:
        console_handler.setLevel(logging.INFO)

    if verbosity > 0:
        console_fmt = logging.Formatter("%(levelname)s: %(message)s")
    else:
        console_fmt = logging.Formatter("%(message)s")
    console_handler.setFormatter(console_fmt)
    logger.addHandler(console_handler)

    # File handler always records DEBUG, with timestamps
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_fmt = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_fmt)
        logger.addHandler(file_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the page_manifest logger instance."""
    return logging.getLogger(LOGGER_NAME)


def format_progress(completed: int, total: int, page_path: str = "", bar_width: int = 30) -> str:
    """Render the manifest build progress line, e.g. `Manifests: [███░░] 3/5 /content/a`."""
    filled = int(bar_width * completed / total) if total else bar_width
    bar = "█" * filled + "░" * (bar_width - filled)
    line = f"Manifests: [{bar}] {completed}/{total}"
    if page_path:
        line = f"{line} {page_path}"
    return line


def write_progress(completed: int, total: int, page_path: str = "") -> None:
    """Update the in-place manifest progress line on the terminal.

    Bypasses logging, since the carriage return would garble log records.
    The line is padded so a shorter page path hides the previous one.
    """
    sys.stdout.write(f"\r{format_progress(completed, total, page_path):<100}")
    sys.stdout.flush()


def log_build_summary(
    logger: logging.Logger,
    pages_built: int,
    skipped: list[tuple[str, str]],
    failed_pages: list[str],
) -> None:
    """Log the end-of-run summary of a manifest build."""
    logger.info("")
    logger.info("=" * 50)
    logger.info("Manifest Summary")
    logger.info("=" * 50)
    logger.info("Manifests written: %d", pages_built)

    if skipped:
        logger.warning("Unavailable resources skipped: %d", len(skipped))
        for resource_path, page_path in skipped:
            logger.warning("  %s (page %s)", resource_path, page_path)

    if failed_pages:
        logger.error("Manifests not written: %d", len(failed_pages))
        for page_path in failed_pages:
            logger.error("  %s", page_path)

"""Manifest entry construction for pages and their resources."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from fetcher import ResourceUnavailableError, fetch_metadata, get_last_modified
from git_utils import is_file_dirty
from logging_setup import get_logger
from path_utils import get_media_hash, is_media


Fetcher = Callable[..., httpx.Response]
DirtyChecker = Callable[[str], bool]


@dataclass
class ManifestEntry:
    path: str
    timestamp: int | None = None
    hash: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry, leaving out fields that are not set."""
        data: dict[str, Any] = {"path": self.path}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        if self.hash is not None:
            data["hash"] = self.hash
        return data


def current_time_millis() -> int:
    return int(time.time() * 1000)


def normalize_resource_path(path: str) -> str:
    """Clean up an asset or inline image path before it is requested.

    Drops surrounding whitespace, a leading '.' of relative paths
    ("./img.png" -> "/img.png") and any query string.
    """
    trimmed = path.strip()
    if trimmed.startswith("."):
        trimmed = trimmed[1:]
    return trimmed.split("?", 1)[0]


def log_unavailable(resource_path: str, page_path: str) -> None:
    get_logger().info("resource %s not available for page %s", resource_path, page_path)


def build_page_entry(
    host: str,
    page_path: str,
    is_updated: bool = False,
    fetch: Fetcher = fetch_metadata,
) -> ManifestEntry:
    """Create the entry for the page's own HTML.

    A freshly regenerated page is stamped with the current time, otherwise
    the host's last-modified header is used when there is one. A failed
    request only leaves the timestamp out.
    """
    entry_path = f"{page_path}.html"
    try:
        response = fetch(host, entry_path, method="HEAD")
    except ResourceUnavailableError as e:
        get_logger().debug("No metadata for page %s: %s", entry_path, e)
        response = None

    entry = ManifestEntry(path=entry_path)
    if is_updated:
        entry.timestamp = current_time_millis()
    else:
        entry.timestamp = get_last_modified(response)
    return entry


def build_resource_entry(
    host: str,
    parent_path: str,
    resource_path: str,
    fetch: Fetcher = fetch_metadata,
    is_dirty: DirtyChecker = is_file_dirty,
    on_unavailable: Callable[[str], None] | None = None,
) -> ManifestEntry | None:
    """Create the entry for a single page resource.

    Returns None when the host does not have the resource and there is no
    local change to it either; `on_unavailable` is told about the skip.
    Media entries are addressed under `parent_path` and carry the hash
    from their file name instead of a timestamp.
    """
    resource_path = resource_path.strip()
    response = None

    try:
        response = fetch(host, resource_path, method="HEAD")
    except ResourceUnavailableError:
        # The resource may be new and not published yet
        if not is_dirty(resource_path.removeprefix("/")):
            if on_unavailable:
                on_unavailable(resource_path)
            return None

    if is_media(resource_path):
        return ManifestEntry(
            path=f"{parent_path}{resource_path}",
            hash=get_media_hash(resource_path),
        )

    return ManifestEntry(path=resource_path, timestamp=get_last_modified(response))

"""Manifest assembly for pages, their resources and nested fragments."""

import copy
import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import httpx

from entries import (
    DirtyChecker,
    Fetcher,
    ManifestEntry,
    build_page_entry,
    build_resource_entry,
    log_unavailable,
    normalize_resource_path,
)
from fetcher import fetch_metadata
from git_utils import is_file_dirty
from logging_setup import get_logger
from path_utils import extract_media, get_parent, is_media


MANIFEST_VERSION = "3.0"
PROVIDER_NAME = "franklin"
CONTENT_DELIVERY = {
    "providers": [{"name": PROVIDER_NAME, "endpoint": "/"}],
    "defaultProvider": PROVIDER_NAME,
}

UnavailableObserver = Callable[[str, str], None]


def _parse_list(value: Any) -> list[str]:
    """Decode one resource category, falling back to an empty list."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            get_logger().debug("Ignoring malformed resource list: %r", value)
            return []
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class ResourceMetadata:
    scripts: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)
    assets: list[str] = field(default_factory=list)
    inline_images: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    fragments: list[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, data: Mapping[str, Any] | None) -> "ResourceMetadata":
        """Build metadata from a page index row.

        Each category is a JSON-encoded list of paths in the index; missing
        or unreadable categories are treated as empty.
        """
        data = data or {}
        return cls(
            scripts=_parse_list(data.get("scripts")),
            styles=_parse_list(data.get("styles")),
            assets=_parse_list(data.get("assets")),
            inline_images=_parse_list(data.get("inlineImages")),
            dependencies=_parse_list(data.get("dependencies")),
            fragments=_parse_list(data.get("fragments")),
        )

    def resource_paths(self, additional_assets: Iterable[str] = ()) -> list[str]:
        """Union of all resources to request, without duplicates.

        Assets and inline images are normalized first; the other
        categories are taken as they are.
        """
        paths = [
            *self.scripts,
            *self.styles,
            *(normalize_resource_path(p) for p in self.assets),
            *(normalize_resource_path(p) for p in self.inline_images),
            *self.dependencies,
            *additional_assets,
        ]
        return list(dict.fromkeys(paths))


@dataclass
class Manifest:
    timestamp: int
    entries: list[ManifestEntry]
    version: str = MANIFEST_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "entries": [entry.to_dict() for entry in self.entries],
            "contentDelivery": copy.deepcopy(CONTENT_DELIVERY),
        }


def create_entries(
    host: str,
    page_path: str,
    resources: Iterable[str],
    is_updated: bool = False,
    fetch: Fetcher = fetch_metadata,
    is_dirty: DirtyChecker = is_file_dirty,
    on_unavailable: UnavailableObserver = log_unavailable,
) -> tuple[list[ManifestEntry], int]:
    """Create entries for a page and each of its resources.

    Returns the entries (page entry first, then resources in order) and
    the newest timestamp among them, 0 if none has one.
    """
    parent_path = get_parent(page_path)
    page_entry = build_page_entry(host, page_path, is_updated, fetch=fetch)
    entries = [page_entry]
    last_modified = page_entry.timestamp or 0

    for resource_path in resources:
        entry = build_resource_entry(
            host,
            parent_path,
            resource_path,
            fetch=fetch,
            is_dirty=is_dirty,
            on_unavailable=lambda path: on_unavailable(path, page_path),
        )
        if entry is None:
            continue
        entries.append(entry)
        if entry.timestamp is not None:
            last_modified = max(last_modified, entry.timestamp)

    return entries, last_modified


def create_manifest(
    host: str,
    page_lookup: Mapping[str, Mapping[str, Any]],
    page_path: str,
    updated_flags: Mapping[str, bool],
    additional_assets: Iterable[str] = (),
    fetch: Fetcher = fetch_metadata,
    is_dirty: DirtyChecker = is_file_dirty,
    on_unavailable: UnavailableObserver = log_unavailable,
    _visiting: tuple[str, ...] = (),
) -> tuple[Manifest, int]:
    """Build the manifest for `page_path`, resolving fragments recursively.

    Entries are keyed by path and later writes win: page entry, then the
    page's own resources, then each fragment in order. Media coming from
    a fragment is re-addressed under the including page's parent. A
    fragment that includes itself, directly or through other fragments,
    is skipped.
    """
    logger = get_logger()
    visiting = (*_visiting, page_path)

    data = page_lookup.get(page_path)
    if data is None:
        logger.warning("No resource metadata for %s, building page entry only", page_path)
    metadata = ResourceMetadata.from_raw(data)

    entries, last_modified = create_entries(
        host,
        page_path,
        metadata.resource_paths(additional_assets),
        bool(updated_flags.get(page_path)),
        fetch=fetch,
        is_dirty=is_dirty,
        on_unavailable=on_unavailable,
    )
    all_entries = {entry.path: entry for entry in entries}

    parent_path = get_parent(page_path)
    fragments_last_modified = 0

    for fragment_path in metadata.fragments:
        if fragment_path in visiting:
            logger.warning(
                "Skipping fragment %s of %s: fragment cycle %s",
                fragment_path,
                page_path,
                " -> ".join((*visiting, fragment_path)),
            )
            continue

        logger.debug("Resolving fragment %s for %s", fragment_path, page_path)
        fragment_manifest, fragment_last_modified = create_manifest(
            host,
            page_lookup,
            fragment_path,
            updated_flags,
            [f"{fragment_path}.plain.html"],
            fetch=fetch,
            is_dirty=is_dirty,
            on_unavailable=on_unavailable,
            _visiting=visiting,
        )
        fragments_last_modified = max(fragments_last_modified, fragment_last_modified)

        for entry in fragment_manifest.entries:
            if is_media(entry.path):
                entry = replace(entry, path=f"{parent_path}{extract_media(entry.path)}")
            all_entries[entry.path] = entry

    timestamp = max(last_modified, fragments_last_modified)
    return Manifest(timestamp=timestamp, entries=list(all_entries.values())), timestamp


def _index_rows(payload: Any) -> dict[str, dict[str, Any]]:
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]
    if isinstance(payload, list):
        return {row["path"]: row for row in payload if isinstance(row, dict) and "path" in row}
    if isinstance(payload, dict):
        return {path: row for path, row in payload.items() if isinstance(row, dict)}
    return {}


def load_page_lookup(source: str, timeout: float = 30.0) -> dict[str, dict[str, Any]]:
    """Load the page index that maps page paths to their resource lists.

    `source` is either an http(s) URL or a local JSON file. The index may
    be a sheet ({"data": [{"path": ..., ...}]}), a list of rows, or a
    mapping of path to row.
    """
    if source.startswith(("http://", "https://")):
        response = httpx.get(source, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    else:
        with open(source, encoding="utf-8") as f:
            payload = json.load(f)

    return _index_rows(payload)


def write_manifest(manifest: Manifest, output_dir: Path, page_path: str) -> Path:
    """Write the manifest as `<output_dir><page_path>.manifest.json`.

    Raises ValueError for page paths that do not name a file inside
    `output_dir` (the root page "/", or paths escaping through "..").
    """
    name = page_path.strip("/")
    if not name:
        raise ValueError(f"page path {page_path!r} has no name to write a manifest under")

    root = output_dir.resolve()
    out_path = (root / f"{name}.manifest.json").resolve()
    if not out_path.is_relative_to(root):
        raise ValueError(f"page path {page_path!r} resolves outside {root}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
    return out_path

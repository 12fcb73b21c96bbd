"""Shared fixtures for page-manifest tests."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from fetcher import ResourceUnavailableError


HOST = "https://main--site--org.example.page"


class FakeFetcher:
    """Stands in for fetch_metadata.

    `resources` maps a path to its last-modified header, or None for a
    resource that exists without one. Unknown paths are unavailable.
    """

    def __init__(self, resources: dict[str, str | None]):
        self.resources = resources
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, host: str, path: str, method: str = "HEAD") -> httpx.Response:
        self.calls.append((host, path, method))
        if path not in self.resources:
            raise ResourceUnavailableError(host, path, "HTTP 404")
        headers = {}
        if self.resources[path] is not None:
            headers["last-modified"] = self.resources[path]
        return httpx.Response(200, headers=headers)


@pytest.fixture
def fetcher_factory():
    return FakeFetcher


@pytest.fixture
def page_row():
    """Builds a page index row with JSON-encoded categories."""
    def _row(path: str, **categories: list[str]) -> dict:
        row = {"path": path}
        for name, values in categories.items():
            row[name] = json.dumps(values)
        return row
    return _row


@pytest.fixture
def sample_config(tmp_path):
    """Pre-configured Config instance for testing."""
    return Config(
        host=HOST,
        pages_source=str(tmp_path / "pages.json"),
        output_dir=tmp_path / "manifests",
        repo_root=tmp_path,
        request_timeout=10.0,
        updated_pages=["/content/screens/channel"],
    )


@pytest.fixture
def config_toml_content():
    """Sample config.toml content."""
    return """
host = "https://custom.example.com/"
pages_source = "https://custom.example.com/pages.json"
output_dir = "/tmp/custom-manifests"
request_timeout = 5
updated_pages = ["/content/a", "/content/b"]
"""

"""Configuration loading and validation for page-manifest."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "host": "http://localhost:3000",
    "pages_source": "./pages.json",
    "output_dir": "./manifests",
    "repo_root": ".",
    "request_timeout": 30.0,
    "updated_pages": [],
}


@dataclass
class Config:
    host: str
    pages_source: str
    output_dir: Path
    repo_root: Path
    request_timeout: float
    updated_pages: list[str] = field(default_factory=list)

    @property
    def updated_flags(self) -> dict[str, bool]:
        """Pages that were just regenerated, keyed by page path."""
        return {path: True for path in self.updated_pages}

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        host_override: str | None = None,
        pages_source_override: str | None = None,
        output_dir_override: str | None = None,
        updated_pages_override: list[str] | None = None,
    ) -> "Config":
        """Load configuration from TOML file with defaults."""
        config_data = dict(DEFAULTS)

        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "rb") as f:
                file_config = tomllib.load(f)
                config_data.update(file_config)

        if host_override:
            config_data["host"] = host_override
        if pages_source_override:
            config_data["pages_source"] = pages_source_override
        if output_dir_override:
            config_data["output_dir"] = output_dir_override
        if updated_pages_override:
            config_data["updated_pages"] = updated_pages_override

        return cls(
            host=config_data["host"].rstrip("/"),
            pages_source=str(config_data["pages_source"]),
            output_dir=Path(config_data["output_dir"]).expanduser().resolve(),
            repo_root=Path(config_data["repo_root"]).expanduser().resolve(),
            request_timeout=float(config_data["request_timeout"]),
            updated_pages=list(config_data["updated_pages"]),
        )

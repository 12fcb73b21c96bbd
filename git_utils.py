"""Local source-control checks used when the host has no copy of a resource."""

import subprocess
from pathlib import Path

from logging_setup import get_logger


def is_file_dirty(relative_path: str, repo_root: Path | None = None) -> bool:
    """Check whether a file has uncommitted changes in the local checkout.

    Modified, staged and untracked files all count as dirty: they exist
    locally even though the host may not serve them yet. Returns False
    when git cannot answer (not a repository, git not installed).
    """
    cmd = ["git", "status", "--porcelain", "--", relative_path]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=repo_root,
        )
    except OSError as e:
        get_logger().debug("git status failed for %s: %s", relative_path, e)
        return False

    if result.returncode != 0:
        get_logger().debug(
            "git status exited with %d for %s: %s",
            result.returncode,
            relative_path,
            result.stderr.strip(),
        )
        return False

    return bool(result.stdout.strip())

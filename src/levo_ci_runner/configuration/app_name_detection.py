"""Application name auto-detection for CI runs."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

FALLBACK_APP_NAME = "default-app"
REPOSITORY_SLUG_VARIABLE = "GITHUB_REPOSITORY"
REPOSITORY_NAME_VARIABLE = "BUILD_REPOSITORY_NAME"


def detect_app_name(environ: Mapping[str, str], working_dir: Path) -> str:
    """Pick the app name from CI variables, the git root, or a fallback."""
    slug = environ.get(REPOSITORY_SLUG_VARIABLE, "").strip().strip("/")
    if slug:
        return slug.rsplit("/", 1)[-1]
    repository_name = environ.get(REPOSITORY_NAME_VARIABLE, "").strip()
    if repository_name:
        return repository_name
    git_root = find_git_root(working_dir)
    if git_root is not None and git_root.name:
        return git_root.name
    return FALLBACK_APP_NAME


def find_git_root(start: Path) -> Path | None:
    """Return the nearest directory at or above `start` holding `.git`."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None

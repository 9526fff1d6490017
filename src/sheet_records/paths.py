"""Repo-root-relative file resolution for config, logging.ini and tokens."""

from __future__ import annotations

import os
from pathlib import Path

ROOT_ENV_VAR = "SHEET_RECORDS_ROOT"


def find_repo_root(start: Path | None = None) -> Path:
    current = (start or Path(__file__).resolve()).resolve()
    if current.is_file():
        current = current.parent

    for candidate in [current, *current.parents]:
        if (candidate / "pyproject.toml").is_file() or (candidate / ".git").exists():
            return candidate
    raise RuntimeError(f"Unable to determine repository root from {current}")


def repo_root() -> Path:
    override = os.getenv(ROOT_ENV_VAR)
    if override:
        return Path(override).resolve()
    return find_repo_root(Path(__file__).resolve())


def repo_file(*parts: str) -> Path:
    return repo_root().joinpath(*parts)


def resolve_path(value: str | Path) -> Path:
    """Absolute paths pass through; relative ones are taken from the repo root."""
    path = Path(value).expanduser()
    return path if path.is_absolute() else repo_file(str(path))

"""Filesystem helpers."""

from pathlib import Path


def get_project_root() -> Path:
    """Return the repository root (the directory holding pyproject.toml)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return Path.cwd()


__all__ = ["get_project_root"]

"""Path utilities centralising cache layout decisions."""

from __future__ import annotations

from pathlib import Path


def cache_root_from_config(directory: str | Path) -> Path:
    """Return the resolved cache directory."""
    return Path(directory).expanduser().resolve()


__all__ = ["cache_root_from_config"]

"""Key/value backends for the contribution cache."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from contribgrid.config.models import CacheConfig
from contribgrid.util.paths import cache_root_from_config


@runtime_checkable
class KeyValueStore(Protocol):
    """Byte-oriented persistent store addressed by string keys.

    Implementations may raise ``OSError`` (or any other exception) on storage
    faults; callers decide how to recover.
    """

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes for ``key`` or ``None`` when absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        ...


class MemoryStore:
    """Process-local store, mainly for tests and ``backend: memory``."""

    def __init__(self) -> None:
        self._items: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._items.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._items[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


class FileStore:
    """One file per key under ``root``, written atomically via a temp file."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        dest = self.path_for(key)
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = dest.with_suffix(dest.suffix + ".tmp")
        tmp_path.write_bytes(value)
        tmp_path.replace(dest)

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


def build_store(config: CacheConfig) -> KeyValueStore:
    """Instantiate the backend selected by ``cache.backend``."""
    if config.backend == "memory":
        return MemoryStore()
    return FileStore(cache_root_from_config(config.directory))


__all__ = ["FileStore", "KeyValueStore", "MemoryStore", "build_store"]

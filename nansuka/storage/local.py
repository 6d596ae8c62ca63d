"""
Local storage implementations.

Filesystem-backed stores keep one small JSON document per key so a write
never rewrites the whole cache. In-memory stores are for tests and
throwaway sessions.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from nansuka.storage.base import (
    CacheStorage,
    KeyValueStore,
    Namespaces,
    StorageProvider,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Filesystem Key-Value Store
# =============================================================================


class FileKeyValueStore(KeyValueStore):
    """Store each key as a JSON file under `base_path`."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def _key_to_path(self, key: str) -> Path:
        return self.base_path / f"{quote(key, safe='-_.')}.json"

    def set(self, key: str, value: Any) -> None:
        # Directory is created on first write; reads of a missing dir are misses
        self.base_path.mkdir(parents=True, exist_ok=True)
        path = self._key_to_path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps({"value": value}, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(path)

    def get(self, key: str) -> Any | None:
        path = self._key_to_path(key)
        if not path.exists():
            return None
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict) or "value" not in payload:
            logger.warning(f"Ignoring malformed entry for {key}")
            return None
        return payload["value"]

    def delete(self, key: str) -> bool:
        path = self._key_to_path(key)
        if path.exists():
            path.unlink()
            return True
        return False

    def exists(self, key: str) -> bool:
        return self._key_to_path(key).exists()

    def clear(self) -> None:
        if not self.base_path.exists():
            return
        for path in self.base_path.glob("*.json"):
            path.unlink()

    def keys(self) -> list[str]:
        if not self.base_path.exists():
            return []
        return sorted(unquote(path.stem) for path in self.base_path.glob("*.json"))


class LocalCacheStorage(CacheStorage):
    """Async facade over FileKeyValueStore; file I/O runs in a worker thread."""

    def __init__(self, base_path: str | Path):
        self._store = FileKeyValueStore(base_path)

    @property
    def base_path(self) -> Path:
        return self._store.base_path

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._store.set, key, value)

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._store.get, key)

    async def delete(self, key: str) -> bool:
        return await asyncio.to_thread(self._store.delete, key)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._store.exists, key)

    async def clear(self) -> None:
        await asyncio.to_thread(self._store.clear)


# =============================================================================
# In-Memory Stores
# =============================================================================


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for development."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False

    def exists(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        self._data.clear()


class InMemoryCacheStorage(CacheStorage):
    """In-memory async cache for development."""

    def __init__(self):
        self._cache: dict[str, Any] = {}

    async def set(self, key: str, value: Any) -> None:
        self._cache[key] = value

    async def get(self, key: str) -> Any | None:
        return self._cache.get(key)

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    async def exists(self, key: str) -> bool:
        return key in self._cache

    async def clear(self) -> None:
        self._cache.clear()


# =============================================================================
# Factories
# =============================================================================


def create_local_storage(data_dir: str | Path = "./data") -> StorageProvider:
    """Create a StorageProvider persisting under `data_dir`."""
    root = Path(data_dir)
    return StorageProvider(
        translations=LocalCacheStorage(root / Namespaces.TRANSLATIONS),
        contexts=FileKeyValueStore(root / Namespaces.CONTEXTS),
        settings=FileKeyValueStore(root / Namespaces.SETTINGS),
    )


def create_memory_storage() -> StorageProvider:
    """Create a StorageProvider that forgets everything on exit."""
    return StorageProvider(
        translations=InMemoryCacheStorage(),
        contexts=InMemoryKeyValueStore(),
        settings=InMemoryKeyValueStore(),
    )

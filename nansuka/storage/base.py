"""
Storage abstraction layer.

All persistence goes through these interfaces so the caches and the
settings store never know whether they sit on the local filesystem or in
memory.

Two flavours exist because callers differ: translation lookups happen
between network calls and are awaited, while context and settings reads
happen inline and must be synchronous.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


# =============================================================================
# Storage Interfaces
# =============================================================================


class CacheStorage(ABC):
    """
    Asynchronous durable key-value store.

    Local Implementation: one JSON file per key
    Dev/Test Implementation: in-memory dict
    """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Set a value, overwriting any previous one."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key."""
        pass


class KeyValueStore(ABC):
    """
    Synchronous durable key-value store.

    Same contract as CacheStorage, for callers that cannot suspend.
    """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def get(self, key: str) -> Any | None:
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for all storage backends.

    Initialize once at startup and hand to the caches and session. Stores
    open lazily on first use and need no explicit close.
    """

    model_config = {"arbitrary_types_allowed": True}

    translations: CacheStorage
    contexts: KeyValueStore
    settings: KeyValueStore


# =============================================================================
# Namespaces
# =============================================================================


class Namespaces:
    """Directory names under the data dir."""

    TRANSLATIONS = "translations"
    CONTEXTS = "contexts"
    SETTINGS = "settings"

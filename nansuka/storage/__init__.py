"""
Storage abstractions.

- CacheStorage → async durable store (paragraph translations)
- KeyValueStore → sync durable store (context summaries, settings)
"""

from nansuka.storage.base import (
    CacheStorage,
    KeyValueStore,
    StorageProvider,
    Namespaces,
)
from nansuka.storage.local import (
    FileKeyValueStore,
    LocalCacheStorage,
    InMemoryKeyValueStore,
    InMemoryCacheStorage,
    create_local_storage,
    create_memory_storage,
)
from nansuka.storage.settings import SettingsStore

__all__ = [
    "CacheStorage",
    "KeyValueStore",
    "StorageProvider",
    "Namespaces",
    "FileKeyValueStore",
    "LocalCacheStorage",
    "InMemoryKeyValueStore",
    "InMemoryCacheStorage",
    "create_local_storage",
    "create_memory_storage",
    "SettingsStore",
]

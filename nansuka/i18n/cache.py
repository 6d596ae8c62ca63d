"""
Translation and context caches.

Both are best-effort: a storage failure is logged and treated as a miss
(reads) or a no-op (writes). Callers never see storage errors, so the
assistant degrades to "no cache" instead of failing a translation.
"""

from __future__ import annotations

import logging

from nansuka.core.text import fingerprint
from nansuka.storage.base import CacheStorage, KeyValueStore

logger = logging.getLogger(__name__)


# =============================================================================
# Translation Cache
# =============================================================================


class TranslationCache:
    """
    Paragraph fingerprint → translated text.

    Entries never expire; later writes overwrite earlier ones.
    """

    def __init__(self, storage: CacheStorage):
        self._storage = storage

    async def get(self, key: str) -> str | None:
        """Get a cached translation by paragraph fingerprint."""
        try:
            cached = await self._storage.get(key)
        except Exception as e:
            logger.warning(f"Translation cache read failed for {key}: {e}")
            return None
        return cached if isinstance(cached, str) else None

    async def put(self, key: str, translation: str) -> None:
        """Cache a translation under a paragraph fingerprint."""
        try:
            await self._storage.set(key, translation)
        except Exception as e:
            logger.warning(f"Translation cache write failed for {key}: {e}")

    async def clear(self) -> None:
        """Drop every cached translation."""
        try:
            await self._storage.clear()
        except Exception as e:
            logger.warning(f"Translation cache clear failed: {e}")


# =============================================================================
# Context Cache
# =============================================================================


class ContextCache:
    """Fingerprint of the whole input text → context summary."""

    KEY_PREFIX = "context:"

    def __init__(self, store: KeyValueStore):
        self._store = store

    def key_for(self, text: str) -> str:
        return self.KEY_PREFIX + fingerprint(text)

    def get(self, text: str) -> str | None:
        """Get the cached summary for this exact input."""
        try:
            cached = self._store.get(self.key_for(text))
        except Exception as e:
            logger.warning(f"Context cache read failed: {e}")
            return None
        return cached if isinstance(cached, str) else None

    def put(self, text: str, summary: str) -> None:
        try:
            self._store.set(self.key_for(text), summary)
        except Exception as e:
            logger.warning(f"Context cache write failed: {e}")

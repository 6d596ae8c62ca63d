"""
Internationalization - languages and the local translation caches.

Design:
1. Cache paragraph translations by content fingerprint
2. Cache context summaries by fingerprint of the whole input
3. Never let a storage failure break a translation

Usage:
    from nansuka.i18n import TranslationCache, ContextCache

    cache = TranslationCache(storage.translations)
    await cache.put(fingerprint(text), translated)
    cached = await cache.get(fingerprint(text))
"""

from nansuka.i18n.cache import TranslationCache, ContextCache
from nansuka.i18n.languages import (
    Language,
    LANGUAGE_CODES,
    normalize_language,
    get_language_by_name,
)

__all__ = [
    "TranslationCache",
    "ContextCache",
    "Language",
    "LANGUAGE_CODES",
    "normalize_language",
    "get_language_by_name",
]

"""Shared test fixtures for nansuka tests."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from nansuka.core.models import ParagraphInput, ParagraphResult
from nansuka.core.scheduling import CancellationToken, VirtualScheduler
from nansuka.i18n.cache import ContextCache, TranslationCache
from nansuka.services.backend import TranslationBackend
from nansuka.storage import (
    CacheStorage,
    InMemoryCacheStorage,
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageProvider,
    create_memory_storage,
)


# =============================================================================
# Fakes
# =============================================================================


class FakeBackend(TranslationBackend):
    """
    Records calls and answers `<text>#<call number>`.

    `hold()` makes the next translate call wait until the returned event
    is set, so tests can interleave batches.
    """

    def __init__(self):
        self.calls: list[tuple[list[ParagraphInput], str]] = []
        self.summary_calls: list[str] = []
        self.fail: Exception | None = None
        self.summary_fail: Exception | None = None
        self.summary = "A short summary."
        self._holds: list[asyncio.Event] = []
        self._summary_holds: list[asyncio.Event] = []

    def hold(self) -> asyncio.Event:
        event = asyncio.Event()
        self._holds.append(event)
        return event

    def hold_summary(self) -> asyncio.Event:
        event = asyncio.Event()
        self._summary_holds.append(event)
        return event

    async def translate_batch(
        self,
        paragraphs: list[ParagraphInput],
        context: str = "",
        token: CancellationToken | None = None,
    ) -> list[ParagraphResult]:
        self.calls.append((list(paragraphs), context))
        number = len(self.calls)
        if self._holds:
            await self._holds.pop(0).wait()
        if self.fail:
            raise self.fail
        return [ParagraphResult(index=p.index, translated=f"{p.text}#{number}") for p in paragraphs]

    async def summarize(self, text: str, token: CancellationToken | None = None) -> str:
        self.summary_calls.append(text)
        if self._summary_holds:
            await self._summary_holds.pop(0).wait()
        if self.summary_fail:
            raise self.summary_fail
        return self.summary


class BrokenCacheStorage(CacheStorage):
    """Every operation fails like a full or disabled disk."""

    async def set(self, key: str, value: Any) -> None:
        raise OSError("quota exceeded")

    async def get(self, key: str) -> Any | None:
        raise OSError("storage disabled")

    async def delete(self, key: str) -> bool:
        raise OSError("storage disabled")

    async def exists(self, key: str) -> bool:
        raise OSError("storage disabled")

    async def clear(self) -> None:
        raise OSError("storage disabled")


class BrokenKeyValueStore(KeyValueStore):
    def set(self, key: str, value: Any) -> None:
        raise OSError("quota exceeded")

    def get(self, key: str) -> Any | None:
        raise OSError("storage disabled")

    def delete(self, key: str) -> bool:
        raise OSError("storage disabled")

    def exists(self, key: str) -> bool:
        raise OSError("storage disabled")

    def clear(self) -> None:
        raise OSError("storage disabled")


async def wait_until(predicate: Callable[[], bool], steps: int = 100) -> None:
    """Yield to the event loop until `predicate` holds."""
    for _ in range(steps):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def storage() -> StorageProvider:
    return create_memory_storage()


@pytest.fixture
def translation_cache() -> TranslationCache:
    return TranslationCache(InMemoryCacheStorage())


@pytest.fixture
def context_cache() -> ContextCache:
    return ContextCache(InMemoryKeyValueStore())

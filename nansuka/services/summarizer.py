"""
Background context summaries.

A one-sentence synopsis of the whole input is threaded into translation
batches to keep terminology and tone consistent. It runs on its own,
longer debounce and is not ordered against translation batches; a batch
may go out with a stale or empty context.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from nansuka.core.scheduling import (
    CancellationToken,
    Debouncer,
    LoopScheduler,
    RequestCancelled,
    Scheduler,
)
from nansuka.i18n.cache import ContextCache
from nansuka.services.backend import CONTEXT_FAILED, TranslationBackend

logger = logging.getLogger(__name__)


ContextListener = Callable[[str], None]


class ContextSummarizer:
    """
    Keeps `context` up to date with the input.

    With auto-generation off, whatever context was last set by hand is
    kept verbatim.
    """

    def __init__(
        self,
        backend: TranslationBackend,
        cache: ContextCache,
        scheduler: Scheduler | None = None,
        debounce_ms: int = 5000,
        auto_generate: bool = True,
        context: str = "",
    ):
        self.backend = backend
        self.cache = cache
        self.scheduler = scheduler or LoopScheduler()
        self.auto_generate = auto_generate

        self.context = context
        self.error = ""

        self._input = ""
        self._debouncer = Debouncer(self.scheduler, debounce_ms / 1000, self._on_settled)
        self._token: CancellationToken | None = None
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[ContextListener] = []

    def subscribe(self, listener: ContextListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def set_input(self, text: str) -> None:
        changed = text != self._input
        self._input = text
        self._debouncer.cancel()

        # A summary of the previous input must not be published
        if changed:
            self._cancel_request()

        if not self.auto_generate:
            return

        if not text.strip():
            self._cancel_request()
            self._publish("")
            return

        self._debouncer.trigger(text)

    def set_context(self, text: str) -> None:
        """Set the context by hand."""
        self._publish(text)

    def set_auto_generate(self, enabled: bool) -> None:
        self.auto_generate = enabled
        if enabled:
            self.set_input(self._input)
        else:
            self.cancel()

    def cancel(self) -> None:
        self._debouncer.cancel()
        self._cancel_request()

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def summarize(self, text: str) -> str | None:
        """
        Get the summary for `text`, from the cache or the backend.

        Returns None when the request was superseded or failed.
        """
        cached = self.cache.get(text)
        if cached:
            self._publish(cached)
            return cached

        self._cancel_request()
        token = CancellationToken()
        self._token = token

        try:
            summary = await self.backend.summarize(text, token)
        except RequestCancelled:
            return None
        except Exception as e:
            if token.cancelled:
                return None
            logger.warning(f"Context generation failed: {e}")
            self._token = None
            self.error = CONTEXT_FAILED
            self._notify()
            return None

        if token.cancelled:
            return None

        self._token = None
        self.error = ""
        self.cache.put(text, summary)
        self._publish(summary)
        return summary

    # =========================================================================
    # Internals
    # =========================================================================

    def _on_settled(self, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self.summarize(text))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Context summary crashed", exc_info=task.exception())

    def _cancel_request(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def _publish(self, context: str) -> None:
        self.context = context
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.context)

"""
Incremental paragraph translation.

The orchestrator keeps the rendered paragraph list in step with the
input. After each debounce it re-splits the text, reuses every paragraph
whose fingerprint it already knows, fills the rest from the translation
cache and sends whatever is still missing to the backend as one batch.

Only the latest batch is authoritative: dispatching a new one cancels
the previous batch's result handling.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from nansuka.core.models import Paragraph, ParagraphInput
from nansuka.core.scheduling import (
    CancellationToken,
    Debouncer,
    LoopScheduler,
    RequestCancelled,
    Scheduler,
)
from nansuka.core.text import fingerprint, split_into_paragraphs
from nansuka.i18n.cache import TranslationCache
from nansuka.services.backend import TRANSLATION_FAILED, BackendError, TranslationBackend

logger = logging.getLogger(__name__)


ParagraphListener = Callable[[list[Paragraph]], None]


class TranslationOrchestrator:
    """
    Reconciles the paragraph list against previous state and the cache.

    Usage:
        orchestrator = TranslationOrchestrator(backend, cache, context=lambda: summary)
        orchestrator.subscribe(render)

        orchestrator.set_input(text)      # debounced
        await orchestrator.refresh(text)  # or run one cycle directly
    """

    def __init__(
        self,
        backend: TranslationBackend,
        cache: TranslationCache,
        scheduler: Scheduler | None = None,
        context: Callable[[], str] | None = None,
        debounce_ms: int = 1000,
    ):
        self.backend = backend
        self.cache = cache
        self.scheduler = scheduler or LoopScheduler()
        self._context = context or (lambda: "")

        self.paragraphs: list[Paragraph] = []
        self.error = ""

        self._debouncer = Debouncer(self.scheduler, debounce_ms / 1000, self._on_settled)
        self._generation = 0
        self._token: CancellationToken | None = None
        self._batch_keys: set[str] = set()
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[ParagraphListener] = []

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def is_translating(self) -> bool:
        return any(p.pending for p in self.paragraphs)

    @property
    def settled(self) -> bool:
        """No debounce armed, no cycle running, nothing in flight."""
        return not self._debouncer.pending and not self._tasks and not self.is_translating

    def subscribe(self, listener: ParagraphListener) -> Callable[[], None]:
        """Register a listener called after every state change."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def set_input(self, text: str) -> None:
        """Record an edit. Only the latest input is processed once edits stop."""
        self._debouncer.trigger(text)

    def cancel(self) -> None:
        """Drop the armed debounce and stop honouring the in-flight batch."""
        self._debouncer.cancel()
        self._release_batch()
        self._notify()

    async def wait_idle(self) -> None:
        """Wait for every running cycle, including their network calls."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def refresh(self, text: str) -> None:
        """
        Run one full cycle for `text`: split, reconcile, dispatch, merge.

        A refresh overtaken by a newer one while waiting on the cache is
        abandoned before it publishes anything.
        """
        self._generation += 1
        generation = self._generation
        self.error = ""

        texts = split_into_paragraphs(text)
        keys = [fingerprint(t) for t in texts]
        previous = {p.fingerprint: p for p in self.paragraphs}

        missing = list(dict.fromkeys(k for k in keys if k not in previous))
        cached = await asyncio.gather(*(self.cache.get(k) for k in missing))
        found = dict(zip(missing, cached))

        if generation != self._generation:
            logger.debug("Refresh superseded during cache lookup")
            return

        updated: list[Paragraph] = []
        for key, paragraph_text in zip(keys, texts):
            if key in previous:
                updated.append(previous[key])
            else:
                updated.append(Paragraph(
                    text=paragraph_text,
                    fingerprint=key,
                    translated_text=found.get(key) or "",
                ))

        self.paragraphs = updated
        self._notify()

        if not any(p.needs_translation for p in updated):
            return

        # A new batch supersedes the live one, so its members go back in the pool
        self._release_batch()
        batch = [
            ParagraphInput(index=i, text=p.text)
            for i, p in enumerate(self.paragraphs)
            if p.needs_translation
        ]
        await self.translate_batch(batch, self._context())

    async def translate_batch(self, batch: list[ParagraphInput], context: str = "") -> None:
        """
        Dispatch one batch and merge its results.

        Results are matched back by the fingerprint each entry was sent
        with, so they land on the right paragraph even if the list has
        shifted while the request was in flight.
        """
        if not batch:
            return

        self._release_batch()
        token = CancellationToken()
        self._token = token

        dispatched = {item.index: fingerprint(item.text) for item in batch}
        keys = set(dispatched.values())
        self._batch_keys = keys
        self._set_pending(keys, True)
        self._notify()

        logger.info(f"Translating {len(batch)} paragraph(s)")

        try:
            results = await self.backend.translate_batch(batch, context, token)
        except RequestCancelled:
            return
        except Exception as e:
            if token.cancelled:
                return
            logger.error(f"Batch translation failed: {e}")
            self.error = e.message if isinstance(e, BackendError) else TRANSLATION_FAILED
            self._finish_batch(token)
            self._notify()
            return

        if token.cancelled:
            logger.debug("Discarding results of a superseded batch")
            return

        translations = {
            dispatched[r.index]: r.translated
            for r in results
            if r.index in dispatched
        }
        for paragraph in self.paragraphs:
            if paragraph.fingerprint in translations:
                paragraph.translated_text = translations[paragraph.fingerprint]
        self._finish_batch(token)

        for key, translated in translations.items():
            await self.cache.put(key, translated)

        self._notify()

    # =========================================================================
    # Internals
    # =========================================================================

    def _on_settled(self, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self.refresh(text))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Translation cycle crashed", exc_info=task.exception())

    def _set_pending(self, keys: set[str], pending: bool) -> None:
        for paragraph in self.paragraphs:
            if paragraph.fingerprint in keys:
                paragraph.pending = pending

    def _release_batch(self) -> None:
        """Cancel the live batch's result handling and clear its pending marks."""
        if self._token is not None:
            self._token.cancel()
            self._token = None
        self._set_pending(self._batch_keys, False)
        self._batch_keys = set()

    def _finish_batch(self, token: CancellationToken) -> None:
        if self._token is token:
            self._set_pending(self._batch_keys, False)
            self._token = None
            self._batch_keys = set()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.paragraphs)

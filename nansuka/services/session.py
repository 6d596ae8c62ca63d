"""
A translation session: one input box with its translations and context.

Wires the orchestrator and the summarizer to the caches and persists the
user's input, context and auto-context preference between runs.
"""

from __future__ import annotations

import logging

from nansuka.config import Settings
from nansuka.core.models import Paragraph
from nansuka.core.scheduling import Scheduler
from nansuka.i18n.cache import ContextCache, TranslationCache
from nansuka.services.backend import TranslationBackend, TranslationBackendClient
from nansuka.services.orchestrator import TranslationOrchestrator
from nansuka.services.summarizer import ContextSummarizer
from nansuka.storage import SettingsStore, StorageProvider, create_local_storage

logger = logging.getLogger(__name__)


class TranslationSession:
    """
    Usage:
        session = TranslationSession.from_settings(get_settings())
        session.open()
        session.set_input("Hello world\\n\\nこんにちは")
        await session.wait_idle()
        for p in session.paragraphs:
            print(p.text, "->", p.translated_text)
        await session.close()
    """

    def __init__(
        self,
        backend: TranslationBackend,
        storage: StorageProvider,
        scheduler: Scheduler | None = None,
        translate_debounce_ms: int = 1000,
        context_debounce_ms: int = 5000,
    ):
        self.backend = backend
        self.storage = storage
        self.settings_store = SettingsStore(storage.settings)
        self.translation_cache = TranslationCache(storage.translations)
        self.context_cache = ContextCache(storage.contexts)

        self.summarizer = ContextSummarizer(
            backend,
            self.context_cache,
            scheduler=scheduler,
            debounce_ms=context_debounce_ms,
        )
        self.orchestrator = TranslationOrchestrator(
            backend,
            self.translation_cache,
            scheduler=scheduler,
            context=lambda: self.summarizer.context,
            debounce_ms=translate_debounce_ms,
        )
        self.summarizer.subscribe(self.settings_store.save_context)

        self.input_text = ""

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        backend: TranslationBackend | None = None,
        storage: StorageProvider | None = None,
    ) -> TranslationSession:
        """Build a session against the configured proxy and data dir."""
        backend = backend or TranslationBackendClient(
            settings.proxy_url,
            timeout=settings.request_timeout,
            default_target=settings.default_target_language,
            alternate_target=settings.alternate_target_language,
        )
        return cls(
            backend,
            storage or create_local_storage(settings.data_dir),
            translate_debounce_ms=settings.translate_debounce_ms,
            context_debounce_ms=settings.context_debounce_ms,
        )

    # =========================================================================
    # State
    # =========================================================================

    @property
    def paragraphs(self) -> list[Paragraph]:
        return self.orchestrator.paragraphs

    @property
    def context(self) -> str:
        return self.summarizer.context

    @property
    def auto_context(self) -> bool:
        return self.summarizer.auto_generate

    @property
    def error(self) -> str:
        """The single page-level error, translation failures first."""
        return self.orchestrator.error or self.summarizer.error

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> None:
        """Restore persisted settings and start processing restored input."""
        saved = self.settings_store.load()
        self.summarizer.auto_generate = saved.auto_context
        self.summarizer.set_context(saved.context_text)
        self.input_text = saved.input_text

        if self.input_text:
            logger.info("Restoring saved input")
            self.orchestrator.set_input(self.input_text)
            self.summarizer.set_input(self.input_text)

    async def wait_idle(self) -> None:
        await self.orchestrator.wait_idle()
        await self.summarizer.wait_idle()

    async def close(self) -> None:
        self.orchestrator.cancel()
        self.summarizer.cancel()
        aclose = getattr(self.backend, "aclose", None)
        if aclose is not None:
            await aclose()

    # =========================================================================
    # Edits
    # =========================================================================

    def set_input(self, text: str) -> None:
        self.input_text = text
        self.settings_store.save_input(text)
        self.orchestrator.set_input(text)
        self.summarizer.set_input(text)

    def set_context(self, text: str) -> None:
        self.summarizer.set_context(text)

    def set_auto_context(self, enabled: bool) -> None:
        self.settings_store.save_auto_context(enabled)
        self.summarizer.set_auto_generate(enabled)

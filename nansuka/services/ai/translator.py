"""
LLMTranslator - provider-side translation used by the edge proxy.

Wraps the DSPy signatures behind async methods. DSPy calls block, so
they run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging

import dspy

from nansuka.config import Settings
from nansuka.core.models import TranslateParagraph
from nansuka.i18n.languages import normalize_language
from nansuka.services.ai.client import lm_for
from nansuka.services.ai.signatures import SummarizeForContext, TranslateParagraphs

logger = logging.getLogger(__name__)


STRUCTURED_RESPONSE_FAILED = "Failed to get structured response"


class UpstreamError(Exception):
    """The LLM provider failed; carries the provider's status when known."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def format_paragraphs(paragraphs: list[TranslateParagraph]) -> str:
    """Render paragraphs as `[i] (to <lang>)` blocks separated by rules."""
    return "\n\n---\n\n".join(
        f"[{i}] (to {normalize_language(p.target_language)})\n{p.text}"
        for i, p in enumerate(paragraphs)
    )


def _status_of(error: Exception) -> int:
    status = getattr(error, "status_code", None)
    if isinstance(status, int) and 400 <= status < 600:
        return status
    return 500


class LLMTranslator:
    """
    Usage:
        translator = LLMTranslator(get_settings())
        translations = await translator.translate(paragraphs, context="a letter")
        summary = await translator.summarize(text)
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._translate = dspy.Predict(TranslateParagraphs)
        self._summarize = dspy.Predict(SummarizeForContext)

    async def translate(
        self,
        paragraphs: list[TranslateParagraph],
        context: str | None = None,
    ) -> list[str]:
        """
        Translate every paragraph into its own target language.

        Returns translations in input order, one per paragraph.
        """
        try:
            lm = lm_for(self.settings, self.settings.translate_max_tokens)
            result = await asyncio.to_thread(
                self._translate,
                paragraphs=format_paragraphs(paragraphs),
                context=context or "",
                lm=lm,
            )
        except Exception as e:
            logger.error(f"Upstream translation failed: {e}")
            raise UpstreamError(str(e), status_code=_status_of(e)) from e

        translations = result.translations
        if not isinstance(translations, list) or len(translations) != len(paragraphs):
            raise UpstreamError(STRUCTURED_RESPONSE_FAILED)
        return [str(t).strip() for t in translations]

    async def summarize(self, text: str) -> str:
        """Summarize text in one short sentence."""
        try:
            lm = lm_for(self.settings, self.settings.context_max_tokens)
            result = await asyncio.to_thread(self._summarize, text=text, lm=lm)
        except Exception as e:
            logger.error(f"Upstream summary failed: {e}")
            raise UpstreamError(str(e), status_code=_status_of(e)) from e

        if not isinstance(result.context, str):
            raise UpstreamError(STRUCTURED_RESPONSE_FAILED)
        return result.context.strip()

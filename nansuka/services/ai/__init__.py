"""
AI services using DSPy.

Used only by the edge proxy, which holds the provider credential.
"""

from nansuka.services.ai.client import get_lm, lm_for
from nansuka.services.ai.signatures import TranslateParagraphs, SummarizeForContext
from nansuka.services.ai.translator import (
    LLMTranslator,
    UpstreamError,
    format_paragraphs,
)

__all__ = [
    "get_lm",
    "lm_for",
    "TranslateParagraphs",
    "SummarizeForContext",
    "LLMTranslator",
    "UpstreamError",
    "format_paragraphs",
]

"""
Client-side services.

- backend: HTTP client for the edge proxy
- orchestrator: incremental paragraph translation
- summarizer: background context summaries
- session: wires both to storage and persisted settings
"""

from nansuka.services.backend import (
    BackendError,
    TranslationBackend,
    TranslationBackendClient,
)
from nansuka.services.orchestrator import TranslationOrchestrator
from nansuka.services.summarizer import ContextSummarizer
from nansuka.services.session import TranslationSession

__all__ = [
    "BackendError",
    "TranslationBackend",
    "TranslationBackendClient",
    "TranslationOrchestrator",
    "ContextSummarizer",
    "TranslationSession",
]

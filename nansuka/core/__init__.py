"""
Core module - data models, text utilities and scheduling primitives.

This module contains:
- models: Paragraph state, user settings and wire models
- text: paragraph splitting, fingerprints, script detection
- scheduling: schedulers, debouncing and cancellation tokens
- actions: hand-off URLs for external AI chats
"""

from nansuka.core.models import (
    Paragraph,
    ParagraphInput,
    ParagraphResult,
    UserSettings,
    TranslateParagraph,
    TranslateRequest,
    TranslateResponse,
    ContextRequest,
    ContextResponse,
)

from nansuka.core.text import (
    split_into_paragraphs,
    join_paragraphs,
    fingerprint,
    is_japanese,
    infer_target_language,
)

from nansuka.core.scheduling import (
    Scheduler,
    ScheduledCall,
    LoopScheduler,
    VirtualScheduler,
    Debouncer,
    CancellationToken,
    RequestCancelled,
)

from nansuka.core.actions import AiAction, AI_ACTIONS, build_action_url, get_action

__all__ = [
    # Models
    "Paragraph",
    "ParagraphInput",
    "ParagraphResult",
    "UserSettings",
    "TranslateParagraph",
    "TranslateRequest",
    "TranslateResponse",
    "ContextRequest",
    "ContextResponse",
    # Text
    "split_into_paragraphs",
    "join_paragraphs",
    "fingerprint",
    "is_japanese",
    "infer_target_language",
    # Scheduling
    "Scheduler",
    "ScheduledCall",
    "LoopScheduler",
    "VirtualScheduler",
    "Debouncer",
    "CancellationToken",
    "RequestCancelled",
    # Actions
    "AiAction",
    "AI_ACTIONS",
    "build_action_url",
    "get_action",
]

"""
Core data models for the translation assistant.

Client-side state (paragraphs, user settings) and the wire models shared
by the backend client and the edge proxy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Paragraph State
# =============================================================================


class Paragraph(BaseModel):
    """
    One unit of translation.

    Identity is the fingerprint of `text`: a re-split that produces the
    same fingerprint carries the whole object (translation included) over.
    """

    text: str
    fingerprint: str
    translated_text: str = ""
    pending: bool = False  # A translation request covering it is in flight

    @property
    def needs_translation(self) -> bool:
        return not self.translated_text and not self.pending and bool(self.text.strip())


class ParagraphInput(BaseModel):
    """A paragraph submitted in a batch, addressed by list position."""

    index: int
    text: str


class ParagraphResult(BaseModel):
    """A translated paragraph returned from a batch."""

    index: int
    translated: str


# =============================================================================
# User Settings
# =============================================================================


class UserSettings(BaseModel):
    """Scalar settings persisted between sessions."""

    input_text: str = ""
    context_text: str = ""
    auto_context: bool = True


# =============================================================================
# Wire Models (client <-> edge proxy)
# =============================================================================


class TranslateParagraph(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    target_language: str = Field(alias="targetLanguage")


class TranslateRequest(BaseModel):
    paragraphs: list[TranslateParagraph]
    context: str | None = None


class TranslateResponse(BaseModel):
    translations: list[str]


class ContextRequest(BaseModel):
    text: str


class ContextResponse(BaseModel):
    context: str

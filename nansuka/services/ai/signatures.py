"""
DSPy Signatures for translation and context summaries.

Signatures define the input/output structure for AI tasks.
DSPy handles prompting and parses the structured output.
"""

from __future__ import annotations

import dspy


# =============================================================================
# Translation
# =============================================================================


class TranslateParagraphs(dspy.Signature):
    """
    You are a professional translator.
    Translate each paragraph to the specified target language.
    Return the translations in the same order as the input paragraphs.
    """

    paragraphs: str = dspy.InputField(
        desc="Numbered paragraphs, each headed '[i] (to <language>)', separated by '---'"
    )
    context: str = dspy.InputField(desc="Short summary of the whole text (may be empty)")

    translations: list[str] = dspy.OutputField(
        desc="Translated text strings in the same order as the input paragraphs"
    )


# =============================================================================
# Context
# =============================================================================


class SummarizeForContext(dspy.Signature):
    """
    Summarize the given text in one short sentence (max 20 words).
    This summary will be used as context for translation.
    """

    text: str = dspy.InputField(desc="Text to summarize")

    context: str = dspy.OutputField(desc="A brief summary (max 20 words) of the input text")

"""
Languages the assistant translates between.

The proxy prompt names the target language in plain English, so enum
values are display names rather than ISO codes.
"""

from enum import Enum


class Language(str, Enum):
    """Supported translation targets."""

    ENGLISH = "English"
    JAPANESE = "Japanese"


LANGUAGE_CODES: dict[str, str] = {
    "en": "English",
    "ja": "Japanese",
}


# =============================================================================
# Utilities
# =============================================================================


def normalize_language(name: str) -> str:
    """
    Normalize a language code or name to its display name.

    Unknown names are returned stripped but otherwise untouched so the
    LLM can still make sense of them.
    """
    cleaned = name.strip()
    lowered = cleaned.lower()

    if lowered in LANGUAGE_CODES:
        return LANGUAGE_CODES[lowered]

    for language in Language:
        if language.value.lower() == lowered:
            return language.value

    return cleaned


def get_language_by_name(name: str) -> Language | None:
    """Get Language enum by code or name."""
    try:
        return Language(normalize_language(name))
    except ValueError:
        return None

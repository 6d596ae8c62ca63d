"""
Text utilities: paragraph splitting, fingerprints and script detection.

All functions here are pure.
"""

from __future__ import annotations

import hashlib
import re


_PARAGRAPH_BREAK = re.compile(r"\n\n+")

# Hiragana, Katakana, CJK unified ideographs
_JAPANESE_SCRIPT = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")


def split_into_paragraphs(text: str) -> list[str]:
    """
    Split text into paragraphs on blank lines.

    Runs of two or more newlines separate paragraphs. Entries that are
    empty or whitespace-only are dropped; the rest keep their original
    text and order.
    """
    if not text:
        return []
    return [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def join_paragraphs(paragraphs: list[str]) -> str:
    """Join paragraphs back into a single text separated by blank lines."""
    return "\n\n".join(paragraphs)


def fingerprint(text: str) -> str:
    """
    Stable short fingerprint of a text.

    Used as a persistent cache key, so it must not depend on the process.
    Collisions are treated as identity.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]


def is_japanese(text: str) -> bool:
    """Whether the text contains any Japanese-script characters."""
    return _JAPANESE_SCRIPT.search(text) is not None


def infer_target_language(
    text: str,
    default: str = "Japanese",
    alternate: str = "English",
) -> str:
    """
    Pick the translation target for a paragraph.

    Japanese text goes to the alternate language, everything else to the
    default one.
    """
    return alternate if is_japanese(text) else default

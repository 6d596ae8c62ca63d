"""
Hand-off actions that open a translation in an external AI chat.

Each action builds a URL with the prompt in the query string.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class AiAction:
    label: str
    url_template: str
    prompt_prefix: str = ""


_EXPLAIN_PROMPT = (
    "以下の英文について、文法構造・語彙・表現のポイントを日本語で解説してください:\n\n"
)
_VARIATIONS_PROMPT = "以下の英文の別の言い方（言い換え表現）を教えてください:\n\n"

AI_ACTIONS: list[AiAction] = [
    AiAction("ChatGPTで解説", "https://chatgpt.com/?q=", _EXPLAIN_PROMPT),
    AiAction("ChatGPTでバリエーション", "https://chatgpt.com/?q=", _VARIATIONS_PROMPT),
    AiAction("Claudeで解説", "https://claude.ai/?q=", _EXPLAIN_PROMPT),
    AiAction("Claudeでバリエーション", "https://claude.ai/?q=", _VARIATIONS_PROMPT),
]


def build_action_url(action: AiAction, translated: str, selected_text: str = "") -> str:
    """
    Build the URL for an action.

    A non-empty selection wins over the full translated paragraph.
    """
    text = selected_text.strip() or translated
    prompt = action.prompt_prefix + text
    return action.url_template + quote(prompt, safe=_URI_COMPONENT_SAFE)


def get_action(label: str) -> AiAction | None:
    """Look up a built-in action by label."""
    for action in AI_ACTIONS:
        if action.label == label:
            return action
    return None

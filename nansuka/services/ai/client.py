"""
LLM client configuration using DSPy.

Supports Anthropic (primary), Gemini and OpenAI. Only the edge proxy
builds these; the credential never leaves the server.
"""

from __future__ import annotations

from functools import lru_cache

import dspy

from nansuka.config import Settings


PROVIDER_PREFIXES = {
    "anthropic": "anthropic",
    "gemini": "gemini",
    "openai": "openai",
}


@lru_cache
def get_lm(provider: str, model: str, api_key: str, max_tokens: int) -> dspy.LM:
    """
    Get configured language model.

    Args:
        provider: 'anthropic', 'gemini' or 'openai'
        model: Provider model name
        api_key: Provider credential
        max_tokens: Completion budget

    Returns:
        Configured DSPy LM instance.
    """
    if provider not in PROVIDER_PREFIXES:
        raise ValueError(f"Unknown provider: {provider}")
    if not api_key:
        raise ValueError(f"API key for {provider} not set")

    # litellm routes on the provider prefix
    return dspy.LM(
        model=f"{PROVIDER_PREFIXES[provider]}/{model}",
        api_key=api_key,
        max_tokens=max_tokens,
    )


def lm_for(settings: Settings, max_tokens: int) -> dspy.LM:
    """Build the LM for the configured provider."""
    models = {
        "anthropic": settings.anthropic_model,
        "gemini": settings.gemini_model,
        "openai": settings.openai_model,
    }
    provider = settings.llm_provider
    return get_lm(provider, models.get(provider, ""), settings.provider_api_key, max_tokens)

"""
Tests for the provider-side translator. DSPy predictors are replaced, so
no network or credential is needed.
"""

from types import SimpleNamespace

import pytest

from nansuka.config import Settings
from nansuka.core.models import TranslateParagraph
from nansuka.services.ai import client as ai_client
from nansuka.services.ai import translator as translator_module
from nansuka.services.ai.translator import (
    STRUCTURED_RESPONSE_FAILED,
    LLMTranslator,
    UpstreamError,
    _status_of,
    format_paragraphs,
)


class RecordingPredictor:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.result


class ProviderError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def settings():
    return Settings(_env_file=None, anthropic_api_key="test-key", translate_max_tokens=4096)


@pytest.fixture
def translator(settings, monkeypatch):
    monkeypatch.setattr(translator_module, "lm_for", lambda s, max_tokens: f"lm:{max_tokens}")
    return LLMTranslator(settings)


PARAGRAPHS = [
    TranslateParagraph(text="Hello world", target_language="Japanese"),
    TranslateParagraph(text="こんにちは", target_language="English"),
]


# =============================================================================
# Prompt Formatting
# =============================================================================


class TestFormatParagraphs:
    def test_numbered_blocks(self):
        assert format_paragraphs(PARAGRAPHS) == (
            "[0] (to Japanese)\nHello world\n\n---\n\n[1] (to English)\nこんにちは"
        )

    def test_status_passthrough(self):
        assert _status_of(ProviderError("slow down", 429)) == 429
        assert _status_of(ProviderError("odd", 200)) == 500
        assert _status_of(RuntimeError("no status")) == 500


# =============================================================================
# Translator
# =============================================================================


class TestLLMTranslator:
    @pytest.mark.asyncio
    async def test_translate(self, translator):
        predictor = RecordingPredictor(SimpleNamespace(translations=[" こんにちは世界 ", "Hello"]))
        translator._translate = predictor

        result = await translator.translate(PARAGRAPHS, context="A greeting.")

        assert result == ["こんにちは世界", "Hello"]
        call = predictor.calls[0]
        assert call["context"] == "A greeting."
        assert call["lm"] == "lm:4096"
        assert "[1] (to English)" in call["paragraphs"]

    @pytest.mark.asyncio
    async def test_count_mismatch(self, translator):
        translator._translate = RecordingPredictor(SimpleNamespace(translations=["only one"]))

        with pytest.raises(UpstreamError) as exc_info:
            await translator.translate(PARAGRAPHS)

        assert exc_info.value.message == STRUCTURED_RESPONSE_FAILED
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_provider_failure_keeps_status(self, translator):
        translator._translate = RecordingPredictor(error=ProviderError("rate limited", 429))

        with pytest.raises(UpstreamError) as exc_info:
            await translator.translate(PARAGRAPHS)

        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "rate limited"

    @pytest.mark.asyncio
    async def test_summarize_uses_small_budget(self, translator):
        predictor = RecordingPredictor(SimpleNamespace(context=" A letter to a friend. "))
        translator._summarize = predictor

        assert await translator.summarize("Dear Tom,") == "A letter to a friend."
        assert predictor.calls[0] == {"text": "Dear Tom,", "lm": "lm:100"}


# =============================================================================
# LM Configuration
# =============================================================================


class TestGetLM:
    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            ai_client.get_lm("mystery", "model", "key", 100)

    def test_missing_key(self):
        with pytest.raises(ValueError, match="API key"):
            ai_client.get_lm("anthropic", "claude", "", 100)

    def test_lm_for_uses_configured_provider(self, monkeypatch):
        captured = {}

        def fake_get_lm(provider, model, api_key, max_tokens):
            captured.update(provider=provider, model=model, api_key=api_key, max_tokens=max_tokens)
            return "lm"

        monkeypatch.setattr(ai_client, "get_lm", fake_get_lm)
        settings = Settings(
            _env_file=None, llm_provider="openai", openai_api_key="sk-test", openai_model="gpt-4o"
        )

        assert ai_client.lm_for(settings, 50) == "lm"
        assert captured == {"provider": "openai", "model": "gpt-4o", "api_key": "sk-test", "max_tokens": 50}

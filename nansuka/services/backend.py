"""
Translation backend client.

Thin request/response mapping onto the edge proxy's `/translate` and
`/context` endpoints. One HTTP request per batch, never per paragraph.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from nansuka.core.models import ParagraphInput, ParagraphResult
from nansuka.core.scheduling import CancellationToken, RequestCancelled
from nansuka.core.text import infer_target_language
from nansuka.i18n.languages import normalize_language

logger = logging.getLogger(__name__)


TRANSLATION_FAILED = "Translation failed"
CONTEXT_FAILED = "Context generation failed"


class BackendError(Exception):
    """The backend could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# =============================================================================
# Backend Interface
# =============================================================================


class TranslationBackend(ABC):
    """What the orchestrator and summarizer need from a backend."""

    @abstractmethod
    async def translate_batch(
        self,
        paragraphs: list[ParagraphInput],
        context: str = "",
        token: CancellationToken | None = None,
    ) -> list[ParagraphResult]:
        """
        Translate a batch of paragraphs in one request.

        Raises:
            RequestCancelled: if `token` was cancelled before the result
                could be delivered
            BackendError: on any other failure
        """
        pass

    @abstractmethod
    async def summarize(self, text: str, token: CancellationToken | None = None) -> str:
        """Summarize the whole input into one short sentence."""
        pass


# =============================================================================
# HTTP Client
# =============================================================================


class TranslationBackendClient(TranslationBackend):
    """
    Backend talking to the edge proxy over HTTP.

    Usage:
        async with TranslationBackendClient("http://localhost:8787") as backend:
            results = await backend.translate_batch(
                [ParagraphInput(index=0, text="Hello world")],
                context="a greeting",
            )
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
        default_target: str = "Japanese",
        alternate_target: str = "English",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_target = normalize_language(default_target)
        self.alternate_target = normalize_language(alternate_target)
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> TranslationBackendClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def target_language(self, text: str) -> str:
        return infer_target_language(text, self.default_target, self.alternate_target)

    async def translate_batch(
        self,
        paragraphs: list[ParagraphInput],
        context: str = "",
        token: CancellationToken | None = None,
    ) -> list[ParagraphResult]:
        if not paragraphs:
            return []

        payload: dict[str, Any] = {
            "paragraphs": [
                {"text": p.text, "targetLanguage": self.target_language(p.text)}
                for p in paragraphs
            ],
        }
        if context:
            payload["context"] = context

        data = await self._post("/translate", payload, token, TRANSLATION_FAILED)

        translations = data.get("translations")
        if not isinstance(translations, list) or len(translations) != len(paragraphs):
            raise BackendError(TRANSLATION_FAILED)

        return [
            ParagraphResult(index=p.index, translated=str(translated))
            for p, translated in zip(paragraphs, translations)
        ]

    async def summarize(self, text: str, token: CancellationToken | None = None) -> str:
        if not text.strip():
            return ""

        data = await self._post("/context", {"text": text}, token, CONTEXT_FAILED)

        context = data.get("context")
        if not isinstance(context, str):
            raise BackendError(CONTEXT_FAILED)
        return context

    async def _post(
        self,
        path: str,
        payload: dict[str, Any],
        token: CancellationToken | None,
        failure_message: str,
    ) -> dict[str, Any]:
        """
        POST and decode JSON, honouring the token.

        The request runs as its own task so cancelling the token aborts
        the transport; a result that lands after cancellation is dropped.
        """
        if token:
            token.raise_if_cancelled()

        request = asyncio.ensure_future(self._send(path, payload, failure_message))
        if token:
            token.add_callback(request.cancel)

        try:
            data = await request
        except asyncio.CancelledError:
            if token and token.cancelled:
                raise RequestCancelled() from None
            raise
        finally:
            if token:
                token.remove_callback(request.cancel)

        if token:
            token.raise_if_cancelled()
        return data

    async def _send(self, path: str, payload: dict[str, Any], failure_message: str) -> dict[str, Any]:
        try:
            response = await self.http_client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise BackendError(failure_message) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise BackendError(
                message or f"API error: {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise BackendError(failure_message, status_code=response.status_code)
        return data

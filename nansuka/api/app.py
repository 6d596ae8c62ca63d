"""
FastAPI edge proxy.

Sits between the browser and the LLM provider: accepts batch translate
and context requests, enforces the origin allow-list, and injects the
provider credential server-side so it never reaches the client.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nansuka.api.cors import OriginPolicy
from nansuka.config import Settings, get_settings
from nansuka.core.models import (
    ContextRequest,
    ContextResponse,
    TranslateRequest,
    TranslateResponse,
)
from nansuka.integrations.sentry import capture_exception, init_sentry
from nansuka.services.ai import LLMTranslator, UpstreamError

logger = logging.getLogger(__name__)


AVAILABLE_ENDPOINTS = ["/translate", "/context"]


class ProxyError(Exception):
    """An error answered as `{"error": ..., "details": ...}` JSON."""

    def __init__(self, status_code: int, error: str, details: str | None = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


# =============================================================================
# Request Helpers
# =============================================================================


async def read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise ProxyError(400, "Invalid JSON")


def field_error(error: ValidationError) -> str:
    """First validation problem as a readable field-level message."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"Invalid field: {location} ({first['msg']})"


# =============================================================================
# Dependencies
# =============================================================================


def get_translator(request: Request) -> LLMTranslator:
    state = request.app.state
    if state.translator is None:
        state.translator = LLMTranslator(state.settings)
    return state.translator


# =============================================================================
# App Factory
# =============================================================================


def create_app(settings: Settings | None = None, translator: Any | None = None) -> FastAPI:
    """
    Build the proxy application.

    Args:
        settings: Overrides the environment settings
        translator: Anything with async `translate()`/`summarize()`;
            defaults to an LLMTranslator built on first use
    """
    settings = settings or get_settings()
    policy = OriginPolicy.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")
        logger.info(f"Edge proxy starting in {settings.environment} mode")
        logger.info(f"Allowed origins: {', '.join(policy.allowed_origins)}")
        yield
        logger.info("Edge proxy shutting down")

    app = FastAPI(
        title="Nansuka Edge Proxy",
        description="Forwards translation and context requests to the LLM provider",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.translator = translator

    # =========================================================================
    # Edge Policy
    # =========================================================================

    @app.middleware("http")
    async def edge_policy(request: Request, call_next):
        origin = request.headers.get("origin")
        cors_headers = policy.cors_headers(origin)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers)

        if not policy.is_allowed(origin):
            logger.warning(f"Rejected request from origin {origin!r}")
            return JSONResponse(
                {"error": "Forbidden: Origin not allowed"},
                status_code=403,
                headers=cors_headers,
            )

        if request.method != "POST":
            return JSONResponse(
                {"error": "Method not allowed"},
                status_code=405,
                headers=cors_headers,
            )

        if not settings.provider_api_key:
            logger.error(f"No API key configured for provider {settings.llm_provider}")
            return JSONResponse(
                {"error": "API key not configured"},
                status_code=500,
                headers=cors_headers,
            )

        response = await call_next(request)
        response.headers.update(cors_headers)
        return response

    # =========================================================================
    # Error Handlers
    # =========================================================================

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                {"error": "Not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
                status_code=404,
            )
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.post("/translate", response_model=TranslateResponse)
    async def translate(request: Request, translator=Depends(get_translator)):
        """Translate a batch of paragraphs, each into its own target language."""
        body = await read_json(request)

        paragraphs = body.get("paragraphs") if isinstance(body, dict) else None
        if not isinstance(paragraphs, list) or not paragraphs:
            raise ProxyError(400, "Missing required field: paragraphs (array)")

        try:
            parsed = TranslateRequest.model_validate(body)
        except ValidationError as e:
            raise ProxyError(400, field_error(e))

        try:
            translations = await translator.translate(parsed.paragraphs, parsed.context)
        except UpstreamError as e:
            capture_exception(e, endpoint="/translate", paragraphs=len(parsed.paragraphs))
            raise ProxyError(e.status_code, "Translation failed", details=e.message)

        return TranslateResponse(translations=translations)

    @app.post("/context", response_model=ContextResponse)
    async def context(request: Request, translator=Depends(get_translator)):
        """Summarize text into a one-sentence translation context."""
        body = await read_json(request)

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str) or not text:
            raise ProxyError(400, "Missing required field: text")

        parsed = ContextRequest.model_validate(body)

        try:
            summary = await translator.summarize(parsed.text)
        except UpstreamError as e:
            capture_exception(e, endpoint="/context")
            raise ProxyError(e.status_code, "Context generation failed", details=e.message)

        return ContextResponse(context=summary)

    return app


app = create_app()

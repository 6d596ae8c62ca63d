"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


DEFAULT_ALLOWED_ORIGIN = "https://hashrock.github.io"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False  # Tracebacks in proxy error responses
    log_level: str = "INFO"

    # ==========================================================================
    # Edge Proxy
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8787
    allowed_origins: str = ""  # Comma separated; empty means production default

    # ==========================================================================
    # AI / LLM (server side only, never sent to the browser)
    # ==========================================================================

    llm_provider: str = "anthropic"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"

    # Alternate providers
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    translate_max_tokens: int = 4096
    context_max_tokens: int = 100

    # ==========================================================================
    # Client
    # ==========================================================================

    proxy_url: str = "http://localhost:8787"
    request_timeout: float = 60.0
    data_dir: str = "./data"

    translate_debounce_ms: int = 1000
    context_debounce_ms: int = 5000

    default_target_language: str = "Japanese"
    alternate_target_language: str = "English"

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def allowed_origins_list(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or [DEFAULT_ALLOWED_ORIGIN]

    @property
    def is_local_dev(self) -> bool:
        """An allow-list mentioning localhost means we run behind a dev server."""
        return "localhost" in self.allowed_origins

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def provider_api_key(self) -> str:
        """Credential for the configured LLM provider (empty if missing)."""
        if self.llm_provider == "anthropic":
            return self.anthropic_api_key
        if self.llm_provider == "gemini":
            return self.google_api_key
        if self.llm_provider == "openai":
            return self.openai_api_key
        return ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

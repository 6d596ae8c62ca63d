"""
Origin allow-list and CORS headers for the edge proxy.
"""

from __future__ import annotations

from nansuka.config import Settings


class OriginPolicy:
    """
    Which browser origins may call the proxy.

    Requests without an Origin header are only accepted in local
    development, where a dev server proxies them.
    """

    def __init__(self, allowed_origins: list[str], allow_missing_origin: bool = False):
        if not allowed_origins:
            raise ValueError("At least one allowed origin is required")
        self.allowed_origins = allowed_origins
        self.allow_missing_origin = allow_missing_origin

    @classmethod
    def from_settings(cls, settings: Settings) -> OriginPolicy:
        return cls(settings.allowed_origins_list, allow_missing_origin=settings.is_local_dev)

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return self.allow_missing_origin
        return origin in self.allowed_origins

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        allow_origin = origin if origin and origin in self.allowed_origins else self.allowed_origins[0]
        return {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
            "Access-Control-Max-Age": "86400",
        }

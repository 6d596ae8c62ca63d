"""Third-party integrations."""

from nansuka.integrations.sentry import init_sentry, capture_exception

__all__ = [
    "init_sentry",
    "capture_exception",
]

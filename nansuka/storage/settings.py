"""
Persisted user settings.

Scalars live under stable keys and are read back verbatim; there is no
versioning or migration.
"""

from __future__ import annotations

import logging

from nansuka.core.models import UserSettings
from nansuka.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


INPUT_KEY = "nansuka-input"
CONTEXT_KEY = "nansuka-context"
AUTO_CONTEXT_KEY = "nansuka-auto-context"


class SettingsStore:
    """Best-effort load/save of UserSettings over a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> UserSettings:
        settings = UserSettings()
        try:
            input_text = self._store.get(INPUT_KEY)
            context_text = self._store.get(CONTEXT_KEY)
            auto_context = self._store.get(AUTO_CONTEXT_KEY)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            return settings

        if isinstance(input_text, str):
            settings.input_text = input_text
        if isinstance(context_text, str):
            settings.context_text = context_text
        if isinstance(auto_context, bool):
            settings.auto_context = auto_context
        return settings

    def save_input(self, text: str) -> None:
        self._save(INPUT_KEY, text)

    def save_context(self, text: str) -> None:
        self._save(CONTEXT_KEY, text)

    def save_auto_context(self, enabled: bool) -> None:
        self._save(AUTO_CONTEXT_KEY, enabled)

    def _save(self, key: str, value: str | bool) -> None:
        try:
            self._store.set(key, value)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not save setting {key}: {e}")

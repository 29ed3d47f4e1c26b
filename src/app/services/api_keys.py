# src/app/services/api_keys.py
"""
Gemini API key resolution.
The saved key wins; the environment is only a fallback.
"""
from __future__ import annotations

import logging
from typing import Optional

from src.app.infra.secrets.base import SecretStore

logger = logging.getLogger(__name__)

API_KEY_SECRET_NAME = "ai.gemini.apiKey"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class ApiKeyResolver:
    """
    Resolves the Gemini API key for one orchestrator.

    Order:
    - the secret store entry "ai.gemini.apiKey"
    - the fallback key (GEMINI_API_KEY from settings)
    """

    def __init__(
        self,
        store: SecretStore,
        fallback_key: Optional[str] = None,
        secret_name: str = API_KEY_SECRET_NAME,
    ):
        self._store = store
        self._fallback_key = fallback_key
        self.secret_name = secret_name

    def resolve(self) -> Optional[str]:
        stored = _clean(self._store.get(self.secret_name))
        if stored:
            return stored

        fallback = _clean(self._fallback_key)
        if fallback:
            logger.debug("Using GEMINI_API_KEY fallback")
            return fallback

        return None

    def has_key(self) -> bool:
        return self.resolve() is not None

    def save_key(self, value: str) -> None:
        """Save a trimmed key; a blank value removes the saved key."""
        cleaned = _clean(value)
        if cleaned is None:
            self.clear_key()
            return
        self._store.set(self.secret_name, cleaned)

    def clear_key(self) -> None:
        self._store.delete(self.secret_name)

# src/app/deps.py (one orchestrator per process, exposed as dependencies)

from __future__ import annotations

from src.app.config import settings
from src.app.infra.secrets.base import SecretStore
from src.app.infra.secrets.keyring_store import KeyringSecretStore
from src.app.services.api_keys import ApiKeyResolver
from src.app.services.draft_orchestrator import DraftOrchestrator
from src.services.gemini_client import GeminiDraftClient

_secret_store: SecretStore | None = None
_orchestrator: DraftOrchestrator | None = None


def get_secret_store() -> SecretStore:
    global _secret_store
    if _secret_store is None:
        _secret_store = KeyringSecretStore(settings.SECRET_STORE_SERVICE)
    return _secret_store


def get_api_key_resolver() -> ApiKeyResolver:
    return ApiKeyResolver(get_secret_store(), fallback_key=settings.GEMINI_API_KEY)


def get_orchestrator() -> DraftOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = DraftOrchestrator(
            GeminiDraftClient(),
            get_api_key_resolver(),
            model_name=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
        )
    return _orchestrator


async def close_orchestrator() -> None:
    global _orchestrator
    if _orchestrator is not None:
        await _orchestrator.client.aclose()
        _orchestrator = None

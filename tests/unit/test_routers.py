from __future__ import annotations

import base64
import io
from typing import Optional

import keyring
import pytest
from fastapi.testclient import TestClient
from keyring.errors import NoKeyringError
from PIL import Image

from src.app.deps import get_api_key_resolver, get_orchestrator
from src.app.domain.errors import ApiError, EmptyResponseError, MissingApiKeyError, SecretStoreError
from src.app.domain.models import CreativeRange, Draft, DraftOutcome, EditablePostDraft
from src.app.infra.secrets.base import InMemorySecretStore
from src.app.infra.secrets.keyring_store import KeyringSecretStore
from src.app.main import app
from src.app.services.api_keys import API_KEY_SECRET_NAME, ApiKeyResolver
from src.services.draft_merge import apply_draft


class FakeOrchestrator:
    def __init__(self, outcome: Optional[DraftOutcome] = None, draft: Optional[Draft] = None):
        self.outcome = outcome
        self.draft = draft
        self.posts: list[EditablePostDraft] = []

    async def generate_and_apply(self, post: EditablePostDraft) -> Optional[DraftOutcome]:
        self.posts.append(post)
        if self.draft is not None:
            return DraftOutcome(draft=self.draft, post=apply_draft(post, self.draft))
        return self.outcome


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def use_orchestrator(fake: FakeOrchestrator) -> FakeOrchestrator:
    app.dependency_overrides[get_orchestrator] = lambda: fake
    return fake


def png_base64() -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), (10, 20, 30)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class TestGenerateDraftRoute:
    def test_success(self, client: TestClient) -> None:
        draft = Draft(
            title="Smoky Soup",
            recipe="Boil for 10 minutes",
            recipe_creative_ranges=[CreativeRange(location=5, length=14)],
        )
        fake = use_orchestrator(FakeOrchestrator(draft=draft))

        response = client.post(
            "/drafts/generate",
            json={"title": "Old", "photos": [png_base64()], "capturedIdeas": ["more smoke"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["draft"]["title"] == "Smoky Soup"
        assert body["draft"]["recipeCreativeRanges"] == [{"location": 5, "length": 14}]
        assert body["post"]["title"] == "Smoky Soup"
        assert body["post"]["recipe"] == {
            "text": "Boil for 10 minutes",
            "highlights": [{"location": 5, "length": 14}],
        }
        assert body["post"]["capturedIdeas"] == ["more smoke"]
        assert fake.posts[0].photos[0][:4] == b"\x89PNG"

    def test_request_in_flight(self, client: TestClient) -> None:
        use_orchestrator(FakeOrchestrator(outcome=None))
        assert client.post("/drafts/generate", json={}).status_code == 409

    def test_missing_key(self, client: TestClient) -> None:
        use_orchestrator(FakeOrchestrator(outcome=DraftOutcome(error=MissingApiKeyError())))
        response = client.post("/drafts/generate", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == MissingApiKeyError.user_message

    def test_upstream_failures(self, client: TestClient) -> None:
        use_orchestrator(FakeOrchestrator(outcome=DraftOutcome(error=EmptyResponseError())))
        assert client.post("/drafts/generate", json={}).status_code == 502

        use_orchestrator(FakeOrchestrator(outcome=DraftOutcome(error=ApiError("Quota exceeded", status_code=429))))
        response = client.post("/drafts/generate", json={})
        assert response.status_code == 502
        assert response.json()["detail"] == "Quota exceeded"

    def test_bad_base64_rejected(self, client: TestClient) -> None:
        fake = use_orchestrator(FakeOrchestrator(outcome=None))
        response = client.post("/drafts/generate", json={"referencePhotos": ["%%%not-base64%%%"]})
        assert response.status_code == 422
        assert fake.posts == []


class TestApiKeySettingsRoute:
    def test_status_save_and_delete(self, client: TestClient) -> None:
        store = InMemorySecretStore()
        app.dependency_overrides[get_api_key_resolver] = lambda: ApiKeyResolver(store)

        assert client.get("/settings/api-key").json() == {"configured": False}

        assert client.put("/settings/api-key", json={"apiKey": "  abc  "}).status_code == 204
        assert store.get(API_KEY_SECRET_NAME) == "abc"
        assert client.get("/settings/api-key").json() == {"configured": True}

        assert client.delete("/settings/api-key").status_code == 204
        assert client.get("/settings/api-key").json() == {"configured": False}

    def test_keyring_unavailable(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        def no_backend(*args: str) -> None:
            raise NoKeyringError("No recommended backend was available")

        monkeypatch.setattr(keyring, "set_password", no_backend)
        monkeypatch.setattr(keyring, "delete_password", no_backend)
        app.dependency_overrides[get_api_key_resolver] = lambda: ApiKeyResolver(KeyringSecretStore("yummr-test"))

        response = client.put("/settings/api-key", json={"apiKey": "abc"})
        assert response.status_code == 503
        assert response.json()["detail"] == SecretStoreError.user_message

        assert client.delete("/settings/api-key").status_code == 503

    def test_empty_key_rejected(self, client: TestClient) -> None:
        app.dependency_overrides[get_api_key_resolver] = lambda: ApiKeyResolver(InMemorySecretStore())
        assert client.put("/settings/api-key", json={"apiKey": ""}).status_code == 422


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"ok": True}

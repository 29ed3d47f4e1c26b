# src/app/services/draft_orchestrator.py
"""
AI draft orchestration.
Owns the request lifecycle: key resolution, endpoint, one network round trip,
decoding and error translation.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool

from src.app.domain.errors import DraftServiceError, MissingApiKeyError
from src.app.domain.models import Draft, DraftOutcome, EditablePostDraft, OrchestratorState
from src.app.services.api_keys import ApiKeyResolver
from src.services.draft_merge import apply_draft
from src.services.draft_request import build_request_payload
from src.services.draft_response import decode_draft_response
from src.services.gemini_client import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL_NAME,
    GeminiDraftClient,
    build_endpoint,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[OrchestratorState], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DraftOrchestrator:
    """
    Runs AI draft requests, one at a time.

    States: IDLE -> REQUESTING -> (SUCCEEDED | FAILED) -> IDLE.
    A request made while another is in flight is rejected and returns None.
    Failures are never retried here; the caller decides whether to ask again.
    """

    def __init__(
        self,
        client: GeminiDraftClient,
        key_resolver: ApiKeyResolver,
        *,
        model_name: str = DEFAULT_MODEL_NAME,
        base_url: str = DEFAULT_BASE_URL,
        on_state_change: Optional[StateListener] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._client = client
        self._key_resolver = key_resolver
        self.model_name = model_name
        self.base_url = base_url
        self._on_state_change = on_state_change
        self._clock = clock

        self._state = OrchestratorState.IDLE
        self.last_completed_at: Optional[datetime] = None

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def client(self) -> GeminiDraftClient:
        return self._client

    @property
    def is_generating(self) -> bool:
        return self._state is OrchestratorState.REQUESTING

    def _transition(self, state: OrchestratorState) -> None:
        self._state = state
        logger.debug("Draft orchestrator -> %s", state.value)
        if self._on_state_change is not None:
            self._on_state_change(state)

    async def _request_draft(self, post: EditablePostDraft) -> Draft:
        api_key = self._key_resolver.resolve()
        if api_key is None:
            raise MissingApiKeyError()

        url = build_endpoint(self.base_url, self.model_name)
        payload = await run_in_threadpool(build_request_payload, post)
        response = await self._client.generate_content(url, api_key, payload)
        return decode_draft_response(response.status_code, response.content)

    async def generate_draft(self, post: EditablePostDraft) -> Optional[DraftOutcome]:
        """
        Generate a draft for `post`.

        Returns:
            DraftOutcome with either a draft or an error, or None when a
            request is already in flight
        """
        if self.is_generating:
            logger.info("Draft request ignored: another request is in flight")
            return None

        self._transition(OrchestratorState.REQUESTING)
        try:
            try:
                draft = await self._request_draft(post)
            except DraftServiceError as error:
                self._transition(OrchestratorState.FAILED)
                logger.warning("Draft generation failed: %s: %s", type(error).__name__, error)
                return DraftOutcome(error=error, completed_at=self._clock())

            self.last_completed_at = self._clock()
            self._transition(OrchestratorState.SUCCEEDED)
            logger.info(
                "Draft generated: title=%r, %d instruction(s)",
                draft.title,
                len(draft.instructions or []),
            )
            return DraftOutcome(draft=draft, completed_at=self.last_completed_at)
        finally:
            self._transition(OrchestratorState.IDLE)

    async def generate_and_apply(self, post: EditablePostDraft) -> Optional[DraftOutcome]:
        """Generate a draft and, on success, attach the merged post to the outcome."""
        outcome = await self.generate_draft(post)
        if outcome is not None and outcome.succeeded:
            outcome.post = apply_draft(post, outcome.draft)
        return outcome

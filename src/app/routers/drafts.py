# src/app/routers/drafts.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.app.deps import get_orchestrator
from src.app.domain.errors import (
    DraftServiceError,
    InvalidUrlError,
    MissingApiKeyError,
)
from src.app.schemas.drafts import (
    DraftResponse,
    GenerateDraftRequest,
    GenerateDraftResponse,
    PostDraftResponse,
)
from src.app.services.draft_orchestrator import DraftOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drafts", tags=["drafts"])


def _status_for(error: DraftServiceError) -> int:
    if isinstance(error, MissingApiKeyError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, InvalidUrlError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_502_BAD_GATEWAY


@router.post("/generate", response_model=GenerateDraftResponse)
async def generate_draft(
    body: GenerateDraftRequest,
    orchestrator: DraftOrchestrator = Depends(get_orchestrator),
) -> GenerateDraftResponse:
    outcome = await orchestrator.generate_and_apply(body.to_domain())
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A draft is already being generated. Please wait for it to finish.",
        )
    if outcome.error is not None:
        raise HTTPException(status_code=_status_for(outcome.error), detail=outcome.message)

    return GenerateDraftResponse(
        draft=DraftResponse.from_domain(outcome.draft),
        post=PostDraftResponse.from_domain(outcome.post),
    )

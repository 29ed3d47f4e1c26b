# src/app/routers/settings.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.app.deps import get_api_key_resolver
from src.app.domain.errors import SecretStoreError
from src.app.schemas.drafts import ApiKeyStatus, ApiKeyUpdate
from src.app.services.api_keys import ApiKeyResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _store_unavailable(error: SecretStoreError) -> HTTPException:
    logger.warning("API key update failed: %s", error)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=error.user_message)


@router.get("/api-key", response_model=ApiKeyStatus)
def get_api_key_status(
    resolver: ApiKeyResolver = Depends(get_api_key_resolver),
) -> ApiKeyStatus:
    # Never echo the key itself
    return ApiKeyStatus(configured=resolver.has_key())


@router.put("/api-key", status_code=status.HTTP_204_NO_CONTENT)
def save_api_key(
    body: ApiKeyUpdate,
    resolver: ApiKeyResolver = Depends(get_api_key_resolver),
) -> Response:
    try:
        resolver.save_key(body.apiKey)
    except SecretStoreError as e:
        raise _store_unavailable(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/api-key", status_code=status.HTTP_204_NO_CONTENT)
def delete_api_key(
    resolver: ApiKeyResolver = Depends(get_api_key_resolver),
) -> Response:
    try:
        resolver.clear_key()
    except SecretStoreError as e:
        raise _store_unavailable(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)

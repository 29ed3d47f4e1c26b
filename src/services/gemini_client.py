from __future__ import annotations

import logging
from typing import Optional

import httpx

from src.app.domain.errors import InvalidResponseError, InvalidUrlError
from src.app.schemas.gemini import GenerateContentRequest

logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO, and the API key travels in the query string
logging.getLogger("httpx").setLevel(logging.WARNING)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL_NAME = "gemini-1.5-flash"
REQUEST_TIMEOUT_SECONDS = 60.0


def build_endpoint(base_url: str, model_name: str) -> httpx.URL:
    endpoint = f"{base_url.rstrip('/')}/{model_name}:generateContent"
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as error:
        raise InvalidUrlError(endpoint, str(error)) from error
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidUrlError(endpoint)
    return url


class GeminiDraftClient:
    """Thin async transport for the generateContent REST endpoint."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def generate_content(
        self,
        url: httpx.URL,
        api_key: str,
        payload: GenerateContentRequest,
    ) -> httpx.Response:
        """POST `payload` and return the fully buffered response, whatever its status."""
        try:
            response = await self._http.post(
                url,
                params={"key": api_key},
                json=payload.to_wire(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as error:
            raise InvalidResponseError(f"Gemini request timed out after {self.timeout:g}s") from error
        except httpx.HTTPError as error:
            raise InvalidResponseError(f"Gemini request failed: {type(error).__name__}") from error

        logger.debug("Gemini responded with HTTP %d (%d bytes)", response.status_code, len(response.content))
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

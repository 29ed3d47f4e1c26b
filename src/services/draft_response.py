from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from src.app.domain.errors import (
    ApiError,
    DecodingFailedError,
    EmptyResponseError,
    InvalidResponseError,
)
from src.app.domain.models import CreativeRange, Draft
from src.app.schemas.gemini import (
    ApiErrorEnvelope,
    DraftPayload,
    GenerateContentResponse,
)
from src.services.creative_markup import clean_creative_text, strip_creative_markup

logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _raise_for_error_status(status_code: int, body: bytes) -> None:
    try:
        envelope = ApiErrorEnvelope.model_validate_json(body)
    except ValidationError as error:
        raise InvalidResponseError(
            f"Gemini returned HTTP {status_code} without an error body",
            status_code=status_code,
        ) from error
    raise ApiError(envelope.error.message, status_code=status_code)


def extract_text_payload(body: bytes) -> Optional[str]:
    """Join the first candidate's text parts; None when nothing usable is there."""
    try:
        response = GenerateContentResponse.model_validate_json(body)
    except ValidationError as error:
        raise InvalidResponseError("Gemini response envelope could not be decoded") from error

    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None:
        return None

    combined = "\n".join(part.text for part in content.parts if part.text is not None)
    trimmed = combined.strip()
    return trimmed or None


def _parse_draft_payload(text: str) -> DraftPayload:
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as error:
        raise DecodingFailedError("Gemini text is not valid UTF-8") from error
    try:
        return DraftPayload.model_validate_json(data)
    except ValidationError as error:
        raise DecodingFailedError(f"Gemini text did not match the draft schema: {error.error_count()} error(s)") from error


def _strip_list(values: Optional[list[str]]) -> Optional[list[str]]:
    if values is None:
        return None
    return [strip_creative_markup(value) for value in values]


def _clean_instructions(
    instructions: Optional[list[str]],
) -> tuple[Optional[list[str]], list[list[CreativeRange]]]:
    if instructions is None:
        return None, []

    steps: list[str] = []
    step_ranges: list[list[CreativeRange]] = []
    for raw_step in instructions:
        text, ranges = clean_creative_text(raw_step)
        if not text:
            continue
        steps.append(text)
        step_ranges.append(ranges)
    return steps, step_ranges


def draft_from_payload(payload: DraftPayload) -> Draft:
    """Clean creative markup out of every text field of a decoded payload."""
    recipe: Optional[str] = None
    recipe_ranges: list[CreativeRange] = []
    if payload.recipe is not None:
        recipe, recipe_ranges = clean_creative_text(payload.recipe)

    instructions, instruction_ranges = _clean_instructions(payload.instructions)

    return Draft(
        title=strip_creative_markup(payload.title) if payload.title is not None else None,
        summary=strip_creative_markup(payload.summary) if payload.summary is not None else None,
        description=strip_creative_markup(payload.description) if payload.description is not None else None,
        recipe=recipe,
        ingredients=_strip_list(payload.ingredients),
        instructions=instructions,
        notes=_strip_list(payload.notes),
        recipe_creative_ranges=recipe_ranges,
        instruction_creative_ranges=instruction_ranges,
    )


def decode_draft_response(status_code: int, body: bytes) -> Draft:
    """
    Turn one raw generateContent response into a Draft.

    Raises:
        ApiError: non-2xx with an error envelope
        InvalidResponseError: non-2xx without one, or an undecodable envelope
        EmptyResponseError: no candidate text
        DecodingFailedError: candidate text is not draft JSON
    """
    if not _is_success(status_code):
        _raise_for_error_status(status_code, body)

    text = extract_text_payload(body)
    if text is None:
        raise EmptyResponseError()

    draft = draft_from_payload(_parse_draft_payload(text))
    logger.debug(
        "Decoded draft: %d instruction(s), %d recipe highlight(s)",
        len(draft.instructions or []),
        len(draft.recipe_creative_ranges),
    )
    return draft

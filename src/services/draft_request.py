from __future__ import annotations

import logging
from typing import Optional, Sequence

from src.app.domain.models import EditablePostDraft
from src.app.schemas.gemini import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    Part,
)
from src.services.images import JPEG_MIME_TYPE, JPEG_QUALITY, encode_images

logger = logging.getLogger(__name__)

MAX_PUBLISHED_IMAGES = 4
MAX_REFERENCE_IMAGES = 4

TEMPERATURE = 0.6
TOP_P = 0.95
RESPONSE_MIME_TYPE = "application/json"

PREAMBLE = (
    "You are an assistant that turns loose cooking notes into a publishable recipe for the Yummr app.",
    "Use the following inputs to craft a concise recipe draft.",
    "Return only JSON with this structure (replace the placeholders with real values): "
    '{"title": "...", "summary": "...", "ingredients": ["..."], "instructions": ["..."], '
    '"notes": ["..."], "recipe": "..."}. Every field is optional; omit any you cannot fill.',
    "Do not include markdown, explanations, or any text outside of that JSON object.",
    "Wrap any wording in the recipe or instructions that you invented or assumed, rather than "
    "took from the inputs, in <creative></creative> tags.",
)

CLOSING_GUIDANCE = (
    "Keep instructions actionable and short. Respect any cook times or key flavors mentioned. "
    "If information is missing, make reasonable assumptions but keep them labeled as notes."
)

REFERENCE_IMAGES_NOTE = (
    "The following photos are private reference images supplied only as context. "
    "They will not be published with the post, so do not describe them as part of it."
)


def _format_section(label: str, value: str) -> Optional[str]:
    if not value.strip():
        return None
    return f"{label}: {value}"


def _non_blank(values: Sequence[str]) -> list[str]:
    return [value.strip() for value in values if value.strip()]


def build_context_prompt(
    *,
    title: str = "",
    description: str = "",
    recipe: str = "",
    transcript: str = "",
    captured_ideas: Sequence[str] = (),
    custom_prompt: str = "",
    ingredients: Sequence[str] = (),
) -> str:
    """Instruction preamble followed by every non-blank piece of context."""
    ideas = _non_blank(captured_ideas)
    ideas_text = " • ".join(f"{index}. {idea}" for index, idea in enumerate(ideas, start=1))

    sections = [
        *PREAMBLE,
        _format_section("Current title", title),
        _format_section("Post description context", description),
        _format_section("Existing recipe draft", recipe),
        _format_section("Ingredients to highlight", ", ".join(_non_blank(ingredients))),
        _format_section("Voice memo transcript", transcript),
        _format_section("Saved brainstorming ideas", ideas_text),
        _format_section("Author guidance", custom_prompt),
        CLOSING_GUIDANCE,
    ]
    return "\n\n".join(s for s in sections if s)


def build_request_payload(
    post: EditablePostDraft,
    *,
    jpeg_quality: int = JPEG_QUALITY,
) -> GenerateContentRequest:
    """
    Assemble the generateContent body for `post`.

    Parts: the text prompt, up to four published photos, then (only when a
    reference photo could be encoded) a separator note and up to four
    reference photos.
    """
    prompt = build_context_prompt(
        title=post.title,
        description=post.description,
        recipe=post.recipe.text,
        transcript=post.transcript,
        captured_ideas=post.captured_ideas,
        custom_prompt=post.custom_prompt,
        ingredients=post.ingredients,
    )
    parts = [Part.from_text(prompt)]

    published = encode_images(post.photos, MAX_PUBLISHED_IMAGES, quality=jpeg_quality)
    parts.extend(Part.from_image(data, JPEG_MIME_TYPE) for data in published)

    references = encode_images(post.reference_photos, MAX_REFERENCE_IMAGES, quality=jpeg_quality)
    if references:
        parts.append(Part.from_text(REFERENCE_IMAGES_NOTE))
        parts.extend(Part.from_image(data, JPEG_MIME_TYPE) for data in references)

    request = GenerateContentRequest(
        contents=[Content(role="user", parts=parts)],
        generationConfig=GenerationConfig(
            temperature=TEMPERATURE,
            topP=TOP_P,
            responseMimeType=RESPONSE_MIME_TYPE,
        ),
    )
    logger.debug(
        "Built draft request: %d part(s), %d image(s) (%d reference)",
        len(request.parts),
        sum(part.is_image for part in request.parts),
        len(references),
    )
    return request

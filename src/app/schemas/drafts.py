from __future__ import annotations

import base64
import binascii
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.app.domain.models import CreativeRange, Draft, EditablePostDraft, RichText


class CreativeRangeModel(BaseModel):
    location: int = Field(..., ge=0, description="Start, in user-visible characters")
    length: int = Field(..., gt=0, description="Length, in user-visible characters")

    @classmethod
    def from_domain(cls, value: CreativeRange) -> CreativeRangeModel:
        return cls(location=value.location, length=value.length)

    def to_domain(self) -> CreativeRange:
        return CreativeRange(location=self.location, length=self.length)


class RichTextModel(BaseModel):
    text: str = ""
    highlights: list[CreativeRangeModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, value: RichText) -> RichTextModel:
        return cls(
            text=value.text,
            highlights=[CreativeRangeModel.from_domain(r) for r in value.highlights],
        )

    def to_domain(self) -> RichText:
        return RichText.with_highlights(self.text, [h.to_domain() for h in self.highlights])


def _decode_base64(value: str) -> bytes:
    return base64.b64decode(value, validate=True)


class GenerateDraftRequest(BaseModel):
    title: str = ""
    description: str = ""
    recipe: RichTextModel = Field(default_factory=RichTextModel)
    ingredients: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list, description="Published photos, base64")
    referencePhotos: list[str] = Field(default_factory=list, description="Private AI-context photos, base64")
    transcript: str = ""
    capturedIdeas: list[str] = Field(default_factory=list)
    customPrompt: str = ""
    notes: list[str] = Field(default_factory=list)

    @field_validator("photos", "referencePhotos")
    @classmethod
    def _check_base64(cls, values: list[str]) -> list[str]:
        for value in values:
            try:
                _decode_base64(value)
            except (binascii.Error, ValueError) as e:
                raise ValueError("images must be base64-encoded") from e
        return values

    def to_domain(self) -> EditablePostDraft:
        return EditablePostDraft(
            title=self.title,
            description=self.description,
            recipe=self.recipe.to_domain(),
            ingredients=list(self.ingredients),
            photos=[_decode_base64(p) for p in self.photos],
            reference_photos=[_decode_base64(p) for p in self.referencePhotos],
            transcript=self.transcript,
            captured_ideas=list(self.capturedIdeas),
            custom_prompt=self.customPrompt,
            notes=list(self.notes),
        )


class DraftResponse(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    recipe: Optional[str] = None
    ingredients: Optional[list[str]] = None
    instructions: Optional[list[str]] = None
    notes: Optional[list[str]] = None
    recipeCreativeRanges: list[CreativeRangeModel] = Field(default_factory=list)
    instructionCreativeRanges: list[list[CreativeRangeModel]] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, draft: Draft) -> DraftResponse:
        return cls(
            title=draft.title,
            summary=draft.summary,
            description=draft.description,
            recipe=draft.recipe,
            ingredients=draft.ingredients,
            instructions=draft.instructions,
            notes=draft.notes,
            recipeCreativeRanges=[CreativeRangeModel.from_domain(r) for r in draft.recipe_creative_ranges],
            instructionCreativeRanges=[
                [CreativeRangeModel.from_domain(r) for r in ranges]
                for ranges in draft.instruction_creative_ranges
            ],
        )


class PostDraftResponse(BaseModel):
    title: str
    description: str
    recipe: RichTextModel
    ingredients: list[str]
    notes: list[str]
    capturedIdeas: list[str]

    @classmethod
    def from_domain(cls, post: EditablePostDraft) -> PostDraftResponse:
        return cls(
            title=post.title,
            description=post.description,
            recipe=RichTextModel.from_domain(post.recipe),
            ingredients=post.ingredients,
            notes=post.notes,
            capturedIdeas=post.captured_ideas,
        )


class GenerateDraftResponse(BaseModel):
    draft: DraftResponse
    post: PostDraftResponse


class ApiKeyStatus(BaseModel):
    configured: bool


class ApiKeyUpdate(BaseModel):
    apiKey: str = Field(..., min_length=1)

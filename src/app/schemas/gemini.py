from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Outbound -----------------------------------------------------------------

class InlineData(BaseModel):
    mimeType: str
    data: str


class Part(BaseModel):
    text: Optional[str] = None
    inlineData: Optional[InlineData] = None

    @classmethod
    def from_text(cls, text: str) -> Part:
        return cls(text=text)

    @classmethod
    def from_image(cls, data: str, mime_type: str = "image/jpeg") -> Part:
        return cls(inlineData=InlineData(mimeType=mime_type, data=data))

    @property
    def is_image(self) -> bool:
        return self.inlineData is not None


class Content(BaseModel):
    role: str = "user"
    parts: list[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    temperature: float
    topP: float
    responseMimeType: str


class GenerateContentRequest(BaseModel):
    contents: list[Content]
    generationConfig: GenerationConfig

    @property
    def parts(self) -> list[Part]:
        return [part for content in self.contents for part in content.parts]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# --- Inbound ------------------------------------------------------------------

class CandidatePart(BaseModel):
    text: Optional[str] = None


class CandidateContent(BaseModel):
    parts: list[CandidatePart] = Field(default_factory=list)


class Candidate(BaseModel):
    content: Optional[CandidateContent] = None
    finishReason: Optional[str] = None


class GenerateContentResponse(BaseModel):
    candidates: Optional[list[Candidate]] = None


class ApiErrorDetail(BaseModel):
    message: str


class ApiErrorEnvelope(BaseModel):
    error: ApiErrorDetail


class DraftPayload(BaseModel):
    """The JSON object the model is asked to return."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[list[str]] = None
    instructions: Optional[list[str]] = None
    notes: Optional[list[str]] = None
    recipe: Optional[str] = None

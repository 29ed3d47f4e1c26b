# src/app/domain/models.py
"""
Domain models for the AI draft pipeline.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

from src.app.domain.graphemes import grapheme_count, grapheme_slice

if TYPE_CHECKING:
    from src.app.domain.errors import DraftServiceError


class OrchestratorState(str, Enum):
    """Lifecycle of one draft request."""
    IDLE = "IDLE"
    REQUESTING = "REQUESTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class CreativeRange:
    """A span of model-assumed text, in grapheme clusters."""
    location: int
    length: int

    def __post_init__(self) -> None:
        if self.location < 0:
            raise ValueError(f"location must be >= 0, got {self.location}")
        if self.length <= 0:
            raise ValueError(f"length must be > 0, got {self.length}")

    @property
    def end(self) -> int:
        return self.location + self.length

    def shifted(self, offset: int) -> CreativeRange:
        return CreativeRange(location=self.location + offset, length=self.length)


@dataclass
class RichText:
    """Editor text plus the ranges rendered with a highlight background."""
    text: str = ""
    highlights: list[CreativeRange] = field(default_factory=list)

    @classmethod
    def with_highlights(cls, text: str, ranges: Iterable[CreativeRange]) -> RichText:
        """Build rich text, ignoring ranges that fall outside `text`."""
        total = grapheme_count(text)
        return cls(text=text, highlights=[r for r in ranges if r.end <= total])

    def highlighted_substrings(self) -> list[str]:
        return [grapheme_slice(self.text, r.location, r.end) for r in self.highlights]


@dataclass
class Draft:
    """
    Result of one generation call.
    Text fields are already cleaned of creative markers and trimmed.
    """
    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    recipe: Optional[str] = None
    ingredients: Optional[list[str]] = None
    instructions: Optional[list[str]] = None
    notes: Optional[list[str]] = None

    recipe_creative_ranges: list[CreativeRange] = field(default_factory=list)
    # one slot per entry of `instructions`
    instruction_creative_ranges: list[list[CreativeRange]] = field(default_factory=list)


@dataclass
class EditablePostDraft:
    """
    The post the author is composing.
    Owned by the caller; the pipeline reads it to build prompts and
    returns an updated copy after a successful generation.
    """
    title: str = ""
    description: str = ""
    recipe: RichText = field(default_factory=RichText)
    ingredients: list[str] = field(default_factory=list)

    # Published photos are attached to the post; reference photos are only AI context
    photos: list[bytes] = field(default_factory=list)
    reference_photos: list[bytes] = field(default_factory=list)

    transcript: str = ""
    captured_ideas: list[str] = field(default_factory=list)
    custom_prompt: str = ""
    notes: list[str] = field(default_factory=list)


@dataclass
class DraftOutcome:
    """What the orchestrator reports back for one finished request."""
    draft: Optional[Draft] = None
    error: Optional[DraftServiceError] = None
    post: Optional[EditablePostDraft] = None
    completed_at: Optional[datetime] = None

    @property
    def succeeded(self) -> bool:
        return self.draft is not None and self.error is None

    @property
    def message(self) -> Optional[str]:
        """User-facing sentence for a failed request."""
        if self.error is None:
            return None
        return self.error.user_message

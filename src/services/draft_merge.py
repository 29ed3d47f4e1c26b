"""
Merging a generated draft back into the post being edited.

Each editable field has one rule taking the current post and the draft and
returning the value to keep. Most rules only fill in what the model
returned; the notes rule is the one that can clear state.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Optional

from src.app.domain.graphemes import grapheme_count
from src.app.domain.models import CreativeRange, Draft, EditablePostDraft, RichText

MergeRule = Callable[[EditablePostDraft, Draft], Any]


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _non_blank_items(values: Optional[list[str]]) -> list[str]:
    if not values:
        return []
    return [value.strip() for value in values if value.strip()]


def numbered_steps(
    steps: list[str],
    step_ranges: list[list[CreativeRange]],
) -> RichText:
    """
    Join steps as "1. ...\\n2. ..." and move each step's ranges into the
    joined text.
    """
    lines: list[str] = []
    highlights: list[CreativeRange] = []
    offset = 0
    for index, step in enumerate(steps):
        prefix = f"{index + 1}. "
        line = prefix + step
        if index < len(step_ranges):
            shift = offset + grapheme_count(prefix)
            highlights.extend(r.shifted(shift) for r in step_ranges[index])
        lines.append(line)
        offset += grapheme_count(line) + 1
    return RichText.with_highlights("\n".join(lines), highlights)


def merge_title(post: EditablePostDraft, draft: Draft) -> str:
    return _non_blank(draft.title) or post.title


def merge_description(post: EditablePostDraft, draft: Draft) -> str:
    return _non_blank(draft.summary) or _non_blank(draft.description) or post.description


def merge_ingredients(post: EditablePostDraft, draft: Draft) -> list[str]:
    return _non_blank_items(draft.ingredients) or post.ingredients


def merge_recipe(post: EditablePostDraft, draft: Draft) -> RichText:
    if draft.instructions:
        return numbered_steps(draft.instructions, draft.instruction_creative_ranges)
    if _non_blank(draft.recipe):
        return RichText.with_highlights(draft.recipe, draft.recipe_creative_ranges)
    return post.recipe


def merge_notes(post: EditablePostDraft, draft: Draft) -> list[str]:
    return _non_blank_items(draft.notes)


MERGE_RULES: dict[str, MergeRule] = {
    "title": merge_title,
    "description": merge_description,
    "ingredients": merge_ingredients,
    "recipe": merge_recipe,
    "notes": merge_notes,
}


def apply_draft(post: EditablePostDraft, draft: Draft) -> EditablePostDraft:
    """Return `post` with every merge rule applied in one update."""
    updates = {name: rule(post, draft) for name, rule in MERGE_RULES.items()}
    return dataclasses.replace(post, **updates)

"""
Idea workshop actions.

Authors jot ideas while composing; saved ideas feed the AI prompt and can be
copied into the post by hand. Every action returns an updated copy of the post.
"""
from __future__ import annotations

import dataclasses

from src.app.domain.models import EditablePostDraft, RichText

IDEA_SEPARATOR = "\n\n"


def capture_idea(post: EditablePostDraft, idea: str) -> EditablePostDraft:
    """Save a trimmed idea at the top of the list; blank input is ignored."""
    trimmed = idea.strip()
    if not trimmed:
        return post
    return dataclasses.replace(post, captured_ideas=[trimmed, *post.captured_ideas])


def remove_idea(post: EditablePostDraft, index: int) -> EditablePostDraft:
    if not 0 <= index < len(post.captured_ideas):
        raise IndexError(f"No captured idea at index {index}")
    ideas = list(post.captured_ideas)
    del ideas[index]
    return dataclasses.replace(post, captured_ideas=ideas)


def apply_idea_to_title(post: EditablePostDraft, idea: str) -> EditablePostDraft:
    return dataclasses.replace(post, title=idea)


def apply_idea_to_description(post: EditablePostDraft, idea: str) -> EditablePostDraft:
    return dataclasses.replace(post, description=idea)


def append_idea_to_recipe(post: EditablePostDraft, idea: str) -> EditablePostDraft:
    # Appending never moves existing highlights
    if not post.recipe.text:
        return dataclasses.replace(post, recipe=RichText(text=idea))
    recipe = RichText(
        text=post.recipe.text + IDEA_SEPARATOR + idea,
        highlights=list(post.recipe.highlights),
    )
    return dataclasses.replace(post, recipe=recipe)


def clear_recipe(post: EditablePostDraft) -> EditablePostDraft:
    return dataclasses.replace(post, recipe=RichText())

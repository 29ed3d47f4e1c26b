"""
Inline creative-highlight markup.

The model wraps wording it invented or assumed in <creative>...</creative>.
These helpers remove the markers and report where the wrapped content ended
up, in grapheme clusters of the cleaned text.
"""
from __future__ import annotations

from src.app.domain.graphemes import grapheme_count
from src.app.domain.models import CreativeRange

OPEN_MARKER = "<creative>"
CLOSE_MARKER = "</creative>"


def parse_creative_markup(text: str) -> tuple[str, list[CreativeRange]]:
    """
    Strip creative markers from `text`.

    Nested markers are not supported: the first close marker ends the span.
    An unterminated open marker extends the span to the end of the input.
    Positions are measured on the cleaned text as a whole, since a span
    starting with a combining mark joins the character before it.

    Returns:
        Tuple of (cleaned_text, ranges)
    """
    pieces: list[str] = []
    spans: list[tuple[int, int]] = []
    position = 0

    while True:
        open_at = text.find(OPEN_MARKER, position)
        if open_at == -1:
            pieces.append(text[position:])
            break

        pieces.append(text[position:open_at])
        content_start = open_at + len(OPEN_MARKER)
        close_at = text.find(CLOSE_MARKER, content_start)
        content = text[content_start:] if close_at == -1 else text[content_start:close_at]
        if content:
            start = grapheme_count("".join(pieces))
            pieces.append(content)
            spans.append((start, grapheme_count("".join(pieces))))
        if close_at == -1:
            break
        position = close_at + len(CLOSE_MARKER)

    cleaned = "".join(pieces)
    total = grapheme_count(cleaned)
    ranges = [
        CreativeRange(location=start, length=min(end, total) - start)
        for start, end in spans
        if min(end, total) > start
    ]
    return cleaned, ranges


def strip_creative_markup(text: str) -> str:
    cleaned, _ = parse_creative_markup(text)
    return cleaned


def trim_with_ranges(
    text: str,
    ranges: list[CreativeRange],
) -> tuple[str, list[CreativeRange]]:
    """
    Trim surrounding whitespace and move `ranges` into the trimmed text.

    Ranges that only covered stripped whitespace are dropped; ranges that
    straddle the cut are clamped.
    """
    trimmed = text.strip()
    if trimmed == text:
        return text, ranges

    leading = grapheme_count(text) - grapheme_count(text.lstrip())
    trimmed_length = grapheme_count(trimmed)

    adjusted: list[CreativeRange] = []
    for creative_range in ranges:
        new_start = creative_range.location - leading
        new_end = creative_range.location + creative_range.length - leading
        if new_end <= 0:
            continue
        start = max(new_start, 0)
        end = min(new_end, trimmed_length)
        if end - start <= 0:
            continue
        adjusted.append(CreativeRange(location=start, length=end - start))

    return trimmed, adjusted


def clean_creative_text(text: str) -> tuple[str, list[CreativeRange]]:
    """Parse markers, then trim, keeping ranges aligned with the result."""
    cleaned, ranges = parse_creative_markup(text)
    return trim_with_ranges(cleaned, ranges)

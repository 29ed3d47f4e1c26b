"""
User-visible character counting.

Creative ranges are measured in extended grapheme clusters so that an emoji
with modifiers or a letter with combining accents counts as one character,
matching what the editor shows.
"""
from __future__ import annotations

import regex

_GRAPHEME_PATTERN = regex.compile(r"\X")


def split_graphemes(text: str) -> list[str]:
    return _GRAPHEME_PATTERN.findall(text)


def grapheme_count(text: str) -> int:
    if text.isascii():
        # "\r\n" is the only multi-code-point cluster in ASCII
        return len(text) - text.count("\r\n")
    return len(split_graphemes(text))


def grapheme_slice(text: str, start: int, end: int) -> str:
    """Slice `text` by grapheme positions instead of code points."""
    return "".join(split_graphemes(text)[start:end])

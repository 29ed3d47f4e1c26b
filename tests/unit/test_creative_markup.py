from __future__ import annotations

import pytest

from src.app.domain.graphemes import grapheme_count
from src.app.domain.models import CreativeRange, RichText
from src.services.creative_markup import (
    clean_creative_text,
    parse_creative_markup,
    strip_creative_markup,
    trim_with_ranges,
)


class TestParseCreativeMarkup:
    @pytest.mark.parametrize(
        "text",
        ["", "plain text", "  spaced  ", "a < b and c > d", "<creativ>almost</creativ>"],
    )
    def test_text_without_markers_is_unchanged(self, text: str) -> None:
        assert parse_creative_markup(text) == (text, [])

    def test_single_span(self) -> None:
        cleaned, ranges = parse_creative_markup("a<creative>bc</creative>d")
        assert cleaned == "abcd"
        assert ranges == [CreativeRange(location=1, length=2)]

    def test_unterminated_span_runs_to_end(self) -> None:
        cleaned, ranges = parse_creative_markup("a<creative>bc")
        assert cleaned == "abc"
        assert ranges == [CreativeRange(location=1, length=2)]

    def test_unterminated_empty_span(self) -> None:
        assert parse_creative_markup("abc<creative>") == ("abc", [])

    def test_empty_span_is_dropped(self) -> None:
        assert parse_creative_markup("a<creative></creative>b") == ("ab", [])

    def test_multiple_spans_use_cleaned_coordinates(self) -> None:
        cleaned, ranges = parse_creative_markup(
            "<creative>Sear</creative> the steak, then <creative>rest it</creative>."
        )
        assert cleaned == "Sear the steak, then rest it."
        assert ranges == [
            CreativeRange(location=0, length=4),
            CreativeRange(location=21, length=7),
        ]

    def test_locations_count_user_visible_characters(self) -> None:
        cleaned, ranges = parse_creative_markup("\U0001F336\ufe0f Add <creative>chili</creative>")
        assert cleaned == "\U0001F336\ufe0f Add chili"
        assert ranges == [CreativeRange(location=6, length=5)]

    def test_span_joining_previous_character_stays_in_bounds(self) -> None:
        # the skin tone modifier fuses with the thumbs up before the marker
        cleaned, ranges = parse_creative_markup("Top with \U0001F44D<creative>\U0001F3FD</creative>")
        assert cleaned == "Top with \U0001F44D\U0001F3FD"
        for r in ranges:
            assert r.end <= grapheme_count(cleaned)

    def test_span_starting_with_combining_mark(self) -> None:
        cleaned, ranges = parse_creative_markup("a<creative>\u0301bc</creative>")
        assert cleaned == "a\u0301bc"
        assert ranges == [CreativeRange(location=1, length=2)]
        assert RichText(text=cleaned, highlights=ranges).highlighted_substrings() == ["bc"]

    def test_stray_close_marker_is_kept(self) -> None:
        cleaned, ranges = parse_creative_markup("a</creative>b")
        assert cleaned == "a</creative>b"
        assert ranges == []

    def test_ranges_never_overlap(self) -> None:
        _, ranges = parse_creative_markup(
            "x<creative>ab</creative><creative>cd</creative>y<creative>ab</creative>"
        )
        for first, second in zip(ranges, ranges[1:]):
            assert first.end <= second.location


class TestStripCreativeMarkup:
    def test_strip(self) -> None:
        assert strip_creative_markup("Add <creative>a pinch of</creative> salt") == "Add a pinch of salt"


class TestTrimWithRanges:
    def test_range_moves_with_leading_trim(self) -> None:
        text, ranges = trim_with_ranges("  abc  ", [CreativeRange(location=2, length=1)])
        assert text == "abc"
        assert ranges == [CreativeRange(location=0, length=1)]

    def test_noop_without_surrounding_whitespace(self) -> None:
        original = [CreativeRange(location=0, length=3)]
        assert trim_with_ranges("abc", original) == ("abc", original)

    def test_range_inside_leading_whitespace_is_dropped(self) -> None:
        text, ranges = trim_with_ranges(
            "\n\n  abc",
            [CreativeRange(location=0, length=2), CreativeRange(location=4, length=3)],
        )
        assert text == "abc"
        assert ranges == [CreativeRange(location=0, length=3)]

    def test_range_inside_trailing_whitespace_is_dropped(self) -> None:
        original = [CreativeRange(location=0, length=1), CreativeRange(location=4, length=2)]
        text, ranges = trim_with_ranges("abc   ", original)
        assert text == "abc"
        assert len(ranges) == len(original) - 1
        assert ranges == [CreativeRange(location=0, length=1)]

    def test_straddling_ranges_are_clamped(self) -> None:
        text, ranges = trim_with_ranges(
            "  abc  ",
            [CreativeRange(location=1, length=2), CreativeRange(location=4, length=3)],
        )
        assert text == "abc"
        assert ranges == [CreativeRange(location=0, length=1), CreativeRange(location=2, length=1)]

    def test_whitespace_only_text(self) -> None:
        assert trim_with_ranges("   ", [CreativeRange(location=0, length=3)]) == ("", [])

    def test_crlf_counts_as_one_character(self) -> None:
        text, ranges = trim_with_ranges("\r\nabc", [CreativeRange(location=1, length=3)])
        assert text == "abc"
        assert ranges == [CreativeRange(location=0, length=3)]

    def test_combining_mark_after_leading_space(self) -> None:
        # " \u0301" is one character; trimming leaves "\u0301" as one character
        text, ranges = trim_with_ranges(" \u0301abc", [CreativeRange(location=1, length=3)])
        assert text == "\u0301abc"
        assert ranges == [CreativeRange(location=1, length=3)]
        assert RichText(text=text, highlights=ranges).highlighted_substrings() == ["abc"]


class TestCleanCreativeText:
    def test_parse_then_trim(self) -> None:
        text, ranges = clean_creative_text("  Boil <creative>gently</creative>  ")
        assert text == "Boil gently"
        assert ranges == [CreativeRange(location=5, length=6)]

    def test_ranges_stay_within_text(self) -> None:
        text, ranges = clean_creative_text("<creative>  whisk  </creative>")
        assert text == "whisk"
        assert ranges == [CreativeRange(location=0, length=5)]

    def test_modifier_span_never_overruns_text(self) -> None:
        text, ranges = clean_creative_text("Top with \U0001F44D<creative>\U0001F3FD</creative>")
        assert grapheme_count(text) == 10
        for r in ranges:
            assert r.end <= grapheme_count(text)

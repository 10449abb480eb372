#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for heading_rules module.
"""

import pytest

from txt_book_importer.detection_settings import DetectionSettings
from txt_book_importer.heading_rules import (
    RULES_BY_NAME,
    CapsBlockHeadingRule,
    FullTextRule,
    KeywordHeadingRule,
    NumeralSequenceRule,
    WhitespaceGapRule,
    build_rules,
    fold_front_matter,
    next_non_blank,
)
from txt_book_importer.line_classifier import classify_lines


def spans(position):
    """(heading_index, start, end) of every entry."""
    return [(e.heading_index, e.start, e.end) for e in position]


class TestHelpers:
    """Test the shared rule helpers."""

    def test_next_non_blank(self):
        """Test searching for the next text line."""
        lines = classify_lines(["a", "", "", "b"])
        assert next_non_blank(lines, 0) == 3
        assert next_non_blank(lines, 3) is None
        assert next_non_blank(lines, -1) == 0

    def test_fold_front_matter(self):
        """Test that leading blank lines join the first chapter."""
        lines = classify_lines(["", "", "Chapter 1", "x"])
        assert fold_front_matter(lines, [(2, 2, "1", 1)]) == [(0, 2, "1", 1)]
        text_before = classify_lines(["Intro", "", "Chapter 1", "x"])
        assert fold_front_matter(text_before, [(2, 2, "1", 1)]) == [(2, 2, "1", 1)]

    def test_fold_front_matter_text_limit(self):
        """Test that a few text lines join the first chapter up to the limit."""
        lines = classify_lines(["Intro", "", "More intro", "Chapter 1", "x"])
        assert fold_front_matter(lines, [(3, 3, "1", 1)], max_text_lines=1) == [(3, 3, "1", 1)]
        assert fold_front_matter(lines, [(3, 3, "1", 1)], max_text_lines=2) == [(0, 3, "1", 1)]


class TestKeywordHeadingRule:
    """Test KeywordHeadingRule."""

    def test_simple_chapters(self, scenario_a_lines):
        """Test CHAPTER ONE / TWO / THREE."""
        position = KeywordHeadingRule().scan(classify_lines(scenario_a_lines))
        assert spans(position) == [(0, 0, 2), (3, 3, 5), (6, 6, 7)]
        assert [e.title for e in position] == ["ONE", "TWO", "THREE"]
        assert position.numbers() == [1, 2, 3]

    def test_front_matter(self):
        """Test that longer text before the first heading becomes its own entry."""
        lines = classify_lines(["A Novel", "by Someone", "", "Chapter 1", "Text.", "Chapter 2", "Text."])
        assert spans(KeywordHeadingRule().scan(lines)) == [(None, 0, 2), (3, 3, 4), (5, 5, 6)]

    def test_short_front_matter_is_folded(self):
        """Test that a single opening line joins the first chapter."""
        lines = classify_lines(["A Novel", "", "Chapter 1", "Text.", "Chapter 2", "Text."])
        assert spans(KeywordHeadingRule().scan(lines)) == [(2, 0, 3), (4, 4, 5)]

    def test_evenly_spaced_chapters(self, evenly_spaced_lines):
        """Test twenty blank-separated lines with three evenly spaced headings."""
        position = KeywordHeadingRule().scan(classify_lines(evenly_spaced_lines))
        assert spans(position) == [(3, 0, 8), (9, 9, 14), (15, 15, 19)]
        assert [e.title for e in position] == ["ONE", "TWO", "THREE"]

    def test_leading_blanks_are_folded(self):
        """Test that only blank lines before the first heading do not form an entry."""
        lines = classify_lines(["", "", "Chapter 1", "Text.", "Chapter 2", "Text."])
        assert spans(KeywordHeadingRule().scan(lines)) == [(2, 0, 3), (4, 4, 5)]

    def test_ignores_quoted_and_mid_sentence_keywords(self):
        """Test that prose mentioning chapters does not split the text."""
        lines = classify_lines(
            [
                "Chapter 1",
                "She opened the book at random.",
                '"Chapter 2," she read aloud, "is where it begins."',
                "Then she read chapter 2 of the manual.",
                "Chapter 2",
                "The end came quickly.",
            ]
        )
        assert spans(KeywordHeadingRule().scan(lines)) == [(0, 0, 3), (4, 4, 5)]

    def test_drops_nearby_duplicates(self):
        """Test that a repeated heading within the window counts once."""
        lines = classify_lines(["Chapter 1", "Chapter 1", "Text.", "", "Chapter 2", "Text."])
        assert spans(KeywordHeadingRule().scan(lines)) == [(0, 0, 3), (4, 4, 5)]

    def test_drops_table_of_contents(self):
        """Test that contents entries re-appearing later are not chapters."""
        lines = classify_lines(
            [
                "Contents",
                "",
                "Chapter 1",
                "Chapter 2",
                "",
                "Chapter 1",
                "",
                "Body one.",
                "",
                "Chapter 2",
                "",
                "Body two.",
            ]
        )
        assert spans(KeywordHeadingRule().scan(lines)) == [(None, 0, 4), (5, 5, 8), (9, 9, 11)]

    def test_part_heading_folded_into_chapter(self):
        """Test that a part heading directly above a chapter joins its range."""
        lines = classify_lines(["PART ONE", "", "Chapter 1", "", "Text a.", "", "Chapter 2", "", "Text b."])
        assert spans(KeywordHeadingRule().scan(lines)) == [(2, 0, 5), (6, 6, 8)]

    def test_too_few_headings(self):
        """Test that a single heading gives an empty position."""
        lines = classify_lines(["Chapter 1", "Text."])
        assert len(KeywordHeadingRule().scan(lines)) == 0

    def test_empty_input(self):
        """Test that empty input gives an empty position."""
        assert len(KeywordHeadingRule().scan([])) == 0


class TestNumeralSequenceRule:
    """Test NumeralSequenceRule."""

    def test_sequential_numerals(self):
        """Test numerals counting up from one."""
        lines = classify_lines(["1", "", "It began.", "", "2", "", "It went on.", "", "3", "", "It ended."])
        position = NumeralSequenceRule().scan(lines)
        assert spans(position) == [(0, 0, 3), (4, 4, 7), (8, 8, 10)]
        assert [e.title for e in position] == ["1", "2", "3"]

    def test_keyword_lines_are_not_numerals(self):
        """Test that "Chapter 2" is left to the keyword rule."""
        lines = classify_lines(["1", "Text.", "", "Chapter 2", "Text.", "", "2", "Text."])
        assert spans(NumeralSequenceRule().scan(lines)) == [(0, 0, 5), (6, 6, 7)]

    def test_roman_numerals(self):
        """Test roman numerals."""
        lines = classify_lines(["I.", "Text.", "", "II.", "Text."])
        assert spans(NumeralSequenceRule().scan(lines)) == [(0, 0, 2), (3, 3, 4)]

    def test_out_of_sequence_numbers_are_ignored(self):
        """Test that numbers breaking the sequence are not headings."""
        lines = classify_lines(["1", "Text.", "", "7", "Text.", "", "2", "Text."])
        assert spans(NumeralSequenceRule().scan(lines)) == [(0, 0, 5), (6, 6, 7)]

    def test_sequence_must_start_at_one(self):
        """Test that a sequence starting elsewhere is not accepted."""
        lines = classify_lines(["5", "Text.", "", "6", "Text."])
        assert len(NumeralSequenceRule().scan(lines)) == 0


class TestCapsBlockHeadingRule:
    """Test CapsBlockHeadingRule."""

    def test_caps_headings(self):
        """Test short capital lines framed by blank lines."""
        lines = classify_lines(
            ["THE BEGINNING", "", "Once upon a time.", "", "THE MIDDLE", "", "Things happened.", "", "THE END", "", "They lived."]
        )
        position = CapsBlockHeadingRule().scan(lines)
        assert spans(position) == [(0, 0, 3), (4, 4, 7), (8, 8, 10)]
        assert position[1].title == "THE MIDDLE"

    def test_caps_line_inside_paragraph(self):
        """Test that a capital line without blank lines around it is ignored."""
        lines = classify_lines(["ONE", "", "Text.", "SHOUTING", "Text.", "", "TWO", "", "Text."])
        assert spans(CapsBlockHeadingRule().scan(lines)) == [(0, 0, 5), (6, 6, 8)]

    def test_trailing_the_end(self):
        """Test that a closing line with nothing after it is not a heading."""
        lines = classify_lines(["ONE", "", "Text.", "", "TWO", "", "Text.", "", "THE END", ""])
        assert spans(CapsBlockHeadingRule().scan(lines)) == [(0, 0, 3), (4, 4, 9)]


class TestWhitespaceGapRule:
    """Test WhitespaceGapRule."""

    def test_gap_separated_sections(self):
        """Test sections separated by three blank lines."""
        lines = classify_lines(
            [
                "The first section opens with a sentence that is clearly longer than fifty characters.",
                "More text.",
                "",
                "",
                "",
                "Second",
                "Text of the second section.",
                "",
                "",
                "",
                "Third",
                "Text of the third section.",
            ]
        )
        position = WhitespaceGapRule().scan(lines)
        assert spans(position) == [(None, 0, 4), (5, 5, 9), (10, 10, 11)]
        assert position[2].title == "Third"

    def test_gap_size_from_settings(self):
        """Test that shorter gaps count with a smaller gap size."""
        lines = classify_lines(["Alpha", "Text.", "", "Beta", "Text."])
        assert len(WhitespaceGapRule().scan(lines)) == 0
        assert spans(WhitespaceGapRule(DetectionSettings(blank_gap_size=1)).scan(lines)) == [(0, 0, 2), (3, 3, 4)]

    def test_only_blank_lines(self):
        """Test that blank input gives an empty position."""
        assert len(WhitespaceGapRule().scan(classify_lines(["", ""]))) == 0


class TestFullTextRule:
    """Test FullTextRule."""

    def test_single_entry(self, prose_lines):
        """Test that everything becomes one heading-less chapter."""
        assert spans(FullTextRule().scan(classify_lines(prose_lines))) == [(None, 0, 4)]

    def test_empty_input(self):
        """Test that no lines give no chapter."""
        assert len(FullTextRule().scan([])) == 0


class TestRuleContract:
    """Test properties shared by all rules."""

    @pytest.mark.parametrize("rule_cls", list(RULES_BY_NAME.values()) + [FullTextRule])
    def test_idempotent(self, rule_cls, gutenberg_lines):
        """Test that scanning twice gives the same result."""
        lines = classify_lines(gutenberg_lines)
        rule = rule_cls()
        assert rule.scan(lines) == rule.scan(lines)

    @pytest.mark.parametrize("rule_cls", list(RULES_BY_NAME.values()))
    def test_degenerate_input(self, rule_cls):
        """Test that rules never raise on empty or blank input."""
        rule = rule_cls()
        assert len(rule.scan([])) == 0
        assert len(rule.scan(classify_lines([""]))) == 0


class TestBuildRules:
    """Test build_rules."""

    def test_default_order(self):
        """Test the default priority order."""
        assert [rule.name for rule in build_rules()] == ["keyword", "numeral_sequence", "caps_block", "whitespace_gap"]

    def test_custom_order(self):
        """Test a configured subset and order."""
        settings = DetectionSettings(rule_order=("caps_block", "keyword"))
        assert [rule.name for rule in build_rules(settings)] == ["caps_block", "keyword"]

    def test_unknown_rule(self):
        """Test that an unknown rule name raises ValueError."""
        with pytest.raises(ValueError, match="Unknown chapter detection rule"):
            build_rules(DetectionSettings(rule_order=("keyword", "magic")))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for chapter_detector module.
"""

import logging

import pytest

from txt_book_importer.chapter_detector import (
    AutomatedChapterDetector,
    DetectionState,
    EmptyInputError,
    detect,
)
from txt_book_importer.chapter_position import ChapterPosition
from txt_book_importer.detection_settings import DetectionSettings
from txt_book_importer.heading_rules import KeywordHeadingRule
from txt_book_importer.line_classifier import classify_lines


class OverlappingRule:
    """Proposes two overlapping chapters."""

    name = "overlapping"

    def scan(self, lines):
        return ChapterPosition().add_chapter(0, 0, 3).add_chapter(2, 2, 4)


class BrokenRule:
    """Always fails."""

    name = "broken"

    def scan(self, lines):
        raise RuntimeError("boom")


def assert_partition(position, line_count):
    """Entries are sorted, disjoint and cover every line."""
    assert len(position) >= 1
    assert position.is_ordered()
    assert position.covers(line_count)


class TestScenarios:
    """End-to-end detection scenarios."""

    def test_keyword_chapters(self, scenario_a_lines):
        """CHAPTER ONE/TWO/THREE give three titled chapters."""
        detector = AutomatedChapterDetector(scenario_a_lines)
        position = detector.get_chapter_position()
        assert len(position) == 3
        assert [e.title for e in position] == ["ONE", "TWO", "THREE"]
        assert detector.accepted_rule == "keyword"
        assert_partition(position, len(scenario_a_lines))

    def test_evenly_spaced_chapters_with_short_opening(self, evenly_spaced_lines):
        """Twenty lines with evenly spaced CHAPTER headings give exactly three chapters."""
        position = detect(evenly_spaced_lines)
        assert [(e.heading_index, e.start, e.end) for e in position] == [(3, 0, 8), (9, 9, 14), (15, 15, 19)]
        assert [e.title for e in position] == ["ONE", "TWO", "THREE"]
        assert_partition(position, len(evenly_spaced_lines))

    def test_opening_kept_apart_when_folding_disabled(self, evenly_spaced_lines):
        """With folding switched off the opening line forms its own entry."""
        position = detect(evenly_spaced_lines, settings=DetectionSettings(front_matter_fold_lines=0))
        assert [(e.heading_index, e.start, e.end) for e in position] == [(None, 0, 2), (3, 3, 8), (9, 9, 14), (15, 15, 19)]

    def test_prose_falls_back_to_full_text(self, prose_lines):
        """Prose without headings becomes one chapter without heading."""
        detector = AutomatedChapterDetector(prose_lines)
        position = detector.get_chapter_position()
        assert len(position) == 1
        assert (position[0].heading_index, position[0].start, position[0].end) == (None, 0, 4)
        assert detector.accepted_rule == "full_text"
        assert [o.accepted for o in detector.outcomes] == [False, False, False, False, True]

    def test_empty_input(self):
        """Empty input is rejected with EmptyInputError."""
        with pytest.raises(EmptyInputError):
            detect([])
        with pytest.raises(EmptyInputError):
            AutomatedChapterDetector([])
        with pytest.raises(EmptyInputError):
            detect([], detect_chapters=False)

    def test_none_input(self):
        """None is not a valid input."""
        with pytest.raises(ValueError):
            detect(None)
        with pytest.raises(ValueError):
            AutomatedChapterDetector(None)

    def test_overlapping_candidate_rejected(self):
        """An overlapping candidate is rejected and the next rule is used."""
        lines = classify_lines(["Chapter 1", "Text a.", "Chapter 2", "Text b.", "Text c."])
        detector = AutomatedChapterDetector(lines, rules=[OverlappingRule(), KeywordHeadingRule()])
        position = detector.get_chapter_position()
        assert [(e.start, e.end) for e in position] == [(0, 1), (2, 4)]
        assert detector.accepted_rule == "keyword"
        assert detector.outcomes[0].accepted is False
        assert "overlapping" in detector.outcomes[0].reason


class TestDetector:
    """Test detector behaviour."""

    def test_failing_rule_is_skipped(self, scenario_a_lines, caplog):
        """A rule raising an exception counts as rejected."""
        detector = AutomatedChapterDetector(scenario_a_lines, rules=[BrokenRule(), KeywordHeadingRule()])
        with caplog.at_level(logging.WARNING, logger="txt_book_importer.chapter_detector"):
            position = detector.get_chapter_position()
        assert len(position) == 3
        assert detector.outcomes[0].reason == "rule failed: boom"
        assert "Chapter rule 'broken' failed" in caplog.text

    def test_state_machine_ends_done(self, scenario_a_lines):
        """The detector walks from START to DONE."""
        detector = AutomatedChapterDetector(scenario_a_lines)
        assert detector.state is DetectionState.START
        detector.get_chapter_position()
        assert detector.state is DetectionState.DONE

    def test_result_is_cached(self, scenario_a_lines):
        """Detection runs only once per detector."""
        detector = AutomatedChapterDetector(scenario_a_lines)
        first = detector.get_chapter_position()
        assert detector.get_chapter_position() is first
        assert len(detector.outcomes) == 1

    def test_rule_order_from_settings(self):
        """Rules run in the configured order."""
        lines = ["ONE", "", "Text.", "", "Chapter 2", "", "Text.", "", "TWO", "", "Text."]
        settings = DetectionSettings(rule_order=("caps_block", "keyword"))
        detector = AutomatedChapterDetector(lines, settings=settings)
        detector.get_chapter_position()
        assert detector.accepted_rule == "caps_block"

    def test_heading_without_body_rejected(self):
        """Headings directly following each other fail validation."""
        lines = ["Chapter 1", "", "Chapter 2", "", "Chapter 3", "Text."]
        detector = AutomatedChapterDetector(lines, settings=DetectionSettings(rule_order=("keyword",)))
        position = detector.get_chapter_position()
        assert detector.accepted_rule == "full_text"
        assert len(position) == 1

    def test_numbering_issues_are_reported(self, caplog):
        """Gaps in chapter numbers are logged and exposed."""
        lines = ["Chapter 1", "Text.", "", "Chapter 3", "Text."]
        detector = AutomatedChapterDetector(lines)
        with caplog.at_level(logging.WARNING, logger="txt_book_importer.chapter_detector"):
            detector.get_chapter_position()
        assert detector.issues == ["number 2 is missing"]
        assert "Chapter numbering: number 2 is missing" in caplog.text

    def test_huge_heading_number_reports_one_gap(self):
        """A far-off heading number produces a single range issue."""
        lines = ["Chapter 1", "Text.", "", "Chapter 3000000", "Text."]
        detector = AutomatedChapterDetector(lines)
        assert len(detector.get_chapter_position()) == 2
        assert detector.issues == ["numbers 2-2999999 are missing"]

    def test_lines_from_a_larger_area_are_reindexed(self):
        """Classified lines sliced out of a longer text are numbered from 0."""
        classified = classify_lines(["Title", "", "Chapter 1", "Text one.", "", "Chapter 2", "Text two.", "", "Chapter 3", "Text three."])
        detector = AutomatedChapterDetector(classified[2:])
        position = detector.get_chapter_position()
        assert detector.accepted_rule == "keyword"
        assert [(e.heading_index, e.start, e.end) for e in position] == [(0, 0, 2), (3, 3, 5), (6, 6, 7)]


class TestDetect:
    """Test the module level detect function."""

    def test_detection_disabled(self, scenario_a_lines):
        """detect_chapters=False always gives the full-text chapter."""
        position = detect(scenario_a_lines, detect_chapters=False)
        assert len(position) == 1
        assert (position[0].start, position[0].end) == (0, len(scenario_a_lines) - 1)
        assert position[0].heading_index is None

    @pytest.mark.parametrize(
        "lines",
        [
            ["x"],
            [""],
            ["", "", ""],
            ["Chapter 1"],
            ["Chapter 1", "Chapter 2"],
            ["1", "", "2", "", "3"],
            ["THE END"],
        ],
    )
    def test_always_a_partition(self, lines):
        """Non-empty input always yields ordered entries covering every line."""
        assert_partition(detect(lines), len(lines))

    def test_gutenberg_text_area(self, gutenberg_lines):
        """Detection on the full sample file still yields a partition."""
        assert_partition(detect(gutenberg_lines), len(gutenberg_lines))

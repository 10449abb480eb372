#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
heading_rules.py - Independent chapter heading detection rules
==============================================================

Each rule scans the classified lines of one text area and proposes a
``ChapterPosition``. Rules are plain objects sharing the ``scan`` signature;
the order in which they are tried is an explicit list (``build_rules``), not
a class hierarchy.

Contract shared by all rules:
- never raise on empty or degenerate input,
- return an empty position when fewer than ``min_chapters`` headings are found,
- same input, same output.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .chapter_position import ChapterPosition, full_text_position, position_from_headings
from .detection_settings import DetectionSettings
from .heading_patterns import (
    KEYWORD_HEADING_RE,
    PART_KEYWORDS,
    SPECIAL_HEADING_RE,
    extract_title,
    heading_number,
)
from .line_classifier import Line, LineType

logger = logging.getLogger(__name__)

# (range_start, heading_index, title, number) as consumed by position_from_headings
HeadingTuple = tuple[int, "int | None", "str | None", "int | None"]


class HeadingRule(Protocol):
    """Anything with a name and a ``scan`` method can serve as a detection rule."""

    name: str

    def scan(self, lines: Sequence[Line]) -> ChapterPosition: ...


# ───────────────────────────── helpers ───────────────────────────── #


def next_non_blank(lines: Sequence[Line], index: int) -> int | None:
    """Index of the first non-blank line after ``index``."""
    for i in range(index + 1, len(lines)):
        if not lines[i].is_blank:
            return i
    return None


def is_blank_before(lines: Sequence[Line], index: int) -> bool:
    """True at the start of the input or after a blank line."""
    return index == 0 or lines[index - 1].is_blank


def is_blank_after(lines: Sequence[Line], index: int) -> bool:
    return index + 1 < len(lines) and lines[index + 1].is_blank


def fold_front_matter(lines: Sequence[Line], headings: list[HeadingTuple], max_text_lines: int = 0) -> list[HeadingTuple]:
    """
    Let the first chapter start at line 0 when little text precedes it.

    Blank lines before the first heading always join the first chapter; up to
    ``max_text_lines`` non-blank lines do so as well. Longer front matter is
    left alone and becomes a heading-less chapter of its own.
    """
    if not headings:
        return headings
    start, heading_index, title, number = headings[0]
    if start > 0 and sum(1 for line in lines[:start] if not line.is_blank) <= max_text_lines:
        return [(0, heading_index, title, number)] + headings[1:]
    return headings


def _heading_tuple(line: Line, range_start: int | None = None) -> HeadingTuple:
    start = line.index if range_start is None else range_start
    return (start, line.index, extract_title(line.text), heading_number(line.text))


# ───────────────────────────── rules ───────────────────────────── #


class KeywordHeadingRule:
    """
    Headings introduced by a keyword: "Chapter 3: The Storm", "CHAPTER ONE",
    "PART II", "Prologue".

    Duplicated headings within a few lines and table-of-contents entries are
    skipped. A part heading directly followed by a chapter heading is folded
    into that chapter's range.
    """

    name = "keyword"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    @staticmethod
    def _keyword(line: Line) -> str:
        m = KEYWORD_HEADING_RE.match(line.text) or SPECIAL_HEADING_RE.match(line.text)
        return m.group("keyword").lower() if m else ""

    @classmethod
    def _heading_key(cls, line: Line) -> tuple[str, int | str | None]:
        """Identity of a heading, shared by a contents entry and the heading it points to."""
        number = heading_number(line.text)
        return (cls._keyword(line), number if number is not None else line.text.casefold())

    def _drop_duplicates(self, candidates: list[Line]) -> list[Line]:
        kept: list[Line] = []
        for line in candidates:
            if kept and line.index - kept[-1].index <= self.settings.duplicate_window and line.text == kept[-1].text:
                continue
            kept.append(line)
        return kept

    def _drop_contents_entries(self, lines: Sequence[Line], candidates: list[Line]) -> list[Line]:
        """
        Remove table-of-contents entries.

        An entry of a contents list is a heading with no text between it and
        the next heading whose key shows up again further down.
        """
        kept: list[Line] = []
        for pos, line in enumerate(candidates):
            later = candidates[pos + 1 :]
            if later:
                following = later[0]
                no_text_between = all(lines[i].is_blank for i in range(line.index + 1, following.index))
                key = self._heading_key(line)
                if no_text_between and any(self._heading_key(other) == key for other in later):
                    continue
            kept.append(line)
        return kept

    def scan(self, lines: Sequence[Line]) -> ChapterPosition:
        if not lines:
            return ChapterPosition()

        candidates = [line for line in lines if line.line_type is LineType.KEYWORD_HEADING]
        candidates = self._drop_duplicates(candidates)
        candidates = self._drop_contents_entries(lines, candidates)

        headings: list[HeadingTuple] = []
        pending_part: Line | None = None
        for pos, line in enumerate(candidates):
            following = candidates[pos + 1] if pos + 1 < len(candidates) else None
            is_part = self._keyword(line) in PART_KEYWORDS
            if is_part and following is not None and self._keyword(following) not in PART_KEYWORDS and next_non_blank(lines, line.index) == following.index:
                pending_part = line
                continue
            range_start = pending_part.index if pending_part is not None else None
            headings.append(_heading_tuple(line, range_start))
            pending_part = None

        if len(headings) < self.settings.min_chapters:
            return ChapterPosition()
        return position_from_headings(fold_front_matter(lines, headings, self.settings.front_matter_fold_lines), len(lines))


class NumeralSequenceRule:
    """Headings consisting solely of a numeral ("1", "II.", "3") counting up from 1."""

    name = "numeral_sequence"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    def scan(self, lines: Sequence[Line]) -> ChapterPosition:
        if not lines:
            return ChapterPosition()

        headings: list[HeadingTuple] = []
        expected: int | None = None
        for line in lines:
            if line.line_type is not LineType.NUMERAL_HEADING or not is_blank_before(lines, line.index):
                continue
            number = heading_number(line.text)
            if number is None:
                continue
            if (expected is None and number in (0, 1)) or number == expected:
                headings.append(_heading_tuple(line))
                expected = number + 1

        if len(headings) < self.settings.min_chapters:
            return ChapterPosition()
        return position_from_headings(fold_front_matter(lines, headings, self.settings.front_matter_fold_lines), len(lines))


class CapsBlockHeadingRule:
    """Short all-caps lines standing alone between blank lines: "THE STORM"."""

    name = "caps_block"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    def scan(self, lines: Sequence[Line]) -> ChapterPosition:
        if not lines:
            return ChapterPosition()

        headings: list[HeadingTuple] = []
        previous: Line | None = None
        for line in lines:
            if not (line.is_all_caps and line.is_short) or line.is_contents_marker:
                continue
            if not (is_blank_before(lines, line.index) and is_blank_after(lines, line.index)):
                continue
            # a closing "THE END" has no chapter after it
            if next_non_blank(lines, line.index) is None:
                continue
            if previous is not None and line.text == previous.text and line.index - previous.index <= self.settings.duplicate_window:
                continue
            headings.append(_heading_tuple(line))
            previous = line

        if len(headings) < self.settings.min_chapters:
            return ChapterPosition()
        return position_from_headings(fold_front_matter(lines, headings, self.settings.front_matter_fold_lines), len(lines))


class WhitespaceGapRule:
    """
    Chapters separated by runs of at least ``blank_gap_size`` blank lines.

    The first non-blank line of a section counts as its heading when it is
    short; otherwise the section has no heading.
    """

    name = "whitespace_gap"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    def _section_tuple(self, lines: Sequence[Line], start: int, first_text: int) -> HeadingTuple:
        line = lines[first_text]
        if line.is_short:
            return (start, first_text, extract_title(line.text), heading_number(line.text))
        return (start, None, None, None)

    def scan(self, lines: Sequence[Line]) -> ChapterPosition:
        if not lines:
            return ChapterPosition()

        first_text = next_non_blank(lines, -1)
        if first_text is None:
            return ChapterPosition()

        sections = [self._section_tuple(lines, 0, first_text)]
        blank_run = 0
        for line in lines[first_text:]:
            if line.is_blank:
                blank_run += 1
                continue
            if blank_run >= self.settings.blank_gap_size:
                sections.append(self._section_tuple(lines, line.index, line.index))
            blank_run = 0

        if len(sections) < self.settings.min_chapters:
            return ChapterPosition()

        return position_from_headings(sections, len(lines))


class FullTextRule:
    """Not really a rule: puts the whole text into one chapter without heading."""

    name = "full_text"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    def scan(self, lines: Sequence[Line]) -> ChapterPosition:
        if not lines:
            return ChapterPosition()
        return full_text_position(len(lines))


RULES_BY_NAME: dict[str, type] = {
    KeywordHeadingRule.name: KeywordHeadingRule,
    NumeralSequenceRule.name: NumeralSequenceRule,
    CapsBlockHeadingRule.name: CapsBlockHeadingRule,
    WhitespaceGapRule.name: WhitespaceGapRule,
}


def build_rules(settings: DetectionSettings | None = None) -> list[HeadingRule]:
    """
    Instantiate the heading rules in the configured priority order.

    Args:
        settings: Detection settings; ``rule_order`` lists rule names

    Returns:
        Rules, most specific first. The full-text rule is never included;
        the detector applies it as fallback.

    Raises:
        ValueError: If ``rule_order`` names an unknown rule
    """
    settings = settings or DetectionSettings()
    rules: list[HeadingRule] = []
    for name in settings.rule_order:
        rule_cls = RULES_BY_NAME.get(name)
        if rule_cls is None:
            raise ValueError(f"Unknown chapter detection rule: {name!r}. Valid rules: {', '.join(RULES_BY_NAME)}")
        rules.append(rule_cls(settings))
    return rules

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
line_classifier.py - Structural features of single text lines
=============================================================

Every input line is turned into an immutable ``Line`` carrying the features
the heading rules work with. Classification is a pure function of the raw
text, its index and the detection thresholds.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, replace
from typing import Iterable

import regex

from .detection_settings import DEFAULT_SHORT_LINE_THRESHOLD, DetectionSettings
from .heading_patterns import (
    CHAPTER_KEYWORDS,
    CONTENTS_RE,
    KEYWORD_HEADING_RE,
    NUMERAL_LINE_RE,
    REMAINDER_SEPARATORS,
    SENTENCE_ENDINGS,
    SPECIAL_HEADING_RE,
)

_ANY_LETTER_RE = regex.compile(r"\p{L}")
# Any letter that is not an uppercase letter (lowercase, titlecase, caseless scripts)
_NON_UPPER_LETTER_RE = regex.compile(r"[\p{Ll}\p{Lt}\p{Lm}\p{Lo}]")

# Characters allowed in front of a heading keyword
_HEADING_DECORATION = "#*>§[](){}|-–—•~/"


class LineType(enum.Enum):
    """Structural role suggested by a line's features."""

    BLANK = 1
    """Empty or whitespace-only line."""
    TEXT = 2
    """Ordinary body text."""
    KEYWORD_HEADING = 3
    """Line introduced by a heading keyword (Chapter, Part, Prologue, ...)."""
    NUMERAL_HEADING = 4
    """Line holding nothing but a numeral."""
    CAPS_HEADING = 5
    """Short line written entirely in capitals."""
    CONTENTS_MARKER = 6
    """A "Contents" / "Table of Contents" line."""


@dataclass(frozen=True)
class Line:
    """One classified input line. ``index`` is relative to the analysed area."""

    raw: str
    index: int
    text: str
    indentation: int
    is_blank: bool
    is_all_caps: bool
    is_short: bool
    is_numeric_heading: bool
    matches_keyword: bool
    is_contents_marker: bool

    @property
    def line_type(self) -> LineType:
        if self.is_blank:
            return LineType.BLANK
        if self.is_contents_marker:
            return LineType.CONTENTS_MARKER
        if self.matches_keyword:
            return LineType.KEYWORD_HEADING
        if self.is_numeric_heading:
            return LineType.NUMERAL_HEADING
        if self.is_all_caps and self.is_short:
            return LineType.CAPS_HEADING
        return LineType.TEXT


def is_blank(raw: str) -> bool:
    """True for empty and whitespace-only lines."""
    return not raw.strip()


def is_all_caps(raw: str) -> bool:
    """True if the line has at least one letter and every letter is uppercase."""
    text = raw.strip()
    if not text or not _ANY_LETTER_RE.search(text):
        return False
    return _NON_UPPER_LETTER_RE.search(text) is None


def is_short(raw: str, threshold: int = DEFAULT_SHORT_LINE_THRESHOLD) -> bool:
    """True if the stripped line is shorter than ``threshold`` characters."""
    return len(raw.strip()) < threshold


def indentation_of(raw: str) -> int:
    """Number of leading whitespace characters (a tab counts as four)."""
    expanded = raw.expandtabs(4)
    return len(expanded) - len(expanded.lstrip())


def is_valid_heading_line(raw: str) -> bool:
    """
    Check that a heading keyword is at the start of the line.

    The keyword may only be preceded by whitespace or decoration characters;
    a keyword inside quotes or in mid-sentence is not a heading.
    """
    text = raw.strip()
    if text.startswith(('"', "'", "“", "‘", "«")):
        return False

    m = KEYWORD_HEADING_RE.match(text) or SPECIAL_HEADING_RE.match(text)
    if not m:
        return False

    before = text[: m.start("keyword")]
    return all(c in _HEADING_DECORATION or c.isspace() for c in before)


def _is_heading_remainder(text: str, rest: str, threshold: int) -> bool:
    """Decide whether what follows "Chapter 3" still reads like a heading."""
    rest = rest.strip()
    if not rest:
        return True
    if rest[0] in REMAINDER_SEPARATORS:
        return len(text) < threshold * 2
    return len(text) < threshold and not text.endswith(SENTENCE_ENDINGS)


def _keyword_match(text: str, threshold: int) -> re.Match[str] | None:
    for pattern in (KEYWORD_HEADING_RE, SPECIAL_HEADING_RE):
        m = pattern.match(text)
        if m is None:
            continue
        # "chapter 5 of the report" is prose, headings capitalise the keyword
        if not m.group("keyword")[0].isupper():
            return None
        if not _is_heading_remainder(text, m.group("rest"), threshold):
            return None
        return m
    return None


def matches_keyword(raw: str, threshold: int = DEFAULT_SHORT_LINE_THRESHOLD) -> bool:
    """True if the line is a keyword heading ("Chapter 3", "PART TWO", "Prologue")."""
    text = raw.strip()
    if not text or not is_valid_heading_line(text):
        return False
    return _keyword_match(text, threshold) is not None


def is_numeric_heading(raw: str, threshold: int = DEFAULT_SHORT_LINE_THRESHOLD) -> bool:
    """True for "CHAPTER <number>" style headings and bare numerals on their own line."""
    text = raw.strip()
    if not text:
        return False
    if NUMERAL_LINE_RE.match(text):
        return True
    if not is_valid_heading_line(text):
        return False
    m = _keyword_match(text, threshold)
    return m is not None and m.re is KEYWORD_HEADING_RE and m.group("keyword").lower() in CHAPTER_KEYWORDS


def classify_line(raw: str, index: int, settings: DetectionSettings | None = None) -> Line:
    """
    Classify a single raw line.

    Args:
        raw: Line text without its line terminator
        index: Position of the line in the analysed area
        settings: Detection thresholds (defaults when None)

    Returns:
        Immutable classified Line
    """
    settings = settings or DetectionSettings()
    threshold = settings.short_line_threshold
    raw = raw.rstrip("\r\n")
    text = raw.strip()
    blank = not text
    return Line(
        raw=raw,
        index=index,
        text=text,
        indentation=indentation_of(raw),
        is_blank=blank,
        is_all_caps=not blank and is_all_caps(text),
        is_short=is_short(text, threshold),
        is_numeric_heading=not blank and is_numeric_heading(text, threshold),
        matches_keyword=not blank and matches_keyword(text, threshold),
        is_contents_marker=bool(CONTENTS_RE.match(text)),
    )


def classify_lines(raw_lines: Iterable[str], settings: DetectionSettings | None = None) -> list[Line]:
    """Classify a sequence of raw lines, numbering them from 0."""
    settings = settings or DetectionSettings()
    return [classify_line(raw, index, settings) for index, raw in enumerate(raw_lines)]


def ensure_classified(lines: Iterable[Line | str], settings: DetectionSettings | None = None) -> list[Line]:
    """
    Accept either classified lines or raw strings.

    Raw strings are classified. ``Line`` objects are kept, renumbered when they
    come from a larger area (a slice of a classified file).
    """
    settings = settings or DetectionSettings()
    result: list[Line] = []
    for index, line in enumerate(lines):
        if isinstance(line, Line):
            result.append(line if line.index == index else replace(line, index=index))
        else:
            result.append(classify_line(str(line), index, settings))
    return result

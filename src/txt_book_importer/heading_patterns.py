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
heading_patterns.py - Regex patterns and number parsing for heading detection
=============================================================================

Compiled regular expressions used to recognise chapter headings in plain
text, the number parsers shared by the heading rules (arabic, roman and
English number words) and the title extraction applied to heading lines.
"""

from __future__ import annotations

import re

# ────────────────────────── regexes & tables ────────────────────────── #

WORD_NUMS = (
    "one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|thirteen|fourteen|fifteen|"
    "sixteen|seventeen|eighteen|nineteen|twenty|thirty|forty|fifty|sixty|seventy|eighty|ninety|hundred"
)

# Well-formed roman numerals only, so words like "did" or "mild" are never numbers
ROMAN_NUM = r"(?=[MDCLXVI])M{0,4}(?:CM|CD|D?C{0,3})(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3})"

# Leading decoration allowed before a heading keyword: "# Chapter 1", "* PART II *"
_DECORATION = r"[^\w\"'“‘«]*"

# "Chapter 3: The Storm", "CHAPTER ONE", "Part II", "Book 2", "Vol. IV", "Ch. 12"
KEYWORD_HEADING_RE = re.compile(
    rf"^{_DECORATION}"
    rf"(?P<keyword>chapter|chap\.|ch\.|part|book|volume|vol\.)\s*"
    rf"(?P<num>\d+[a-z]?|{ROMAN_NUM}|(?:{WORD_NUMS})(?:[-\s](?:{WORD_NUMS}))*)"
    rf"(?!\w)(?P<rest>.*)$",
    re.IGNORECASE,
)

# Unnumbered structural headings
SPECIAL_HEADING_RE = re.compile(
    rf"^{_DECORATION}(?P<keyword>prologue|epilogue|preface|foreword|introduction|afterword|interlude)(?!\w)(?P<rest>.*)$",
    re.IGNORECASE,
)

# A line holding nothing but a numeral: "12", "12.", "XIV", "XIV."
NUMERAL_LINE_RE = re.compile(rf"^{_DECORATION}(?P<num>\d{{1,4}}|{ROMAN_NUM})\.?{_DECORATION}$")

# "12. The Storm", "IV - Homecoming"
LEADING_NUMBER_RE = re.compile(rf"^(?P<num>\d{{1,4}}|{ROMAN_NUM})\s*[.:)\-–—]\s*(?P<rest>\S.*)$")

CONTENTS_RE = re.compile(r"^(?:table\s+of\s+)?contents\.?$", re.IGNORECASE)

# Keywords that mark a chapter (as opposed to a part or book)
CHAPTER_KEYWORDS = frozenset({"chapter", "chap.", "ch."})
PART_KEYWORDS = frozenset({"part", "book", "volume", "vol."})

# Characters a heading remainder may start with: "Chapter 1: ...", "Chapter 1 - ..."
REMAINDER_SEPARATORS = ".:;-–—)]"

# Characters that end a sentence (headings normally do not end with these)
SENTENCE_ENDINGS = ('.', '!', '?', '…', ',', ';', '"', '”', "'", '’')

# Conversion tables
_SINGLE = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}

_TENS = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}

_ROMAN = {"i": 1, "v": 5, "x": 10, "l": 50, "c": 100, "d": 500, "m": 1000}


def roman_to_int(s: str) -> int:
    """Convert a roman numeral to an integer."""
    total = prev = 0
    for ch in reversed(s.lower()):
        if ch not in _ROMAN:
            raise ValueError(f"Invalid Roman numeral character: {ch}")
        val = _ROMAN[ch]
        total = total - val if val < prev else total + val
        prev = val
    return total


def words_to_int(text: str) -> int:
    """Convert English number words ("twenty-three", "one hundred") to an integer."""
    tokens = [tok for tok in re.split(r"[ \t\-]+", text.lower()) if tok]
    if not tokens:
        raise ValueError("No number words given")
    curr = 0
    for tok in tokens:
        if tok in _SINGLE:
            curr += _SINGLE[tok]
        elif tok in _TENS:
            curr += _TENS[tok]
        elif tok == "hundred":
            curr = max(curr, 1) * 100
        else:
            raise ValueError(f"Unknown word number: {tok}")
    return curr


def parse_num(raw: str | None) -> int | None:
    """
    Parse an arabic, roman or word number.

    Args:
        raw: Number text as captured by a heading pattern

    Returns:
        The integer value, or None if the text is not a number
    """
    if not raw:
        return None
    raw = raw.strip().rstrip(".")

    # "14a", "14b" count as 14
    if raw[:1].isdigit():
        digits = "".join(c for c in raw if c.isdigit())
        return int(digits)

    if re.fullmatch(ROMAN_NUM, raw, re.IGNORECASE):
        return roman_to_int(raw)
    try:
        return words_to_int(raw)
    except ValueError:
        return None


def _clean_remainder(rest: str) -> str:
    return rest.strip().lstrip(REMAINDER_SEPARATORS + " \t").strip()


def extract_title(text: str | None) -> str | None:
    """
    Extract the title from a heading line.

    The heading keyword is removed. A numbering token is removed as well when
    further text follows it, otherwise the numbering itself is the title:

        "Chapter 3: The Storm" -> "The Storm"
        "CHAPTER ONE"          -> "ONE"
        "12. Homecoming"       -> "Homecoming"
        "XIV."                 -> "XIV"

    Args:
        text: Heading line text

    Returns:
        The title, or None for an empty line
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None

    m = KEYWORD_HEADING_RE.match(text)
    if m:
        rest = _clean_remainder(m.group("rest"))
        return rest or m.group("num").strip()

    m = SPECIAL_HEADING_RE.match(text)
    if m:
        rest = _clean_remainder(m.group("rest"))
        return rest or m.group("keyword")

    m = NUMERAL_LINE_RE.match(text)
    if m:
        return m.group("num")

    m = LEADING_NUMBER_RE.match(text)
    if m:
        return m.group("rest").strip()

    return text


def heading_number(text: str) -> int | None:
    """Return the number carried by a heading line, if any."""
    text = text.strip()
    for pattern in (KEYWORD_HEADING_RE, NUMERAL_LINE_RE, LEADING_NUMBER_RE):
        m = pattern.match(text)
        if m:
            return parse_num(m.group("num"))
    return None

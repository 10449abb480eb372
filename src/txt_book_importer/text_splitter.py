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
text_splitter.py - Separate the metadata area from the text area
================================================================

Plain-text e-books usually start with a header (title, author, release
data, licence notes) and, for Project Gutenberg files, end with a licence.
The splitter cuts the raw lines into the metadata area handed to the
metadata analyzer and the text area handed to chapter detection.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

logger = logging.getLogger(__name__)

GUTENBERG_START_RE = re.compile(r"^\s*\*{3}\s*START OF (?:THE|THIS) PROJECT GUTENBERG E-?BOOK\b.*$", re.IGNORECASE)
GUTENBERG_END_RE = re.compile(
    r"^\s*(?:\*{3}\s*END OF (?:THE|THIS) PROJECT GUTENBERG E-?BOOK\b|End of (?:the )?Project Gutenberg'?s? E-?Book\b)",
    re.IGNORECASE,
)
HEADER_FIELD_RE = re.compile(r"^\s*(?P<key>[A-Za-z][A-Za-z ]{1,30}?)\s*:\s*(?P<value>.*?)\s*$")

METADATA_KEYS = frozenset(
    {
        "title",
        "author",
        "language",
        "release date",
        "posting date",
        "publisher",
        "edition",
        "translator",
        "editor",
        "illustrator",
        "credits",
        "character set encoding",
        "most recently updated",
    }
)

# Runs of blank lines longer than this are shortened
MAX_BLANK_RUN = 3


def remove_excess_empty_lines(lines: Sequence[str], max_blank: int = MAX_BLANK_RUN) -> list[str]:
    """
    Reduce runs of blank lines to at most ``max_blank`` lines.

    Args:
        lines: Raw lines
        max_blank: Longest run of blank lines kept

    Returns:
        Lines with shortened blank runs
    """
    result: list[str] = []
    run = 0
    for line in lines:
        if line.strip():
            run = 0
        else:
            run += 1
            if run > max_blank:
                continue
        result.append(line)
    return result


def filter_text_lines(raw_lines: Sequence[str]) -> list[str]:
    """
    Normalise the lines of a text area.

    Strips a byte order mark and trailing whitespace, shortens long runs of
    blank lines and drops blank lines at both ends.
    """
    lines = [line.rstrip() for line in raw_lines]
    if lines:
        lines[0] = lines[0].lstrip("\ufeff")
    lines = remove_excess_empty_lines(lines)

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def is_metadata_field(line: str) -> bool:
    """True for "Key: value" lines whose key is a known metadata field."""
    m = HEADER_FIELD_RE.match(line)
    return bool(m and m.group("key").strip().lower() in METADATA_KEYS)


class TextSplitter:
    """Splits raw e-book lines into a metadata area and a text area."""

    def __init__(self, raw_lines: Sequence[str] | None, strip_boilerplate: bool = True) -> None:
        """
        Split the lines.

        Args:
            raw_lines: All lines of the file
            strip_boilerplate: Honour Project Gutenberg start/end markers

        Raises:
            ValueError: If raw_lines is None
        """
        if raw_lines is None:
            raise ValueError("raw_lines must not be None")
        self.raw_lines = [line.rstrip("\r\n") for line in raw_lines]
        if self.raw_lines:
            self.raw_lines[0] = self.raw_lines[0].lstrip("\ufeff")
        self.strip_boilerplate = strip_boilerplate
        self.metadata_lines: list[str] = []
        self.text_lines: list[str] = []
        self._split()

    def _find(self, pattern: re.Pattern[str], start: int = 0) -> int | None:
        for i in range(start, len(self.raw_lines)):
            if pattern.match(self.raw_lines[i]):
                return i
        return None

    def _header_block_end(self) -> int:
        """End (exclusive) of a leading "Key: value" block, or 0 if there is none."""
        i = 0
        while i < len(self.raw_lines) and not self.raw_lines[i].strip():
            i += 1
        block_start = i
        while i < len(self.raw_lines) and self.raw_lines[i].strip():
            i += 1
        block = self.raw_lines[block_start:i]
        if any(is_metadata_field(line) for line in block):
            return i
        return 0

    def _split(self) -> None:
        start_marker = self._find(GUTENBERG_START_RE) if self.strip_boilerplate else None
        if start_marker is not None:
            self.metadata_lines = self.raw_lines[:start_marker]
            text_start = start_marker + 1
            logger.debug(f"Project Gutenberg start marker found at line {start_marker}")
        else:
            text_start = self._header_block_end()
            self.metadata_lines = self.raw_lines[:text_start]

        end_marker = self._find(GUTENBERG_END_RE, text_start) if self.strip_boilerplate else None
        text_end = end_marker if end_marker is not None else len(self.raw_lines)
        self.text_lines = filter_text_lines(self.raw_lines[text_start:text_end])
        logger.debug(f"Split {len(self.raw_lines)} lines into {len(self.metadata_lines)} metadata and {len(self.text_lines)} text lines")

    def get_metadata_list(self) -> list[str]:
        return self.metadata_lines

    def get_text_list(self) -> list[str]:
        return self.text_lines

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
book_builder.py - Materialise chapters from detected chapter positions
======================================================================

Slices the lines of every document part according to its chapter position
and packages the slices into ``Chapter`` and ``DocumentPart`` objects.
Blank separator lines between chapter ranges stay with the chapter they
follow, so the chapters of a part always reproduce the part's lines.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .chapter_position import ChapterPosition
from .heading_patterns import extract_title
from .line_classifier import Line, ensure_classified
from .models import Chapter, DocumentPart

logger = logging.getLogger(__name__)


class InternalConsistencyError(RuntimeError):
    """
    A chapter position does not fit the lines it was detected on.

    This points at a defect in chapter detection, not at a problem with the
    imported text.
    """

    pass


class BookBuilder:
    """Builds document parts from parallel lists of part lines and chapter positions."""

    def __init__(
        self,
        part_lines: Sequence[Sequence[Line | str]] | None,
        part_positions: Sequence[ChapterPosition] | None,
        part_titles: Sequence[str | None] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """
        Initialize the builder.

        Args:
            part_lines: Lines of each part
            part_positions: Chapter position of each part
            part_titles: Optional title of each part
            id_factory: Optional callable producing identifiers for parts and chapters

        Raises:
            ValueError: If an argument is missing or the sequences differ in length
        """
        if part_lines is None or part_positions is None:
            raise ValueError("part_lines and part_positions must not be None")
        if len(part_lines) != len(part_positions):
            raise ValueError(f"Got {len(part_lines)} part line lists but {len(part_positions)} chapter positions")
        if part_titles is not None and len(part_titles) != len(part_lines):
            raise ValueError(f"Got {len(part_titles)} part titles for {len(part_lines)} parts")

        self.part_lines = [ensure_classified(lines) for lines in part_lines]
        self.part_positions = list(part_positions)
        self.part_titles = list(part_titles) if part_titles is not None else [None] * len(self.part_lines)
        self.id_factory = id_factory

    def _new_id(self) -> str | None:
        return self.id_factory() if self.id_factory is not None else None

    @staticmethod
    def _check_position(part_number: int, lines: Sequence[Line], position: ChapterPosition) -> None:
        if not position:
            if lines:
                raise InternalConsistencyError(f"Part {part_number}: {len(lines)} lines but no chapter ranges")
            return
        for entry in position:
            if entry.end >= len(lines):
                raise InternalConsistencyError(f"Part {part_number}: chapter range [{entry.start}, {entry.end}] exceeds the {len(lines)} available lines")
        if not position.is_ordered():
            raise InternalConsistencyError(f"Part {part_number}: chapter ranges are unordered or overlapping: {position!r}")

    def _build_part(self, number: int, lines: Sequence[Line], position: ChapterPosition, title: str | None) -> DocumentPart:
        self._check_position(number, lines, position)
        entries = position.entries

        # A heading placed right before its range opens that chapter's slice
        starts = [min(e.start, e.heading_index) if e.heading_index is not None else e.start for e in entries]
        if starts:
            starts[0] = 0

        chapters: list[Chapter] = []
        for i, entry in enumerate(entries):
            stop = starts[i + 1] if i + 1 < len(entries) else len(lines)
            heading = lines[entry.heading_index] if entry.heading_index is not None else None
            chapter_title = entry.title
            if chapter_title is None and heading is not None:
                chapter_title = extract_title(heading.text)
            chapters.append(
                Chapter(
                    number=i + 1,
                    title=chapter_title,
                    lines=tuple(lines[starts[i] : stop]),
                    heading=heading,
                    chapter_id=self._new_id(),
                )
            )

        logger.debug(f"Built part {number} with {len(chapters)} chapters from {len(lines)} lines")
        return DocumentPart(number=number, chapters=tuple(chapters), title=title, part_id=self._new_id())

    def build(self) -> list[DocumentPart]:
        """
        Build one DocumentPart per input pair.

        Returns:
            Document parts in input order

        Raises:
            InternalConsistencyError: If a chapter position does not fit its lines
        """
        return [
            self._build_part(number, lines, position, title)
            for number, (lines, position, title) in enumerate(zip(self.part_lines, self.part_positions, self.part_titles), start=1)
        ]


def build(
    part_lines: Sequence[Sequence[Line | str]] | None,
    part_positions: Sequence[ChapterPosition] | None,
    part_titles: Sequence[str | None] | None = None,
    id_factory: Callable[[], str] | None = None,
) -> list[DocumentPart]:
    """Shortcut for ``BookBuilder(...).build()``."""
    return BookBuilder(part_lines, part_positions, part_titles, id_factory).build()

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
chapter_position.py - Ordered line ranges of detected chapters
==============================================================

A ``ChapterPosition`` is an immutable, ordered collection of ``ChapterRange``
entries. Positions are grown with ``add_chapter``, which returns a new
position instead of changing the existing one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


class ChapterPositionError(ValueError):
    """Raised when a chapter range breaks its own invariants."""

    pass


@dataclass(frozen=True)
class ChapterRange:
    """Line range of one chapter, with optional heading line and title."""

    heading_index: int | None
    start: int
    end: int
    title: str | None = None
    number: int | None = None

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ChapterPositionError(f"Chapter start {self.start} is negative")
        if self.end < self.start:
            raise ChapterPositionError(f"Chapter end {self.end} lies before its start {self.start}")
        if self.heading_index is not None and not (max(self.start - 1, 0) <= self.heading_index <= self.end):
            raise ChapterPositionError(f"Heading line {self.heading_index} is outside chapter range [{self.start}, {self.end}]")

    @property
    def line_count(self) -> int:
        return self.end - self.start + 1

    def overlaps(self, other: ChapterRange) -> bool:
        return self.start <= other.end and other.start <= self.end


class ChapterPosition:
    """Immutable sequence of chapter ranges in the order they were added."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ChapterRange] = ()) -> None:
        self._entries: tuple[ChapterRange, ...] = tuple(entries)

    def add_chapter(
        self,
        heading_index: int | None,
        start: int,
        end: int,
        title: str | None = None,
        number: int | None = None,
    ) -> ChapterPosition:
        """
        Return a new position with one more chapter appended.

        Args:
            heading_index: Index of the heading line, or None for a chapter without heading
            start: First line index of the chapter
            end: Last line index of the chapter (inclusive)
            title: Chapter title, if known
            number: Number carried by the heading, if any

        Returns:
            New ChapterPosition

        Raises:
            ChapterPositionError: If the range itself is malformed
        """
        entry = ChapterRange(heading_index=heading_index, start=start, end=end, title=title, number=number)
        return ChapterPosition(self._entries + (entry,))

    @property
    def entries(self) -> tuple[ChapterRange, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChapterRange]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ChapterRange:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChapterPosition):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        ranges = ", ".join(f"[{e.start}-{e.end}]" for e in self._entries)
        return f"ChapterPosition({ranges})"

    def is_ordered(self) -> bool:
        """True if entries are sorted by start and pairwise non-overlapping."""
        return all(prev.end < cur.start for prev, cur in zip(self._entries, self._entries[1:]))

    def covers(self, line_count: int) -> bool:
        """True if the entries span exactly lines ``0 .. line_count - 1``."""
        if not self._entries:
            return False
        return self._entries[0].start == 0 and self._entries[-1].end == line_count - 1 and all(e.end < line_count for e in self._entries)

    def heading_indices(self) -> list[int]:
        return [e.heading_index for e in self._entries if e.heading_index is not None]

    def numbers(self) -> list[int]:
        return [e.number for e in self._entries if e.number is not None]

    def to_list(self) -> list[dict[str, int | str | None]]:
        """Plain representation used for JSON output and logging."""
        return [
            {
                "heading_index": e.heading_index,
                "start": e.start,
                "end": e.end,
                "title": e.title,
                "number": e.number,
            }
            for e in self._entries
        ]


def full_text_position(line_count: int) -> ChapterPosition:
    """One chapter spanning ``line_count`` lines, without heading."""
    if line_count <= 0:
        raise ChapterPositionError("A full-text chapter needs at least one line")
    return ChapterPosition().add_chapter(None, 0, line_count - 1)


def position_from_headings(
    headings: list[tuple[int, int | None, str | None, int | None]],
    line_count: int,
) -> ChapterPosition:
    """
    Partition ``line_count`` lines into chapters starting at the given headings.

    Each heading tuple is ``(range_start, heading_index, title, number)``;
    ``range_start`` may lie before ``heading_index`` when blank lines or a part
    heading are folded into the chapter. A chapter ends right before the next
    chapter's range start, the last one at the final line. Lines before the
    first range start form a heading-less front-matter chapter.

    Args:
        headings: Heading tuples ordered by range start
        line_count: Number of lines in the analysed area

    Returns:
        ChapterPosition partitioning all lines
    """
    position = ChapterPosition()
    if not headings or line_count <= 0:
        return position

    first_start = headings[0][0]
    if first_start > 0:
        position = position.add_chapter(None, 0, first_start - 1)

    for i, (start, heading_index, title, number) in enumerate(headings):
        end = headings[i + 1][0] - 1 if i + 1 < len(headings) else line_count - 1
        position = position.add_chapter(heading_index, start, end, title, number)
    return position

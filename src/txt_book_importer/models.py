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
#
# CHANGELOG:
# - Replaced the translation models with the imported document model
# - Added Chapter, DocumentPart, DocumentMetadata and ImportResult
# - Identifiers are supplied by the caller instead of generated in the entity
#

"""Document model produced by the plain-text importer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .line_classifier import Line


@dataclass(frozen=True)
class Chapter:
    """
    One chapter of a document part.

    ``lines`` holds every line of the chapter, including the heading line and
    the blank separator lines that follow the chapter's text.
    """

    number: int
    title: str | None
    lines: tuple[Line, ...]
    heading: Line | None = None
    chapter_id: str | None = None

    @property
    def start_index(self) -> int:
        return self.lines[0].index if self.lines else -1

    @property
    def end_index(self) -> int:
        return self.lines[-1].index if self.lines else -1

    @property
    def body(self) -> tuple[Line, ...]:
        """Chapter lines without the heading line."""
        if self.heading is None:
            return self.lines
        return tuple(line for line in self.lines if line.index != self.heading.index)

    @property
    def text(self) -> str:
        """Body text with surrounding blank lines removed."""
        return "\n".join(line.raw for line in self.body).strip("\n")

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def to_dict(self, include_text: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "number": self.number,
            "title": self.title,
            "heading_index": self.heading.index if self.heading is not None else None,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "chapter_id": self.chapter_id,
        }
        if include_text:
            data["text"] = self.text
        return data


@dataclass(frozen=True)
class DocumentPart:
    """A top-level division of a document holding an ordered list of chapters."""

    number: int
    chapters: tuple[Chapter, ...]
    title: str | None = None
    part_id: str | None = None

    @property
    def lines(self) -> list[Line]:
        """All lines of the part, in order."""
        return [line for chapter in self.chapters for line in chapter.lines]

    def to_dict(self, include_text: bool = True) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "part_id": self.part_id,
            "chapters": [chapter.to_dict(include_text) for chapter in self.chapters],
        }


@dataclass
class DocumentMetadata:
    """Descriptive data of an imported document."""

    title: str | None = None
    author: str | None = None
    language: str | None = None
    release_date: str | None = None
    publisher: str | None = None
    edition: str | None = None
    source_file: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "language": self.language,
            "release_date": self.release_date,
            "publisher": self.publisher,
            "edition": self.edition,
            "source_file": self.source_file,
        }


@dataclass
class ImportResult:
    """Everything the importer extracted from one text file."""

    parts: list[DocumentPart] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    @property
    def chapters(self) -> list[Chapter]:
        return [chapter for part in self.parts for chapter in part.chapters]

    def to_dict(self, include_text: bool = True) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "parts": [part.to_dict(include_text) for part in self.parts],
        }

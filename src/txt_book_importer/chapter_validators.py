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
chapter_validators.py - Plausibility checks for candidate chapter positions
===========================================================================

A heading rule only proposes chapters. Before the detector accepts a rule's
proposal it has to pass the checks in this module; the first failing check
is reported as the rejection reason.
"""

from __future__ import annotations

from typing import Sequence

from .chapter_position import ChapterPosition, ChapterRange
from .detection_settings import DetectionSettings
from .line_classifier import Line


def count_body_lines(entry: ChapterRange, lines: Sequence[Line]) -> int:
    """Number of non-blank lines in a chapter range, heading line excluded."""
    last = min(entry.end, len(lines) - 1)
    return sum(1 for i in range(entry.start, last + 1) if i != entry.heading_index and not lines[i].is_blank)


def check_chapter_count(position: ChapterPosition, min_chapters: int) -> str | None:
    """A single chapter covering everything is not a detection."""
    if len(position) < min_chapters:
        return f"found {len(position)} chapter(s), at least {min_chapters} required"
    return None


def check_ordering(position: ChapterPosition, line_count: int) -> str | None:
    """Entries must be sorted, disjoint and span the analysed lines exactly."""
    if not position.is_ordered():
        return "chapter ranges are unordered or overlapping"
    if not position.covers(line_count):
        first, last = position[0], position[-1]
        return f"chapter ranges span [{first.start}, {last.end}] instead of [0, {line_count - 1}]"
    return None


def check_heading_spacing(position: ChapterPosition, lines: Sequence[Line], min_body_lines: int) -> str | None:
    """Every chapter with a heading must carry at least ``min_body_lines`` lines of text."""
    for entry in position:
        if entry.heading_index is None:
            continue
        body = count_body_lines(entry, lines)
        if body < min_body_lines:
            return f"heading at line {entry.heading_index} is followed by {body} body line(s), at least {min_body_lines} required"
    return None


def validate_candidate(
    position: ChapterPosition,
    lines: Sequence[Line],
    settings: DetectionSettings | None = None,
) -> str | None:
    """
    Validate a rule's candidate chapter position.

    Args:
        position: Candidate proposed by a heading rule
        lines: The classified lines the rule scanned
        settings: Detection thresholds

    Returns:
        None if the candidate is acceptable, otherwise the rejection reason
    """
    settings = settings or DetectionSettings()
    return (
        check_chapter_count(position, settings.min_chapters)
        or check_ordering(position, len(lines))
        or check_heading_spacing(position, lines, settings.min_body_lines)
    )

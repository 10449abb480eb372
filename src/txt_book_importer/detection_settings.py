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
detection_settings.py - Tunable thresholds for chapter detection
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Rule names in their default priority order (strongest structural signal first)
DEFAULT_RULE_ORDER: tuple[str, ...] = ("keyword", "numeral_sequence", "caps_block", "whitespace_gap")

DEFAULT_SHORT_LINE_THRESHOLD = 50
DEFAULT_MIN_CHAPTERS = 2
DEFAULT_MIN_BODY_LINES = 1
DEFAULT_BLANK_GAP_SIZE = 3
DEFAULT_DUPLICATE_WINDOW = 4
# Text lines before the first heading that still join the first chapter
DEFAULT_FRONT_MATTER_FOLD_LINES = 1


@dataclass(frozen=True)
class DetectionSettings:
    """Thresholds shared by the line classifier, the heading rules and the detector."""

    short_line_threshold: int = DEFAULT_SHORT_LINE_THRESHOLD
    min_chapters: int = DEFAULT_MIN_CHAPTERS
    min_body_lines: int = DEFAULT_MIN_BODY_LINES
    blank_gap_size: int = DEFAULT_BLANK_GAP_SIZE
    duplicate_window: int = DEFAULT_DUPLICATE_WINDOW
    front_matter_fold_lines: int = DEFAULT_FRONT_MATTER_FOLD_LINES
    rule_order: tuple[str, ...] = DEFAULT_RULE_ORDER

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> DetectionSettings:
        """
        Build settings from the ``chapter_detection`` section of a configuration.

        Unknown keys are ignored and missing keys keep their defaults.

        Args:
            config: Full configuration dictionary (or None for defaults)

        Returns:
            DetectionSettings instance
        """
        if not config:
            return cls()
        section = config.get("chapter_detection") or {}
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {key: value for key, value in section.items() if key in known}
        if "rule_order" in values:
            values["rule_order"] = tuple(values["rule_order"])
        return cls(**values)

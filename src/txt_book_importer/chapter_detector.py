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
chapter_detector.py - Automated chapter detection
=================================================

Runs the heading rules in priority order and accepts the first candidate
that passes validation. When no rule produces a plausible result the whole
text becomes a single chapter, so detection always succeeds on non-empty
input.

    START -> RULE_SCAN -> CANDIDATE_VALIDATION -> ACCEPTED -> DONE
                 ^                 |
                 +---- rejected ---+---- no rules left -> FALLBACK -> DONE
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .chapter_issues import detect_issues
from .chapter_position import ChapterPosition
from .chapter_validators import validate_candidate
from .detection_settings import DetectionSettings
from .heading_rules import FullTextRule, HeadingRule, build_rules
from .line_classifier import Line, ensure_classified

logger = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Raised when chapter detection is asked to analyse zero lines."""

    pass


class DetectionState(enum.Enum):
    """Progress of one detection run."""

    START = 1
    """Detector created, no rule run yet."""
    RULE_SCAN = 2
    """A rule is scanning the lines."""
    CANDIDATE_VALIDATION = 3
    """A rule's candidate is being validated."""
    ACCEPTED = 4
    """A candidate passed validation."""
    FALLBACK = 5
    """No rule passed; the full text becomes one chapter."""
    DONE = 6
    """A chapter position has been produced."""


@dataclass(frozen=True)
class RuleOutcome:
    """What happened to one rule's candidate."""

    rule: str
    accepted: bool
    chapters: int
    reason: str | None = None


class AutomatedChapterDetector:
    """Finds chapter boundaries by trying the heading rules one after another."""

    def __init__(
        self,
        lines: Iterable[Line | str] | None,
        rules: Sequence[HeadingRule] | None = None,
        settings: DetectionSettings | None = None,
    ) -> None:
        """
        Prepare a detection run.

        Args:
            lines: Classified lines (raw strings are classified on the fly)
            rules: Rules in priority order (default: from ``settings.rule_order``)
            settings: Detection thresholds

        Raises:
            ValueError: If ``lines`` is None
            EmptyInputError: If ``lines`` is empty
        """
        if lines is None:
            raise ValueError("lines must not be None")
        self.settings = settings or DetectionSettings()
        self.lines: list[Line] = ensure_classified(lines, self.settings)
        if not self.lines:
            raise EmptyInputError("Cannot detect chapters in an empty text")

        self.rules: list[HeadingRule] = list(rules) if rules is not None else build_rules(self.settings)
        self.state = DetectionState.START
        self.accepted_rule: str | None = None
        self.outcomes: list[RuleOutcome] = []
        self.issues: list[str] = []
        self._position: ChapterPosition | None = None

    def get_chapter_position(self) -> ChapterPosition:
        """Run detection once and return the accepted chapter position."""
        if self._position is None:
            self._position = self._run()
        return self._position

    def _run(self) -> ChapterPosition:
        for rule in self.rules:
            self.state = DetectionState.RULE_SCAN
            try:
                candidate = rule.scan(self.lines)
            except Exception as e:
                # A failing rule counts as a rejected rule
                logger.warning(f"Chapter rule '{rule.name}' failed: {e}", exc_info=True)
                self.outcomes.append(RuleOutcome(rule.name, accepted=False, chapters=0, reason=f"rule failed: {e}"))
                continue

            self.state = DetectionState.CANDIDATE_VALIDATION
            reason = validate_candidate(candidate, self.lines, self.settings)
            if reason is not None:
                logger.debug(f"Chapter rule '{rule.name}' rejected: {reason}")
                self.outcomes.append(RuleOutcome(rule.name, accepted=False, chapters=len(candidate), reason=reason))
                continue

            self.state = DetectionState.ACCEPTED
            self.outcomes.append(RuleOutcome(rule.name, accepted=True, chapters=len(candidate)))
            self.accepted_rule = rule.name
            logger.info(f"Detected {len(candidate)} chapters with rule '{rule.name}'")
            self._report_issues(candidate)
            self.state = DetectionState.DONE
            return candidate

        self.state = DetectionState.FALLBACK
        fallback = FullTextRule(self.settings)
        position = fallback.scan(self.lines)
        self.outcomes.append(RuleOutcome(fallback.name, accepted=True, chapters=len(position)))
        self.accepted_rule = fallback.name
        logger.info("No chapter structure detected, using the full text as one chapter")
        self.state = DetectionState.DONE
        return position

    def _report_issues(self, position: ChapterPosition) -> None:
        self.issues = detect_issues(position.numbers())
        for issue in self.issues:
            logger.warning(f"Chapter numbering: {issue}")


def detect(
    lines: Iterable[Line | str] | None,
    detect_chapters: bool = True,
    settings: DetectionSettings | None = None,
) -> ChapterPosition:
    """
    Detect the chapter positions of a text area.

    Args:
        lines: Classified lines or raw strings of the text area
        detect_chapters: False puts the whole text into one chapter
        settings: Detection thresholds

    Returns:
        Validated ChapterPosition with at least one entry

    Raises:
        ValueError: If ``lines`` is None
        EmptyInputError: If ``lines`` is empty
    """
    if lines is None:
        raise ValueError("lines must not be None")
    settings = settings or DetectionSettings()

    if not detect_chapters:
        classified = ensure_classified(lines, settings)
        if not classified:
            raise EmptyInputError("Cannot build a chapter from an empty text")
        return FullTextRule(settings).scan(classified)

    return AutomatedChapterDetector(lines, settings=settings).get_chapter_position()

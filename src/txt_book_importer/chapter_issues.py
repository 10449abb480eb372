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
chapter_issues.py - Numbering diagnostics for detected chapters
===============================================================

Reports gaps, repeats, swaps and out-of-place numbers in the sequence of
heading numbers of an accepted chapter position. The issues are informative
only; they never change the detection result.
"""

from __future__ import annotations


def _missing_runs(low: int, high: int, present: set[int]) -> list[tuple[int, int]]:
    """Inclusive runs of the numbers ``low .. high - 1`` that are not in ``present``."""
    runs: list[tuple[int, int]] = []
    start = low
    for number in sorted(n for n in present if low <= n < high):
        if number > start:
            runs.append((start, number - 1))
        start = number + 1
    if start < high:
        runs.append((start, high - 1))
    return runs


def _missing_message(low: int, high: int) -> str:
    if low == high:
        return f"number {low} is missing"
    return f"numbers {low}-{high} are missing"


def detect_issues(seq: list[int]) -> list[str]:
    """
    Describe irregularities in a sequence of chapter numbers.

    Args:
        seq: Heading numbers in document order

    Returns:
        Human readable issue descriptions, in the order they occur
    """
    if not seq:
        return []

    issues: list[tuple[int, str]] = []
    expected = seq[0]
    present = set(seq)
    seen: set[int] = set()

    for idx, value in enumerate(seq):
        if value in seen:
            previous = next((x for x in reversed(seq[:idx]) if x != value), None)
            where = f" after number {previous}" if previous is not None else ""
            issues.append((idx, f"number {value} is repeated{where}"))
        seen.add(value)

        if value > expected:
            for low, high in _missing_runs(expected, value, present):
                issues.append((idx, _missing_message(low, high)))
            expected = value + 1
        elif value == expected:
            expected += 1
        elif idx > 0 and seq[idx - 1] == value + 1:
            issues.append((idx, f"number {value} is switched in place with number {value + 1}"))
            expected = value + 2
        elif idx > 0 and seq[idx - 1] != value:
            issues.append((idx, f"number {value} is out of place after number {seq[idx - 1]}"))
            expected = max(expected, value + 1)

    issues.sort(key=lambda item: item[0])
    return [message for _, message in issues]

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
Common print utilities for console output with rich formatting.
"""

from __future__ import annotations

from typing import Any

from rich import print as rich_print
from rich.console import Console

console = Console()


def safe_print(*args: Any, **kwargs: Any) -> None:
    """Print through rich so that markup tags are rendered.

    Args:
        *args: Arguments to print
        **kwargs: Keyword arguments for rich's print function
    """
    rich_print(*args, **kwargs)


def print_plain(text: str) -> None:
    """Print text without markup or highlighting (JSON dumps, raw lines)."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

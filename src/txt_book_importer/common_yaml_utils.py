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
Common YAML utility functions for safe loading and configuration merging.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def load_safe_yaml(yaml_path: str | Path) -> dict[str, Any]:
    """
    Safely load a YAML file whose root is a mapping.

    Args:
        yaml_path: Path to the YAML file

    Returns:
        Dictionary with the loaded data (empty for an empty file)

    Raises:
        ValueError: If the file is missing or its root is not a mapping
        yaml.YAMLError: If the file is not valid YAML
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise ValueError(f"YAML file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML file must contain a dictionary at the root level, got {type(data).__name__}")
    return data


def merge_yaml_configs(base_config: dict[str, Any], override_config: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two configurations, with override taking precedence.

    Args:
        base_config: Base configuration dictionary
        override_config: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base_config.copy()
    for key, value in override_config.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_yaml_configs(result[key], value)
        else:
            result[key] = value
    return result


def find_line_number(key_path: str, config_lines: list[str]) -> int | None:
    """
    Find the 1-based line number of a dotted key in YAML source lines.

    Nesting is followed by indentation, so ``logging.level`` only matches a
    ``level:`` key inside the ``logging:`` block.

    Args:
        key_path: Dot-separated path to the key
        config_lines: Lines of the YAML file

    Returns:
        Line number or None if the key does not appear
    """
    keys = key_path.split(".")
    # (indent, key) of the enclosing mappings of the current line
    stack: list[tuple[int, str]] = []

    for number, line in enumerate(config_lines, 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or ":" not in stripped or stripped.startswith("-"):
            continue
        indent = len(line) - len(line.lstrip())
        key = stripped.split(":", 1)[0].strip().strip("\"'")

        while stack and stack[-1][0] >= indent:
            stack.pop()
        path = [k for _, k in stack] + [key]
        if path == keys:
            return number
        stack.append((indent, key))

    return None

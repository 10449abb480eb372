#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Created new module to handle configuration validation
# - Validates chapter_detection, text_import and logging sections
#

"""
config_validator.py - Configuration validation utilities
"""

from __future__ import annotations

import logging
from typing import Any

from .common_yaml_utils import find_line_number
from .config_error_reporter import ConfigErrorReporter
from .config_schema import VALID_LOG_LEVELS
from .heading_rules import RULES_BY_NAME

# (key, minimum) of the integer settings of chapter_detection
_DETECTION_INTS = [
    ("min_chapters", 1),
    ("min_body_lines", 0),
    ("short_line_threshold", 1),
    ("blank_gap_size", 1),
    ("duplicate_window", 0),
    ("front_matter_fold_lines", 0),
]

_BOOLEAN_KEYS = [
    "chapter_detection.enabled",
    "text_import.strip_gutenberg_boilerplate",
    "logging.file_enabled",
]


class ConfigValidator:
    """Validates configuration structure and values."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_reporter = ConfigErrorReporter()

    @staticmethod
    def _error(kind: str, path: str, message: str, config_lines: list[str], **extra: Any) -> dict[str, Any]:
        return {"type": kind, "path": path, "line": find_line_number(path, config_lines), "message": message, **extra}

    def validate_config_first_error(self, config: dict[str, Any], defaults: dict[str, Any], config_lines: list[str]) -> dict[str, Any] | None:
        """
        Validate configuration and return only the FIRST error found.

        Args:
            config: Configuration to validate
            defaults: Default configuration for reference
            config_lines: Configuration file lines for error reporting

        Returns:
            First error found or None if valid
        """
        for key, value in config.items():
            if key not in defaults:
                return self._error("unknown_key", key, f"Unknown or malformed key '{key}' found.", config_lines)
            if not isinstance(value, dict):
                return self._error("invalid_type", key, f"Section '{key}' must be a mapping", config_lines)
            for sub_key in value:
                if sub_key not in defaults[key]:
                    path = f"{key}.{sub_key}"
                    return self._error("unknown_key", path, f"Unknown or malformed key '{path}' found.", config_lines)

        for section in defaults:
            if section not in config:
                return {
                    "type": "missing_section",
                    "path": section,
                    "line": None,
                    "message": f"Expected section '{section}' not found. Please add the {section} section",
                }

        return self._validate_values(config, config_lines)

    def _validate_values(self, config: dict[str, Any], config_lines: list[str]) -> dict[str, Any] | None:
        detection = config["chapter_detection"]

        for key, minimum in _DETECTION_INTS:
            if key not in detection:
                continue
            value = detection[key]
            path = f"chapter_detection.{key}"
            if isinstance(value, bool) or not isinstance(value, int):
                return self._error("invalid_type", path, f"{path} must be an integer, got {value!r}", config_lines)
            if value < minimum:
                return self._error("invalid_value", path, f"{path} must be at least {minimum}, got {value}", config_lines)

        if "rule_order" in detection:
            rule_order = detection["rule_order"]
            path = "chapter_detection.rule_order"
            if not isinstance(rule_order, list) or not rule_order:
                return self._error("invalid_type", path, f"{path} must be a non-empty list of rule names", config_lines)
            for name in rule_order:
                if name not in RULES_BY_NAME:
                    return self._error(
                        "invalid_value",
                        path,
                        f"Unknown rule '{name}' in {path}. Must be one of: {', '.join(RULES_BY_NAME)}",
                        config_lines,
                        valid_values=list(RULES_BY_NAME),
                    )

        for path in _BOOLEAN_KEYS:
            section, key = path.split(".")
            if key in config[section] and not isinstance(config[section][key], bool):
                return self._error("invalid_type", path, f"{path} must be true or false, got {config[section][key]!r}", config_lines)

        encoding = config["text_import"].get("default_encoding")
        if encoding is not None and not isinstance(encoding, str):
            return self._error("invalid_type", "text_import.default_encoding", "text_import.default_encoding must be a string or null", config_lines)

        level = config["logging"].get("level")
        if level is not None and str(level).upper() not in VALID_LOG_LEVELS:
            return self._error(
                "invalid_value",
                "logging.level",
                f"Invalid value '{level}' for logging.level. Must be one of: {', '.join(VALID_LOG_LEVELS)}",
                config_lines,
                valid_values=VALID_LOG_LEVELS,
            )

        return None

    def report_single_error(self, error: dict[str, Any], config_lines: list[str]) -> None:
        """Report a single validation error."""
        self.error_reporter.report_single_error(error, config_lines)

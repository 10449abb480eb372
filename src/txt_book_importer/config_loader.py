#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Created new module to handle configuration loading and merging
# - YAML syntax errors are reported and raised as ValueError
#

"""
config_loader.py - Configuration loading and merging utilities
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .common_yaml_utils import find_line_number, load_safe_yaml, merge_yaml_configs
from .config_error_reporter import ConfigErrorReporter
from .config_schema import DEFAULT_CONFIG_TEMPLATE


class ConfigLoader:
    """Handles loading and merging of configuration files."""

    def __init__(self, config_path: Path | None, logger: logging.Logger | None = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file (None: defaults only)
            logger: Logger instance
        """
        self.config_path = config_path
        self.logger = logger or logging.getLogger(__name__)
        self._config_lines: list[str] = []
        self.error_reporter = ConfigErrorReporter()

    def load_config(self) -> dict[str, Any]:
        """
        Load configuration from file, creating the default file if it is missing.

        Returns:
            Configuration dictionary

        Raises:
            ValueError: If the file cannot be parsed
        """
        if self.config_path is None:
            return self.get_default_config()

        if not self.config_path.exists():
            self.logger.info(f"Configuration file not found. Creating default at: {self.config_path}")
            self._create_default_config(self.config_path)

        try:
            self._config_lines = self.config_path.read_text(encoding="utf-8").split("\n")
            config = load_safe_yaml(self.config_path)
        except yaml.YAMLError as e:
            self.error_reporter.report_yaml_error(e, self.config_path)
            raise ValueError(f"Invalid YAML in {self.config_path}") from e

        if not config:
            self.logger.warning("Configuration file is empty. Using defaults.")
            return self.get_default_config()
        return config

    def _create_default_config(self, path: Path) -> None:
        try:
            path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
            self.logger.info("Default configuration file created successfully.")
        except OSError as e:
            self.logger.error(f"Failed to create configuration file: {e}")
            raise

    def get_default_config(self) -> dict[str, Any]:
        """Default configuration as dictionary."""
        result = yaml.safe_load(DEFAULT_CONFIG_TEMPLATE)
        return result if isinstance(result, dict) else {}

    def merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge user config over the defaults so that every key exists."""
        return merge_yaml_configs(self.get_default_config(), config)

    def get_config_lines(self) -> list[str]:
        return self._config_lines

    def find_line_number(self, key_path: str) -> int | None:
        return find_line_number(key_path, self._config_lines)

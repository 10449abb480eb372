#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - ConfigManager orchestrates loading, validation and merging
# - Invalid configuration raises ValueError instead of exiting
# - Added detection_settings accessor
#

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
config_manager.py - Configuration management for the text importer
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config_loader import ConfigLoader
from .config_validator import ConfigValidator
from .detection_settings import DetectionSettings


class ConfigManager:
    """Loads, validates and serves the importer configuration."""

    def __init__(
        self,
        config_path: Path | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file (None: built-in defaults)
            logger: Logger instance

        Raises:
            ValueError: If the configuration file is invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config_path = config_path

        self.loader = ConfigLoader(self.config_path, self.logger)
        self.validator = ConfigValidator(self.logger)

        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        config = self.loader.load_config()
        defaults = self.loader.get_default_config()

        first_error = self.validator.validate_config_first_error(config, defaults, self.loader.get_config_lines())
        if first_error:
            self.validator.report_single_error(first_error, self.loader.get_config_lines())
            raise ValueError(first_error["message"])

        return self.loader.merge_with_defaults(config)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'chapter_detection.min_chapters')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self.config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    @property
    def detection_settings(self) -> DetectionSettings:
        return DetectionSettings.from_config(self.config)

    def update_with_args(self, args: Any) -> dict[str, Any]:
        """
        Apply command-line arguments on top of the configuration.

        Args:
            args: Parsed command-line arguments

        Returns:
            Updated configuration dictionary
        """
        if getattr(args, "no_detect", False):
            self.config["chapter_detection"]["enabled"] = False
        if getattr(args, "encoding", None):
            self.config["text_import"]["default_encoding"] = args.encoding
        if getattr(args, "keep_boilerplate", False):
            self.config["text_import"]["strip_gutenberg_boilerplate"] = False
        if getattr(args, "log_level", None):
            self.config["logging"]["level"] = args.log_level.upper()
        return self.config

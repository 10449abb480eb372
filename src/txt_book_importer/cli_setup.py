#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Configuration and logging setup for the command line
# - The configuration path is pre-parsed before the full parser is built
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
cli_setup.py - CLI setup and initialization
===========================================

Loads the configuration and sets up logging for the txt-book-importer
command.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.markup import escape

from .common_print_utils import safe_print
from .config_manager import ConfigManager

# Loggers of this package share the handlers configured here
PACKAGE_LOGGER = "txt_book_importer"


def setup_configuration(argv: Sequence[str] | None = None) -> tuple[ConfigManager, dict[str, Any]]:
    """Load and validate configuration from the config file.

    Args:
        argv: Command-line arguments (None: sys.argv)

    Returns:
        Tuple of (ConfigManager instance, configuration dictionary)
    """
    preset_parser = argparse.ArgumentParser(add_help=False)
    preset_parser.add_argument("--config", type=str, default=None)
    preset_args, _ = preset_parser.parse_known_args(argv)

    config_path = Path(preset_args.config) if preset_args.config else None
    try:
        config_manager = ConfigManager(config_path=config_path)
    except ValueError as e:
        safe_print(f"[bold red]Configuration error: {escape(str(e))}[/bold red]")
        safe_print("Please fix the configuration file or delete it to regenerate defaults.")
        sys.exit(1)
    return config_manager, config_manager.config


def setup_logging(config: dict[str, Any], level_override: str | None = None) -> logging.Logger:
    """Set up logging based on configuration.

    Args:
        config: Configuration dictionary
        level_override: Level name taking precedence over the configured one

    Returns:
        Configured package logger
    """
    level_name = level_override or config["logging"]["level"]
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    log_format = config["logging"]["format"]

    logging.basicConfig(level=log_level, format=log_format)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    if config["logging"]["file_enabled"]:
        try:
            file_handler = logging.FileHandler(config["logging"]["file_path"], encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Failed to set up file logging to {config['logging']['file_path']}: {e}")

    return logger

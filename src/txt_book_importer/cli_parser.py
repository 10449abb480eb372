#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Argument parser for the txt-book-importer command
# - Defaults are taken from the loaded configuration
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
cli_parser.py - Command-line argument parsing for txt-book-importer
===================================================================

Builds the argument parser and validates the parsed arguments.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from .config_schema import VALID_LOG_LEVELS

EPILOG = """
Examples:
  txt-book-importer book.txt
  txt-book-importer book.txt --show-lines
  txt-book-importer book.txt --json > book.json
  txt-book-importer book.txt --no-detect --encoding cp1252
  txt-book-importer book.txt --config my_config.yml --log-level DEBUG
"""


def _add_input_args(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    """Add the input file arguments.

    Args:
        parser: ArgumentParser instance to add arguments to
        config: Configuration dictionary for default values
    """
    parser.add_argument("filepath", type=str, help="Path to the plain-text e-book file to import")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file (created with defaults if missing)",
    )

    default_encoding = config["text_import"]["default_encoding"]
    parser.add_argument(
        "--encoding",
        type=str,
        default=default_encoding,
        help=f"Character encoding of the input file (default: {default_encoding or 'auto-detect'})",
    )

    parser.add_argument(
        "--keep-boilerplate",
        action="store_true",
        help="Do not use Project Gutenberg start/end markers to cut the text area",
    )


def _add_detection_args(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    parser.add_argument(
        "--no-detect",
        action="store_true",
        default=not config["chapter_detection"]["enabled"],
        help="Skip chapter detection and import the whole text as a single chapter",
    )


def _add_output_args(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    """Add the output and logging arguments.

    Args:
        parser: ArgumentParser instance to add arguments to
        config: Configuration dictionary for default values
    """
    parser.add_argument("--json", action="store_true", help="Print the import result as JSON")

    parser.add_argument(
        "--show-lines",
        action="store_true",
        help="Show the line range and heading line of every chapter",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default=None,
        help=f"Logging level (default from configuration: {config['logging']['level']})",
    )


def create_parser(config: dict[str, Any]) -> argparse.ArgumentParser:
    """Create the argument parser.

    Args:
        config: Configuration dictionary for default values

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="txt-book-importer",
        description="Import a plain-text e-book and detect its chapters.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_input_args(parser, config)
    _add_detection_args(parser, config)
    _add_output_args(parser, config)
    return parser


def validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Validate parsed arguments, exiting through the parser on error."""
    file_path = Path(args.filepath)
    if not file_path.exists():
        parser.error(f"File not found: {file_path}")
    if not file_path.is_file():
        parser.error(f"Not a file: {file_path}")

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Created new module for configuration error reporting
# - Output goes through a rich console on stderr
#

"""
config_error_reporter.py - Configuration error reporting utilities
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape


class ConfigErrorReporter:
    """Reports configuration validation errors."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    @staticmethod
    def format_error(error: dict[str, Any], config_lines: list[str]) -> str:
        """
        Format a validation error as returned by ConfigValidator.

        Args:
            error: Error information
            config_lines: Configuration file lines

        Returns:
            One or two lines of text
        """
        line = error.get("line")
        message = f"line {line if line is not None else 'unknown'}: {error['message']}"
        if line is not None and error["type"] in ("unknown_key", "invalid_value", "invalid_type"):
            line_idx = int(line) - 1
            if 0 <= line_idx < len(config_lines):
                message += f"\n  {config_lines[line_idx].strip()}"
        return message

    def report_single_error(self, error: dict[str, Any], config_lines: list[str]) -> None:
        """Print a single validation error."""
        self.console.print(f"\n[bold red]Configuration error[/bold red] {escape(self.format_error(error, config_lines))}", highlight=False)

    def report_yaml_error(self, error: yaml.YAMLError, config_path: Path) -> None:
        """
        Report YAML parsing errors with line information.

        Args:
            error: YAML parsing error
            config_path: Path to configuration file
        """
        self.console.rule("[bold red]YAML PARSING ERROR")
        self.console.print(f"Failed to parse {config_path}", markup=False)

        mark = getattr(error, "problem_mark", None)
        if mark is not None:
            self.console.print(f"Error at line {mark.line + 1}, column {mark.column + 1}:", markup=False)
            lines = config_path.read_text(encoding="utf-8", errors="replace").splitlines()
            if mark.line < len(lines):
                prefix = f"  {mark.line + 1}: "
                self.console.print(f"{prefix}{lines[mark.line].rstrip()}", markup=False)
                self.console.print(" " * (len(prefix) + mark.column) + "^", markup=False)

        problem = getattr(error, "problem", None) or str(error)
        self.console.print(f"Problem: {problem}", markup=False)
        note = getattr(error, "note", None)
        if note:
            self.console.print(f"Note: {note}", markup=False)

        self.console.print("\nCommon YAML issues:")
        self.console.print("  - Indentation must be consistent (use spaces, not tabs)")
        self.console.print("  - Lists must start with '- ' (dash and space)", markup=False)
        self.console.print("Fix the syntax error or delete the config file to regenerate defaults.")
        self.console.rule()

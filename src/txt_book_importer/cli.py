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

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Command-line entry point of the importer
# - Chapters are shown in a rich table, or dumped as JSON with --json
#

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape
from rich.table import Table

from .chapter_detector import EmptyInputError
from .cli_parser import create_parser, validate_args
from .cli_setup import setup_configuration, setup_logging
from .common_print_utils import console, print_plain, safe_print
from .models import ImportResult
from .text_importer import import_book_from_txt

APP_NAME = "txt-book-importer"
APP_VERSION = "1.0.0"

tolog: logging.Logger | None = None


def build_chapter_table(result: ImportResult, show_lines: bool = False) -> Table:
    """Render the chapters of an import result as a rich table."""
    table = Table(title=escape(result.metadata.title or "Untitled"))
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Lines", justify="right")
    if show_lines:
        table.add_column("Range", justify="right")
        table.add_column("Heading")

    for chapter in result.chapters:
        row = [str(chapter.number), escape(chapter.title or "-"), str(chapter.line_count)]
        if show_lines:
            row.append(f"{chapter.start_index}-{chapter.end_index}")
            row.append(escape(chapter.heading.text) if chapter.heading is not None else "-")
        table.add_row(*row)
    return table


def print_result(result: ImportResult, show_lines: bool = False) -> None:
    metadata = result.metadata
    safe_print(f"[bold]Title:[/bold] {escape(metadata.title or 'unknown')}")
    safe_print(f"[bold]Author:[/bold] {escape(metadata.author or 'unknown')}")
    if metadata.language:
        safe_print(f"[bold]Language:[/bold] {escape(metadata.language)}")
    console.print(build_chapter_table(result, show_lines))
    safe_print(f"[green]{len(result.chapters)} chapter(s) imported[/green]")


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the txt-book-importer command."""
    global tolog

    config_manager, config = setup_configuration(argv)

    parser = create_parser(config)
    args = parser.parse_args(argv)
    config = config_manager.update_with_args(args)

    tolog = setup_logging(config, args.log_level)
    validate_args(args, parser)

    file_path = Path(args.filepath)
    tolog.info(f"Importing {file_path}")
    try:
        result = import_book_from_txt(
            file_path,
            detect_chapters=config["chapter_detection"]["enabled"],
            settings=config_manager.detection_settings,
            encoding=config["text_import"]["default_encoding"],
            strip_boilerplate=config["text_import"]["strip_gutenberg_boilerplate"],
        )
    except (EmptyInputError, ValueError, OSError) as e:
        tolog.error(f"Import of {file_path} failed: {e}")
        safe_print(f"[bold red]Import failed: {escape(str(e))}[/bold red]")
        sys.exit(1)

    if args.json:
        print_plain(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_result(result, show_lines=args.show_lines)


if __name__ == "__main__":
    main()

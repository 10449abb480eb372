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
#
# CHANGELOG:
# - Reworked the book import into the plain-text import pipeline
# - Metadata and text areas are analysed separately
# - Chapter detection can be switched off to import the full text as one chapter
#

"""Plain-text import: raw lines in, ImportResult out."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Callable, Sequence

from .book_builder import build
from .chapter_detector import detect
from .chapter_position import ChapterPosition
from .detection_settings import DetectionSettings
from .file_handler import read_text_lines
from .line_classifier import classify_lines
from .metadata_analyzer import MetadataAnalyzer
from .models import DocumentMetadata, DocumentPart, ImportResult
from .text_splitter import TextSplitter

logger = logging.getLogger(__name__)


def default_id_factory() -> str:
    return str(uuid.uuid4())


def extract_metadata(metadata_lines: Sequence[str], source_file: str | Path | None = None) -> DocumentMetadata:
    """Extract the metadata from the metadata area of a file."""
    return MetadataAnalyzer(metadata_lines).extract_metadata(source_file)


def extract_chapters(
    text_lines: Sequence[str],
    detect_chapters: bool = True,
    settings: DetectionSettings | None = None,
    id_factory: Callable[[], str] | None = None,
) -> list[DocumentPart]:
    """
    Detect the chapters of the text area and build the document parts.

    The plain-text path always yields exactly one part. An empty text area
    gives a part without chapters.

    Args:
        text_lines: Raw lines of the text area
        detect_chapters: False puts the whole text into one chapter
        settings: Detection thresholds
        id_factory: Identifier source for parts and chapters

    Returns:
        List holding the single DocumentPart
    """
    settings = settings or DetectionSettings()
    lines = classify_lines(text_lines, settings)
    if lines:
        position = detect(lines, detect_chapters=detect_chapters, settings=settings)
    else:
        logger.warning("The text area is empty, importing a part without chapters")
        position = ChapterPosition()
    return build([lines], [position], id_factory=id_factory)


def import_text_lines(
    raw_lines: Sequence[str] | None,
    detect_chapters: bool = True,
    settings: DetectionSettings | None = None,
    source_file: str | Path | None = None,
    strip_boilerplate: bool = True,
    id_factory: Callable[[], str] | None = default_id_factory,
) -> ImportResult:
    """
    Import already decoded lines.

    Args:
        raw_lines: All lines of the document
        detect_chapters: Run chapter detection (False: one full-text chapter)
        settings: Detection thresholds
        source_file: Name of the source file, used for metadata fallbacks
        strip_boilerplate: Honour Project Gutenberg start/end markers
        id_factory: Identifier source for parts and chapters (None: no identifiers)

    Returns:
        ImportResult with one DocumentPart and the document metadata

    Raises:
        ValueError: If raw_lines is None
    """
    if raw_lines is None:
        raise ValueError("raw_lines must not be None")

    splitter = TextSplitter(raw_lines, strip_boilerplate=strip_boilerplate)
    metadata = extract_metadata(splitter.get_metadata_list(), source_file)
    parts = extract_chapters(splitter.get_text_list(), detect_chapters, settings, id_factory)
    logger.info(f"Imported '{metadata.title or source_file or 'untitled'}': {sum(len(p.chapters) for p in parts)} chapters")
    return ImportResult(parts=parts, metadata=metadata)


def import_book_from_txt(
    file_path: str | Path,
    detect_chapters: bool = True,
    settings: DetectionSettings | None = None,
    encoding: str | None = None,
    strip_boilerplate: bool = True,
) -> ImportResult:
    """
    Import a plain-text e-book file.

    Args:
        file_path: Path to the .txt file
        detect_chapters: Run chapter detection (False: one full-text chapter)
        settings: Detection thresholds
        encoding: File encoding; detected when None
        strip_boilerplate: Honour Project Gutenberg start/end markers

    Returns:
        ImportResult

    Raises:
        FileNotFoundError: If the file does not exist
    """
    file_path = Path(file_path)
    logger.debug(f"Importing text file {file_path}")
    raw_lines = read_text_lines(file_path, encoding)
    return import_text_lines(
        raw_lines,
        detect_chapters=detect_chapters,
        settings=settings,
        source_file=file_path,
        strip_boilerplate=strip_boilerplate,
    )

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
metadata_analyzer.py - Title, author and release data of an imported text
=========================================================================

Reads the metadata area found before the text area. Project Gutenberg style
"Key: value" fields are preferred, then a "The Project Gutenberg EBook of
<title>, by <author>" line, then a "<title> by <author>" line and finally
the file name.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from .models import DocumentMetadata
from .text_splitter import HEADER_FIELD_RE, METADATA_KEYS

logger = logging.getLogger(__name__)

EBOOK_OF_RE = re.compile(
    r"Project Gutenberg'?s?\s+E-?Book,?\s+of\s+(?P<title>.+?)(?:,\s*by\s+(?P<author>.+?))?\s*$",
    re.IGNORECASE,
)
BY_LINE_RE = re.compile(r"^\s*(?P<title>\S.*?)\s*,?\s+by\s+(?P<author>[^,]+?)\s*$", re.IGNORECASE)
EBOOK_NUMBER_RE = re.compile(r"\s*\[(?:E-?Book|Etext)\s*#\d+\]\s*", re.IGNORECASE)

# Only the first lines of a metadata area are searched for a "<title> by <author>" line
BY_LINE_SEARCH_LIMIT = 10


def title_author_from_filename(filename: str | Path) -> tuple[str | None, str | None]:
    """
    Extract title and author from a file name of the form "Title by Author.txt".

    Args:
        filename: File name or path

    Returns:
        Tuple of (title, author); author is None when the name has no " by "
    """
    stem = Path(filename).stem.replace("_", " ").strip()
    if not stem:
        return None, None
    if " by " in stem:
        title, author = stem.rsplit(" by ", 1)
        return title.strip() or None, author.strip() or None
    return stem, None


class MetadataAnalyzer:
    """Extracts DocumentMetadata from the lines of a metadata area."""

    def __init__(self, lines: Sequence[str] | None) -> None:
        if lines is None:
            raise ValueError("metadata lines must not be None")
        self.lines = [line.rstrip() for line in lines]

    def read_fields(self) -> dict[str, str]:
        """
        Collect "Key: value" fields.

        An indented line following a field continues its value, as in

            Title: The Adventures
                   of Tom Sawyer
        """
        fields: dict[str, str] = {}
        current: str | None = None
        for line in self.lines:
            if not line.strip():
                current = None
                continue
            m = HEADER_FIELD_RE.match(line)
            key = m.group("key").strip().lower() if m else None
            if m and key in METADATA_KEYS:
                current = key
                if key not in fields:
                    fields[key] = m.group("value")
                else:
                    current = None
            elif current is not None and line[:1].isspace():
                fields[current] = f"{fields[current]} {line.strip()}".strip()
            else:
                current = None
        return {key: value for key, value in fields.items() if value}

    def _title_author_from_lines(self) -> tuple[str | None, str | None]:
        for line in self.lines:
            m = EBOOK_OF_RE.search(line)
            if m:
                return m.group("title").strip(), (m.group("author") or "").strip() or None

        non_blank = [line for line in self.lines if line.strip()][:BY_LINE_SEARCH_LIMIT]
        for line in non_blank:
            if HEADER_FIELD_RE.match(line):
                continue
            m = BY_LINE_RE.match(line)
            if m:
                return m.group("title").strip(), m.group("author").strip()
        return None, None

    def extract_metadata(self, source_file: str | Path | None = None) -> DocumentMetadata:
        """
        Extract the document metadata.

        Args:
            source_file: Name of the imported file, used as last resort for title/author

        Returns:
            DocumentMetadata (fields that could not be found stay None)
        """
        fields = self.read_fields()
        title = fields.get("title")
        author = fields.get("author")

        if not title or not author:
            line_title, line_author = self._title_author_from_lines()
            title = title or line_title
            author = author or line_author

        if (not title or not author) and source_file is not None:
            file_title, file_author = title_author_from_filename(source_file)
            title = title or file_title
            author = author or file_author

        release_date = fields.get("release date") or fields.get("posting date")
        if release_date:
            release_date = EBOOK_NUMBER_RE.sub(" ", release_date).strip() or None

        metadata = DocumentMetadata(
            title=title,
            author=author,
            language=fields.get("language"),
            release_date=release_date,
            publisher=fields.get("publisher"),
            edition=fields.get("edition"),
            source_file=Path(source_file).name if source_file is not None else None,
        )
        logger.debug(f"Extracted metadata: title={metadata.title!r}, author={metadata.author!r}")
        return metadata

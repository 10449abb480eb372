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
file_handler.py - Read plain-text e-book files into lines
=========================================================

Detects the file encoding with chardet, decodes the content and splits it
into lines. This is the line supplier of the importer; everything after it
works on decoded text only.
"""

from __future__ import annotations

import logging
from pathlib import Path

import chardet
from chardet.universaldetector import UniversalDetector

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8", "cp1252", "latin-1"]
MIN_ENCODING_CONFIDENCE = 0.7

# Bytes sampled by chardet.detect
CHARDET_SAMPLE_SIZE = 32 * 1024


def detect_file_encoding(file_path: Path, method: str = "universal") -> tuple[str, float]:
    """
    Detect the encoding of a file.

    Args:
        file_path: File to analyse
        method: 'universal' feeds the file line by line to UniversalDetector,
            'chardet' runs chardet.detect on a sample

    Returns:
        Tuple of (encoding, confidence); ("utf-8", 0.0) if nothing was detected

    Raises:
        ValueError: For an unknown method
    """
    if method == "universal":
        detector = UniversalDetector()
        with file_path.open("rb") as f:
            for line in f:
                detector.feed(line)
                if detector.done:
                    break
        detector.close()
        result = detector.result
    elif method == "chardet":
        with file_path.open("rb") as f:
            result = chardet.detect(f.read(CHARDET_SAMPLE_SIZE))
    else:
        raise ValueError(f"Unknown detection method: {method}")

    encoding = result.get("encoding") or "utf-8"
    confidence = result.get("confidence") or 0.0
    logger.debug(f"Detected encoding of {file_path.name}: {encoding} (confidence: {confidence})")
    return encoding, confidence


def decode_bytes(raw_data: bytes, encoding: str | None, fallback_encodings: list[str] | None = None) -> str:
    """
    Decode raw bytes, trying ``encoding`` first and then the fallbacks.

    The last fallback decodes with replacement characters, so this never fails.
    """
    candidates = ([encoding] if encoding else []) + list(fallback_encodings or DEFAULT_FALLBACK_ENCODINGS)
    for enc in candidates:
        try:
            content = raw_data.decode(enc)
            logger.debug(f"Decoded with {enc}")
            return content
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {enc}: {e}")
    logger.warning(f"All encodings failed, using {candidates[-1]} with error replacement")
    return raw_data.decode(candidates[-1], errors="replace")


def decode_input_file_content(input_file: str | Path, encoding: str | None = None) -> str:
    """
    Read and decode a text file.

    Args:
        input_file: Path to the file
        encoding: Encoding to use; detected with chardet when None

    Returns:
        Decoded file content

    Raises:
        FileNotFoundError: If the file does not exist
    """
    input_file = Path(input_file)
    if not input_file.is_file():
        raise FileNotFoundError(f"Text file not found: {input_file}")

    raw_data = input_file.read_bytes()
    if encoding is None:
        detected, confidence = detect_file_encoding(input_file)
        if confidence >= MIN_ENCODING_CONFIDENCE:
            encoding = detected
        else:
            logger.debug(f"Encoding confidence {confidence} below {MIN_ENCODING_CONFIDENCE}, trying fallbacks")
    return decode_bytes(raw_data, encoding)


def read_text_lines(input_file: str | Path, encoding: str | None = None) -> list[str]:
    """Read a text file and return its lines without line terminators."""
    return decode_input_file_content(input_file, encoding).splitlines()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for file_handler module.
"""

import pytest

from txt_book_importer.file_handler import (
    decode_bytes,
    decode_input_file_content,
    detect_file_encoding,
    read_text_lines,
)


class TestDecodeBytes:
    """Test decoding with fallbacks."""

    def test_requested_encoding(self):
        """The requested encoding is tried first."""
        assert decode_bytes("héllo".encode("utf-8"), "utf-8") == "héllo"

    def test_fallback(self):
        """Invalid UTF-8 falls back to cp1252."""
        assert decode_bytes("café".encode("cp1252"), None) == "café"

    def test_unknown_encoding(self):
        """An unknown encoding name is skipped."""
        assert decode_bytes(b"plain", "no-such-codec") == "plain"


class TestFiles:
    """Test file based helpers."""

    def test_detect_ascii(self, temp_dir):
        """Plain ASCII content is detected with confidence."""
        path = temp_dir / "ascii.txt"
        path.write_bytes(b"Just some plain ASCII text.\n" * 20)
        encoding, confidence = detect_file_encoding(path)
        assert encoding.lower() in ("ascii", "utf-8")
        assert confidence > 0.5

    def test_detect_with_chardet_sample(self, temp_dir):
        """The chardet method detects from a sample of the file."""
        path = temp_dir / "sample.txt"
        path.write_bytes(b"Just some plain ASCII text.\n" * 4000)
        encoding, confidence = detect_file_encoding(path, method="chardet")
        assert encoding.lower() in ("ascii", "utf-8")
        assert confidence > 0.5

    def test_detect_unknown_method(self, temp_dir):
        """Unknown detection methods raise ValueError."""
        path = temp_dir / "a.txt"
        path.write_bytes(b"x")
        with pytest.raises(ValueError):
            detect_file_encoding(path, method="magic")

    def test_read_text_lines(self, temp_dir):
        """Lines are split without terminators."""
        path = temp_dir / "lines.txt"
        path.write_bytes(b"one\r\ntwo\nthree")
        assert read_text_lines(path, "utf-8") == ["one", "two", "three"]

    def test_missing_file(self, temp_dir):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            decode_input_file_content(temp_dir / "nope.txt")

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for text_splitter module.
"""

import pytest

from txt_book_importer.text_splitter import (
    TextSplitter,
    filter_text_lines,
    is_metadata_field,
    remove_excess_empty_lines,
)


class TestFilterTextLines:
    """Test text area normalisation."""

    def test_remove_excess_empty_lines(self):
        """Runs of blank lines are capped."""
        lines = ["a", "", "", "", "", "", "b"]
        assert remove_excess_empty_lines(lines) == ["a", "", "", "", "b"]
        assert remove_excess_empty_lines(lines, max_blank=1) == ["a", "", "b"]

    def test_filter_text_lines(self):
        """BOM, trailing whitespace and outer blank lines are removed."""
        lines = ["\ufeff", "", "Hello   ", "", "", "", "", "", "World", "  ", ""]
        assert filter_text_lines(lines) == ["Hello", "", "", "", "World"]

    def test_filter_empty(self):
        """Blank input gives no lines."""
        assert filter_text_lines([]) == []
        assert filter_text_lines(["", "  "]) == []

    def test_is_metadata_field(self):
        """Known keys only."""
        assert is_metadata_field("Title: Emma")
        assert is_metadata_field("Release Date: May 1, 2001")
        assert not is_metadata_field("Note: this is not metadata")
        assert not is_metadata_field("He said: nothing")


class TestTextSplitter:
    """Test splitting into metadata and text areas."""

    def test_gutenberg_markers(self, gutenberg_lines):
        """Start and end markers delimit the text area."""
        splitter = TextSplitter(gutenberg_lines)
        text = splitter.get_text_list()
        assert text[0] == "The Silent Harbour"
        assert text[-1] == "He had never seen it so dark."
        assert "Title: The Silent Harbour" in splitter.get_metadata_list()
        assert not any("PROJECT GUTENBERG" in line for line in text)
        assert "End of the licence text." not in text

    def test_keep_boilerplate(self, gutenberg_lines):
        """Without boilerplate handling the markers stay in the text."""
        splitter = TextSplitter(gutenberg_lines, strip_boilerplate=False)
        assert any(line.startswith("*** START OF THIS PROJECT GUTENBERG") for line in splitter.text_lines)
        assert splitter.metadata_lines == []

    def test_header_block(self):
        """A leading Key: value block is the metadata area."""
        lines = ["Title: Emma", "Author: Jane Austen", "", "", "CHAPTER I", "", "Emma Woodhouse, handsome, clever, and rich."]
        splitter = TextSplitter(lines)
        assert splitter.metadata_lines == ["Title: Emma", "Author: Jane Austen"]
        assert splitter.text_lines == ["CHAPTER I", "", "Emma Woodhouse, handsome, clever, and rich."]

    def test_plain_text(self, prose_lines):
        """Text without any header is all text."""
        splitter = TextSplitter(prose_lines)
        assert splitter.metadata_lines == []
        assert splitter.text_lines == prose_lines

    def test_line_terminators_and_bom(self):
        """CR/LF and a byte order mark are removed."""
        splitter = TextSplitter(["\ufeffFirst line\r\n", "Second line\n"])
        assert splitter.text_lines == ["First line", "Second line"]

    def test_none(self):
        """None is rejected."""
        with pytest.raises(ValueError):
            TextSplitter(None)

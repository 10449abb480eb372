#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest configuration and shared fixtures for all tests
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src directory to path so we can import our modules
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
sys.path.insert(0, src_dir)


GUTENBERG_BOOK = """The Project Gutenberg EBook of The Silent Harbour, by Jane Doe

Title: The Silent Harbour

Author: Jane Doe

Release Date: March 3, 2004 [EBook #1234]

Language: English

*** START OF THIS PROJECT GUTENBERG EBOOK THE SILENT HARBOUR ***




The Silent Harbour

by Jane Doe


CHAPTER I

The fog rolled in from the sea before dawn.
Nobody in the village noticed it at first.


CHAPTER II

By noon the harbour had vanished entirely.
The fishermen stayed at home.


CHAPTER III

At night the lighthouse keeper lit his lamp.
He had never seen it so dark.

*** END OF THIS PROJECT GUTENBERG EBOOK THE SILENT HARBOUR ***

End of the licence text.
"""

SCENARIO_A_LINES = [
    "CHAPTER ONE",
    "It was a bright cold day in April.",
    "",
    "CHAPTER TWO",
    "The clocks were striking thirteen.",
    "",
    "CHAPTER THREE",
    "Nobody answered the door.",
]

# Twenty lines, blank lines alternating with text, headings on lines 3, 9 and 15
EVENLY_SPACED_LINES = [
    "",
    "The story begins in a small fishing town.",
    "",
    "CHAPTER ONE",
    "",
    "It was a bright cold day in April.",
    "",
    "The boats had not gone out for a week.",
    "",
    "CHAPTER TWO",
    "",
    "The clocks were striking thirteen.",
    "",
    "Somebody was knocking at the door.",
    "",
    "CHAPTER THREE",
    "",
    "Nobody answered the door.",
    "",
    "The house stayed dark until morning.",
]

PROSE_LINES = [
    "It was late when the train finally arrived at the station.",
    "The platform was empty except for a porter and his cart.",
    "She picked up her suitcase and stepped down onto the wet boards.",
    "Somewhere a dog barked twice and then fell silent.",
    "There was nobody waiting for her, which was exactly as planned.",
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def gutenberg_lines():
    """A small Project Gutenberg style book split into lines"""
    return GUTENBERG_BOOK.splitlines()


@pytest.fixture
def scenario_a_lines():
    """Three CHAPTER headings separated by prose"""
    return list(SCENARIO_A_LINES)


@pytest.fixture
def evenly_spaced_lines():
    """Twenty blank-separated lines with CHAPTER ONE/TWO/THREE evenly spaced"""
    return list(EVENLY_SPACED_LINES)


@pytest.fixture
def prose_lines():
    """Five lines of prose without any heading"""
    return list(PROSE_LINES)


@pytest.fixture
def gutenberg_file(temp_dir):
    """The Gutenberg sample book written to a UTF-8 file"""
    path = temp_dir / "The Silent Harbour by Jane Doe.txt"
    path.write_text(GUTENBERG_BOOK, encoding="utf-8")
    return path

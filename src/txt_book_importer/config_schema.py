#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Replaced the translation presets with chapter detection settings
# - Added text_import and logging sections
#

"""
config_schema.py - Configuration schema and default template for the text importer
"""

from .detection_settings import (
    DEFAULT_BLANK_GAP_SIZE,
    DEFAULT_DUPLICATE_WINDOW,
    DEFAULT_FRONT_MATTER_FOLD_LINES,
    DEFAULT_MIN_BODY_LINES,
    DEFAULT_MIN_CHAPTERS,
    DEFAULT_RULE_ORDER,
    DEFAULT_SHORT_LINE_THRESHOLD,
)

DEFAULT_CONFIG_FILENAME = "txt_importer_config.yml"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_RULE_ORDER_YAML = "\n".join(f"    - {name}" for name in DEFAULT_RULE_ORDER)

# Default configuration template with extensive comments
DEFAULT_CONFIG_TEMPLATE = f"""# Text Importer Configuration File
# ================================
# Settings for importing plain-text e-books and detecting their chapters.
# Any command-line arguments will override these settings.

# Chapter Detection
# -----------------
chapter_detection:
  # Run heuristic chapter detection (false: the whole text becomes one chapter)
  enabled: true
  # Rules tried in this order; the first plausible result wins.
  # Available: keyword, numeral_sequence, caps_block, whitespace_gap
  rule_order:
{_RULE_ORDER_YAML}
  # Minimum number of chapters a rule must find (default: {DEFAULT_MIN_CHAPTERS})
  min_chapters: {DEFAULT_MIN_CHAPTERS}
  # Minimum number of non-blank text lines under each heading (default: {DEFAULT_MIN_BODY_LINES})
  min_body_lines: {DEFAULT_MIN_BODY_LINES}
  # Lines shorter than this many characters count as short (default: {DEFAULT_SHORT_LINE_THRESHOLD})
  short_line_threshold: {DEFAULT_SHORT_LINE_THRESHOLD}
  # Blank lines in a row that separate two chapters (default: {DEFAULT_BLANK_GAP_SIZE})
  blank_gap_size: {DEFAULT_BLANK_GAP_SIZE}
  # Identical headings within this many lines are counted once (default: {DEFAULT_DUPLICATE_WINDOW})
  duplicate_window: {DEFAULT_DUPLICATE_WINDOW}
  # Front matter with at most this many text lines joins the first chapter (default: {DEFAULT_FRONT_MATTER_FOLD_LINES})
  front_matter_fold_lines: {DEFAULT_FRONT_MATTER_FOLD_LINES}

# Text Import
# -----------
text_import:
  # Encoding of input files; null detects it automatically
  default_encoding: null
  # Cut Project Gutenberg headers and licences at their start/end markers
  strip_gutenberg_boilerplate: true

# Logging
# -------
logging:
  # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
  level: WARNING
  # Log message format
  format: "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
  # Also write the log to a file
  file_enabled: false
  # Log file path
  file_path: txt_importer.log
"""

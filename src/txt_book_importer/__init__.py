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
txt-book-importer - Plain-text e-book importer

Splits a plain-text e-book into metadata and chapters using a cascade of
chapter heading heuristics with a full-text fallback.
"""

__version__ = "1.0.0"
__author__ = "Emasoft"
__email__ = "713559+Emasoft@users.noreply.github.com"
__license__ = "Apache-2.0"

# Core pipeline
from . import line_classifier
from . import heading_patterns
from . import heading_rules
from . import chapter_position
from . import chapter_validators
from . import chapter_issues
from . import chapter_detector
from . import book_builder
from . import models

# Import front end
from . import text_splitter
from . import metadata_analyzer
from . import file_handler
from . import text_importer

# Support modules
from . import detection_settings
from . import config_manager
from . import common_yaml_utils
from . import common_print_utils

from .chapter_detector import AutomatedChapterDetector, EmptyInputError, detect
from .text_importer import import_book_from_txt, import_text_lines

__all__ = [
    "line_classifier",
    "heading_patterns",
    "heading_rules",
    "chapter_position",
    "chapter_validators",
    "chapter_issues",
    "chapter_detector",
    "book_builder",
    "models",
    "text_splitter",
    "metadata_analyzer",
    "file_handler",
    "text_importer",
    "detection_settings",
    "config_manager",
    "common_yaml_utils",
    "common_print_utils",
    "AutomatedChapterDetector",
    "EmptyInputError",
    "detect",
    "import_book_from_txt",
    "import_text_lines",
]

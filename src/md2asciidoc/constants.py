#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the md2asciidoc library.

This module centralizes the literal types and default configuration values
used across the conversion pipeline.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Source Normalization - Front matter delimiters
3. Conversion Defaults - Defaults for ConversionOptions fields
4. AsciiDoc Syntax - Delimiters and markers emitted by the renderer
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

InputFormat = Literal["markdown", "gfm", "commonmark"]
WrapMode = Literal["preserve", "none", "ventilate", "width"]
TaskStatus = Literal["checked", "unchecked"]

INPUT_FORMATS: tuple[str, ...] = ("markdown", "gfm", "commonmark")
WRAP_MODES: tuple[str, ...] = ("preserve", "none", "ventilate", "width")

# =============================================================================
# Source Normalization
# =============================================================================

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_CLOSERS = ("---", "...")

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_INPUT_FORMAT: InputFormat = "markdown"
DEFAULT_HEADING_OFFSET = 0
DEFAULT_AUTO_IDS = False
DEFAULT_AUTO_ID_PREFIX = "_"
DEFAULT_AUTO_ID_SEPARATOR = "-"
DEFAULT_LAZY_IDS = False
DEFAULT_WRAP: WrapMode = "preserve"
DEFAULT_WRAP_WIDTH = 80
DEFAULT_AUTO_LINKS = True
DEFAULT_HTML_TO_NATIVE = True
DEFAULT_DIAGRAM_LANGUAGES: tuple[str, ...] = ("plantuml", "mermaid")

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

# Fallback slug when a heading has no alphanumeric text at all
EMPTY_HEADING_SLUG = "section"

DIAGRAM_LANGUAGE_PATTERN = re.compile(r"^[A-Za-z0-9_.+-]+$")
ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*!?$")

# Markdown plugins enabled per input format (mistune plugin names)
MARKDOWN_PLUGINS: dict[str, tuple[str, ...]] = {
    "markdown": ("table", "strikethrough", "footnotes"),
    "gfm": ("table", "strikethrough", "task_lists", "url"),
    "commonmark": (),
}

# =============================================================================
# TOC Markers
# =============================================================================

TOC_BEGIN_PATTERN = re.compile(r"^TOC\b(?P<params>.*)$", re.IGNORECASE | re.DOTALL)
TOC_END_PATTERN = re.compile(r"^/TOC$", re.IGNORECASE)
TOC_PARAM_PATTERN = re.compile(r"(depthFrom|depthTo):(\d+)", re.IGNORECASE)

# =============================================================================
# AsciiDoc Syntax
# =============================================================================

ASCIIDOC_LISTING_DELIMITER = "----"
ASCIIDOC_LITERAL_DELIMITER = "...."
ASCIIDOC_QUOTE_DELIMITER = "____"
ASCIIDOC_PASS_DELIMITER = "++++"
ASCIIDOC_TABLE_DELIMITER = "|==="
ASCIIDOC_THEMATIC_BREAK = "'''"
ASCIIDOC_HARD_BREAK = " +"
ASCIIDOC_LIST_CONTINUATION = "+"
ASCIIDOC_LIST_SEPARATOR = "//-"
ASCIIDOC_EMPTY_ATTRIBUTE = "{empty}"

TABLE_ALIGNMENT_SPECS: dict[str | None, str] = {"left": "<", "center": "^", "right": ">", None: ""}

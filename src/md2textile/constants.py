#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2textile.

This module centralizes the hardcoded values and default configuration
constants used across the parser, the renderer and the command-line tools.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parser Defaults - Markdown scanning limits
3. Renderer Defaults - Textile output settings
4. CLI Defaults - Exit codes and configuration file names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ALIGNMENTS: tuple[Alignment, ...] = ("left", "center", "right")

# =============================================================================
# Parser Defaults
# =============================================================================

# Bound on recursive sub-parses (blockquotes, table cells), nested lists and
# nested inline spans.
DEFAULT_MAX_NESTING_DEPTH = 100

# Columns counted for a tab character when measuring list indentation
DEFAULT_TAB_WIDTH = 2

# Longest backtick run that opens an inline code span
MAX_CODE_SPAN_BACKTICKS = 10

CODE_FENCE = "```"
HARD_LINE_BREAK = "  \n"

# Characters that end a run of plain inline text
INLINE_SPECIAL_CHARS = frozenset("*_`[!")

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_CODE_SPAN_STYLE = (
    "font-size: 0.85em;padding: 0.2em 0.4em;background-color: #656c7633;border-radius: 3px;font-weight:bold;"
)
DEFAULT_ESCAPE_PERCENT_IN_CODE = True

TEXTILE_BOLD_DELIMITER = "*"
TEXTILE_ITALIC_DELIMITER = "_"
TEXTILE_ORDERED_MARKER = "#"
TEXTILE_UNORDERED_MARKER = "*"
TEXTILE_HORIZONTAL_RULE = "---"
TEXTILE_BLOCKQUOTE_PREFIX = "bq. "
TEXTILE_HEADER_CELL_PREFIX = "_.  "
TEXTILE_ALIGNMENT_PREFIXES: dict[str, str] = {"left": "", "center": "=. ", "right": ">. "}
PERCENT_ENTITY = "&#37;"

# =============================================================================
# CLI Defaults
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 4

DEFAULT_LOG_LEVEL: LogLevel = "WARNING"

CONFIG_FILENAMES = [".md2textile.toml", ".md2textile.yaml", ".md2textile.yml", ".md2textile.json"]
PYPROJECT_TOOL_SECTION = "md2textile"
CONFIG_ENV_VAR = "MD2TEXTILE_CONFIG"

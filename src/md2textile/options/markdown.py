#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/options/markdown.py
"""Configuration options for Markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2textile.constants import DEFAULT_MAX_NESTING_DEPTH, DEFAULT_TAB_WIDTH
from md2textile.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    max_nesting_depth : int, default 100
        Maximum depth of nested constructs: blockquote and table-cell
        sub-documents, nested lists and nested inline spans. Constructs
        beyond the limit are kept as literal text.
    tab_width : int, default 2
        Number of columns a tab character counts for when measuring list
        indentation.

    Examples
    --------
    Limit nesting for untrusted input:
        >>> options = MarkdownParserOptions(max_nesting_depth=20)
        >>> parser = MarkdownParser(options)

    """

    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum depth of nested blockquotes, lists, table cells and inline spans",
            "type": int,
            "importance": "security",
        },
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={
            "help": "Columns counted for a tab when measuring list indentation",
            "type": int,
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If a limit is not a positive integer.

        """
        super().__post_init__()
        if self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.tab_width <= 0:
            raise ValueError(f"tab_width must be positive, got {self.tab_width}")

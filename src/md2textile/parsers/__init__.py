#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers that turn source markup into the md2textile AST."""

from md2textile.parsers.base import BaseParser
from md2textile.parsers.markdown import MarkdownParser

__all__ = ["BaseParser", "MarkdownParser"]

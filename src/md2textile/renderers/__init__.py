#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn the md2textile AST into output markup."""

from md2textile.renderers.base import BaseRenderer, InlineContentMixin
from md2textile.renderers.textile import TextileRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "TextileRenderer"]

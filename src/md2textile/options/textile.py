#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/options/textile.py
"""Configuration options for Textile rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2textile.constants import DEFAULT_CODE_SPAN_STYLE, DEFAULT_ESCAPE_PERCENT_IN_CODE
from md2textile.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TextileRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Textile rendering.

    Parameters
    ----------
    code_span_style : str
        Inline CSS applied to code spans outside tables, emitted as
        ``%{<style>}code%``. An empty string emits a bare ``%code%`` span.
    escape_percent_in_code : bool, default True
        Replace ``%`` inside code spans with ``&#37;`` so the span's own
        delimiter cannot be closed early. Code inside table cells is
        rendered as ``@code@`` and never escaped.

    Examples
    --------
    Basic usage:
        >>> from md2textile.ast import Document, Heading, Text
        >>> from md2textile.renderers.textile import TextileRenderer
        >>> doc = Document(children=[Heading(level=1, children=[Text("Title")])])
        >>> TextileRenderer(TextileRendererOptions()).render_to_string(doc)
        'h1. Title'

    """

    code_span_style: str = field(
        default=DEFAULT_CODE_SPAN_STYLE,
        metadata={"help": "Inline CSS for code spans outside tables", "importance": "core"},
    )
    escape_percent_in_code: bool = field(
        default=DEFAULT_ESCAPE_PERCENT_IN_CODE,
        metadata={"help": "Escape % as &#37; inside code spans", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
        if not isinstance(self.code_span_style, str):
            raise ValueError(f"code_span_style must be a string, got {type(self.code_span_style).__name__}")

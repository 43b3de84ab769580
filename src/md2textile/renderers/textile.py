#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/renderers/textile.py
"""Textile rendering from AST.

This module provides the TextileRenderer class which converts AST nodes to
Textile markup. Blocks are rendered independently and separated by one blank
line. Inline markers get a separating space where the neighbouring text would
otherwise run into them, since Textile only recognizes ``*bold*``, ``_italic_``
and ``%span%`` markers next to whitespace or punctuation.

"""

from __future__ import annotations

import html
import logging
import string
import unicodedata
from typing import Optional

from md2textile.ast.nodes import (
    BlockQuote,
    Bold,
    Code,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    Italic,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
)
from md2textile.ast.visitors import NodeVisitor
from md2textile.constants import (
    PERCENT_ENTITY,
    TEXTILE_ALIGNMENT_PREFIXES,
    TEXTILE_BLOCKQUOTE_PREFIX,
    TEXTILE_BOLD_DELIMITER,
    TEXTILE_HEADER_CELL_PREFIX,
    TEXTILE_HORIZONTAL_RULE,
    TEXTILE_ITALIC_DELIMITER,
    TEXTILE_ORDERED_MARKER,
    TEXTILE_UNORDERED_MARKER,
)
from md2textile.options.textile import TextileRendererOptions
from md2textile.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)


def _is_punctuation(char: str) -> bool:
    return char in string.punctuation or unicodedata.category(char).startswith("P")


def _text_value(node: Optional[Node]) -> str:
    """Return the value of a Text neighbour, or '' for anything else."""
    if isinstance(node, Text):
        return node.value
    return ""


def _space_before(previous: Optional[Node]) -> str:
    value = _text_value(previous)
    if value and not value[-1].isspace():
        return " "
    return ""


def _space_after(following: Optional[Node], punctuation_separates: bool) -> str:
    value = _text_value(following)
    if not value:
        return ""
    first = value[0]
    if first.isspace() or (punctuation_separates and _is_punctuation(first)):
        return ""
    return " "


def _strip_blank_lines(value: str) -> str:
    lines = value.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


class TextileRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to Textile markup text.

    This class implements the visitor pattern to traverse an AST and
    generate Textile output. Rendering never fails: node kinds it does not
    know render as nothing.

    Parameters
    ----------
    options : TextileRendererOptions or None, default = None
        Textile rendering options

    Examples
    --------
    Basic usage:

        >>> from md2textile.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, children=[Text("Title")])])
        >>> TextileRenderer().render_to_string(doc)
        'h1. Title'

    """

    def __init__(self, options: TextileRendererOptions | None = None):
        """Initialize the Textile renderer with options."""
        BaseRenderer._validate_options_type(options, TextileRendererOptions, "textile")
        options = options or TextileRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TextileRendererOptions = options
        self._output: list[str] = []
        self._list_ordered_stack: list[bool] = []
        self._in_table: bool = False

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Textile string.

        Parameters
        ----------
        document : Document
            The document node to render. Any other root renders as ``""``.

        Returns
        -------
        str
            Textile markup text, without a trailing newline

        """
        if not isinstance(document, Document):
            logger.debug("Cannot render root of type %s; returning empty output", type(document).__name__)
            return ""

        self._output = []
        self._list_ordered_stack = []
        self._in_table = False
        self._sibling_window = (None, None)

        document.accept(self)
        return "".join(self._output)

    def _render_blocks(self, blocks: tuple[Node, ...], separator: str) -> str:
        rendered = (self._render_node(block) for block in blocks)
        return separator.join(text for text in rendered if text)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render the blocks of a document separated by one blank line."""
        self._output.append(self._render_blocks(node.children, "\n\n"))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node as ``hN. text``."""
        content = self._render_inline_content(node.children)
        self._output.append(f"h{node.level}. {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_content(node.children))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node.

        Code blocks are wrapped in HTML ``<pre><code>`` so their content is
        passed through verbatim by Textile.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        content = _strip_blank_lines(node.value)
        if node.language:
            opening = f'<pre><code class="{html.escape(node.language, quote=True)}">'
        else:
            opening = "<pre><code>"
        self._output.append(f"{opening}\n{content}\n</code></pre>")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Each paragraph becomes its own ``bq.`` line; other blocks render as
        usual. Lines of one quote are separated by a single newline.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        lines: list[str] = []
        for child in node.children:
            if isinstance(child, Paragraph):
                lines.append(TEXTILE_BLOCKQUOTE_PREFIX + self._render_inline_content(child.children))
            else:
                rendered = self._render_node(child)
                if rendered:
                    lines.append(rendered)
        self._output.append("\n".join(lines))

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Textile uses ``*`` for unordered and ``#`` for ordered items, repeated
        once per nesting level.

        Parameters
        ----------
        node : List
            List to render

        """
        self._list_ordered_stack.append(node.ordered)
        items = [self._render_node(item) for item in node.children if isinstance(item, ListItem)]
        self._list_ordered_stack.pop()
        self._output.append("\n".join(items))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node followed by its nested lists."""
        if not self._list_ordered_stack:
            return
        marker = TEXTILE_ORDERED_MARKER if self._list_ordered_stack[-1] else TEXTILE_UNORDERED_MARKER
        prefix = marker * len(self._list_ordered_stack)

        lines = [f"{prefix} {self._render_inline_content(node.inline_children)}"]
        for nested in node.nested_lists:
            rendered = self._render_node(nested)
            if rendered:
                lines.append(rendered)
        self._output.append("\n".join(lines))

    def visit_table(self, node: Table) -> None:
        """Render a Table node.

        When the second row is an alignment row, the first row is the header
        and renders with ``_.`` cells. Alignment rows are never printed; their
        column alignments apply to the data rows that follow.

        Parameters
        ----------
        node : Table
            Table to render

        """
        rows = [row for row in node.children if isinstance(row, TableRow)]
        has_header = len(rows) > 1 and rows[1].is_alignment_row and not rows[0].is_alignment_row

        alignments: list[str] = []
        lines: list[str] = []
        self._in_table = True
        try:
            for index, row in enumerate(rows):
                if row.is_alignment_row:
                    alignments = [cell.align for cell in row.children if isinstance(cell, TableCell)]
                    continue
                cells = [cell for cell in row.children if isinstance(cell, TableCell)]
                if not cells:
                    continue
                if has_header and index == 0:
                    rendered = [self._render_header_cell(cell) for cell in cells]
                else:
                    rendered = [
                        self._render_data_cell(cell, alignments[column] if column < len(alignments) else cell.align)
                        for column, cell in enumerate(cells)
                    ]
                lines.append("|" + "|".join(rendered) + "|")
        finally:
            self._in_table = False

        self._output.append("\n".join(lines))

    def _render_header_cell(self, cell: TableCell) -> str:
        return f"{TEXTILE_HEADER_CELL_PREFIX}{self._render_inline_content(cell.children)} "

    def _render_data_cell(self, cell: TableCell, align: str) -> str:
        return TEXTILE_ALIGNMENT_PREFIXES.get(align, "") + self._render_inline_content(cell.children)

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node (handled by visit_table)."""
        pass

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node (handled by visit_table)."""
        pass

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Render a HorizontalRule node."""
        self._output.append(TEXTILE_HORIZONTAL_RULE)

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node verbatim."""
        self._output.append(node.value)

    def _append_delimited(self, node: Bold | Italic, delimiter: str) -> None:
        previous, following = self._sibling_window
        content = self._render_inline_content(node.children)
        self._output.append(
            f"{_space_before(previous)}{delimiter}{content}{delimiter}"
            f"{_space_after(following, punctuation_separates=True)}"
        )

    def visit_bold(self, node: Bold) -> None:
        """Render a Bold node as ``*text*``."""
        self._append_delimited(node, TEXTILE_BOLD_DELIMITER)

    def visit_italic(self, node: Italic) -> None:
        """Render an Italic node as ``_text_``."""
        self._append_delimited(node, TEXTILE_ITALIC_DELIMITER)

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        Inside a table cell code renders as ``@code@``. Elsewhere it renders as
        a styled span, ``%{style}code%``, with ``%`` escaped as ``&#37;``.
        Only whitespace in the following text counts as a separator here;
        punctuation after the span still gets a space.

        Parameters
        ----------
        node : Code
            Code to render

        """
        if self._in_table:
            self._output.append(f"@{node.value}@")
            return

        previous, following = self._sibling_window
        value = node.value.replace("%", PERCENT_ENTITY) if self.options.escape_percent_in_code else node.value
        style = f"{{{self.options.code_span_style}}}" if self.options.code_span_style else ""
        self._output.append(
            f"{_space_before(previous)}%{style}{value}%{_space_after(following, punctuation_separates=False)}"
        )

    def visit_link(self, node: Link) -> None:
        """Render a Link node as ``"text":url``."""
        content = self._render_inline_content(node.children)
        self._output.append(f'"{content}":{node.url}')

    def visit_image(self, node: Image) -> None:
        """Render an Image node as ``!url(alt)!`` or ``!url!``."""
        if node.alt:
            self._output.append(f"!{node.url}({node.alt})!")
        else:
            self._output.append(f"!{node.url}!")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("\n")

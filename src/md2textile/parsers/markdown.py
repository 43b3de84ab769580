#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/parsers/markdown.py
"""Markdown to AST parser.

This module provides a hand-written recursive-descent parser for the Markdown
subset handled by md2textile: ATX headings, fenced code blocks, blockquotes,
nested lists, pipe tables, horizontal rules and the inline constructs bold,
italic, code spans, links, images and hard line breaks.

The parser never raises on string input. Unterminated or malformed syntax
degrades to literal text: an unclosed bold span keeps what it has parsed,
an unmatched backtick is emitted as a literal character, and a link without
a ``(url)`` part is reproduced with its brackets.

Blockquote content and table cells are parsed by a fresh ``MarkdownParser``
over the extracted text; the resulting nodes are spliced into the enclosing
tree.
"""

from __future__ import annotations

import logging
import re

from md2textile.ast import (
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
from md2textile.constants import (
    CODE_FENCE,
    HARD_LINE_BREAK,
    INLINE_SPECIAL_CHARS,
    MAX_CODE_SPAN_BACKTICKS,
    Alignment,
)
from md2textile.exceptions import ValidationError
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.parsers.base import BaseParser

logger = logging.getLogger(__name__)

_HORIZONTAL_RULE_RE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")
_HEADING_RE = re.compile(r"^#{1,6}\s")
_UNORDERED_MARKER_RE = re.compile(r"^[-*+]\s")
_ORDERED_MARKER_RE = re.compile(r"^\d+\.\s")
_TABLE_SEPARATOR_RE = re.compile(r"^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
_LINK_TITLE_RE = re.compile(r"^(?P<url>\S*)\s+(?:\"[^\"]*\"|'[^']*')$")

_BLANKS = " \t"


class _Cursor:
    """Forward-moving read position over one source string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, length: int = 1) -> str:
        return self.text[self.pos : self.pos + length]

    def match(self, token: str) -> bool:
        return self.text.startswith(token, self.pos)

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def consume(self, token: str) -> bool:
        if self.match(token):
            self.advance(len(token))
            return True
        return False

    def line_end(self) -> int:
        end = self.text.find("\n", self.pos)
        return len(self.text) if end == -1 else end

    def peek_line(self) -> str:
        """Return the rest of the current line, without its newline."""
        return self.text[self.pos : self.line_end()]

    def read_until(self, delimiter: str) -> str:
        """Consume and return text up to ``delimiter`` (or the end of input)."""
        end = self.text.find(delimiter, self.pos)
        if end == -1:
            end = len(self.text)
        value = self.text[self.pos : end]
        self.pos = end
        return value

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.pos] in " \t\r":
            self.pos += 1

    def skip_blanks(self) -> None:
        while not self.at_end() and self.text[self.pos] in _BLANKS:
            self.pos += 1

    def skip_spaces(self) -> None:
        while not self.at_end() and self.text[self.pos] == " ":
            self.pos += 1

    def skip_to_next_line(self) -> None:
        self.pos = self.line_end()
        self.consume("\n")

    def indentation(self, tab_width: int) -> int:
        """Measure the leading blanks of the current position in columns."""
        columns = 0
        index = self.pos
        while index < len(self.text) and self.text[index] in _BLANKS:
            columns += tab_width if self.text[index] == "\t" else 1
            index += 1
        return columns


def _is_list_start(line: str) -> bool:
    stripped = line.lstrip(_BLANKS)
    return bool(_UNORDERED_MARKER_RE.match(stripped) or _ORDERED_MARKER_RE.match(stripped))


def _is_ordered_list_line(line: str) -> bool:
    return _ORDERED_MARKER_RE.match(line.lstrip(_BLANKS)) is not None


def _strip_link_title(url: str) -> str:
    url = url.strip()
    title_match = _LINK_TITLE_RE.match(url)
    if title_match:
        return title_match.group("url")
    return url


def _merge_text_nodes(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged


def _parse_alignments(line: str) -> list[Alignment]:
    alignments: list[Alignment] = []
    for cell in line.split("|"):
        marker = cell.strip()
        if not marker:
            continue
        if marker.startswith(":") and marker.endswith(":"):
            alignments.append("center")
        elif marker.endswith(":"):
            alignments.append("right")
        else:
            alignments.append("left")
    return alignments


class MarkdownParser(BaseParser):
    """Convert Markdown text to AST representation.

    Supported constructs:

    - Blocks: ATX headings, fenced code blocks, blockquotes, ordered and
      unordered lists nested by indentation, pipe tables with an optional
      alignment row, horizontal rules, paragraphs
    - Inline: ``**bold**``/``__bold__``, ``*italic*``/``_italic_``, code spans
      delimited by backtick runs, ``[links](url)``, ``![images](url)`` and hard
      line breaks (two trailing spaces)

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n\\nSome **bold** text")
        >>> doc.children[0].level
        1

    """

    def __init__(self, options: MarkdownParserOptions | None = None, _depth: int = 0):
        """Initialize the Markdown parser."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._depth = _depth

    def parse(self, source: str) -> Document:
        """Parse Markdown text into an AST.

        Parameters
        ----------
        source : str
            Markdown source. ``\\r\\n`` and ``\\r`` line endings are accepted.

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ValidationError
            If ``source`` is not a string

        """
        if not isinstance(source, str):
            raise ValidationError(
                f"Markdown source must be a string, got {type(source).__name__}",
                parameter_name="source",
                parameter_value=type(source),
            )

        cursor = _Cursor(source.replace("\r\n", "\n").replace("\r", "\n"))
        children: list[Node] = []
        while not cursor.at_end():
            node = self._parse_block(cursor, self._depth)
            if node is not None:
                children.append(node)

        if self._depth == 0:
            logger.debug("Parsed %d characters of Markdown into %d blocks", len(source), len(children))
        return Document(children=children)

    def _can_nest(self, depth: int) -> bool:
        return depth <= self.options.max_nesting_depth

    def _parse_nested(self, text: str, depth: int) -> Document:
        return MarkdownParser(self.options, _depth=depth + 1).parse(text)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_block(self, cursor: _Cursor, depth: int) -> Node | None:
        line_start = cursor.pos
        indent = cursor.indentation(self.options.tab_width)
        cursor.skip_whitespace()

        if cursor.at_end():
            return None
        if cursor.peek() == "\n":
            cursor.advance()
            return None

        line = cursor.peek_line()
        if _HORIZONTAL_RULE_RE.match(line.strip(_BLANKS)):
            cursor.skip_to_next_line()
            return HorizontalRule()
        if line.startswith("|"):
            return self._parse_table(cursor, depth)
        if cursor.peek() == "#":
            return self._parse_heading(cursor, depth)
        if cursor.match(CODE_FENCE):
            return self._parse_code_block(cursor)
        if cursor.peek() == ">":
            return self._parse_blockquote(cursor, depth)
        if _is_list_start(line):
            cursor.pos = line_start
            return self._parse_list(cursor, indent, depth)
        return self._parse_paragraph(cursor, depth)

    def _parse_heading(self, cursor: _Cursor, depth: int) -> Heading:
        level = 0
        while cursor.peek() == "#" and level < 6:
            level += 1
            cursor.advance()
        cursor.skip_spaces()

        children = self._parse_inline(cursor, "\n", depth)
        cursor.consume("\n")
        return Heading(level=level, children=children)

    def _parse_code_block(self, cursor: _Cursor) -> CodeBlock:
        cursor.consume(CODE_FENCE)
        language = cursor.read_until("\n").strip()
        cursor.consume("\n")

        value = cursor.read_until(CODE_FENCE)
        cursor.consume(CODE_FENCE)
        cursor.skip_to_next_line()
        return CodeBlock(value=value, language=language or None)

    def _parse_blockquote(self, cursor: _Cursor, depth: int) -> BlockQuote:
        lines: list[str] = []
        while not cursor.at_end() and cursor.peek() == ">":
            cursor.advance()
            cursor.skip_spaces()
            lines.append(cursor.read_until("\n"))
            cursor.consume("\n")

        content = "\n".join(lines)
        if not self._can_nest(depth + 1):
            logger.debug("Nesting limit reached; keeping blockquote content as text")
            return BlockQuote(children=[Paragraph(children=[Text(content)])])
        return BlockQuote(children=self._parse_nested(content, depth).children)

    def _parse_list(self, cursor: _Cursor, base_indent: int, depth: int) -> List:
        ordered = _is_ordered_list_line(cursor.peek_line())
        items: list[Node] = []

        while not cursor.at_end():
            if cursor.indentation(self.options.tab_width) != base_indent:
                break
            line = cursor.peek_line()
            if not _is_list_start(line) or _is_ordered_list_line(line) != ordered:
                break

            cursor.skip_blanks()
            items.append(self._parse_list_item(cursor, ordered, base_indent, depth))

            # A blank line ends the list
            if cursor.peek() == "\n":
                break

        return List(ordered=ordered, children=items)

    def _parse_list_item(self, cursor: _Cursor, ordered: bool, base_indent: int, depth: int) -> ListItem:
        if ordered:
            while cursor.peek().isdigit():
                cursor.advance()
        cursor.advance()
        cursor.skip_blanks()

        children: list[Node] = list(self._parse_inline(cursor, "\n", depth))
        cursor.consume("\n")

        nested_indent: int | None = None
        while not cursor.at_end() and self._can_nest(depth + 1):
            next_indent = cursor.indentation(self.options.tab_width)
            if next_indent <= base_indent or not _is_list_start(cursor.peek_line()):
                break
            # Lines deeper than the nested list were refused at the nesting limit
            if nested_indent is not None and next_indent > nested_indent:
                break
            nested_indent = next_indent
            children.append(self._parse_list(cursor, next_indent, depth + 1))

        return ListItem(children=children)

    def _parse_table(self, cursor: _Cursor, depth: int) -> Table:
        rows: list[Node] = []
        while not cursor.at_end() and cursor.peek_line().strip(_BLANKS).startswith("|"):
            rows.append(self._parse_table_row(cursor, depth))
        return Table(children=rows)

    def _parse_table_row(self, cursor: _Cursor, depth: int) -> TableRow:
        cursor.skip_whitespace()
        cursor.consume("|")

        line = cursor.peek_line()
        if _TABLE_SEPARATOR_RE.match(line):
            cursor.skip_to_next_line()
            return TableRow(
                children=[TableCell(is_header=True, align=align) for align in _parse_alignments(line)]
            )

        cells: list[Node] = []
        while not cursor.at_end() and cursor.peek() != "\n":
            line_end = cursor.line_end()
            pipe = cursor.text.find("|", cursor.pos, line_end)
            cell_end = line_end if pipe == -1 else pipe
            content = cursor.text[cursor.pos : cell_end].strip()
            cursor.pos = cell_end

            if content or cursor.peek() == "|":
                cells.append(TableCell(children=self._parse_cell_content(content, depth)))

            if cursor.consume("|") and cursor.peek() == "\n":
                break

        cursor.consume("\n")
        return TableRow(children=cells)

    def _parse_cell_content(self, content: str, depth: int) -> list[Node]:
        if not content:
            return []
        if not self._can_nest(depth + 1):
            return [Text(content)]

        cell_doc = self._parse_nested(content, depth)
        if cell_doc.children and isinstance(cell_doc.children[0], Paragraph):
            return list(cell_doc.children[0].children)
        return [Text(content)]

    def _parse_paragraph(self, cursor: _Cursor, depth: int) -> Node:
        if _HEADING_RE.match(cursor.peek_line()):
            return self._parse_heading(cursor, depth)

        children = self._parse_inline(cursor, "\n", depth)
        cursor.consume("\n")
        return Paragraph(children=children)

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _parse_inline(self, cursor: _Cursor, until: str, depth: int) -> list[Node]:
        """Parse inline nodes up to ``until`` or the end of the current line.

        The terminator itself is left for the caller to consume.
        """
        nodes: list[Node] = []
        can_nest = self._can_nest(depth + 1)

        while not cursor.at_end() and not cursor.match(until) and cursor.peek() != "\n":
            start = cursor.pos
            char = cursor.peek()

            if can_nest and (cursor.match("**") or cursor.match("__")):
                marker = cursor.peek(2)
                cursor.advance(2)
                children = self._parse_inline(cursor, marker, depth + 1)
                cursor.consume(marker)
                nodes.append(Bold(children=children))
                continue

            if can_nest and char in "*_":
                cursor.advance()
                children = self._parse_inline(cursor, char, depth + 1)
                cursor.consume(char)
                nodes.append(Italic(children=children))
                continue

            if char == "`":
                nodes.append(self._parse_code_span(cursor))
                continue

            if cursor.match("!["):
                nodes.append(self._parse_image(cursor))
                continue

            if can_nest and char == "[":
                nodes.extend(self._parse_link(cursor, depth))
                continue

            if cursor.consume(HARD_LINE_BREAK):
                nodes.append(LineBreak())
                continue

            text_start = cursor.pos
            while (
                not cursor.at_end()
                and cursor.peek() not in INLINE_SPECIAL_CHARS
                and cursor.peek() != "\n"
                and not cursor.match(until)
                and not cursor.match(HARD_LINE_BREAK)
            ):
                cursor.advance()
            if cursor.pos > text_start:
                nodes.append(Text(cursor.text[text_start : cursor.pos]))

            if cursor.pos == start:
                nodes.append(Text(char))
                cursor.advance()

        return _merge_text_nodes(nodes)

    def _parse_code_span(self, cursor: _Cursor) -> Node:
        text = cursor.text
        start = cursor.pos
        run = 0
        while run < MAX_CODE_SPAN_BACKTICKS and cursor.peek() == "`":
            run += 1
            cursor.advance()

        content_start = cursor.pos
        search = content_start
        while search < len(text):
            if text[search] != "`":
                search += 1
                continue
            run_end = search
            while run_end < len(text) and text[run_end] == "`":
                run_end += 1
            if run_end - search == run:
                value = text[content_start:search]
                cursor.pos = run_end
                if run > 1:
                    if value.startswith(" "):
                        value = value[1:]
                    if value.endswith(" "):
                        value = value[:-1]
                return Code(value=value)
            search = run_end

        cursor.pos = start + 1
        return Text("`")

    def _parse_image(self, cursor: _Cursor) -> Node:
        cursor.advance(2)
        line_end = cursor.line_end()
        close = cursor.text.find("]", cursor.pos, line_end)
        if close == -1:
            return Text("![")

        alt = cursor.text[cursor.pos : close]
        cursor.pos = close + 1
        if cursor.peek() == "(":
            url_end = cursor.text.find(")", cursor.pos, line_end)
            if url_end != -1:
                url = cursor.text[cursor.pos + 1 : url_end]
                cursor.pos = url_end + 1
                return Image(url=_strip_link_title(url), alt=alt)
        return Text(f"![{alt}]")

    def _parse_link(self, cursor: _Cursor, depth: int) -> list[Node]:
        cursor.advance()
        children = self._parse_inline(cursor, "]", depth + 1)
        if not cursor.consume("]"):
            return [Text("["), *children]

        if cursor.peek() == "(":
            url_end = cursor.text.find(")", cursor.pos, cursor.line_end())
            if url_end != -1:
                url = cursor.text[cursor.pos + 1 : url_end]
                cursor.pos = url_end + 1
                return [Link(url=_strip_link_title(url), children=children)]
        return [Text("["), *children, Text("]")]

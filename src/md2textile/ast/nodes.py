#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/ast/nodes.py
"""AST node classes for the Markdown-to-Textile pipeline.

This module defines the closed set of node kinds produced by the Markdown
parser and consumed by the Textile renderer. Each kind is its own frozen
dataclass carrying only the payload that kind needs, plus a class-level
``kind`` discriminator naming it.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - HorizontalRule

Inline nodes represent text flow inside a block:
    - Text, Bold, Italic, Code
    - Link, Image, LineBreak

Nodes are immutable. Child sequences are stored as tuples; lists passed to
the constructors are converted.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Optional

from md2textile.constants import ALIGNMENTS, Alignment


def _freeze_children(node: Node, children: Iterable[Node]) -> None:
    # Frozen dataclasses need object.__setattr__ to normalize a field.
    if not isinstance(children, tuple):
        object.__setattr__(node, "children", tuple(children))


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes.

    Subclasses set ``kind`` to their node-kind name and override ``accept``
    to dispatch to the matching ``visit_*`` method. A subclass that does not
    override ``accept`` is handed to ``visitor.generic_visit``.

    """

    kind: ClassVar[str] = "node"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        return visitor.generic_visit(self)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(frozen=True)
class Document(Node):
    """Root document node containing the block-level nodes of one parse.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Block-level nodes in the document

    """

    kind: ClassVar[str] = "document"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass(frozen=True)
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    children : tuple of Node, default = empty
        Inline nodes representing heading text

    """

    kind: ClassVar[str] = "heading"

    level: int
    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass(frozen=True)
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Inline nodes representing paragraph content

    """

    kind: ClassVar[str] = "paragraph"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass(frozen=True)
class CodeBlock(Node):
    """Fenced code block with an optional language tag.

    Parameters
    ----------
    value : str
        Verbatim code content (never parsed as Markdown)
    language : str or None, default = None
        Language tag taken from the opening fence

    """

    kind: ClassVar[str] = "codeBlock"

    value: str
    language: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass(frozen=True)
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Block-level nodes parsed from the dequoted content

    """

    kind: ClassVar[str] = "blockquote"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass(frozen=True)
class List(Node):
    """List node (ordered or unordered).

    Nesting is structural: a deeper list is a child of a ``ListItem``.

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    children : tuple of ListItem, default = empty
        List items, all at the same indentation level

    """

    kind: ClassVar[str] = "list"

    ordered: bool
    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass(frozen=True)
class ListItem(Node):
    """List item node.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Inline nodes for the item's own text, followed by any nested
        ``List`` nodes

    """

    kind: ClassVar[str] = "listItem"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)

    @property
    def inline_children(self) -> tuple[Node, ...]:
        """Inline content of the item, without nested lists."""
        return tuple(child for child in self.children if not isinstance(child, List))

    @property
    def nested_lists(self) -> tuple[List, ...]:
        """Nested lists attached to this item."""
        return tuple(child for child in self.children if isinstance(child, List))


@dataclass(frozen=True)
class Table(Node):
    """Table node.

    Parameters
    ----------
    children : tuple of TableRow, default = empty
        Table rows in source order, including the alignment row produced by
        the parser for a header separator line

    """

    kind: ClassVar[str] = "table"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass(frozen=True)
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    children : tuple of TableCell, default = empty
        Cells in this row

    """

    kind: ClassVar[str] = "tableRow"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)

    @property
    def is_alignment_row(self) -> bool:
        """Whether this row only carries column alignments.

        The parser turns a ``|:--|--:|`` separator line into a row of empty,
        header-flagged cells. Such a row is never rendered as data.
        """
        return bool(self.children) and all(
            isinstance(cell, TableCell) and cell.is_header and not cell.children for cell in self.children
        )


@dataclass(frozen=True)
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Inline content of the cell
    is_header : bool, default = False
        Whether the cell belongs to a header or alignment row
    align : {'left', 'center', 'right'}, default = 'left'
        Cell alignment

    """

    kind: ClassVar[str] = "tableCell"

    children: tuple[Node, ...] = field(default_factory=tuple)
    is_header: bool = False
    align: Alignment = "left"

    def __post_init__(self) -> None:
        """Validate alignment and store children as a tuple."""
        if self.align not in ALIGNMENTS:
            raise ValueError(f"Cell alignment must be one of {ALIGNMENTS}, got {self.align!r}")
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass(frozen=True)
class HorizontalRule(Node):
    """Horizontal rule (``---``, ``***`` or ``___``)."""

    kind: ClassVar[str] = "horizontalRule"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_horizontal_rule``."""
        return visitor.visit_horizontal_rule(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(Node):
    """Plain text leaf.

    Parameters
    ----------
    value : str
        Literal text

    """

    kind: ClassVar[str] = "text"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass(frozen=True)
class Bold(Node):
    """Bold (strong) span; may nest italic, code and links.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Inline content

    """

    kind: ClassVar[str] = "bold"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_bold``."""
        return visitor.visit_bold(self)


@dataclass(frozen=True)
class Italic(Node):
    """Italic (emphasis) span; may nest bold, code and links.

    Parameters
    ----------
    children : tuple of Node, default = empty
        Inline content

    """

    kind: ClassVar[str] = "italic"

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_italic``."""
        return visitor.visit_italic(self)


@dataclass(frozen=True)
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    value : str
        Verbatim code text (never parsed)

    """

    kind: ClassVar[str] = "code"

    value: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code``."""
        return visitor.visit_code(self)


@dataclass(frozen=True)
class Link(Node):
    """Hyperlink with inline link text.

    Parameters
    ----------
    url : str
        Link target
    children : tuple of Node, default = empty
        Inline nodes representing link text

    """

    kind: ClassVar[str] = "link"

    url: str
    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store children as a tuple."""
        _freeze_children(self, self.children)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)


@dataclass(frozen=True)
class Image(Node):
    """Image reference.

    Parameters
    ----------
    url : str
        Image source
    alt : str, default = ''
        Plain alternative text

    """

    kind: ClassVar[str] = "image"

    url: str
    alt: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image``."""
        return visitor.visit_image(self)


@dataclass(frozen=True)
class LineBreak(Node):
    """Hard line break inside a block (two trailing spaces in Markdown)."""

    kind: ClassVar[str] = "lineBreak"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_line_break``."""
        return visitor.visit_line_break(self)


BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Heading,
    Paragraph,
    CodeBlock,
    BlockQuote,
    List,
    Table,
    HorizontalRule,
)

INLINE_NODE_TYPES: tuple[type[Node], ...] = (Text, Bold, Italic, Code, Link, Image, LineBreak)

BLOCK_KINDS = frozenset(node_type.kind for node_type in BLOCK_NODE_TYPES)
INLINE_KINDS = frozenset(node_type.kind for node_type in INLINE_NODE_TYPES)


def is_block_node(node: Any) -> bool:
    """Return True for nodes allowed as direct children of a Document."""
    return isinstance(node, BLOCK_NODE_TYPES)


def is_inline_node(node: Any) -> bool:
    """Return True for nodes that live inside a block's text flow."""
    return isinstance(node, INLINE_NODE_TYPES)


def get_node_children(node: Node) -> tuple[Node, ...]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    tuple of Node
        Child nodes (empty for leaf nodes)

    Examples
    --------
    >>> heading = Heading(level=1, children=[Text("Hello"), Bold(children=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    children = getattr(node, "children", ())
    if isinstance(children, tuple):
        return children
    return ()

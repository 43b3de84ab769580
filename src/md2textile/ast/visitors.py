#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used by the Textile renderer,
plus two concrete visitors used by the diagnostic tooling: ``NodeCounter``
for node-frequency statistics and ``ValidationVisitor`` for checking the
structural invariants of a parsed tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import Any, Iterable

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
    get_node_children,
    is_block_node,
    is_inline_node,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node kind; a subclass that
    misses one cannot be instantiated. Nodes of kinds outside the closed set
    are routed to ``generic_visit``.

    Examples
    --------
    Collect every link target:

        >>> class LinkCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.urls = []
        ...     def visit_link(self, node):
        ...         self.urls.append(node.url)
        ...     # ... remaining visit_* methods ...

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_bold(self, node: Bold) -> Any:
        """Visit a Bold node."""

    @abstractmethod
    def visit_italic(self, node: Italic) -> Any:
        """Visit an Italic node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for node kinds outside the closed set.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class _TreeWalker(NodeVisitor):
    """Visitor that descends into every child; subclasses hook ``_on_node``."""

    def _on_node(self, node: Node) -> None:
        pass

    def _walk(self, node: Node) -> None:
        self._on_node(node)
        for child in get_node_children(node):
            child.accept(self)

    visit_document = _walk
    visit_heading = _walk
    visit_paragraph = _walk
    visit_code_block = _walk
    visit_block_quote = _walk
    visit_list = _walk
    visit_list_item = _walk
    visit_table = _walk
    visit_table_row = _walk
    visit_table_cell = _walk
    visit_horizontal_rule = _walk
    visit_text = _walk
    visit_bold = _walk
    visit_italic = _walk
    visit_code = _walk
    visit_link = _walk
    visit_image = _walk
    visit_line_break = _walk

    def generic_visit(self, node: Node) -> None:
        self._walk(node)


class NodeCounter(_TreeWalker):
    """Count the nodes of a tree per kind.

    Examples
    --------
        >>> counter = NodeCounter()
        >>> doc.accept(counter)
        >>> counter.most_common()
        [('text', 12), ('paragraph', 4), ...]

    """

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def _on_node(self, node: Node) -> None:
        self.counts[node.kind] += 1

    def most_common(self) -> list[tuple[str, int]]:
        """Return ``(kind, count)`` pairs sorted by descending frequency."""
        return self.counts.most_common()

    @property
    def total(self) -> int:
        """Total number of nodes counted."""
        return sum(self.counts.values())


class ValidationVisitor(NodeVisitor):
    """Visitor that validates AST structure.

    Checks the structural invariants of a parsed tree:

    - a Document holds only block nodes
    - headings, paragraphs, cells, bold, italic and link text hold only
      inline nodes
    - a List holds only ListItems; a ListItem holds inline nodes followed by
      nested Lists
    - a Table holds TableRows and a TableRow holds TableCells

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first violation. When False, violations
        are collected in ``errors``.

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _validate_children_are_inline(self, children: Iterable[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not is_inline_node(child):
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")

    def _visit_all(self, children: Iterable[Node]) -> None:
        for child in children:
            if isinstance(child, Node):
                child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        for i, child in enumerate(node.children):
            if not is_block_node(child):
                self._add_error(f"Document can only contain block nodes, but child {i} is {type(child).__name__}")
        self._visit_all(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        self._validate_children_are_inline(node.children, "Heading")
        self._visit_all(node.children)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._validate_children_are_inline(node.children, "Paragraph")
        self._visit_all(node.children)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if not isinstance(node.value, str):
            self._add_error(f"CodeBlock value must be a string, got {type(node.value).__name__}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        for i, child in enumerate(node.children):
            if not is_block_node(child):
                self._add_error(f"BlockQuote can only contain block nodes, but child {i} is {type(child).__name__}")
        self._visit_all(node.children)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        if not node.children:
            self._add_error("List must have at least one item")
        for i, child in enumerate(node.children):
            if not isinstance(child, ListItem):
                self._add_error(f"List can only contain list items, but child {i} is {type(child).__name__}")
        self._visit_all(node.children)

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        seen_nested = False
        for i, child in enumerate(node.children):
            if isinstance(child, List):
                seen_nested = True
            elif not is_inline_node(child):
                self._add_error(f"ListItem child {i} must be inline or a nested List, got {type(child).__name__}")
            elif seen_nested:
                self._add_error(f"ListItem inline child {i} follows a nested List")
        self._visit_all(node.children)

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        for i, child in enumerate(node.children):
            if not isinstance(child, TableRow):
                self._add_error(f"Table can only contain rows, but child {i} is {type(child).__name__}")
        self._visit_all(node.children)

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        for i, child in enumerate(node.children):
            if not isinstance(child, TableCell):
                self._add_error(f"TableRow can only contain cells, but child {i} is {type(child).__name__}")
        self._visit_all(node.children)

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        self._validate_children_are_inline(node.children, "TableCell")
        self._visit_all(node.children)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Validate a HorizontalRule node."""
        pass

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        pass

    def visit_bold(self, node: Bold) -> None:
        """Validate a Bold node."""
        self._validate_children_are_inline(node.children, "Bold")
        self._visit_all(node.children)

    def visit_italic(self, node: Italic) -> None:
        """Validate an Italic node."""
        self._validate_children_are_inline(node.children, "Italic")
        self._visit_all(node.children)

    def visit_code(self, node: Code) -> None:
        """Validate a Code node."""
        pass

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        self._validate_children_are_inline(node.children, "Link")
        self._visit_all(node.children)

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""
        pass

    def visit_line_break(self, node: LineBreak) -> None:
        """Validate a LineBreak node."""
        pass

    def generic_visit(self, node: Node) -> None:
        """Report a node kind outside the closed set."""
        self._add_error(f"Unknown node kind: {type(node).__name__}")


def validate_ast(node: Node, strict: bool = True) -> list[str]:
    """Validate a tree and return the collected error messages.

    Parameters
    ----------
    node : Node
        Root of the tree to validate
    strict : bool, default = True
        Raise ``ValueError`` on the first violation

    Returns
    -------
    list of str
        Violations found (always empty in strict mode, which raises instead)

    """
    validator = ValidationVisitor(strict=strict)
    node.accept(validator)
    return validator.errors

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/ast/__init__.py
"""Abstract Syntax Tree (AST) module for the Markdown-to-Textile pipeline.

The parser produces a tree of the node classes defined here and the renderer
consumes it; the two stages share nothing else. The module consists of:

- nodes: one immutable node class per node kind
- visitors: visitor base class, node counting and structural validation
- serialization: JSON serialization and deserialization of AST structures

Examples
--------
Basic usage:

    >>> from md2textile.ast import Document, Heading, Paragraph, Text
    >>> from md2textile.renderers.textile import TextileRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, children=[Text("Title")]),
    ...     Paragraph(children=[Text("Hello world")]),
    ... ])
    >>> TextileRenderer().render_to_string(doc)
    'h1. Title\\n\\nHello world'

"""

from __future__ import annotations

from md2textile.ast.nodes import (
    BLOCK_KINDS,
    INLINE_KINDS,
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
from md2textile.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from md2textile.ast.visitors import NodeCounter, NodeVisitor, ValidationVisitor, validate_ast

__all__ = [
    # Nodes
    "Node",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "HorizontalRule",
    "Text",
    "Bold",
    "Italic",
    "Code",
    "Link",
    "Image",
    "LineBreak",
    # Node helpers
    "BLOCK_KINDS",
    "INLINE_KINDS",
    "is_block_node",
    "is_inline_node",
    "get_node_children",
    # Visitors
    "NodeVisitor",
    "NodeCounter",
    "ValidationVisitor",
    "validate_ast",
    # Serialization
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]

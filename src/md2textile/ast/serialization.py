#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

The structured dump written by the inspection tool uses this module. Every
node becomes a dict with a ``"kind"`` discriminator plus the payload fields
of its kind; child sequences become lists of dicts.

Examples
--------
Serialize AST to JSON:

    >>> from md2textile.ast import Document, Heading, Text
    >>> from md2textile.ast.serialization import ast_to_json
    >>>
    >>> doc = Document(children=[Heading(level=1, children=[Text("Title")])])
    >>> print(ast_to_json(doc, indent=2))

Deserialize JSON back to AST:

    >>> from md2textile.ast.serialization import json_to_ast
    >>> doc = json_to_ast(json_str)
    >>> doc.children[0].level
    1

"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any

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

logger = logging.getLogger(__name__)

NODE_TYPES_BY_KIND: dict[str, type[Node]] = {
    node_type.kind: node_type
    for node_type in (
        Document,
        Heading,
        Paragraph,
        CodeBlock,
        BlockQuote,
        List,
        ListItem,
        Table,
        TableRow,
        TableCell,
        HorizontalRule,
        Text,
        Bold,
        Italic,
        Code,
        Link,
        Image,
        LineBreak,
    )
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node (and its subtree) to a plain dictionary.

    Parameters
    ----------
    node : Node
        Node to convert

    Returns
    -------
    dict
        ``{"kind": ..., <payload fields>}``; ``None``-valued optional fields
        are omitted

    Raises
    ------
    TypeError
        If ``node`` is not an AST node

    """
    if not isinstance(node, Node):
        raise TypeError(f"Cannot serialize object of type {type(node).__name__}")

    result: dict[str, Any] = {"kind": node.kind}
    for node_field in fields(node):
        value = getattr(node, node_field.name)
        if node_field.name == "children":
            result["children"] = [ast_to_dict(child) for child in value]
        elif value is not None:
            result[node_field.name] = value
    return result


def _deserialize_children(children_data: list[dict[str, Any]], strict_mode: bool) -> list[Node]:
    children: list[Node] = []
    for child_data in children_data:
        child = dict_to_ast(child_data, strict_mode=strict_mode)
        if child is not None:
            children.append(child)
    return children


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node | None:
    """Convert a dictionary produced by ``ast_to_dict`` back to a node.

    Parameters
    ----------
    data : dict
        Serialized node
    strict_mode : bool, default = True
        Raise on unknown kinds or invalid payloads. When False, such entries
        are logged and dropped (``None`` is returned for them).

    Returns
    -------
    Node or None
        Reconstructed node

    Raises
    ------
    ValueError
        In strict mode, if the data does not describe a known node kind

    """
    kind = data.get("kind") if isinstance(data, dict) else None
    node_type = NODE_TYPES_BY_KIND.get(kind) if isinstance(kind, str) else None
    if node_type is None:
        if strict_mode:
            raise ValueError(f"Unknown node kind: {kind!r}")
        logger.warning("Skipping unknown node kind during deserialization: %r", kind)
        return None

    kwargs: dict[str, Any] = {}
    for node_field in fields(node_type):
        if node_field.name not in data:
            continue
        value = data[node_field.name]
        if node_field.name == "children":
            value = _deserialize_children(value, strict_mode)
        kwargs[node_field.name] = value

    try:
        return node_type(**kwargs)
    except (TypeError, ValueError) as e:
        if strict_mode:
            raise ValueError(f"Invalid {kind} node: {e}") from e
        logger.warning("Skipping invalid %s node during deserialization: %s", kind, e)
        return None


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST to a JSON string.

    Parameters
    ----------
    node : Node
        Root node to serialize
    indent : int or None, default = None
        JSON indentation (None for compact output)

    Returns
    -------
    str
        JSON document

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string produced by ``ast_to_json``.

    Parameters
    ----------
    json_str : str
        JSON document
    strict_mode : bool, default = True
        See ``dict_to_ast``

    Returns
    -------
    Node
        Reconstructed root node

    Raises
    ------
    ValueError
        If the JSON is malformed or the root cannot be reconstructed

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    node = dict_to_ast(data, strict_mode=strict_mode)
    if node is None:
        raise ValueError("JSON root does not describe a known node kind")
    return node

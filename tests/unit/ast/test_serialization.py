#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_serialization.py
"""Unit tests for AST JSON serialization."""

import json

import pytest

from md2textile.ast import (
    Bold,
    CodeBlock,
    Document,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
)


@pytest.mark.unit
class TestAstToDict:
    """Tests for dictionary conversion."""

    def test_heading(self):
        """Payload fields and children are included."""
        data = ast_to_dict(Heading(level=2, children=[Text("Title")]))
        assert data == {"kind": "heading", "level": 2, "children": [{"kind": "text", "value": "Title"}]}

    def test_none_fields_are_omitted(self):
        """A code block without language has no 'language' key."""
        assert ast_to_dict(CodeBlock(value="x")) == {"kind": "codeBlock", "value": "x"}

    def test_table_cell_fields(self):
        """Cell flags are serialized."""
        data = ast_to_dict(TableCell(is_header=True, align="right"))
        assert data == {"kind": "tableCell", "children": [], "is_header": True, "align": "right"}

    def test_rejects_non_nodes(self):
        """Only AST nodes can be serialized."""
        with pytest.raises(TypeError):
            ast_to_dict({"kind": "text"})  # type: ignore[arg-type]


@pytest.mark.unit
class TestDictToAst:
    """Tests for reconstruction from dictionaries."""

    def test_full_tree_is_restored(self):
        """A tree with every container kind survives a dict round trip."""
        doc = Document(
            children=[
                Paragraph(children=[Bold(children=[Text("b")]), Link(url="u", children=[Text("l")])]),
                List(ordered=True, children=[ListItem(children=[Image(url="i.png", alt="alt")])]),
                Table(children=[TableRow(children=[TableCell(is_header=True, align="center")])]),
            ]
        )
        assert dict_to_ast(ast_to_dict(doc)) == doc

    def test_unknown_kind_strict(self):
        """Unknown kinds raise in strict mode."""
        with pytest.raises(ValueError, match="Unknown node kind"):
            dict_to_ast({"kind": "footnote"})

    def test_unknown_kind_lenient(self):
        """Unknown children are dropped in lenient mode."""
        data = {"kind": "paragraph", "children": [{"kind": "text", "value": "a"}, {"kind": "footnote"}]}
        assert dict_to_ast(data, strict_mode=False) == Paragraph(children=[Text("a")])

    def test_invalid_payload(self):
        """Payloads that fail node validation raise ValueError."""
        with pytest.raises(ValueError, match="Invalid heading node"):
            dict_to_ast({"kind": "heading", "level": 9})


@pytest.mark.unit
class TestJson:
    """Tests for the JSON helpers."""

    def test_json_is_valid(self):
        """ast_to_json produces parseable JSON."""
        doc = Document(children=[Paragraph(children=[Text("café")])])
        payload = ast_to_json(doc, indent=2)
        assert "café" in payload
        assert json.loads(payload)["kind"] == "document"

    def test_json_round_trip(self):
        """json_to_ast restores the serialized tree."""
        doc = Document(children=[Heading(level=1, children=[Text("Title")])])
        assert json_to_ast(ast_to_json(doc)) == doc

    def test_malformed_json(self):
        """Malformed JSON raises ValueError."""
        with pytest.raises(ValueError, match="Invalid JSON"):
            json_to_ast("{not json")

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markdown_parser.py
"""Unit tests for the Markdown to AST parser."""

import pytest

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
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    validate_ast,
)
from md2textile.exceptions import InvalidOptionsError, ValidationError
from md2textile.options import MarkdownParserOptions, TextileRendererOptions
from md2textile.parsers.markdown import MarkdownParser


def parse(markdown: str, **option_kwargs) -> Document:
    return MarkdownParser(MarkdownParserOptions(**option_kwargs)).parse(markdown)


def inline(markdown: str) -> tuple:
    """Parse a single paragraph and return its inline children."""
    doc = parse(markdown)
    assert len(doc.children) == 1
    assert isinstance(doc.children[0], Paragraph)
    return doc.children[0].children


@pytest.mark.unit
class TestParserSetup:
    """Tests for parser construction and input checking."""

    def test_default_options(self):
        """A parser without options uses the defaults."""
        parser = MarkdownParser()
        assert parser.options == MarkdownParserOptions()

    def test_wrong_options_class(self):
        """Renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownParser(TextileRendererOptions())  # type: ignore[arg-type]

    def test_non_string_input(self):
        """Only strings can be parsed."""
        with pytest.raises(ValidationError):
            MarkdownParser().parse(b"# bytes")  # type: ignore[arg-type]

    def test_empty_input(self):
        """Empty input is an empty document."""
        assert parse("") == Document()

    def test_whitespace_only(self):
        """Blank lines produce no blocks."""
        assert parse("\n\n   \n\t\n") == Document()


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level constructs."""

    def test_simple_paragraph(self):
        """A line of text is a paragraph."""
        assert parse("Just text.") == Document(children=[Paragraph(children=[Text("Just text.")])])

    def test_each_line_is_a_paragraph(self):
        """Paragraphs end at the end of their line."""
        doc = parse("one\ntwo")
        assert doc.children == (Paragraph(children=[Text("one")]), Paragraph(children=[Text("two")]))

    def test_heading_levels(self):
        """One to six hashes give heading levels one to six."""
        doc = parse("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")
        assert [child.level for child in doc.children] == [1, 2, 3, 4, 5, 6]
        assert doc.children[5].children == (Text("H6"),)

    def test_heading_with_inline_markup(self):
        """Heading text is parsed as inline content."""
        doc = parse("## A **bold** move")
        assert doc.children[0] == Heading(
            level=2, children=[Text("A "), Bold(children=[Text("bold")]), Text(" move")]
        )

    def test_indented_heading(self):
        """Leading blanks before a heading are ignored."""
        assert parse("   # Title").children[0] == Heading(level=1, children=[Text("Title")])

    def test_code_block_with_language(self):
        """Fenced code keeps its content verbatim."""
        doc = parse("```python\nprint(1)\n**not bold**\n```")
        assert doc.children == (CodeBlock(value="print(1)\n**not bold**\n", language="python"),)

    def test_code_block_without_language(self):
        """A bare fence has no language."""
        block = parse("```\ncode\n```").children[0]
        assert block == CodeBlock(value="code\n", language=None)

    def test_unterminated_code_block(self):
        """An unclosed fence runs to the end of input."""
        block = parse("```js\nlet x;\nlet y;").children[0]
        assert block == CodeBlock(value="let x;\nlet y;", language="js")

    def test_code_block_followed_by_paragraph(self):
        """Parsing resumes after the closing fence."""
        doc = parse("```\nx\n```\nafter")
        assert doc.children[1] == Paragraph(children=[Text("after")])

    @pytest.mark.parametrize("rule", ["---", "***", "___", "-----", "  ---  "])
    def test_horizontal_rules(self, rule):
        """Runs of three or more -, * or _ are rules."""
        assert parse(rule).children == (HorizontalRule(),)

    def test_blockquote_lines_become_paragraphs(self):
        """Dequoted lines are parsed as a sub-document."""
        doc = parse("> Line 1\n> Line 2")
        assert doc.children == (
            BlockQuote(children=[Paragraph(children=[Text("Line 1")]), Paragraph(children=[Text("Line 2")])]),
        )

    def test_nested_blockquote(self):
        """A quote inside a quote is parsed recursively."""
        quote = parse("> > inner").children[0]
        assert quote == BlockQuote(children=[BlockQuote(children=[Paragraph(children=[Text("inner")])])])

    def test_blockquote_with_inline_markup(self):
        """Quoted text keeps its inline markup."""
        quote = parse("> *em*").children[0]
        assert quote.children[0] == Paragraph(children=[Italic(children=[Text("em")])])


@pytest.mark.unit
class TestLists:
    """Tests for list parsing."""

    def test_unordered_list(self):
        """Consecutive items form one list."""
        doc = parse("- Item 1\n- Item 2")
        assert doc.children == (
            List(
                ordered=False,
                children=[ListItem(children=[Text("Item 1")]), ListItem(children=[Text("Item 2")])],
            ),
        )

    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_unordered_markers(self, marker):
        """All three bullet characters start unordered lists."""
        lst = parse(f"{marker} item").children[0]
        assert isinstance(lst, List) and not lst.ordered

    def test_ordered_list(self):
        """Numbered items form an ordered list."""
        lst = parse("1. one\n2. two\n10. ten").children[0]
        assert lst.ordered
        assert [item.children for item in lst.children] == [(Text("one"),), (Text("two"),), (Text("ten"),)]

    def test_nested_list(self):
        """Deeper indentation attaches a list to the previous item."""
        lst = parse("- a\n  - b\n  - c\n- d").children[0]
        assert len(lst.children) == 2
        first = lst.children[0]
        assert first.inline_children == (Text("a"),)
        assert first.nested_lists == (
            List(ordered=False, children=[ListItem(children=[Text("b")]), ListItem(children=[Text("c")])]),
        )
        assert lst.children[1] == ListItem(children=[Text("d")])

    def test_ordered_list_nested_in_unordered(self):
        """Nested lists may use the other marker type."""
        lst = parse("- a\n  1. b").children[0]
        assert lst.children[0].nested_lists[0].ordered

    def test_tab_indentation(self):
        """A tab counts as tab_width columns."""
        lst = parse("- a\n\t- b").children[0]
        assert len(lst.children) == 1
        assert lst.children[0].nested_lists[0].children == (ListItem(children=[Text("b")]),)

    def test_blank_line_ends_list(self):
        """A blank line between items starts a new list."""
        doc = parse("- a\n\n- b")
        assert len(doc.children) == 2
        assert all(isinstance(child, List) for child in doc.children)

    def test_marker_type_change_ends_list(self):
        """Switching between ordered and unordered starts a new list."""
        doc = parse("- a\n1. b")
        assert [child.ordered for child in doc.children] == [False, True]

    def test_list_item_inline_markup(self):
        """Item text is inline content."""
        item = parse("- **bold** item").children[0].children[0]
        assert item.children == (Bold(children=[Text("bold")]), Text(" item"))

    def test_list_followed_by_paragraph(self):
        """A non-list line ends the list."""
        doc = parse("- a\ntext")
        assert isinstance(doc.children[0], List)
        assert doc.children[1] == Paragraph(children=[Text("text")])

    def test_dash_without_space_is_text(self):
        """A marker must be followed by a blank."""
        assert inline("-not a list") == (Text("-not a list"),)


@pytest.mark.unit
class TestTables:
    """Tests for pipe tables."""

    def test_table_with_header(self):
        """A separator row becomes an alignment row of header cells."""
        table = parse("| H1 | H2 |\n|---|---|\n| a | b |").children[0]
        assert isinstance(table, Table)
        assert len(table.children) == 3
        header, separator, data = table.children
        assert header == TableRow(
            children=[TableCell(children=[Text("H1")]), TableCell(children=[Text("H2")])]
        )
        assert separator.is_alignment_row
        assert [cell.align for cell in separator.children] == ["left", "left"]
        assert data == TableRow(children=[TableCell(children=[Text("a")]), TableCell(children=[Text("b")])])

    def test_alignments(self):
        """Colons in the separator row set column alignment."""
        table = parse("| a | b | c |\n|:---|:---:|---:|").children[0]
        assert [cell.align for cell in table.children[1].children] == ["left", "center", "right"]

    def test_cell_inline_markup(self):
        """Cell text is parsed as inline content."""
        table = parse("| **x** | `y` |").children[0]
        cells = table.children[0].children
        assert cells[0].children == (Bold(children=[Text("x")]),)
        assert cells[1].children == (Code(value="y"),)

    def test_empty_cell(self):
        """An empty cell has no children."""
        cells = parse("| a || c |").children[0].children[0].children
        assert len(cells) == 3
        assert cells[1] == TableCell()

    def test_table_ends_at_non_table_line(self):
        """Rows continue while lines start with a pipe."""
        doc = parse("| a |\n| b |\nafter")
        assert len(doc.children[0].children) == 2
        assert doc.children[1] == Paragraph(children=[Text("after")])


@pytest.mark.unit
class TestInline:
    """Tests for inline constructs."""

    def test_bold(self):
        """Double asterisks and underscores make bold spans."""
        assert inline("**b**") == (Bold(children=[Text("b")]),)
        assert inline("__b__") == (Bold(children=[Text("b")]),)

    def test_italic(self):
        """Single asterisks and underscores make italic spans."""
        assert inline("*i*") == (Italic(children=[Text("i")]),)
        assert inline("_i_") == (Italic(children=[Text("i")]),)

    def test_bold_italic(self):
        """Triple asterisks nest italic in bold."""
        assert inline("***both***") == (Bold(children=[Italic(children=[Text("both")])]),)

    def test_bold_inside_word(self):
        """Spans may start mid-word."""
        assert inline("test**bold**text") == (Text("test"), Bold(children=[Text("bold")]), Text("text"))

    def test_unclosed_bold_keeps_content(self):
        """An unterminated span closes at the end of the line."""
        assert inline("**open") == (Bold(children=[Text("open")]),)

    def test_code_span(self):
        """Backticks delimit verbatim code."""
        assert inline("`a *b*`") == (Code(value="a *b*"),)

    def test_double_backtick_code_span(self):
        """Longer runs allow backticks inside and trim one space."""
        assert inline("`` a`b ``") == (Code(value="a`b"),)

    def test_mismatched_backtick_runs_are_skipped(self):
        """The closing run must match the opening length."""
        assert inline("``a```b``") == (Code(value="a```b"),)

    def test_unmatched_backtick(self):
        """A backtick without a partner is literal text."""
        assert inline("` unmatched backtick") == (Text("` unmatched backtick"),)

    def test_link(self):
        """Bracketed text followed by a URL is a link."""
        assert inline("[Link text](https://example.com)") == (
            Link(url="https://example.com", children=[Text("Link text")]),
        )

    def test_link_title_is_dropped(self):
        """A quoted title after the URL is not part of it."""
        assert inline('[L](https://example.com "Title")') == (Link(url="https://example.com", children=[Text("L")]),)

    def test_link_with_markup(self):
        """Link text is inline content."""
        assert inline("[**b**](u)") == (Link(url="u", children=[Bold(children=[Text("b")])]),)

    def test_brackets_without_url(self):
        """Brackets without (url) are literal."""
        assert inline("[not a link] here") == (Text("[not a link] here"),)

    def test_unclosed_bracket(self):
        """An opening bracket without a closing one is literal."""
        assert inline("[open") == (Text("[open"),)

    def test_image(self):
        """Images carry their URL and alt text."""
        assert inline("![Alt text](image.jpg)") == (Image(url="image.jpg", alt="Alt text"),)

    def test_image_without_alt(self):
        """Alt text may be empty."""
        assert inline("![](image.jpg)") == (Image(url="image.jpg", alt=""),)

    def test_image_without_url(self):
        """An image reference without (url) is literal."""
        assert inline("![alt] x") == (Text("![alt] x"),)

    def test_exclamation_mark_is_text(self):
        """A lone ! is plain text."""
        assert inline("Wow! Yes") == (Text("Wow! Yes"),)

    def test_hard_line_break(self):
        """Two trailing spaces break the line inside one paragraph."""
        assert inline("first  \nsecond") == (Text("first"), LineBreak(), Text("second"))

    def test_adjacent_text_is_merged(self):
        """Literal fragments are joined into one Text node."""
        nodes = inline("a ` b")
        assert nodes == (Text("a ` b"),)


@pytest.mark.unit
class TestLineEndings:
    """Tests for line ending normalization."""

    def test_crlf(self):
        """CRLF input parses like LF input."""
        assert parse("# T\r\n\r\ntext\r\n") == parse("# T\n\ntext\n")

    def test_cr(self):
        """Bare CR is a line ending."""
        assert parse("a\rb") == parse("a\nb")


@pytest.mark.unit
class TestNestingLimit:
    """Tests for max_nesting_depth."""

    def test_deep_blockquote_degrades_to_text(self):
        """Quotes beyond the limit keep their remaining markers as text."""
        doc = parse("> > > deep", max_nesting_depth=1)
        level1 = doc.children[0]
        level2 = level1.children[0]
        assert isinstance(level2, BlockQuote)
        assert level2.children == (Paragraph(children=[Text("> deep")]),)

    def test_deep_inline_nesting_is_literal(self):
        """Inline markers past the limit stay literal."""
        nodes = parse("**a *b* c**", max_nesting_depth=1).children[0].children
        assert nodes[0] == Bold(children=[Text("a *b* c")])

    def test_deep_list_lines_start_a_new_list(self):
        """List lines past the limit leave the nested list as a block of their own."""
        doc = parse("- a\n  - b\n    - c", max_nesting_depth=1)
        assert doc.children == (
            List(
                ordered=False,
                children=[
                    ListItem(
                        children=[Text("a"), List(ordered=False, children=[ListItem(children=[Text("b")])])]
                    )
                ],
            ),
            List(ordered=False, children=[ListItem(children=[Text("c")])]),
        )

    def test_deep_list_line_is_not_attached_to_an_ancestor(self):
        """The top item keeps only the nested list it parsed."""
        top_item = parse("- a\n  - b\n    - c", max_nesting_depth=1).children[0].children[0]
        assert len(top_item.nested_lists) == 1

    def test_lists_below_the_limit_still_nest(self):
        """Three levels nest fully when the limit allows it."""
        lst = parse("- a\n  - b\n    - c", max_nesting_depth=2).children[0]
        level2 = lst.children[0].nested_lists[0]
        assert level2.children[0].nested_lists == (List(ordered=False, children=[ListItem(children=[Text("c")])]),)

    def test_table_cell_content_at_limit_is_literal(self):
        """Cell markup past the limit stays literal text."""
        table = parse("| **a** |", max_nesting_depth=1).children[0]
        assert isinstance(table, Table)
        assert table.children[0].children[0].children == (Text("**a**"),)

    def test_pathological_input_terminates(self):
        """Thousands of openers parse without recursion errors."""
        doc = parse("> " * 2000 + "x")
        assert validate_ast(doc, strict=False) == []
        doc = parse("[" * 5000 + "**" * 2000)
        assert isinstance(doc.children[0], Paragraph)

    def test_parsed_documents_are_valid(self, sample_markdown):
        """The parser only produces structurally valid trees."""
        assert validate_ast(parse(sample_markdown)) == []

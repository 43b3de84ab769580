"""md2textile - convert Markdown to Textile.

md2textile is a two-stage converter. A hand-written recursive-descent parser
turns Markdown into an immutable AST, and a visitor-based renderer turns that
AST into Textile, inserting the spacing Textile needs around its inline
markers.

Examples
--------
One-shot conversion:

    >>> from md2textile import convert
    >>> convert("# Heading 1")
    'h1. Heading 1'

Working with the AST directly:

    >>> from md2textile import parse, generate
    >>> doc = parse("- Item 1\\n- Item 2")
    >>> generate(doc)
    '* Item 1\\n* Item 2'

See Also
--------
md2textile.ast : AST node definitions and visitors
md2textile.cli : command-line tools

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.1.0"

from md2textile.api import convert, generate, parse
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
from md2textile.exceptions import (
    ConfigError,
    FileError,
    InputFileNotFoundError,
    InvalidOptionsError,
    Md2TextileError,
    OutputWriteError,
    ValidationError,
)
from md2textile.options import BaseParserOptions, BaseRendererOptions, MarkdownParserOptions, TextileRendererOptions
from md2textile.parsers.markdown import MarkdownParser
from md2textile.renderers.textile import TextileRenderer

__all__ = [
    "__version__",
    # Core API
    "parse",
    "generate",
    "convert",
    # Parser and renderer
    "MarkdownParser",
    "TextileRenderer",
    # Options
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "TextileRendererOptions",
    # AST
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
    # Exceptions
    "Md2TextileError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "FileError",
    "InputFileNotFoundError",
    "OutputWriteError",
]

"""The major exported API functions for Markdown-to-Textile conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2textile/api.py
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, TypeVar, Union

from md2textile.ast.nodes import Document, Node
from md2textile.options.base import BaseParserOptions, BaseRendererOptions
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.options.textile import TextileRendererOptions
from md2textile.parsers.markdown import MarkdownParser
from md2textile.renderers.textile import TextileRenderer
from md2textile.utils.io_utils import write_content

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _apply_option_kwargs(
    options: Optional[OptionsT],
    options_class: type[OptionsT],
    options_type_name: str,
    kwargs: dict[str, Any],
) -> OptionsT:
    """Create or update an options object from matching keyword arguments.

    Keyword arguments that are not fields of ``options_class`` are skipped.
    """
    option_names = {f.name for f in fields(options_class)}
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in option_names]
    if missing:
        logger.debug(f"Skipping unknown {options_type_name} options: {missing}")

    if options is None:
        return options_class(**valid_kwargs)
    if valid_kwargs:
        return options.create_updated(**valid_kwargs)
    return options


def _split_kwargs_for_parser_and_renderer(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split kwargs between parser and renderer based on their field names."""
    parser_fields = {f.name for f in fields(MarkdownParserOptions)}
    renderer_fields = {f.name for f in fields(TextileRendererOptions)}

    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    unmatched = []
    for k, v in kwargs.items():
        if k in parser_fields:
            parser_kwargs[k] = v
        elif k in renderer_fields:
            renderer_kwargs[k] = v
        else:
            unmatched.append(k)

    if unmatched:
        logger.debug(f"Kwargs don't match parser or renderer fields: {unmatched}")
    return parser_kwargs, renderer_kwargs


def parse(source: str, options: Optional[MarkdownParserOptions] = None, **kwargs: Any) -> Document:
    """Parse Markdown text into an AST.

    Parsing never fails on string input; malformed syntax degrades to
    literal text.

    Parameters
    ----------
    source : str
        Markdown text
    options : MarkdownParserOptions, optional
        Parser options
    kwargs : Any
        Individual parser option overrides (e.g. ``max_nesting_depth=20``)

    Returns
    -------
    Document
        The parsed document

    Examples
    --------
        >>> doc = parse("# Title")
        >>> doc.children[0].level
        1

    """
    options = _apply_option_kwargs(options, MarkdownParserOptions, "parser", kwargs)
    return MarkdownParser(options).parse(source)


def generate(ast: Node, options: Optional[TextileRendererOptions] = None, **kwargs: Any) -> str:
    """Render an AST as Textile.

    Parameters
    ----------
    ast : Node
        Root node; anything other than a ``Document`` renders as ``""``
    options : TextileRendererOptions, optional
        Renderer options
    kwargs : Any
        Individual renderer option overrides (e.g. ``code_span_style=""``)

    Returns
    -------
    str
        Textile markup, blocks separated by one blank line

    """
    options = _apply_option_kwargs(options, TextileRendererOptions, "renderer", kwargs)
    return TextileRenderer(options).render_to_string(ast)  # type: ignore[arg-type]


def convert(
    source: str,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[TextileRendererOptions] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Convert Markdown text to Textile.

    Parameters
    ----------
    source : str
        Markdown text
    output : str, Path, IO[bytes], IO[str], or None, optional
        Output destination. If None, the Textile text is returned.
    parser_options : MarkdownParserOptions, optional
        Options for parsing
    renderer_options : TextileRendererOptions, optional
        Options for rendering
    kwargs : Any
        Additional options split between parser and renderer

    Returns
    -------
    str or None
        The Textile text, or None if it was written to ``output``

    Examples
    --------
        >>> convert("*italic text*")
        '_italic text_'

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    doc = parse(source, parser_options, **parser_kwargs)
    textile = generate(doc, renderer_options, **renderer_kwargs)

    if output is None:
        return textile
    write_content(textile, output)
    return None

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class for renderers and the mixin used
by text renderers to render a run of inline nodes to a string.

"""

from __future__ import annotations

from abc import ABC
from pathlib import Path
from typing import IO, Optional, Sequence, Union

from md2textile.ast import Document
from md2textile.ast.nodes import Node
from md2textile.exceptions import InvalidOptionsError
from md2textile.options.base import BaseRendererOptions
from md2textile.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Renderers produce text from a ``Document``. Subclasses implement
    ``render_to_string``; ``render`` writes that string to a destination.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST and write the result.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination (file path or file-like object)

        Raises
        ------
        OutputWriteError
            If a file path cannot be written

        """
        self.write_text_output(self.render_to_string(doc), output)

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to file or IO stream.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("h1. Hello", buffer)
            >>> print(buffer.getvalue())
            h1. Hello

        """
        write_content(text, output)


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    ``_render_inline_content()`` renders a sequence of sibling inline nodes to
    a string by temporarily capturing the renderer's output. While a node is
    being visited, ``_sibling_window`` holds its immediate neighbours
    ``(previous, next)`` in that sequence so visitors can adapt to them.

    The implementing class must have:
    - A `_output` attribute (list[str]) for accumulating output
    - Visitor methods that append to `_output`

    """

    _output: list[str]
    _sibling_window: tuple[Optional[Node], Optional[Node]] = (None, None)

    def _render_inline_content(self, content: Sequence[Node]) -> str:
        """Render a sequence of sibling inline nodes to text.

        Parameters
        ----------
        content : sequence of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        saved_window = self._sibling_window
        self._output = []
        try:
            for index, node in enumerate(content):
                previous = content[index - 1] if index > 0 else None
                following = content[index + 1] if index + 1 < len(content) else None
                self._sibling_window = (previous, following)
                node.accept(self)
            return "".join(self._output)
        finally:
            self._output = saved_output
            self._sibling_window = saved_window

    def _render_node(self, node: Node) -> str:
        """Render a single node to text without touching the current output."""
        saved_output = self._output
        self._output = []
        try:
            node.accept(self)
            return "".join(self._output)
        finally:
            self._output = saved_output

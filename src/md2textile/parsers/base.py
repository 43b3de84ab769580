#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/parsers/base.py
"""Base class for source parsers.

A parser turns source markup into the md2textile AST. Parsers are total:
malformed input degrades to literal text instead of raising.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from md2textile.ast import Document
from md2textile.exceptions import InvalidOptionsError
from md2textile.options.base import BaseParserOptions


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> from md2textile.parsers.base import BaseParser
        >>> from md2textile.ast import Document
        >>>
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, source):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, source: str) -> Document:
        """Parse source text into an AST.

        Parameters
        ----------
        source : str
            Source markup

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        """
        ...

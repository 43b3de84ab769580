#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the md2textile parser and renderer.

Options are frozen dataclasses; use ``create_updated`` (or
``create_updated_options``) to derive a modified copy.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from md2textile.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.options.textile import TextileRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Keyword arguments with the field names and new values to update

    Returns
    -------
    Any
        A new options instance with the updated values

    Examples
    --------
    >>> original = MarkdownParserOptions()
    >>> updated = create_updated_options(original, tab_width=4)
    >>> # original remains unchanged, updated has new values

    """
    return replace(options, **kwargs)


__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "TextileRendererOptions",
    "create_updated_options",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for the md2textile converter.

Examples
--------
Convert a file to stdout::

    $ md2textile convert README.md

Convert stdin to a file::

    $ cat README.md | md2textile convert - -o README.textile

Inspect the parsed structure of a document::

    $ md2textile inspect README.md --output-dir ./report

A first argument that is not a command name is treated as the input of
``convert``, so ``md2textile README.md`` works as well.
"""

import argparse
import sys

from md2textile import __version__
from md2textile.cli.commands import dispatch_command
from md2textile.constants import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR

__all__ = [
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "main",
]


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser used for ``--help`` and ``--version``."""
    parser = argparse.ArgumentParser(
        prog="md2textile",
        description="Convert Markdown documents to Textile markup.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "commands:\n"
            "  convert   Convert a Markdown document to Textile\n"
            "  inspect   Show AST statistics, timing and structure checks\n\n"
            "Run 'md2textile <command> --help' for the options of a command."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(args: list[str] | None = None) -> int:
    """Execute the md2textile CLI.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (defaults to ``sys.argv[1:]``)

    Returns
    -------
    int
        Exit code (0 for success)

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        create_parser().print_help()
        return EXIT_SUCCESS

    if args[0] in ("-h", "--help", "--version"):
        try:
            create_parser().parse_args(args[:1])
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else EXIT_SUCCESS
        return EXIT_SUCCESS

    result = dispatch_command(args)
    if result is not None:
        return result

    # Anything else is the input of an implicit convert
    result = dispatch_command(["convert", *args])
    return EXIT_ERROR if result is None else result

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2textile/cli/commands/convert.py
"""Convert command for the md2textile CLI.

Reads Markdown from a file or stdin and writes Textile to a file or stdout.
"""
import argparse
import logging
import sys

from md2textile.api import convert
from md2textile.cli.commands.shared import add_common_arguments, options_from_args, setup_logging_from_args
from md2textile.cli.timing import TimingContext
from md2textile.constants import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from md2textile.exceptions import FileError, Md2TextileError, ValidationError
from md2textile.utils.io_utils import read_text_input, write_content

logger = logging.getLogger(__name__)


def create_convert_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the convert command."""
    parser = argparse.ArgumentParser(
        prog="md2textile convert",
        description="Convert a Markdown document to Textile.",
    )
    parser.add_argument("input", help="Markdown file to convert (use '-' for stdin)")
    parser.add_argument("-o", "--output", metavar="PATH", help="Write Textile to this file instead of stdout")
    add_common_arguments(parser)
    return parser


def handle_convert_command(args: list[str] | None = None) -> int:
    """Handle the convert command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'convert')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parsed_args = create_convert_parser().parse_args(args)
    setup_logging_from_args(parsed_args)

    try:
        parser_options, renderer_options = options_from_args(parsed_args)
        source = read_text_input(parsed_args.input)

        with TimingContext(f"Converting {parsed_args.input}", logger):
            textile = convert(source, parser_options=parser_options, renderer_options=renderer_options) or ""

        if textile:
            textile += "\n"
        write_content(textile, parsed_args.output or "-")
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Md2TextileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.output:
        logger.info("Wrote Textile to %s", parsed_args.output)
    return EXIT_SUCCESS

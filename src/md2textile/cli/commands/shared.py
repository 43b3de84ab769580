#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2textile/cli/commands/shared.py
"""Shared utilities for md2textile CLI commands.

Every command accepts the same global flags (configuration file, log level,
log file, trace mode); this module adds them to a command's parser and turns
them into logging setup and options objects.
"""
import argparse
import logging
import os
from pathlib import Path
from typing import Optional

from md2textile import __version__
from md2textile.cli.config import build_options, load_config_with_priority
from md2textile.constants import CONFIG_ENV_VAR, DEFAULT_LOG_LEVEL
from md2textile.logging_utils import configure_logging
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.options.textile import TextileRendererOptions

logger = logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the global flags shared by every command."""
    parser.add_argument("--config", metavar="PATH", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or discovery)")
    parser.add_argument(
        "--no-config", action="store_true", help="Ignore configuration files and use built-in defaults"
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")


def setup_logging_from_args(parsed_args: argparse.Namespace) -> None:
    """Configure logging according to the parsed global flags."""
    level = "DEBUG" if parsed_args.trace else parsed_args.log_level
    configure_logging(level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace, rich_output=parsed_args.trace)


def options_from_args(
    parsed_args: argparse.Namespace,
) -> tuple[MarkdownParserOptions, TextileRendererOptions]:
    """Load the configuration selected by the global flags.

    Raises
    ------
    ConfigError
        If a configuration file is given or found but cannot be used

    """
    if parsed_args.no_config:
        return MarkdownParserOptions(), TextileRendererOptions()

    config, source = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    if source is not None:
        logger.info("Using configuration from %s", source)
    return build_options(config, source)


def default_stem(input_arg: str) -> str:
    """Base name used for files derived from an input argument."""
    if input_arg == "-":
        return "stdin"
    return Path(input_arg).stem


def resolve_output_dir(output_dir: Optional[str]) -> Path:
    """Directory for generated files (the working directory by default)."""
    return Path(output_dir) if output_dir else Path.cwd()

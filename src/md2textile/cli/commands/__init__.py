#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/md2textile/cli/commands/__init__.py
"""CLI command handlers for md2textile.

Each subcommand lives in its own module and exposes a
``handle_<name>_command(args)`` function returning an exit code.
"""

import logging
import sys

# Note: Command handlers are imported lazily in dispatch_command so that
# ``--help`` does not load the rich-based report code

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run the subcommand named by the first argument.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (defaults to ``sys.argv[1:]``)

    Returns
    -------
    int or None
        Exit code if a subcommand was handled, None otherwise

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "convert":
        from md2textile.cli.commands.convert import handle_convert_command

        return handle_convert_command(args[1:])

    if args[0] == "inspect":
        from md2textile.cli.commands.inspect import handle_inspect_command

        return handle_inspect_command(args[1:])

    return None

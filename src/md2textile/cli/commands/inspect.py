#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2textile/cli/commands/inspect.py
"""Inspect command for the md2textile CLI.

Parses a Markdown document, counts the AST nodes per kind, times parsing and
generation, checks the tree's structure and prints a report. Unless
``--no-files`` is given it also writes three files next to each other:

- ``<stem>-ast.json``: the AST as JSON
- ``<stem>-output.textile``: the generated Textile
- ``<stem>-summary.txt``: the report as plain text
"""
import argparse
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from md2textile.ast import NodeCounter, ast_to_json, validate_ast
from md2textile.cli.commands.shared import (
    add_common_arguments,
    default_stem,
    options_from_args,
    resolve_output_dir,
    setup_logging_from_args,
)
from md2textile.cli.timing import TimingContext, format_duration
from md2textile.constants import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from md2textile.exceptions import FileError, Md2TextileError, ValidationError
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.options.textile import TextileRendererOptions
from md2textile.parsers.markdown import MarkdownParser
from md2textile.renderers.textile import TextileRenderer
from md2textile.utils.io_utils import read_text_input, write_content

logger = logging.getLogger(__name__)


@dataclass
class InspectionReport:
    """Result of inspecting one Markdown document.

    Parameters
    ----------
    input_name : str
        Display name of the input
    line_count, char_count, byte_count : int
        Size of the Markdown source
    node_counts : list of (str, int)
        Node kinds with their frequency, most frequent first
    parse_seconds, generate_seconds : float
        Time spent parsing and generating
    issues : list of str
        Structural problems found in the AST
    ast_json : str
        The AST serialized as indented JSON
    textile : str
        The generated Textile

    """

    input_name: str
    line_count: int
    char_count: int
    byte_count: int
    node_counts: list[tuple[str, int]]
    parse_seconds: float
    generate_seconds: float
    ast_json: str
    textile: str
    issues: list[str] = field(default_factory=list)

    @property
    def total_seconds(self) -> float:
        return self.parse_seconds + self.generate_seconds

    def count(self, kind: str) -> int:
        """Number of nodes of ``kind`` in the tree."""
        return dict(self.node_counts).get(kind, 0)


def inspect_markdown(
    source: str,
    input_name: str,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[TextileRendererOptions] = None,
) -> InspectionReport:
    """Parse and render ``source`` while collecting statistics.

    Parameters
    ----------
    source : str
        Markdown text
    input_name : str
        Display name of the input
    parser_options : MarkdownParserOptions, optional
        Parser options
    renderer_options : TextileRendererOptions, optional
        Renderer options

    Returns
    -------
    InspectionReport

    """
    with TimingContext("Markdown parsing", logger) as parse_timer:
        doc = MarkdownParser(parser_options).parse(source)
    with TimingContext("Textile generation", logger) as generate_timer:
        textile = TextileRenderer(renderer_options).render_to_string(doc)

    counter = NodeCounter()
    doc.accept(counter)

    issues = []
    if counter.counts["list"] > 0 and counter.counts["listItem"] == 0:
        issues.append("Found lists but no list items")
    issues.extend(validate_ast(doc, strict=False))

    return InspectionReport(
        input_name=input_name,
        line_count=len(source.split("\n")),
        char_count=len(source),
        byte_count=len(source.encode("utf-8")),
        node_counts=counter.most_common(),
        parse_seconds=parse_timer.elapsed,
        generate_seconds=generate_timer.elapsed,
        ast_json=ast_to_json(doc, indent=2),
        textile=textile,
        issues=issues,
    )


def output_paths(output_dir: Path, stem: str) -> dict[str, Path]:
    """Paths of the files written for an inspected document."""
    return {
        "ast": output_dir / f"{stem}-ast.json",
        "textile": output_dir / f"{stem}-output.textile",
        "summary": output_dir / f"{stem}-summary.txt",
    }


def format_summary(report: InspectionReport, paths: Optional[dict[str, Path]] = None) -> str:
    """Render the report as plain text for the summary file."""
    lines = [
        "Markdown AST Inspection Report",
        "==============================",
        "",
        f"Input file: {report.input_name}",
        f"Generated: {datetime.now(timezone.utc).isoformat()}",
        "",
        "## File",
        f"- Lines: {report.line_count}",
        f"- Characters: {report.char_count}",
        f"- Bytes: {report.byte_count}",
        "",
        "## Nodes",
    ]
    lines.extend(f"- {kind}: {count}" for kind, count in report.node_counts)
    lines += [
        "",
        "## Timing",
        f"- Parse: {format_duration(report.parse_seconds)}",
        f"- Generate: {format_duration(report.generate_seconds)}",
        f"- Total: {format_duration(report.total_seconds)}",
    ]
    if paths:
        lines += [
            "",
            "## Output files",
            f"- AST: {paths['ast'].name}",
            f"- Textile: {paths['textile'].name}",
            f"- Report: {paths['summary'].name}",
        ]
    lines += ["", "## Checks"]
    if report.issues:
        lines.extend(f"- {issue}" for issue in report.issues)
    else:
        lines.append("No warnings or errors")
    return "\n".join(lines) + "\n"


def write_inspection_files(report: InspectionReport, output_dir: Path, stem: str) -> dict[str, Path]:
    """Write the AST dump, the Textile output and the summary.

    Raises
    ------
    OutputWriteError
        If a file cannot be written

    """
    paths = output_paths(output_dir, stem)
    write_content(report.ast_json + "\n", paths["ast"])
    write_content(report.textile, paths["textile"])
    write_content(format_summary(report, paths), paths["summary"])
    return paths


def print_report(report: InspectionReport, console: Console) -> None:
    """Print the report with Rich tables."""
    console.print(f"[bold]Markdown AST inspection[/bold]: {report.input_name}")
    console.print(f"{report.line_count} lines, {report.char_count} characters\n")

    node_table = Table(title="Node statistics")
    node_table.add_column("Kind", style="cyan")
    node_table.add_column("Count", style="magenta", justify="right")
    for kind, count in report.node_counts:
        node_table.add_row(kind, str(count))
    console.print(node_table)

    timing_table = Table(title="Timing")
    timing_table.add_column("Stage", style="cyan")
    timing_table.add_column("Duration", style="green", justify="right")
    timing_table.add_row("Parse", format_duration(report.parse_seconds))
    timing_table.add_row("Generate", format_duration(report.generate_seconds))
    timing_table.add_row("Total", format_duration(report.total_seconds))
    console.print(timing_table)

    console.print("\n[bold]Structure checks[/bold]")
    console.print(f"  {report.count('list')} lists with {report.count('listItem')} items")
    console.print(f"  {report.count('codeBlock')} code blocks, {report.count('code')} inline code spans")
    console.print(f"  {report.count('heading')} headings, {report.count('table')} tables")
    if report.issues:
        console.print("\n[yellow]Issues found:[/yellow]")
        for issue in report.issues:
            console.print(f"  - {issue}")
    else:
        console.print("[green]No warnings or errors[/green]")


def create_inspect_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the inspect command."""
    parser = argparse.ArgumentParser(
        prog="md2textile inspect",
        description="Show AST statistics, timing and structure checks for a Markdown document.",
    )
    parser.add_argument("input", help="Markdown file to inspect (use '-' for stdin)")
    parser.add_argument("--output-dir", metavar="DIR", help="Directory for the generated files (default: cwd)")
    parser.add_argument("--no-files", action="store_true", help="Only print the report; do not write files")
    add_common_arguments(parser)
    return parser


def handle_inspect_command(args: list[str] | None = None, console: Optional[Console] = None) -> int:
    """Handle the inspect command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'inspect')
    console : Console, optional
        Console to print the report to (stdout by default)

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parsed_args = create_inspect_parser().parse_args(args)
    setup_logging_from_args(parsed_args)
    console = console or Console()

    try:
        parser_options, renderer_options = options_from_args(parsed_args)
        source = read_text_input(parsed_args.input)
        input_name = "<stdin>" if parsed_args.input == "-" else parsed_args.input
        report = inspect_markdown(source, input_name, parser_options, renderer_options)

        print_report(report, console)
        if not parsed_args.no_files:
            paths = write_inspection_files(
                report, resolve_output_dir(parsed_args.output_dir), default_stem(parsed_args.input)
            )
            console.print("\n[green]Files written:[/green]")
            for path in paths.values():
                console.print(f"  - {path}")
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Md2TextileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_cli_commands.py
"""Unit tests for the convert and inspect commands and the CLI entry point."""

import io
import json

import pytest
from rich.console import Console

from md2textile import __version__
from md2textile.cli import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR, main
from md2textile.cli.commands import dispatch_command
from md2textile.cli.commands.convert import handle_convert_command
from md2textile.cli.commands.inspect import (
    format_summary,
    handle_inspect_command,
    inspect_markdown,
    output_paths,
)
from md2textile.cli.commands.shared import default_stem


@pytest.fixture
def markdown_file(isolated_cwd):
    path = isolated_cwd / "doc.md"
    path.write_text("# Title\n\n- a\n- b\n\nSome `code` here.\n", encoding="utf-8")
    return path


def recording_console() -> Console:
    return Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)


@pytest.mark.unit
@pytest.mark.cli
class TestConvertCommand:
    """Tests for `md2textile convert`."""

    def test_convert_to_stdout(self, markdown_file, capsys):
        """Textile goes to stdout with a trailing newline."""
        assert handle_convert_command([str(markdown_file), "--no-config"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("h1. Title\n\n* a\n* b\n\nSome ")
        assert out.endswith(" here.\n")

    def test_convert_to_file(self, markdown_file, isolated_cwd):
        """-o writes the result to a file."""
        target = isolated_cwd / "out" / "doc.textile"
        assert handle_convert_command([str(markdown_file), "-o", str(target), "--no-config"]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8").startswith("h1. Title")

    def test_convert_stdin(self, isolated_cwd, monkeypatch, capsys):
        """'-' reads Markdown from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("*italic text*"))
        assert handle_convert_command(["-", "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "_italic text_\n"

    def test_empty_input_writes_nothing(self, isolated_cwd, monkeypatch, capsys):
        """Empty Markdown gives empty output."""
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert handle_convert_command(["-", "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""

    def test_missing_input(self, isolated_cwd, capsys):
        """A missing file exits with the file error code."""
        assert handle_convert_command(["missing.md", "--no-config"]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_config_file_is_applied(self, markdown_file, isolated_cwd, capsys):
        """Options from --config change the output."""
        config = isolated_cwd / "style.json"
        config.write_text(json.dumps({"renderer": {"code_span_style": ""}}), encoding="utf-8")
        assert handle_convert_command([str(markdown_file), "--config", str(config)]) == EXIT_SUCCESS
        assert "Some %code% here." in capsys.readouterr().out

    def test_discovered_config_is_applied(self, markdown_file, isolated_cwd, capsys):
        """A config file in the working directory is picked up."""
        (isolated_cwd / ".md2textile.toml").write_text('[renderer]\ncode_span_style = ""\n', encoding="utf-8")
        assert handle_convert_command([str(markdown_file)]) == EXIT_SUCCESS
        assert "%code%" in capsys.readouterr().out

    def test_env_config_is_applied(self, markdown_file, isolated_cwd, monkeypatch, capsys):
        """MD2TEXTILE_CONFIG points at a config file."""
        config = isolated_cwd / "env.yaml"
        config.write_text("renderer:\n  code_span_style: ''\n", encoding="utf-8")
        monkeypatch.setenv("MD2TEXTILE_CONFIG", str(config))
        assert handle_convert_command([str(markdown_file)]) == EXIT_SUCCESS
        assert "%code%" in capsys.readouterr().out

    def test_no_config_ignores_discovered_file(self, markdown_file, isolated_cwd, capsys):
        """--no-config skips discovery."""
        (isolated_cwd / ".md2textile.toml").write_text('[renderer]\ncode_span_style = ""\n', encoding="utf-8")
        assert handle_convert_command([str(markdown_file), "--no-config"]) == EXIT_SUCCESS
        assert "%code%" not in capsys.readouterr().out

    def test_invalid_config(self, markdown_file, isolated_cwd, capsys):
        """A bad config exits with the validation error code."""
        config = isolated_cwd / "bad.json"
        config.write_text(json.dumps({"parser": {"unknown": 1}}), encoding="utf-8")
        assert handle_convert_command([str(markdown_file), "--config", str(config)]) == EXIT_VALIDATION_ERROR
        assert "Unknown parser option" in capsys.readouterr().err

    def test_log_file(self, markdown_file, isolated_cwd, capsys):
        """--log-file records debug output."""
        log_file = isolated_cwd / "run.log"
        args = [str(markdown_file), "--no-config", "--log-level", "debug", "--log-file", str(log_file)]
        assert handle_convert_command(args) == EXIT_SUCCESS
        assert "Converting" in log_file.read_text(encoding="utf-8")


@pytest.mark.unit
@pytest.mark.cli
class TestInspectCommand:
    """Tests for `md2textile inspect`."""

    def test_inspect_markdown_report(self):
        """The report carries sizes, counts and outputs."""
        report = inspect_markdown("# T\n\n- a\n- b", "doc.md")
        assert report.line_count == 4
        assert report.char_count == len("# T\n\n- a\n- b")
        assert report.count("listItem") == 2
        assert report.count("table") == 0
        assert report.node_counts[0] == ("text", 3)
        assert report.textile == "h1. T\n\n* a\n* b"
        assert json.loads(report.ast_json)["kind"] == "document"
        assert report.issues == []
        assert report.total_seconds >= 0

    def test_summary_text(self, tmp_path):
        """The plain-text summary lists nodes and checks."""
        report = inspect_markdown("plain", "doc.md")
        summary = format_summary(report, output_paths(tmp_path, "doc"))
        assert "Input file: doc.md" in summary
        assert "- paragraph: 1" in summary
        assert "- AST: doc-ast.json" in summary
        assert summary.rstrip().endswith("No warnings or errors")

    def test_output_paths(self, tmp_path):
        """Output files are named after the input stem."""
        paths = output_paths(tmp_path, "notes")
        assert paths["ast"].name == "notes-ast.json"
        assert paths["textile"].name == "notes-output.textile"
        assert paths["summary"].name == "notes-summary.txt"

    def test_handle_inspect_writes_files(self, markdown_file, isolated_cwd):
        """inspect prints a report and writes three files."""
        console = recording_console()
        out_dir = isolated_cwd / "report"
        args = [str(markdown_file), "--output-dir", str(out_dir), "--no-config"]
        assert handle_inspect_command(args, console=console) == EXIT_SUCCESS

        printed = console.file.getvalue()
        assert "Node statistics" in printed
        assert "Timing" in printed
        assert "No warnings or errors" in printed

        assert json.loads((out_dir / "doc-ast.json").read_text(encoding="utf-8"))["kind"] == "document"
        assert (out_dir / "doc-output.textile").read_text(encoding="utf-8").startswith("h1. Title")
        assert "Markdown AST Inspection Report" in (out_dir / "doc-summary.txt").read_text(encoding="utf-8")

    def test_handle_inspect_no_files(self, markdown_file, isolated_cwd):
        """--no-files only prints."""
        console = recording_console()
        assert handle_inspect_command([str(markdown_file), "--no-files", "--no-config"], console=console) == 0
        assert not (isolated_cwd / "doc-ast.json").exists()

    def test_handle_inspect_missing_file(self, isolated_cwd, capsys):
        """A missing input exits with the file error code."""
        assert handle_inspect_command(["nope.md", "--no-config"], console=recording_console()) == EXIT_FILE_ERROR


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for the top-level entry point."""

    def test_no_arguments_prints_help(self, capsys):
        """Without arguments the help is shown."""
        assert main([]) == EXIT_SUCCESS
        assert "convert" in capsys.readouterr().out

    def test_help(self, capsys):
        """--help exits successfully."""
        assert main(["--help"]) == EXIT_SUCCESS
        assert "usage: md2textile" in capsys.readouterr().out

    def test_version(self, capsys):
        """--version prints the package version."""
        assert main(["--version"]) == EXIT_SUCCESS
        assert __version__ in capsys.readouterr().out

    def test_convert_subcommand(self, markdown_file, capsys):
        """The convert subcommand is dispatched."""
        assert main(["convert", str(markdown_file), "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("h1. Title")

    def test_implicit_convert(self, markdown_file, capsys):
        """A bare input path is converted."""
        assert main([str(markdown_file), "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("h1. Title")

    def test_dispatch_unknown_command(self):
        """dispatch_command ignores non-command arguments."""
        assert dispatch_command(["doc.md"]) is None

    def test_exit_codes_are_distinct(self):
        """Each failure class has its own exit code."""
        assert len({EXIT_SUCCESS, EXIT_ERROR, EXIT_VALIDATION_ERROR, EXIT_FILE_ERROR}) == 4

    def test_default_stem(self):
        """Derived file names use the input stem."""
        assert default_stem("docs/readme.md") == "readme"
        assert default_stem("-") == "stdin"

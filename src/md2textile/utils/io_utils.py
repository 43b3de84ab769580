#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2textile/utils/io_utils.py
"""Text input and output helpers.

These helpers are the only place where md2textile touches files or streams;
the parser and renderer themselves work on in-memory strings.
"""

from __future__ import annotations

import io
import sys
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from md2textile.exceptions import FileError, InputFileNotFoundError, OutputWriteError

STDIO_MARKER = "-"


def _is_binary_stream(stream: object) -> bool:
    if isinstance(stream, BytesIO):
        return True
    if isinstance(stream, StringIO) or isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


def read_text_input(source: Union[str, Path, IO[str], IO[bytes]]) -> str:
    """Read Markdown text from a path, ``"-"`` (stdin) or a stream.

    Parameters
    ----------
    source : str, Path, IO[str] or IO[bytes]
        Where to read from. Binary streams and files are decoded as UTF-8.

    Returns
    -------
    str
        The text content

    Raises
    ------
    InputFileNotFoundError
        If a path does not exist
    FileError
        If the file cannot be read or decoded

    """
    if isinstance(source, str) and source == STDIO_MARKER:
        return sys.stdin.read()

    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise InputFileNotFoundError(str(path))
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FileError(f"Input is not valid UTF-8: {path}", file_path=str(path), original_error=e) from e
        except OSError as e:
            raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e

    data = source.read()
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileError("Input stream is not valid UTF-8", original_error=e) from e
    return data


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text to a path or a text/binary stream.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Destination. Paths are written as UTF-8 (parent directories are
        created); ``"-"`` writes to stdout; binary streams receive UTF-8 bytes.

    Raises
    ------
    OutputWriteError
        If a path cannot be written
    TypeError
        If output type is not supported

    Examples
    --------
    Write to a BytesIO:
        >>> buffer = BytesIO()
        >>> write_content("h1. Title", buffer)
        >>> buffer.getvalue()
        b'h1. Title'

    """
    if isinstance(output, str) and output == STDIO_MARKER:
        sys.stdout.write(content)
        return

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(
                f"Could not write {output_path}: {e}", file_path=str(output_path), original_error=e
            ) from e
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if _is_binary_stream(output):
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)

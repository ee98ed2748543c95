"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/hexdiff/cli/output.py
import sys
from pathlib import Path
from typing import TextIO

from hexdiff.diff.renderers.rich_table import RICH_INSTALL_COMMAND
from hexdiff.exceptions import DependencyError, OutputWriteError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def require_rich() -> None:
    """Fail early, before any input is read, when rich output cannot be produced.

    Raises
    ------
    DependencyError
        If the rich package is not installed

    """
    if not check_rich_available():
        raise DependencyError(
            feature_name="Rich output",
            missing_packages=[("rich", "")],
            install_command=RICH_INSTALL_COMMAND,
        )


def stream_supports_color(stream: TextIO | None = None) -> bool:
    """Return True when ``stream`` (stdout by default) is a terminal."""
    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream
        return False


def write_output(content: str, output_path: str | None = None, stream: TextIO | None = None) -> None:
    """Write rendered content to a file or to stdout.

    A trailing newline is added to non-empty content.

    Parameters
    ----------
    content : str
        Rendered report
    output_path : str, optional
        Destination file; stdout when omitted
    stream : TextIO, optional
        Stream used instead of stdout

    Raises
    ------
    OutputWriteError
        If the output file cannot be written

    """
    text = f"{content}\n" if content else ""

    if output_path is None:
        (stream or sys.stdout).write(text)
        return

    try:
        Path(output_path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Cannot write {output_path}: {e}", output_path=output_path, original_error=e) from e

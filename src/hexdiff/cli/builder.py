#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/hexdiff/cli/builder.py
"""Argument parser construction and exit codes for the hexdiff CLI."""

import argparse

from hexdiff.constants import (
    DEFAULT_LOG_LEVEL,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
)
from hexdiff.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser(version: str = "") -> argparse.ArgumentParser:
    """Create the argument parser for the hexdiff command.

    Options that can also come from a configuration file default to None
    so that an explicit flag can be told apart from an unset one.

    Parameters
    ----------
    version : str, optional
        Version string reported by ``--version``.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="hexdiff",
        description="Compare two Intel HEX memory images word by word and report differing address ranges",
        epilog=(
            "Addresses are printed in 16-bit units. Words absent from an image are shown as FFFFFF. "
            "Ignore ranges take the forms A, A:B, A: and :B with hexadecimal bounds."
        ),
    )

    parser.add_argument("file_1", metavar="FILE_1", help="First Intel HEX file")
    parser.add_argument("file_2", metavar="FILE_2", help="Second Intel HEX file")

    output_group = parser.add_argument_group("output options")
    output_group.add_argument("--output", "-o", help="Write the report to this file (default: stdout)")
    output_group.add_argument(
        "--all",
        "-a",
        dest="show_all",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print non-differences as well",
    )
    output_group.add_argument(
        "--json", "-j", action=argparse.BooleanOptionalAction, default=None, help="Format output as JSON"
    )
    output_group.add_argument(
        "--rich",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Format output as a colored table (requires rich)",
    )
    output_group.add_argument(
        "--ignore",
        "-i",
        action="append",
        default=[],
        metavar="SPEC",
        help="Never report records overlapping this address range (repeatable)",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help="Read settings from this configuration file")
    config_group.add_argument(
        "--no-config", action="store_true", help="Do not read any configuration file, even one that is discovered"
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Logging verbosity (default: {DEFAULT_LOG_LEVEL})",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument(
        "--trace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Timestamp log messages and include logger names",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {version}")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR

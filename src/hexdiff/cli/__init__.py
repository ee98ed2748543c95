"""Command-line interface for the hexdiff memory image comparison tool.

Examples
--------
Report differing words::

    $ hexdiff build_a.hex build_b.hex

Include matching runs and write JSON to a file::

    $ hexdiff build_a.hex build_b.hex --all --json --output report.json

Skip the bootloader and everything from 7F000 up::

    $ hexdiff build_a.hex build_b.hex --ignore :1FFF --ignore 7F000:

Configuration files
-------------------
``.hexdiff.toml``, ``.hexdiff.yaml``, ``.hexdiff.json`` or a
``[tool.hexdiff]`` table in ``pyproject.toml`` may provide defaults for
``all``, ``json``, ``rich``, ``ignore``, ``log_level``, ``log_file`` and
``trace``. A file can also be named with ``--config`` or the
``HEXDIFF_CONFIG`` environment variable. Command-line flags override
configured values. Ignore ranges from both sources are combined.

"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from hexdiff import __version__
from hexdiff.api import diff_sequences, render_diff
from hexdiff.cli.builder import create_parser, get_exit_code_for_exception
from hexdiff.cli.config import load_config_with_priority, validate_config
from hexdiff.cli.output import require_rich, stream_supports_color, write_output
from hexdiff.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_LOG_LEVEL,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    OutputFormat,
)
from hexdiff.diff.filters import AddressRange, RecordFilter, coerce_address_ranges
from hexdiff.exceptions import HexDiffError, ValidationError
from hexdiff.logging_utils import configure_logging
from hexdiff.parsers.ihex16 import load_ihex16

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective options after merging the config file and command line."""

    file_1: str
    file_2: str
    output: Optional[str] = None
    show_all: bool = False
    json: bool = False
    rich: bool = False
    ignore_ranges: List[AddressRange] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    trace: bool = False
    config_path: Optional[Path] = None
    unknown_config_keys: List[str] = field(default_factory=list)

    @property
    def output_format(self) -> OutputFormat:
        if self.json:
            return "json"
        if self.rich:
            return "rich"
        return "text"


def _pick(cli_value: Any, config: Dict[str, Any], key: str, default: Any) -> Any:
    if cli_value is not None:
        return cli_value
    return config.get(key, default)


def resolve_settings(parsed: argparse.Namespace, environ: Optional[Dict[str, str]] = None) -> Settings:
    """Merge parsed arguments with the applicable configuration file.

    Parameters
    ----------
    parsed : argparse.Namespace
        Arguments from :func:`~hexdiff.cli.builder.create_parser`.
    environ : dict, optional
        Environment used to look up ``HEXDIFF_CONFIG``; ``os.environ``
        when omitted.

    Returns
    -------
    Settings
        Effective options.

    Raises
    ------
    ValidationError
        If the configuration is invalid, an ignore range is malformed, or
        JSON and rich output are both requested.

    """
    environ = os.environ if environ is None else environ

    config: Dict[str, Any] = {}
    config_path = None
    unknown: List[str] = []
    if not parsed.no_config:
        raw_config, config_path = load_config_with_priority(parsed.config, environ.get(CONFIG_ENV_VAR))
        config, unknown = validate_config(raw_config)

    settings = Settings(
        file_1=parsed.file_1,
        file_2=parsed.file_2,
        output=parsed.output,
        show_all=_pick(parsed.show_all, config, "all", False),
        json=_pick(parsed.json, config, "json", False),
        rich=_pick(parsed.rich, config, "rich", False),
        ignore_ranges=coerce_address_ranges([*config.get("ignore", []), *parsed.ignore]),
        log_level=_pick(parsed.log_level, config, "log_level", DEFAULT_LOG_LEVEL),
        log_file=_pick(parsed.log_file, config, "log_file", None),
        trace=_pick(parsed.trace, config, "trace", False),
        config_path=config_path,
        unknown_config_keys=unknown,
    )

    if settings.json and settings.rich:
        raise ValidationError("JSON and rich output cannot be combined", parameter_name="json")

    return settings


def run(settings: Settings) -> int:
    """Load both images, compare them and write the report.

    Every fatal condition is detected before anything is written.
    """
    if settings.output_format == "rich":
        require_rich()

    record_filter = RecordFilter(show_all=settings.show_all, ignore_ranges=settings.ignore_ranges)
    logger.debug("Using %r", record_filter)

    sequence_1 = load_ihex16(settings.file_1)
    sequence_2 = load_ihex16(settings.file_2)
    logger.info(
        "Comparing %s (%d words) with %s (%d words)",
        settings.file_1,
        len(sequence_1),
        settings.file_2,
        len(sequence_2),
    )

    records = list(record_filter.apply(diff_sequences(sequence_1, sequence_2)))
    if not any(record.is_diff for record in records):
        logger.info("No differences found.")

    render_kwargs: Dict[str, Any] = {}
    if settings.output_format == "rich":
        render_kwargs["color"] = settings.output is None and stream_supports_color()
    output = render_diff(records, format=settings.output_format, **render_kwargs)

    write_output(output, settings.output)
    if settings.output:
        logger.info("Report written to %s", settings.output)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the hexdiff command line."""
    parser = create_parser(__version__)
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        # --help and --version exit with 0; usage errors are invalid input
        return EXIT_SUCCESS if e.code in (0, None) else EXIT_VALIDATION_ERROR

    try:
        settings = resolve_settings(parsed)
        configure_logging(settings.log_level, log_file=settings.log_file, trace_mode=settings.trace)
        if settings.config_path:
            logger.info("Using configuration from %s", settings.config_path)
        for key in settings.unknown_config_keys:
            logger.warning("Ignoring unknown configuration key '%s'", key)

        return run(settings)
    except HexDiffError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())

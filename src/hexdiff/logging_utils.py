"""Logging setup shared by the hexdiff command line and API callers."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "hexdiff"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Unknown names fall back to ``logging.WARNING``.
    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach handlers to the ``hexdiff`` package logger.

    Previously attached handlers are removed, so repeated CLI invocations
    in one process do not duplicate output.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO").
    log_file : str, optional
        Path of a file that receives a copy of every log record.
    trace_mode : bool, default False
        Use a timestamped format that includes logger names.
    stream : TextIO, optional
        Console stream, ``sys.stderr`` unless given.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    resolved_level = resolve_log_level(log_level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolved_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/api.py
"""Python API for memory image comparison.

This module provides high-level functions for comparing Intel HEX files
or already-parsed memory images, and for rendering the resulting records.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from hexdiff.constants import OutputFormat
from hexdiff.diff.engine import DiffEngine
from hexdiff.diff.filters import AddressRange, RecordFilter, coerce_address_ranges
from hexdiff.diff.records import DiffRecord
from hexdiff.diff.renderers import JsonDiffRenderer, RichDiffRenderer, TextDiffRenderer
from hexdiff.exceptions import ValidationError
from hexdiff.memory import MemorySequence
from hexdiff.parsers.ihex16 import load_ihex16

logger = logging.getLogger(__name__)

RENDER_FORMATS = ("text", "json", "rich")


def diff_sequences(sequence_1: MemorySequence, sequence_2: MemorySequence) -> DiffEngine:
    """Compare two memory images.

    Parameters
    ----------
    sequence_1 : MemorySequence
        First image.
    sequence_2 : MemorySequence
        Second image.

    Returns
    -------
    DiffEngine
        Lazy iterator over every record, matching runs and gaps included.

    """
    return DiffEngine(sequence_1, sequence_2)


def diff_files(
    path_1: str | Path,
    path_2: str | Path,
    show_all: bool = False,
    ignore: Iterable[AddressRange | str] = (),
) -> Iterator[DiffRecord]:
    """Compare two Intel HEX files and return the records to report.

    Both files are read and parsed before this function returns, so file
    and configuration errors surface here rather than during iteration.

    Parameters
    ----------
    path_1 : str or Path
        First Intel HEX file.
    path_2 : str or Path
        Second Intel HEX file.
    show_all : bool, default False
        Also report runs where both files agree.
    ignore : iterable of AddressRange or str, default ()
        Address ranges never to report, as parsed ranges or ``A:B`` specs.

    Returns
    -------
    Iterator[DiffRecord]
        Filtered records in address order.

    Raises
    ------
    IgnoreRangeError
        If an ignore specification is malformed
    FileNotFoundError
        If either file does not exist
    FileAccessError
        If either file cannot be read
    ParsingError
        If either file holds overlapping data

    Examples
    --------
    Report differences outside the bootloader:
        >>> from hexdiff.api import diff_files
        >>> for record in diff_files("v1.hex", "v2.hex", ignore=[":1FFF"]):
        ...     print(record)

    """
    record_filter = RecordFilter(show_all=show_all, ignore_ranges=coerce_address_ranges(ignore))

    sequence_1 = load_ihex16(path_1)
    sequence_2 = load_ihex16(path_2)
    logger.info("Loaded %d word(s) from %s and %d word(s) from %s", len(sequence_1), path_1, len(sequence_2), path_2)

    return record_filter.apply(diff_sequences(sequence_1, sequence_2))


def render_diff(records: Iterable[DiffRecord], format: OutputFormat = "text", **kwargs: Any) -> str:
    """Render diff records in the specified format.

    Parameters
    ----------
    records : iterable of DiffRecord
        Records to render
    format : {"text", "json", "rich"}, default "text"
        Output format:
        - "text": one hexadecimal line per record
        - "json": structured JSON array
        - "rich": colored terminal table
    **kwargs : dict
        Additional options passed to the renderer

    Returns
    -------
    str
        Rendered output

    Raises
    ------
    ValidationError
        If format is invalid
    DependencyError
        If "rich" is requested without the rich package installed

    """
    if format == "text":
        return TextDiffRenderer(**kwargs).render(records)
    if format == "json":
        return JsonDiffRenderer(**kwargs).render(records)
    if format == "rich":
        return RichDiffRenderer(**kwargs).render(records)
    raise ValidationError(
        f"Invalid format: {format}. Must be one of: {', '.join(RENDER_FORMATS)}",
        parameter_name="format",
        parameter_value=format,
    )

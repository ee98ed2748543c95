#  Copyright (c) 2025 Tom Villani, Ph.D.
"""hexdiff - word-level comparison of Intel HEX memory images.

hexdiff parses two Intel HEX files into sparse 32-bit word images and
reports where they differ, collapsing runs of identical results into
address ranges.

Examples
--------
    >>> from hexdiff import diff_files, render_diff
    >>> print(render_diff(diff_files("build_a.hex", "build_b.hex")))

"""

from hexdiff.api import diff_files, diff_sequences, render_diff
from hexdiff.constants import SENTINEL, WORD_STRIDE
from hexdiff.diff import (
    AddressRange,
    DiffEngine,
    DiffRecord,
    RangeDiff,
    RecordFilter,
    SingleDiff,
    parse_address_range,
)
from hexdiff.exceptions import HexDiffError
from hexdiff.memory import MemorySequence, MemoryWord
from hexdiff.parsers import load_ihex16, parse_ihex16

__version__ = "0.1.0"

__all__ = [
    "SENTINEL",
    "WORD_STRIDE",
    "AddressRange",
    "DiffEngine",
    "DiffRecord",
    "HexDiffError",
    "MemorySequence",
    "MemoryWord",
    "RangeDiff",
    "RecordFilter",
    "SingleDiff",
    "__version__",
    "diff_files",
    "diff_sequences",
    "load_ihex16",
    "parse_address_range",
    "parse_ihex16",
    "render_diff",
]

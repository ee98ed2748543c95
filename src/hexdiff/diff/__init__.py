#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/__init__.py
"""Memory image comparison.

Key Features
------------
- Lazy word-by-word merge of two sparse memory images
- Runs of identical comparison results collapse into one range record
- Addresses missing from both images are reported once as a gap
- Ignore ranges and same/diff selection for reporting

Examples
--------
Compare two parsed images:
    >>> from hexdiff.diff import DiffEngine, RecordFilter
    >>> engine = DiffEngine(image_1, image_2)
    >>> for record in RecordFilter().apply(engine):
    ...     print(record)

"""

from hexdiff.diff.engine import DiffEngine
from hexdiff.diff.filters import AddressRange, RecordFilter, coerce_address_ranges, parse_address_range
from hexdiff.diff.records import DiffRecord, RangeDiff, SingleDiff, value_or_sentinel

__all__ = [
    "AddressRange",
    "DiffEngine",
    "DiffRecord",
    "RangeDiff",
    "RecordFilter",
    "SingleDiff",
    "coerce_address_ranges",
    "parse_address_range",
    "value_or_sentinel",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/renderers/text.py
"""Plain text diff renderer.

One line per record, fields in upper-case hexadecimal padded to six
digits::

    000000 000010 000020           single: address value_1 value_2
    000004 00000C 000001 000002    range:  start end value_1 value_2

Absent values print as ``SENTINEL`` (``FFFFFF``).
"""

from __future__ import annotations

from typing import Iterable, Iterator

from hexdiff.diff.records import DiffRecord, SingleDiff, value_or_sentinel


def format_record(record: DiffRecord) -> str:
    """Format one record as a line of text."""
    value_1 = value_or_sentinel(record.value_1)
    value_2 = value_or_sentinel(record.value_2)
    if isinstance(record, SingleDiff):
        return f"{record.address:06X} {value_1:06X} {value_2:06X}"
    return f"{record.start:06X} {record.end:06X} {value_1:06X} {value_2:06X}"


class TextDiffRenderer:
    """Render diff records as plain text lines.

    Parameters
    ----------
    line_separator : str, default "\\n"
        Separator placed between lines by :meth:`render`.

    """

    def __init__(self, line_separator: str = "\n"):
        """Initialize the text diff renderer."""
        self.line_separator = line_separator

    def iter_lines(self, records: Iterable[DiffRecord]) -> Iterator[str]:
        """Yield one formatted line per record."""
        for record in records:
            yield format_record(record)

    def render(self, records: Iterable[DiffRecord]) -> str:
        """Render all records as a single string without a trailing separator."""
        return self.line_separator.join(self.iter_lines(records))

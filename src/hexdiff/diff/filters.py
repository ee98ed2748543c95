#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/filters.py
"""Selection of diff records for reporting.

Two independent predicates decide whether a record is reported:

- ignore ranges: a record overlapping any ignored address range is
  dropped, whatever else is requested;
- same/diff selection: unless every record is requested, records whose
  two values are equal are dropped.

Ignore ranges are written ``A``, ``A:B``, ``A:`` or ``:B`` with
hexadecimal bounds in output address units. An omitted bound extends the
range to the start or end of the address space.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from hexdiff.constants import MAX_ADDRESS
from hexdiff.diff.records import DiffRecord
from hexdiff.exceptions import IgnoreRangeError

_HEX_BOUND_RE = re.compile(r"^(?:0[xX])?[0-9a-fA-F]+$")
RANGE_DELIMITER = ":"


@dataclass(frozen=True, slots=True)
class AddressRange:
    """Inclusive range of output addresses."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end > MAX_ADDRESS:
            raise IgnoreRangeError(
                f"Address range {self.start:#x}:{self.end:#x} is outside the address space",
                parameter_value=(self.start, self.end),
            )
        if self.start > self.end:
            raise IgnoreRangeError(
                f"Address range start {self.start:X} is after its end {self.end:X}",
                parameter_value=(self.start, self.end),
            )

    def __contains__(self, address: object) -> bool:
        return isinstance(address, int) and self.start <= address <= self.end

    def __str__(self) -> str:
        if self.start == self.end:
            return f"{self.start:X}"
        return f"{self.start:X}{RANGE_DELIMITER}{self.end:X}"


def _parse_bound(text: str, spec: str) -> int:
    bound = text.strip()
    if not _HEX_BOUND_RE.match(bound):
        raise IgnoreRangeError(f"Invalid hexadecimal address '{bound}' in ignore range '{spec}'", parameter_value=spec)
    value = int(bound, 16)
    if value > MAX_ADDRESS:
        raise IgnoreRangeError(f"Address '{bound}' in ignore range '{spec}' exceeds 32 bits", parameter_value=spec)
    return value


def parse_address_range(spec: str) -> AddressRange:
    """Parse an ignore-range specification.

    Parameters
    ----------
    spec : str
        ``A`` for a single address, ``A:B`` for an inclusive range, ``A:``
        for everything from ``A`` up, or ``:B`` for everything up to ``B``.
        Bounds are hexadecimal, with an optional ``0x`` prefix.

    Returns
    -------
    AddressRange
        The parsed range.

    Raises
    ------
    IgnoreRangeError
        If the specification is empty, has more than one delimiter, has a
        bound that is not hexadecimal, or has its bounds reversed.

    Examples
    --------
        >>> parse_address_range("100:1FF")
        AddressRange(start=256, end=511)
        >>> parse_address_range(":FF")
        AddressRange(start=0, end=255)

    """
    text = spec.strip()
    if not text:
        raise IgnoreRangeError("Ignore range must not be empty", parameter_value=spec)

    if RANGE_DELIMITER not in text:
        address = _parse_bound(text, spec)
        return AddressRange(address, address)

    lower, _, upper = text.partition(RANGE_DELIMITER)
    if RANGE_DELIMITER in upper:
        raise IgnoreRangeError(f"Ignore range '{spec}' has more than one '{RANGE_DELIMITER}'", parameter_value=spec)
    if not lower.strip() and not upper.strip():
        raise IgnoreRangeError(f"Ignore range '{spec}' needs at least one bound", parameter_value=spec)

    start = _parse_bound(lower, spec) if lower.strip() else 0
    end = _parse_bound(upper, spec) if upper.strip() else MAX_ADDRESS
    return AddressRange(start, end)


def coerce_address_ranges(ranges: Iterable[AddressRange | str]) -> list[AddressRange]:
    """Accept a mix of parsed ranges and specification strings."""
    return [item if isinstance(item, AddressRange) else parse_address_range(item) for item in ranges]


class RecordFilter:
    """Predicate deciding which diff records are reported.

    Parameters
    ----------
    show_all : bool, default False
        Keep records whose two values match.
    ignore_ranges : sequence of AddressRange, optional
        Records overlapping any of these ranges are always dropped.

    Examples
    --------
        >>> record_filter = RecordFilter(ignore_ranges=[parse_address_range("0:F")])
        >>> reported = list(record_filter.apply(records))

    """

    def __init__(self, show_all: bool = False, ignore_ranges: Sequence[AddressRange] = ()) -> None:
        self.show_all = show_all
        self.ignore_ranges = tuple(ignore_ranges)

    def is_ignored(self, record: DiffRecord) -> bool:
        return any(record.overlaps(address_range) for address_range in self.ignore_ranges)

    def __call__(self, record: DiffRecord) -> bool:
        if self.is_ignored(record):
            return False
        return self.show_all or record.is_diff

    def apply(self, records: Iterable[DiffRecord]) -> Iterator[DiffRecord]:
        """Lazily yield the records that pass the filter."""
        return (record for record in records if self(record))

    def __repr__(self) -> str:
        ranges = ", ".join(str(address_range) for address_range in self.ignore_ranges)
        return f"RecordFilter(show_all={self.show_all}, ignore_ranges=[{ranges}])"

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/records.py
"""Diff record value types.

The diff engine emits two kinds of record: :class:`SingleDiff` for one
word and :class:`RangeDiff` for an inclusive run of addresses sharing the
same value pair. Addresses are in output units (internal byte offset
divided by ``OUTPUT_ADDRESS_DIVISOR``).

A value of ``None`` means the corresponding image has no data at that
address. Numeric output forms substitute ``SENTINEL`` for it through
:func:`value_or_sentinel`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

from hexdiff.constants import SENTINEL

if TYPE_CHECKING:
    from hexdiff.diff.filters import AddressRange

# A word value, or None when the image has no entry at the address
WordValue = Optional[int]


def value_or_sentinel(value: WordValue) -> int:
    """Return ``value``, or ``SENTINEL`` when the value is absent."""
    return SENTINEL if value is None else value


@dataclass(frozen=True, slots=True)
class SingleDiff:
    """Comparison result for a single word."""

    address: int
    value_1: WordValue
    value_2: WordValue

    @property
    def start(self) -> int:
        return self.address

    @property
    def end(self) -> int:
        return self.address

    @property
    def is_same(self) -> bool:
        return self.value_1 == self.value_2

    @property
    def is_diff(self) -> bool:
        return self.value_1 != self.value_2

    @property
    def is_gap(self) -> bool:
        """True when neither image has data here."""
        return self.value_1 is None and self.value_2 is None

    def overlaps(self, address_range: AddressRange) -> bool:
        return self.address in address_range

    def to_dict(self, absent_as_sentinel: bool = True) -> dict[str, Any]:
        """Return a JSON-ready mapping tagged ``"single"``."""
        convert = value_or_sentinel if absent_as_sentinel else _identity
        return {
            "type": "single",
            "address": self.address,
            "value_1": convert(self.value_1),
            "value_2": convert(self.value_2),
        }


@dataclass(frozen=True, slots=True)
class RangeDiff:
    """Comparison result for an inclusive run of addresses with one value pair."""

    start: int
    end: int
    value_1: WordValue
    value_2: WordValue

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start:#x} is after its end {self.end:#x}")

    @property
    def is_same(self) -> bool:
        return self.value_1 == self.value_2

    @property
    def is_diff(self) -> bool:
        return self.value_1 != self.value_2

    @property
    def is_gap(self) -> bool:
        """True when neither image has data anywhere in the range."""
        return self.value_1 is None and self.value_2 is None

    def overlaps(self, address_range: AddressRange) -> bool:
        return self.start <= address_range.end and self.end >= address_range.start

    def to_dict(self, absent_as_sentinel: bool = True) -> dict[str, Any]:
        """Return a JSON-ready mapping tagged ``"range"``."""
        convert = value_or_sentinel if absent_as_sentinel else _identity
        return {
            "type": "range",
            "start": self.start,
            "end": self.end,
            "value_1": convert(self.value_1),
            "value_2": convert(self.value_2),
        }


DiffRecord = Union[SingleDiff, RangeDiff]


def _identity(value: WordValue) -> WordValue:
    return value

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for diff/records.py record types."""

import dataclasses

import pytest

from hexdiff.constants import SENTINEL
from hexdiff.diff.filters import AddressRange
from hexdiff.diff.records import RangeDiff, SingleDiff, value_or_sentinel


@pytest.mark.unit
class TestValueOrSentinel:
    def test_absent_value_becomes_sentinel(self):
        assert value_or_sentinel(None) == SENTINEL == 0xFFFFFF

    def test_present_value_unchanged(self):
        assert value_or_sentinel(0) == 0
        assert value_or_sentinel(0x12345678) == 0x12345678


@pytest.mark.unit
class TestSingleDiff:
    def test_same_and_diff(self):
        assert SingleDiff(0, 1, 1).is_same
        assert not SingleDiff(0, 1, 1).is_diff
        assert SingleDiff(0, 1, 2).is_diff
        assert not SingleDiff(0, 1, 2).is_same

    def test_absent_value_differs_from_sentinel_valued_word(self):
        record = SingleDiff(0, None, SENTINEL)
        assert record.is_diff
        assert not record.is_gap

    def test_gap(self):
        record = SingleDiff(4, None, None)
        assert record.is_gap
        assert record.is_same

    def test_start_and_end_alias_address(self):
        record = SingleDiff(0x10, 1, 2)
        assert record.start == record.end == 0x10

    def test_overlaps(self):
        record = SingleDiff(0x10, 1, 2)
        assert record.overlaps(AddressRange(0x10, 0x10))
        assert record.overlaps(AddressRange(0, 0x10))
        assert record.overlaps(AddressRange(0x10, 0x20))
        assert not record.overlaps(AddressRange(0x11, 0x20))
        assert not record.overlaps(AddressRange(0, 0xF))

    def test_to_dict(self):
        assert SingleDiff(2, 0x20, None).to_dict() == {
            "type": "single",
            "address": 2,
            "value_1": 0x20,
            "value_2": SENTINEL,
        }
        assert SingleDiff(2, 0x20, None).to_dict(absent_as_sentinel=False)["value_2"] is None

    def test_immutable(self):
        record = SingleDiff(0, 1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.address = 4


@pytest.mark.unit
class TestRangeDiff:
    def test_same_and_diff(self):
        assert RangeDiff(0, 4, 1, 1).is_same
        assert RangeDiff(0, 4, 1, 2).is_diff

    def test_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            RangeDiff(8, 4, 1, 1)

    @pytest.mark.parametrize(
        "bounds,expected",
        [
            ((0x00, 0x0F), False),
            ((0x00, 0x10), True),
            ((0x14, 0x18), True),
            ((0x20, 0x30), True),
            ((0x21, 0x30), False),
            ((0x00, 0xFF), True),
        ],
    )
    def test_overlaps(self, bounds, expected):
        assert RangeDiff(0x10, 0x20, 1, 2).overlaps(AddressRange(*bounds)) is expected

    def test_to_dict(self):
        assert RangeDiff(0, 3, None, None).to_dict() == {
            "type": "range",
            "start": 0,
            "end": 3,
            "value_1": SENTINEL,
            "value_2": SENTINEL,
        }

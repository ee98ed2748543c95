#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for diff/filters.py ignore ranges and RecordFilter."""

import pytest

from hexdiff.constants import MAX_ADDRESS
from hexdiff.diff.filters import AddressRange, RecordFilter, coerce_address_ranges, parse_address_range
from hexdiff.diff.records import RangeDiff, SingleDiff
from hexdiff.exceptions import IgnoreRangeError, ValidationError


@pytest.mark.unit
class TestParseAddressRange:
    """Test parse_address_range() grammar."""

    def test_single_address(self):
        assert parse_address_range("1F") == AddressRange(0x1F, 0x1F)

    def test_closed_range(self):
        assert parse_address_range("100:1ff") == AddressRange(0x100, 0x1FF)

    def test_open_upper_bound(self):
        assert parse_address_range("7F000:") == AddressRange(0x7F000, MAX_ADDRESS)

    def test_open_lower_bound(self):
        assert parse_address_range(":FF") == AddressRange(0, 0xFF)

    def test_prefix_and_whitespace(self):
        assert parse_address_range(" 0x10 : 0X20 ") == AddressRange(0x10, 0x20)

    @pytest.mark.parametrize("spec", ["", "   ", ":", "G1", "10:2:3", "0x", "-4", "1 0", "100000000"])
    def test_rejects_malformed(self, spec):
        with pytest.raises(IgnoreRangeError):
            parse_address_range(spec)

    def test_rejects_inverted_range(self):
        with pytest.raises(IgnoreRangeError, match="after its end"):
            parse_address_range("20:10")

    def test_error_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_address_range("xyz")
        assert exc_info.value.parameter_name == "ignore"
        assert exc_info.value.parameter_value == "xyz"


@pytest.mark.unit
class TestAddressRange:
    def test_contains(self):
        address_range = AddressRange(4, 8)
        assert 4 in address_range
        assert 8 in address_range
        assert 9 not in address_range
        assert "4" not in address_range

    def test_str(self):
        assert str(AddressRange(0x10, 0x10)) == "10"
        assert str(AddressRange(0x10, 0x1F)) == "10:1F"

    def test_coerce_mixed_inputs(self):
        existing = AddressRange(1, 2)
        assert coerce_address_ranges([existing, "3:4"]) == [existing, AddressRange(3, 4)]


RECORDS = [
    SingleDiff(0x00, 1, 1),
    RangeDiff(0x02, 0x06, 1, 2),
    RangeDiff(0x08, 0x0B, None, None),
    SingleDiff(0x0C, 5, None),
    RangeDiff(0x0E, 0x12, 7, 7),
]


@pytest.mark.unit
class TestRecordFilter:
    def test_default_keeps_only_differences(self):
        assert list(RecordFilter().apply(RECORDS)) == [RECORDS[1], RECORDS[3]]

    def test_show_all_keeps_everything(self):
        assert list(RecordFilter(show_all=True).apply(RECORDS)) == RECORDS

    def test_ignore_range_drops_overlapping_records_even_with_show_all(self):
        record_filter = RecordFilter(show_all=True, ignore_ranges=[AddressRange(0x04, 0x0C)])
        assert list(record_filter.apply(RECORDS)) == [RECORDS[0], RECORDS[4]]

    def test_partial_overlap_drops_whole_record(self):
        record_filter = RecordFilter(ignore_ranges=[AddressRange(0x06, 0x06)])
        assert list(record_filter.apply(RECORDS)) == [RECORDS[3]]

    def test_multiple_ranges(self):
        record_filter = RecordFilter(ignore_ranges=[parse_address_range("2"), parse_address_range("C:")])
        assert list(record_filter.apply(RECORDS)) == []

    def test_is_a_predicate(self):
        record_filter = RecordFilter()
        assert list(filter(record_filter, RECORDS)) == [RECORDS[1], RECORDS[3]]
        assert record_filter.is_ignored(RECORDS[0]) is False

    def test_apply_is_lazy(self):
        def records():
            yield RECORDS[1]
            raise AssertionError("consumed past the first record")

        assert next(RecordFilter().apply(records())) == RECORDS[1]

    def test_repr_lists_ranges(self):
        record_filter = RecordFilter(ignore_ranges=[AddressRange(0, 0xF)])
        assert repr(record_filter) == "RecordFilter(show_all=False, ignore_ranges=[0:F])"

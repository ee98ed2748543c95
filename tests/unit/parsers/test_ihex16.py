#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for parsers/ihex16.py Intel HEX reader."""

import logging

import pytest
from utils import build_hex, end_of_file, extended_linear_address, make_record

from hexdiff.exceptions import FileAccessError, FileNotFoundError, ParsingError
from hexdiff.memory import MemoryWord
from hexdiff.parsers.ihex16 import check_record, load_ihex16, parse_ihex16


def data(offset, payload):
    return make_record(0x00, offset, bytes(payload))


@pytest.mark.unit
class TestCheckRecord:
    """Test check_record() validation of single lines."""

    def test_valid_data_record(self):
        assert check_record(data(0, [1, 2, 3, 4])) == (0x00, None)

    def test_valid_end_of_file(self):
        assert check_record(":00000001FF") == (0x01, None)

    def test_lowercase_hex_accepted(self):
        assert check_record(":00000001ff") == (0x01, None)

    @pytest.mark.parametrize(
        "line,reason",
        [
            ("00000001FF", "start code"),
            (":0000001FF", "hexadecimal"),
            (":00000001FG", "hexadecimal"),
            (":000001", "too short"),
            (":0500000001020304F0", "byte count"),
            (":00000001FE", "checksum"),
            (":00000006FA", "unknown record type"),
            (":020000040001F9", None),
        ],
    )
    def test_reasons(self, line, reason):
        record_type, message = check_record(line)
        if reason is None:
            assert record_type == 0x04
        else:
            assert record_type is None
            assert reason in message

    def test_extended_address_needs_two_bytes(self):
        record_type, message = check_record(make_record(0x04, 0, b"\x00"))
        assert record_type is None
        assert "needs 2 data bytes" in message

    def test_extended_address_needs_zero_offset(self):
        record_type, message = check_record(make_record(0x04, 0x10, b"\x00\x01"))
        assert record_type is None
        assert "zero offset" in message


@pytest.mark.unit
class TestParseIhex16:
    """Test parse_ihex16() conversion to memory words."""

    def test_words_are_little_endian(self):
        sequence = parse_ihex16(data(0, [0x78, 0x56, 0x34, 0x12]) + "\n" + end_of_file())
        assert list(sequence) == [MemoryWord(0, 0x12345678)]

    def test_record_with_several_words(self):
        sequence = parse_ihex16(data(0x10, range(8)) + "\n" + end_of_file())
        assert [word.address for word in sequence] == [0x10, 0x14]
        assert sequence[1].value == 0x07060504

    def test_extended_linear_address_rebases(self):
        text = "\n".join([extended_linear_address(0x0001), data(0x0004, [1, 0, 0, 0]), end_of_file()])
        assert list(parse_ihex16(text)) == [MemoryWord(0x10004, 1)]

    def test_extended_segment_address_rebases(self):
        text = "\n".join([make_record(0x02, 0, b"\x10\x00"), data(0, [2, 0, 0, 0]), end_of_file()])
        assert list(parse_ihex16(text)) == [MemoryWord(0x10000, 2)]

    def test_out_of_order_records_are_sorted(self):
        text = build_hex({0x20: 2, 0x00: 1})
        reordered = "\n".join(reversed(text.strip().splitlines()[:-1])) + "\n" + end_of_file()
        assert [word.address for word in parse_ihex16(reordered)] == [0x00, 0x20]

    def test_stops_at_end_of_file(self):
        text = "\n".join([data(0, [1, 0, 0, 0]), end_of_file(), data(4, [2, 0, 0, 0])])
        assert list(parse_ihex16(text)) == [MemoryWord(0, 1)]

    def test_missing_end_of_file_is_accepted(self):
        assert len(parse_ihex16(build_hex({0: 1, 4: 2}, eof=False))) == 2

    def test_blank_lines_and_crlf(self):
        text = "\r\n\r\n" + data(0, [1, 0, 0, 0]) + "\r\n\r\n" + end_of_file() + "\r\n"
        assert list(parse_ihex16(text)) == [MemoryWord(0, 1)]

    def test_malformed_records_are_skipped_with_warning(self, caplog):
        text = "\n".join(
            [
                data(0, [1, 0, 0, 0]),
                "garbage",
                ":04000400020000000000",
                data(8, [3, 0, 0, 0]),
                end_of_file(),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="hexdiff"):
            sequence = parse_ihex16(text, source="image.hex")

        assert list(sequence) == [MemoryWord(0, 1), MemoryWord(8, 3)]
        messages = [record.getMessage() for record in caplog.records]
        assert any("image.hex:2" in message for message in messages)
        assert any("image.hex:3" in message for message in messages)

    def test_start_address_records_ignored(self):
        text = "\n".join([make_record(0x05, 0, b"\x00\x00\x01\x00"), data(0, [9, 0, 0, 0]), end_of_file()])
        assert list(parse_ihex16(text)) == [MemoryWord(0, 9)]

    def test_partial_word_is_padded(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="hexdiff"):
            sequence = parse_ihex16(data(2, [0xAA, 0xBB]) + "\n" + end_of_file())
        assert list(sequence) == [MemoryWord(0, 0xBBAAFFFF)]
        assert any("partially populated" in record.getMessage() for record in caplog.records)

    def test_overlapping_data_raises(self):
        text = "\n".join([data(0, [1, 0, 0, 0]), data(0, [2, 0, 0, 0]), end_of_file()])
        with pytest.raises(ParsingError, match="Overlapping"):
            parse_ihex16(text)

    def test_empty_text(self):
        assert len(parse_ihex16("")) == 0


@pytest.mark.unit
class TestLoadIhex16:
    """Test load_ihex16() file handling."""

    def test_load(self, hex_file):
        path = hex_file("a.hex", {0: 0x11, 4: 0x22})
        assert [word.value for word in load_ihex16(path)] == [0x11, 0x22]

    def test_accepts_str_path(self, hex_file):
        path = hex_file("a.hex", {0: 1})
        assert len(load_ihex16(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc_info:
            load_ihex16(tmp_path / "missing.hex")
        assert exc_info.value.file_path.endswith("missing.hex")

    def test_directory(self, tmp_path):
        with pytest.raises(FileAccessError, match="Not a regular file"):
            load_ihex16(tmp_path)

"""Test utilities for the hexdiff test suite.

Helpers for writing Intel HEX text by hand, so that tests can describe
memory images as ``{address: word}`` mappings.
"""

from typing import Iterable, Mapping


def make_record(record_type: int, offset: int, payload: bytes = b"") -> str:
    """Build one Intel HEX record line with a valid checksum."""
    raw = bytes([len(payload), (offset >> 8) & 0xFF, offset & 0xFF, record_type]) + payload
    checksum = (-sum(raw)) & 0xFF
    return ":" + (raw + bytes([checksum])).hex().upper()


def end_of_file() -> str:
    return make_record(0x01, 0)


def extended_linear_address(upper: int) -> str:
    return make_record(0x04, 0, upper.to_bytes(2, "big"))


def build_hex(words: Mapping[int, int], eof: bool = True, extra_lines: Iterable[str] = ()) -> str:
    """Encode 32-bit words as Intel HEX, one data record per word.

    Extended linear address records are emitted whenever the upper 16 bits
    of the address change.
    """
    lines = list(extra_lines)
    upper = 0
    for address in sorted(words):
        if address >> 16 != upper:
            upper = address >> 16
            lines.append(extended_linear_address(upper))
        lines.append(make_record(0x00, address & 0xFFFF, words[address].to_bytes(4, "little")))
    if eof:
        lines.append(end_of_file())
    return "\n".join(lines) + "\n"

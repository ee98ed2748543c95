#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/parsers/ihex16.py
"""Intel HEX reader producing 32-bit word memory images.

Records are decoded by :mod:`intelhex`. Before the text reaches it, each
line is checked on its own so that a damaged record can be skipped with
a warning instead of aborting the whole file:

- the line must start with ``:`` and contain only hexadecimal digit pairs,
- the declared byte count must match the payload,
- the checksum must be valid,
- the record type must be known, and non-data records must have their
  fixed lengths.

Reading stops at the first end-of-file record. Extended segment (02) and
extended linear address (04) records rebase the data records that follow.
Start address records (03, 05) carry no memory content and are dropped.

Decoded bytes are grouped into aligned little-endian words of
``WORD_SIZE`` bytes. Bytes missing from a partially written word read as
``PADDING_BYTE``.
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

from intelhex import AddressOverlapError, IntelHex, IntelHexError

from hexdiff.constants import PADDING_BYTE, WORD_SIZE
from hexdiff.exceptions import FileAccessError, FileNotFoundError, ParsingError
from hexdiff.memory import MemorySequence, MemoryWord

logger = logging.getLogger(__name__)

RECORD_DATA = 0x00
RECORD_END_OF_FILE = 0x01
RECORD_EXTENDED_SEGMENT_ADDRESS = 0x02
RECORD_START_SEGMENT_ADDRESS = 0x03
RECORD_EXTENDED_LINEAR_ADDRESS = 0x04
RECORD_START_LINEAR_ADDRESS = 0x05

# Payload length required by each non-data record type
_FIXED_PAYLOAD_LENGTHS = {
    RECORD_END_OF_FILE: 0,
    RECORD_EXTENDED_SEGMENT_ADDRESS: 2,
    RECORD_START_SEGMENT_ADDRESS: 4,
    RECORD_EXTENDED_LINEAR_ADDRESS: 2,
    RECORD_START_LINEAR_ADDRESS: 4,
}

# Types forwarded to intelhex; start addresses do not describe memory
_MEMORY_RECORD_TYPES = {
    RECORD_DATA,
    RECORD_END_OF_FILE,
    RECORD_EXTENDED_SEGMENT_ADDRESS,
    RECORD_EXTENDED_LINEAR_ADDRESS,
}

_HEX_PAIRS_RE = re.compile(r"^(?:[0-9A-Fa-f]{2})+$")

# byte count, 16-bit offset, record type, checksum
_RECORD_OVERHEAD = 5


def check_record(line: str) -> tuple[Optional[int], Optional[str]]:
    """Validate a single Intel HEX record.

    Parameters
    ----------
    line : str
        Record text without its line terminator.

    Returns
    -------
    tuple of (int or None, str or None)
        ``(record_type, None)`` for a well-formed record, or
        ``(None, reason)`` describing why the record is malformed.

    """
    if not line.startswith(":"):
        return None, "missing ':' start code"

    body = line[1:]
    if not _HEX_PAIRS_RE.match(body):
        return None, "not a sequence of hexadecimal byte pairs"

    raw = bytes.fromhex(body)
    if len(raw) < _RECORD_OVERHEAD:
        return None, "record too short"

    byte_count, offset, record_type = raw[0], int.from_bytes(raw[1:3], "big"), raw[3]
    if len(raw) != byte_count + _RECORD_OVERHEAD:
        return None, f"byte count {byte_count} does not match payload length {len(raw) - _RECORD_OVERHEAD}"
    if sum(raw) & 0xFF:
        return None, "checksum mismatch"

    if record_type == RECORD_DATA:
        return record_type, None

    expected_length = _FIXED_PAYLOAD_LENGTHS.get(record_type)
    if expected_length is None:
        return None, f"unknown record type {record_type:02X}"
    if byte_count != expected_length:
        return None, f"record type {record_type:02X} needs {expected_length} data bytes, got {byte_count}"
    if record_type != RECORD_END_OF_FILE and offset != 0:
        return None, f"record type {record_type:02X} must have a zero offset"

    return record_type, None


def _memory_records(lines: Iterable[str], source: str) -> Iterator[str]:
    """Yield the well-formed records that describe memory, up to end of file."""
    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line:
            continue

        record_type, reason = check_record(line)
        if record_type is None:
            logger.warning("%s:%d: skipping malformed record (%s)", source, line_number, reason)
            continue

        if record_type in _MEMORY_RECORD_TYPES:
            yield line
        if record_type == RECORD_END_OF_FILE:
            return


def _pack_words(image: IntelHex, source: str) -> Iterator[MemoryWord]:
    addresses = image.addresses()
    populated = set(addresses)
    bases = sorted({address - address % WORD_SIZE for address in addresses})

    for base in bases:
        span = range(base, base + WORD_SIZE)
        missing = [address for address in span if address not in populated]
        if missing:
            logger.debug(
                "%s: word at %08X is partially populated, padding %d byte(s) with %02X",
                source,
                base,
                len(missing),
                PADDING_BYTE,
            )
        value = int.from_bytes(bytes(image[address] for address in span), "little")
        yield MemoryWord(base, value)


def parse_ihex16(text: str, source: str = "<string>") -> MemorySequence:
    """Parse Intel HEX text into a memory image.

    Parameters
    ----------
    text : str
        Intel HEX file content.
    source : str, default "<string>"
        Name used in log messages and errors.

    Returns
    -------
    MemorySequence
        Aligned words in address order.

    Raises
    ------
    ParsingError
        If two data records write the same address.

    """
    image = IntelHex()
    image.padding = PADDING_BYTE
    records = "\n".join(_memory_records(text.splitlines(), source))

    try:
        image.loadhex(io.StringIO(records))
    except AddressOverlapError as e:
        raise ParsingError(f"Overlapping data records in {source}: {e}", parsing_stage="decode", original_error=e) from e
    except IntelHexError as e:
        raise ParsingError(f"Could not decode {source}: {e}", parsing_stage="decode", original_error=e) from e

    sequence = MemorySequence(_pack_words(image, source))
    logger.debug("%s: %d word(s) decoded", source, len(sequence))
    return sequence


def load_ihex16(path: str | Path) -> MemorySequence:
    """Read and parse an Intel HEX file.

    Parameters
    ----------
    path : str or Path
        Path to the ``.hex`` file.

    Returns
    -------
    MemorySequence
        The file's memory image.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    FileAccessError
        If the path is not a regular file or cannot be read.
    ParsingError
        If the content cannot be represented as a memory image.

    """
    hex_path = Path(path)
    if not hex_path.exists():
        raise FileNotFoundError(str(hex_path))
    if not hex_path.is_file():
        raise FileAccessError(str(hex_path), message=f"Not a regular file: {hex_path}")

    try:
        text = hex_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(str(hex_path), original_error=e) from e

    return parse_ihex16(text, source=str(hex_path))

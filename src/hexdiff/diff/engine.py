#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/diff/engine.py
"""Word-by-word comparison of two memory images.

:class:`DiffEngine` walks two :class:`~hexdiff.memory.MemorySequence`
objects in lockstep, like the merge step of a merge sort, and produces
one :class:`~hexdiff.diff.records.DiffRecord` per run of consecutive
addresses that share the same ``(value_1, value_2)`` pair.

Addresses missing from one image compare against an absent value
(``None``). Addresses missing from both images, below the highest
address either image defines, form a gap that is reported once as a
single record with both values absent.

Records are produced lazily: each call to :meth:`DiffEngine.next_record`
consumes only the input needed to finish the current run.

Examples
--------
    >>> from hexdiff.memory import MemorySequence
    >>> from hexdiff.diff.engine import DiffEngine
    >>> old = MemorySequence.from_pairs([(0, 0x01), (4, 0x01), (8, 0x01)])
    >>> new = MemorySequence.from_pairs([(0, 0x02), (4, 0x02), (8, 0x02)])
    >>> list(DiffEngine(old, new))
    [RangeDiff(start=0, end=4, value_1=1, value_2=2)]

"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Optional

from hexdiff.constants import OUTPUT_ADDRESS_DIVISOR, WORD_STRIDE
from hexdiff.diff.records import DiffRecord, RangeDiff, SingleDiff, WordValue
from hexdiff.memory import MemoryWord

_ABSENT_PAIR: tuple[WordValue, WordValue] = (None, None)


class _Head(NamedTuple):
    """The next address to account for and both images' values there."""

    address: int
    value_1: WordValue
    value_2: WordValue

    @property
    def pair(self) -> tuple[WordValue, WordValue]:
        return self.value_1, self.value_2


class DiffEngine:
    """Lazy two-pointer merge over two memory images.

    The engine owns an iterator over each input and consumes it; create a
    new engine to compare the same images again.

    Parameters
    ----------
    words_1 : iterable of MemoryWord
        First image, in strictly increasing address order.
    words_2 : iterable of MemoryWord
        Second image, in strictly increasing address order.

    Notes
    -----
    Output addresses are internal byte offsets divided by
    ``OUTPUT_ADDRESS_DIVISOR``. A range of real words ends at the address
    of its last word; a gap range ends at the last output unit before the
    next populated address.

    """

    def __init__(self, words_1: Iterable[MemoryWord], words_2: Iterable[MemoryWord]) -> None:
        """Position both cursors on the first word of each image."""
        self._words_1: Iterator[MemoryWord] = iter(words_1)
        self._words_2: Iterator[MemoryWord] = iter(words_2)
        self._head_1: Optional[MemoryWord] = next(self._words_1, None)
        self._head_2: Optional[MemoryWord] = next(self._words_2, None)
        self._cursor_address = 0

    @property
    def cursor_address(self) -> int:
        """Next internal address not yet covered by an emitted record."""
        return self._cursor_address

    @property
    def exhausted(self) -> bool:
        return self._head_1 is None and self._head_2 is None

    def __iter__(self) -> DiffEngine:
        return self

    def __next__(self) -> DiffRecord:
        record = self.next_record()
        if record is None:
            raise StopIteration
        return record

    def next_record(self) -> Optional[DiffRecord]:
        """Produce the next record, or None once both images are consumed.

        Calling again after None keeps returning None.
        """
        head = self._compare()
        if head is None:
            return None

        if head.address > self._cursor_address:
            # Neither image covers [cursor, head.address)
            start = self._cursor_address
            pair = _ABSENT_PAIR
            run_end = head.address
        else:
            start = head.address
            pair = head.pair
            run_end = head.address + WORD_STRIDE
            self._advance()

        run_end = self._extend_run(pair, run_end)
        self._cursor_address = run_end

        if run_end - start == WORD_STRIDE:
            return SingleDiff(start // OUTPUT_ADDRESS_DIVISOR, *pair)

        if pair == _ABSENT_PAIR:
            end = run_end // OUTPUT_ADDRESS_DIVISOR - 1
        else:
            end = (run_end - WORD_STRIDE) // OUTPUT_ADDRESS_DIVISOR
        return RangeDiff(start // OUTPUT_ADDRESS_DIVISOR, end, *pair)

    def _extend_run(self, pair: tuple[WordValue, WordValue], run_end: int) -> int:
        """Consume heads that continue the current run; return its exclusive end.

        A run of real words only continues at exactly ``run_end``. A gap
        run may skip ahead, but only onto heads that are themselves absent
        in both images, which real words never are.
        """
        gap_run = pair == _ABSENT_PAIR
        while True:
            head = self._compare()
            if head is None or head.pair != pair:
                return run_end
            if head.address != run_end and not gap_run:
                return run_end
            run_end = head.address + WORD_STRIDE
            self._advance()

    def _compare(self) -> Optional[_Head]:
        """Describe the lowest address held by either head."""
        head_1, head_2 = self._head_1, self._head_2
        if head_1 is None and head_2 is None:
            return None
        if head_2 is None or (head_1 is not None and head_1.address < head_2.address):
            return _Head(head_1.address, head_1.value, None)
        if head_1 is None or head_2.address < head_1.address:
            return _Head(head_2.address, None, head_2.value)
        return _Head(head_1.address, head_1.value, head_2.value)

    def _advance(self) -> None:
        """Step past the lowest address, moving both heads when they match."""
        head_1, head_2 = self._head_1, self._head_2
        if head_1 is not None and (head_2 is None or head_1.address <= head_2.address):
            self._head_1 = next(self._words_1, None)
        if head_2 is not None and (head_1 is None or head_2.address <= head_1.address):
            self._head_2 = next(self._words_2, None)

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/hexdiff/memory.py
"""Sparse memory image model.

A memory image is a :class:`MemorySequence`: an immutable run of
:class:`MemoryWord` entries ordered by address. Addresses that have no
entry are meaningful: they denote memory the image does not describe,
which is different from memory holding any particular value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, overload

from hexdiff.constants import MAX_ADDRESS, MAX_VALUE, WORD_STRIDE
from hexdiff.exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class MemoryWord:
    """One 32-bit word of memory content.

    Parameters
    ----------
    address : int
        Byte offset of the word; a multiple of ``WORD_STRIDE``.
    value : int
        Unsigned 32-bit word value.

    """

    address: int
    value: int

    def __post_init__(self) -> None:
        """Reject addresses and values that do not fit the word layout."""
        if not 0 <= self.address <= MAX_ADDRESS:
            raise ValidationError(
                f"Address out of range: {self.address:#x}", parameter_name="address", parameter_value=self.address
            )
        if self.address % WORD_STRIDE:
            raise ValidationError(
                f"Address {self.address:#x} is not aligned to {WORD_STRIDE} bytes",
                parameter_name="address",
                parameter_value=self.address,
            )
        if not 0 <= self.value <= MAX_VALUE:
            raise ValidationError(
                f"Word value out of range at {self.address:#x}: {self.value:#x}",
                parameter_name="value",
                parameter_value=self.value,
            )


class MemorySequence:
    """Immutable, address-ordered sequence of memory words.

    Addresses are strictly increasing, so every address appears at most
    once. The ordering is checked on construction; use :meth:`from_words`
    when the input is not already sorted.

    Parameters
    ----------
    words : iterable of MemoryWord
        Words in strictly increasing address order.

    Raises
    ------
    ValidationError
        If the words are out of order or repeat an address.

    """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[MemoryWord] = ()) -> None:
        """Store the words after checking their ordering."""
        self._words: tuple[MemoryWord, ...] = tuple(words)
        for previous, current in zip(self._words, self._words[1:]):
            if current.address <= previous.address:
                raise ValidationError(
                    f"Memory words must be strictly increasing by address: "
                    f"{current.address:#x} follows {previous.address:#x}",
                    parameter_name="words",
                    parameter_value=current.address,
                )

    @classmethod
    def from_words(cls, words: Iterable[MemoryWord]) -> MemorySequence:
        """Build a sequence from words in any order.

        Duplicate addresses are still rejected.
        """
        return cls(sorted(words, key=lambda word: word.address))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> MemorySequence:
        """Build a sequence from ``(address, value)`` tuples in address order."""
        return cls(MemoryWord(address, value) for address, value in pairs)

    @property
    def max_address(self) -> int | None:
        """Address of the last word, or None for an empty sequence."""
        return self._words[-1].address if self._words else None

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[MemoryWord]:
        return iter(self._words)

    @overload
    def __getitem__(self, index: int) -> MemoryWord: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[MemoryWord, ...]: ...

    def __getitem__(self, index: int | slice) -> MemoryWord | tuple[MemoryWord, ...]:
        return self._words[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemorySequence):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        return f"MemorySequence({len(self._words)} words)"

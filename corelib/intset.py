"""Bitmap-backed sets of non-negative integers."""

from __future__ import annotations

from typing import Iterable, Iterator

from corelib.errors import ArgumentError, InvalidOperationError


def _iter_bits(bits: int) -> Iterator[int]:
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


class IntSet:
    """Set of small non-negative integers stored in 32-bit words.

    The set remembers how many words it holds; equality takes that
    capacity into account.
    """

    _WORD_BITS = 32

    __slots__ = ("_bits", "_words")

    def __init__(self, max_value: int = 0) -> None:
        self._bits = 0
        self._words = 0
        self.set_max(max_value)

    @classmethod
    def _make(cls, bits: int, words: int) -> "IntSet":
        result = cls()
        result._words = words
        result._bits = bits & ((1 << (words * cls._WORD_BITS)) - 1)
        return result

    def size(self) -> int:
        """Number of values the current words can hold."""
        return self._words * self._WORD_BITS

    def set_max(self, value: int) -> None:
        """Resize to hold ``value`` distinct values and empty the set."""
        self.resize(value)
        self.clear()

    def resize(self, size: int) -> None:
        """Resize to hold ``size`` values, dropping members beyond it."""
        if size < 0:
            raise ArgumentError("IntSet size cannot be negative.")
        self._words = (size + self._WORD_BITS - 1) // self._WORD_BITS
        self._bits &= (1 << self.size()) - 1

    def clear(self) -> None:
        self._bits = 0

    def add(self, value: int) -> None:
        if value < 0:
            raise ArgumentError("IntSet does not support negative values.")
        word = value // self._WORD_BITS
        if word >= self._words:
            self._words = word + 1
        self._bits |= 1 << value

    def remove(self, value: int) -> None:
        """Remove ``value`` if present; values outside the set are ignored."""
        if 0 <= value < self.size():
            self._bits &= ~(1 << value)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int) or value < 0:
            return False
        return value < self.size() and (self._bits >> value) & 1 == 1

    def __iter__(self) -> Iterator[int]:
        return _iter_bits(self._bits)

    def union_with(self, other: "IntSet") -> None:
        self._bits |= other._bits
        self._words = max(self._words, other._words)

    def intersect_with(self, other: "IntSet") -> None:
        self._bits &= other._bits

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntSet):
            return NotImplemented
        return self._words == other._words and self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]

    @staticmethod
    def union(set1: "IntSet", set2: "IntSet") -> "IntSet":
        return IntSet._make(set1._bits | set2._bits, max(set1._words, set2._words))

    @staticmethod
    def intersect(set1: "IntSet", set2: "IntSet") -> "IntSet":
        return IntSet._make(set1._bits & set2._bits, min(set1._words, set2._words))

    @staticmethod
    def subtract(set1: "IntSet", set2: "IntSet") -> "IntSet":
        """Members of ``set1`` not in ``set2``, within the words both share.

        The result keeps the capacity of ``set1``.
        """
        shared = min(set1._words, set2._words) * IntSet._WORD_BITS
        bits = (set1._bits & ~set2._bits) & ((1 << shared) - 1)
        return IntSet._make(bits, set1._words)

    @staticmethod
    def has_intersection(set1: "IntSet", set2: "IntSet") -> bool:
        return (set1._bits & set2._bits) != 0

    def __repr__(self) -> str:
        return f"IntSet(size={self.size()}, values={list(self)})"


class BitIntSet:
    """Set of non-negative integers stored in 64-bit words.

    Equality ignores capacity: two sets are equal when they hold the same
    members.
    """

    _WORD_BITS = 64

    __slots__ = ("_bits", "_words")

    def __init__(self, universe_size: int = 0) -> None:
        self._bits = 0
        self._words = 0
        self.resize(universe_size)

    def _copy(self) -> "BitIntSet":
        result = BitIntSet()
        result._bits = self._bits
        result._words = self._words
        return result

    def universe_size(self) -> int:
        """Number of values the current words can hold."""
        return self._words * self._WORD_BITS

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __bool__(self) -> bool:
        return self._bits != 0

    def resize(self, universe_size: int) -> None:
        if universe_size < 0:
            raise InvalidOperationError("BitIntSet universe size cannot be negative.")
        self._words = (universe_size + self._WORD_BITS - 1) // self._WORD_BITS
        self._bits &= (1 << self.universe_size()) - 1

    def set_max(self, universe_size: int) -> None:
        self.resize(universe_size)
        self.clear()

    def clear(self) -> None:
        self._bits = 0

    def add(self, value: int) -> None:
        if value < 0:
            raise InvalidOperationError("BitIntSet does not support negative values.")
        word = value // self._WORD_BITS
        if word >= self._words:
            self._words = word + 1
        self._bits |= 1 << value

    def discard(self, value: int) -> None:
        if 0 <= value < self.universe_size():
            self._bits &= ~(1 << value)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int) or value < 0:
            return False
        return value < self.universe_size() and (self._bits >> value) & 1 == 1

    def union_with(self, other: "BitIntSet | IntSet") -> None:
        if isinstance(other, IntSet):
            for value in other:
                self.add(value)
            return
        self._bits |= other._bits
        self._words = max(self._words, other._words)

    def intersect_with(self, other: "BitIntSet | IntSet") -> None:
        self._bits &= other._bits

    def subtract(self, other: "BitIntSet") -> None:
        self._bits &= ~other._bits

    def has_intersection(self, other: "BitIntSet") -> bool:
        return (self._bits & other._bits) != 0

    def values(self) -> list[int]:
        """Members in ascending order."""
        return list(_iter_bits(self._bits))

    def __iter__(self) -> Iterator[int]:
        return _iter_bits(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitIntSet):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]

    @staticmethod
    def make_union(left: "BitIntSet", right: "BitIntSet") -> "BitIntSet":
        result = left._copy()
        result.union_with(right)
        return result

    @staticmethod
    def make_intersection(left: "BitIntSet", right: "BitIntSet") -> "BitIntSet":
        result = left._copy()
        result.intersect_with(right)
        return result

    @staticmethod
    def make_subtraction(left: "BitIntSet", right: "BitIntSet") -> "BitIntSet":
        result = left._copy()
        result.subtract(right)
        return result

    @classmethod
    def _from_values(cls, values: Iterable[int]) -> "BitIntSet":
        result = cls()
        for value in values:
            result.add(value)
        return result

    def __repr__(self) -> str:
        return f"BitIntSet(universe_size={self.universe_size()}, values={self.values()})"
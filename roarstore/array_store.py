"""A container holding 16-bit values as a sorted list."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Callable, Iterable, Iterator, List, Optional

from . import merge
from .bitmap_store import BITMAP_LENGTH, WORD_BITS, BitmapStore
from .errors import ArrayErrorKind, ArrayStoreError

_U16_MAX = 0xFFFF


def _check_index(index: int) -> int:
    if not 0 <= index <= _U16_MAX:
        raise ValueError(f"{index} is not a 16-bit unsigned integer")
    return index


class ArrayStore:
    """A sparse set of 16-bit values kept as a strictly increasing list."""

    __slots__ = ("_vec",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._vec: List[int] = []

    @classmethod
    def _wrap(cls, values: List[int]) -> "ArrayStore":
        store = cls()
        store._vec = values
        return store

    @classmethod
    def from_sorted(cls, values: Iterable[int]) -> "ArrayStore":
        """Build a store from strictly increasing values, checking that they are."""
        vec = list(values)
        for value in vec:
            _check_index(value)
        for index, (prev, cur) in enumerate(zip(vec, vec[1:]), start=1):
            if cur < prev:
                raise ArrayStoreError(index, ArrayErrorKind.OUT_OF_ORDER)
            if cur == prev:
                raise ArrayStoreError(index, ArrayErrorKind.DUPLICATE)
        return cls._wrap(vec)

    @classmethod
    def from_sorted_unchecked(cls, values: Iterable[int]) -> "ArrayStore":
        """Build a store from values the caller guarantees are strictly increasing."""
        return cls._wrap(list(values))

    @classmethod
    def from_bitmap_store(cls, bits: BitmapStore) -> "ArrayStore":
        """Build a store holding the same values as a bitmap store."""
        return cls._wrap(list(bits))

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was new."""
        _check_index(index)
        pos = bisect_left(self._vec, index)
        if pos < len(self._vec) and self._vec[pos] == index:
            return False
        self._vec.insert(pos, index)
        return True

    def _span(self, start: int, end: int) -> tuple:
        return bisect_left(self._vec, start), bisect_right(self._vec, end)

    def insert_range(self, start: int, end: int) -> int:
        """Add every value of ``start..=end``; return how many were new."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        pos_start, pos_end = self._span(start, end)
        dropped = pos_end - pos_start
        self._vec[pos_start:pos_end] = range(start, end + 1)
        return end - start + 1 - dropped

    def push(self, index: int) -> bool:
        """Append ``index`` only if it is greater than every value held."""
        _check_index(index)
        if not self._vec or self._vec[-1] < index:
            self._vec.append(index)
            return True
        return False

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        _check_index(index)
        pos = bisect_left(self._vec, index)
        if pos < len(self._vec) and self._vec[pos] == index:
            del self._vec[pos]
            return True
        return False

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value of ``start..=end``; return how many were present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        pos_start, pos_end = self._span(start, end)
        del self._vec[pos_start:pos_end]
        return pos_end - pos_start

    def contains(self, index: int) -> bool:
        _check_index(index)
        pos = bisect_left(self._vec, index)
        return pos < len(self._vec) and self._vec[pos] == index

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int) or not 0 <= index <= _U16_MAX:
            return False
        return self.contains(index)

    def contains_range(self, start: int, end: int) -> bool:
        """Whether every value of ``start..=end`` is held."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return True
        count = end - start + 1
        if len(self._vec) < count:
            return False
        pos = bisect_left(self._vec, start)
        if pos >= len(self._vec) or self._vec[pos] != start:
            return False
        last = pos + count - 1
        return last < len(self._vec) and self._vec[last] == end

    def is_disjoint(self, other: "ArrayStore") -> bool:
        return set(self._vec).isdisjoint(other._vec)

    def is_subset(self, other: "ArrayStore") -> bool:
        return len(self._vec) <= len(other._vec) and set(self._vec).issubset(other._vec)

    def intersection_len(self, other: "ArrayStore") -> int:
        return merge.intersection_len(self._vec, other._vec)

    def to_bitmap_store(self) -> BitmapStore:
        """A bitmap store holding the same values."""
        words = [0] * BITMAP_LENGTH
        for value in self._vec:
            key, bit = divmod(value, WORD_BITS)
            words[key] |= 1 << bit
        return BitmapStore.from_words_unchecked(len(self._vec), words)

    def __len__(self) -> int:
        return len(self._vec)

    def min(self) -> Optional[int]:
        return self._vec[0] if self._vec else None

    def max(self) -> Optional[int]:
        return self._vec[-1] if self._vec else None

    def rank(self, index: int) -> int:
        """Number of held values less than or equal to ``index``."""
        _check_index(index)
        return bisect_right(self._vec, index)

    def select(self, n: int) -> Optional[int]:
        """The ``n``-th smallest held value, counting from zero."""
        if n < 0:
            raise ValueError(f"{n} is negative")
        return self._vec[n] if n < len(self._vec) else None

    def values(self) -> List[int]:
        """A copy of the held values in increasing order."""
        return list(self._vec)

    def copy(self) -> "ArrayStore":
        return self._wrap(list(self._vec))

    def retain(self, predicate: Callable[[int], bool]) -> None:
        """Keep only the values for which ``predicate`` is true."""
        self._vec = [value for value in self._vec if predicate(value)]

    def __iter__(self) -> Iterator[int]:
        return iter(self._vec)

    def __reversed__(self) -> Iterator[int]:
        return reversed(self._vec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._vec == other._vec

    def __repr__(self) -> str:
        return f"ArrayStore({self._vec!r})"

    def __or__(self, other: "ArrayStore") -> "ArrayStore":
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._wrap(merge.union(self._vec, other._vec))

    def __and__(self, other: "ArrayStore") -> "ArrayStore":
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._wrap(merge.intersection(self._vec, other._vec))

    def __iand__(self, other: object) -> "ArrayStore":
        if isinstance(other, ArrayStore):
            self._vec = merge.intersection(self._vec, other._vec)
        elif isinstance(other, BitmapStore):
            self.retain(other.contains)
        else:
            return NotImplemented
        return self

    def __sub__(self, other: "ArrayStore") -> "ArrayStore":
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._wrap(merge.difference(self._vec, other._vec))

    def __isub__(self, other: object) -> "ArrayStore":
        if isinstance(other, ArrayStore):
            self._vec = merge.difference(self._vec, other._vec)
        elif isinstance(other, BitmapStore):
            self.retain(lambda value: not other.contains(value))
        else:
            return NotImplemented
        return self

    def __xor__(self, other: "ArrayStore") -> "ArrayStore":
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._wrap(merge.symmetric_difference(self._vec, other._vec))
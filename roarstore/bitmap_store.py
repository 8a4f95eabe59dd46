"""A container holding 16-bit values as a fixed array of 64-bit words."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import CardinalityError

BITMAP_LENGTH = 1024
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
CAPACITY = BITMAP_LENGTH * WORD_BITS
_U16_MAX = 0xFFFF


def _check_index(index: int) -> int:
    if not 0 <= index <= _U16_MAX:
        raise ValueError(f"{index} is not a 16-bit unsigned integer")
    return index


def _bits_mask(low: int, high: int) -> int:
    """Mask with bits ``low`` through ``high`` (inclusive) set."""
    return ((1 << (high + 1)) - 1) & ~((1 << low) - 1)


def _word_spans(start: int, end: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(word index, mask)`` pairs covering ``start..=end``."""
    start_key, start_bit = divmod(start, WORD_BITS)
    end_key, end_bit = divmod(end, WORD_BITS)
    for key in range(start_key, end_key + 1):
        low = start_bit if key == start_key else 0
        high = end_bit if key == end_key else WORD_BITS - 1
        yield key, _bits_mask(low, high)


def _iter_word(base: int, word: int) -> Iterator[int]:
    while word:
        lowest = word & -word
        yield base + lowest.bit_length() - 1
        word ^= lowest


def _iter_word_reversed(base: int, word: int) -> Iterator[int]:
    while word:
        top = word.bit_length() - 1
        yield base + top
        word ^= 1 << top


class BitmapStore:
    """A dense set of 16-bit values backed by 1024 words of 64 bits."""

    __slots__ = ("_len", "_words")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._len = 0
        self._words: List[int] = [0] * BITMAP_LENGTH

    @classmethod
    def full(cls) -> "BitmapStore":
        """A store holding every 16-bit value."""
        store = cls()
        store._words = [WORD_MASK] * BITMAP_LENGTH
        store._len = CAPACITY
        return store

    @staticmethod
    def _checked_words(words: Iterable[int]) -> List[int]:
        values = list(words)
        if len(values) != BITMAP_LENGTH:
            raise ValueError(
                f"expected {BITMAP_LENGTH} words, got {len(values)}"
            )
        for word in values:
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"{word} is not a 64-bit unsigned integer")
        return values

    @classmethod
    def from_words(cls, length: int, words: Iterable[int]) -> "BitmapStore":
        """Build a store from its words, checking that ``length`` matches them."""
        values = cls._checked_words(words)
        actual = sum(word.bit_count() for word in values)
        if length != actual:
            raise CardinalityError(length, actual)
        store = cls()
        store._words = values
        store._len = length
        return store

    @classmethod
    def from_words_unchecked(cls, length: int, words: Iterable[int]) -> "BitmapStore":
        """Build a store from its words, trusting ``length`` to be their popcount."""
        store = cls()
        store._words = cls._checked_words(words)
        store._len = length
        return store

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was new."""
        key, bit = divmod(_check_index(index), WORD_BITS)
        flag = 1 << bit
        if self._words[key] & flag:
            return False
        self._words[key] |= flag
        self._len += 1
        return True

    def insert_range(self, start: int, end: int) -> int:
        """Add every value of ``start..=end``; return how many were new."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        existed = 0
        for key, mask in _word_spans(start, end):
            existed += (self._words[key] & mask).bit_count()
            self._words[key] |= mask
        inserted = end - start + 1 - existed
        self._len += inserted
        return inserted

    def push(self, index: int) -> bool:
        """Add ``index`` only if it is greater than every value held."""
        _check_index(index)
        current = self.max()
        if current is None or current < index:
            self.insert(index)
            return True
        return False

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        key, bit = divmod(_check_index(index), WORD_BITS)
        flag = 1 << bit
        if not self._words[key] & flag:
            return False
        self._words[key] &= ~flag
        self._len -= 1
        return True

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value of ``start..=end``; return how many were present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        removed = 0
        for key, mask in _word_spans(start, end):
            removed += (self._words[key] & mask).bit_count()
            self._words[key] &= ~mask
        self._len -= removed
        return removed

    def contains(self, index: int) -> bool:
        key, bit = divmod(_check_index(index), WORD_BITS)
        return bool(self._words[key] >> bit & 1)

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
        if self._len < end - start + 1:
            return False
        return all(
            self._words[key] & mask == mask for key, mask in _word_spans(start, end)
        )

    def is_disjoint(self, other: "BitmapStore") -> bool:
        return not any(a & b for a, b in zip(self._words, other._words))

    def is_subset(self, other: "BitmapStore") -> bool:
        return all(a & b == a for a, b in zip(self._words, other._words))

    def __len__(self) -> int:
        return self._len

    def min(self) -> Optional[int]:
        for key, word in enumerate(self._words):
            if word:
                return key * WORD_BITS + (word & -word).bit_length() - 1
        return None

    def max(self) -> Optional[int]:
        for key in range(BITMAP_LENGTH - 1, -1, -1):
            word = self._words[key]
            if word:
                return key * WORD_BITS + word.bit_length() - 1
        return None

    def rank(self, index: int) -> int:
        """Number of held values less than or equal to ``index``."""
        key, bit = divmod(_check_index(index), WORD_BITS)
        below = sum(word.bit_count() for word in self._words[:key])
        return below + (self._words[key] & _bits_mask(0, bit)).bit_count()

    def select(self, n: int) -> Optional[int]:
        """The ``n``-th smallest held value, counting from zero."""
        if n < 0:
            raise ValueError(f"{n} is negative")
        for key, word in enumerate(self._words):
            count = word.bit_count()
            if n < count:
                for _ in range(n):
                    word &= word - 1
                return key * WORD_BITS + (word & -word).bit_length() - 1
            n -= count
        return None

    def intersection_len_bitmap(self, other: "BitmapStore") -> int:
        return sum((a & b).bit_count() for a, b in zip(self._words, other._words))

    def intersection_len_array(self, other: Iterable[int]) -> int:
        return sum(1 for index in other if self.contains(index))

    def words(self) -> Tuple[int, ...]:
        """The 1024 words, least significant values first."""
        return tuple(self._words)

    def copy(self) -> "BitmapStore":
        store = BitmapStore()
        store._words = list(self._words)
        store._len = self._len
        return store

    def __iter__(self) -> Iterator[int]:
        for key, word in enumerate(self._words):
            if word:
                yield from _iter_word(key * WORD_BITS, word)

    def __reversed__(self) -> Iterator[int]:
        for key in range(BITMAP_LENGTH - 1, -1, -1):
            word = self._words[key]
            if word:
                yield from _iter_word_reversed(key * WORD_BITS, word)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitmapStore):
            return NotImplemented
        return self._len == other._len and self._words == other._words

    def __repr__(self) -> str:
        return f"BitmapStore(len={self._len})"

    def _combine(self, other: "BitmapStore", op) -> None:
        self._words = [op(a, b) for a, b in zip(self._words, other._words)]
        self._len = sum(word.bit_count() for word in self._words)

    def __ior__(self, other: Iterable[int]) -> "BitmapStore":
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a | b)
        else:
            for index in other:
                self.insert(index)
        return self

    def __iand__(self, other: "BitmapStore") -> "BitmapStore":
        if not isinstance(other, BitmapStore):
            return NotImplemented
        self._combine(other, lambda a, b: a & b)
        return self

    def __isub__(self, other: Iterable[int]) -> "BitmapStore":
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a & ~b & WORD_MASK)
        else:
            for index in other:
                self.remove(index)
        return self

    def __ixor__(self, other: Iterable[int]) -> "BitmapStore":
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a ^ b)
        else:
            for index in other:
                key, bit = divmod(_check_index(index), WORD_BITS)
                flag = 1 << bit
                self._len += -1 if self._words[key] & flag else 1
                self._words[key] ^= flag
        return self


def from_values(values: Sequence[int]) -> BitmapStore:
    """Build a bitmap store holding ``values``."""
    store = BitmapStore()
    store |= values
    return store
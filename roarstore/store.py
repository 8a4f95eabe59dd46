"""A 16-bit container that holds its values either as a sorted list or as bits."""

from __future__ import annotations

from typing import Iterator, Optional, Union

from .array_store import ArrayStore
from .bitmap_store import CAPACITY, BitmapStore

Inner = Union[ArrayStore, BitmapStore]


class Store:
    """A set of 16-bit values backed by an array store or a bitmap store."""

    __slots__ = ("_inner",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, inner: Optional[Inner] = None) -> None:
        if inner is None:
            inner = ArrayStore()
        if not isinstance(inner, (ArrayStore, BitmapStore)):
            raise TypeError(f"cannot build a store from {type(inner).__name__}")
        self._inner: Inner = inner

    @classmethod
    def new(cls) -> "Store":
        """An empty store kept as a sorted list."""
        return cls(ArrayStore())

    @classmethod
    def full(cls) -> "Store":
        """A store holding every 16-bit value, kept as bits."""
        return cls(BitmapStore.full())

    @property
    def inner(self) -> Inner:
        """The underlying array or bitmap store."""
        return self._inner

    def is_bitmap(self) -> bool:
        """Whether the values are kept as bits rather than as a sorted list."""
        return isinstance(self._inner, BitmapStore)

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was new."""
        return self._inner.insert(index)

    def insert_range(self, start: int, end: int) -> int:
        """Add every value of ``start..=end``; return how many were new."""
        if start > end:
            return 0
        return self._inner.insert_range(start, end)

    def push(self, index: int) -> bool:
        """Add ``index`` only if it is greater than every value held."""
        return self._inner.push(index)

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        return self._inner.remove(index)

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value of ``start..=end``; return how many were present."""
        if start > end:
            return 0
        return self._inner.remove_range(start, end)

    def contains(self, index: int) -> bool:
        return self._inner.contains(index)

    def __contains__(self, index: object) -> bool:
        return index in self._inner

    def contains_range(self, start: int, end: int) -> bool:
        """Whether every value of ``start..=end`` is held."""
        return self._inner.contains_range(start, end)

    def is_full(self) -> bool:
        """Whether every 16-bit value is held."""
        return len(self._inner) == CAPACITY

    def is_disjoint(self, other: "Store") -> bool:
        lhs, rhs = self._inner, other._inner
        if type(lhs) is type(rhs):
            return lhs.is_disjoint(rhs)  # type: ignore[arg-type]
        array, bits = (lhs, rhs) if isinstance(lhs, ArrayStore) else (rhs, lhs)
        return not any(bits.contains(value) for value in array)

    def is_subset(self, other: "Store") -> bool:
        lhs, rhs = self._inner, other._inner
        if type(lhs) is type(rhs):
            return lhs.is_subset(rhs)  # type: ignore[arg-type]
        if isinstance(lhs, ArrayStore):
            return all(rhs.contains(value) for value in lhs)
        return False

    def intersection_len(self, other: "Store") -> int:
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            return lhs.intersection_len(rhs)
        if isinstance(lhs, BitmapStore) and isinstance(rhs, BitmapStore):
            return lhs.intersection_len_bitmap(rhs)
        if isinstance(lhs, BitmapStore):
            return lhs.intersection_len_array(rhs)
        return rhs.intersection_len_array(lhs)  # type: ignore[union-attr]

    def __len__(self) -> int:
        return len(self._inner)

    def min(self) -> Optional[int]:
        return self._inner.min()

    def max(self) -> Optional[int]:
        return self._inner.max()

    def rank(self, index: int) -> int:
        """Number of held values less than or equal to ``index``."""
        return self._inner.rank(index)

    def select(self, n: int) -> Optional[int]:
        """The ``n``-th smallest held value, counting from zero."""
        return self._inner.select(n)

    def to_bitmap(self) -> "Store":
        """A new store holding the same values as bits."""
        if isinstance(self._inner, ArrayStore):
            return Store(self._inner.to_bitmap_store())
        return Store(self._inner.copy())

    def to_array(self) -> "Store":
        """A new store holding the same values as a sorted list."""
        if isinstance(self._inner, BitmapStore):
            return Store(ArrayStore.from_bitmap_store(self._inner))
        return Store(self._inner.copy())

    def copy(self) -> "Store":
        return Store(self._inner.copy())

    def __iter__(self) -> Iterator[int]:
        return iter(self._inner)

    def __reversed__(self) -> Iterator[int]:
        return reversed(self._inner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Store):
            return NotImplemented
        if type(self._inner) is not type(other._inner):
            return False
        return self._inner == other._inner

    def __repr__(self) -> str:
        return f"Store({self._inner!r})"

    def __or__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            return Store(lhs | rhs)
        if isinstance(lhs, BitmapStore):
            result = lhs.copy()
            result |= rhs
            return Store(result)
        result = rhs.copy()
        result |= lhs  # type: ignore[operator]
        return Store(result)

    def __ior__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            self._inner = lhs | rhs
        elif isinstance(lhs, BitmapStore):
            lhs |= rhs
        else:
            result = rhs.copy()
            result |= lhs  # type: ignore[operator]
            self._inner = result
        return self

    def __and__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            return Store(lhs & rhs)
        if isinstance(lhs, BitmapStore) and isinstance(rhs, ArrayStore):
            result = rhs.copy()
            result &= lhs
            return Store(result)
        result = lhs.copy()
        result &= rhs  # type: ignore[operator]
        return Store(result)

    def __iand__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, BitmapStore) and isinstance(rhs, ArrayStore):
            result = rhs.copy()
            result &= lhs
            self._inner = result
        else:
            lhs &= rhs  # type: ignore[operator]
        return self

    def __sub__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            return Store(lhs - rhs)
        result = lhs.copy()
        result -= rhs  # type: ignore[operator]
        return Store(result)

    def __isub__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs = self._inner
        lhs -= other._inner  # type: ignore[operator]
        return self

    def __xor__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            return Store(lhs ^ rhs)
        if isinstance(lhs, ArrayStore):
            result = rhs.copy()
            result ^= lhs  # type: ignore[operator]
            return Store(result)
        result = lhs.copy()
        result ^= rhs
        return Store(result)

    def __ixor__(self, other: "Store") -> "Store":
        if not isinstance(other, Store):
            return NotImplemented
        lhs, rhs = self._inner, other._inner
        if isinstance(lhs, ArrayStore) and isinstance(rhs, ArrayStore):
            self._inner = lhs ^ rhs
        elif isinstance(lhs, BitmapStore):
            lhs ^= rhs
        else:
            result = rhs.copy()
            result ^= lhs  # type: ignore[operator]
            self._inner = result
        return self
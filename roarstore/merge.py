"""Set operations over strictly increasing sequences of integers."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

_END = object()


def _walk(lhs: Iterable[int], rhs: Iterable[int]) -> Iterator[Tuple[int, bool, bool]]:
    """Merge two sorted sequences, yielding each value with where it was found."""
    left = iter(lhs)
    right = iter(rhs)
    a = next(left, _END)
    b = next(right, _END)
    while a is not _END and b is not _END:
        if a < b:
            yield a, True, False
            a = next(left, _END)
        elif a > b:
            yield b, False, True
            b = next(right, _END)
        else:
            yield a, True, True
            a = next(left, _END)
            b = next(right, _END)
    if a is not _END:
        yield a, True, False
        yield from ((value, True, False) for value in left)
    if b is not _END:
        yield b, False, True
        yield from ((value, False, True) for value in right)


def union(lhs: Iterable[int], rhs: Iterable[int]) -> List[int]:
    """Values found in either sequence."""
    return [value for value, _, _ in _walk(lhs, rhs)]


def intersection(lhs: Iterable[int], rhs: Iterable[int]) -> List[int]:
    """Values found in both sequences."""
    return [value for value, in_l, in_r in _walk(lhs, rhs) if in_l and in_r]


def difference(lhs: Iterable[int], rhs: Iterable[int]) -> List[int]:
    """Values of the left sequence that are not in the right one."""
    return [value for value, in_l, in_r in _walk(lhs, rhs) if in_l and not in_r]


def symmetric_difference(lhs: Iterable[int], rhs: Iterable[int]) -> List[int]:
    """Values found in exactly one of the sequences."""
    return [value for value, in_l, in_r in _walk(lhs, rhs) if in_l != in_r]


def intersection_len(lhs: Iterable[int], rhs: Iterable[int]) -> int:
    """Number of values found in both sequences."""
    return sum(1 for _, in_l, in_r in _walk(lhs, rhs) if in_l and in_r)
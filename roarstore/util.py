"""Helpers for splitting 32-bit values and normalising ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

U16_MAX = 0xFFFF
U32_MAX = 0xFFFF_FFFF


@dataclass(frozen=True)
class Bound:
    """One end of a range, either included in or excluded from it."""

    value: int
    inclusive: bool

    @classmethod
    def included(cls, value: int) -> "Bound":
        return cls(value, True)

    @classmethod
    def excluded(cls, value: int) -> "Bound":
        return cls(value, False)


RangeEnd = Union[int, Bound, None]


def _check_u32(value: int) -> int:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{value} is not a 32-bit unsigned integer")
    return value


def _check_u16(value: int) -> int:
    if not 0 <= value <= U16_MAX:
        raise ValueError(f"{value} is not a 16-bit unsigned integer")
    return value


def split(value: int) -> Tuple[int, int]:
    """Return the container key and the index inside that container."""
    _check_u32(value)
    return value >> 16, value & U16_MAX


def join(high: int, low: int) -> int:
    """Rebuild the value from its container key and its index in the container."""
    return (_check_u16(high) << 16) + _check_u16(low)


def _as_bound(end: RangeEnd, plain_inclusive: bool) -> Optional[Bound]:
    if end is None:
        return None
    if isinstance(end, Bound):
        _check_u32(end.value)
        return end
    return Bound(_check_u32(end), plain_inclusive)


def convert_range_to_inclusive(
    start: RangeEnd = None, end: RangeEnd = None
) -> Optional[Tuple[int, int]]:
    """Turn a range into an inclusive ``(first, last)`` pair of 32-bit values.

    A plain integer start is included and a plain integer end is excluded, as
    with ``range``; ``None`` leaves that side unbounded. Returns ``None`` when
    the range holds no value.
    """
    lower = _as_bound(start, True)
    upper = _as_bound(end, False)

    if lower is None:
        first = 0
    elif lower.inclusive:
        first = lower.value
    else:
        if lower.value == U32_MAX:
            return None
        first = lower.value + 1

    if upper is None:
        last = U32_MAX
    elif upper.inclusive:
        last = upper.value
    else:
        if upper.value == 0:
            return None
        last = upper.value - 1

    if last < first:
        return None
    return first, last
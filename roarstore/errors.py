"""Exceptions raised when input values break the stores' invariants."""

from __future__ import annotations

from enum import Enum


class NonSortedIntegers(ValueError):
    """Raised when values that must be sorted are not."""

    def __init__(self, valid_until: int) -> None:
        super().__init__(valid_until)
        self.valid_until = valid_until

    def __str__(self) -> str:
        return f"integers are ordered up to the {self.valid_until}th element"


class CardinalityError(ValueError):
    """Raised when a declared cardinality does not match the bits given."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"Expected cardinality was {self.expected} but was {self.actual}"


class ArrayErrorKind(Enum):
    """Why a list of values cannot form an array store."""

    DUPLICATE = "duplicate"
    OUT_OF_ORDER = "out_of_order"


class ArrayStoreError(ValueError):
    """Raised when values for an array store are not strictly increasing."""

    def __init__(self, index: int, kind: ArrayErrorKind) -> None:
        super().__init__(index, kind)
        self.index = index
        self.kind = kind

    def __str__(self) -> str:
        if self.kind is ArrayErrorKind.DUPLICATE:
            return f"Duplicate element found at index: {self.index}"
        return f"An element was out of order at index: {self.index}"
from roarstore.errors import (
    ArrayErrorKind,
    ArrayStoreError,
    CardinalityError,
    NonSortedIntegers,
)


def test_non_sorted_integers_message_and_value():
    err = NonSortedIntegers(5)
    assert err.valid_until == 5
    assert str(err) == "integers are ordered up to the 5th element"


def test_non_sorted_integers_is_value_error():
    err = NonSortedIntegers(3)
    assert isinstance(err, ValueError)
    assert err.valid_until == 3
    assert str(err) == "integers are ordered up to the 3th element"


def test_cardinality_error_message():
    err = CardinalityError(10, 12)
    assert (err.expected, err.actual) == (10, 12)
    assert str(err) == "Expected cardinality was 10 but was 12"


def test_array_store_error_duplicate():
    err = ArrayStoreError(4, ArrayErrorKind.DUPLICATE)
    assert err.index == 4
    assert err.kind is ArrayErrorKind.DUPLICATE
    assert str(err) == "Duplicate element found at index: 4"


def test_array_store_error_out_of_order():
    err = ArrayStoreError(9, ArrayErrorKind.OUT_OF_ORDER)
    assert str(err) == "An element was out of order at index: 9"


def test_array_store_error_caught_as_value_error():
    err = ArrayStoreError(2, ArrayErrorKind.DUPLICATE)
    assert isinstance(err, ValueError)
    assert err.index == 2
    assert str(err) == "Duplicate element found at index: 2"
import pytest
from hypothesis import given
from hypothesis import strategies as st

from roarstore.bitmap_store import BitmapStore, from_values
from roarstore.errors import CardinalityError

u16 = st.integers(min_value=0, max_value=0xFFFF)
u16_sets = st.sets(u16, max_size=300)


def make(values):
    store = BitmapStore()
    for value in values:
        store.insert(value)
    return store


def test_new_store_is_empty():
    store = BitmapStore()
    assert len(store) == 0
    assert store.min() is None
    assert store.max() is None
    assert list(store) == []


def test_full_store_holds_every_value():
    store = BitmapStore.full()
    assert len(store) == 65536
    assert store.min() == 0
    assert store.max() == 0xFFFF
    assert store.contains_range(0, 0xFFFF)


def test_insert_and_remove_report_changes():
    store = BitmapStore()
    assert store.insert(5) is True
    assert store.insert(5) is False
    assert 5 in store
    assert len(store) == 1
    assert store.remove(5) is True
    assert store.remove(5) is False
    assert 5 not in store
    assert len(store) == 0


def test_insert_zero_sets_lowest_bit():
    store = BitmapStore()
    store.insert(0)
    assert store.words()[0] == 1
    assert len(store.words()) == 1024


def test_out_of_range_index_rejected():
    store = BitmapStore()
    with pytest.raises(ValueError):
        store.insert(0x10000)
    with pytest.raises(ValueError):
        store.contains(-1)
    assert 0x10000 not in store


def test_insert_range_same_key_overlap():
    store = make([1, 2, 3, 62, 63])
    assert store.insert_range(1, 62) == 58
    assert list(store) == list(range(1, 64))


def test_insert_range_across_words():
    store = make([1, 2, 130])
    assert store.insert_range(4, 128) == 125
    assert list(store) == [1, 2] + list(range(4, 129)) + [130]


def test_insert_range_left_overlap():
    store = make([1, 2, 130])
    assert store.insert_range(1, 128) == 126
    assert list(store) == list(range(1, 129)) + [130]


def test_insert_range_right_overlap():
    store = make([1, 2, 130])
    assert store.insert_range(4, 132) == 128
    assert list(store) == [1, 2] + list(range(4, 133))


def test_insert_range_full_overlap():
    store = make([1, 2, 130])
    assert store.insert_range(1, 134) == 131
    assert list(store) == list(range(1, 135))


def test_insert_invalid_range_is_noop():
    store = make([1, 2, 8, 9])
    assert store.insert_range(6, 1) == 0
    assert list(store) == [1, 2, 8, 9]


@given(u16_sets, u16, u16)
def test_remove_range_matches_set(values, a, b):
    start, end = min(a, b), max(a, b)
    store = make(values)
    removed = store.remove_range(start, end)
    expected = {v for v in values if not start <= v <= end}
    assert removed == len(values) - len(expected)
    assert list(store) == sorted(expected)
    assert len(store) == len(expected)


@given(u16_sets, u16, u16)
def test_insert_range_then_contains_range(values, a, b):
    start, end = min(a, b), max(a, b)
    store = make(values)
    before = len(store)
    inserted = store.insert_range(start, end)
    assert len(store) == before + inserted
    assert store.contains_range(start, end)


def test_contains_range_detects_gap():
    store = BitmapStore()
    store.insert_range(10, 200)
    assert store.contains_range(10, 200)
    assert not store.contains_range(9, 200)
    assert not store.contains_range(10, 201)
    store.remove(100)
    assert not store.contains_range(10, 200)
    assert store.contains_range(101, 200)


def test_push_only_appends_larger_values():
    store = BitmapStore()
    assert store.push(10) is True
    assert store.push(5) is False
    assert store.push(10) is False
    assert store.push(4000) is True
    assert list(store) == [10, 4000]


@given(u16_sets)
def test_iteration_is_sorted_and_reversible(values):
    store = make(values)
    assert list(store) == sorted(values)
    assert list(reversed(store)) == sorted(values, reverse=True)
    assert len(store) == len(values)


@given(u16_sets)
def test_min_max(values):
    store = make(values)
    assert store.min() == (min(values) if values else None)
    assert store.max() == (max(values) if values else None)


@given(u16_sets, u16)
def test_rank_counts_values_at_or_below(values, index):
    store = make(values)
    assert store.rank(index) == sum(1 for v in values if v <= index)


@given(u16_sets)
def test_select_inverts_iteration(values):
    store = make(values)
    ordered = sorted(values)
    for n, value in enumerate(ordered):
        assert store.select(n) == value
        assert store.rank(value) == n + 1
    assert store.select(len(ordered)) is None


def test_from_words_checks_cardinality():
    words = [0] * 1024
    words[0] = 0b1011
    store = BitmapStore.from_words(3, words)
    assert list(store) == [0, 1, 3]
    with pytest.raises(CardinalityError) as info:
        BitmapStore.from_words(4, words)
    assert info.value.expected == 4
    assert info.value.actual == 3


def test_from_words_rejects_wrong_word_count():
    with pytest.raises(ValueError):
        BitmapStore.from_words(0, [0] * 10)


def test_from_words_unchecked_trusts_length():
    words = [0] * 1024
    words[1] = 1
    store = BitmapStore.from_words_unchecked(1, words)
    assert list(store) == [64]


@given(u16_sets)
def test_words_round_trip(values):
    store = make(values)
    rebuilt = BitmapStore.from_words(len(store), store.words())
    assert rebuilt == store


def test_copy_is_independent():
    store = make([1, 2, 3])
    other = store.copy()
    other.insert(4)
    assert list(store) == [1, 2, 3]
    assert list(other) == [1, 2, 3, 4]
    assert store != other


@given(u16_sets, u16_sets)
def test_bitmap_operations_match_sets(a, b):
    left, right = make(a), make(b)

    union = left.copy()
    union |= right
    assert list(union) == sorted(a | b)
    assert len(union) == len(a | b)

    inter = left.copy()
    inter &= right
    assert list(inter) == sorted(a & b)
    assert len(inter) == len(a & b)

    diff = left.copy()
    diff -= right
    assert list(diff) == sorted(a - b)
    assert len(diff) == len(a - b)

    sym = left.copy()
    sym ^= right
    assert list(sym) == sorted(a ^ b)
    assert len(sym) == len(a ^ b)


@given(u16_sets, u16_sets)
def test_operations_with_sorted_sequences(a, b):
    seq = sorted(b)

    union = make(a)
    union |= seq
    assert list(union) == sorted(a | b)

    diff = make(a)
    diff -= seq
    assert list(diff) == sorted(a - b)
    assert len(diff) == len(a - b)

    sym = make(a)
    sym ^= seq
    assert list(sym) == sorted(a ^ b)
    assert len(sym) == len(a ^ b)


def test_iand_rejects_plain_sequence():
    store = make([1, 2])
    with pytest.raises(TypeError):
        store &= [1]
    assert list(store) == [1, 2]
    assert len(store) == 2


@given(u16_sets, u16_sets)
def test_relations_and_intersection_len(a, b):
    left, right = make(a), make(b)
    assert left.is_disjoint(right) == a.isdisjoint(b)
    assert left.is_subset(right) == (a <= b)
    assert left.intersection_len_bitmap(right) == len(a & b)
    assert left.intersection_len_array(sorted(b)) == len(a & b)


def test_from_values_builds_store():
    store = from_values([7, 3, 9000])
    assert list(store) == [3, 7, 9000]
    assert store == make([3, 7, 9000])
    assert store != BitmapStore()
# roarstore

The building blocks of a Roaring bitmap, in pure Python: the 16-bit
containers that hold the low halves of 32-bit values, set operations between
them, and reading and writing the portable Roaring on-disk format.

## Installation

```
pip install roarstore
```

## Containers

A `roarstore.store.Store` holds a set of integers in `0..65535`. It keeps
either a sorted list (`roarstore.array_store.ArrayStore`) or 1024 words of
64 bits (`roarstore.bitmap_store.BitmapStore`), and its operations work
across both kinds. All range arguments are inclusive at both ends.

```python
from roarstore.store import Store

store = Store.new()
store.insert(7)
store.insert_range(100, 200)       # returns how many values were new
assert 150 in store
assert store.contains_range(100, 200)
assert store.rank(100) == 2         # values <= 100
assert store.select(0) == 7
assert list(reversed(store))[0] == 200

other = Store.full()
assert store.is_subset(other)
both = store & other
assert len(both) == len(store)
```

Other methods: `push` (append only a new maximum), `remove`, `remove_range`,
`min`, `max`, `is_full`, `is_disjoint`, `intersection_len`, `copy`,
`is_bitmap`, and `to_bitmap` / `to_array` to get a copy held the other way.
The `|`, `&`, `-` and `^` operators and their in-place forms are supported.
A store never changes its kind on its own: choosing between a list and a
bitmap is up to the caller.

The two kinds can also be used directly:

- `ArrayStore.from_sorted(values)` checks that the values are strictly
  increasing and raises `roarstore.errors.ArrayStoreError` (with an `index`
  and an `ArrayErrorKind` of `DUPLICATE` or `OUT_OF_ORDER`) when they are not.
- `BitmapStore.from_words(length, words)` takes the 1024 words and raises
  `roarstore.errors.CardinalityError` when `length` is not the number of set
  bits.

Both have `_unchecked` variants for trusted input.

`roarstore.merge` offers `union`, `intersection`, `difference`,
`symmetric_difference` and `intersection_len` over any two strictly
increasing sequences of integers.

## Working with 32-bit values

`roarstore.util.split` separates a 32-bit value into its container key and its
low 16 bits; `join` puts them back together. `convert_range_to_inclusive`
turns a range into an inclusive `(start, end)` pair, or `None` when the range
is empty. A plain integer start is included and a plain integer end is
excluded, as with `range`; `None` leaves a side unbounded, and `Bound`
values say explicitly whether an end is included.

```python
from roarstore.util import Bound, convert_range_to_inclusive, join, split

assert split(0x0001_0002) == (1, 2)
assert join(1, 2) == 0x0001_0002
assert convert_range_to_inclusive(1, 6) == (1, 5)
assert convert_range_to_inclusive(Bound.excluded(10), Bound.excluded(20)) == (11, 19)
assert convert_range_to_inclusive(5, 5) is None
```

## Serialization

`roarstore.serialization` writes a sequence of `(key, Store)` containers in the
portable Roaring format and reads it back as a list of such pairs.
`serialize` returns bytes and `serialize_into` writes to a binary stream;
`serialized_size` gives the length in advance. `deserialize` (bytes) and
`deserialize_from` (a stream) check that every container is well formed and
raise `DeserializationError` when it is not, or when the data ends early;
`deserialize_unchecked_from` skips the container checks for trusted input.

```python
from roarstore.serialization import deserialize, serialize, serialized_size
from roarstore.store import Store

low = Store.new()
low.insert_range(1, 3)
containers = [(0, low)]

data = serialize(containers)
assert len(data) == serialized_size(containers)
assert deserialize(data) == containers
```

Containers of up to 4096 values are read back as sorted lists, larger ones as
bitmaps. Run containers are not supported; input that uses them raises
`DeserializationError`.

## What this package does not do

There is no ready-made bitmap type over full 32-bit or 64-bit values: the
package provides the containers and the format, and keeping the containers
for each key (with `split` and `join`) is left to the caller. There is no
command-line tool.

## Running the tests

```
pip install "roarstore[test]"
pytest
```
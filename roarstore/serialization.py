"""Reading and writing containers in the portable Roaring on-disk format.

A bitmap is given here as its containers: an ordered sequence of
``(key, store)`` pairs, where ``key`` is the high 16 bits shared by the
values of ``store``.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Callable, Iterable, List, Sequence, Tuple

from .array_store import ArrayStore
from .bitmap_store import BITMAP_LENGTH, BitmapStore
from .store import Store

SERIAL_COOKIE_NO_RUNCONTAINER = 12346
SERIAL_COOKIE = 12347
ARRAY_LIMIT = 4096
_MAX_CONTAINERS = 0xFFFF + 1
_BITMAP_BYTES = BITMAP_LENGTH * 8

Container = Tuple[int, Store]


class DeserializationError(ValueError):
    """Raised when serialized data cannot be read back into containers."""


def _container_payload_size(store: Store) -> int:
    if store.is_bitmap():
        return _BITMAP_BYTES
    return len(store) * 2


def serialized_size(containers: Iterable[Container]) -> int:
    """Number of bytes that ``serialize`` produces for these containers."""
    return 8 + sum(8 + _container_payload_size(store) for _, store in containers)


def serialize(containers: Sequence[Container]) -> bytes:
    """Encode the containers in the portable format without run containers."""
    containers = list(containers)
    parts = [struct.pack("<II", SERIAL_COOKIE_NO_RUNCONTAINER, len(containers))]
    parts.extend(
        struct.pack("<HH", key, (len(store) - 1) & 0xFFFF) for key, store in containers
    )
    offset = 8 + 8 * len(containers)
    for _, store in containers:
        parts.append(struct.pack("<I", offset & 0xFFFF_FFFF))
        offset += _container_payload_size(store)
    for _, store in containers:
        inner = store.inner
        if isinstance(inner, BitmapStore):
            parts.append(struct.pack(f"<{BITMAP_LENGTH}Q", *inner.words()))
        else:
            values = inner.values()
            parts.append(struct.pack(f"<{len(values)}H", *values))
    return b"".join(parts)


def serialize_into(containers: Sequence[Container], writer: BinaryIO) -> None:
    """Write the encoded containers to a binary stream."""
    writer.write(serialize(containers))


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining:
        chunk = reader.read(remaining)
        if not chunk:
            raise DeserializationError(
                f"unexpected end of data: needed {size} bytes, got {size - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


ArrayBuilder = Callable[[List[int]], ArrayStore]
BitmapBuilder = Callable[[int, List[int]], BitmapStore]


def _deserialize(
    reader: BinaryIO, make_array: ArrayBuilder, make_bitmap: BitmapBuilder
) -> List[Container]:
    (cookie,) = struct.unpack("<I", _read_exact(reader, 4))
    if cookie == SERIAL_COOKIE_NO_RUNCONTAINER:
        (size,) = struct.unpack("<I", _read_exact(reader, 4))
    elif cookie & 0xFFFF == SERIAL_COOKIE:
        raise DeserializationError("run containers are unsupported")
    else:
        raise DeserializationError("unknown cookie value")

    if size > _MAX_CONTAINERS:
        raise DeserializationError("size is greater than supported")

    descriptions = struct.unpack(f"<{2 * size}H", _read_exact(reader, size * 4))
    _read_exact(reader, size * 4)  # offsets are not needed when reading into memory

    containers: List[Container] = []
    for key, stored_len in zip(descriptions[0::2], descriptions[1::2]):
        length = stored_len + 1
        try:
            if length <= ARRAY_LIMIT:
                values = list(struct.unpack(f"<{length}H", _read_exact(reader, length * 2)))
                inner = make_array(values)
            else:
                words = list(
                    struct.unpack(f"<{BITMAP_LENGTH}Q", _read_exact(reader, _BITMAP_BYTES))
                )
                inner = make_bitmap(length, words)
        except DeserializationError:
            raise
        except ValueError as error:
            raise DeserializationError(str(error)) from error
        containers.append((key, Store(inner)))
    return containers


def deserialize_from(reader: BinaryIO) -> List[Container]:
    """Read containers from a stream, checking that every store is valid."""
    return _deserialize(reader, ArrayStore.from_sorted, BitmapStore.from_words)


def deserialize_unchecked_from(reader: BinaryIO) -> List[Container]:
    """Read containers from a trusted stream without validating the stores."""
    return _deserialize(
        reader, ArrayStore.from_sorted_unchecked, BitmapStore.from_words_unchecked
    )


def deserialize(data: bytes) -> List[Container]:
    """Read containers from bytes, checking that every store is valid."""
    return deserialize_from(io.BytesIO(data))
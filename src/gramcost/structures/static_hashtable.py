"""Immutable int64 -> float32 hash table with a flat binary layout."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from ..errors import GramIOError

MAGIC = b"GCHT"
FORMAT_VERSION = 1
EMPTY_KEY = -1
MAX_LOAD_FACTOR = 0.5

# magic, version, capacity, size
_HEADER = struct.Struct("<4sIQQ")
_MASK64 = (1 << 64) - 1


def _mix(key: int) -> int:
    """splitmix64 finalizer over the unsigned 64-bit view of `key`."""
    x = key & _MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


def _capacity_for(size: int) -> int:
    capacity = 1
    while capacity * MAX_LOAD_FACTOR < max(size, 1):
        capacity <<= 1
    return capacity


class StaticHashTable:
    """Open-addressed table built once from a complete key/value set.

    Slots are probed linearly from `_mix(key) & (capacity - 1)`. Empty slots
    hold EMPTY_KEY, so -1 cannot be stored as a key.
    """

    def __init__(self, keys: np.ndarray, values: np.ndarray, size: int) -> None:
        capacity = len(keys)
        if capacity == 0 or capacity & (capacity - 1):
            raise ValueError(f"Capacity must be a power of two, got {capacity}")
        if len(values) != capacity:
            raise ValueError("Key and value slot arrays differ in length.")
        self._keys = keys.astype("<i8", copy=False)
        self._values = values.astype("<f4", copy=False)
        self._keys.setflags(write=False)
        self._values.setflags(write=False)
        self._mask = capacity - 1
        self._size = int(size)

    @classmethod
    def build(cls, keys: Iterable[int], values: Iterable[float]) -> "StaticHashTable":
        key_list = [int(k) for k in keys]
        value_list = [float(v) for v in values]
        if len(key_list) != len(value_list):
            raise ValueError(f"Got {len(key_list)} keys but {len(value_list)} values")

        capacity = _capacity_for(len(key_list))
        mask = capacity - 1
        slot_keys = np.full(capacity, EMPTY_KEY, dtype="<i8")
        slot_values = np.zeros(capacity, dtype="<f4")
        for key, value in zip(key_list, value_list):
            if key == EMPTY_KEY:
                raise ValueError(f"Key {EMPTY_KEY} is reserved for empty slots")
            slot = _mix(key) & mask
            while slot_keys[slot] != EMPTY_KEY:
                if slot_keys[slot] == key:
                    raise ValueError(f"Duplicate key: {key}")
                slot = (slot + 1) & mask
            slot_keys[slot] = key
            slot_values[slot] = value
        return cls(slot_keys, slot_values, len(key_list))

    @property
    def capacity(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return self._size

    def _slot(self, key: int) -> Optional[int]:
        if key == EMPTY_KEY:
            return None
        slot = _mix(key) & self._mask
        while True:
            current = int(self._keys[slot])
            if current == key:
                return slot
            if current == EMPTY_KEY:
                return None
            slot = (slot + 1) & self._mask

    def __contains__(self, key: int) -> bool:
        return self._slot(int(key)) is not None

    def get(self, key: int, default: Optional[float] = None) -> Optional[float]:
        slot = self._slot(int(key))
        if slot is None:
            return default
        return float(self._values[slot])

    def items(self) -> Iterator[Tuple[int, float]]:
        """Yield stored (key, value) pairs in ascending key order."""
        occupied = np.flatnonzero(self._keys != EMPTY_KEY)
        order = occupied[np.argsort(self._keys[occupied], kind="stable")]
        for slot in order:
            yield int(self._keys[slot]), float(self._values[slot])

    def to_bytes(self) -> bytes:
        header = _HEADER.pack(MAGIC, FORMAT_VERSION, self.capacity, self._size)
        return header + self._keys.tobytes() + self._values.tobytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "StaticHashTable":
        if len(data) < _HEADER.size:
            raise ValueError("Truncated static hash table header.")
        magic, version, capacity, size = _HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise ValueError(f"Bad static hash table magic: {magic!r}")
        if version != FORMAT_VERSION:
            raise ValueError(f"Unsupported static hash table version: {version}")
        keys_end = _HEADER.size + 8 * capacity
        values_end = keys_end + 4 * capacity
        if len(data) != values_end:
            raise ValueError(f"Expected {values_end} bytes, found {len(data)}")
        keys = np.frombuffer(data, dtype="<i8", count=capacity, offset=_HEADER.size)
        values = np.frombuffer(data, dtype="<f4", count=capacity, offset=keys_end)
        occupied = int(np.count_nonzero(keys != EMPTY_KEY))
        if occupied != size:
            raise ValueError(f"Header size {size} does not match {occupied} occupied slots")
        if occupied >= capacity:
            raise ValueError("Table has no empty slot; lookups would not terminate")
        return cls(keys.copy(), values.copy(), size)

    def save(self, path: str | Path) -> None:
        from ..artifacts.writer import write_artifact

        write_artifact(path, self.to_bytes())

    @classmethod
    def load(cls, path: str | Path) -> "StaticHashTable":
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise GramIOError(f"Unable to read bigram table ({exc.strerror})", path) from exc
        try:
            return cls.from_bytes(data)
        except ValueError as exc:
            raise GramIOError(f"Corrupt bigram table ({exc})", path) from exc

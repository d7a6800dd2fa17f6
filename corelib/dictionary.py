"""Open-addressing hash map and hash set with quadratic probing."""

from __future__ import annotations

import enum
import math
import struct
from typing import Any, Iterable, Iterator, NamedTuple, Optional

from corelib.errors import InvalidOperationError, KeyExistsError, KeyNotFoundError
from corelib.text import float_as_int, string_hash

_EMPTY = 0
_OCCUPIED = 1
_DELETED = 2

_INITIAL_BUCKETS = 16


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 0x80000000 else value


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


_MAX_LOAD_FACTOR = _to_float32(0.7)


def get_hash_code(key: Any) -> int:
    """32-bit signed hash code used to place ``key`` in a table.

    Integers are truncated to 32 bits, floats hash by their single-precision
    bit pattern, strings use the string hash, and objects may provide their
    own ``get_hash_code`` method.
    """
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, int):
        return _to_int32(key)
    if isinstance(key, enum.Enum):
        return get_hash_code(key.value)
    if isinstance(key, float):
        return float_as_int(_to_float32(key))
    if isinstance(key, str):
        return string_hash(key)
    custom = getattr(key, "get_hash_code", None)
    if callable(custom):
        return _to_int32(int(custom()))
    return _to_int32(hash(key))


class KeyValuePair(NamedTuple):
    """A key together with its value."""

    key: Any
    value: Any

    def get_hash_code(self) -> int:
        return get_hash_code(self.key)


class Dictionary:
    """Hash map whose iteration order follows the bucket layout."""

    def __init__(self) -> None:
        self._mask = -1
        self._count = 0
        self._slots: list[Optional[KeyValuePair]] = []
        self._states: list[int] = []

    def _find_position(self, key: Any) -> tuple[int, int]:
        """Return ``(object_position, insertion_position)``; unused ones are -1."""
        pos = get_hash_code(key) & self._mask
        insert_pos = -1
        probes = 0
        while probes <= self._mask:
            state = self._states[pos]
            if state == _EMPTY:
                return -1, pos if insert_pos == -1 else insert_pos
            if state == _DELETED:
                if insert_pos == -1:
                    insert_pos = pos
            elif self._slots[pos].key == key:  # type: ignore[union-attr]
                return pos, -1
            probes += 1
            pos = (pos + probes * probes) & self._mask
        raise InvalidOperationError(
            "Hash map is full. This indicates an error in key equality or hashing."
        )

    def _store(self, pair: KeyValuePair, pos: int) -> None:
        self._slots[pos] = pair
        self._states[pos] = _OCCUPIED

    def _rehash(self) -> None:
        if self._mask != -1 and _to_float32(self._count / self._mask) < _MAX_LOAD_FACTOR:
            return
        new_size = (self._mask + 1) * 2 or _INITIAL_BUCKETS
        old_items = list(self.items())
        self._mask = new_size - 1
        self._slots = [None] * new_size
        self._states = [_EMPTY] * new_size
        self._count = 0
        for pair in old_items:
            _, insert_pos = self._find_position(pair.key)
            self._store(pair, insert_pos)
            self._count += 1

    def add(self, key: Any, value: Any) -> None:
        """Insert a new entry; raise :class:`KeyExistsError` if ``key`` is present."""
        if not self.add_if_not_exists(key, value):
            raise KeyExistsError("The key already exists in Dictionary.")

    def add_if_not_exists(self, key: Any, value: Any) -> bool:
        """Insert the entry unless ``key`` is present; report whether it was added."""
        self._rehash()
        found, insert_pos = self._find_position(key)
        if found != -1:
            return False
        self._store(KeyValuePair(key, value), insert_pos)
        self._count += 1
        return True

    def remove(self, key: Any) -> None:
        """Remove ``key`` if present; a missing key is ignored."""
        if self._mask == -1:
            return
        found, _ = self._find_position(key)
        if found != -1:
            self._states[found] = _DELETED
            self._slots[found] = None
            self._count -= 1

    def clear(self) -> None:
        """Remove every entry, keeping the current bucket count."""
        self._count = 0
        self._slots = [None] * len(self._slots)
        self._states = [_EMPTY] * len(self._states)

    def __contains__(self, key: object) -> bool:
        if self._mask == -1:
            return False
        found, _ = self._find_position(key)
        return found != -1

    def try_get(self, key: Any, default: Any = None) -> Any:
        """Value stored for ``key``, or ``default`` when there is none."""
        if self._mask == -1:
            return default
        found, _ = self._find_position(key)
        if found == -1:
            return default
        return self._slots[found].value  # type: ignore[union-attr]

    def __getitem__(self, key: Any) -> Any:
        if self._mask != -1:
            found, _ = self._find_position(key)
            if found != -1:
                return self._slots[found].value  # type: ignore[union-attr]
        raise KeyNotFoundError("The key does not exist in dictionary.")

    def __setitem__(self, key: Any, value: Any) -> None:
        self._rehash()
        found, insert_pos = self._find_position(key)
        if found != -1:
            self._store(KeyValuePair(key, value), found)
        else:
            self._store(KeyValuePair(key, value), insert_pos)
            self._count += 1

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        return (pair.key for pair in self.items())

    def items(self) -> Iterator[KeyValuePair]:
        """Entries in bucket order."""
        snapshot = [
            pair
            for pair, state in zip(self._slots, self._states)
            if state == _OCCUPIED
        ]
        return iter(snapshot)  # type: ignore[arg-type]

    def copy(self) -> "Dictionary":
        result = Dictionary()
        result._mask = self._mask
        result._count = self._count
        result._slots = list(self._slots)
        result._states = list(self._states)
        return result

    def __repr__(self) -> str:
        body = ", ".join(f"{pair.key!r}: {pair.value!r}" for pair in self.items())
        return f"Dictionary({{{body}}})"


class HashSet:
    """Set of keys stored in a :class:`Dictionary`."""

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        self._dict = Dictionary()
        for item in iterable:
            self.add(item)

    def add(self, item: Any) -> bool:
        """Add ``item``; report whether it was not already present."""
        return self._dict.add_if_not_exists(item, None)

    def remove(self, item: Any) -> None:
        """Remove ``item`` if present; a missing item is ignored."""
        self._dict.remove(item)

    def clear(self) -> None:
        self._dict.clear()

    def __contains__(self, item: object) -> bool:
        return item in self._dict

    def __len__(self) -> int:
        return len(self._dict)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._dict)

    def copy(self) -> "HashSet":
        result = HashSet()
        result._dict = self._dict.copy()
        return result

    def __repr__(self) -> str:
        return f"HashSet({list(self)!r})"
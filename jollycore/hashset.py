"""Open-addressing hash set with Robin Hood probing."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from jollycore.hashing import hash_value

_MIN_RESERVE = 32
_TABLE_PROBE = 16


def _table_size(size: int) -> int:
    size = max(size, 1)
    return 1 << (size - 1).bit_length()


class HashSet:
    """A set of keys hashed with FNV-1a, stored in one slot table."""

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._size = 0
        self._allocate(_MIN_RESERVE)
        if items is not None:
            for item in items:
                self.add(item)

    def _allocate(self, size: int) -> None:
        self._slots: list[tuple[int, Any] | None] = [None] * _table_size(size)
        self._max_probe = 0

    @property
    def reserve(self) -> int:
        """Number of slots in the table."""
        return len(self._slots)

    def resize(self, size: int) -> None:
        """Rebuild the table with at least size slots (never fewer than the keys held)."""
        entries = [slot for slot in self._slots if slot is not None]
        self._allocate(max(size, len(entries)))
        for h, key in entries:
            self._place(h, key)

    def _place(self, h: int, key: Any) -> int:
        slots = self._slots
        reserve = len(slots)
        i = h % reserve
        dist = 0
        longest = 0
        while True:
            slot = slots[i]
            if slot is None:
                slots[i] = (h, key)
                longest = max(longest, dist)
                break
            existing = (i - slot[0] % reserve) % reserve
            if existing < dist:
                slots[i] = (h, key)
                longest = max(longest, dist)
                h, key = slot
                dist = existing
            i = (i + 1) % reserve
            dist += 1
        self._max_probe = max(self._max_probe, longest)
        return longest

    def _find(self, key: Any) -> int | None:
        h = hash_value(key)
        reserve = len(self._slots)
        for step in range(min(self._max_probe + 1, reserve)):
            idx = (h + step) % reserve
            slot = self._slots[idx]
            if slot is not None and slot[0] == h and slot[1] == key:
                return idx
        return None

    def has(self, key: Any) -> bool:
        return self._find(key) is not None

    def add(self, key: Any) -> None:
        """Insert key; adding a key already present does nothing."""
        if self.has(key):
            return
        if self._size >= len(self._slots):
            self.resize(len(self._slots) * 2)
        probe = self._place(hash_value(key), key)
        self._size += 1
        if probe >= _TABLE_PROBE:
            self.resize(len(self._slots) * 2)

    def remove(self, key: Any) -> None:
        """Delete key; deleting a missing key does nothing."""
        idx = self._find(key)
        if idx is None:
            return
        self._slots[idx] = None
        self._size -= 1

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[Any]:
        return (slot[1] for slot in list(self._slots) if slot is not None)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"HashSet({list(self)!r})"
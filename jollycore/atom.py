"""A value with atomic load, store, add, subtract and compare-exchange."""

from __future__ import annotations

import enum
import threading
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class MemoryOrder(enum.Enum):
    RELAXED = "relaxed"
    ACQUIRE = "acquire"
    RELEASE = "release"


_LOAD = {MemoryOrder.RELAXED, MemoryOrder.ACQUIRE}
_STORE = {MemoryOrder.RELAXED, MemoryOrder.RELEASE}


def _require(order: MemoryOrder, allowed: set[MemoryOrder], what: str) -> None:
    if order not in allowed:
        raise ValueError(f"memory order {order.value} is not allowed for {what}")


class Atom(Generic[T]):
    """A value whose every operation happens as one indivisible step."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def get(self, order: MemoryOrder = MemoryOrder.RELAXED) -> T:
        _require(order, _LOAD, "load")
        with self._lock:
            return self._value

    def set(self, value: T, order: MemoryOrder = MemoryOrder.RELAXED) -> None:
        _require(order, _STORE, "store")
        with self._lock:
            self._value = value

    def add(self, value: Any, order: MemoryOrder = MemoryOrder.RELAXED) -> None:
        _require(order, _STORE, "add")
        with self._lock:
            self._value = self._value + value

    def sub(self, value: Any, order: MemoryOrder = MemoryOrder.RELAXED) -> None:
        _require(order, _STORE, "sub")
        with self._lock:
            self._value = self._value - value

    def cmpxchg(
        self,
        expected: T,
        desired: T,
        success: MemoryOrder = MemoryOrder.RELAXED,
        failure: MemoryOrder = MemoryOrder.RELAXED,
    ) -> tuple[bool, T]:
        """Store desired if the value equals expected; return (stored, value seen)."""
        _require(success, _STORE, "compare-exchange success")
        _require(failure, _STORE, "compare-exchange failure")
        with self._lock:
            current = self._value
            if current == expected:
                self._value = desired
                return True, current
            return False, current

    def __repr__(self) -> str:
        return f"Atom({self._value!r})"
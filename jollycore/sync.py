"""Mutexes, counting semaphores and a writer-priority reader/writer lock."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator


class Mutex:
    """A re-entrant mutual exclusion lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def tryacquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def acquire(self) -> None:
        self._lock.acquire()

    def release(self) -> None:
        self._lock.release()

    def __enter__(self) -> Mutex:
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()


class Semaphore:
    """A counting semaphore with an upper bound on its count."""

    def __init__(self, maximum: int = 1, count: int = 0) -> None:
        if maximum < 1:
            raise ValueError("maximum must be at least 1")
        if not 0 <= count <= maximum:
            raise ValueError("count must lie between 0 and maximum")
        self.maximum = maximum
        self._count = count
        self._cond = threading.Condition(threading.Lock())

    @property
    def count(self) -> int:
        return self._count

    def tryacquire(self) -> bool:
        with self._cond:
            if self._count == 0:
                return False
            self._count -= 1
            return True

    def acquire(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._count > 0)
            self._count -= 1

    def release(self) -> None:
        with self._cond:
            if self._count >= self.maximum:
                raise ValueError("semaphore released above its maximum")
            self._count += 1
            self._cond.notify()

    def __enter__(self) -> Semaphore:
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()


class RWLock:
    """A reader/writer lock in which waiting writers keep new readers out."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def tryracquire(self) -> bool:
        with self._cond:
            if self._writer or self._waiting_writers:
                return False
            self._readers += 1
            return True

    def trywacquire(self) -> bool:
        with self._cond:
            if self._writer or self._readers:
                return False
            self._writer = True
            return True

    def racquire(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: not self._writer and not self._waiting_writers)
            self._readers += 1

    def rrelease(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("read lock released without being held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def wacquire(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                self._cond.wait_for(lambda: not self._writer and not self._readers)
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def wrelease(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("write lock released without being held")
            self._writer = False
            self._cond.notify_all()

    def read(self) -> ReadLock:
        """The shared side of this lock."""
        return ReadLock(self)

    def write(self) -> WriteLock:
        """The exclusive side of this lock."""
        return WriteLock(self)


class ReadLock:
    """The shared side of an RWLock."""

    def __init__(self, lock: RWLock) -> None:
        self._lock = lock

    def tryacquire(self) -> bool:
        return self._lock.tryracquire()

    def acquire(self) -> None:
        self._lock.racquire()

    def release(self) -> None:
        self._lock.rrelease()

    def __enter__(self) -> ReadLock:
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()


class WriteLock:
    """The exclusive side of an RWLock."""

    def __init__(self, lock: RWLock) -> None:
        self._lock = lock

    def tryacquire(self) -> bool:
        return self._lock.trywacquire()

    def acquire(self) -> None:
        self._lock.wacquire()

    def release(self) -> None:
        self._lock.wrelease()

    def __enter__(self) -> WriteLock:
        self.acquire()
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()


@contextmanager
def rview(obj: Any) -> Iterator[Any]:
    """Hold the read side of obj.get_lock() while obj is used."""
    with obj.get_lock().read():
        yield obj


@contextmanager
def wview(obj: Any) -> Iterator[Any]:
    """Hold the write side of obj.get_lock() while obj is used."""
    with obj.get_lock().write():
        yield obj
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from jollycore.sync import Mutex, RWLock, Semaphore, rview, wview


def test_mutex_is_reentrant():
    lock = Mutex()
    assert lock.tryacquire() is True
    assert lock.tryacquire() is True
    lock.release()
    lock.release()


def test_mutex_excludes_other_threads():
    lock = Mutex()
    with lock:
        with ThreadPoolExecutor(max_workers=1) as pool:
            other = pool.submit(lock.tryacquire).result()
    assert other is False
    with ThreadPoolExecutor(max_workers=1) as pool:
        later = pool.submit(lambda: (lock.tryacquire(), lock.release())[0]).result()
    assert later is True
    assert lock.tryacquire() is True
    lock.release()


def test_semaphore_true_then_false():
    lock = Semaphore(1, 1)
    assert lock.tryacquire() is True
    assert lock.tryacquire() is False
    lock.release()
    assert lock.count == 1


def test_semaphore_defaults_start_empty():
    lock = Semaphore()
    assert lock.tryacquire() is False
    lock.release()
    assert lock.tryacquire() is True


def test_semaphore_release_above_maximum():
    lock = Semaphore(1, 1)
    with pytest.raises(ValueError):
        lock.release()


def test_semaphore_bad_arguments():
    with pytest.raises(ValueError):
        Semaphore(1, 2)
    with pytest.raises(ValueError):
        Semaphore(0, 0)


def test_semaphore_blocks_until_released():
    lock = Semaphore(1, 0)
    done = threading.Event()

    def worker():
        lock.acquire()
        done.set()

    t = threading.Thread(target=worker)
    t.start()
    assert not done.wait(0.05)
    lock.release()
    t.join(2)
    assert done.is_set()
    assert lock.tryacquire() is False
    assert lock.count == 0


def test_rwlock_readers_share():
    lock = RWLock()
    assert lock.tryracquire()
    assert lock.tryracquire()
    assert lock.trywacquire() is False
    lock.rrelease()
    lock.rrelease()
    assert lock.trywacquire() is True
    assert lock.tryracquire() is False
    lock.wrelease()
    assert lock.tryracquire() is True
    lock.rrelease()


def test_rwlock_release_without_hold():
    lock = RWLock()
    with pytest.raises(RuntimeError):
        lock.rrelease()
    with pytest.raises(RuntimeError):
        lock.wrelease()


def test_waiting_writer_blocks_new_readers():
    lock = RWLock()
    lock.racquire()
    acquired = threading.Event()
    release = threading.Event()

    def writer():
        with lock.write():
            acquired.set()
            release.wait(2)

    t = threading.Thread(target=writer)
    t.start()
    time.sleep(0.1)
    assert lock.tryracquire() is False
    assert not acquired.is_set()
    lock.rrelease()
    assert acquired.wait(2)
    release.set()
    t.join(2)
    assert lock.tryracquire() is True
    lock.rrelease()


def test_read_and_write_handles():
    lock = RWLock()
    reader = lock.read()
    writer = lock.write()
    assert reader.tryacquire()
    assert writer.tryacquire() is False
    reader.release()
    assert writer.tryacquire()
    writer.release()


class _Guarded:
    def __init__(self):
        self.lock = RWLock()
        self.value = 0

    def get_lock(self):
        return self.lock


def test_views_hold_the_lock():
    obj = _Guarded()
    with wview(obj) as view:
        view.value = 5
        assert obj.lock.tryracquire() is False
    with rview(obj) as view:
        assert view.value == 5
        assert obj.lock.trywacquire() is False
    assert obj.lock.trywacquire() is True
    obj.lock.wrelease()
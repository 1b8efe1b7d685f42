import threading

import pytest

from autocomplete.utils.locks import RWLock

TIMEOUT = 5.0


def test_readers_share_the_lock() -> None:
    """Tests that two readers can hold the lock at the same time."""
    lock = RWLock()
    both_inside = threading.Barrier(2, timeout=TIMEOUT)

    def reader() -> None:
        with lock.shared():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(TIMEOUT)

    assert not both_inside.broken
    assert lock.readers == 0


def test_writer_excludes_readers() -> None:
    """Tests that a reader waits until the writer releases the lock."""
    lock = RWLock()
    events: list[str] = []
    reader_started = threading.Event()

    def reader() -> None:
        reader_started.set()
        with lock.shared():
            events.append("read")

    with lock.exclusive():
        thread = threading.Thread(target=reader)
        thread.start()
        assert reader_started.wait(TIMEOUT)
        thread.join(0.05)
        assert thread.is_alive()
        events.append("write")

    thread.join(TIMEOUT)
    assert events == ["write", "read"]


def test_writer_waits_for_readers() -> None:
    lock = RWLock()
    events: list[str] = []
    writer_started = threading.Event()

    def writer() -> None:
        writer_started.set()
        with lock.exclusive():
            events.append("write")

    with lock.shared():
        thread = threading.Thread(target=writer)
        thread.start()
        assert writer_started.wait(TIMEOUT)
        thread.join(0.05)
        assert thread.is_alive()
        events.append("read")

    thread.join(TIMEOUT)
    assert events == ["read", "write"]
    assert not lock.locked


def test_lock_released_on_error() -> None:
    lock = RWLock()
    with pytest.raises(RuntimeError), lock.exclusive():
        raise RuntimeError

    with pytest.raises(RuntimeError), lock.shared():
        raise RuntimeError

    assert not lock.locked
    assert lock.readers == 0

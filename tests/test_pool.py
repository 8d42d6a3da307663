import threading
import time

import pytest

from statusd.pool import ConnectionPool, PoolClosedError


def test_get_is_first_in_first_out():
    pool = ConnectionPool(["a", "b", "c"])
    assert [pool.get(), pool.get(), pool.get()] == ["a", "b", "c"]
    assert len(pool) == 0


def test_put_appends_to_the_back():
    pool = ConnectionPool(["a", "b"])
    first = pool.get()
    pool.put(first)
    assert pool.get() == "b"
    assert pool.get() == "a"


def test_connection_context_returns_connection():
    pool = ConnectionPool(["only"])
    with pool.connection() as conn:
        assert conn == "only"
        assert len(pool) == 0
    assert len(pool) == 1


def test_connection_context_returns_on_error():
    pool = ConnectionPool(["only"])
    with pytest.raises(KeyError):
        with pool.connection():
            raise KeyError("boom")
    assert len(pool) == 1


def test_get_waits_for_put():
    pool = ConnectionPool([])
    timer = threading.Timer(0.05, pool.put, args=("conn",))
    timer.start()
    got = pool.get()
    timer.join(timeout=2)
    assert got == "conn"
    assert len(pool) == 0


def test_close_wakes_waiters():
    pool = ConnectionPool([])
    errors = []

    def wait():
        try:
            pool.get()
        except PoolClosedError as exc:
            errors.append(exc)

    worker = threading.Thread(target=wait)
    worker.start()
    time.sleep(0.05)
    pool.close()
    worker.join(timeout=2)
    assert len(errors) == 1
    assert pool.closed


def test_get_after_close_raises_even_with_idle():
    pool = ConnectionPool(["a"])
    pool.close()
    with pytest.raises(PoolClosedError):
        pool.get()


def test_put_after_close_is_dropped():
    pool = ConnectionPool(["a"])
    conn = pool.get()
    pool.close()
    pool.put(conn)
    assert len(pool) == 0
"""A blocking, closable pool of reusable connections."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

T = TypeVar("T")


class PoolClosedError(RuntimeError):
    """Raised when a connection is requested from a closed pool."""


class ConnectionPool(Generic[T]):
    """FIFO pool; ``get`` waits until a connection is free or the pool closes."""

    def __init__(self, connections: Iterable[T]) -> None:
        self._idle: deque[T] = deque(connections)
        self._cond = threading.Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self) -> T:
        """Take a connection, waiting for one to be returned if none is idle."""
        with self._cond:
            self._cond.wait_for(lambda: self._closed or bool(self._idle))
            if self._closed:
                raise PoolClosedError("connection pool is closed")
            return self._idle.popleft()

    def put(self, connection: T) -> None:
        """Return a connection; after close it is dropped."""
        with self._cond:
            if self._closed:
                return
            self._idle.append(connection)
            self._cond.notify()

    @contextmanager
    def connection(self) -> Iterator[T]:
        """Borrow a connection for the duration of a ``with`` block."""
        conn = self.get()
        try:
            yield conn
        finally:
            self.put(conn)

    def close(self) -> None:
        """Stop handing out connections and wake every waiter."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._idle)
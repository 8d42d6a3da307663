"""A fixed set of event loops, each running on its own thread, handed out round-robin."""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading

_log = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 2


class IOServicePool:
    """Runs ``size`` asyncio loops in background threads until stopped."""

    def __init__(self, size: int = DEFAULT_POOL_SIZE) -> None:
        if size < 1:
            raise ValueError(f"pool size must be at least 1, got {size}")
        self._loops = [asyncio.new_event_loop() for _ in range(size)]
        self._cycle = itertools.cycle(self._loops)
        self._lock = threading.Lock()
        self._stopped = False
        self._threads = [
            threading.Thread(
                target=self._run, args=(loop,), name=f"io-loop-{index}", daemon=True
            )
            for index, loop in enumerate(self._loops)
        ]
        for thread in self._threads:
            thread.start()

    @staticmethod
    def _run(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()

    def next_loop(self) -> asyncio.AbstractEventLoop:
        """The next loop in turn."""
        with self._lock:
            if self._stopped:
                raise RuntimeError("io service pool is stopped")
            return next(self._cycle)

    def stop(self) -> None:
        """Stop every loop, wait for its thread and close it. Safe to call twice."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
        for loop in self._loops:
            loop.call_soon_threadsafe(loop.stop)
        for thread in self._threads:
            thread.join()
        for loop in self._loops:
            loop.close()
        _log.info("io service pool stopped")

    def __len__(self) -> int:
        return len(self._loops)

    def __enter__(self) -> IOServicePool:
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()
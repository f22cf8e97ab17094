"""Named worker threads, per-thread virtual ids and a binary semaphore."""

from __future__ import annotations

import itertools
import os
import threading
import time
from typing import Any, Callable, Optional

CACHE_LINE_ALIGNMENT = 64
DEFAULT_NUMBER_OF_CORES = 8

_id_seed = itertools.count(1)
_id_lock = threading.Lock()
_per_thread = threading.local()


def current_virtual_id() -> int:
    """Return a small id, unique to the calling thread, handed out in order of first use."""
    try:
        return _per_thread.virtual_id
    except AttributeError:
        with _id_lock:
            virtual_id = next(_id_seed)
        _per_thread.virtual_id = virtual_id
        return virtual_id


def hardware_concurrency() -> int:
    """Number of processors, or a default when it cannot be determined."""
    count = os.cpu_count()
    return count if count else DEFAULT_NUMBER_OF_CORES


class WorkerThread:
    """A named thread that starts at once and must be joined exactly once."""

    def __init__(self, name: str, target: Callable[[], Any]) -> None:
        self.name = name
        self._joined = False
        self._thread = threading.Thread(target=target, name=name, daemon=True)
        self._thread.start()

    @property
    def ident(self) -> Optional[int]:
        return self._thread.ident

    def joinable(self) -> bool:
        return not self._joined

    def join(self) -> None:
        if self._joined:
            raise RuntimeError(f"thread {self.name!r} is not joinable")
        self._thread.join()
        self._joined = True


class BinarySemaphore:
    """A semaphore whose count never exceeds one."""

    def __init__(self, desired: int = 0) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._signaled = desired != 0

    def release(self) -> None:
        with self._condition:
            was_signaled = self._signaled
            self._signaled = True
            if not was_signaled:
                self._condition.notify()

    def acquire(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: self._signaled)
            self._signaled = False

    def try_acquire(self) -> bool:
        with self._condition:
            if self._signaled:
                self._signaled = False
                return True
            return False

    def try_acquire_for(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for the semaphore."""
        return self.try_acquire_until(time.monotonic() + timeout)

    def try_acquire_until(self, deadline: float) -> bool:
        """Wait until ``deadline``, a :func:`time.monotonic` value, for the semaphore."""
        with self._condition:
            remaining = deadline - time.monotonic()
            self._condition.wait_for(lambda: self._signaled, timeout=max(remaining, 0.0))
            if self._signaled:
                self._signaled = False
                return True
            return False
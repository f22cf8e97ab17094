"""State shared between one producer and any number of consumers of a result."""

from __future__ import annotations

import threading
import time
from typing import Any, List, Optional

from corunner.consumer_context import BrokenTaskError, Resumer
from corunner.result_state import ResultStatus


class SharedResultState:
    """Holds a value or an exception that many consumers may read.

    The producer stores an outcome with :meth:`set_result` or
    :meth:`set_exception` and publishes it with :meth:`complete_producer`.
    Consumers block (:meth:`wait`, :meth:`wait_for`, :meth:`wait_until`) or
    register resumers (:meth:`await_`). Resumers run on the thread that
    completes the producer, newest first.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._condition = threading.Condition(self._lock)
        self._ready = False
        self._awaiters: List[Resumer] = []
        self._producer_status = ResultStatus.IDLE
        self._value: Any = None
        self._exception: Optional[BaseException] = None

    def _check_unset(self) -> None:
        if self._producer_status is not ResultStatus.IDLE:
            raise RuntimeError("a result has already been set")

    def set_result(self, value: Any = None) -> None:
        self._check_unset()
        self._value = value
        self._producer_status = ResultStatus.VALUE

    def set_exception(self, exception: BaseException) -> None:
        if exception is None:
            raise ValueError("exception must not be None")
        if not isinstance(exception, BaseException):
            raise TypeError(f"expected an exception, got {type(exception).__name__}")
        self._check_unset()
        self._exception = exception
        self._producer_status = ResultStatus.EXCEPTION

    def status(self) -> ResultStatus:
        with self._lock:
            if not self._ready:
                return ResultStatus.IDLE
        return self._producer_status

    def complete_producer(self) -> None:
        """Publish the outcome, wake blocked waiters and run registered resumers.

        A producer that finishes without an outcome leaves a broken task.
        """
        if self._producer_status is ResultStatus.IDLE:
            self.set_exception(BrokenTaskError())
        with self._condition:
            if self._ready:
                raise RuntimeError("the producer has already completed")
            awaiters, self._awaiters = self._awaiters, []
            self._ready = True
            self._condition.notify_all()
        for resumer in reversed(awaiters):
            resumer()

    def await_(self, resumer: Resumer) -> bool:
        """Register ``resumer``; return whether the consumer should suspend."""
        if not callable(resumer):
            raise TypeError(f"expected a callable resumer, got {type(resumer).__name__}")
        with self._lock:
            if self._ready:
                return False
            self._awaiters.append(resumer)
        return True

    def wait(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: self._ready)

    def wait_for(self, timeout: float) -> ResultStatus:
        """Wait up to ``timeout`` seconds and return the status then."""
        with self._condition:
            if self._ready:
                return self._producer_status
            ready = self._condition.wait_for(lambda: self._ready, timeout=max(timeout, 0.0) + 0.001)
        return self._producer_status if ready else ResultStatus.IDLE

    def wait_until(self, deadline: float) -> ResultStatus:
        """Wait until ``deadline``, a :func:`time.monotonic` value, and return the status."""
        now = time.monotonic()
        if deadline <= now:
            return self.status()
        return self.wait_for(deadline - now)

    def get(self) -> Any:
        """Wait for the outcome; return the same value each time or raise the exception."""
        self.wait()
        if self._exception is not None:
            raise self._exception
        return self._value
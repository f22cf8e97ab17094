"""The shared state between the producer of a single result and its one consumer."""

from __future__ import annotations

import enum
import threading
from typing import Any, Optional

from corunner.consumer_context import (
    BrokenTaskError,
    ConsumerContext,
    Resumer,
    WaitContext,
    WhenAnyContext,
)


class ResultStatus(enum.Enum):
    IDLE = "idle"
    VALUE = "value"
    EXCEPTION = "exception"


class PcState(enum.Enum):
    """Who has arrived first: nobody, the consumer, or the finished producer."""

    IDLE = "idle"
    CONSUMER_SET = "consumer_set"
    PRODUCER_DONE = "producer_done"


class ResultState:
    """Holds a value or an exception and hands it to a single consumer.

    The producer stores an outcome with :meth:`set_result` or
    :meth:`set_exception` and then publishes it with :meth:`complete_producer`.
    The consumer may block (:meth:`wait`, :meth:`wait_for`), register a resumer
    (:meth:`await_`) or take part in a when-any (:meth:`when_any`).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pc_state = PcState.IDLE
        self._consumer = ConsumerContext()
        self._producer_status = ResultStatus.IDLE
        self._value: Any = None
        self._exception: Optional[BaseException] = None

    def _load(self) -> PcState:
        with self._lock:
            return self._pc_state

    def _compare_exchange(self, expected: PcState, desired: PcState) -> bool:
        with self._lock:
            if self._pc_state is not expected:
                return False
            self._pc_state = desired
            return True

    def _assert_done(self) -> None:
        if self._load() is not PcState.PRODUCER_DONE:
            raise RuntimeError("result state is not done")

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

    def complete_producer(self) -> None:
        """Publish the outcome and wake the consumer if one is waiting.

        A producer that finishes without an outcome leaves a broken task.
        """
        if self._producer_status is ResultStatus.IDLE:
            self.set_exception(BrokenTaskError())
        with self._lock:
            previous = self._pc_state
            if previous is PcState.PRODUCER_DONE:
                raise RuntimeError("the producer has already completed")
            self._pc_state = PcState.PRODUCER_DONE
        if previous is PcState.CONSUMER_SET:
            self._consumer.resume_consumer(self)

    def status(self) -> ResultStatus:
        if self._load() is not PcState.PRODUCER_DONE:
            return ResultStatus.IDLE
        return self._producer_status

    def get(self) -> Any:
        """Wait for the outcome; return the value or raise the exception."""
        self.wait()
        if self._exception is not None:
            raise self._exception
        return self._value

    def wait(self) -> None:
        if self._load() is PcState.PRODUCER_DONE:
            return
        wait_context = WaitContext()
        self._consumer.set_wait_context(wait_context)
        if not self._compare_exchange(PcState.IDLE, PcState.CONSUMER_SET):
            self._assert_done()
            self._consumer.clear()
            return
        wait_context.wait()
        self._assert_done()

    def wait_for(self, timeout: float) -> ResultStatus:
        """Wait up to ``timeout`` seconds and return the status then."""
        if self._load() is PcState.PRODUCER_DONE:
            return self._producer_status
        wait_context = WaitContext()
        self._consumer.set_wait_context(wait_context)
        if not self._compare_exchange(PcState.IDLE, PcState.CONSUMER_SET):
            self._assert_done()
            self._consumer.clear()
            return self._producer_status
        if wait_context.wait_for(timeout * 1000.0 + 1.0):
            self._assert_done()
            return self._producer_status
        self.try_rewind_consumer()
        return self.status()

    def await_(self, resumer: Resumer) -> bool:
        """Register ``resumer``; return whether the consumer should suspend."""
        if self._load() is PcState.PRODUCER_DONE:
            return False
        self._consumer.set_await_handle(resumer)
        suspended = self._compare_exchange(PcState.IDLE, PcState.CONSUMER_SET)
        if not suspended:
            self._assert_done()
            self._consumer.clear()
        return suspended

    def when_any(self, when_any_context: WhenAnyContext) -> PcState:
        """Join a when-any; return the state seen before joining."""
        state = self._load()
        if state is PcState.PRODUCER_DONE:
            return state
        self._consumer.set_when_any_context(when_any_context)
        if not self._compare_exchange(PcState.IDLE, PcState.CONSUMER_SET):
            self._assert_done()
            self._consumer.clear()
        return state

    def try_rewind_consumer(self) -> None:
        """Withdraw a registered consumer unless the producer has already finished."""
        if self._load() is not PcState.CONSUMER_SET:
            return
        if not self._compare_exchange(PcState.CONSUMER_SET, PcState.IDLE):
            self._assert_done()
            return
        self._consumer.clear()
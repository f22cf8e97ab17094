"""Ways in which the consumer of a result waits for it and is woken up."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Optional

BROKEN_TASK_MESSAGE = "result - associated task was interrupted abnormally"

Resumer = Callable[[], Any]


class BrokenTaskError(RuntimeError):
    """Raised when the work a consumer waits on was dropped before it ran."""

    def __init__(self, message: str = BROKEN_TASK_MESSAGE) -> None:
        super().__init__(message)


def _check_callable(resumer: Any) -> None:
    if not callable(resumer):
        raise TypeError(f"expected a callable resumer, got {type(resumer).__name__}")


class AwaitContext:
    """Holds what resumes a suspended consumer and an optional interrupt to raise."""

    def __init__(self) -> None:
        self._resumer: Optional[Resumer] = None
        self._interrupt: Optional[BaseException] = None

    def set_resumer(self, resumer: Resumer) -> None:
        if self._resumer is not None:
            raise RuntimeError("a resumer has already been set")
        _check_callable(resumer)
        self._resumer = resumer

    def resume(self) -> None:
        if self._resumer is None:
            raise RuntimeError("no resumer has been set")
        self._resumer()

    def set_interrupt(self, exception: BaseException) -> None:
        if exception is None:
            raise ValueError("interrupt must not be None")
        if self._interrupt is not None:
            raise RuntimeError("an interrupt has already been set")
        self._interrupt = exception

    def throw_if_interrupted(self) -> None:
        if self._interrupt is not None:
            raise self._interrupt


class AwaitViaFunctor:
    """A task body that resumes an :class:`AwaitContext` exactly once.

    If it is discarded instead of run, the context is interrupted with
    :class:`BrokenTaskError` and then resumed, so the consumer never hangs.
    """

    __slots__ = ("_context",)

    def __init__(self, context: AwaitContext) -> None:
        self._context: Optional[AwaitContext] = context

    def __call__(self) -> None:
        context, self._context = self._context, None
        if context is None:
            raise RuntimeError("this functor has already been used")
        context.resume()

    def discard(self) -> None:
        context, self._context = self._context, None
        if context is None:
            return
        context.set_interrupt(BrokenTaskError())
        context.resume()


class WaitContext:
    """A one-shot event that blocking consumers wait on."""

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._ready = False

    def wait(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: self._ready)

    def wait_for(self, milliseconds: float) -> bool:
        """Wait up to ``milliseconds``; return whether the event was signalled."""
        with self._condition:
            return self._condition.wait_for(lambda: self._ready, timeout=milliseconds / 1000.0)

    def notify(self) -> None:
        with self._condition:
            self._ready = True
            self._condition.notify_all()


class WhenAnyContext:
    """Resumes its consumer once, with the first result that completes."""

    def __init__(self, resumer: Resumer) -> None:
        _check_callable(resumer)
        self._resumer = resumer
        self._lock = threading.Lock()
        self._fulfilled = False
        self._completed_result: Any = None

    def try_resume(self, completed_result: Any) -> None:
        if completed_result is None:
            raise ValueError("completed_result must not be None")
        with self._lock:
            if self._fulfilled:
                return
            self._fulfilled = True
            self._completed_result = completed_result
        self._resumer()

    def fulfilled(self) -> bool:
        with self._lock:
            return self._fulfilled

    def completed_result(self) -> Any:
        with self._lock:
            if self._completed_result is None:
                raise RuntimeError("no result has completed yet")
            return self._completed_result


class ConsumerStatus(enum.Enum):
    IDLE = "idle"
    AWAIT = "await"
    WAIT = "wait"
    WHEN_ANY = "when_any"


class ConsumerContext:
    """The single consumer of a result: an awaiter, a blocking waiter or a when-any."""

    def __init__(self) -> None:
        self._status = ConsumerStatus.IDLE
        self._payload: Any = None

    @property
    def status(self) -> ConsumerStatus:
        return self._status

    def clear(self) -> None:
        self._status = ConsumerStatus.IDLE
        self._payload = None

    def _set(self, status: ConsumerStatus, payload: Any) -> None:
        if self._status is not ConsumerStatus.IDLE:
            raise RuntimeError(f"a consumer is already set ({self._status.value})")
        self._status = status
        self._payload = payload

    def set_await_handle(self, resumer: Resumer) -> None:
        _check_callable(resumer)
        self._set(ConsumerStatus.AWAIT, resumer)

    def set_wait_context(self, wait_context: WaitContext) -> None:
        if wait_context is None:
            raise ValueError("wait_context must not be None")
        self._set(ConsumerStatus.WAIT, wait_context)

    def set_when_any_context(self, when_any_context: WhenAnyContext) -> None:
        if when_any_context is None:
            raise ValueError("when_any_context must not be None")
        self._set(ConsumerStatus.WHEN_ANY, when_any_context)

    def resume_consumer(self, owner: Any) -> None:
        """Wake the consumer; ``owner`` is the result handed to a when-any context."""
        status, payload = self._status, self._payload
        if status is ConsumerStatus.AWAIT:
            payload()
        elif status is ConsumerStatus.WAIT:
            payload.notify()
        elif status is ConsumerStatus.WHEN_ANY:
            payload.try_resume(owner)
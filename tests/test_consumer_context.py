import threading
import time

import pytest

from corunner.consumer_context import (
    BROKEN_TASK_MESSAGE,
    AwaitContext,
    AwaitViaFunctor,
    BrokenTaskError,
    ConsumerContext,
    ConsumerStatus,
    WaitContext,
    WhenAnyContext,
)
from corunner.task import Task


class Recorder:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def test_await_context_resume_calls_resumer():
    rec = Recorder()
    ctx = AwaitContext()
    ctx.set_resumer(rec)
    ctx.resume()
    assert rec.calls == 1


def test_await_context_rejects_second_resumer():
    ctx = AwaitContext()
    ctx.set_resumer(Recorder())
    with pytest.raises(RuntimeError):
        ctx.set_resumer(Recorder())


def test_await_context_resume_without_resumer_raises():
    with pytest.raises(RuntimeError):
        AwaitContext().resume()


def test_await_context_interrupt_is_raised():
    ctx = AwaitContext()
    error = ValueError("boom")
    ctx.set_interrupt(error)
    with pytest.raises(ValueError) as info:
        ctx.throw_if_interrupted()
    assert info.value is error


def test_await_context_none_interrupt_rejected():
    with pytest.raises(ValueError):
        AwaitContext().set_interrupt(None)


def test_await_via_functor_resumes_once():
    rec = Recorder()
    ctx = AwaitContext()
    ctx.set_resumer(rec)
    functor = AwaitViaFunctor(ctx)
    functor()
    assert rec.calls == 1
    with pytest.raises(RuntimeError):
        functor()
    functor.discard()
    assert rec.calls == 1


def test_await_via_functor_discard_interrupts():
    rec = Recorder()
    ctx = AwaitContext()
    ctx.set_resumer(rec)
    Task(AwaitViaFunctor(ctx)).clear()
    assert rec.calls == 1
    with pytest.raises(BrokenTaskError) as info:
        ctx.throw_if_interrupted()
    assert str(info.value) == BROKEN_TASK_MESSAGE


def test_wait_context_times_out():
    assert WaitContext().wait_for(10) is False


def test_wait_context_notified_from_other_thread():
    ctx = WaitContext()
    thread = threading.Thread(target=lambda: (time.sleep(0.05), ctx.notify()))
    thread.start()
    assert ctx.wait_for(5000) is True
    ctx.wait()
    thread.join()


def test_when_any_context_resumes_once_with_first():
    rec = Recorder()
    ctx = WhenAnyContext(rec)
    assert ctx.fulfilled() is False
    first, second = object(), object()
    ctx.try_resume(first)
    ctx.try_resume(second)
    assert rec.calls == 1
    assert ctx.fulfilled() is True
    assert ctx.completed_result() is first


def test_when_any_context_completed_result_before_completion():
    with pytest.raises(RuntimeError):
        WhenAnyContext(Recorder()).completed_result()


def test_consumer_context_idle_resume_is_noop():
    ctx = ConsumerContext()
    ctx.resume_consumer(object())
    assert ctx.status is ConsumerStatus.IDLE


def test_consumer_context_await():
    rec = Recorder()
    ctx = ConsumerContext()
    ctx.set_await_handle(rec)
    ctx.resume_consumer(object())
    assert rec.calls == 1


def test_consumer_context_wait():
    wait_ctx = WaitContext()
    ctx = ConsumerContext()
    ctx.set_wait_context(wait_ctx)
    ctx.resume_consumer(object())
    assert wait_ctx.wait_for(0) is True


def test_consumer_context_when_any_receives_owner():
    rec = Recorder()
    any_ctx = WhenAnyContext(rec)
    ctx = ConsumerContext()
    ctx.set_when_any_context(any_ctx)
    owner = object()
    ctx.resume_consumer(owner)
    assert any_ctx.completed_result() is owner
    assert rec.calls == 1


def test_consumer_context_second_consumer_rejected_until_cleared():
    ctx = ConsumerContext()
    ctx.set_await_handle(Recorder())
    with pytest.raises(RuntimeError):
        ctx.set_wait_context(WaitContext())
    ctx.clear()
    ctx.set_wait_context(WaitContext())
    assert ctx.status is ConsumerStatus.WAIT
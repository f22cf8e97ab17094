"""An executor that runs every task, in order, on one dedicated thread."""

from __future__ import annotations

import threading
from collections import deque
from itertools import chain
from typing import Any, Callable, Deque, Iterable, Optional, Union

from corunner.executors import Executor, RuntimeShutdownError
from corunner.task import Task
from corunner.threads import BinarySemaphore, WorkerThread

DEFAULT_NAME = "worker_thread_executor"

_tls = threading.local()

TaskLike = Union[Task, Callable[[], Any]]


def _current_worker() -> Optional["WorkerThreadExecutor"]:
    return getattr(_tls, "worker", None)


class WorkerThreadExecutor(Executor):
    """Runs tasks one by one on a single worker thread.

    Tasks enqueued from the worker thread itself go straight to its private
    queue; tasks from other threads go through a locked public queue that the
    worker swaps in whole whenever its private queue runs dry.
    """

    def __init__(self, name: str = DEFAULT_NAME) -> None:
        super().__init__(name)
        self._private_queue: Deque[Task] = deque()
        self._private_abort = False
        self._semaphore = BinarySemaphore(0)
        self._lock = threading.Lock()
        self._public_queue: Deque[Task] = deque()
        self._abort = False
        self._shutdown_guard = threading.Lock()
        self._shutdown_requested = False
        self._thread = WorkerThread(f"{name} worker", self._work_loop)

    def _drain_private_queue(self) -> bool:
        while self._private_queue:
            task = self._private_queue.popleft()
            if self._private_abort:
                task.clear()
                return False
            task()
        return True

    def _drain_queue(self) -> bool:
        self._lock.acquire()
        try:
            while not self._public_queue and not self._abort:
                self._lock.release()
                try:
                    self._semaphore.acquire()
                finally:
                    self._lock.acquire()
            if self._abort:
                return False
            # the private queue is empty here; swapping reuses both deques
            self._private_queue, self._public_queue = self._public_queue, self._private_queue
        finally:
            self._lock.release()
        return self._drain_private_queue()

    def _work_loop(self) -> None:
        _tls.worker = self
        while self._drain_queue():
            pass

    def _check_private_abort(self) -> None:
        if self._private_abort:
            raise RuntimeShutdownError(self.name)

    def _enqueue_foreign(self, tasks: Iterable[TaskLike]) -> None:
        with self._lock:
            if self._abort:
                raise RuntimeShutdownError(self.name)
            was_empty = not self._public_queue
            self._public_queue.extend(Task(task) for task in tasks)
        if was_empty:
            self._semaphore.release()

    def enqueue(self, task: TaskLike) -> None:
        """Schedule one task or callable; a task handed in is left empty."""
        if _current_worker() is self:
            self._check_private_abort()
            self._private_queue.append(Task(task))
            return
        self._enqueue_foreign((task,))

    def enqueue_many(self, tasks: Iterable[TaskLike]) -> None:
        """Schedule several tasks or callables, keeping their order."""
        if _current_worker() is self:
            self._check_private_abort()
            self._private_queue.extend(Task(task) for task in tasks)
            return
        self._enqueue_foreign(tasks)

    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    def shutdown(self) -> None:
        """Stop the worker, wait for it, and discard every task not yet run."""
        with self._shutdown_guard:
            if self._shutdown_requested:
                return
            self._shutdown_requested = True

        with self._lock:
            self._abort = True
        self._private_abort = True
        self._semaphore.release()

        if self._thread.joinable():
            self._thread.join()

        with self._lock:
            private_queue, self._private_queue = self._private_queue, deque()
            public_queue, self._public_queue = self._public_queue, deque()

        for task in chain(private_queue, public_queue):
            task.clear()
"""The executor interface and a collection that shuts executors down together."""

from __future__ import annotations

import abc
import threading
from typing import Any, Iterable, List

from corunner.task import Task


class RuntimeShutdownError(RuntimeError):
    """Raised when work is handed to an executor that has been shut down."""

    def __init__(self, executor_name: str) -> None:
        super().__init__(f"{executor_name} - shutdown has been called on this executor.")
        self.executor_name = executor_name


class Executor(abc.ABC):
    """Something that accepts tasks and runs them."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abc.abstractmethod
    def enqueue(self, task: Task) -> None:
        """Take ownership of one task and schedule it."""

    @abc.abstractmethod
    def enqueue_many(self, tasks: Iterable[Task]) -> None:
        """Take ownership of several tasks and schedule them in order."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Stop accepting work and release resources. Calling it again does nothing."""

    @abc.abstractmethod
    def shutdown_requested(self) -> bool:
        """Whether :meth:`shutdown` has been called."""

    def __enter__(self) -> "Executor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ExecutorCollection:
    """A thread-safe list of executors that are shut down together."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._executors: List[Executor] = []

    def register(self, executor: Executor) -> None:
        if executor is None:
            raise ValueError("executor must not be None")
        with self._lock:
            if any(existing is executor for existing in self._executors):
                raise ValueError(f"executor {executor.name!r} is already registered")
            self._executors.append(executor)

    def shutdown_all(self) -> None:
        """Shut every registered executor down, in registration order, and forget them."""
        with self._lock:
            for executor in self._executors:
                executor.shutdown()
            self._executors = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._executors)
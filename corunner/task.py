"""Units of work that executors queue and run, and helpers to build them."""

from __future__ import annotations

import builtins
import functools
from typing import Any, Callable, Optional


class Task:
    """A move-only holder of a callable that runs at most once.

    Running or clearing a task leaves it empty. When a task is cleared without
    having run, a ``discard`` method on the held callable is called, so that
    the work it stands for learns that it will never run.
    """

    __slots__ = ("_callable",)

    def __init__(self, callable: Optional[Callable[[], Any]] = None) -> None:
        if isinstance(callable, Task):
            callable = callable._release()
        elif callable is not None and not builtins.callable(callable):
            raise TypeError(f"Task expects a callable, got {type(callable).__name__}")
        self._callable = callable

    def _release(self) -> Optional[Callable[[], Any]]:
        held, self._callable = self._callable, None
        return held

    def __call__(self) -> None:
        """Run the held callable, leaving the task empty. An empty task does nothing."""
        held = self._release()
        if held is None:
            return
        held()

    def __bool__(self) -> bool:
        return self._callable is not None

    def clear(self) -> None:
        """Drop the held callable without running it."""
        held = self._release()
        if held is None:
            return
        discard = getattr(held, "discard", None)
        if discard is not None:
            discard()

    def take(self) -> "Task":
        """Move the held callable into a new task and leave this one empty."""
        return Task(self._release())

    def __repr__(self) -> str:
        return f"Task({self._callable!r})"


def bind(callable: Callable[..., Any], *args: Any, **kwargs: Any) -> Callable[[], Any]:
    """Bind arguments to a callable; with no arguments the callable itself is returned."""
    if not args and not kwargs:
        return callable
    return functools.partial(callable, *args, **kwargs)


def bind_with_try_catch(callable: Callable[..., Any], *args: Any, **kwargs: Any) -> Callable[[], None]:
    """Bind arguments and return a callable that swallows any exception raised."""
    bound = bind(callable, *args, **kwargs)

    def guarded() -> None:
        try:
            bound()
        except Exception:
            pass

    return guarded
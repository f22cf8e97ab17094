"""A lazily run sequence of values whose first step runs when iteration begins."""

from __future__ import annotations

from itertools import chain
from typing import Any, Iterable, Iterator, Optional

EMPTY_GENERATOR_MESSAGE = "generator - generator is empty."


class EmptyGeneratorError(RuntimeError):
    """Raised when iterating a generator that holds nothing."""

    def __init__(self, message: str = EMPTY_GENERATOR_MESSAGE) -> None:
        super().__init__(message)


class Generator:
    """Owns an iterator of values and runs it step by step.

    Starting iteration runs the first step at once, so an exception raised
    before the first value surfaces from ``iter()`` itself. A closed generator
    is empty and cannot be iterated.
    """

    def __init__(self, iterable: Optional[Iterable[Any]] = None) -> None:
        self._iterator: Optional[Iterator[Any]] = None if iterable is None else iter(iterable)

    def __bool__(self) -> bool:
        return self._iterator is not None

    def __iter__(self) -> Iterator[Any]:
        if self._iterator is None:
            raise EmptyGeneratorError()
        iterator = self._iterator
        try:
            first = next(iterator)
        except StopIteration:
            return iter(())
        return chain((first,), iterator)

    def close(self) -> None:
        """Stop the underlying iterator, if it can be stopped, and empty this generator."""
        iterator, self._iterator = self._iterator, None
        if iterator is None:
            return
        close = getattr(iterator, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Generator":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
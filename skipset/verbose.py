"""Tracing wrapper that logs every operation on an `OrderedSet`.

Handy when stepping through a failing sequence of operations: each call is
logged with its argument and its outcome, and the wrapped set is otherwise
left to do the work.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

from .ordered_set import OrderedSet, OrderedSetIterator

__all__ = ["VerboseOrderedSet", "VerboseIterator"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VerboseOrderedSet(Generic[T]):
    """Delegate to `inner`, logging each call at `level` on ``skipset.verbose``."""

    def __init__(self, inner: Optional[OrderedSet[T]] = None, *, level: int = logging.DEBUG):
        self._inner: OrderedSet[T] = inner if inner is not None else OrderedSet()
        self._log_level = level

    @property
    def inner(self) -> OrderedSet[T]:
        return self._inner

    @property
    def max_level(self) -> int:
        return self._inner.max_level

    @property
    def probability(self) -> float:
        return self._inner.probability

    def _log(self, msg: str, *args: object) -> None:
        logger.log(self._log_level, msg, *args)

    def add(self, value: T) -> None:
        before = len(self._inner)
        self._inner.add(value)
        self._log("add(%r) -> %s, length=%d", value, "added" if len(self._inner) > before else "present", len(self._inner))

    def remove(self, value: T) -> None:
        before = len(self._inner)
        self._inner.remove(value)
        self._log("remove(%r) -> %s, length=%d", value, "removed" if len(self._inner) < before else "absent", len(self._inner))

    def discard(self, value: T) -> None:
        before = len(self._inner)
        self._inner.discard(value)
        self._log("discard(%r) -> %s, length=%d", value, "removed" if len(self._inner) < before else "absent", len(self._inner))

    def contains(self, value: T) -> bool:
        result = self._inner.contains(value)
        self._log("contains(%r) -> %s", value, result)
        return result

    def length(self) -> int:
        result = self._inner.length()
        self._log("length() -> %d", result)
        return result

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    # len()/bool() are also called implicitly (list() length hints, truth
    # tests), so only the explicit length() call is logged.
    def __len__(self) -> int:
        return len(self._inner)

    def __bool__(self) -> bool:
        return bool(self._inner)

    def __iter__(self) -> VerboseIterator[T]:
        return VerboseIterator(iter(self._inner), self._log)

    def __repr__(self) -> str:  # pragma: no cover
        return f"{type(self).__name__}({self._inner!r})"


class VerboseIterator(Iterator[T]):
    """Logging counterpart of `OrderedSetIterator`, including :meth:`remove`."""

    __slots__ = ("_it", "_log", "_last")

    def __init__(self, it: OrderedSetIterator[T], log):
        self._it = it
        self._log = log
        self._last: Optional[T] = None

    def __iter__(self) -> VerboseIterator[T]:
        return self

    def __next__(self) -> T:
        try:
            value = next(self._it)
        except StopIteration:
            self._log("next() -> exhausted")
            raise
        self._last = value
        self._log("next() -> %r", value)
        return value

    def remove(self) -> None:
        self._it.remove()
        self._log("iterator remove() -> removed %r", self._last)

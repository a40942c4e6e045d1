"""Skip-list backed sorted set.

Values live in a tower of sorted linked lists. Level 0 holds every value;
each higher level holds a random subset of the level below, so a lookup can
skip long runs of values by descending from the sparsest lane.

Complexities (average case):
    • contains – O(log n)
    • add      – O(log n)
    • remove   – O(log n)
    • iterate  – O(n)

The structure is single-threaded. Callers sharing a set between threads must
guard it with their own lock.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, Optional, TypeVar

from .levels import MAX_LEVEL, PROMOTION_PROBABILITY, LevelGenerator, RandomSource

__all__ = ["OrderedSet", "OrderedSetIterator"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_value(value: Any) -> None:
    """Reject values that could not be placed in a total order."""
    if value is None:
        raise TypeError("OrderedSet does not accept None")
    if value != value:
        raise ValueError(f"{value!r} does not compare equal to itself")
    try:
        value < value
    except TypeError:
        raise TypeError(f"{type(value).__name__!r} values are not orderable") from None


class _Node(Generic[T]):
    __slots__ = ("value", "forward")

    def __init__(self, value: Optional[T], level: int):
        self.value = value
        self.forward: list[Optional[_Node[T]]] = [None] * level

    @property
    def level(self) -> int:
        return len(self.forward)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.value!r}/{self.level}>"


class OrderedSet(Generic[T]):
    """Set of distinct, totally ordered values kept in ascending order."""

    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        *,
        probability: float = PROMOTION_PROBABILITY,
        max_level: int = MAX_LEVEL,
        rng: Optional[RandomSource] = None,
        level_generator: Optional[Callable[[], int]] = None,
    ):
        gen = LevelGenerator(probability, max_level, rng)
        self._p = gen.probability
        self._max_level = gen.max_level
        self._random_level: Callable[[], int] = level_generator or gen
        self._level = 1  # highest lane currently holding a value (min 1)
        self._size = 0
        self._header: _Node[T] = _Node(None, self._max_level)
        logger.debug(
            "OrderedSet created (max_level=%d, probability=%s, custom_levels=%s)",
            self._max_level,
            self._p,
            level_generator is not None,
        )
        if items is not None:
            for item in items:
                self.add(item)

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def probability(self) -> float:
        return self._p

    # ------------------------------------------------------------------
    # Search primitive
    # ------------------------------------------------------------------
    def _find(self, value: T) -> tuple[list[_Node[T]], Optional[_Node[T]]]:
        """Return the predecessor trail of `value` and its level-0 candidate.

        ``update[i]`` is the last node on lane ``i`` holding a value strictly
        less than `value`; lanes above the current top are only reachable
        from the header, so their entries stay the header. The candidate is
        the first node whose value is ``>= value``, or ``None``.
        """
        update: list[_Node[T]] = [self._header] * self._max_level
        x = self._header
        for i in reversed(range(self._level)):
            while (nxt := x.forward[i]) and nxt.value < value:  # type: ignore[operator]
                x = nxt
            update[i] = x
        return update, x.forward[0]

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def add(self, value: T) -> None:
        """Insert `value`; adding a value already present does nothing."""
        _check_value(value)
        update, x = self._find(value)
        if x is not None and x.value == value:
            return
        lvl = self._random_level()
        if isinstance(lvl, bool) or not isinstance(lvl, int) or not 1 <= lvl <= self._max_level:
            raise ValueError(f"level generator returned {lvl!r}, expected 1..{self._max_level}")
        if lvl > self._level:
            self._level = lvl
        new_node: _Node[T] = _Node(value, lvl)
        for i in range(lvl):
            new_node.forward[i] = update[i].forward[i]
            update[i].forward[i] = new_node
        self._size += 1

    def remove(self, value: T) -> None:
        """Remove `value`; removing a missing value does nothing."""
        _check_value(value)
        update, x = self._find(value)
        if x is None or x.value != value:
            return
        for i in range(x.level):
            if update[i].forward[i] is not x:
                break
            update[i].forward[i] = x.forward[i]
        while self._level > 1 and self._header.forward[self._level - 1] is None:
            self._level -= 1
        self._size -= 1

    discard = remove

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def contains(self, value: T) -> bool:
        _check_value(value)
        _, x = self._find(value)
        return x is not None and x.value == value

    def length(self) -> int:
        return self._size

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> OrderedSetIterator[T]:
        return OrderedSetIterator(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class OrderedSetIterator(Iterator[T]):
    """One-shot ascending walk over lane 0 of an `OrderedSet`.

    Each call to ``iter(ordered_set)`` starts a fresh walk from the smallest
    value. Mutating the set while a walk is in progress is unsupported, except
    through :meth:`remove`, which drops the value most recently returned.
    """

    __slots__ = ("_owner", "_node", "_removable")

    def __init__(self, owner: OrderedSet[T]):
        self._owner = owner
        self._node: _Node[T] = owner._header
        self._removable = False

    def __iter__(self) -> OrderedSetIterator[T]:
        return self

    def __next__(self) -> T:
        nxt = self._node.forward[0]
        if nxt is None:
            raise StopIteration
        self._node = nxt
        self._removable = True
        return nxt.value  # type: ignore[return-value]

    def remove(self) -> None:
        """Remove the last value produced by :meth:`__next__` from the set."""
        if not self._removable:
            raise RuntimeError("remove() requires a preceding next() on this iterator")
        # An unlinked node keeps its forward pointers, so the walk resumes at
        # its former successor.
        self._owner.remove(self._node.value)  # type: ignore[arg-type]
        self._removable = False

"""Randomised level generation for skip-list nodes.

Every node draws its height once, at insertion time. Heights follow a
geometric distribution: a node reaches level ``k + 1`` with probability
``p ** k``, which keeps the expected search path logarithmic without any
rebalancing.
"""
from __future__ import annotations

import random
from typing import Optional, Protocol

__all__ = ["LevelGenerator", "MAX_LEVEL", "PROMOTION_PROBABILITY"]

MAX_LEVEL = 20  # ~1M elements before the top lane saturates at p = 0.5.
PROMOTION_PROBABILITY = 0.5


class RandomSource(Protocol):
    def random(self) -> float: ...


class LevelGenerator:
    """Callable drawing node heights in ``[1, max_level]`` from an injectable `rng`."""

    __slots__ = ("_p", "_max_level", "_rng")

    def __init__(
        self,
        probability: float = PROMOTION_PROBABILITY,
        max_level: int = MAX_LEVEL,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if not 0.0 < probability < 1.0:
            raise ValueError(f"probability must be in (0, 1), got {probability!r}")
        if isinstance(max_level, bool) or not isinstance(max_level, int) or max_level < 1:
            raise ValueError(f"max_level must be a positive int, got {max_level!r}")
        self._p = probability
        self._max_level = max_level
        self._rng = rng if rng is not None else random.Random()

    @property
    def probability(self) -> float:
        return self._p

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def expected_level(self) -> float:
        """Mean height ignoring the ``max_level`` cap."""
        return 1.0 / (1.0 - self._p)

    def __call__(self) -> int:
        lvl = 1
        while self._rng.random() < self._p and lvl < self._max_level:
            lvl += 1
        return lvl

    def __repr__(self) -> str:  # pragma: no cover
        return f"LevelGenerator(probability={self._p!r}, max_level={self._max_level!r})"

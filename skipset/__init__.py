"""skipset: a sorted set backed by a probabilistic skip list.

This package exposes `skipset.OrderedSet`, which keeps distinct values in
ascending order with logarithmic expected-time membership tests, insertions
and removals, together with the pluggable `LevelGenerator` that balances it.
"""

from __future__ import annotations

__all__ = [
    "LevelGenerator",
    "OrderedSet",
    "OrderedSetIterator",
    "VerboseIterator",
    "VerboseOrderedSet",
]

from .levels import LevelGenerator
from .ordered_set import OrderedSet, OrderedSetIterator
from .verbose import VerboseIterator, VerboseOrderedSet

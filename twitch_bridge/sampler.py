"""Uniform random selection of chat participants."""

from __future__ import annotations

import random
from collections.abc import Sequence
from secrets import SystemRandom

_system_random = SystemRandom()


def shuffle(items: list[str], rng: random.Random | None = None) -> None:
    """Fisher–Yates shuffle of ``items`` in place."""
    rng = rng or _system_random
    n = len(items)
    while n > 1:
        n -= 1
        k = rng.randrange(n + 1)
        items[k], items[n] = items[n], items[k]


def sample(
    participants: Sequence[str], count: int, rng: random.Random | None = None
) -> list[str]:
    """Return up to ``count`` participants drawn without replacement.

    Every permutation of the population is equally likely, so each element
    has the same chance to be picked. ``count <= 0`` yields ``[]`` and a
    ``count`` larger than the population yields all of it, shuffled. The
    input is never mutated.
    """
    if count <= 0 or not participants:
        return []
    pool = list(participants)
    shuffle(pool, rng)
    return pool[: min(count, len(pool))]


__all__ = ["sample", "shuffle"]

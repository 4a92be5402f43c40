#!/usr/bin/env python3
"""
Seeded Random Sequence
======================
Deterministic pseudo-random stream used for every draw the generator makes.

Two sequences built from the same seed and driven by the same calls return
the same values, across processes and interpreter runs. Nothing here reads
the clock or the environment once seeded; system entropy is only consulted
by new_seed() when the caller did not supply a seed.
"""

import random
import secrets
from typing import Sequence, TypeVar

T = TypeVar('T')

# Fresh seeds stay in the positive signed 32-bit range so they can be
# written down and passed to other tools unchanged.
MAX_SEED = 2**31 - 1


def new_seed() -> int:
    """Draw a fresh, non-zero seed from the system CSPRNG."""
    return secrets.randbelow(MAX_SEED) + 1


class RandomSequence:
    """
    Seeded random stream.

    Usage:
        rng = RandomSequence(42)
        idx = rng.next_index(10)
        item = rng.choice(['a', 'b', 'c'])
    """

    def __init__(self, seed: int):
        if seed < 0:
            # random.Random seeds from abs(seed), so -n and n would collide
            raise ValueError(f"seed must be non-negative, got {seed}")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next_index(self, bound: int) -> int:
        """Return an integer in [0, bound)."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def next_bool(self) -> bool:
        """Fair coin flip."""
        return self._rng.getrandbits(1) == 1

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high)."""
        if high <= low:
            raise ValueError(f"empty range [{low}, {high})")
        return low + self._rng.randrange(high - low)

    def choice(self, pool: Sequence[T]) -> T:
        """Pick one element with a single index draw."""
        if not pool:
            raise IndexError("Cannot choose from empty sequence")
        return pool[self.next_index(len(pool))]

    def __repr__(self) -> str:
        return f"RandomSequence(seed={self._seed})"


__all__ = ['RandomSequence', 'new_seed', 'MAX_SEED']

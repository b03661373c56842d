"""Seeded random number generator for reproducible map generation."""

from typing import List, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class SeededRNG:
    """Thin wrapper over numpy's Generator so every draw is seed-reproducible."""

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        """Get the current seed."""
        return self._seed

    def set_seed(self, seed: Optional[int]):
        """Restart the stream from a new seed."""
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        """Generate a random float in [0.0, 1.0)."""
        return float(self._rng.random())

    def randint(self, a: int, b: int) -> int:
        """Generate a random integer N such that a <= N <= b."""
        return int(self._rng.integers(a, b, endpoint=True))

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        return seq[int(self._rng.integers(len(seq)))]

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        """Choose k unique random elements from the population."""
        picks = self._rng.choice(len(population), size=k, replace=False)
        return [population[int(i)] for i in picks]


# Global instance for convenience
default_rng = SeededRNG()

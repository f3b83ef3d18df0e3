"""SeededRng — the single source of randomness for a World.

Every stochastic roll in the simulation goes through one instance seeded
from the scenario's ``rng_seed``, consumed in roster order, so two runs of
the same scenario draw the same numbers in the same places.
"""

from __future__ import annotations

import random


class SeededRng:
    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def roll(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._rng.random()

    def range(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self.roll() * (high - low)

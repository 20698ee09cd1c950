"""
Seeded RNG for deterministic, replayable match simulation.
"""
from __future__ import annotations

import random
from typing import Protocol


class EntropySource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float: ...


class SeededRNG:
    """Wrapper around random.Random; one per season advance, never the module-level generator."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

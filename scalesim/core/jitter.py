from __future__ import annotations

import random
from typing import Optional


class Jitter:
    """Bounded random perturbation for calculated metrics.

    Wraps its own ``random.Random`` so a seeded instance reproduces the same
    sequence of draws for the same sequence of calls.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.seed = seed
        self._rng = rng or random.Random(seed)

    def spread(self, width: float) -> float:
        """Return a uniform draw from ``[-width / 2, width / 2]``."""
        if width <= 0:
            return 0.0
        return (self._rng.random() - 0.5) * width


class NoJitter(Jitter):
    """Jitter source that never perturbs anything."""

    def __init__(self) -> None:
        super().__init__(seed=0)

    def spread(self, width: float) -> float:
        return 0.0


def resolve_jitter(jitter: Optional[Jitter] = None, seed: Optional[int] = None) -> Jitter:
    if jitter is not None:
        return jitter
    return Jitter(seed=seed)

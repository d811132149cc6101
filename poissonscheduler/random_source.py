"""Uniform random sources consumed by the generator.

A source only needs ``random() -> float`` returning values in [0, 1).
``numpy.random.Generator`` and ``random.Random`` both qualify, so tests can
hand in either a seeded generator or a scripted stand-in.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    def random(self) -> float:
        """Return a uniform sample in the half-open interval [0, 1)."""
        ...


def default_random_source(seed: int | None = None) -> np.random.Generator:
    """Return a fresh numpy Generator, never the process-wide global state."""
    return np.random.default_rng(seed)

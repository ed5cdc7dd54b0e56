"""Pluggable random source for the telemetry generator.

A ``numpy.random.Generator`` already satisfies the protocol, so production code
passes ``np.random.default_rng(seed)`` and tests can supply a scripted source.
"""

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Minimal sampling interface used by the generator and the driver."""

    def random(self) -> float:
        """Return a float in [0, 1)."""
        ...

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high)."""
        ...


def default_random_source(seed: int | None = None) -> RandomSource:
    """Create the default numpy-backed random source."""
    return np.random.default_rng(seed)

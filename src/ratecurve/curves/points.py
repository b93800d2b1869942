"""
Curve pillars.

A pillar is a maturity with a solved continuously-compounded zero rate.
The ordered list of pillars is everything an interpolator needs.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class CurvePoint:
    """A single bootstrapped pillar."""
    t: float  # Year fraction
    zero_rate: float  # Continuously compounded

    def __post_init__(self):
        if self.t < 0:
            raise ValueError(f"Pillar maturity must be non-negative, got {self.t}")

    @property
    def discount_factor(self) -> float:
        return float(np.exp(-self.zero_rate * self.t))


def points_to_arrays(points: Sequence[CurvePoint]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split pillars into (times, zero_rates) arrays.

    Raises ValueError if the list is empty or maturities are not
    strictly increasing.
    """
    if len(points) == 0:
        raise ValueError("Need at least 1 pillar to build an interpolator")

    times = np.array([p.t for p in points], dtype=np.float64)
    values = np.array([p.zero_rate for p in points], dtype=np.float64)

    if np.any(np.diff(times) <= 0):
        raise ValueError(f"Pillar maturities must be strictly increasing: {times.tolist()}")

    return times, values


__all__ = [
    "CurvePoint",
    "points_to_arrays",
]

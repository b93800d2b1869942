"""
Zero curve representation.

The Curve class provides:
- Zero rate z(t)
- Discount factor P(0,t)
- Forward rate f(t1, t2)
- Instantaneous forward rate f(t)

A Curve wraps bootstrapped pillars and one interpolator built at
construction. It is never mutated afterwards; every query re-evaluates
the interpolator.

Conventions:
    - Zero rates are continuously compounded
    - Times are year fractions
    - Discount factor at t=0 is 1.0
"""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..config import FORWARD_BUMP, LOG_DF_FLOOR, MIN_TIME, CurveConfig
from ..instruments import MarketInstrument
from .bootstrap import build_zero_curve
from .interpolation import Interpolator, create_interpolator
from .points import CurvePoint


class Curve:
    """
    Zero-coupon yield curve.

    Attributes:
        points: Pillars sorted by maturity, one per maturity
        interpolator: Built interpolator owned by this curve
    """

    def __init__(self, points: Iterable[CurvePoint], interpolator: Interpolator):
        # Last pillar wins on duplicate maturities
        by_time: Dict[float, CurvePoint] = {}
        for p in points:
            by_time[p.t] = p

        self._points: Tuple[CurvePoint, ...] = tuple(sorted(by_time.values(), key=lambda p: p.t))
        self._interpolator = interpolator
        self._interpolator.build(self._points)

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        return self._points

    @property
    def interpolator_name(self) -> str:
        """Class name of the interpolator, used for titles and export labels."""
        return type(self._interpolator).__name__

    def zero_rate(self, t: float) -> float:
        """
        Get zero rate z(t).

        Args:
            t: Year fraction

        Returns:
            Continuously compounded zero rate
        """
        return self._interpolator.evaluate(t)

    def discount_factor(self, t: float) -> float:
        """Get discount factor P(0,t) = exp(-z(t) * t)."""
        return float(np.exp(-self.zero_rate(t) * t))

    def instantaneous_forward(self, t: float, h: float = FORWARD_BUMP) -> float:
        """
        Get instantaneous forward rate f(t).

        Central difference on log discount factors:
        f(t) = -(log P(t+h) - log P(max(t-h, MIN_TIME))) / (2h)
        """
        p_down = max(self.discount_factor(max(t - h, MIN_TIME)), LOG_DF_FLOOR)
        p_up = max(self.discount_factor(t + h), LOG_DF_FLOOR)
        return float(-(np.log(p_up) - np.log(p_down)) / (2 * h))

    def forward_rate(self, t1: float, t2: float, continuous: bool = False) -> float:
        """
        Get forward rate f(t1, t2).

        Args:
            t1: Start time
            t2: End time
            continuous: Return the continuously compounded forward
                instead of the simple one

        Returns:
            Forward rate between t1 and t2
        """
        if t2 <= t1:
            raise ValueError("t2 must be greater than t1")

        df1 = self.discount_factor(t1)
        df2 = self.discount_factor(t2)
        delta = t2 - t1

        if continuous:
            return float(-np.log(df2 / df1) / delta)
        return float((df1 / df2 - 1) / delta)

    def get_nodes(self) -> List[Tuple[float, float, float]]:
        """
        Get all pillars.

        Returns:
            List of (time, discount_factor, zero_rate) tuples
        """
        return [(p.t, p.discount_factor, p.zero_rate) for p in self._points]

    def get_node_times(self) -> np.ndarray:
        return np.array([p.t for p in self._points])

    def get_node_rates(self) -> np.ndarray:
        return np.array([p.zero_rate for p in self._points])

    def get_node_dfs(self) -> np.ndarray:
        return np.array([p.discount_factor for p in self._points])

    def __repr__(self) -> str:
        return f"Curve(nodes={len(self._points)}, method={self.interpolator_name})"


def build_curve(
    instruments: Iterable[MarketInstrument],
    config: Optional[CurveConfig] = None
) -> Curve:
    """
    Bootstrap instruments and wrap the pillars in a Curve.

    Args:
        instruments: Market instruments (any order, duplicates allowed)
        config: Interpolation settings (defaults to CurveConfig())

    Returns:
        Curve built with the configured interpolator
    """
    config = config or CurveConfig()
    points = build_zero_curve(instruments)
    interpolator = create_interpolator(
        config.method,
        ultimate_forward_rate=config.ultimate_forward_rate,
        lambda_=config.lambda_,
    )
    return Curve(points, interpolator)


__all__ = [
    "Curve",
    "CurvePoint",
    "build_curve",
]

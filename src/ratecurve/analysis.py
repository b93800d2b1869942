"""
Curve shape analysis.

Computes, for a list of maturities, the zero rate, discount factor,
instantaneous forward and finite-difference slope and convexity of the
zero curve. Results are immutable Metric records, convertible to a
pandas DataFrame for reporting.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, List

import pandas as pd

from .config import DERIVATIVE_BUMP, MIN_TIME
from .curves.curve import Curve


METRIC_COLUMNS = ["T", "Zero", "DF", "FwdInst", "Slope", "Convexity"]


@dataclass(frozen=True)
class Metric:
    """
    Curve metrics at one maturity.

    Attributes:
        t: Maturity in years
        zero: Continuously compounded zero rate Z(t)
        df: Discount factor exp(-Z(t) * t)
        fwd_inst: Instantaneous forward rate
        slope: Central-difference estimate of Z'(t)
        convexity: Central-difference estimate of Z''(t)
    """
    t: float
    zero: float
    df: float
    fwd_inst: float
    slope: float
    convexity: float


class CurveAnalyzer:
    """
    Numerical analysis of a zero curve.

    Attributes:
        curve: Curve being analysed
        h: Finite-difference step in years
    """

    def __init__(self, curve: Curve, h: float = DERIVATIVE_BUMP):
        if curve is None:
            raise ValueError("curve is required")
        if h <= 0:
            raise ValueError("Finite-difference step must be positive")
        self.curve = curve
        self.h = h

    def metric_at(self, t: float) -> Metric:
        """
        Compute metrics at a single maturity.

        The lower finite-difference point is clamped at MIN_TIME so the
        curve is never queried at non-positive times.
        """
        h = self.h
        z = self.curve.zero_rate(t)
        z_down = self.curve.zero_rate(max(t - h, MIN_TIME))
        z_up = self.curve.zero_rate(t + h)

        return Metric(
            t=float(t),
            zero=z,
            df=self.curve.discount_factor(t),
            fwd_inst=self.curve.instantaneous_forward(t),
            slope=(z_up - z_down) / (2 * h),
            convexity=(z_up - 2 * z + z_down) / (h * h),
        )

    def compute_metrics(self, tenors: Iterable[float]) -> List[Metric]:
        """Compute metrics for each maturity in tenors."""
        return [self.metric_at(t) for t in tenors]


def metrics_to_frame(metrics: Iterable[Metric]) -> pd.DataFrame:
    """
    Convert metrics to a DataFrame.

    Returns:
        DataFrame with columns T, Zero, DF, FwdInst, Slope, Convexity
    """
    rows = [list(asdict(m).values()) for m in metrics]
    return pd.DataFrame(rows, columns=METRIC_COLUMNS)


__all__ = [
    "Metric",
    "CurveAnalyzer",
    "metrics_to_frame",
    "METRIC_COLUMNS",
]

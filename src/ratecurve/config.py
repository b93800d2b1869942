"""
Numeric constants and run configuration for curve construction.

Tolerances, iteration caps and numerical floors used by the solvers and
interpolators live here so they can be audited in one place.

Provides:
- InterpolationMethod: Enumeration of the supported interpolators
- CurveConfig: Settings consumed by the curve build / analysis workflow
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


# Bisection bracket shared by the yield solver and the swap bootstrap
BISECTION_LOWER = -0.05
BISECTION_UPPER = 0.20
BISECTION_MAX_ITER = 100

YIELD_TOLERANCE = 1e-10
SWAP_TOLERANCE = 1e-12

# Implied discount factors must lie in (0, MAX_DISCOUNT_FACTOR)
MAX_DISCOUNT_FACTOR = 1.5

# Silent numerical floors
DF_FLOOR = 1e-10
LOG_DF_FLOOR = 1e-12
PIVOT_FLOOR = 1e-14

# Finite differences
MIN_TIME = 1e-6
FORWARD_BUMP = 1e-4
DERIVATIVE_BUMP = 1e-3

# Bonds quoting a coupon below this (in percent) are treated as zero-coupon
ZERO_COUPON_THRESHOLD = 0.5

DEFAULT_UFR = 0.025
DEFAULT_LAMBDA = 0.1

DEFAULT_ANALYSIS_TENORS = [0.25, 0.5, 1, 2, 3, 5, 7, 10, 15, 20, 30]


class InterpolationMethod(Enum):
    """Interpolation scheme applied to bootstrapped zero rates."""
    LINEAR = "Linear"
    CUBIC_SPLINE = "CubicSpline"
    HAGAN_WEST = "HaganWest"
    SMITH_WILSON = "SmithWilson"

    @classmethod
    def from_string(cls, s: str) -> "InterpolationMethod":
        """Parse interpolation method from a name or common alias."""
        mapping = {
            "linear": cls.LINEAR,
            "lin": cls.LINEAR,
            "cubicspline": cls.CUBIC_SPLINE,
            "cubic": cls.CUBIC_SPLINE,
            "spline": cls.CUBIC_SPLINE,
            "haganwest": cls.HAGAN_WEST,
            "monotone": cls.HAGAN_WEST,
            "monotonehermite": cls.HAGAN_WEST,
            "smithwilson": cls.SMITH_WILSON,
            "sw": cls.SMITH_WILSON,
        }
        key = s.lower().replace("_", "").replace("-", "").replace(" ", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown interpolation method: {s}")


@dataclass
class CurveConfig:
    """
    Settings for building and analysing a curve.

    Attributes:
        method: Interpolator applied to the bootstrapped pillars
        ultimate_forward_rate: Smith-Wilson UFR (continuous)
        lambda_: Smith-Wilson reversion speed (alpha), must be > 0
        analysis_tenors: Maturities at which metrics are reported
        export_start: First maturity of the exported curve grid
        export_end: Last maturity of the exported curve grid (inclusive)
        export_step: Grid spacing in years
    """
    method: InterpolationMethod = InterpolationMethod.HAGAN_WEST
    ultimate_forward_rate: float = DEFAULT_UFR
    lambda_: float = DEFAULT_LAMBDA
    analysis_tenors: List[float] = field(
        default_factory=lambda: list(DEFAULT_ANALYSIS_TENORS)
    )
    export_start: float = 0.25
    export_end: float = 30.0
    export_step: float = 0.25

    def __post_init__(self):
        if isinstance(self.method, str):
            self.method = InterpolationMethod.from_string(self.method)
        if self.lambda_ <= 0:
            raise ValueError(f"lambda must be > 0, got {self.lambda_}")
        if self.export_step <= 0:
            raise ValueError("export_step must be positive")
        if self.export_end < self.export_start:
            raise ValueError("export_end must not be before export_start")


__all__ = [
    "BISECTION_LOWER",
    "BISECTION_UPPER",
    "BISECTION_MAX_ITER",
    "YIELD_TOLERANCE",
    "SWAP_TOLERANCE",
    "MAX_DISCOUNT_FACTOR",
    "DF_FLOOR",
    "LOG_DF_FLOOR",
    "PIVOT_FLOOR",
    "MIN_TIME",
    "FORWARD_BUMP",
    "DERIVATIVE_BUMP",
    "ZERO_COUPON_THRESHOLD",
    "DEFAULT_UFR",
    "DEFAULT_LAMBDA",
    "DEFAULT_ANALYSIS_TENORS",
    "InterpolationMethod",
    "CurveConfig",
]

"""
Curves package - zero curve construction and interpolation.

Provides:
- Curve: Zero curve with discount factors and forward rates
- Bootstrapper: Sequential bootstrap from deposits, swaps and bonds
- Interpolators: Linear, natural cubic spline, Hagan-West, Smith-Wilson
"""

from .points import CurvePoint
from .curve import Curve, build_curve
from .bootstrap import (
    Bootstrapper,
    BootstrapError,
    build_zero_curve,
    interpolated_discount_factor,
)
from .interpolation import (
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    HaganWestInterpolator,
    SmithWilsonInterpolator,
    create_interpolator,
)

__all__ = [
    "CurvePoint",
    "Curve",
    "build_curve",
    "Bootstrapper",
    "BootstrapError",
    "build_zero_curve",
    "interpolated_discount_factor",
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "HaganWestInterpolator",
    "SmithWilsonInterpolator",
    "create_interpolator",
]

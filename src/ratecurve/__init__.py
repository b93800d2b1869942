"""
RateCurve: Zero-Coupon Curve Bootstrap & Interpolation Library

A modular library for:
- Bootstrapping continuously compounded zero rates from deposits,
  swaps and bonds
- Interpolating the pillars with linear, natural cubic spline,
  monotone Hermite (Hagan-West) or Smith-Wilson schemes
- Querying zero rates, discount factors and forward rates
- Analysing curve slope/convexity and exporting results to CSV

Scope: single-curve, single-currency; times are year fractions.
"""

__version__ = "0.1.0"

# Core modules
from .config import CurveConfig, InterpolationMethod
from .instruments import InstrumentType, MarketInstrument, prepare_instruments
from .yields import compute_yield, bond_price_from_yield

# Curves
from .curves import (
    CurvePoint,
    Curve,
    build_curve,
    Bootstrapper,
    BootstrapError,
    build_zero_curve,
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    HaganWestInterpolator,
    SmithWilsonInterpolator,
    create_interpolator,
)

# Analysis
from .analysis import CurveAnalyzer, Metric, metrics_to_frame

# I/O
from .data import load_instruments
from .reporting import export_curve, export_metrics, format_instruments

__all__ = [
    # Version
    "__version__",
    # Config
    "CurveConfig",
    "InterpolationMethod",
    # Instruments
    "InstrumentType",
    "MarketInstrument",
    "prepare_instruments",
    "compute_yield",
    "bond_price_from_yield",
    # Curves
    "CurvePoint",
    "Curve",
    "build_curve",
    "Bootstrapper",
    "BootstrapError",
    "build_zero_curve",
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "HaganWestInterpolator",
    "SmithWilsonInterpolator",
    "create_interpolator",
    # Analysis
    "CurveAnalyzer",
    "Metric",
    "metrics_to_frame",
    # I/O
    "load_instruments",
    "export_curve",
    "export_metrics",
    "format_instruments",
]

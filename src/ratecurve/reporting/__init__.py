"""
Reporting module for curve outputs.

Provides:
- Curve sampling to tables
- CSV export of curves and metrics
- Console tables of loaded quotes
"""

from .export import (
    curve_to_frame,
    instruments_to_frame,
    format_instruments,
    export_curve,
    export_metrics,
)


__all__ = [
    "curve_to_frame",
    "instruments_to_frame",
    "format_instruments",
    "export_curve",
    "export_metrics",
]

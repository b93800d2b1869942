"""
Curve export functionality.

Provides formatted console output and CSV export for:
- Sampled curves (zero rate, discount factor, instantaneous forward)
- Curve metrics (slope, convexity)
- Loaded market instruments

Numbers are written with a '.' decimal separator regardless of locale.
"""

from pathlib import Path
from typing import Iterable, Union

import numpy as np
import pandas as pd

from ..analysis import Metric, metrics_to_frame
from ..curves.curve import Curve
from ..instruments import MarketInstrument


CURVE_COLUMNS = ["T", "Zero", "DF", "Forward"]


def curve_to_frame(
    curve: Curve,
    t_start: float,
    t_end: float,
    step: float = 0.25
) -> pd.DataFrame:
    """
    Sample a curve on a regular maturity grid.

    Args:
        curve: Curve to sample
        t_start: First maturity (inclusive)
        t_end: Last maturity (inclusive when on the grid)
        step: Grid spacing in years

    Returns:
        DataFrame with columns T, Zero, DF, Forward
    """
    if step <= 0:
        raise ValueError("step must be positive")

    n_steps = int(np.floor((t_end - t_start) / step + 1e-9))
    rows = []
    for i in range(n_steps + 1):
        t = t_start + i * step
        rows.append({
            "T": t,
            "Zero": curve.zero_rate(t),
            "DF": curve.discount_factor(t),
            "Forward": curve.instantaneous_forward(t),
        })

    return pd.DataFrame(rows, columns=CURVE_COLUMNS)


def instruments_to_frame(instruments: Iterable[MarketInstrument]) -> pd.DataFrame:
    """Tabulate instruments for display."""
    rows = [{
        "Type": inst.kind.value,
        "Maturity (Y)": inst.maturity_years,
        "Rate": inst.rate,
        "Fixed Freq": inst.fixed_freq,
        "Coupon": inst.coupon_pct,
    } for inst in instruments]

    return pd.DataFrame(rows, columns=["Type", "Maturity (Y)", "Rate", "Fixed Freq", "Coupon"])


def format_instruments(instruments: Iterable[MarketInstrument]) -> str:
    """Render instruments as a console table."""
    return instruments_to_frame(instruments).to_string(index=False)


def _prepare_path(path: Union[str, Path]) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def export_curve(
    curve: Curve,
    path: Union[str, Path],
    t_start: float,
    t_end: float,
    step: float = 0.25
) -> str:
    """
    Export a sampled curve to CSV.

    Columns: T,Zero,DF,Forward

    Returns:
        Path of the created file
    """
    output_path = _prepare_path(path)
    curve_to_frame(curve, t_start, t_end, step).to_csv(output_path, index=False)
    return str(output_path)


def export_metrics(metrics: Iterable[Metric], path: Union[str, Path]) -> str:
    """
    Export curve metrics to CSV.

    Columns: T,Zero,DF,FwdInst,Slope,Convexity

    Returns:
        Path of the created file
    """
    output_path = _prepare_path(path)
    metrics_to_frame(metrics).to_csv(output_path, index=False)
    return str(output_path)


__all__ = [
    "CURVE_COLUMNS",
    "curve_to_frame",
    "instruments_to_frame",
    "format_instruments",
    "export_curve",
    "export_metrics",
]

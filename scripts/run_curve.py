#!/usr/bin/env python
"""
Zero Curve Construction Script

This script runs the full curve workflow:
1. Load market quotes (deposits, swaps, bonds)
2. Bootstrap zero-rate pillars
3. Interpolate with the chosen method
4. Compute curve metrics at standard tenors
5. Export curve and metrics to CSV

Usage:
    python run_curve.py [--data QUOTES] [--method METHOD] [--output-dir OUTPUT_DIR]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ratecurve.config import CurveConfig, DEFAULT_LAMBDA, DEFAULT_UFR
from ratecurve.curves import BootstrapError, Curve, build_zero_curve, create_interpolator
from ratecurve.analysis import CurveAnalyzer, metrics_to_frame
from ratecurve.data import load_instruments
from ratecurve.reporting import export_curve, export_metrics, format_instruments


def main():
    """Main entry point."""
    script_dir = Path(__file__).parent

    parser = argparse.ArgumentParser(description="Zero curve bootstrap and smoothing")
    parser.add_argument(
        "--data",
        type=str,
        default=str(script_dir.parent / "data" / "sample_quotes.csv"),
        help="Quote file (CSV or Excel)"
    )
    parser.add_argument(
        "--method",
        type=str,
        default="HaganWest",
        help="Interpolation: Linear, CubicSpline, HaganWest or SmithWilson"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./output",
        help="Output directory for CSV files"
    )
    parser.add_argument("--ufr", type=float, default=DEFAULT_UFR, help="Smith-Wilson ultimate forward rate")
    parser.add_argument("--lam", type=float, default=DEFAULT_LAMBDA, help="Smith-Wilson reversion speed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = CurveConfig(method=args.method, ultimate_forward_rate=args.ufr, lambda_=args.lam)
    output_dir = Path(args.output_dir)

    print("="*60)
    print("ZERO CURVE CONSTRUCTION")
    print(f"Method: {config.method.value}")
    print("="*60)

    # Step 1: Load data
    instruments = load_instruments(args.data)
    print(f"\nLoaded instruments ({len(instruments)}):")
    print(format_instruments(instruments))

    # Step 2: Bootstrap
    try:
        points = build_zero_curve(instruments)
    except BootstrapError as e:
        print(f"\nBootstrap failed: {e}")
        return 1

    # Step 3: Interpolate
    interpolator = create_interpolator(
        config.method,
        ultimate_forward_rate=config.ultimate_forward_rate,
        lambda_=config.lambda_,
    )
    curve = Curve(points, interpolator)
    print(f"\n{curve}")

    # Step 4: Analysis
    metrics = CurveAnalyzer(curve).compute_metrics(config.analysis_tenors)
    print("\nCurve metrics:")
    print(metrics_to_frame(metrics).to_string(index=False))

    # Step 5: Export
    curve_file = export_curve(
        curve,
        output_dir / "curve_points.csv",
        config.export_start,
        config.export_end,
        config.export_step,
    )
    metrics_file = export_metrics(metrics, output_dir / "metrics.csv")

    print(f"\nCurve exported to: {curve_file}")
    print(f"Metrics exported to: {metrics_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Unit tests for curve analysis.
"""

import numpy as np
import pytest

from ratecurve.analysis import METRIC_COLUMNS, CurveAnalyzer, Metric, metrics_to_frame
from ratecurve.curves import Curve, CurvePoint, CubicSplineInterpolator, LinearInterpolator


@pytest.fixture
def linear_curve():
    points = [CurvePoint(1.0, 0.02), CurvePoint(3.0, 0.04), CurvePoint(10.0, 0.04)]
    return Curve(points, LinearInterpolator())


class TestCurveAnalyzer:
    """Tests for CurveAnalyzer."""

    def test_metric_values(self, linear_curve):
        metric = CurveAnalyzer(linear_curve).metric_at(2.0)

        assert metric.t == 2.0
        assert metric.zero == pytest.approx(0.03, abs=1e-15)
        assert metric.df == pytest.approx(np.exp(-0.06), abs=1e-15)
        assert metric.slope == pytest.approx(0.01, abs=1e-9)
        assert metric.convexity == pytest.approx(0.0, abs=1e-6)
        assert metric.fwd_inst == pytest.approx(0.03 + 2.0 * 0.01, abs=1e-8)

    def test_flat_region(self, linear_curve):
        metric = CurveAnalyzer(linear_curve).metric_at(6.0)

        assert metric.slope == pytest.approx(0.0, abs=1e-12)
        assert metric.fwd_inst == pytest.approx(0.04, abs=1e-9)

    def test_spline_derivatives(self):
        """Test finite differences match the analytic spline derivatives."""
        points = [CurvePoint(t, z) for t, z in [(1, 0.02), (2, 0.03), (5, 0.035), (10, 0.033)]]
        interp = CubicSplineInterpolator()
        curve = Curve(points, interp)

        t = 3.0
        a, b, c, d = interp.coefficients[1]
        dx = t - 2.0

        metric = CurveAnalyzer(curve).metric_at(t)
        assert metric.slope == pytest.approx(b + 2*c*dx + 3*d*dx**2, abs=1e-6)
        assert metric.convexity == pytest.approx(2*c + 6*d*dx, abs=1e-4)

    def test_lower_point_clamped(self, linear_curve):
        metric = CurveAnalyzer(linear_curve).metric_at(1e-4)
        assert np.isfinite(metric.slope)
        assert np.isfinite(metric.convexity)

    def test_compute_metrics(self, linear_curve):
        tenors = [0.5, 1, 2, 5]
        metrics = CurveAnalyzer(linear_curve).compute_metrics(tenors)

        assert [m.t for m in metrics] == tenors
        assert all(isinstance(m, Metric) for m in metrics)

    def test_invalid_step(self, linear_curve):
        with pytest.raises(ValueError):
            CurveAnalyzer(linear_curve, h=0.0)


class TestMetricsFrame:
    """Tests for metrics_to_frame."""

    def test_columns(self, linear_curve):
        metrics = CurveAnalyzer(linear_curve).compute_metrics([1, 2, 3])
        df = metrics_to_frame(metrics)

        assert list(df.columns) == METRIC_COLUMNS
        assert len(df) == 3
        assert df["Zero"].iloc[1] == pytest.approx(0.03)

    def test_empty(self):
        df = metrics_to_frame([])
        assert list(df.columns) == METRIC_COLUMNS
        assert df.empty

"""
Interpolation methods for zero curves.

Provides:
- LinearInterpolator: Linear interpolation on zero rates
- CubicSplineInterpolator: Natural cubic spline on zero rates
- HaganWestInterpolator: Monotone cubic Hermite (Fritsch-Carlson) on zero rates
- SmithWilsonInterpolator: Smith-Wilson kernel fit with UFR extrapolation

All interpolators take pillars (maturity, zero rate) and return a
continuously compounded zero rate. They are built exactly once and
extrapolate flat outside the pillar range, except Smith-Wilson which
reverts to the ultimate forward rate beyond the last pillar.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

import numpy as np
from scipy.linalg import solve_banded

from ..config import (
    DEFAULT_LAMBDA,
    DEFAULT_UFR,
    DF_FLOOR,
    PIVOT_FLOOR,
    InterpolationMethod,
)
from .points import CurvePoint, points_to_arrays


class Interpolator(ABC):
    """Abstract base class for zero-rate interpolation."""

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    @property
    def is_built(self) -> bool:
        return self.times is not None

    def build(self, points: Sequence[CurvePoint]) -> None:
        """
        Calibrate the interpolator to the pillars.

        Args:
            points: Pillars sorted by strictly increasing maturity

        Raises:
            ValueError: Empty pillar list or non-increasing maturities
            RuntimeError: Interpolator was already built
        """
        if self.is_built:
            raise RuntimeError(f"{type(self).__name__} is already built")

        times, values = points_to_arrays(points)
        self._fit(times, values)
        self.times = times
        self.values = values

    def evaluate(self, t: float) -> float:
        """
        Interpolated zero rate at time t.

        Args:
            t: Year fraction

        Returns:
            Continuously compounded zero rate
        """
        if not self.is_built:
            raise RuntimeError(f"{type(self).__name__} not built")
        return self._evaluate(float(t))

    def __call__(self, t: float) -> float:
        """Convenience method to call evaluate."""
        return self.evaluate(t)

    def _segment(self, t: float) -> int:
        """Index i of the segment [times[i], times[i+1]] containing t."""
        idx = np.searchsorted(self.times, t, side='right') - 1
        return int(max(0, min(idx, len(self.times) - 2)))

    @abstractmethod
    def _fit(self, times: np.ndarray, values: np.ndarray) -> None:
        pass

    @abstractmethod
    def _evaluate(self, t: float) -> float:
        pass


class LinearInterpolator(Interpolator):
    """
    Linear interpolation.

    Simple linear interpolation between pillars.
    Extrapolates flat beyond boundaries.
    """

    def _fit(self, times: np.ndarray, values: np.ndarray) -> None:
        pass

    def _evaluate(self, t: float) -> float:
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])

        idx = self._segment(t)
        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.values[idx], self.values[idx + 1]

        w = (t - t0) / (t1 - t0)
        return float((1 - w) * v0 + w * v1)


class CubicSplineInterpolator(Interpolator):
    """
    Natural cubic spline interpolation.

    Second derivative is zero at both end pillars. With two pillars the
    spline is the straight line between them.
    """

    def __init__(self):
        super().__init__()
        self.coefficients: Optional[np.ndarray] = None  # Shape: (n-1, 4) for [a, b, c, d]

    def _fit(self, times: np.ndarray, values: np.ndarray) -> None:
        """
        Solve the tridiagonal system for the quadratic coefficients c,
        then derive a, b, d on each interval.
        """
        n = len(times) - 1
        if n == 0:
            self.coefficients = np.zeros((0, 4))
            return

        h = np.diff(times)
        slopes = np.diff(values) / h

        # Banded storage: row 0 upper, row 1 main, row 2 lower diagonal
        ab = np.zeros((3, n + 1))
        rhs = np.zeros(n + 1)

        ab[1, 0] = 1.0
        ab[1, n] = 1.0
        if n > 1:
            ab[0, 2:] = h[1:]
            ab[1, 1:n] = 2 * (h[:-1] + h[1:])
            ab[2, :n - 1] = h[:-1]
            rhs[1:n] = 3 * (slopes[1:] - slopes[:-1])

        c = solve_banded((1, 1), ab, rhs)

        # S_i(x) = a_i + b_i*(x-x_i) + c_i*(x-x_i)^2 + d_i*(x-x_i)^3
        self.coefficients = np.column_stack([
            values[:-1],
            slopes - h * (c[1:] + 2 * c[:-1]) / 3,
            c[:-1],
            (c[1:] - c[:-1]) / (3 * h),
        ])

    def _evaluate(self, t: float) -> float:
        # Flat extrapolation
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])

        idx = self._segment(t)
        dx = t - self.times[idx]
        a, b, c, d = self.coefficients[idx]

        return float(a + b*dx + c*dx**2 + d*dx**3)


class HaganWestInterpolator(Interpolator):
    """
    Monotone cubic Hermite interpolation on zero rates.

    Node slopes follow Fritsch-Carlson: end nodes take the adjacent
    secant, interior nodes a weighted average of both secants, zeroed
    at local extrema and rescaled into the monotonicity region. The
    interpolant never leaves [min(y_i, y_i+1), max(y_i, y_i+1)] on a
    segment.
    """

    def __init__(self):
        super().__init__()
        self.slopes: Optional[np.ndarray] = None

    def _fit(self, times: np.ndarray, values: np.ndarray) -> None:
        n = len(times)
        m = np.zeros(n)
        if n == 1:
            self.slopes = m
            return

        h = np.diff(times)
        d = np.diff(values) / h

        m[0] = d[0]
        m[-1] = d[-1]

        for i in range(1, n - 1):
            if d[i-1] * d[i] <= 0:
                # Local extremum
                m[i] = 0.0
                continue

            w1 = 2 * h[i] + h[i-1]
            w2 = h[i] + 2 * h[i-1]
            m[i] = (w1 * d[i-1] + w2 * d[i]) / (w1 + w2)

            a = m[i] / d[i-1]
            b = m[i] / d[i]
            if a*a + b*b > 9:
                m[i] *= 3 / np.sqrt(a*a + b*b)

        self.slopes = m

    def _evaluate(self, t: float) -> float:
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])

        i = self._segment(t)
        h = self.times[i+1] - self.times[i]
        s = (t - self.times[i]) / h

        h00 = (1 + 2*s) * (1 - s)**2
        h10 = s * (1 - s)**2
        h01 = s**2 * (3 - 2*s)
        h11 = s**2 * (s - 1)

        return float(
            h00 * self.values[i] + h * h10 * self.slopes[i]
            + h01 * self.values[i+1] + h * h11 * self.slopes[i+1]
        )


class SmithWilsonInterpolator(Interpolator):
    """
    Smith-Wilson curve fit.

    Discount factors are written as

        P(t) = exp(-UFR * t) + sum_j xi_j * W(t, u_j)

    with W the Wilson kernel and xi solved so that P matches the pillar
    discount factors exactly. Beyond the last pillar the forward rate
    reverts to the UFR at speed lambda. Below the first pillar the
    first pillar's zero rate is returned, since the kernel fit is
    unreliable at very short maturities.

    Attributes:
        ultimate_forward_rate: Long-horizon forward rate (continuous)
        lambda_: Reversion speed (alpha)
    """

    def __init__(self, ultimate_forward_rate: float, lambda_: float):
        super().__init__()
        if lambda_ <= 0:
            raise ValueError(f"SmithWilsonInterpolator: lambda must be > 0, got {lambda_}")

        self.ultimate_forward_rate = ultimate_forward_rate
        self.lambda_ = lambda_
        self.xi: Optional[np.ndarray] = None

    def wilson_kernel(self, t, u):
        """
        Wilson kernel W(t, u), vectorised over numpy arrays.

        W(t,u) = exp(-UFR*(t+u)) * [alpha*min(t,u)
                 - 0.5*exp(-alpha*max(t,u)) * (exp(alpha*min(t,u)) - exp(-alpha*min(t,u)))]
        """
        alpha = self.lambda_
        lo = np.minimum(t, u)
        hi = np.maximum(t, u)
        inner = alpha * lo - 0.5 * np.exp(-alpha * hi) * (np.exp(alpha * lo) - np.exp(-alpha * lo))
        return np.exp(-self.ultimate_forward_rate * (t + u)) * inner

    def _fit(self, times: np.ndarray, values: np.ndarray) -> None:
        pillar_dfs = np.exp(-values * times)
        mu = np.exp(-self.ultimate_forward_rate * times)

        kernel = self.wilson_kernel(times[:, None], times[None, :])
        self.xi = _solve_linear_system(kernel, pillar_dfs - mu)

    def _evaluate(self, t: float) -> float:
        # Z(0) = 0 by convention
        if t <= 0:
            return 0.0
        if t < self.times[0]:
            return float(self.values[0])

        df = np.exp(-self.ultimate_forward_rate * t) + np.dot(self.xi, self.wilson_kernel(t, self.times))
        df = max(float(df), DF_FLOOR)

        return float(-np.log(df) / t)


def _solve_linear_system(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    Pivots smaller than PIVOT_FLOOR in magnitude are replaced by
    +/-PIVOT_FLOOR instead of failing.
    """
    M = np.array(A, dtype=np.float64)
    B = np.array(b, dtype=np.float64)
    n = len(B)

    for k in range(n):
        i_max = k + int(np.argmax(np.abs(M[k:, k])))
        if i_max != k:
            M[[k, i_max]] = M[[i_max, k]]
            B[[k, i_max]] = B[[i_max, k]]

        piv = _floor_pivot(M[k, k])
        factors = M[k+1:, k] / piv
        B[k+1:] -= factors * B[k]
        M[k+1:, k:] -= np.outer(factors, M[k, k:])

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (B[i] - np.dot(M[i, i+1:], x[i+1:])) / _floor_pivot(M[i, i])

    return x


def _floor_pivot(piv: float) -> float:
    if abs(piv) < PIVOT_FLOOR:
        return float(np.copysign(PIVOT_FLOOR, piv))
    return float(piv)


def create_interpolator(
    method: Union[InterpolationMethod, str],
    ultimate_forward_rate: float = DEFAULT_UFR,
    lambda_: float = DEFAULT_LAMBDA
) -> Interpolator:
    """
    Factory function to create an interpolator.

    Args:
        method: InterpolationMethod or a name such as "linear", "cubic_spline",
            "hagan_west", "smith_wilson"
        ultimate_forward_rate: Smith-Wilson UFR (ignored by other methods)
        lambda_: Smith-Wilson reversion speed (ignored by other methods)

    Returns:
        Unbuilt Interpolator instance
    """
    if isinstance(method, str):
        method = InterpolationMethod.from_string(method)

    if method == InterpolationMethod.LINEAR:
        return LinearInterpolator()
    elif method == InterpolationMethod.CUBIC_SPLINE:
        return CubicSplineInterpolator()
    elif method == InterpolationMethod.HAGAN_WEST:
        return HaganWestInterpolator()
    elif method == InterpolationMethod.SMITH_WILSON:
        return SmithWilsonInterpolator(ultimate_forward_rate, lambda_)
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "HaganWestInterpolator",
    "SmithWilsonInterpolator",
    "create_interpolator",
]

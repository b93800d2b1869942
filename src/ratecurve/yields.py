"""
Bond yield-to-maturity solver.

Yields are annually compounded actuarial yields on annual coupon periods.
The coupon case is solved by plain bisection on a fixed bracket.
"""

import logging

import numpy as np

from .config import (
    BISECTION_LOWER,
    BISECTION_UPPER,
    BISECTION_MAX_ITER,
    YIELD_TOLERANCE,
)

logger = logging.getLogger(__name__)


def compute_yield(coupon_pct: float, maturity_years: float, price_pct: float) -> float:
    """
    Solve for a bond's yield-to-maturity from its clean price.

    Args:
        coupon_pct: Annual coupon in percent of face (e.g. 3.5)
        maturity_years: Time to maturity in years
        price_pct: Clean price in percent of face (e.g. 102.186)

    Returns:
        Actuarial yield (decimal)

    A price implying a yield outside the bisection bracket yields a value
    next to the bracket boundary; no error is raised.
    """
    if maturity_years <= 0:
        raise ValueError(f"Maturity must be positive, got {maturity_years}")
    if price_pct <= 0:
        raise ValueError(f"Price must be positive, got {price_pct}")

    if coupon_pct == 0:
        return (100.0 / price_pct) ** (1.0 / maturity_years) - 1.0

    c = coupon_pct / 100.0
    price = price_pct / 100.0
    n_periods = max(1, int(round(maturity_years)))
    periods = np.arange(1, n_periods + 1)

    def pricing_error(y: float) -> float:
        discount = (1.0 + y) ** -periods
        return float(c * discount.sum() + discount[-1] - price)

    lo, hi = BISECTION_LOWER, BISECTION_UPPER
    for _ in range(BISECTION_MAX_ITER):
        mid = 0.5 * (lo + hi)
        f_mid = pricing_error(mid)

        if abs(f_mid) < YIELD_TOLERANCE:
            return mid

        if np.sign(pricing_error(lo)) == np.sign(f_mid):
            lo = mid
        else:
            hi = mid

    mid = 0.5 * (lo + hi)
    logger.debug(
        "Yield bisection ended without tolerance: coupon=%s maturity=%s price=%s -> %.10f",
        coupon_pct, maturity_years, price_pct, mid,
    )
    return mid


def bond_price_from_yield(
    coupon_pct: float,
    maturity_years: float,
    yield_: float,
    fixed_freq: int = 1
) -> float:
    """
    Price (fraction of face) implied by an actuarial yield.

    Coupons of ``coupon_pct / 100 * T / n`` are paid on ``n = round(T * freq)``
    evenly spaced dates and discounted at ``yield_ / freq`` per period.
    """
    if maturity_years <= 0:
        raise ValueError(f"Maturity must be positive, got {maturity_years}")

    if coupon_pct == 0:
        return (1.0 + yield_) ** -maturity_years

    freq = fixed_freq if fixed_freq > 0 else 1
    n = max(1, int(round(maturity_years * freq)))
    coupon_cf = coupon_pct / 100.0 * maturity_years / n
    discount = (1.0 + yield_ / freq) ** -np.arange(1, n + 1)

    return float(coupon_cf * discount.sum() + discount[-1])


__all__ = [
    "compute_yield",
    "bond_price_from_yield",
]

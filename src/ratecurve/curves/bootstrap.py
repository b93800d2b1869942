"""
Curve bootstrapping engine.

Implements the sequential bootstrap of a zero curve:
1. Deduplicate and sort instruments by maturity
2. Solve one pillar per instrument, discounting intermediate cashflows
   off the pillars already solved
3. Return the pillars sorted by maturity

Supports:
- Deposits (closed form)
- Vanilla swaps (bisection on the final zero rate)
- Coupon and zero-coupon bonds (closed form on the final discount factor)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..config import (
    BISECTION_LOWER,
    BISECTION_UPPER,
    BISECTION_MAX_ITER,
    MAX_DISCOUNT_FACTOR,
    SWAP_TOLERANCE,
)
from ..instruments import InstrumentType, MarketInstrument, prepare_instruments
from ..yields import bond_price_from_yield
from .points import CurvePoint

logger = logging.getLogger(__name__)


class BootstrapError(RuntimeError):
    """
    Raised when an instrument cannot be fitted to the curve built so far.

    Attributes:
        instrument: The failing instrument
        details: Intermediate values computed before the failure
    """

    def __init__(self, message: str, instrument: MarketInstrument, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.instrument = instrument
        self.details = details or {}


def interpolated_discount_factor(
    t: float,
    pillars: Sequence[CurvePoint],
    fallback_rate: float
) -> float:
    """
    Discount factor off the pillars solved so far.

    Args:
        t: Target time
        pillars: Already solved pillars, sorted by maturity
        fallback_rate: Flat rate used while no pillar exists yet

    Returns:
        exp(-z * t) with z linear in zero rate between pillars and
        flat beyond them
    """
    if t <= 0:
        return 1.0

    if not pillars:
        return float(np.exp(-fallback_rate * t))

    first, last = pillars[0], pillars[-1]
    if t <= first.t:
        return float(np.exp(-first.zero_rate * t))
    if t >= last.t:
        return float(np.exp(-last.zero_rate * t))

    times = [p.t for p in pillars]
    idx = int(np.searchsorted(times, t, side='right')) - 1
    a, b = pillars[idx], pillars[idx + 1]

    w = (t - a.t) / (b.t - a.t)
    z = a.zero_rate * (1 - w) + b.zero_rate * w
    return float(np.exp(-z * t))


@dataclass
class Bootstrapper:
    """
    Bootstrap a zero curve from deposits, swaps and bonds.

    Each instrument produces exactly one pillar; later pillars are
    priced off the curve shape implied by the earlier ones.

    Attributes:
        lower: Lower bound of the swap bisection bracket
        upper: Upper bound of the swap bisection bracket
        max_iter: Bisection iteration cap
        tolerance: Bisection stopping tolerance on the leg mismatch
        max_discount_factor: Upper bound on implied bond discount factors
    """
    lower: float = BISECTION_LOWER
    upper: float = BISECTION_UPPER
    max_iter: int = BISECTION_MAX_ITER
    tolerance: float = SWAP_TOLERANCE
    max_discount_factor: float = MAX_DISCOUNT_FACTOR

    def bootstrap(self, instruments: Iterable[MarketInstrument]) -> List[CurvePoint]:
        """
        Solve the zero curve pillars.

        Args:
            instruments: Market instruments in any order

        Returns:
            Pillars sorted by ascending maturity

        Raises:
            BootstrapError: The instrument set is numerically inconsistent
        """
        ordered = prepare_instruments(instruments)
        pillars: Tuple[CurvePoint, ...] = ()

        for inst in ordered:
            if inst.kind == InstrumentType.DEPOSIT:
                zero = self._solve_deposit(inst)
            elif inst.kind == InstrumentType.SWAP:
                zero = self._solve_swap(inst, pillars)
            elif inst.kind == InstrumentType.BOND:
                zero = self._solve_bond(inst, pillars)
            else:
                raise ValueError(f"Unknown instrument type: {inst.kind}")

            point = CurvePoint(inst.maturity_years, zero)
            logger.debug("Solved %s %.4gY -> zero %.8f", inst.kind.value, point.t, point.zero_rate)
            pillars = tuple(sorted(pillars + (point,), key=lambda p: p.t))

        logger.info("Bootstrapped %d pillars from %d instruments", len(pillars), len(ordered))
        return list(pillars)

    def _solve_deposit(self, inst: MarketInstrument) -> float:
        """DF(T) = 1 / (1 + R * T)."""
        T = inst.maturity_years
        df = 1.0 / (1.0 + inst.rate * T)
        if df <= 0:
            self._fail(inst, "Deposit implies a non-positive discount factor", df=df)
        return float(-np.log(df) / T)

    def _solve_swap(self, inst: MarketInstrument, pillars: Tuple[CurvePoint, ...]) -> float:
        """
        Solve the final zero rate z(T) such that fixed leg = floating leg.

        Fixed leg:    S * (sum_{k<n} DF(k*dt) * dt + exp(-z*T) * dt)
        Floating leg: 1 - exp(-z*T)
        """
        T = inst.maturity_years
        S = inst.rate
        freq = inst.fixed_freq if inst.fixed_freq > 0 else 1
        n = int(T * freq)
        dt = 1.0 / freq

        # Interior coupons only depend on prior pillars
        known_annuity = sum(
            interpolated_discount_factor(k * dt, pillars, S) * dt
            for k in range(1, n)
        )

        def leg_mismatch(z_T: float) -> float:
            df_T = np.exp(-z_T * T)
            fixed_leg = S * (known_annuity + df_T * dt)
            float_leg = 1.0 - df_T
            return float(fixed_leg - float_leg)

        lo, hi = self.lower, self.upper
        f_lo, f_hi = leg_mismatch(lo), leg_mismatch(hi)
        if np.sign(f_lo) == np.sign(f_hi):
            self._fail(
                inst,
                f"Swap bisection bracket [{lo}, {hi}] does not bound a root",
                f_lower=f_lo,
                f_upper=f_hi,
                known_annuity=known_annuity,
            )

        for _ in range(self.max_iter):
            mid = 0.5 * (lo + hi)
            f_mid = leg_mismatch(mid)

            if abs(f_mid) < self.tolerance:
                return mid

            if np.sign(leg_mismatch(lo)) == np.sign(f_mid):
                lo = mid
            else:
                hi = mid

        return 0.5 * (lo + hi)

    def _solve_bond(self, inst: MarketInstrument, pillars: Tuple[CurvePoint, ...]) -> float:
        """
        Solve the final discount factor from the bond price.

        Zero-coupon: DF(T) = price
        Coupon:      DF(T) = (price - A) / B, with
                     A = sum_{k<n} cf * DF(k*dt) and B = cf + 1
        """
        T = inst.maturity_years
        price = inst.price_fraction
        if price is None:
            price = bond_price_from_yield(inst.coupon_pct, T, inst.rate, inst.fixed_freq)

        if inst.coupon_pct == 0:
            if not 0 < price < self.max_discount_factor:
                self._fail(inst, "Zero-coupon price outside (0, 1.5)", price=price)
            return float(-np.log(price) / T)

        freq = inst.fixed_freq if inst.fixed_freq > 0 else 1
        n = max(1, int(round(T * freq)))
        dt = T / n
        coupon_cf = inst.coupon_pct / 100.0 * dt

        A = sum(
            coupon_cf * interpolated_discount_factor(k * dt, pillars, inst.rate)
            for k in range(1, n)
        )
        B = coupon_cf + 1.0
        df_T = (price - A) / B

        if not 0 < df_T < self.max_discount_factor:
            self._fail(
                inst,
                "Bond implies a discount factor outside (0, 1.5)",
                price=price,
                coupons_pv=A,
                final_cashflow=B,
                discount_factor=df_T,
            )

        return float(-np.log(df_T) / T)

    def _fail(self, inst: MarketInstrument, message: str, **details) -> None:
        text = f"{message} for {inst.kind.value} {inst.maturity_years}Y: {details}"
        logger.error(text)
        raise BootstrapError(text, inst, details)


def build_zero_curve(instruments: Iterable[MarketInstrument]) -> List[CurvePoint]:
    """
    Convenience function to bootstrap pillars with default settings.

    Args:
        instruments: Market instruments

    Returns:
        Pillars sorted by ascending maturity
    """
    return Bootstrapper().bootstrap(instruments)


__all__ = [
    "Bootstrapper",
    "BootstrapError",
    "build_zero_curve",
    "interpolated_discount_factor",
]

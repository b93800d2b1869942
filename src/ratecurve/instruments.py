"""
Market instruments used to bootstrap the zero curve.

Defines:
- Deposit: money-market deposit quoted as a simple rate
- Swap: vanilla swap quoted as a par fixed rate
- Bond: coupon or zero-coupon bond quoted by price and/or yield

Each MarketInstrument is a read-only input to the bootstrap. Times are
year fractions; no calendar or day count is applied.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .yields import compute_yield


class InstrumentType(Enum):
    """Kind of curve instrument."""
    DEPOSIT = "Deposit"
    SWAP = "Swap"
    BOND = "Bond"

    @classmethod
    def from_string(cls, s: str) -> "InstrumentType":
        """Parse instrument type from string representation."""
        mapping = {
            "DEPOSIT": cls.DEPOSIT,
            "DEPO": cls.DEPOSIT,
            "SWAP": cls.SWAP,
            "IRS": cls.SWAP,
            "BOND": cls.BOND,
            "OAT": cls.BOND,
        }
        key = s.strip().upper()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown instrument type: {s}")


@dataclass
class MarketInstrument:
    """
    A single quoted instrument.

    Attributes:
        kind: Deposit, swap or bond
        maturity_years: Time to maturity in years (> 0)
        rate: Simple rate (deposit), par rate (swap) or actuarial yield (bond)
        coupon_pct: Annual coupon in percent of face (bond only, 0 = zero-coupon)
        fixed_freq: Fixed leg / coupon payments per year (0 for zero-coupon)
        price_fraction: Clean price as a fraction of face (bond only)
    """
    kind: InstrumentType
    maturity_years: float
    rate: float
    coupon_pct: float = 0.0
    fixed_freq: int = 1
    price_fraction: Optional[float] = None

    def __post_init__(self):
        if isinstance(self.kind, str):
            self.kind = InstrumentType.from_string(self.kind)
        if self.maturity_years <= 0:
            raise ValueError(f"Maturity must be positive, got {self.maturity_years}")
        if self.fixed_freq < 0:
            raise ValueError(f"Payment frequency must be non-negative, got {self.fixed_freq}")
        if self.price_fraction is not None and self.price_fraction <= 0:
            raise ValueError(f"Price must be positive, got {self.price_fraction}")

    @property
    def key(self) -> Tuple[InstrumentType, float]:
        return (self.kind, self.maturity_years)

    @property
    def is_zero_coupon(self) -> bool:
        return self.kind == InstrumentType.BOND and self.coupon_pct == 0

    @classmethod
    def deposit(cls, maturity_years: float, rate: float) -> "MarketInstrument":
        return cls(InstrumentType.DEPOSIT, maturity_years, rate, fixed_freq=0)

    @classmethod
    def swap(cls, maturity_years: float, rate: float, fixed_freq: int = 1) -> "MarketInstrument":
        return cls(InstrumentType.SWAP, maturity_years, rate, fixed_freq=fixed_freq)

    @classmethod
    def bond(
        cls,
        maturity_years: float,
        coupon_pct: float,
        price_pct: float,
        fixed_freq: Optional[int] = None
    ) -> "MarketInstrument":
        """
        Create a bond from its quoted price, deriving the yield.

        Args:
            maturity_years: Time to maturity in years
            coupon_pct: Annual coupon in percent (0 for zero-coupon)
            price_pct: Clean price in percent of face
            fixed_freq: Coupons per year (defaults to 1, or 0 for zero-coupon)
        """
        if fixed_freq is None:
            fixed_freq = 0 if coupon_pct == 0 else 1
        yield_ = compute_yield(coupon_pct, maturity_years, price_pct)
        return cls(
            kind=InstrumentType.BOND,
            maturity_years=maturity_years,
            rate=yield_,
            coupon_pct=coupon_pct,
            fixed_freq=fixed_freq,
            price_fraction=price_pct / 100.0,
        )


def prepare_instruments(instruments: Iterable[MarketInstrument]) -> List[MarketInstrument]:
    """
    Deduplicate and order instruments for a bootstrap run.

    Entries sharing (kind, maturity) are collapsed to the last one seen,
    then the survivors are sorted by ascending maturity.
    """
    latest: Dict[Tuple[InstrumentType, float], MarketInstrument] = {}
    for inst in instruments:
        latest[inst.key] = inst

    return sorted(latest.values(), key=lambda x: x.maturity_years)


__all__ = [
    "InstrumentType",
    "MarketInstrument",
    "prepare_instruments",
]

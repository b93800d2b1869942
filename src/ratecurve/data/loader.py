"""
Market data loading.

Reads instrument quotes from CSV or Excel into MarketInstrument objects.

Two sheet layouts are recognised (column names are case-insensitive):

Bond sheet (one government bond per row):
    Maturity, Ask Price, [Coupon], [DONOTSELECT]
    - Ask Price and Coupon are in percent of face
    - Coupons below 0.5% are treated as zero-coupon
    - When DONOTSELECT is present only rows marked "NON" are kept

Generic sheet (mixed instruments):
    Type, Maturity, Rate, [FixedFreq], [Coupon], [Price]
    - Type is Deposit, Swap or Bond
    - Price is in percent of face; bond yields are derived from it
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from ..config import ZERO_COUPON_THRESHOLD
from ..instruments import InstrumentType, MarketInstrument, prepare_instruments

logger = logging.getLogger(__name__)


def read_quotes(path: Union[str, Path]) -> pd.DataFrame:
    """Read a quote sheet from CSV or Excel, dispatching on the file suffix."""
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xlsm", ".xls"):
        return pd.read_excel(path)
    return pd.read_csv(path, comment="#")


def _column_map(df: pd.DataFrame) -> Dict[str, str]:
    return {str(c).strip().lower(): c for c in df.columns}


def _require(columns: Dict[str, str], *names: str) -> None:
    missing = [n for n in names if n.lower() not in columns]
    if missing:
        raise ValueError(f"Quote sheet is missing required columns: {missing}")


def instruments_from_frame(df: pd.DataFrame) -> List[MarketInstrument]:
    """
    Convert a quote DataFrame to instruments.

    Args:
        df: Quotes in either the bond or the generic layout

    Returns:
        Instruments deduplicated by (type, maturity) and sorted by maturity
    """
    columns = _column_map(df)
    if "type" in columns:
        instruments = _generic_instruments(df, columns)
    else:
        instruments = _bond_instruments(df, columns)

    logger.info("Loaded %d instruments", len(instruments))
    return prepare_instruments(instruments)


def _bond_instruments(df: pd.DataFrame, columns: Dict[str, str]) -> List[MarketInstrument]:
    _require(columns, "maturity", "ask price")

    if "donotselect" in columns:
        flag = df[columns["donotselect"]].astype(str).str.strip().str.upper()
        skipped = int((flag != "NON").sum())
        df = df[flag == "NON"]
        logger.debug("Skipped %d deselected rows", skipped)

    instruments = []
    for _, row in df.iterrows():
        coupon = float(row[columns["coupon"]]) if "coupon" in columns else 0.0
        if pd.isna(coupon) or coupon < ZERO_COUPON_THRESHOLD:
            coupon = 0.0

        instruments.append(MarketInstrument.bond(
            maturity_years=float(row[columns["maturity"]]),
            coupon_pct=coupon,
            price_pct=float(row[columns["ask price"]]),
        ))

    return instruments


def _generic_instruments(df: pd.DataFrame, columns: Dict[str, str]) -> List[MarketInstrument]:
    _require(columns, "type", "maturity")

    def value(row, name, default=None):
        if name not in columns or pd.isna(row[columns[name]]):
            return default
        return row[columns[name]]

    instruments = []
    for _, row in df.iterrows():
        kind = InstrumentType.from_string(str(row[columns["type"]]))
        maturity = float(row[columns["maturity"]])
        price = value(row, "price")

        if kind == InstrumentType.BOND and price is not None:
            coupon = float(value(row, "coupon", 0.0))
            freq = value(row, "fixedfreq")
            instruments.append(MarketInstrument.bond(
                maturity_years=maturity,
                coupon_pct=coupon,
                price_pct=float(price),
                fixed_freq=None if freq is None else int(freq),
            ))
            continue

        rate = value(row, "rate")
        if rate is None:
            raise ValueError(f"{kind.value} {maturity}Y has neither a rate nor a price")

        coupon = float(value(row, "coupon", 0.0))
        default_freq = 0 if kind == InstrumentType.DEPOSIT or (kind == InstrumentType.BOND and coupon == 0) else 1
        instruments.append(MarketInstrument(
            kind=kind,
            maturity_years=maturity,
            rate=float(rate),
            coupon_pct=coupon,
            fixed_freq=int(value(row, "fixedfreq", default_freq)),
        ))

    return instruments


def load_instruments(path: Union[str, Path]) -> List[MarketInstrument]:
    """
    Load market instruments from a CSV or Excel file.

    Args:
        path: Quote file

    Returns:
        Instruments ready for bootstrapping
    """
    return instruments_from_frame(read_quotes(path))


__all__ = [
    "read_quotes",
    "instruments_from_frame",
    "load_instruments",
]

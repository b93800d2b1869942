"""
Unit tests for market data loading and the end-to-end workflow.
"""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from ratecurve.analysis import CurveAnalyzer
from ratecurve.config import CurveConfig, InterpolationMethod
from ratecurve.curves import build_curve
from ratecurve.data import instruments_from_frame, load_instruments
from ratecurve.instruments import InstrumentType
from ratecurve.reporting import export_curve


SAMPLE_QUOTES = Path(__file__).parent.parent / "data" / "sample_quotes.csv"


class TestGenericLayout:
    """Tests for the mixed instrument layout."""

    def test_sample_file(self):
        instruments = load_instruments(SAMPLE_QUOTES)

        assert len(instruments) == 11
        kinds = [i.kind for i in instruments]
        assert kinds.count(InstrumentType.DEPOSIT) == 2
        assert kinds.count(InstrumentType.SWAP) == 5
        assert kinds.count(InstrumentType.BOND) == 4

        maturities = [i.maturity_years for i in instruments]
        assert maturities == sorted(maturities)

    def test_bond_yield_derived_from_price(self):
        df = pd.DataFrame({
            "Type": ["Bond"],
            "Maturity": [5.0],
            "Rate": [np.nan],
            "Coupon": [4.0],
            "Price": [100.0],
        })
        bond = instruments_from_frame(df)[0]

        assert bond.rate == pytest.approx(0.04, abs=1e-8)
        assert bond.price_fraction == pytest.approx(1.0)

    def test_default_frequencies(self):
        df = pd.DataFrame({
            "type": ["deposit", "swap"],
            "maturity": [0.5, 2.0],
            "rate": [0.03, 0.031],
        })
        deposit, swap = instruments_from_frame(df)

        assert deposit.fixed_freq == 0
        assert swap.fixed_freq == 1

    def test_missing_rate(self):
        df = pd.DataFrame({"Type": ["Swap"], "Maturity": [2.0], "Rate": [np.nan]})
        with pytest.raises(ValueError):
            instruments_from_frame(df)

    def test_unknown_type(self):
        df = pd.DataFrame({"Type": ["Future"], "Maturity": [2.0], "Rate": [0.03]})
        with pytest.raises(ValueError):
            instruments_from_frame(df)


class TestBondLayout:
    """Tests for the government bond sheet layout."""

    def test_csv(self, tmp_path):
        path = tmp_path / "bonds.csv"
        path.write_text(
            "Maturity,Ask Price,Coupon,DONOTSELECT\n"
            "2,99.5,2.5,NON\n"
            "5,98.0,3.0,NON\n"
            "7,80.0,0.2,NON\n"
            "10,95.0,3.0,OUI\n"
        )
        instruments = load_instruments(path)

        assert [i.maturity_years for i in instruments] == [2.0, 5.0, 7.0]
        assert all(i.kind == InstrumentType.BOND for i in instruments)
        assert instruments[2].is_zero_coupon
        assert instruments[2].rate == pytest.approx((100 / 80) ** (1 / 7) - 1, abs=1e-12)

    def test_without_coupon_column(self):
        df = pd.DataFrame({"Maturity": [3.0], "Ask Price": [90.0]})
        bond = instruments_from_frame(df)[0]

        assert bond.is_zero_coupon
        assert bond.fixed_freq == 0

    def test_missing_columns(self):
        df = pd.DataFrame({"Maturity": [3.0], "Bid Price": [90.0]})
        with pytest.raises(ValueError):
            instruments_from_frame(df)

    def test_excel(self, tmp_path):
        pytest.importorskip("openpyxl")
        path = tmp_path / "bonds.xlsx"
        pd.DataFrame({
            "Maturity": [2.0, 5.0],
            "Ask Price": [99.5, 98.0],
            "Coupon": [2.5, 3.0],
        }).to_excel(path, index=False)

        assert len(load_instruments(path)) == 2


class TestWorkflow:
    """End-to-end tests on the sample quotes."""

    @pytest.mark.parametrize("method", list(InterpolationMethod))
    def test_build_and_export(self, method, tmp_path):
        config = CurveConfig(method=method)
        curve = build_curve(load_instruments(SAMPLE_QUOTES), config)

        assert len(curve.points) == 11
        for p in curve.points:
            assert curve.zero_rate(p.t) == pytest.approx(p.zero_rate, abs=1e-8)

        metrics = CurveAnalyzer(curve).compute_metrics(config.analysis_tenors)
        assert all(np.isfinite(m.zero) and 0 < m.df <= 1 for m in metrics)

        path = export_curve(
            curve, tmp_path / "curve.csv", config.export_start, config.export_end, config.export_step
        )
        assert len(pd.read_csv(path)) == 120

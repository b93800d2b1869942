"""
Unit tests for market instruments and configuration.
"""

import pytest

from ratecurve.config import CurveConfig, InterpolationMethod
from ratecurve.instruments import InstrumentType, MarketInstrument, prepare_instruments
from ratecurve.yields import compute_yield


class TestInstrumentType:
    """Tests for instrument type parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("Deposit", InstrumentType.DEPOSIT),
        ("SWAP", InstrumentType.SWAP),
        (" bond ", InstrumentType.BOND),
        ("OAT", InstrumentType.BOND),
    ])
    def test_from_string(self, text, expected):
        assert InstrumentType.from_string(text) == expected

    def test_unknown(self):
        with pytest.raises(ValueError):
            InstrumentType.from_string("FRA")


class TestMarketInstrument:
    """Tests for MarketInstrument construction."""

    def test_string_kind(self):
        inst = MarketInstrument("swap", 2.0, 0.03)
        assert inst.kind == InstrumentType.SWAP

    def test_invalid_maturity(self):
        with pytest.raises(ValueError):
            MarketInstrument.deposit(0.0, 0.03)
        with pytest.raises(ValueError):
            MarketInstrument.swap(-1.0, 0.03)

    def test_invalid_frequency(self):
        with pytest.raises(ValueError):
            MarketInstrument.swap(2.0, 0.03, fixed_freq=-1)

    def test_invalid_price(self):
        with pytest.raises(ValueError):
            MarketInstrument(InstrumentType.BOND, 2.0, 0.03, price_fraction=0.0)

    def test_bond_factory_derives_yield(self):
        bond = MarketInstrument.bond(7.0, coupon_pct=3.5, price_pct=102.0)

        assert bond.kind == InstrumentType.BOND
        assert bond.rate == compute_yield(3.5, 7.0, 102.0)
        assert bond.price_fraction == pytest.approx(1.02)
        assert bond.fixed_freq == 1
        assert not bond.is_zero_coupon

    def test_zero_coupon_bond_factory(self):
        bond = MarketInstrument.bond(5.0, coupon_pct=0.0, price_pct=80.0)

        assert bond.fixed_freq == 0
        assert bond.is_zero_coupon


class TestPrepareInstruments:
    """Tests for deduplication and ordering."""

    def test_sorted_by_maturity(self):
        instruments = [
            MarketInstrument.swap(5.0, 0.03),
            MarketInstrument.deposit(0.5, 0.02),
            MarketInstrument.swap(2.0, 0.025),
        ]
        result = prepare_instruments(instruments)
        assert [i.maturity_years for i in result] == [0.5, 2.0, 5.0]

    def test_last_duplicate_wins(self):
        first = MarketInstrument.swap(2.0, 0.025)
        last = MarketInstrument.swap(2.0, 0.027)
        result = prepare_instruments([first, MarketInstrument.deposit(1.0, 0.02), last])

        assert len(result) == 2
        assert result[1] is last

    def test_same_maturity_different_kind_kept(self):
        result = prepare_instruments([
            MarketInstrument.deposit(1.0, 0.02),
            MarketInstrument.swap(1.0, 0.021),
        ])
        assert len(result) == 2


class TestCurveConfig:
    """Tests for CurveConfig."""

    def test_defaults(self):
        config = CurveConfig()
        assert config.method == InterpolationMethod.HAGAN_WEST
        assert config.ultimate_forward_rate == 0.025
        assert config.lambda_ == 0.1

    def test_method_from_string(self):
        assert CurveConfig(method="cubic").method == InterpolationMethod.CUBIC_SPLINE

    def test_invalid_lambda(self):
        with pytest.raises(ValueError):
            CurveConfig(lambda_=0.0)

    def test_invalid_grid(self):
        with pytest.raises(ValueError):
            CurveConfig(export_step=0.0)
        with pytest.raises(ValueError):
            CurveConfig(export_start=10.0, export_end=5.0)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            InterpolationMethod.from_string("akima")

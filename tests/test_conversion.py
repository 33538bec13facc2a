# tests/test_conversion.py
"""
Conversion Tests - Unit Tests for the Conversion Engine

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecard.application.conversion (ConversionEngine)
- ratecard.domain (RateSnapshot, InvalidAmount)
"""
import math  # NaN and infinity checks

import pytest  # Testing framework for writing and running tests

from datetime import datetime, timezone  # Date/time utilities for test data

from ratecard.application.conversion import ConversionEngine  # Engine under test
from ratecard.domain.errors import InvalidAmount  # Negative amount error
from ratecard.domain.models import RateSnapshot  # Domain models for test data

TS = datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)
CURRENT = RateSnapshot({"USD": 1.0, "EUR": 0.93, "COP": 3900.0, "VES": 36.5})


@pytest.fixture
def engine():
    return ConversionEngine()


class TestConvert:
    def test_usd_base_with_identical_previous(self, engine):
        results = engine.convert(100, "USD", CURRENT, CURRENT, TS)
        by_code = {r.currency: r for r in results}

        assert by_code["EUR"].value == pytest.approx(93.00)
        assert by_code["COP"].value == pytest.approx(390000.0)
        assert by_code["VES"].value == pytest.approx(3650.0)
        assert all(r.change_percent == 0 for r in results)
        assert all(r.is_positive_trend for r in results)

    def test_eur_base_cross_rate_to_usd(self, engine):
        results = engine.convert(100, "EUR", CURRENT, CURRENT, TS)
        usd = next(r for r in results if r.currency == "USD")
        assert usd.value == pytest.approx(107.53, abs=0.01)

    def test_order_is_declared_order_minus_base(self, engine):
        assert [r.currency for r in engine.convert(1, "USD", CURRENT, CURRENT, TS)] == ["VES", "EUR", "COP"]
        assert [r.currency for r in engine.convert(1, "EUR", CURRENT, CURRENT, TS)] == ["USD", "VES", "COP"]

    def test_change_percent_uses_cross_rates(self, engine):
        previous = RateSnapshot({"USD": 1.0, "EUR": 0.93, "COP": 3900.0, "VES": 40.0})
        results = engine.convert(1, "EUR", CURRENT, previous, TS)
        ves = next(r for r in results if r.currency == "VES")

        expected = ((36.5 / 0.93) - (40.0 / 0.93)) / (40.0 / 0.93) * 100
        assert ves.change_percent == pytest.approx(expected)
        assert not ves.is_positive_trend

    def test_missing_previous_entries_mean_no_change(self, engine):
        results = engine.convert(10, "COP", CURRENT, {"EUR": 0.9}, TS)
        by_code = {r.currency: r for r in results}
        assert by_code["USD"].change_percent == pytest.approx(0.0)
        assert by_code["EUR"].change_percent != 0

    def test_display_timestamp_is_attached(self, engine):
        assert all(r.display_timestamp == TS for r in engine.convert(5, "VES", CURRENT, CURRENT, TS))

    def test_zero_amount(self, engine):
        assert all(r.value == 0 for r in engine.convert(0, "USD", CURRENT, CURRENT, TS))

    def test_nan_amount_yields_no_results(self, engine):
        assert engine.convert(math.nan, "USD", CURRENT, CURRENT, TS) == []

    def test_negative_amount_is_rejected(self, engine):
        with pytest.raises(InvalidAmount):
            engine.convert(-50, "USD", CURRENT, CURRENT, TS)

    def test_unknown_base_raises(self, engine):
        with pytest.raises(KeyError):
            engine.convert(1, "GBP", CURRENT, CURRENT, TS)

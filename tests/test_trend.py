# tests/test_trend.py
"""
Trend Tests - Unit Tests for Simulated Comparison Rates

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecard.application.trend (TrendEstimator)
- ratecard.domain.models (RateSnapshot)
"""
import random  # Seeded Random for deterministic trends

import pytest  # Testing framework for writing and running tests

from datetime import datetime, timedelta, timezone  # Fixed instants and day offsets for the refresh rules

from ratecard.application.trend import TrendEstimator  # Simulated trend baseline
from ratecard.domain.models import CURRENCY_ORDER, RateSnapshot  # Domain models for test data

CURRENT = RateSnapshot({"USD": 1.0, "EUR": 0.93, "COP": 3900.0, "VES": 36.5})
END = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _EdgeRandom(random.Random):
    """Always returns one end of the requested range."""

    def __init__(self, high: bool):
        super().__init__(0)
        self.high = high

    def uniform(self, a, b):
        return b if self.high else a


class TestSynthesize:
    @pytest.mark.parametrize("seed", range(25))
    def test_every_rate_within_band(self, seed):
        estimator = TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0, rng=random.Random(seed))
        previous = estimator.synthesize(CURRENT)

        assert set(previous) == set(CURRENCY_ORDER)
        for code, rate in CURRENT.items():
            assert rate * 0.985 * (1 - 1e-12) <= previous[code] <= rate * 1.015 * (1 + 1e-12)

    @pytest.mark.parametrize("high", [True, False])
    def test_band_edges_are_inclusive(self, high):
        estimator = TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0, rng=_EdgeRandom(high))
        previous = estimator.synthesize(CURRENT)
        factor = 1.015 if high else 0.985
        for code, rate in CURRENT.items():
            assert previous[code] == pytest.approx(rate * factor)

    def test_currencies_are_perturbed_independently(self):
        estimator = TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0, rng=random.Random(7))
        previous = estimator.synthesize(CURRENT)
        ratios = {round(previous[code] / CURRENT[code], 12) for code in CURRENT}
        assert len(ratios) > 1

    def test_zero_jitter_reproduces_current(self):
        estimator = TrendEstimator(jitter_pct=0.0, history_jitter_pct=0.0)
        assert estimator.synthesize(CURRENT) == CURRENT

    def test_estimator_is_marked_simulated(self):
        assert TrendEstimator.is_simulated is True


class TestHistory:
    def test_length_order_and_last_value(self):
        estimator = TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0, rng=random.Random(3))
        points = estimator.history(1.0753, days=7, end=END)

        assert len(points) == 7
        assert points[-1].value == 1.0753
        assert points[-1].day == END.date()
        assert points[0].day == (END - timedelta(days=6)).date()
        assert [p.day for p in points] == sorted(p.day for p in points)

    def test_points_within_history_band(self):
        estimator = TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0, rng=random.Random(11))
        for point in estimator.history(100.0, days=10, end=END):
            assert 98.0 - 1e-9 <= point.value <= 102.0 + 1e-9

    def test_rejects_empty_series(self):
        with pytest.raises(ValueError):
            TrendEstimator(jitter_pct=1.5, history_jitter_pct=2.0).history(1.0, days=0, end=END)

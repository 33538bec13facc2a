# src/ratecard/application/trend.py
"""
Trend Estimator - Simulated Comparison Rates

The free rate API has no history, so trend arrows compare against a
SIMULATED previous snapshot: every rate is perturbed independently by a
uniform random factor within +/-1.5%. The same approach produces the
simulated series behind the rate chart. Neither is market history and
neither carries any accuracy guarantee; everything that displays these
values labels them as simulated.

Files that USE this module:
- ratecard.application.controller (synthesize after each fetch, history for chart data)
- tests.test_trend (unit tests)

Files that this module USES:
- ratecard.config (default jitter percentages)
- ratecard.domain.models (RateSnapshot)
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from ratecard.domain.models import RateSnapshot


@dataclass(frozen=True)
class HistoryPoint:
    day: date
    value: float


def _jitter(rate: float, pct: float, rng: random.Random) -> float:
    fraction = pct / 100.0
    value = rate * (1 + rng.uniform(-fraction, fraction))
    # keep float rounding from stepping outside the band
    return min(max(value, rate * (1 - fraction)), rate * (1 + fraction))


class TrendEstimator:
    """Produces simulated comparison data; a stand-in for a real time-series source."""

    is_simulated = True

    def __init__(
        self,
        jitter_pct: Optional[float] = None,
        history_jitter_pct: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        if jitter_pct is None or history_jitter_pct is None:
            from ratecard.config import settings
            jitter_pct = settings.trend_jitter_pct if jitter_pct is None else jitter_pct
            history_jitter_pct = (
                settings.history_jitter_pct if history_jitter_pct is None else history_jitter_pct
            )
        self.jitter_pct = jitter_pct
        self.history_jitter_pct = history_jitter_pct
        self.rng = rng or random.Random()

    def synthesize(self, current: RateSnapshot) -> RateSnapshot:
        """
        Build a simulated "previous" snapshot around `current`.

        Args:
            current: Latest rates

        Returns:
            Snapshot with every rate within +/-jitter_pct of the current one
        """
        return RateSnapshot({
            code: _jitter(rate, self.jitter_pct, self.rng)
            for code, rate in current.items()
        })

    def history(self, rate: float, days: int, end: datetime) -> List[HistoryPoint]:
        """
        Simulated daily series ending at `end`, oldest first.

        The last point is exactly `rate`; earlier points lie within
        +/-history_jitter_pct of it.
        """
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")
        points = []
        for offset in range(days - 1, 0, -1):
            day = (end - timedelta(days=offset)).date()
            points.append(HistoryPoint(day, _jitter(rate, self.history_jitter_pct, self.rng)))
        points.append(HistoryPoint(end.date(), rate))
        return points

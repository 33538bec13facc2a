# src/ratecard/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
No direct I/O dependencies - uses adapters through interfaces.
"""

from ratecard.application.clock import Clock, FixedClock, SystemClock
from ratecard.application.conversion import ConversionEngine
from ratecard.application.controller import ChartSeries, RateController
from ratecard.application.scheduler import RefreshScheduler, next_update_offset
from ratecard.application.trend import HistoryPoint, TrendEstimator

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "ConversionEngine",
    "ChartSeries",
    "RateController",
    "RefreshScheduler",
    "next_update_offset",
    "HistoryPoint",
    "TrendEstimator",
]

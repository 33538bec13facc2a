# src/ratecard/application/clock.py
"""
Clock - Injectable Source of Local Date and Time

Files that USE this module:
- ratecard.application.scheduler (RefreshScheduler reads the current day)
- ratecard.application.controller (timestamps for fetches)
- tests.* (FixedClock for deterministic calendars)

Files that this module USES:
- None (standard library only)
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Local wall-clock time, timezone-aware."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Clock frozen at a given instant; `advance` moves it forward."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> None:
        self.instant = self.instant + timedelta(**kwargs)

# src/ratecard/application/scheduler.py
"""
Refresh Scheduler - Business-Day Aware Fetch-vs-Reuse Decisions

Rates only move on business days (Monday to Friday, no holiday calendar),
so the widget fetches at most once per weekday and never on weekends:

    1. No persisted state                                -> fetch
    2. State exists and (weekend or fetched today)       -> reuse
    3. State exists, weekday, last fetch not today       -> fetch

A manual refresh skips the table on weekdays and is refused on weekends.

Weekday numbers in this module follow the 0=Sunday .. 6=Saturday convention.

Files that USE this module:
- ratecard.application.controller (RateController asks for decisions)
- ratecard.adapters.formatting.formatter (next_update_date for the status line)
- tests.test_scheduler (unit tests)

Files that this module USES:
- ratecard.application.clock (Clock, SystemClock)
- ratecard.domain (AppState, RefreshDecision, MarketClosed)
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ratecard.application.clock import Clock, SystemClock
from ratecard.domain.errors import MarketClosed
from ratecard.domain.models import AppState, RefreshDecision

logger = logging.getLogger(__name__)

SUNDAY = 0
MONDAY = 1
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6


def sunday_weekday(when: datetime) -> int:
    """Weekday of `when` as 0=Sunday .. 6=Saturday."""
    return (when.weekday() + 1) % 7


def is_weekend(when: datetime) -> bool:
    return sunday_weekday(when) in (SATURDAY, SUNDAY)


def same_local_day(moment: datetime, now: datetime) -> bool:
    """True when `moment` falls on the same calendar day as `now`, in `now`'s timezone."""
    if moment.tzinfo is not None:
        if now.tzinfo is not None:
            moment = moment.astimezone(now.tzinfo)
        else:
            moment = moment.astimezone().replace(tzinfo=None)
    return moment.date() == now.date()


def next_update_offset(day: int) -> int:
    """
    Days until the next scheduled update.

    Friday, Saturday and Sunday resolve to the following Monday; Monday to
    Thursday resolve to the next day.

    Args:
        day: Weekday, 0=Sunday .. 6=Saturday

    Returns:
        Number of days to add (1, 2 or 3)
    """
    if not SUNDAY <= day <= SATURDAY:
        raise ValueError(f"day must be in 0..6, got {day}")
    if day == FRIDAY:
        return 3
    if day == SATURDAY:
        return 2
    return 1


def next_update_date(now: datetime) -> datetime:
    return now + timedelta(days=next_update_offset(sunday_weekday(now)))


class RefreshScheduler:
    """Decides whether to reuse stored state or fetch fresh rates."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()

    def decide(self, state: Optional[AppState], now: Optional[datetime] = None) -> RefreshDecision:
        """
        Apply the startup decision table.

        Args:
            state: Persisted state, or None when there is none
            now: Optional override of the current time

        Returns:
            RefreshDecision.FETCH or RefreshDecision.REUSE
        """
        now = now or self.clock.now()
        if state is None:
            logger.info("No persisted state: fetching")
            return RefreshDecision.FETCH

        if is_weekend(now):
            logger.info("Weekend: reusing state fetched at %s", state.fetch_timestamp.isoformat())
            return RefreshDecision.REUSE
        if same_local_day(state.fetch_timestamp, now):
            logger.info("Already fetched today: reusing state")
            return RefreshDecision.REUSE

        logger.info("Weekday and state is from %s: fetching", state.fetch_timestamp.date())
        return RefreshDecision.FETCH

    def check_manual_refresh(self, now: Optional[datetime] = None) -> None:
        """
        Allow a user-initiated refresh on weekdays only.

        Raises:
            MarketClosed: On Saturday or Sunday
        """
        now = now or self.clock.now()
        if is_weekend(now):
            days = next_update_offset(sunday_weekday(now))
            logger.info("Manual refresh refused: market closed for %d more day(s)", days)
            raise MarketClosed("Market closed until Monday", days_until_open=days)

    def next_update(self, now: Optional[datetime] = None) -> datetime:
        return next_update_date(now or self.clock.now())

# src/ratecard/application/controller.py
"""
Rate Controller - Owner of the Live AppState

This module replaces module-level rate globals with one controller object
that owns the single live AppState. It wires the scheduler, provider,
trend estimator, store and conversion engine together:

- startup(): reuse persisted state or fetch, per the business-day table
- manual_refresh(): user-triggered fetch, refused on weekends
- convert(): pure conversion of the amount field against the live state

Only the successful fetch path writes state. Fetches are serialised by an
asyncio.Lock; a manual refresh that arrives while a fetch is running is a
no-op reported as RefreshStatus.IN_FLIGHT.

Files that USE this module:
- ratecard.app (composition root drives the controller)
- tests.test_controller (unit tests)

Files that this module USES:
- ratecard.adapters.persistence.rate_store (RateStore)
- ratecard.adapters.providers.base (RateProvider)
- ratecard.application.clock / scheduler / trend / conversion
- ratecard.domain (models and errors)
- ratecard.shared (amount validation, translate)
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ratecard.adapters.persistence.rate_store import RateStore
from ratecard.adapters.providers.base import RateProvider
from ratecard.application.clock import Clock, SystemClock
from ratecard.application.conversion import ConversionEngine
from ratecard.application.scheduler import RefreshScheduler
from ratecard.application.trend import HistoryPoint, TrendEstimator
from ratecard.domain.errors import FetchUnavailable, InvalidAmount, MarketClosed
from ratecard.domain.models import (
    DEFAULT_RATES,
    AppState,
    ConversionResult,
    RateSnapshot,
    RefreshDecision,
    RefreshOutcome,
    RefreshStatus,
)
from ratecard.shared.language import translate
from ratecard.shared.validators import correct_negative_amount, parse_amount, validate_currency_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartSeries:
    """Simulated cross-rate series for the chart; rendering is up to the UI."""
    base: str
    target: str
    points: List[HistoryPoint]


class RateController:
    """Single owner of the live AppState."""

    def __init__(
        self,
        store: RateStore,
        provider: RateProvider,
        scheduler: Optional[RefreshScheduler] = None,
        trend: Optional[TrendEstimator] = None,
        engine: Optional[ConversionEngine] = None,
        clock: Optional[Clock] = None,
        default_base: str = "USD",
        history_days: int = 7,
    ):
        self.store = store
        self.provider = provider
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or RefreshScheduler(self.clock)
        self.trend = trend or TrendEstimator()
        self.engine = engine or ConversionEngine()
        self.history_days = history_days

        self._state: Optional[AppState] = None
        self._fetch_lock = asyncio.Lock()
        self._base_currency = store.load_base_currency() or default_base

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def state(self) -> AppState:
        """Live state; hardcoded defaults until startup has produced one."""
        if self._state is None:
            return self._default_state()
        return self._state

    def has_state(self) -> bool:
        return self._state is not None

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def set_base_currency(self, code: str) -> None:
        """
        Change the base currency and remember it on the device.

        Raises:
            ValueError: If the code is not supported
        """
        if not validate_currency_code(code):
            raise ValueError(f"Unsupported currency code: {code!r}")
        self._base_currency = code
        try:
            self.store.save_base_currency(code)
        except Exception as e:
            logger.error("Failed to persist base currency %s: %s", code, e)

    def is_fetching(self) -> bool:
        return self._fetch_lock.locked()

    # ------------------------------------------------------------------
    # Refresh flows
    # ------------------------------------------------------------------
    async def startup(self) -> RefreshOutcome:
        """
        Load persisted state and decide whether to fetch.

        Returns:
            RefreshOutcome with REUSED, UPDATED or OFFLINE status
        """
        stored = self.store.load()
        decision = self.scheduler.decide(stored, self.clock.now())
        if decision is RefreshDecision.REUSE and stored is not None:
            self._state = stored
            return RefreshOutcome(status=RefreshStatus.REUSED, state=stored)

        if stored is not None:
            self._state = stored
        return await self._fetch_and_apply()

    async def manual_refresh(self) -> RefreshOutcome:
        """
        User-initiated refresh: always fetches on weekdays, never on weekends.

        Returns:
            RefreshOutcome with UPDATED, OFFLINE, MARKET_CLOSED or IN_FLIGHT status
        """
        try:
            self.scheduler.check_manual_refresh(self.clock.now())
        except MarketClosed:
            return RefreshOutcome(
                status=RefreshStatus.MARKET_CLOSED,
                state=self.state,
                notice=translate("market_closed"),
            )

        if self._fetch_lock.locked():
            logger.info("Manual refresh ignored: a fetch is already in flight")
            return RefreshOutcome(
                status=RefreshStatus.IN_FLIGHT,
                state=self.state,
                notice=translate("refresh_in_flight"),
            )
        return await self._fetch_and_apply()

    async def _fetch_and_apply(self) -> RefreshOutcome:
        async with self._fetch_lock:
            try:
                quote = await asyncio.to_thread(self.provider.fetch)
            except FetchUnavailable as e:
                logger.warning("Rates unavailable, keeping last known rates: %s", e)
                return self._offline_outcome()
            except Exception as e:
                logger.error("Unexpected provider failure, keeping last known rates: %s", e, exc_info=True)
                return self._offline_outcome()

            now = self.clock.now()
            known = self.state.current
            merged = {code: quote.rates.get(code, known[code]) for code in known}
            current = RateSnapshot(merged)

            new_state = AppState(
                current=current,
                previous=self.trend.synthesize(current),
                api_timestamp=quote.timestamp or now,
                fetch_timestamp=now,
            )

            try:
                self.store.save(new_state)
            except Exception as e:
                # in-memory state is replaced even when the write fails
                logger.error("Failed to persist state: %s", e)
            self._state = new_state

            return RefreshOutcome(
                status=RefreshStatus.UPDATED,
                state=new_state,
                notice=translate("rates_updated"),
                fetched=True,
            )

    def _offline_outcome(self) -> RefreshOutcome:
        if self._state is None:
            self._state = self._default_state()
        return RefreshOutcome(
            status=RefreshStatus.OFFLINE,
            state=self._state,
            notice=translate("offline_mode"),
        )

    def _default_state(self) -> AppState:
        now = self.clock.now()
        return AppState(
            current=DEFAULT_RATES,
            previous=DEFAULT_RATES,
            api_timestamp=now,
            fetch_timestamp=now,
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    def convert(
        self,
        amount: Union[str, float, None],
        base: Optional[str] = None,
    ) -> List[ConversionResult]:
        """
        Convert the amount field against the live state.

        Text is parsed like the amount input (commas ignored); a negative
        amount is corrected to its absolute value first. Anything that is
        not a number yields an empty list, and so does an unsupported base.

        Args:
            amount: Amount text or number
            base: Optional base currency (defaults to the chosen base)

        Returns:
            Conversion results in declared currency order, possibly empty
        """
        base = base or self._base_currency
        if not validate_currency_code(base):
            logger.warning("Ignoring conversion from unsupported base %r", base)
            return []

        value = parse_amount(amount) if isinstance(amount, str) or amount is None else float(amount)
        if value is None:
            return []
        value = correct_negative_amount(value)

        state = self.state
        try:
            return self.engine.convert(
                value,
                base,
                state.current,
                state.previous,
                state.api_timestamp,
            )
        except InvalidAmount as e:
            logger.debug("Ignoring invalid amount %r: %s", amount, e)
            return []

    def chart_series(self, base: Optional[str] = None) -> ChartSeries:
        """
        Simulated recent history of the base's headline cross rate.

        The base is compared against USD, or against EUR when the base is USD.
        """
        base = base or self._base_currency
        target = "EUR" if base == "USD" else "USD"
        rate = self.state.current.cross_rate(base, target)
        points = self.trend.history(rate, self.history_days, self.clock.now())
        return ChartSeries(base=base, target=target, points=points)

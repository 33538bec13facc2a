# src/ratecard/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Supported currencies and their declared display order
- USD-relative rate snapshots
- The persisted application state (current + comparison snapshot)
- Conversion results and refresh outcomes

Files that USE this module:
- ratecard.application.* (all services use domain models)
- ratecard.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- ratecard.domain.errors (MalformedPersistedState for snapshot validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite checks for rate values
from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime  # Date/time utilities for timestamps
from enum import Enum  # Enumerations for decisions and statuses
from types import MappingProxyType  # Read-only view over snapshot rates
from typing import Iterator, Mapping, Optional  # Type hints

from ratecard.domain.errors import MalformedPersistedState


@dataclass(frozen=True)
class Currency:
    """A supported currency with its display metadata."""
    code: str
    name: str
    flag: str


# Declared order is the display order of the result cards
CURRENCIES: Mapping[str, Currency] = MappingProxyType({
    "USD": Currency("USD", "Dólar Americano", "🇺🇸"),
    "VES": Currency("VES", "Bolívar Venezolano", "🇻🇪"),
    "EUR": Currency("EUR", "Euro", "🇪🇺"),
    "COP": Currency("COP", "Peso Colombiano", "🇨🇴"),
})

CURRENCY_ORDER: tuple[str, ...] = tuple(CURRENCIES)

# Codes the provider must always deliver; VES is kept from the last known snapshot when missing
REQUIRED_PROVIDER_CODES: tuple[str, ...] = ("USD", "EUR", "COP")


class RateSnapshot(Mapping[str, float]):
    """
    Complete set of USD-relative rates for all supported currencies.

    Invariant: every code in CURRENCY_ORDER is present and every value is a
    finite float > 0. USD is expected to be 1.0 but is taken as delivered.
    """

    __slots__ = ("_rates",)

    def __init__(self, rates: Mapping[str, float]):
        clean: dict[str, float] = {}
        for code in CURRENCY_ORDER:
            if code not in rates:
                raise MalformedPersistedState(f"Snapshot missing rate for {code}")
            try:
                value = float(rates[code])
            except (TypeError, ValueError) as e:
                raise MalformedPersistedState(f"Rate for {code} is not numeric: {rates[code]!r}") from e
            if not math.isfinite(value) or value <= 0:
                raise MalformedPersistedState(f"Rate for {code} must be positive, got {value}")
            clean[code] = value
        self._rates = MappingProxyType(clean)

    def __getitem__(self, code: str) -> float:
        return self._rates[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RateSnapshot):
            return dict(self._rates) == dict(other._rates)
        if isinstance(other, Mapping):
            return dict(self._rates) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._rates.items()))

    def __repr__(self) -> str:
        return f"RateSnapshot({dict(self._rates)!r})"

    def to_dict(self) -> dict[str, float]:
        """Return a plain, JSON-serialisable copy of the rates."""
        return dict(self._rates)

    def cross_rate(self, base: str, target: str) -> float:
        """Units of `target` per one unit of `base`, derived via USD."""
        return self._rates[target] / self._rates[base]


DEFAULT_RATES = RateSnapshot({
    "USD": 1.0,
    "EUR": 0.93,
    "COP": 3900.0,
    "VES": 36.50,
})


@dataclass(frozen=True)
class AppState:
    """
    The single persisted unit of application state.

    Attributes:
        current: Latest known rates
        previous: Comparison snapshot used for trends (synthetic unless a real history source exists)
        api_timestamp: When `current` was sourced (provider time, or local time when omitted)
        fetch_timestamp: Local wall-clock time of the fetch that produced this state
    """
    current: RateSnapshot
    previous: RateSnapshot
    api_timestamp: datetime
    fetch_timestamp: datetime


@dataclass(frozen=True)
class ConversionResult:
    """
    Display-ready conversion for one target currency. Derived, never cached.

    Attributes:
        currency: Target currency code
        value: Converted amount
        change_percent: Percent change of the cross rate vs the comparison snapshot
        display_timestamp: Timestamp to show next to the value (the API time)
    """
    currency: str
    value: float
    change_percent: float
    display_timestamp: datetime

    @property
    def is_positive_trend(self) -> bool:
        return self.change_percent >= 0


class RefreshDecision(str, Enum):
    FETCH = "fetch"
    REUSE = "reuse"


class RefreshStatus(str, Enum):
    """Result of a startup or manual refresh attempt."""
    REUSED = "reused"  # persisted state used as-is
    UPDATED = "updated"  # fresh rates fetched and persisted
    OFFLINE = "offline"  # fetch failed, last known (or default) rates kept
    MARKET_CLOSED = "market_closed"  # manual refresh refused on a weekend
    IN_FLIGHT = "in_flight"  # another fetch is already running


@dataclass(frozen=True)
class RefreshOutcome:
    """What a refresh attempt did, plus the state that is live afterwards."""
    status: RefreshStatus
    state: AppState
    notice: Optional[str] = None
    fetched: bool = field(default=False)

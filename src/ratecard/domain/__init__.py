# src/ratecard/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from ratecard.domain.models import (
    CURRENCIES,
    CURRENCY_ORDER,
    DEFAULT_RATES,
    AppState,
    ConversionResult,
    Currency,
    RateSnapshot,
    RefreshDecision,
    RefreshOutcome,
    RefreshStatus,
)
from ratecard.domain.errors import (
    DomainError,
    FetchUnavailable,
    InvalidAmount,
    MalformedPersistedState,
    MarketClosed,
)

__all__ = [
    "CURRENCIES",
    "CURRENCY_ORDER",
    "DEFAULT_RATES",
    "AppState",
    "ConversionResult",
    "Currency",
    "RateSnapshot",
    "RefreshDecision",
    "RefreshOutcome",
    "RefreshStatus",
    "DomainError",
    "FetchUnavailable",
    "InvalidAmount",
    "MalformedPersistedState",
    "MarketClosed",
]

# src/ratecard/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external exchange rate APIs.
All providers implement the RateProvider interface.
"""

from ratecard.adapters.providers.base import ProviderQuote, RateProvider
from ratecard.adapters.providers.exchangerate_api import ExchangeRateApiProvider

__all__ = [
    "ProviderQuote",
    "RateProvider",
    "ExchangeRateApiProvider",
]

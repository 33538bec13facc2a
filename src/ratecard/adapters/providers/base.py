# src/ratecard/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class for all exchange rate providers
and the quote they return.

Files that USE this module:
- ratecard.adapters.providers.exchangerate_api (ExchangeRateApiProvider implements RateProvider)
- ratecard.application.controller (RateController depends on RateProvider)
- tests.* (fake providers)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class ProviderQuote:
    """
    Rates as delivered by a provider, USD-relative.

    `rates` always holds USD, EUR and COP; VES is present only when the
    provider delivered a usable value. `timestamp` is the provider's own
    update time, None when it did not say.
    """
    rates: Dict[str, float]
    timestamp: Optional[datetime] = None


class RateProvider(ABC):
    @abstractmethod
    def fetch(self) -> ProviderQuote:
        """
        Return the latest USD-relative rates.

        Raises:
            FetchUnavailable: On any network, timeout or payload problem
        """
        raise NotImplementedError

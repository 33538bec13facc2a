# src/ratecard/adapters/providers/exchangerate_api.py
"""
ExchangeRate-API Provider for USD-based Rates

This module implements the client for the public exchangerate-api.com
"latest/USD" endpoint, which needs no API key. The payload looks like:

    {"base": "USD", "time_last_updated": 1760832000,
     "rates": {"USD": 1, "EUR": 0.93, "COP": 3900.5, "VES": 36.5, ...}}

The provider is treated as unreliable: every failure is reported as
FetchUnavailable, and a missing or unusable VES rate is simply left out of
the quote so the caller can keep its previous value.

Files that USE this module:
- ratecard.app (builds the provider from settings)
- tests.test_providers (unit tests)

Files that this module USES:
- ratecard.adapters.providers.base (RateProvider, ProviderQuote)
- ratecard.config (settings for URL and HTTP timeout)
- ratecard.domain (FetchUnavailable, REQUIRED_PROVIDER_CODES)
"""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from ratecard.adapters.providers.base import ProviderQuote, RateProvider
from ratecard.config import settings
from ratecard.domain.errors import FetchUnavailable
from ratecard.domain.models import REQUIRED_PROVIDER_CODES

log = logging.getLogger(__name__)

OPTIONAL_PROVIDER_CODES = ("VES",)


def _positive_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


class ExchangeRateApiProvider(RateProvider):
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize the provider.

        Args:
            base_url: Optional custom API URL (defaults to settings.rates_api_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.url = base_url or settings.rates_api_url
        self.timeout = timeout or settings.http_timeout_seconds

    def fetch(self) -> ProviderQuote:
        """
        Fetch the latest USD-relative rates.

        Returns:
            ProviderQuote with USD, EUR, COP and, when usable, VES

        Raises:
            FetchUnavailable: If the request fails, times out, or the payload is unusable
        """
        try:
            log.info("Fetching latest rates from %s", self.url)
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout as e:
            log.warning("Rate API timeout after %d seconds", self.timeout)
            raise FetchUnavailable(f"Rate API timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            log.warning("Rate API HTTP error: %s", e)
            raise FetchUnavailable(f"Rate API HTTP error: {e}") from e
        except requests.exceptions.RequestException as e:
            log.warning("Rate API request failed (network/connection error): %s", e)
            raise FetchUnavailable(f"Rate API request failed: {e}") from e
        except ValueError as e:
            log.warning("Rate API returned invalid JSON: %s", e)
            raise FetchUnavailable(f"Rate API returned invalid JSON: {e}") from e

        return self._parse(data)

    def _parse(self, data: Any) -> ProviderQuote:
        if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
            log.error("Rate API unexpected response structure: %s", data)
            raise FetchUnavailable("Rate API response missing 'rates' object")

        raw_rates = data["rates"]
        rates = {}
        for code in REQUIRED_PROVIDER_CODES:
            value = _positive_float(raw_rates.get(code))
            if value is None:
                log.error("Rate API returned no usable %s rate: %r", code, raw_rates.get(code))
                raise FetchUnavailable(f"Rate API response has no usable {code} rate")
            rates[code] = value

        for code in OPTIONAL_PROVIDER_CODES:
            value = _positive_float(raw_rates.get(code))
            if value is None:
                log.warning("Rate API returned no usable %s rate; keeping previous value", code)
            else:
                rates[code] = value

        timestamp = None
        updated = _positive_float(data.get("time_last_updated"))
        if updated is not None:
            try:
                timestamp = datetime.fromtimestamp(updated, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                log.warning("Ignoring out-of-range time_last_updated: %r", data.get("time_last_updated"))

        log.info("Rate API updated: %s (provider time %s)", rates, timestamp)
        return ProviderQuote(rates=rates, timestamp=timestamp)

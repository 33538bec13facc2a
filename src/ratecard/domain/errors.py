# src/ratecard/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions. None of them is fatal:
each one is recovered by the application layer, either by keeping the last
known good state or by showing no results.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class FetchUnavailable(DomainError):
    """Raised when the rate provider cannot deliver usable rates (network, timeout, bad payload)."""
    pass


class MalformedPersistedState(DomainError):
    """Raised when stored state cannot be parsed into a valid AppState."""
    pass


class InvalidAmount(DomainError):
    """Raised when an amount is negative or not a number."""
    pass


class MarketClosed(DomainError):
    """Raised when a manual refresh is requested on a weekend."""

    def __init__(self, message: str = "Market closed", days_until_open: int = 1):
        super().__init__(message)
        self.days_until_open = days_until_open

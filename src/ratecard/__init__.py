# src/ratecard/__init__.py
"""
RateCard - Offline-Resilient Currency Conversion Cards

Converts an amount in a base currency into USD, EUR, COP and VES, with
day-over-day trend indicators, business-day aware refresh scheduling and
cached state that keeps the widget usable without network access.
"""

__version__ = "1.0.0"

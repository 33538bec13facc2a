# src/ratecard/application/conversion.py
"""
Conversion Engine - Cross-Rate Conversion and Trend Percentages

All rates are USD-relative, so converting goes through USD:

    value(target)  = amount / current[base] * current[target]
    change percent = (current cross - previous cross) / previous cross * 100

The engine is pure and synchronous; it may run on every keystroke.
Amount clean-up (commas, negative correction) happens before it is called.

Files that USE this module:
- ratecard.application.controller (RateController.convert)
- tests.test_conversion (unit tests)

Files that this module USES:
- ratecard.domain (RateSnapshot, ConversionResult, CURRENCY_ORDER, InvalidAmount)
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import List, Mapping

from ratecard.domain.errors import InvalidAmount
from ratecard.domain.models import CURRENCY_ORDER, ConversionResult


class ConversionEngine:
    def convert(
        self,
        amount: float,
        base: str,
        current: Mapping[str, float],
        previous: Mapping[str, float],
        display_timestamp: datetime,
    ) -> List[ConversionResult]:
        """
        Convert `amount` of `base` into every other supported currency.

        Args:
            amount: Non-negative amount in the base currency
            base: Base currency code
            current: Current USD-relative rates
            previous: Comparison rates; a missing entry counts as no change
            display_timestamp: Timestamp attached to every result

        Returns:
            One result per currency other than `base`, in declared order;
            empty when `amount` is NaN

        Raises:
            InvalidAmount: If `amount` is negative
            KeyError: If `base` is not a supported currency
        """
        if base not in CURRENCY_ORDER:
            raise KeyError(f"Unsupported base currency: {base}")
        if amount is None or math.isnan(amount):
            return []
        if amount < 0:
            raise InvalidAmount(f"Amount must be non-negative, got {amount}")

        base_rate = current[base]
        prev_base_rate = previous.get(base) or base_rate

        results = []
        for target in CURRENCY_ORDER:
            if target == base:
                continue
            target_rate = current[target]
            prev_target_rate = previous.get(target) or target_rate

            current_cross = target_rate / base_rate
            previous_cross = prev_target_rate / prev_base_rate
            change_pct = (current_cross - previous_cross) / previous_cross * 100

            results.append(ConversionResult(
                currency=target,
                value=amount / base_rate * target_rate,
                change_percent=change_pct,
                display_timestamp=display_timestamp,
            ))
        return results

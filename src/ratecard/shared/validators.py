# src/ratecard/shared/validators.py
"""
Input Validation Utilities - Amount and Currency Validation

This module validates and normalises what the user types: the amount field
(thousand separators, stray characters, negative values) and currency codes.
All amount handling happens here, at the edge, so the conversion engine only
ever sees clean non-negative numbers.

Files that USE this module:
- ratecard.config.settings (validate_currency_code in field validators)
- ratecard.application.controller (parse_amount, correct_negative_amount)
- ratecard.adapters.persistence.rate_store (validate_currency_code for stored base)
- ratecard.app (format_amount_input for echoing the amount)

Files that this module USES:
- ratecard.domain.models (CURRENCY_ORDER for supported codes)
"""
import math
import re
from typing import Optional

from ratecard.domain.models import CURRENCY_ORDER

# Leading decimal number, like a browser's parseFloat
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def validate_currency_code(code: Optional[str]) -> bool:
    """
    Check that a code is one of the supported currencies.

    Args:
        code: Currency code to validate (case-sensitive, e.g. 'USD')

    Returns:
        True if supported, False otherwise
    """
    return bool(code) and code in CURRENCY_ORDER


def parse_amount(text: Optional[str]) -> Optional[float]:
    """
    Parse the amount field into a float.

    Commas are thousand separators and are removed first. Parsing stops at
    the first character that cannot continue a number, so '12abc' is 12.

    Args:
        text: Raw amount text (e.g. '1,234.50')

    Returns:
        Parsed float (may be negative), or None when nothing numeric is present
    """
    if text is None:
        return None
    match = _LEADING_NUMBER.match(text.replace(",", ""))
    if not match:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def correct_negative_amount(amount: float) -> float:
    """Replace a negative amount with its absolute value. Idempotent."""
    return abs(amount) if amount < 0 else amount


def format_amount_input(text: str) -> str:
    """
    Normalise the amount field while the user types.

    Keeps digits and a single decimal point, then groups the integer part
    with commas: '12345.6.7' becomes '12,345.67'.

    Args:
        text: Raw amount text

    Returns:
        Cleaned and grouped amount text
    """
    value = re.sub(r"[^0-9.]", "", text)
    parts = value.split(".")
    if len(parts) > 2:
        value = parts[0] + "." + "".join(parts[1:])
        parts = value.split(".")

    integer_part = _THOUSANDS.sub(",", parts[0])
    if len(parts) > 1:
        return integer_part + "." + "".join(parts[1:])
    return integer_part

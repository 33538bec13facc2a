# src/ratecard/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation of amounts and currency codes
- Language management
- Logging configuration
"""

from ratecard.shared.validators import (
    correct_negative_amount,
    format_amount_input,
    parse_amount,
    validate_currency_code,
)
from ratecard.shared.language import (
    format_long_date,
    get_language,
    set_language,
    translate,
    LANG_ENGLISH,
    LANG_SPANISH,
)

__all__ = [
    "correct_negative_amount",
    "format_amount_input",
    "parse_amount",
    "validate_currency_code",
    "format_long_date",
    "get_language",
    "set_language",
    "translate",
    "LANG_ENGLISH",
    "LANG_SPANISH",
]

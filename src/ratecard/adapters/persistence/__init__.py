# src/ratecard/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Key-value stores (JSON file, in-memory)
- RateStore (AppState record and base-currency preference)
"""

from ratecard.adapters.persistence.key_value import JsonFileStore, KeyValueStore, MemoryStore
from ratecard.adapters.persistence.rate_store import RateStore, state_from_record, state_to_record

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "RateStore",
    "state_from_record",
    "state_to_record",
]

# src/ratecard/adapters/persistence/rate_store.py
"""
Rate Store - AppState Persistence and Restoration

This module persists the live AppState as a single JSON record and the
user's last chosen base currency as a bare string, both through an injected
KeyValueStore.

Record layout (epoch milliseconds, kept compatible with the browser widget):

    {
      "rates":     {"USD": 1, "VES": 36.5, "EUR": 0.93, "COP": 3900},
      "prevRates": {"USD": 1, "VES": 36.2, "EUR": 0.94, "COP": 3871.5},
      "apiDate":   1760832000000,
      "fetchDate": 1760860800000
    }

Files that USE this module:
- ratecard.application.controller (RateController loads and saves state)
- ratecard.app (builds RateStore from settings)
- tests.test_persistence (unit tests)

Files that this module USES:
- ratecard.adapters.persistence.key_value (KeyValueStore)
- ratecard.domain.models (AppState, RateSnapshot)
- ratecard.shared.validators (validate_currency_code)
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ratecard.adapters.persistence.key_value import KeyValueStore
from ratecard.domain.errors import MalformedPersistedState
from ratecard.domain.models import AppState, RateSnapshot
from ratecard.shared.validators import validate_currency_code

log = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "exchangeAppState"
DEFAULT_BASE_CURRENCY_KEY = "baseCurrency"


def _to_millis(ts: datetime) -> int:
    if ts.tzinfo is None:
        ts = ts.astimezone()
    return int(ts.timestamp() * 1000)


def _from_millis(value: Any, field_name: str) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPersistedState(f"{field_name} must be epoch milliseconds, got {value!r}")
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedPersistedState(f"{field_name} out of range: {value!r}") from e


def state_to_record(state: AppState) -> dict:
    """
    Convert AppState to its JSON-serializable record.

    Returns:
        Dictionary with rates, prevRates, apiDate and fetchDate
    """
    return {
        "rates": state.current.to_dict(),
        "prevRates": state.previous.to_dict(),
        "apiDate": _to_millis(state.api_timestamp),
        "fetchDate": _to_millis(state.fetch_timestamp),
    }


def state_from_record(data: Any) -> AppState:
    """
    Build AppState from a stored record.

    Raises:
        MalformedPersistedState: If any field is missing or invalid
    """
    if not isinstance(data, dict):
        raise MalformedPersistedState(f"State record must be an object, got {type(data).__name__}")
    try:
        rates = data["rates"]
        prev_rates = data["prevRates"]
        api_raw = data["apiDate"]
        fetch_raw = data["fetchDate"]
    except KeyError as e:
        raise MalformedPersistedState(f"State record missing field {e}") from e
    if not isinstance(rates, dict) or not isinstance(prev_rates, dict):
        raise MalformedPersistedState("rates and prevRates must be objects")

    return AppState(
        current=RateSnapshot(rates),
        previous=RateSnapshot(prev_rates),
        api_timestamp=_from_millis(api_raw, "apiDate"),
        fetch_timestamp=_from_millis(fetch_raw, "fetchDate"),
    )


class RateStore:
    """Loads and saves AppState and the base-currency preference."""

    def __init__(
        self,
        store: KeyValueStore,
        state_key: str = DEFAULT_STATE_KEY,
        base_currency_key: str = DEFAULT_BASE_CURRENCY_KEY,
    ):
        self.store = store
        self.state_key = state_key
        self.base_currency_key = base_currency_key

    def load(self) -> Optional[AppState]:
        """
        Load the persisted AppState.

        Missing or malformed state is treated as no state: this never raises.

        Returns:
            AppState if present and valid, None otherwise
        """
        try:
            raw = self.store.get(self.state_key)
        except Exception as e:
            log.error("Failed to read persisted state: %s", e)
            return None
        if raw is None:
            log.info("No persisted state found")
            return None

        try:
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                raise MalformedPersistedState(f"State is not valid JSON: {e}") from e
            state = state_from_record(data)
        except MalformedPersistedState as e:
            log.warning("Ignoring malformed persisted state: %s", e)
            return None

        log.info("Loaded persisted state fetched at %s", state.fetch_timestamp.isoformat())
        return state

    def save(self, state: AppState) -> None:
        """
        Overwrite the persisted AppState with `state`.

        Raises:
            RuntimeError: If the underlying store cannot be written
        """
        self.store.set(self.state_key, json.dumps(state_to_record(state), ensure_ascii=False))
        log.info("State persisted (fetched at %s)", state.fetch_timestamp.isoformat())

    def load_base_currency(self) -> Optional[str]:
        """
        Return the last chosen base currency, or None if unset or unsupported.
        """
        try:
            code = self.store.get(self.base_currency_key)
        except Exception as e:
            log.error("Failed to read base currency preference: %s", e)
            return None
        if code is None:
            return None
        if not validate_currency_code(code):
            log.warning("Ignoring unsupported stored base currency: %r", code)
            return None
        return code

    def save_base_currency(self, code: str) -> None:
        if not validate_currency_code(code):
            raise ValueError(f"Unsupported currency code: {code!r}")
        self.store.set(self.base_currency_key, code)

# tests/test_persistence.py
"""
Persistence Tests - Unit Tests for Key-Value Stores and RateStore

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecard.adapters.persistence (JsonFileStore, MemoryStore, RateStore)
- ratecard.domain.models (AppState, RateSnapshot)
"""
import json  # Inspecting persisted records

import pytest  # Testing framework for writing and running tests

from datetime import datetime, timezone  # Date/time utilities for test data

from ratecard.adapters.persistence.key_value import JsonFileStore, MemoryStore  # Key-value backends
from ratecard.adapters.persistence.rate_store import RateStore, state_from_record, state_to_record  # Store and record codec under test
from ratecard.domain.errors import MalformedPersistedState  # Record validation error
from ratecard.domain.models import AppState, RateSnapshot  # Domain models for test data

API_TS = datetime(2026, 10, 19, 0, 0, tzinfo=timezone.utc)
FETCH_TS = datetime(2026, 10, 19, 8, 15, 30, tzinfo=timezone.utc)


def _state() -> AppState:
    return AppState(
        current=RateSnapshot({"USD": 1.0, "EUR": 0.93, "COP": 3900.0, "VES": 36.5}),
        previous=RateSnapshot({"USD": 1.01, "EUR": 0.92, "COP": 3920.0, "VES": 36.1}),
        api_timestamp=API_TS,
        fetch_timestamp=FETCH_TS,
    )


class TestStateRecord:
    def test_record_layout(self):
        record = state_to_record(_state())
        assert set(record) == {"rates", "prevRates", "apiDate", "fetchDate"}
        assert record["rates"]["COP"] == 3900.0
        assert record["apiDate"] == int(API_TS.timestamp() * 1000)

    def test_record_restores_state(self):
        restored = state_from_record(state_to_record(_state()))
        assert restored == _state()

    @pytest.mark.parametrize("record", [
        [],
        {"rates": {}, "prevRates": {}, "apiDate": 1, "fetchDate": 1},
        {"rates": {"USD": 1, "EUR": 0.9, "COP": 3900}, "prevRates": {}, "apiDate": 1, "fetchDate": 1},
        {"rates": {"USD": 1, "EUR": -0.9, "COP": 3900, "VES": 36}, "prevRates": {}, "apiDate": 1, "fetchDate": 1},
        {"rates": "nope", "prevRates": {}, "apiDate": 1, "fetchDate": 1},
        {"prevRates": {}, "apiDate": 1, "fetchDate": 1},
    ])
    def test_malformed_records_raise(self, record):
        with pytest.raises(MalformedPersistedState):
            state_from_record(record)

    def test_non_numeric_dates_raise(self):
        record = state_to_record(_state())
        record["fetchDate"] = "yesterday"
        with pytest.raises(MalformedPersistedState):
            state_from_record(record)


class TestRateStore:
    def test_load_missing_returns_none(self):
        assert RateStore(MemoryStore()).load() is None

    def test_save_then_load(self):
        store = RateStore(MemoryStore())
        store.save(_state())
        assert store.load() == _state()

    def test_save_overwrites_previous_state(self):
        kv = MemoryStore()
        store = RateStore(kv)
        store.save(_state())
        newer = AppState(_state().previous, _state().current, API_TS, FETCH_TS)
        store.save(newer)
        assert store.load() == newer

    def test_invalid_json_returns_none(self):
        kv = MemoryStore({"exchangeAppState": "{not json"})
        assert RateStore(kv).load() is None

    def test_schema_mismatch_returns_none(self):
        kv = MemoryStore({"exchangeAppState": json.dumps({"rates": {"USD": 1}})})
        assert RateStore(kv).load() is None

    def test_custom_keys(self):
        kv = MemoryStore()
        store = RateStore(kv, state_key="s", base_currency_key="b")
        store.save(_state())
        store.save_base_currency("VES")
        assert kv.get("s") is not None
        assert kv.get("b") == "VES"

    def test_base_currency_roundtrip(self):
        store = RateStore(MemoryStore())
        assert store.load_base_currency() is None
        store.save_base_currency("EUR")
        assert store.load_base_currency() == "EUR"

    def test_unsupported_stored_base_is_ignored(self):
        assert RateStore(MemoryStore({"baseCurrency": "GBP"})).load_base_currency() is None

    def test_save_unsupported_base_raises(self):
        with pytest.raises(ValueError):
            RateStore(MemoryStore()).save_base_currency("gbp")


class TestJsonFileStore:
    def test_set_get_overwrite(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "state.json")
        assert store.get("a") is None
        store.set("a", "1")
        store.set("b", "2")
        assert store.get("a") == "1"
        store.set("a", "3")
        assert store.get("a") == "3"
        assert store.get("b") == "2"
        assert JsonFileStore(tmp_path / "nested" / "state.json").get("a") == "3"

    def test_writes_leave_no_temp_files(self, tmp_path):
        store = JsonFileStore(tmp_path / "state.json")
        store.set("a", "1")
        store.set("a", "2")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["state.json"]
        assert json.loads((tmp_path / "state.json").read_text(encoding="utf-8")) == {"a": "2"}

    def test_corrupt_file_is_backed_up_and_ignored(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(path)

        assert store.get("a") is None
        assert (tmp_path / "state.json.corrupt").read_text(encoding="utf-8") == "{broken"
        assert not path.exists()

    def test_non_object_file_is_treated_as_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStore(path).get("a") is None

    def test_rate_store_on_disk(self, tmp_path):
        path = tmp_path / "state.json"
        RateStore(JsonFileStore(path)).save(_state())
        assert RateStore(JsonFileStore(path)).load() == _state()

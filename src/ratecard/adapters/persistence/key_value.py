# src/ratecard/adapters/persistence/key_value.py
"""
Key-Value Stores - Durable and In-Memory String Storage

This module provides the storage capability the rate store is built on: a
tiny string-to-string key-value interface with a JSON-file implementation
for the device and an in-memory one for tests.

Files that USE this module:
- ratecard.adapters.persistence.rate_store (RateStore reads/writes through KeyValueStore)
- ratecard.app (builds a JsonFileStore from settings)
- tests.test_persistence (unit tests)

Files that this module USES:
- None (standard library only)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

log = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string for `key`, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store, used in tests and as a no-disk fallback."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    All keys live in one JSON object on disk.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so readers see either the old file or the new one.
    A file that is not a JSON object is backed up to '*.corrupt' and the
    store starts empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._quarantine(e)
            return {}
        except OSError as e:
            log.error("Failed to read store file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            self._quarantine(TypeError(f"expected JSON object, got {type(data).__name__}"))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _quarantine(self, error: Exception) -> None:
        backup_path = self.path.with_suffix(self.path.suffix + ".corrupt")
        try:
            shutil.copy2(self.path, backup_path)
            self.path.unlink()
            log.warning("Store file corrupted, backed up to %s: %s", backup_path, error)
        except OSError as backup_error:
            log.error("Failed to back up corrupt store file %s: %s", self.path, backup_error)

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to write store file {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

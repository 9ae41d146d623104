"""
Persistence service for the handball scoreboard application.

This module stores the scoreboard state and the match history as JSON
strings in a key-value store. Storage problems never reach the caller:
they are logged and the in-memory state stays authoritative.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..models import MatchRecord, MatchState
from ..utils.constants import HISTORY_STORAGE_KEY, STATE_STORAGE_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Volatile store, used for tests and when no state file is configured."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """All keys in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            logger.warning("State file %s is unreadable, ignoring it", self._path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}


class PersistenceService:
    """
    Gateway between the scoreboard and durable storage.

    ``load_*`` never raises and falls back to defaults; ``save_*`` never
    raises and reports success as a bool.

    Saves may be called from worker threads. They are serialized, and a
    save carrying a ``version`` older than the last one written for the
    same key is skipped.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.Lock()
        self._written: Dict[str, int] = {}

    def load_state(self) -> MatchState:
        """Load the scoreboard record, or a fresh MatchState when missing/malformed."""
        data = self._load_json(STATE_STORAGE_KEY)
        return MatchState.from_json(data)

    def load_history(self) -> List[MatchRecord]:
        """Load the saved matches (newest first), skipping unusable entries."""
        data = self._load_json(HISTORY_STORAGE_KEY)
        if not isinstance(data, list):
            return []
        records = []
        for item in data:
            record = MatchRecord.from_json(item)
            if record is None:
                logger.warning("Skipping malformed history entry: %r", item)
                continue
            records.append(record)
        return records

    def save_state(self, match_state: MatchState, version: Optional[int] = None) -> bool:
        return self._save_json(STATE_STORAGE_KEY, match_state.to_json(), version)

    def save_history(self, records: List[MatchRecord], version: Optional[int] = None) -> bool:
        return self._save_json(HISTORY_STORAGE_KEY, [r.to_json() for r in records], version)

    def _load_json(self, key: str):
        try:
            raw = self.store.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except (OSError, ValueError, TypeError):
            logger.error("Failed to load %s from storage", key, exc_info=True)
            return None

    def _save_json(self, key: str, payload, version: Optional[int] = None) -> bool:
        with self._lock:
            if version is not None and version <= self._written.get(key, -1):
                logger.debug("Skipping outdated save of %s (version %d)", key, version)
                return True
            try:
                self.store.set(key, json.dumps(payload, ensure_ascii=False))
            except (OSError, ValueError, TypeError):
                logger.error("Failed to save %s to storage", key, exc_info=True)
                return False
            if version is not None:
                self._written[key] = version
            return True

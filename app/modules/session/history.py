"""
Recent-leads history: the last few successfully captured leads, most recent
first, kept in a small key-value store so it survives restarts.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from app.models.history import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_KEY = "rechat_lead_history"
DEFAULT_LIMIT = 10

_entries_adapter = TypeAdapter(list[HistoryEntry])


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryStore:
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """All keys live in one JSON object on disk, rewritten on every change."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class LeadHistory:
    def __init__(self, store: KeyValueStore, limit: int = DEFAULT_LIMIT, key: str = HISTORY_KEY):
        self.store = store
        self.limit = limit
        self.key = key

    def entries(self) -> list[HistoryEntry]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable lead history: %s", e)
            return []

    def add(self, entry: HistoryEntry) -> list[HistoryEntry]:
        entries = [entry] + [e for e in self.entries() if e.id != entry.id]
        entries = entries[: self.limit]
        self.store.set(self.key, _entries_adapter.dump_json(entries).decode("utf-8"))
        return entries

    def clear(self) -> None:
        self.store.delete(self.key)

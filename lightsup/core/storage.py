from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


def lightsup_home() -> Path:
    """Directory holding persisted data; ``LIGHTSUP_HOME`` overrides ~/.lightsup."""
    override = os.environ.get("LIGHTSUP_HOME")
    if override:
        return Path(override)
    return Path.home() / ".lightsup"


class KeyValueStorage(Protocol):
    """Minimal key-value capability the record and preference stores depend on.

    Values are JSON-compatible. Implementations may raise ``OSError`` on I/O
    failure; callers are expected to recover.
    """

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


class MemoryStorage:
    """In-process storage, used by tests and as a fallback."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStorage:
    """Stores every key in one JSON object on disk, rewritten on each change.

    File: ~/.lightsup/storage.json by default. An unreadable or corrupt file
    is logged and treated as empty; it is replaced on the next write.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or lightsup_home() / "storage.json"
        self._data = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        data = dict(self._data)
        data[key] = copy.deepcopy(value)
        self._save(data)

    def delete(self, key: str) -> None:
        if key in self._data:
            data = dict(self._data)
            del data[key]
            self._save(data)

    def keys(self) -> List[str]:
        return list(self._data)

    def _load(self) -> Dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            logger.warning("Could not load storage from %s: %s", self._file_path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self._file_path)
            return {}
        return payload

    def _save(self, data: Dict[str, Any]) -> None:
        """Write ``data`` to disk, then adopt it. A failed write leaves the table unchanged."""
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self._data = data

"""Best-time records, one per game-mode combination."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from lightsup.core.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "lightsup_best_time_"


@dataclass(frozen=True)
class GameModes:
    is_random: bool = False
    is_hard: bool = False

    @property
    def key(self) -> str:
        """Storage key, e.g. ``lightsup_best_time_true_false``."""
        return f"{STORAGE_KEY_PREFIX}{_js_bool(self.is_random)}_{_js_bool(self.is_hard)}"

    @classmethod
    def all(cls) -> List["GameModes"]:
        return [cls(r, h) for r in (False, True) for h in (False, True)]


def _js_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class BestTimeRecord:
    time: float
    seed: str = ""
    is_user_provided_seed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "seed": self.seed,
            "isUserProvidedSeed": self.is_user_provided_seed,
        }


def _is_time(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def parse_record(raw: Any) -> Optional[BestTimeRecord]:
    """Upgrade any stored record shape to a ``BestTimeRecord``.

    Accepted shapes:
      * a bare number (legacy): no seed, not user provided;
      * an object without ``isUserProvidedSeed``: user provided iff it has a seed;
      * the current ``{time, seed, isUserProvidedSeed}`` object.

    JSON text is decoded first. Anything else yields ``None``.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return None
    if _is_time(raw):
        return BestTimeRecord(time=raw, seed="", is_user_provided_seed=False)
    if not isinstance(raw, dict) or not _is_time(raw.get("time")):
        return None
    seed = raw.get("seed", "")
    if seed is None:
        seed = ""
    if not isinstance(seed, str):
        return None
    user_provided = raw.get("isUserProvidedSeed")
    if not isinstance(user_provided, bool):
        user_provided = bool(seed)
    return BestTimeRecord(time=raw["time"], seed=seed, is_user_provided_seed=user_provided)


class BestRecordStore:
    """Reads and conditionally writes best times through injected storage.

    Storage failures never reach the caller: reads degrade to "no record"
    and writes are skipped, both with a warning in the log.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    def get(self, modes: GameModes) -> Optional[BestTimeRecord]:
        try:
            raw = self._storage.get(modes.key)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to read best time for %s: %s", modes.key, e)
            return None
        if raw is None:
            return None
        record = parse_record(raw)
        if record is None:
            logger.warning("Ignoring malformed best time for %s: %r", modes.key, raw)
        return record

    def save(
        self,
        time: float,
        modes: GameModes,
        seed: str,
        is_user_provided_seed: bool,
    ) -> bool:
        """Store ``time`` if it beats the current record. Returns True when written."""
        existing = self.get(modes)
        if existing is not None and time >= existing.time:
            return False
        record = BestTimeRecord(time=time, seed=seed, is_user_provided_seed=is_user_provided_seed)
        try:
            self._storage.set(modes.key, record.to_dict())
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to save best time for %s: %s", modes.key, e)
            return False
        logger.info("New best time %.0f ms for %s (seed %s)", time, modes.key, seed or "-")
        return True

    def clear(self, modes: GameModes) -> None:
        try:
            self._storage.delete(modes.key)
        except OSError as e:
            logger.warning("Failed to clear best time for %s: %s", modes.key, e)

    def clear_all(self) -> None:
        """Remove every best-time key, leaving other stored data alone."""
        try:
            for key in self._storage.keys():
                if key.startswith(STORAGE_KEY_PREFIX):
                    self._storage.delete(key)
        except OSError as e:
            logger.warning("Failed to clear all best times: %s", e)

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

from lightsup.core.storage import KeyValueStorage

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "lightsup_user_preferences"

_STORAGE_NAMES = {
    "show_animations": "showAnimations",
    "show_timers": "showTimers",
    "show_move_stats": "showMoveStats",
    "countdown_seconds": "countdownSeconds",
}


@dataclass(frozen=True)
class UserPreferences:
    """Presentation settings; ``countdown_seconds`` also gates the countdown state."""

    show_animations: bool = True
    show_timers: bool = True
    show_move_stats: bool = True
    countdown_seconds: int = 5

    def to_dict(self) -> Dict[str, Any]:
        return {_STORAGE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "UserPreferences":
        """Merge stored values over the defaults, dropping unknown or ill-typed ones."""
        defaults = cls()
        values: Dict[str, Any] = {}
        for f in fields(cls):
            value = payload.get(_STORAGE_NAMES[f.name], getattr(defaults, f.name))
            if f.name == "countdown_seconds":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    value = defaults.countdown_seconds
            elif not isinstance(value, bool):
                value = getattr(defaults, f.name)
            values[f.name] = value
        return cls(**values)


class PreferencesStore:
    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    def load(self) -> UserPreferences:
        try:
            raw = self._storage.get(PREFERENCES_KEY)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to read user preferences: %s", e)
            return UserPreferences()
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Ignoring malformed user preferences: %r", raw)
            return UserPreferences()
        return UserPreferences.from_dict(raw)

    def save(self, prefs: UserPreferences) -> None:
        try:
            self._storage.set(PREFERENCES_KEY, prefs.to_dict())
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to save user preferences: %s", e)

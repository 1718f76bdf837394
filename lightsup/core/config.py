from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from lightsup.core.board import DEFAULT_SCRAMBLE_MOVES, GRID_SIZE

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "data" / "game.yaml"


@dataclass(frozen=True)
class GameConfig:
    board_count: int = 3
    grid_size: int = GRID_SIZE
    idle_limit_seconds: int = 10
    scramble_moves: int = DEFAULT_SCRAMBLE_MOVES
    seed_length: int = 8
    countdown_choices: Tuple[int, ...] = (5, 3, 0)

    @property
    def idle_limit_ms(self) -> float:
        return self.idle_limit_seconds * 1000.0


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Read a ``GameConfig`` from YAML. Keys missing from the file keep their defaults."""
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Game config not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: expected a mapping of settings")

    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{config_path.name}: unknown setting(s) {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key in ("board_count", "grid_size", "idle_limit_seconds", "scramble_moves", "seed_length"):
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{config_path.name}: '{key}' must be a positive integer")
        values[key] = value

    if "countdown_choices" in raw:
        choices = raw["countdown_choices"]
        if not isinstance(choices, list) or not choices or not all(
            isinstance(c, int) and not isinstance(c, bool) and c >= 0 for c in choices
        ):
            raise ValueError(f"{config_path.name}: 'countdown_choices' must be a list of non-negative integers")
        values["countdown_choices"] = tuple(choices)

    if values.get("grid_size", GRID_SIZE) != GRID_SIZE:
        raise ValueError(f"{config_path.name}: only a {GRID_SIZE}x{GRID_SIZE} grid is supported")

    return GameConfig(**values)

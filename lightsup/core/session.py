from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from lightsup.core.board import (
    Board,
    boards_equal,
    create_initial,
    generate_solvable,
    generate_start_board,
    is_in_bounds,
    toggle,
)
from lightsup.core.config import GameConfig
from lightsup.core.preferences import PreferencesStore, UserPreferences
from lightsup.core.prng import create_prng, generate_seed, normalize_seed
from lightsup.core.records import BestRecordStore, BestTimeRecord, GameModes

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameState(Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    FINISHED = "finished"
    FAILED = "failed"


class GameSession:
    """State machine for one play-through of N boards.

    IDLE -> COUNTDOWN -> PLAYING -> FINISHED, or PLAYING -> FAILED when a
    hard-mode board sits idle too long. ``quit()`` returns to IDLE from
    anywhere and ``start()`` from any state begins a fresh game.

    The session owns no timer. The host calls ``advance(now)`` on its own
    schedule (once per display frame is plenty) with a millisecond timestamp;
    calls made outside COUNTDOWN/PLAYING do nothing, so a late tick after a
    transition cannot touch the session.
    """

    def __init__(
        self,
        records: BestRecordStore,
        preferences_store: Optional[PreferencesStore] = None,
        config: Optional[GameConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        seed_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._records = records
        self._preferences_store = preferences_store
        self._config = config or GameConfig()
        self._clock = clock or monotonic_ms
        self._seed_factory = seed_factory or (lambda: generate_seed(self._config.seed_length))

        self._modes = GameModes()
        self._preferences = preferences_store.load() if preferences_store else UserPreferences()
        self._seed = ""
        self._reset_session_state()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self, now: Optional[float] = None) -> None:
        """Begin a new game, discarding whatever session was running."""
        now = self._now(now)
        modes = self._modes
        self._reset_session_state()
        self._previous_best = self._records.get(modes)
        self._active_modes = modes

        self._is_user_seeded = bool(self._seed)
        self._active_seed = self._seed or self._seed_factory()

        count = self._config.board_count
        moves = self._config.scramble_moves
        rng = create_prng(self._active_seed)
        self._target_boards = [generate_solvable(rng, moves) for _ in range(count)]
        if modes.is_random:
            self._player_boards = [
                generate_start_board(rng, target, moves) for target in self._target_boards
            ]

        if modes.is_hard:
            self._last_interaction = [now] * count

        logger.info(
            "Starting game: seed=%s user_seed=%s random=%s hard=%s",
            self._active_seed,
            self._is_user_seeded,
            modes.is_random,
            modes.is_hard,
        )
        self._countdown_seconds = self._preferences.countdown_seconds
        if self._countdown_seconds > 0:
            self._state = GameState.COUNTDOWN
            self._countdown_started_at = now
            self._countdown_remaining = self._countdown_seconds
        else:
            self._begin_play(now)

    def quit(self) -> None:
        if self._state is not GameState.IDLE:
            logger.debug("Quitting game in state %s", self._state.value)
        self._reset_session_state()

    def toggle_cell(self, board_index: int, row: int, col: int, now: Optional[float] = None) -> bool:
        """Apply a move. Returns False when the move is ignored.

        Moves are ignored outside PLAYING and on boards already solved.
        An index outside the boards or the grid raises ``IndexError``.
        """
        self._check_board_index(board_index)
        if not is_in_bounds(self._player_boards[board_index], row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the grid")
        if self._state is not GameState.PLAYING or self._solved[board_index]:
            return False

        self._player_boards[board_index] = toggle(self._player_boards[board_index], row, col)
        self._clicks[board_index] += 1
        if self._active_modes.is_hard:
            self._last_interaction[board_index] = self._now(now)

        for i, board in enumerate(self._player_boards):
            if not self._solved[i] and boards_equal(board, self._target_boards[i]):
                self._solved[i] = True
                logger.debug("Board %d solved", i + 1)
        if all(self._solved):
            self._finish()
        return True

    def advance(self, now: Optional[float] = None) -> None:
        """Tick the countdown or the running timers up to ``now``."""
        if self._state is GameState.COUNTDOWN:
            self._advance_countdown(self._now(now))
        elif self._state is GameState.PLAYING:
            self._advance_play(self._now(now))

    def set_seed(self, seed: Optional[str]) -> None:
        """Use ``seed`` for future games; an empty seed means a fresh one each game."""
        self._seed = normalize_seed(seed)

    def set_preferences(self, prefs: UserPreferences) -> None:
        self._preferences = prefs
        if self._preferences_store is not None:
            self._preferences_store.save(prefs)

    def set_game_modes(self, is_random: bool, is_hard: bool) -> None:
        """Select the modes used by the next ``start()``."""
        self._modes = GameModes(is_random=is_random, is_hard=is_hard)

    def clear_best_time_for_current_mode(self) -> None:
        self._records.clear(self._modes)

    def clear_all_best_times(self) -> None:
        self._records.clear_all()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_running(self) -> bool:
        """True while the host needs to keep calling ``advance()``."""
        return self._state in (GameState.COUNTDOWN, GameState.PLAYING)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def game_modes(self) -> GameModes:
        return self._modes

    @property
    def active_modes(self) -> GameModes:
        """Modes the current (or last) game was started with."""
        return self._active_modes

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    @property
    def seed(self) -> str:
        """The user-chosen seed, empty when games use generated seeds."""
        return self._seed

    @property
    def active_seed(self) -> str:
        return self._active_seed

    @property
    def is_user_seeded(self) -> bool:
        return self._is_user_seeded

    @property
    def target_boards(self) -> List[Board]:
        return list(self._target_boards)

    @property
    def player_boards(self) -> List[Board]:
        return list(self._player_boards)

    @property
    def solved(self) -> List[bool]:
        return list(self._solved)

    @property
    def timers(self) -> List[float]:
        """Per-board elapsed ms; frozen at the final values once finished."""
        if self._final_timers is not None:
            return list(self._final_timers)
        return list(self._timers)

    @property
    def final_times(self) -> Optional[List[float]]:
        return list(self._final_timers) if self._final_timers is not None else None

    @property
    def clicks(self) -> List[int]:
        return list(self._clicks)

    @property
    def total_time(self) -> float:
        return sum(self.timers)

    @property
    def total_clicks(self) -> int:
        return sum(self._clicks)

    @property
    def failure_reason(self) -> str:
        return self._failure_reason

    @property
    def countdown_remaining(self) -> int:
        return self._countdown_remaining

    @property
    def best_time(self) -> Optional[BestTimeRecord]:
        """Current stored record for the selected modes."""
        return self._records.get(self._modes)

    @property
    def previous_best_time(self) -> Optional[BestTimeRecord]:
        """Record as it stood when the current game started."""
        return self._previous_best

    @property
    def is_new_record(self) -> bool:
        if self._final_timers is None:
            return False
        return self._previous_best is None or self.total_time < self._previous_best.time

    @property
    def record_improvement(self) -> float:
        """Milliseconds shaved off the previous best, 0 when there was none."""
        if not self.is_new_record or self._previous_best is None:
            return 0.0
        return self._previous_best.time - self.total_time

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _check_board_index(self, board_index: int) -> None:
        if not 0 <= board_index < self._config.board_count:
            raise IndexError(f"Board index {board_index} out of range")

    def _reset_session_state(self) -> None:
        count = self._config.board_count
        self._state = GameState.IDLE
        self._active_modes = self._modes
        self._active_seed = ""
        self._is_user_seeded = False
        self._target_boards: List[Board] = []
        self._player_boards: List[Board] = [create_initial(False) for _ in range(count)]
        self._solved = [False] * count
        self._timers = [0.0] * count
        self._final_timers: Optional[List[float]] = None
        self._clicks = [0] * count
        self._last_interaction: List[float] = []
        self._failure_reason = ""
        self._previous_best: Optional[BestTimeRecord] = None
        self._countdown_seconds = 0
        self._countdown_started_at = 0.0
        self._countdown_remaining = 0
        self._last_tick = 0.0

    def _begin_play(self, now: float) -> None:
        if self._active_modes.is_hard:
            self._last_interaction = [now] * self._config.board_count
        self._last_tick = now
        self._countdown_remaining = 0
        self._state = GameState.PLAYING

    def _advance_countdown(self, now: float) -> None:
        elapsed_seconds = int(max(0.0, now - self._countdown_started_at) // 1000)
        self._countdown_remaining = max(0, self._countdown_seconds - elapsed_seconds)
        if self._countdown_remaining == 0:
            self._begin_play(now)

    def _advance_play(self, now: float) -> None:
        delta = max(0.0, now - self._last_tick)
        self._last_tick = now
        for i in range(len(self._timers)):
            if not self._solved[i]:
                self._timers[i] += delta

        if not self._active_modes.is_hard:
            return
        limit_ms = self._config.idle_limit_ms
        for i, last in enumerate(self._last_interaction):
            if not self._solved[i] and now - last > limit_ms:
                self._fail(
                    f"Board {i + 1} was idle for over {self._config.idle_limit_seconds} seconds."
                )
                return

    def _fail(self, reason: str) -> None:
        self._failure_reason = reason
        self._state = GameState.FAILED
        logger.info("Game failed: %s", reason)

    def _finish(self) -> None:
        self._final_timers = list(self._timers)
        self._state = GameState.FINISHED
        total = sum(self._final_timers)
        logger.info("Game finished in %.0f ms (seed %s)", total, self._active_seed)
        self._records.save(total, self._active_modes, self._active_seed, self._is_user_seeded)

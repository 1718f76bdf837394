from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QGuiApplication, QKeyEvent
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from lightsup.core.prng import generate_seed
from lightsup.core.results import format_record, format_time, mode_labels, results_summary
from lightsup.core.session import GameSession, GameState
from lightsup.ui.board_widget import BoardWidget
from lightsup.ui.colors import GameColors

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16


class MainWindow(QMainWindow):
    """Host window: renders the session and forwards player commands to it.

    A frame ``QTimer`` drives ``GameSession.advance()`` while the session is
    counting down or playing, and is stopped as soon as it is not.
    """

    def __init__(self, session: GameSession) -> None:
        super().__init__()
        self._session = session
        self._targets: List[BoardWidget] = []
        self._players: List[BoardWidget] = []
        self._timer_labels: List[QLabel] = []
        self._click_labels: List[QLabel] = []

        self.setWindowTitle("LightsUp")
        self._build_ui()

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        self._refresh()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        central = QWidget()
        central.setStyleSheet(
            f"background: {GameColors.BG}; color: {GameColors.TEXT_PRIMARY}; font-size: 14px;"
        )
        root = QVBoxLayout(central)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        title = QLabel("LightsUp")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 36px; font-weight: 800;")
        root.addWidget(title)

        controls = QHBoxLayout()
        self._start_button = QPushButton("Start")
        self._start_button.clicked.connect(self._start_game)
        self._quit_button = QPushButton("Quit")
        self._quit_button.clicked.connect(self._quit_game)
        self._random_check = QCheckBox("Random Start")
        self._hard_check = QCheckBox("Hard Mode")
        self._random_check.toggled.connect(self._on_modes_changed)
        self._hard_check.toggled.connect(self._on_modes_changed)
        for widget in (self._start_button, self._quit_button, self._random_check, self._hard_check):
            controls.addWidget(widget)
        controls.addStretch(1)

        self._seed_input = QLineEdit()
        self._seed_input.setPlaceholderText("Seed (blank = random)")
        self._seed_input.setMaxLength(32)
        self._seed_input.textEdited.connect(self._on_seed_edited)
        seed_button = QPushButton("New Seed")
        seed_button.clicked.connect(self._fill_random_seed)
        controls.addWidget(self._seed_input)
        controls.addWidget(seed_button)
        root.addLayout(controls)

        prefs_row = QHBoxLayout()
        prefs = self._session.preferences
        self._timers_check = QCheckBox("Show Timers")
        self._timers_check.setChecked(prefs.show_timers)
        self._moves_check = QCheckBox("Show Move Count")
        self._moves_check.setChecked(prefs.show_move_stats)
        self._animations_check = QCheckBox("Show Animations")
        self._animations_check.setChecked(prefs.show_animations)
        self._countdown_combo = QComboBox()
        for seconds in self._session.config.countdown_choices:
            self._countdown_combo.addItem(f"{seconds} seconds" if seconds else "None", seconds)
        index = self._countdown_combo.findData(prefs.countdown_seconds)
        self._countdown_combo.setCurrentIndex(max(0, index))
        for check in (self._timers_check, self._moves_check, self._animations_check):
            check.toggled.connect(self._on_preferences_changed)
            prefs_row.addWidget(check)
        self._countdown_combo.currentIndexChanged.connect(self._on_preferences_changed)
        prefs_row.addWidget(QLabel("Countdown"))
        prefs_row.addWidget(self._countdown_combo)
        prefs_row.addStretch(1)

        self._best_label = QLabel()
        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(self._clear_current_record)
        clear_all_button = QPushButton("Clear All")
        clear_all_button.clicked.connect(self._clear_all_records)
        prefs_row.addWidget(self._best_label)
        prefs_row.addWidget(clear_button)
        prefs_row.addWidget(clear_all_button)
        root.addLayout(prefs_row)

        self._status_label = QLabel()
        self._status_label.setAlignment(Qt.AlignCenter)
        self._status_label.setWordWrap(True)
        root.addWidget(self._status_label)

        boards = QGridLayout()
        boards.setHorizontalSpacing(24)
        for i in range(self._session.config.board_count):
            panel = QFrame()
            panel.setStyleSheet(
                f"QFrame {{ background: {GameColors.PANEL_BG}; border: 1px solid {GameColors.PANEL_BORDER};"
                " border-radius: 12px; }"
            )
            column = QVBoxLayout(panel)
            header = QLabel(f"Board {i + 1}")
            header.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; border: none;")
            target = BoardWidget(interactive=False, lit_color=GameColors.TARGET_LIT)
            target.setMaximumSize(140, 140)
            player = BoardWidget(interactive=True)
            player.cell_clicked.connect(lambda row, col, index=i: self._on_cell_clicked(index, row, col))
            timer_label = QLabel()
            clicks_label = QLabel()
            for label in (timer_label, clicks_label):
                label.setStyleSheet("border: none; font-family: monospace;")
            column.addWidget(header)
            column.addWidget(target, 0, Qt.AlignHCenter)
            column.addWidget(player, 1)
            column.addWidget(timer_label)
            column.addWidget(clicks_label)
            boards.addWidget(panel, 0, i)
            self._targets.append(target)
            self._players.append(player)
            self._timer_labels.append(timer_label)
            self._click_labels.append(clicks_label)
        root.addLayout(boards, 1)

        footer = QHBoxLayout()
        self._copy_button = QPushButton("Copy Results")
        self._copy_button.clicked.connect(self._copy_results)
        footer.addStretch(1)
        footer.addWidget(self._copy_button)
        root.addLayout(footer)

        self.setCentralWidget(central)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _start_game(self) -> None:
        self._session.start()
        self._sync_frame_timer()
        self._refresh()

    def _quit_game(self) -> None:
        self._session.quit()
        self._sync_frame_timer()
        self._refresh()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Space starts from idle, R restarts, Q or Escape quits.

        Keys typed into the seed field never reach here.
        """
        key = event.key()
        if key == Qt.Key_Space and self._session.state is GameState.IDLE:
            self._start_game()
        elif key == Qt.Key_R and self._session.state is not GameState.IDLE:
            self._start_game()
        elif key in (Qt.Key_Q, Qt.Key_Escape) and self._session.state is not GameState.IDLE:
            self._quit_game()
        else:
            super().keyPressEvent(event)

    def _on_cell_clicked(self, board_index: int, row: int, col: int) -> None:
        if self._session.toggle_cell(board_index, row, col):
            self._sync_frame_timer()
            self._refresh()

    def _on_frame(self) -> None:
        self._session.advance()
        self._sync_frame_timer()
        self._refresh()

    def _sync_frame_timer(self) -> None:
        if self._session.is_running:
            if not self._frame_timer.isActive():
                self._frame_timer.start()
        elif self._frame_timer.isActive():
            self._frame_timer.stop()

    def _on_modes_changed(self) -> None:
        self._session.set_game_modes(self._random_check.isChecked(), self._hard_check.isChecked())
        self._refresh()

    def _on_seed_edited(self, text: str) -> None:
        upper = text.upper()
        if upper != text:
            self._seed_input.setText(upper)
        self._session.set_seed(upper)

    def _fill_random_seed(self) -> None:
        seed = generate_seed(self._session.config.seed_length)
        self._seed_input.setText(seed)
        self._session.set_seed(seed)

    def _on_preferences_changed(self) -> None:
        prefs = replace(
            self._session.preferences,
            show_timers=self._timers_check.isChecked(),
            show_move_stats=self._moves_check.isChecked(),
            show_animations=self._animations_check.isChecked(),
            countdown_seconds=int(self._countdown_combo.currentData() or 0),
        )
        self._session.set_preferences(prefs)
        self._refresh()

    def _clear_current_record(self) -> None:
        self._session.clear_best_time_for_current_mode()
        self._refresh()

    def _clear_all_records(self) -> None:
        self._session.clear_all_best_times()
        self._refresh()

    def _copy_results(self) -> None:
        session = self._session
        if session.final_times is None:
            return
        text = results_summary(
            session.final_times,
            session.clicks,
            session.active_modes,
            session.active_seed,
            session.preferences,
            session.is_new_record,
        )
        QGuiApplication.clipboard().setText(text)
        logger.info("Copied results to clipboard")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        session = self._session
        state = session.state
        prefs = session.preferences
        idle = state is GameState.IDLE

        for widget in (self._random_check, self._hard_check, self._seed_input):
            widget.setEnabled(idle)
        self._countdown_combo.setEnabled(not session.is_running)
        self._quit_button.setEnabled(not idle)
        self._start_button.setText("Start" if idle else "Restart")
        self._copy_button.setEnabled(state is GameState.FINISHED)

        best = session.best_time
        best_text = f"Best: {format_record(best)}"
        if best is not None and best.seed:
            best_text += f"  (seed {best.seed})"
        self._best_label.setText(best_text)
        best_color = GameColors.TEXT_MUTED if best is None else GameColors.TEXT_PRIMARY
        if best is not None and best.is_user_provided_seed:
            best_color = GameColors.USER_SEED
        self._best_label.setStyleSheet(f"color: {best_color};")

        targets = session.target_boards
        players = session.player_boards
        solved = session.solved
        timers = session.timers
        clicks = session.clicks
        for i, player in enumerate(self._players):
            if targets:
                self._targets[i].set_board(targets[i])
            player.set_animated(prefs.show_animations)
            player.set_board(players[i])
            player.set_solved(solved[i])
            player.set_input_enabled(state is GameState.PLAYING)
            self._timer_labels[i].setText(format_time(timers[i]) if prefs.show_timers else "")
            self._click_labels[i].setText(f"{clicks[i]} clicks" if prefs.show_move_stats else "")

        self._status_label.setText(self._status_text())
        status_color = GameColors.FAILED if state is GameState.FAILED else GameColors.TEXT_PRIMARY
        self._status_label.setStyleSheet(f"font-size: 18px; color: {status_color};")

    def _status_text(self) -> str:
        session = self._session
        state = session.state
        if state is GameState.IDLE:
            labels = mode_labels(session.game_modes)
            suffix = f" [{', '.join(labels)}]" if labels else ""
            return "Press Space to start" + suffix
        if state is GameState.COUNTDOWN:
            return f"Get ready... {session.countdown_remaining}"
        if state is GameState.PLAYING:
            seed_kind = "user seed" if session.is_user_seeded else "seed"
            return f"Match the targets! ({seed_kind} {session.active_seed})"
        if state is GameState.FAILED:
            return f"Game Over: {session.failure_reason}  (R to retry, Q to quit)"
        text = f"Finished in {format_time(session.total_time)}"
        if session.is_new_record:
            text += " - New Record!"
            if session.record_improvement > 0:
                text += f" (-{format_time(session.record_improvement)})"
        return text

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop ticking before the window goes away."""
        self._frame_timer.stop()
        super().closeEvent(event)

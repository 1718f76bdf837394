"""Grid widget that paints one board and reports cell clicks."""

from __future__ import annotations

from typing import Optional, Set

from PySide6.QtCore import QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from lightsup.core.board import Board, Cell, create_initial
from lightsup.ui.colors import GameColors, blend_hex


FLASH_INTERVAL_MS = 16
FLASH_STEP = 0.12


class BoardWidget(QWidget):
    """Square grid of rounded cells. Interactive boards emit ``cell_clicked(row, col)``."""

    cell_clicked = Signal(int, int)

    def __init__(
        self,
        interactive: bool = True,
        lit_color: str = GameColors.LIT,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._board: Board = create_initial(False)
        self._interactive = interactive
        self._lit_color = lit_color
        self._solved = False
        self._enabled_for_input = False
        self._animated = False
        self._flash_cells: Set[Cell] = set()
        self._flash = 0.0
        self._flash_timer = QTimer(self)
        self._flash_timer.setInterval(FLASH_INTERVAL_MS)
        self._flash_timer.timeout.connect(self._fade_flash)
        self.setMinimumSize(120, 120)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        if interactive:
            self.setCursor(Qt.PointingHandCursor)

    def set_board(self, board: Board) -> None:
        if self._animated and len(board) == len(self._board):
            changed = {
                (r, c)
                for r, row in enumerate(board)
                for c, lit in enumerate(row)
                if lit != self._board[r][c]
            }
            if changed:
                self._flash_cells = changed
                self._flash = 1.0
                self._flash_timer.start()
        self._board = board
        self.update()

    def set_animated(self, animated: bool) -> None:
        """Flash cells that change in ``set_board`` when enabled."""
        self._animated = animated
        if not animated:
            self._stop_flash()

    def _fade_flash(self) -> None:
        self._flash -= FLASH_STEP
        if self._flash <= 0:
            self._stop_flash()
        self.update()

    def _stop_flash(self) -> None:
        self._flash_timer.stop()
        self._flash = 0.0
        self._flash_cells = set()

    def set_solved(self, solved: bool) -> None:
        self._solved = solved
        self.update()

    def set_input_enabled(self, enabled: bool) -> None:
        self._enabled_for_input = enabled

    def hasHeightForWidth(self) -> bool:
        return True

    def heightForWidth(self, width: int) -> int:
        return width

    def _cell_geometry(self) -> tuple[float, float, float]:
        size = len(self._board)
        side = min(self.width(), self.height())
        cell = side / size
        x0 = (self.width() - side) / 2
        y0 = (self.height() - side) / 2
        return x0, y0, cell

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if not (self._interactive and self._enabled_for_input) or self._solved:
            return super().mousePressEvent(event)
        x0, y0, cell = self._cell_geometry()
        pos = event.position()
        col = int((pos.x() - x0) // cell)
        row = int((pos.y() - y0) // cell)
        size = len(self._board)
        if 0 <= row < size and 0 <= col < size:
            self.cell_clicked.emit(row, col)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        x0, y0, cell = self._cell_geometry()
        gap = max(2.0, cell * 0.08)
        lit = self._lit_color
        if self._solved:
            lit = blend_hex(lit, GameColors.SOLVED_BORDER, 0.5)
        for r, row in enumerate(self._board):
            for c, is_lit in enumerate(row):
                rect = QRectF(x0 + c * cell + gap / 2, y0 + r * cell + gap / 2, cell - gap, cell - gap)
                painter.setPen(Qt.NoPen)
                color = lit if is_lit else GameColors.UNLIT
                if (r, c) in self._flash_cells:
                    color = blend_hex(color, GameColors.FLASH, self._flash * 0.6)
                painter.setBrush(QColor(color))
                painter.drawRoundedRect(rect, gap, gap)
        if self._solved:
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(QColor(GameColors.SOLVED_BORDER), 3))
            side = cell * len(self._board)
            painter.drawRoundedRect(QRectF(x0 + 1, y0 + 1, side - 2, side - 2), gap * 2, gap * 2)

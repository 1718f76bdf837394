"""Board values, the toggle rule, and solvable-board generation."""

from __future__ import annotations

from typing import List, Protocol, Sequence, Tuple

GRID_SIZE = 5
DEFAULT_SCRAMBLE_MOVES = 15

Row = Tuple[bool, ...]
Board = Tuple[Row, ...]
Cell = Tuple[int, int]

NEIGHBOR_OFFSETS: Sequence[Cell] = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


class RandomSource(Protocol):
    def randrange(self, n: int) -> int: ...


def create_initial(all_lit: bool = False, size: int = GRID_SIZE) -> Board:
    """Return a board with every cell lit or every cell unlit."""
    return tuple(tuple(all_lit for _ in range(size)) for _ in range(size))


def from_rows(rows: Sequence[Sequence[object]]) -> Board:
    """Build a board from nested sequences (lists from JSON, "X."-strings, ...)."""
    board = tuple(
        tuple(cell in (True, 1, "X", "x", "#") for cell in row) for row in rows
    )
    if any(len(row) != len(board) for row in board):
        raise ValueError("Board must be square")
    return board


def is_in_bounds(board: Board, row: int, col: int) -> bool:
    size = len(board)
    return 0 <= row < size and 0 <= col < size


def toggle(board: Board, row: int, col: int) -> Board:
    """Flip (row, col) and its orthogonal in-bounds neighbours.

    Returns a new board; the input is never modified. Neighbours outside the
    grid are skipped, there is no wraparound.
    """
    if not is_in_bounds(board, row, col):
        raise IndexError(f"Cell ({row}, {col}) is outside a {len(board)}x{len(board)} board")
    flipped = set()
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        if is_in_bounds(board, nr, nc):
            flipped.add((nr, nc))
    return tuple(
        tuple((not lit) if (r, c) in flipped else lit for c, lit in enumerate(cells))
        for r, cells in enumerate(board)
    )


def apply_moves(board: Board, moves: Sequence[Cell]) -> Board:
    for row, col in moves:
        board = toggle(board, row, col)
    return board


def boards_equal(a: Board, b: Board) -> bool:
    """Cell-by-cell comparison; boards of different sizes are never equal."""
    if len(a) != len(b):
        return False
    return all(
        len(row_a) == len(row_b) and all(x == y for x, y in zip(row_a, row_b))
        for row_a, row_b in zip(a, b)
    )


def lit_count(board: Board) -> int:
    return sum(1 for row in board for lit in row if lit)


def generate_with_moves(
    rng: RandomSource,
    moves: int = DEFAULT_SCRAMBLE_MOVES,
    size: int = GRID_SIZE,
) -> Tuple[Board, List[Cell]]:
    """Scramble the all-unlit board with ``moves`` random toggles.

    Every toggle is its own inverse, so replaying the returned move list on
    the board brings it back to all-unlit. Scrambling continues past
    ``moves`` while the board is still completely unlit.
    """
    board = create_initial(False, size)
    applied: List[Cell] = []
    while len(applied) < moves or lit_count(board) == 0:
        cell = (rng.randrange(size), rng.randrange(size))
        board = toggle(board, *cell)
        applied.append(cell)
    return board, applied


def generate_solvable(
    rng: RandomSource,
    moves: int = DEFAULT_SCRAMBLE_MOVES,
    size: int = GRID_SIZE,
) -> Board:
    board, _ = generate_with_moves(rng, moves, size)
    return board


def generate_start_board(
    rng: RandomSource,
    target: Board,
    moves: int = DEFAULT_SCRAMBLE_MOVES,
) -> Board:
    """Draw a random-start player board that differs from ``target``."""
    while True:
        candidate = generate_solvable(rng, moves, len(target))
        if not boards_equal(candidate, target):
            return candidate


def board_to_text(board: Board) -> str:
    """Render a board as rows of ``X`` (lit) and ``.`` (unlit)."""
    return "\n".join("".join("X" if lit else "." for lit in row) for row in board)

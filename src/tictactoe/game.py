"""Core rules for standard 3x3 tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import (
    CellOccupiedError,
    GameOverError,
    InvalidBoardError,
    InvalidCoordinateError,
)

Mark = str  # "X" or "O"
Move = Tuple[int, int]  # (row, col), both in 0..2

X: Mark = "X"
O: Mark = "O"
EMPTY = " "
SIZE = 3

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

_EMPTY_CHARS = frozenset(" .-_")


def other(mark: Mark) -> Mark:
    return O if mark == X else X


def move_to_index(move: Move) -> int:
    row, col = move
    return row * SIZE + col


def index_to_move(index: int) -> Move:
    return divmod(index, SIZE)


def _check_move(move: object) -> Move:
    try:
        row, col = move  # type: ignore[misc]
    except (TypeError, ValueError):
        raise InvalidCoordinateError(move) from None
    for value in (row, col):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidCoordinateError(move)
        if not 0 <= value < SIZE:
            raise InvalidCoordinateError(move)
    return row, col


# ---------- Results ----------


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameResult:
    status: GameStatus
    winner: Optional[Mark] = None
    # Indexes of the completed line when status is WIN
    line: Optional[Tuple[int, int, int]] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS

    def __str__(self) -> str:
        if self.status is GameStatus.WIN:
            return f"{self.winner} wins"
        if self.status is GameStatus.DRAW:
            return "draw"
        return "in progress"


IN_PROGRESS = GameResult(GameStatus.IN_PROGRESS)
DRAW = GameResult(GameStatus.DRAW)


def _completed_lines(cells: Sequence[str]) -> List[Tuple[int, int, int]]:
    return [
        (a, b, c)
        for a, b, c in WINNING_LINES
        if cells[a] != EMPTY and cells[a] == cells[b] == cells[c]
    ]


def _validate_cells(cells: Sequence[str]) -> None:
    if len(cells) != SIZE * SIZE:
        raise InvalidBoardError(f"Expected 9 cells, got {len(cells)}")
    for c in cells:
        if c not in (X, O, EMPTY):
            raise InvalidBoardError(f"Unknown cell value {c!r}")

    x_count, o_count = cells.count(X), cells.count(O)
    if x_count - o_count not in (0, 1):
        raise InvalidBoardError(
            f"Wrong number of X and O marks ({x_count} and {o_count}), "
            "X moves first and players alternate"
        )

    winners = {cells[a] for a, _, _ in _completed_lines(cells)}
    if len(winners) > 1:
        raise InvalidBoardError("Both players cannot own a line")
    if X in winners and x_count != o_count + 1:
        raise InvalidBoardError("X won but O moved afterwards")
    if O in winners and x_count != o_count:
        raise InvalidBoardError("O won but X moved afterwards")


# ---------- Board ----------


@dataclass
class Board:
    # 'X', 'O', or ' ' (space) for empty, row-major
    cells: List[str] = field(default_factory=lambda: [EMPTY] * (SIZE * SIZE))

    def __post_init__(self) -> None:
        self.cells = list(self.cells)
        _validate_cells(self.cells)

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Build a board from 9 characters, e.g. ``"XO.X..O.."``.

        ``.``, ``-``, ``_`` and space all stand for an empty cell.
        """
        if len(text) != SIZE * SIZE:
            raise InvalidBoardError(f"Expected 9 characters, got {len(text)}")
        cells = [EMPTY if ch in _EMPTY_CHARS else ch.upper() for ch in text]
        return cls(cells=cells)

    # ---- readable state ----

    @property
    def move_count(self) -> int:
        return SIZE * SIZE - self.cells.count(EMPTY)

    @property
    def current_player(self) -> Mark:
        return X if self.cells.count(X) == self.cells.count(O) else O

    def cell(self, row: int, col: int) -> str:
        row, col = _check_move((row, col))
        return self.cells[row * SIZE + col]

    def legal_moves(self) -> List[Move]:
        """Empty cells in row-major order; empty once the game is over."""
        if self.status().is_terminal:
            return []
        return [index_to_move(i) for i, c in enumerate(self.cells) if c == EMPTY]

    def status(self) -> GameResult:
        lines = _completed_lines(self.cells)
        if lines:
            line = lines[0]
            return GameResult(GameStatus.WIN, winner=self.cells[line[0]], line=line)
        if EMPTY not in self.cells:
            return DRAW
        return IN_PROGRESS

    def winner(self) -> Optional[Mark]:
        return self.status().winner

    def is_terminal(self) -> bool:
        return self.status().is_terminal

    # ---- mutation ----

    def apply(self, move: Move) -> None:
        """Place the current player's mark at ``move`` and pass the turn.

        The board is left untouched when the move is rejected.
        """
        row, col = _check_move(move)
        if self.is_terminal():
            raise GameOverError()
        index = row * SIZE + col
        if self.cells[index] != EMPTY:
            raise CellOccupiedError(row, col, self.cells[index])
        self.cells[index] = self.current_player

    def clone(self) -> "Board":
        # The source already passed validation, so skip __post_init__.
        board = object.__new__(Board)
        board.cells = self.cells.copy()
        return board


def generate_moves(board: Board) -> List[Move]:
    """All legal moves of ``board``, row-major."""
    return board.legal_moves()

"""Exceptions raised by the tic-tac-toe engine."""

from __future__ import annotations


class TicTacToeError(Exception):
    """Base class for every engine error."""


class InvalidMoveError(TicTacToeError, ValueError):
    """A move that cannot be applied to the current board."""


class InvalidCoordinateError(InvalidMoveError):
    def __init__(self, move: object) -> None:
        super().__init__(f"Coordinate {move!r} is outside the 3x3 grid")
        self.move = move


class CellOccupiedError(InvalidMoveError):
    def __init__(self, row: int, col: int, mark: str) -> None:
        super().__init__(f"Cell ({row}, {col}) is already marked by {mark}")
        self.row = row
        self.col = col
        self.mark = mark


class GameOverError(InvalidMoveError):
    def __init__(self) -> None:
        super().__init__("Game already finished")


class EmptyLegalMoveSetError(TicTacToeError, RuntimeError):
    """Raised when a move is requested from a board that has none left.

    The game loop checks ``Board.status()`` before asking for a move, so
    seeing this means the loop itself is broken.
    """

    def __init__(self) -> None:
        super().__init__("No valid moves available")


class InvalidBoardError(TicTacToeError, ValueError):
    """A cell layout that cannot arise from alternating play."""

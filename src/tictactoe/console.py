"""Text rendering of the board for terminals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .game import EMPTY, SIZE, Board, GameStatus

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


def render_board(board: Board) -> str:
    """Grid with column letters A-C across the top and rows 1-3 down the side."""
    lines = ["     A   B   C", "   ------------"]
    for row in range(SIZE):
        cells = [board.cell(row, col) for col in range(SIZE)]
        lines.append(f" {row + 1} |  " + " | ".join(c if c != EMPTY else " " for c in cells))
        if row < SIZE - 1:
            lines.append("   |  --+---+--")
    return "\n".join(lines)


@dataclass
class ConsoleRenderer:
    clear: bool = True
    output: Callable[[str], None] = print

    def render(self, board: Board) -> None:
        if self.clear:
            self.output(CLEAR_SCREEN)
        self.output(render_board(board))

        result = board.status()
        if result.status is GameStatus.WIN:
            self.output(f"{result.winner} wins!")
            self.output(f"The winning cells are: {list(result.line or ())}")
        elif result.status is GameStatus.DRAW:
            self.output("No one wins this time")
        else:
            self.output(f"{board.current_player} to move")

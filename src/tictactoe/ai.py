"""Exhaustive minimax search with alpha-beta pruning for tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging
import math

from .errors import EmptyLegalMoveSetError
from .game import Board, GameStatus, Mark, Move, generate_moves

logger = logging.getLogger(__name__)

WIN_SCORE = 10


def evaluate(board: Board, perspective: Mark) -> int:
    """Score ``board`` for ``perspective``.

    A win is worth ``WIN_SCORE`` no matter how deep in the tree it was
    found; draws and unfinished boards are worth 0.
    """
    result = board.status()
    if result.status is not GameStatus.WIN:
        return 0
    return WIN_SCORE if result.winner == perspective else -WIN_SCORE


@dataclass
class MinimaxAI:
    """Computer player searching the whole game tree.

      - MinimaxAI(player="O")
      - best_move(board) -> (row, col)

    ``pruning=False`` runs plain minimax; it visits far more nodes but must
    pick exactly the same moves.
    """

    player: Mark
    pruning: bool = True
    nodes_searched: int = field(default=0, init=False, repr=False)

    # ---- public API ----

    def choose(self, board: Board) -> Move:
        if board.current_player != self.player:
            raise ValueError("It is not this AI player's turn")
        return self.best_move(board)

    def best_move(self, board: Board) -> Move:
        """Best move for the side to move on ``board``.

        Ties go to the first move in row-major order.
        """
        _, move = self._search_root(board)
        if move is None:
            raise EmptyLegalMoveSetError()
        return move

    def score(self, board: Board) -> int:
        """Minimax value of ``board`` from this AI's point of view."""
        self.nodes_searched = 0
        return self._minimax(
            board,
            maximizing=board.current_player == self.player,
            alpha=-math.inf,
            beta=math.inf,
            perspective=self.player,
        )

    # ---- core search ----

    def _search_root(self, board: Board) -> Tuple[float, Optional[Move]]:
        self.nodes_searched = 1
        me = board.current_player
        alpha, beta = -math.inf, math.inf
        best_value = -math.inf
        best_move: Optional[Move] = None

        for move in generate_moves(board):
            child = board.clone()
            child.apply(move)
            value = self._minimax(child, False, alpha, beta, me)
            # Strict comparison keeps the earliest move on ties
            if value > best_value:
                best_value, best_move = value, move
            alpha = max(alpha, best_value)

        logger.debug(
            "minimax(%s) picked %s with score %s after %d nodes (pruning=%s)",
            me,
            best_move,
            best_value,
            self.nodes_searched,
            self.pruning,
        )
        return best_value, best_move

    def _minimax(
        self,
        board: Board,
        maximizing: bool,
        alpha: float,
        beta: float,
        perspective: Mark,
    ) -> int:
        self.nodes_searched += 1
        if board.is_terminal():
            return evaluate(board, perspective)

        if maximizing:
            value = -math.inf
            for move in generate_moves(board):
                child = board.clone()
                child.apply(move)
                value = max(value, self._minimax(child, False, alpha, beta, perspective))
                alpha = max(alpha, value)
                if self.pruning and alpha >= beta:
                    break
        else:
            value = math.inf
            for move in generate_moves(board):
                child = board.clone()
                child.apply(move)
                value = min(value, self._minimax(child, True, alpha, beta, perspective))
                beta = min(beta, value)
                if self.pruning and beta <= alpha:
                    break
        return int(value)

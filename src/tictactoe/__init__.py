"""Tic-tac-toe package exposing game rules, the minimax AI, players, and the web API."""

from .ai import MinimaxAI, evaluate
from .engine import TicTacToe
from .game import Board, GameResult, GameStatus, generate_moves
from .players import ComputerPlayer, HumanPlayer, RandomPlayer, create_player
from .ui import app

__all__ = [
    "Board",
    "ComputerPlayer",
    "GameResult",
    "GameStatus",
    "HumanPlayer",
    "MinimaxAI",
    "RandomPlayer",
    "TicTacToe",
    "app",
    "create_player",
    "evaluate",
    "generate_moves",
]

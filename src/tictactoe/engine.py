"""Turn loop that pits two players against each other on one board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Union
import logging

from .errors import InvalidMoveError
from .game import O, X, Board, GameResult, Mark, Move
from .players import Player

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, board: Board) -> None:
        ...


@dataclass(frozen=True)
class AwaitingMove:
    mark: Mark


@dataclass(frozen=True)
class Finished:
    result: GameResult


GameState = Union[AwaitingMove, Finished]


@dataclass
class TicTacToe:
    """One game between ``player_x`` and ``player_o``; X always opens."""

    player_x: Player
    player_o: Player
    renderer: Optional[Renderer] = None
    on_error: Optional[Callable[[str], None]] = None
    board: Board = field(default_factory=Board)
    history: List[Move] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.player_x.mark != X or self.player_o.mark != O:
            raise ValueError(
                "Players must play X and O, got "
                f"{self.player_x.mark!r} and {self.player_o.mark!r}"
            )
        self.state: GameState = self._state_after_move()

    def current_player(self) -> Player:
        return self.player_x if self.board.current_player == X else self.player_o

    def step(self) -> GameState:
        """Play a single turn and return the resulting state."""
        if isinstance(self.state, Finished):
            return self.state

        player = self.current_player()
        while True:
            move = player.choose_move(self.board)
            try:
                self.board.apply(move)
            except InvalidMoveError as exc:
                # Only humans may hand back an illegal move; anything else
                # is a broken player and must not be retried forever.
                if not player.interactive:
                    raise
                logger.info("Rejected %s from %s: %s", move, player.mark, exc)
                if self.on_error is not None:
                    self.on_error(str(exc))
                continue
            break

        self.history.append(move)
        logger.info("%s plays %s", player.mark, move)
        self.state = self._state_after_move()
        return self.state

    def play(self) -> GameResult:
        """Run turns until the board reaches a terminal state."""
        self._render()
        while not isinstance(self.state, Finished):
            self.step()
            self._render()
        logger.info("Game over: %s after %d moves", self.state.result, len(self.history))
        return self.state.result

    # ---- helpers ----

    def _state_after_move(self) -> GameState:
        result = self.board.status()
        if result.is_terminal:
            return Finished(result)
        return AwaitingMove(self.board.current_player)

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.board)

"""Player variants: human (text input), random, and minimax computer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Protocol
import random

from .ai import MinimaxAI
from .errors import EmptyLegalMoveSetError, InvalidCoordinateError
from .game import EMPTY, SIZE, Board, Mark, Move

PLAYER_KINDS = ("human", "computer", "random")

_COLUMNS = "ABC"
_ROWS = "123"


class Player(Protocol):
    mark: Mark
    interactive: bool

    def choose_move(self, board: Board) -> Move:
        ...


def parse_coordinate(text: str) -> Move:
    """Parse console input into a ``(row, col)`` move.

    Accepts the labels printed around the grid: a column letter ``A``-``C``
    and a row digit ``1``-``3`` in either order (``"B2"``, ``"2b"``), or two
    digits read as row then column (``"22"``, ``"2 2"``, ``"2,2"``).
    """
    token = "".join(text.replace(",", " ").split()).upper()
    if len(token) != 2:
        raise ValueError(f"Cannot read a coordinate from {text!r}")

    first, second = token
    if first.isalpha() and second.isdigit():
        letter, digit = first, second
    elif first.isdigit() and second.isalpha():
        digit, letter = first, second
    elif first.isdigit() and second.isdigit():
        if first not in _ROWS or second not in _ROWS:
            raise InvalidCoordinateError(text)
        return _ROWS.index(first), _ROWS.index(second)
    else:
        raise ValueError(f"Cannot read a coordinate from {text!r}")

    if letter not in _COLUMNS or digit not in _ROWS:
        raise InvalidCoordinateError(text)
    return _ROWS.index(digit), _COLUMNS.index(letter)


@dataclass
class HumanPlayer:
    """Reads moves from an input provider until one of them is legal."""

    mark: Mark
    input_provider: Callable[[str], str] = input
    output: Callable[[str], None] = print
    interactive: bool = field(default=True, init=False)

    def choose_move(self, board: Board) -> Move:
        if board.is_terminal():
            raise EmptyLegalMoveSetError()
        while True:
            raw = self.input_provider(f"{self.mark}'s move: ")
            try:
                move = parse_coordinate(raw)
            except InvalidCoordinateError:
                self.output(
                    f"Coordinates must be within A-C and 1-{SIZE}. Try again."
                )
                continue
            except ValueError:
                self.output("Invalid input. Try again.")
                continue

            if board.cell(*move) != EMPTY:
                self.output("That cell is already occupied.")
                continue
            return move


@dataclass
class RandomPlayer:
    mark: Mark
    rng: random.Random = field(default_factory=random.Random, repr=False)
    interactive: bool = field(default=False, init=False)

    def choose_move(self, board: Board) -> Move:
        moves = board.legal_moves()
        if not moves:
            raise EmptyLegalMoveSetError()
        return self.rng.choice(moves)


@dataclass
class ComputerPlayer:
    mark: Mark
    ai: MinimaxAI = field(init=False, repr=False)
    interactive: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.ai = MinimaxAI(player=self.mark)

    def choose_move(self, board: Board) -> Move:
        return self.ai.best_move(board)


def create_player(kind: str, mark: Mark, **options: object) -> Player:
    """Build the player named by ``kind`` (one of ``PLAYER_KINDS``).

    ``options`` go to the chosen constructor, e.g. ``rng`` for random
    players or ``input_provider`` for humans.
    """
    factories: Dict[str, Callable[..., Player]] = {
        "human": HumanPlayer,
        "computer": ComputerPlayer,
        "random": RandomPlayer,
    }
    try:
        factory = factories[kind]
    except KeyError as exc:
        raise ValueError(
            f"Unknown player kind {kind!r}. Choose one of {', '.join(PLAYER_KINDS)}."
        ) from exc
    return factory(mark, **options)

"""Tests for the turn loop."""

import itertools
import random
from dataclasses import dataclass, field

import pytest

from tictactoe.engine import AwaitingMove, Finished, TicTacToe
from tictactoe.errors import CellOccupiedError
from tictactoe.game import GameStatus
from tictactoe.players import ComputerPlayer, HumanPlayer, RandomPlayer


@dataclass
class ScriptedPlayer:
    mark: str
    moves: list
    interactive: bool = False

    def choose_move(self, board):
        return self.moves.pop(0)


@dataclass
class RecordingRenderer:
    frames: list = field(default_factory=list)

    def render(self, board):
        self.frames.append("".join(board.cells))


def test_rejects_mismatched_marks():
    with pytest.raises(ValueError):
        TicTacToe(RandomPlayer("O"), RandomPlayer("X"))


def test_scripted_top_row_win():
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0), (0, 1), (0, 2)]),
        ScriptedPlayer("O", [(1, 1), (2, 2)]),
    )
    assert game.state == AwaitingMove("X")
    assert game.step() == AwaitingMove("O")

    result = game.play()
    assert result.status is GameStatus.WIN
    assert result.winner == "X"
    assert game.state == Finished(result)
    assert game.history == [(0, 0), (1, 1), (0, 1), (2, 2), (0, 2)]


def test_scripted_draw():
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0), (0, 2), (1, 0), (2, 1), (2, 2)]),
        ScriptedPlayer("O", [(0, 1), (1, 1), (1, 2), (2, 0)]),
    )
    result = game.play()
    assert result.status is GameStatus.DRAW
    assert game.board.move_count == 9


def test_step_after_finish_is_a_no_op():
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0), (0, 1), (0, 2)]),
        ScriptedPlayer("O", [(1, 1), (2, 2)]),
    )
    result = game.play()
    assert game.step() == Finished(result)


def test_illegal_move_from_engine_player_is_fatal():
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0)]),
        ScriptedPlayer("O", [(0, 0)]),
    )
    game.step()
    with pytest.raises(CellOccupiedError):
        game.step()
    assert game.board.move_count == 1


def test_illegal_move_from_interactive_player_is_retried():
    errors = []
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0)]),
        ScriptedPlayer("O", [(0, 0), (1, 1)], interactive=True),
        on_error=errors.append,
    )
    game.step()
    assert game.step() == AwaitingMove("X")
    assert game.board.cell(1, 1) == "O"
    assert len(errors) == 1


def test_renderer_sees_every_position():
    renderer = RecordingRenderer()
    game = TicTacToe(
        ScriptedPlayer("X", [(0, 0), (0, 1), (0, 2)]),
        ScriptedPlayer("O", [(1, 1), (2, 2)]),
        renderer=renderer,
    )
    game.play()
    assert len(renderer.frames) == 6
    assert renderer.frames[0] == " " * 9
    assert renderer.frames[-1] == "XXX O   O"


def test_human_against_computer():
    answers = itertools.cycle(["B2", "A1", "C3", "A3", "B1", "C2", "C1", "A2", "B3"])
    human = HumanPlayer("X", input_provider=lambda _: next(answers), output=lambda _: None)
    result = TicTacToe(human, ComputerPlayer("O")).play()
    assert result.winner != "X"


def test_computer_never_loses_to_random():
    rng = random.Random(2024)
    computer = ComputerPlayer("X")
    for _ in range(10):
        result = TicTacToe(computer, RandomPlayer("O", rng=rng)).play()
        assert result.winner != "O"

    computer = ComputerPlayer("O")
    for _ in range(10):
        result = TicTacToe(RandomPlayer("X", rng=rng), computer).play()
        assert result.winner != "X"


def test_computer_self_play_draws():
    result = TicTacToe(ComputerPlayer("X"), ComputerPlayer("O")).play()
    assert result.status is GameStatus.DRAW

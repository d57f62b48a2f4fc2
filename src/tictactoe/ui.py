"""FastAPI JSON interface for playing tic-tac-toe against the engine."""

from __future__ import annotations

import random
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidMoveError
from .game import Board, Mark, other
from .players import Player, create_player


@dataclass
class GameSession:
    """Container for an active game and its engine-driven opponent."""

    board: Board
    human: Mark
    opponent: Player
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-tac-toe", description="Play tic-tac-toe against minimax")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    opponent: Literal["computer", "random"] = Field(
        default="computer", description="Which engine plays against the human"
    )
    human_mark: Literal["X", "O"] = Field(default="X", alias="humanMark")
    seed: Optional[int] = Field(
        default=None, description="Seed for the random opponent"
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    row: int = Field(ge=0, le=2)
    col: int = Field(ge=0, le=2)


def _create_session(request: NewGameRequest) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    opponent_mark = other(request.human_mark)
    options: Dict[str, object] = {}
    if request.opponent == "random":
        options["rng"] = random.Random(request.seed)
    session = GameSession(
        board=Board(),
        human=request.human_mark,
        opponent=create_player(request.opponent, opponent_mark, **options),
    )
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _record(session: GameSession, mark: Mark, row: int, col: int) -> None:
    session.move_log.append({"player": mark, "row": row, "col": col})


def _run_opponent_turn(session: GameSession) -> None:
    board = session.board
    if board.is_terminal() or board.current_player != session.opponent.mark:
        return
    row, col = session.opponent.choose_move(board)
    board.apply((row, col))
    _record(session, session.opponent.mark, row, col)


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        board = session.board
        result = board.status()
        state: Dict[str, object] = {
            "id": game_id,
            "cells": [c if c != " " else "" for c in board.cells],
            "humanMark": session.human,
            "currentPlayer": board.current_player,
            "status": result.status.value,
            "winner": result.winner,
            "winningLine": list(result.line) if result.line else None,
            "legalMoves": [
                {"row": row, "col": col} for row, col in board.legal_moves()
            ],
            "moveLog": list(session.move_log),
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(session: GameSession, row: int, col: int) -> None:
    with session.lock:
        board = session.board
        if board.is_terminal():
            raise HTTPException(status_code=400, detail="Game already finished")
        if board.current_player != session.human:
            raise HTTPException(status_code=400, detail="It is not your turn")

        try:
            board.apply((row, col))
        except InvalidMoveError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        _record(session, session.human, row, col)

        _run_opponent_turn(session)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request)
    with session.lock:
        _run_opponent_turn(session)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.row, request.col)
    return _serialize_session(game_id, session)

"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe.ui import app


client = TestClient(app)


def test_create_game_and_first_move():
    response = client.post("/api/game", json={})
    assert response.status_code == 200
    payload = response.json()
    assert payload["currentPlayer"] == "X"
    assert payload["humanMark"] == "X"
    assert payload["status"] == "in_progress"
    assert payload["moveLog"] == []
    assert len(payload["legalMoves"]) == 9

    game_id = payload["id"]
    move_response = client.post(
        f"/api/game/{game_id}/move", json={"row": 1, "col": 1}
    )
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["cells"][4] == "X"
    assert [entry["player"] for entry in state["moveLog"]] == ["X", "O"]
    # Against a centre opening the engine takes the first corner.
    assert state["lastMove"] == {"player": "O", "row": 0, "col": 0}
    assert state["currentPlayer"] == "X"

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    assert follow_up.json()["moveLog"] == state["moveLog"]


def test_engine_opens_when_human_plays_o():
    response = client.post("/api/game", json={"humanMark": "O"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["cells"][0] == "X"
    assert payload["currentPlayer"] == "O"


def test_invalid_move_rejected():
    response = client.post("/api/game", json={"opponent": "random", "seed": 5})
    assert response.status_code == 200
    game_id = response.json()["id"]

    first_move = client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 0})
    assert first_move.status_code == 200

    # Attempting to play the same cell should fail.
    duplicate_move = client.post(
        f"/api/game/{game_id}/move", json={"row": 0, "col": 0}
    )
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]


def test_out_of_range_move_is_unprocessable():
    game_id = client.post("/api/game", json={}).json()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"row": 3, "col": 0})
    assert response.status_code == 422


def test_rejects_unknown_opponent():
    response = client.post("/api/game", json={"opponent": "wizard"})
    assert response.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/INVALID").status_code == 404
    missing = client.post("/api/game/INVALID/move", json={"row": 0, "col": 0})
    assert missing.status_code == 404


def test_play_to_the_end_against_computer():
    game_id = client.post("/api/game", json={}).json()["id"]
    state = client.get(f"/api/game/{game_id}").json()
    while state["status"] == "in_progress":
        move = state["legalMoves"][0]
        response = client.post(f"/api/game/{game_id}/move", json=move)
        assert response.status_code == 200
        state = response.json()

    assert state["winner"] != "X"
    assert state["legalMoves"] == []
    finished = client.post(f"/api/game/{game_id}/move", json={"row": 0, "col": 0})
    assert finished.status_code == 400

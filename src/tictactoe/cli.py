from __future__ import annotations

import argparse
import logging
import os
import random
from typing import List, Optional

from .console import ConsoleRenderer
from .engine import TicTacToe
from .game import O, X
from .players import PLAYER_KINDS, create_player

DIST_NAME = "tictactoe-minimax"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictactoe", description="Tic-tac-toe with a minimax opponent")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--player-x",
        "-x",
        choices=PLAYER_KINDS,
        default="human",
        help="Who plays X (moves first)",
    )
    p.add_argument(
        "--player-o",
        "-o",
        choices=PLAYER_KINDS,
        default="computer",
        help="Who plays O",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for random players")
    p.add_argument("--no-clear", action="store_true", help="Do not clear the screen between turns")

    sub = p.add_subparsers(dest="cmd")
    srv = sub.add_parser("serve", help="Serve the JSON API with uvicorn")
    srv.add_argument(
        "--host",
        default=os.environ.get("TICTACTOE_HOST", "127.0.0.1"),
        help="Bind address (env TICTACTOE_HOST)",
    )
    srv.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TICTACTOE_PORT", "8000")),
        help="Bind port (env TICTACTOE_PORT)",
    )
    return p


def _print_version() -> None:
    from importlib.metadata import PackageNotFoundError, version

    try:
        print(version(DIST_NAME))
    except PackageNotFoundError:
        print("unknown")


def serve(host: str, port: int) -> None:
    """Start the FastAPI app under uvicorn."""
    import uvicorn

    uvicorn.run("tictactoe.ui:app", host=host, port=port, reload=False)


def play(ns: argparse.Namespace) -> int:
    rng = random.Random(ns.seed)
    players = []
    for kind, mark in ((ns.player_x, X), (ns.player_o, O)):
        options = {"rng": rng} if kind == "random" else {}
        players.append(create_player(kind, mark, **options))

    game = TicTacToe(
        players[0],
        players[1],
        renderer=ConsoleRenderer(clear=not ns.no_clear),
        on_error=print,
    )
    try:
        game.play()
    except (KeyboardInterrupt, EOFError):
        print()
        print("Game aborted.")
        return 130
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    if ns.version:
        _print_version()
        return 0

    if ns.cmd == "serve":
        logging.info("Serving on %s:%d", ns.host, ns.port)
        serve(ns.host, ns.port)
        return 0

    return play(ns)


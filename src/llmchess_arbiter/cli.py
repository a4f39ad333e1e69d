"""
Command line entry point.

  llmchess-arbiter play  [--human-plays white|black] [--difficulty easy|medium|hard] [--fen FEN] [--pgn-out PATH]
  llmchess-arbiter move  --fen FEN [--legal-moves e2e4,d2d4] [--difficulty ...]
  llmchess-arbiter serve [--host HOST] [--port PORT]

Settings (API key, model, timeout) come from settings.yml / environment; see config.py.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import chess

from .arbitrator import MoveArbitrator
from .config import load_settings
from .referee import Referee
from .user_opponent import UserOpponent

log = logging.getLogger("cli")


def _parse_log_level(name: str | None) -> int:
    name = (name or "INFO").upper()
    return getattr(logging, name, logging.INFO)


async def play_game(
    arbitrator: MoveArbitrator,
    human: UserOpponent,
    human_plays: str = "white",
    difficulty: str = "medium",
    starting_fen: str | None = None,
    out=print,
) -> Referee:
    """Alternate human and LLM moves until the game ends or the human resigns."""
    ref = Referee(starting_fen)
    ai_label = "LLM"
    if human_plays == "white":
        ref.set_headers(white=human.name, black=ai_label)
    else:
        ref.set_headers(white=ai_label, black=human.name)

    while not ref.is_over():
        if ref.side_to_move() == human_plays:
            mv = human.choose(ref.board)
            if mv is None:
                ref.set_result("0-1" if human_plays == "white" else "1-0")
                out("You resigned.")
                break
            ref.apply_move(mv)
            continue

        result = await arbitrator.resolve_move(ref.board.fen(), ref.legal_uci(), difficulty)
        if result.is_empty:
            # no legal moves left
            break
        ok, san = ref.apply_uci(result.uci)
        if not ok:
            raise RuntimeError(f"arbitrator returned a move not legal on the board: {result.uci}")
        out(f"AI plays {san} ({result.uci}) [{result.source}]")

    out(f"Game over: {ref.status()} ({ref.termination_reason() or 'unfinished'})")
    return ref


def _cmd_play(args, settings) -> int:
    if args.fen:
        try:
            chess.Board(args.fen)
        except ValueError as e:
            print(f"Invalid FEN: {e}", file=sys.stderr)
            return 2
    arbitrator = MoveArbitrator.from_settings(settings)
    if not settings.has_credential:
        print("No API key configured: the computer will play random legal moves.")

    async def _run() -> Referee:
        try:
            return await play_game(
                arbitrator,
                UserOpponent(),
                human_plays=args.human_plays,
                difficulty=args.difficulty,
                starting_fen=args.fen,
            )
        finally:
            await arbitrator.aclose()

    ref = asyncio.run(_run())
    pgn = ref.pgn()
    print(pgn)
    if args.pgn_out:
        with open(args.pgn_out, "w", encoding="utf-8") as f:
            f.write(pgn + "\n")
    return 0


def _cmd_move(args, settings) -> int:
    if args.legal_moves is not None:
        legal = [m for m in args.legal_moves.split(",") if m.strip()]
    else:
        try:
            board = chess.Board(args.fen)
        except ValueError as e:
            print(f"Invalid FEN: {e}", file=sys.stderr)
            return 2
        legal = [m.uci() for m in board.legal_moves]
    arbitrator = MoveArbitrator.from_settings(settings)
    try:
        result = arbitrator.resolve_move_sync(args.fen, legal, args.difficulty)
    finally:
        arbitrator.close()
    print(json.dumps(result.to_dict()))
    return 0


def _cmd_serve(args, settings) -> int:
    from .server import main as serve_main

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    serve_main(replace(settings, **overrides))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="llmchess-arbiter", description="Play chess against an LLM with a random-move fallback.")
    ap.add_argument("--settings", default=None, help="Path to a YAML settings file (default: settings.yml)")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")
    sub = ap.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="Play a game in the terminal")
    p_play.add_argument("--human-plays", choices=["white", "black"], default="white")
    p_play.add_argument("--difficulty", choices=["easy", "medium", "hard"], default="medium")
    p_play.add_argument("--fen", default=None, help="Starting position (default: standard start)")
    p_play.add_argument("--pgn-out", default=None, help="Optional path to write PGN at end")
    p_play.set_defaults(func=_cmd_play)

    p_move = sub.add_parser("move", help="Ask for a single move and print it as JSON")
    p_move.add_argument("--fen", required=True)
    p_move.add_argument("--legal-moves", default=None, help="Comma-separated UCI moves (default: computed from --fen)")
    p_move.add_argument("--difficulty", default="medium")
    p_move.set_defaults(func=_cmd_move)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=_cmd_serve)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.settings)
    logging.basicConfig(
        level=_parse_log_level(args.log_level or settings.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())

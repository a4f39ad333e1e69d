from __future__ import annotations
"""Interactive human player that only allows legal moves."""
from typing import Callable, Optional

import chess

RESIGN_WORDS = {"resign", "quit", "exit"}


class UserOpponent:
    name = "Human"

    def __init__(self, input_fn: Callable[[str], str] = input, output_fn: Callable[..., None] = print):
        self._input = input_fn
        self._print = output_fn

    def choose(self, board: chess.Board) -> Optional[chess.Move]:
        """Prompt the user for a legal move; repeat until valid. None means resign."""
        while True:
            self._print("\nYour turn. Board FEN:", board.fen())
            self._print(board)
            raw = self._input("Enter your move in SAN or UCI (e.g., e4 or e2e4), or 'resign': ").strip()
            if not raw:
                continue
            if raw.lower() in RESIGN_WORDS:
                return None
            mv = parse_human_move(board, raw)
            if mv is not None:
                return mv
            self._print("Illegal move. Please try again with a legal move.")


def parse_human_move(board: chess.Board, raw: str) -> Optional[chess.Move]:
    """Accept UCI or SAN; return the legal move or None."""
    raw = raw.strip()
    mv = None
    if len(raw) >= 4:
        try:
            mv = chess.Move.from_uci(raw.lower())
        except ValueError:
            mv = None
    if mv is None or mv not in board.legal_moves:
        try:
            mv = board.parse_san(raw)
        except ValueError:
            mv = None
    if mv is not None and mv in board.legal_moves:
        return mv
    return None

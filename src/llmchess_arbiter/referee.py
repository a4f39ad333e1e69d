"""
Referee: game state and PGN export for terminal play.

- Owns a python-chess Board; chess rules live here, not in the arbitrator.
- legal_uci() feeds the arbitrator; apply_uci() applies its answer.
- status()/termination_reason() describe a finished game; pgn() serializes it.
"""
from __future__ import annotations

import datetime
from typing import Optional

import chess
import chess.pgn


class Referee:
    """Plain chess referee around python-chess Board and PGN export."""

    def __init__(self, starting_fen: str | None = None):
        self.board = chess.Board(fen=starting_fen) if starting_fen else chess.Board()
        self._starting_fen = self.board.fen()
        self._headers: dict[str, str] = {}
        self._result_override: Optional[str] = None

    # ---------------- Headers / Result -----------------
    def set_headers(self, event: str = "Human vs LLM", site: str = "?", date: Optional[str] = None,
                    white: str = "?", black: str = "?") -> None:
        date = date or datetime.date.today().strftime("%Y.%m.%d")
        self._headers.update({
            "Event": event,
            "Site": site,
            "Date": date,
            "Round": "-",
            "White": white,
            "Black": black,
        })

    def set_result(self, result: str) -> None:
        """Override the result, e.g. when the human resigns."""
        self._result_override = result

    # ---------------- Moves -----------------
    def side_to_move(self) -> str:
        return "white" if self.board.turn == chess.WHITE else "black"

    def legal_uci(self) -> list[str]:
        return [m.uci() for m in self.board.legal_moves]

    def apply_uci(self, uci: str) -> tuple[bool, str | None]:
        try:
            mv = chess.Move.from_uci(uci)
        except ValueError:
            return False, None
        if mv not in self.board.legal_moves:
            return False, None
        san = self.board.san(mv)
        self.board.push(mv)
        return True, san

    def apply_move(self, mv: chess.Move) -> str:
        san = self.board.san(mv)
        self.board.push(mv)
        return san

    # ---------------- Status / PGN -----------------
    def is_over(self) -> bool:
        return self._result_override is not None or self.board.is_game_over(claim_draw=True)

    def status(self) -> str:
        if self._result_override:
            return self._result_override
        if self.board.is_game_over(claim_draw=True):
            return self.board.result(claim_draw=True)
        return "*"

    def termination_reason(self) -> Optional[str]:
        """Readable reason for a finished board, or None while the game is running."""
        board = self.board
        if self._result_override:
            return "resignation"
        if board.is_checkmate():
            return "checkmate"
        if board.is_stalemate():
            return "stalemate"
        if board.is_insufficient_material():
            return "insufficient_material"
        if board.is_seventyfive_moves():
            return "seventyfive_move_rule"
        if board.is_fivefold_repetition():
            return "fivefold_repetition"
        if board.can_claim_fifty_moves():
            return "fifty_move_rule"
        if board.can_claim_threefold_repetition():
            return "threefold_repetition"
        return None

    def pgn(self) -> str:
        game = chess.pgn.Game()
        for k, v in self._headers.items():
            game.headers[k] = v
        if self._starting_fen != chess.STARTING_FEN:
            game.setup(chess.Board(self._starting_fen))
        game.headers["Result"] = self.status()
        node = game
        for mv in list(self.board.move_stack):
            node = node.add_variation(mv)
        reason = self.termination_reason()
        if reason:
            game.comment = f"Termination: {reason}"
        exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=bool(reason))
        return game.accept(exporter)

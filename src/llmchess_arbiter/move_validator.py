"""
Move token helpers shared by the arbitrator and its collaborators.

- UCI grammar: origin square, destination square, optional promotion piece (e2e4, e7e8q).
- LegalMoveSet: the caller's legal moves, normalized (trimmed, lowercased, grammar-checked, de-duplicated).
- extract_uci(): lenient search for a UCI token inside free-form LLM text.
- MoveResult: a validated move split into from/to/promotion, or the empty "no legal moves" result.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

UCI_RE = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$")
UCI_SEARCH_RE = re.compile(r"[a-h][1-8][a-h][1-8][qrbn]?", re.I)


def normalize_uci(raw: Any) -> str | None:
    """Trim and lowercase a raw move string; return it if it is valid UCI, else None.

    Lowercasing happens before the grammar check, so "E2E4" is accepted and
    "e7e8K" is rejected because "k" is not a promotion piece.
    """
    if not isinstance(raw, str):
        return None
    token = raw.strip().lower()
    return token if UCI_RE.fullmatch(token) else None


def extract_uci(text: str | None) -> str | None:
    """Pull a UCI move out of an LLM reply.

    First look for a UCI-shaped substring anywhere (tolerates commentary),
    then try the trimmed reply as a whole. Returns lowercase UCI or None.
    """
    if not text:
        return None
    m = UCI_SEARCH_RE.search(text)
    if m:
        return m.group(0).lower()
    return normalize_uci(text)


class LegalMoveSet:
    """Immutable, ordered, de-duplicated set of UCI moves for one position."""

    __slots__ = ("_moves", "_index")

    def __init__(self, moves: Iterable[str] = ()):
        ordered: list[str] = []
        seen: set[str] = set()
        for raw in moves:
            token = normalize_uci(raw)
            if token is None or token in seen:
                continue
            seen.add(token)
            ordered.append(token)
        self._moves = tuple(ordered)
        self._index = frozenset(seen)

    @classmethod
    def from_raw(cls, raw_moves: Iterable[Any] | None) -> "LegalMoveSet":
        """Normalize caller input. Malformed entries are dropped silently."""
        return cls(raw_moves or ())

    def __contains__(self, move: object) -> bool:
        token = normalize_uci(move)
        return token is not None and token in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)

    def __bool__(self) -> bool:
        return bool(self._moves)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LegalMoveSet):
            return self._index == other._index
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._index)

    def __repr__(self) -> str:
        return f"LegalMoveSet({list(self._moves)!r})"

    def as_list(self) -> list[str]:
        return list(self._moves)


@dataclass(frozen=True)
class MoveResult:
    uci: str = ""
    from_square: str = ""
    to_square: str = ""
    promotion: Optional[str] = None
    source: str = ""  # "llm" | "fallback" | "" for the empty result

    @classmethod
    def empty(cls) -> "MoveResult":
        """Result for a position with no legal moves; the caller decides what that means."""
        return cls()

    @classmethod
    def from_uci(cls, uci: str, source: str = "") -> "MoveResult":
        token = normalize_uci(uci)
        if token is None:
            raise ValueError(f"not a UCI move: {uci!r}")
        return cls(
            uci=token,
            from_square=token[:2],
            to_square=token[2:4],
            promotion=token[4] if len(token) == 5 else None,
            source=source,
        )

    @property
    def is_empty(self) -> bool:
        return not self.uci

    def to_dict(self) -> dict:
        return {
            "uci": self.uci,
            "from": self.from_square,
            "to": self.to_square,
            "promotion": self.promotion,
            "source": self.source,
        }


__all__ = [
    "UCI_RE",
    "normalize_uci",
    "extract_uci",
    "LegalMoveSet",
    "MoveResult",
]

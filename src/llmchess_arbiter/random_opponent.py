"""
RandomFallback: picks a uniformly random move from a legal-move set.

- Used by the arbitrator whenever the LLM suggestion is unusable.
- Accepts an injected random.Random (or a seed) so tests can reproduce picks.
"""
from __future__ import annotations

import random
from typing import Iterable, Optional


class RandomFallback:
    """Uniform random choice over the supplied legal moves."""

    name: str = "Random"

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def pick(self, legal: Iterable[str]) -> str:
        moves = list(legal)
        if not moves:
            # Callers must check for a terminal position first.
            raise ValueError("cannot pick a fallback move from an empty legal-move set")
        return self._rng.choice(moves)

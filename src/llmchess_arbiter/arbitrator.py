"""
MoveArbitrator: one LLM-backed move per call, always legal.

Flow per call:
1) Normalize the caller's legal moves; none left -> empty MoveResult (game over for the caller).
2) No credential -> random fallback, no network.
3) Build prompts for the difficulty and ask the provider for one UCI token.
4) Accept the token only if it is in the legal set; otherwise fall back.

Every provider failure ends in the fallback; cancellation is the only thing
besides a programming error that escapes resolve_move().
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable, Optional

from .config import Settings
from .difficulty import normalize_difficulty, temperature_for
from .errors import IllegalSuggestion, MoveProviderError
from .llm_client import MoveProvider, OpenAIMoveProvider
from .move_validator import LegalMoveSet, MoveResult
from .prompting import PromptConfig, build_move_messages
from .random_opponent import RandomFallback

log = logging.getLogger("arbitrator")


class MoveArbitrator:
    def __init__(
        self,
        provider: MoveProvider,
        fallback: Optional[RandomFallback] = None,
        prompt_cfg: Optional[PromptConfig] = None,
    ):
        self.provider = provider
        self.fallback = fallback or RandomFallback()
        self.prompt_cfg = prompt_cfg or PromptConfig()
        # Owned by resolve_move_sync; the provider's client stays bound to it.
        self._sync_loop: Optional[asyncio.AbstractEventLoop] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "MoveArbitrator":
        return cls(OpenAIMoveProvider.from_settings(settings), **kwargs)

    async def resolve_move(self, position: str, raw_legal_moves: Iterable[str] | None, difficulty: str | None = None) -> MoveResult:
        legal = LegalMoveSet.from_raw(raw_legal_moves)
        if not legal:
            log.info("No legal moves for position %s", position)
            return MoveResult.empty()

        if not self.provider.configured:
            log.info("No LLM credential configured; using random fallback")
            return self._fallback(legal)

        level = normalize_difficulty(difficulty)
        messages = build_move_messages(position, legal, level, self.prompt_cfg)
        t0 = time.time()
        try:
            candidate = await self.provider.fetch_move(
                messages[0]["content"],
                messages[1]["content"],
                temperature_for(level),
            )
            if candidate not in legal:
                raise IllegalSuggestion(f"{candidate!r} is not in the legal-move list", raw=candidate)
        except MoveProviderError as exc:
            log.warning(
                "LLM move unusable (%s: %s) after %d ms; using random fallback",
                exc.reason,
                exc,
                int((time.time() - t0) * 1000),
            )
            return self._fallback(legal)

        log.debug("LLM move %s accepted (difficulty=%s, %d ms)", candidate, level, int((time.time() - t0) * 1000))
        return MoveResult.from_uci(candidate, source="llm")

    def resolve_move_sync(self, position: str, raw_legal_moves: Iterable[str] | None, difficulty: str | None = None) -> MoveResult:
        """Blocking wrapper for callers without an event loop.

        Every call runs on the same private loop so pooled connections of
        the provider's async client are reused, not orphaned. Call close()
        when done. Not safe to call from several threads at once.
        """
        if self._sync_loop is None or self._sync_loop.is_closed():
            self._sync_loop = asyncio.new_event_loop()
        return self._sync_loop.run_until_complete(self.resolve_move(position, raw_legal_moves, difficulty))

    async def aclose(self) -> None:
        """Release the provider's HTTP client, if it has one."""
        aclose = getattr(self.provider, "aclose", None)
        if aclose is not None:
            await aclose()

    def close(self) -> None:
        """Synchronous counterpart of aclose() for resolve_move_sync users."""
        loop = self._sync_loop
        if loop is None or loop.is_closed():
            loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(self.aclose())
        finally:
            loop.close()
            self._sync_loop = None

    def _fallback(self, legal: LegalMoveSet) -> MoveResult:
        return MoveResult.from_uci(self.fallback.pick(legal), source="fallback")

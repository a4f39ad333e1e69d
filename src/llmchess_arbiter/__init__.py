"""
LLM chess opponent with a guaranteed-legal fallback.

Components:
- arbitrator: MoveArbitrator.resolve_move(), the single entry point for an AI move
- llm_client: OpenAI-compatible chat-completions transport and move extraction
- prompting/difficulty: prompt templates and difficulty -> temperature/hint mapping
- move_validator: UCI grammar, LegalMoveSet normalization, MoveResult
- random_opponent: uniform random fallback
- referee/user_opponent/cli/server: terminal play and HTTP API around the arbitrator
"""
from .arbitrator import MoveArbitrator
from .move_validator import LegalMoveSet, MoveResult

__all__ = ["MoveArbitrator", "LegalMoveSet", "MoveResult"]

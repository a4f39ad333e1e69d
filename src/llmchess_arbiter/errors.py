"""Reasons an LLM move suggestion can be unusable.

None of these escape MoveArbitrator.resolve_move; each one routes the turn
to the random fallback.
"""
from __future__ import annotations


class MoveProviderError(Exception):
    """Base class: the external source gave no usable suggestion."""

    reason: str = "provider_error"

    def __init__(self, message: str = "", raw: str | None = None):
        super().__init__(message or self.reason)
        self.raw = raw


class ConfigurationAbsent(MoveProviderError):
    reason = "no_credential"


class TransportFailure(MoveProviderError):
    """Network error, timeout or non-success status."""

    reason = "transport_failure"


class MalformedResponse(MoveProviderError):
    """Response not in the chat-completions shape, or no move token in it."""

    reason = "malformed_response"


class IllegalSuggestion(MoveProviderError):
    """Well-formed move that is not in the supplied legal-move list."""

    reason = "illegal_suggestion"

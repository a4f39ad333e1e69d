"""
Prompt builders and config for LLM move requests using a modular template.

Callers may supply their own system instructions and a template string with
placeholders that are substituted per request:
{FEN}, {LEGAL_MOVES}, {DIFFICULTY}, {DIFFICULTY_HINT}.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .difficulty import normalize_difficulty, policy_for

_PLACEHOLDER_RE = re.compile(r"\{([A-Z_]+)\}")

DEFAULT_SYSTEM_INSTRUCTIONS = (
    "You are a chess assistant. You are given a chess position (FEN) and an explicit list of LEGAL UCI moves. "
    "Select exactly ONE move that is present in the provided list. Output ONLY the UCI string, with no commentary. "
    "If any information is inconsistent, still pick a move strictly from the provided legal moves list."
)

DEFAULT_TEMPLATE = """FEN:
{FEN}

LEGAL MOVES (UCI):
{LEGAL_MOVES}

DIFFICULTY:
{DIFFICULTY}

INSTRUCTIONS:
{DIFFICULTY_HINT}
Return ONLY one UCI string (e.g., e2e4 or e7e8q). No extra text."""


@dataclass
class PromptConfig:
    """Configuration for shaping move prompts using a custom template."""

    system_instructions: str = DEFAULT_SYSTEM_INSTRUCTIONS
    template: str = DEFAULT_TEMPLATE


def render_custom_prompt(template: str, values: Dict[str, str]) -> str:
    """Replace known placeholders in the template. Unknown tokens are left intact.

    Single pass: substituted text (e.g. a position containing "{DIFFICULTY}") is never rescanned.
    """
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template or "")


def _sentence(hint: str) -> str:
    hint = hint.strip()
    if not hint:
        return ""
    hint = hint[0].upper() + hint[1:]
    return hint if hint.endswith(".") else hint + "."


def build_move_messages(
    position: str,
    legal_moves: Iterable[str],
    difficulty: str | None,
    prompt_cfg: PromptConfig | None = None,
) -> List[Dict[str, str]]:
    """Construct system + user messages for one move request.

    legal_moves is embedded as given (comma-joined, same order); it is not
    filtered or re-validated here.
    """
    cfg = prompt_cfg or PromptConfig()
    policy = policy_for(difficulty)
    values = {
        "FEN": position or "",
        "LEGAL_MOVES": ", ".join(legal_moves),
        "DIFFICULTY": normalize_difficulty(difficulty),
        "DIFFICULTY_HINT": _sentence(policy.hint),
    }
    return [
        {"role": "system", "content": cfg.system_instructions},
        {"role": "user", "content": render_custom_prompt(cfg.template, values)},
    ]

"""Difficulty labels mapped to a sampling temperature and a prompt hint."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Difficulty = Literal["easy", "medium", "hard"]

DEFAULT_DIFFICULTY: Difficulty = "medium"


@dataclass(frozen=True)
class DifficultyPolicy:
    name: str
    temperature: float
    hint: str


DIFFICULTY_MAP: dict[str, DifficultyPolicy] = {
    "easy": DifficultyPolicy("easy", 0.8, "choose a random or non-optimal move from the list"),
    "medium": DifficultyPolicy("medium", 0.3, "choose a reasonable move from the list"),
    "hard": DifficultyPolicy("hard", 0.0, "choose the strongest move you can from the list"),
}


def normalize_difficulty(difficulty: str | None) -> str:
    """Trim and lowercase; unknown or missing labels become "medium"."""
    key = (difficulty or "").strip().lower() if isinstance(difficulty, str) else ""
    return key if key in DIFFICULTY_MAP else DEFAULT_DIFFICULTY


def policy_for(difficulty: str | None) -> DifficultyPolicy:
    return DIFFICULTY_MAP[normalize_difficulty(difficulty)]


def temperature_for(difficulty: str | None) -> float:
    return policy_for(difficulty).temperature


def hint_for(difficulty: str | None) -> str:
    return policy_for(difficulty).hint

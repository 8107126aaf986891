"""Difficulty levels and their multipliers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Difficulty(StrEnum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EXTREME = "extreme"


@dataclass(frozen=True)
class DifficultySettings:
    """``category_multiplier`` scales the four base slots into a category
    count; ``turn_multiplier`` scales the estimated minimum turns into the
    turn budget."""

    category_multiplier: float
    turn_multiplier: float


DIFFICULTY_SETTINGS: dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(1.3, 2.0),
    Difficulty.NORMAL: DifficultySettings(1.3, 1.5),
    Difficulty.HARD: DifficultySettings(1.5, 1.0),
    Difficulty.EXTREME: DifficultySettings(2.0, 1.0),
}

"""Outcomes and events surfaced to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DrawOutcome(StrEnum):
    DRAWN = "drawn"
    RECYCLED = "recycled"
    EMPTY = "empty"
    NO_TURNS_REMAINING = "no_turns_remaining"


class GameEvent(StrEnum):
    BOARD_CLEARED = "board_cleared"
    TURNS_EXHAUSTED = "turns_exhausted"
    SLOT_COMPLETED = "slot_completed"
    CONFIRM_RESTART = "confirm_restart"


@dataclass(frozen=True)
class EventRecord:
    event: GameEvent
    category_id: str | None = None

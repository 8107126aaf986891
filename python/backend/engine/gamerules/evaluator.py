"""Win/loss detection after player actions."""

from __future__ import annotations

from backend.engine.gamestate import GameState
from backend.models.events import DrawOutcome, GameEvent


class Evaluator:
    @staticmethod
    def after_drop(state: GameState) -> GameEvent | None:
        """Board is cleared once nothing is left outside the collection slots.

        Slots self-clear when complete, so a cleared board means every card
        went through a slot.
        """
        if state.is_cleared:
            return GameEvent.BOARD_CLEARED
        return None

    @staticmethod
    def after_draw(state: GameState, outcome: DrawOutcome) -> GameEvent | None:
        if outcome == DrawOutcome.DRAWN and state.turns_remaining == 0:
            return GameEvent.TURNS_EXHAUSTED
        return None

"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Mapping

from backend.models.board import Board
from backend.models.category import CategoryConfig


class GameState:
    """Holds the board, the session's category configs, the turn allowance,
    a move counter, and elapsed time.

    ``categories`` is the authoritative source of slot capacities and is
    never mutated after the deal.  Cards on the board plus
    ``cleared_cards`` always equal ``total_cards``.
    """

    def __init__(
        self,
        board: Board,
        categories: Mapping[str, CategoryConfig],
        turns_remaining: int = 0,
    ) -> None:
        self.board = board
        self.categories: dict[str, CategoryConfig] = dict(categories)
        self.turns_remaining: int = turns_remaining
        self.total_cards: int = board.card_count()
        self.cleared_cards: int = 0
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    # -- queries --------------------------------------------------------------

    def capacity(self, category_id: str) -> int:
        return self.categories[category_id].capacity

    @property
    def is_cleared(self) -> bool:
        return self.board.is_cleared()

    @property
    def is_out_of_turns(self) -> bool:
        return self.turns_remaining <= 0

    def copy(self) -> GameState:
        """Structural deep copy; configs are frozen and shared."""
        clone = GameState(self.board.copy(), self.categories, self.turns_remaining)
        clone.total_cards = self.total_cards
        clone.cleared_cards = self.cleared_cards
        clone.moves = self.moves
        clone._elapsed_banked = self.elapsed_time
        clone._running = False
        return clone

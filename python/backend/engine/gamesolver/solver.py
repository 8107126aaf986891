"""Solvability estimator: a bounded greedy simulation of perfect play.

The estimator plays a private deep copy of a freshly dealt game with
simple priorities:

  - Column tops go to the collection slots whenever they can.
  - Otherwise a column top joins a matching column top, unless the card
    beneath it already shares its category (that move would only
    oscillate).
  - Each drawn card is sorted, stacked on a matching column, parked in
    an empty column, or wasted on the open pile, in that order.

The number of draws it needed is the minimum-turn estimate.  Recycles
are capped at ``MAX_CYCLES`` and each consolidation phase at
``SAFETY_LIMIT`` passes, so it terminates for any deck.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum

from backend.engine.gamerules import ZoneTransfer
from backend.engine.gamestate import GameState
from backend.models.board import ZoneKind
from backend.models.card import Card, CardKind
from backend.models.difficulty import DIFFICULTY_SETTINGS, Difficulty

logger = logging.getLogger(__name__)

MAX_CYCLES = 5
SAFETY_LIMIT = 50
FALLBACK_TURNS = 50


class SimulationOutcome(StrEnum):
    CLEARED = "cleared"
    DEADLOCK = "deadlock"
    CYCLE_LIMIT = "cycle_limit"


@dataclass(frozen=True)
class SimulationResult:
    turns: int
    cycles: int
    wasted: int
    outcome: SimulationOutcome

    @property
    def estimate(self) -> int:
        return self.turns if self.turns > 0 else FALLBACK_TURNS


@dataclass(frozen=True)
class Move:
    """A suggested drop: move *card_id* onto zone ``(target_kind, target_index)``."""

    card_id: str
    target_kind: ZoneKind
    target_index: int


class _Simulation:
    """One run of the greedy player over a private copy of the board."""

    def __init__(self, state: GameState) -> None:
        board = state.board.copy()
        self.draw_pile = board.draw_pile
        self.open_pile = board.open_pile
        self.columns = board.holding_columns
        self.slots = board.collection_slots
        self.capacity = {cid: cfg.capacity for cid, cfg in state.categories.items()}
        self.turns = 0
        self.cycles = 0
        self.wasted = 0

    # -- slots ----------------------------------------------------------------

    def _slot_index(self, card: Card) -> int | None:
        for i, slot in enumerate(self.slots):
            if card.kind is CardKind.KEY and not slot:
                return i
            if (
                card.kind is CardKind.SUB
                and slot
                and slot[0].category_id == card.category_id
            ):
                return i
        return None

    def can_sort(self, card: Card) -> bool:
        return self._slot_index(card) is not None

    def do_sort(self, card: Card) -> None:
        idx = self._slot_index(card)
        if idx is None:
            return
        slot = self.slots[idx]
        slot.append(card)
        if len(slot) == self.capacity[slot[0].category_id]:
            slot.clear()

    # -- phases ---------------------------------------------------------------

    def _sort_column_top(self) -> bool:
        for col in self.columns:
            if col and self.can_sort(col[-1]):
                self.do_sort(col.pop())
                return True
        return False

    def _merge_columns(self) -> bool:
        for i, source in enumerate(self.columns):
            if not source or source[-1].is_key:
                continue
            card = source[-1]
            if len(source) > 1:
                under = source[-2]
                if under.kind is CardKind.SUB and under.category_id == card.category_id:
                    continue
            for j, target in enumerate(self.columns):
                if i == j or not target:
                    continue
                top = target[-1]
                if not top.is_key and top.category_id == card.category_id:
                    target.append(source.pop())
                    return True
        return False

    def consolidate(self) -> None:
        for _ in range(SAFETY_LIMIT):
            if self._sort_column_top():
                continue
            if not self._merge_columns():
                return

    def place(self, card: Card) -> None:
        if self.can_sort(card):
            self.do_sort(card)
            return
        for col in self.columns:
            if col and not col[-1].is_key and col[-1].category_id == card.category_id:
                col.append(card)
                return
        for col in self.columns:
            if not col:
                col.append(card)
                return
        self.open_pile.append(card)
        self.wasted += 1

    def is_cleared(self) -> bool:
        return (
            not self.draw_pile
            and not self.open_pile
            and all(not col for col in self.columns)
        )

    def run(self) -> SimulationOutcome:
        while self.cycles < MAX_CYCLES:
            self.consolidate()
            if self.is_cleared():
                return SimulationOutcome.CLEARED

            if not self.draw_pile:
                if not self.open_pile:
                    return SimulationOutcome.DEADLOCK
                self.draw_pile = self.open_pile[::-1]
                self.open_pile = []
                self.cycles += 1
                if self.cycles >= MAX_CYCLES:
                    break

            self.turns += 1
            self.place(self.draw_pile.pop())
        return SimulationOutcome.CYCLE_LIMIT


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def simulate(state: GameState) -> SimulationResult:
        """Play a copy of *state* greedily and report how it went.

        *state* itself is never modified.
        """
        sim = _Simulation(state)
        outcome = sim.run()
        result = SimulationResult(
            turns=sim.turns, cycles=sim.cycles, wasted=sim.wasted, outcome=outcome
        )
        logger.debug(
            "Simulation %s: cycles=%d turns=%d wasted=%d",
            outcome.value,
            result.cycles,
            result.turns,
            result.wasted,
        )
        return result

    @staticmethod
    def estimate_min_turns(state: GameState) -> int:
        """Return the estimated number of draws a perfect player needs."""
        return Solver.simulate(state).estimate

    @staticmethod
    def turn_budget(estimate: int, difficulty: Difficulty) -> int:
        multiplier = DIFFICULTY_SETTINGS[difficulty].turn_multiplier
        return math.ceil(estimate * multiplier)

    # -- hints ----------------------------------------------------------------

    @staticmethod
    def hint(state: GameState) -> Move | None:
        """Return one legal, useful drop, or ``None`` if there is none.

        Priorities follow the simulation: sort column tops and the open
        pile's top, then merge column runs, then park the open pile's top.
        """
        board = state.board
        exposed = [col[-1] for col in board.holding_columns if col]
        if board.open_pile:
            exposed.append(board.open_pile[-1])

        for card in exposed:
            for i in range(len(board.collection_slots)):
                if ZoneTransfer.validate_drop(board, card, ZoneKind.COLLECTION, i):
                    return Move(card.id, ZoneKind.COLLECTION, i)

        for i, col in enumerate(board.holding_columns):
            start = ZoneTransfer.movable_run_start(col)
            # Lifting a whole column only relocates it.
            if not start:
                continue
            card = col[start]
            for j, other in enumerate(board.holding_columns):
                if i != j and other and ZoneTransfer.validate_drop(
                    board, card, ZoneKind.HOLDING, j
                ):
                    return Move(card.id, ZoneKind.HOLDING, j)

        if board.open_pile:
            card = board.open_pile[-1]
            # Matching stacks first, empty columns last.
            targets = sorted(
                range(len(board.holding_columns)),
                key=lambda j: not board.holding_columns[j],
            )
            for j in targets:
                if ZoneTransfer.validate_drop(board, card, ZoneKind.HOLDING, j):
                    return Move(card.id, ZoneKind.HOLDING, j)
        return None

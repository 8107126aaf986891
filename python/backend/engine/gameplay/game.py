"""Core gameplay logic: owns the live session, routes actions, reports events."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamerules import DropResult, Evaluator, ZoneTransfer
from backend.engine.gamesolver import SimulationResult, Solver
from backend.engine.gamestate import GameState
from backend.models.board import CardLocation, ZoneKind
from backend.models.card import Card
from backend.models.catalog import DEFAULT_CATALOG
from backend.models.category import CatalogEntry
from backend.models.difficulty import Difficulty
from backend.models.events import DrawOutcome, EventRecord, GameEvent

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    The live ``GameState`` belongs to this object alone; callers get copies
    from ``snapshot()``.  Terminal and slot events queue up until
    ``drain_events()`` is called.

    Actions return what happened rather than the board: ``draw()`` gives a
    ``DrawOutcome`` and ``handle_drop()`` a ``DropResult`` (falsy when
    rejected).  Take a ``snapshot()`` afterwards to read the new board;
    ``new_game()`` and ``set_difficulty()`` return one directly.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: random.Random | None = None,
        catalog: Mapping[str, CatalogEntry] = DEFAULT_CATALOG,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.catalog = catalog
        self.difficulty = difficulty
        self._events: list[EventRecord] = []
        self.new_game(difficulty)

    @classmethod
    def from_state(
        cls,
        state: GameState,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: random.Random | None = None,
        turns: int | None = None,
        catalog: Mapping[str, CatalogEntry] = DEFAULT_CATALOG,
    ) -> "GamePlay":
        """Create a session around an already dealt state.

        Without *turns*, the budget is calibrated from the estimator.
        Later games (``new_game``, ``restart``) are dealt from *catalog*.
        """
        obj = object.__new__(cls)
        obj.rng = rng if rng is not None else random.Random()
        obj.catalog = catalog
        obj.difficulty = difficulty
        obj._events = []
        obj._start(state, turns)
        return obj

    # -- session setup --------------------------------------------------------

    def _start(self, state: GameState, turns: int | None = None) -> None:
        self.simulation: SimulationResult = Solver.simulate(state)
        self.min_turns: int = self.simulation.estimate
        if turns is None:
            turns = Solver.turn_budget(self.min_turns, self.difficulty)
        self.turn_budget: int = turns
        state.turns_remaining = turns
        self.state = state
        self._events.clear()
        self._won = False
        self._exhausted = False
        logger.debug(
            "Setup %s: turns=%d (sim %d)",
            self.difficulty.value,
            self.turn_budget,
            self.min_turns,
        )

    def new_game(self, difficulty: Difficulty | None = None) -> tuple[GameState, int]:
        """Build, deal and calibrate a new game; return its snapshot and budget."""
        if difficulty is not None:
            self.difficulty = difficulty
        state = GameGenerator.generate(self.difficulty, self.rng, self.catalog)
        self._start(state)
        return self.snapshot(), self.turn_budget

    def set_difficulty(self, difficulty: Difficulty) -> GameState:
        snapshot, _ = self.new_game(difficulty)
        return snapshot

    def request_restart(self) -> GameEvent:
        """Ask the caller to confirm before ``restart()`` discards this game."""
        return GameEvent.CONFIRM_RESTART

    def restart(self, randomize_difficulty: bool = True) -> GameState:
        """Start over, at a random difficulty unless told otherwise."""
        difficulty = self.difficulty
        if randomize_difficulty:
            difficulty = self.rng.choice(list(Difficulty))
        snapshot, _ = self.new_game(difficulty)
        return snapshot

    # -- player actions -------------------------------------------------------

    def draw(self) -> DrawOutcome:
        outcome = ZoneTransfer.draw(self.state)
        event = Evaluator.after_draw(self.state, outcome)
        if event is not None:
            self._exhausted = True
            self._emit(EventRecord(event))
        return outcome

    def handle_drop(
        self, card_id: str, target_kind: ZoneKind, target_index: int
    ) -> DropResult:
        """Drop *card_id* on a zone; invalid drops change nothing."""
        result = ZoneTransfer.handle_drop(self.state, card_id, target_kind, target_index)
        if not result:
            return result
        if result.completed_category is not None:
            self._emit(EventRecord(GameEvent.SLOT_COMPLETED, result.completed_category))
        if target_kind == ZoneKind.COLLECTION:
            event = Evaluator.after_drop(self.state)
            if event is not None and not self._won:
                self._won = True
                self.state.pause()
                self._emit(EventRecord(event))
        return result

    # -- queries --------------------------------------------------------------

    def locate(self, card_id: str) -> CardLocation | None:
        return ZoneTransfer.locate(self.state.board, card_id)

    def validate_drop(self, card: Card, target_kind: ZoneKind, target_index: int) -> bool:
        return ZoneTransfer.validate_drop(self.state.board, card, target_kind, target_index)

    def get_collected_count(self, category_id: str) -> int:
        """Cards resident in *category_id*'s slot, not counting its KEY."""
        idx = self.state.board.slot_for(category_id)
        if idx is None:
            return 0
        return max(0, len(self.state.board.collection_slots[idx]) - 1)

    def snapshot(self) -> GameState:
        return self.state.copy()

    def drain_events(self) -> list[EventRecord]:
        events, self._events = self._events, []
        return events

    @property
    def is_won(self) -> bool:
        return self._won

    @property
    def is_lost(self) -> bool:
        return self._exhausted and not self._won

    # -- helpers --------------------------------------------------------------

    def _emit(self, record: EventRecord) -> None:
        if record.event != GameEvent.SLOT_COMPLETED:
            logger.info("%s after %d moves", record.event.value, self.state.moves)
        self._events.append(record)

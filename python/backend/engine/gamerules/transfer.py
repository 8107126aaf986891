"""Zone transfer rules: locating cards, validating and applying drops, drawing.

All functions act on an explicit ``GameState``; nothing here keeps state
of its own.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gamestate import GameState
from backend.models.board import Board, CardLocation, ZoneKind
from backend.models.card import Card, CardKind
from backend.models.events import DrawOutcome


@dataclass(frozen=True)
class DropResult:
    """Outcome of ``ZoneTransfer.handle_drop``; falsy when rejected.

    ``completed_category`` is set when the drop filled a collection slot
    and the slot auto-cleared.
    """

    accepted: bool
    completed_category: str | None = None

    def __bool__(self) -> bool:
        return self.accepted


REJECTED = DropResult(accepted=False)


class ZoneTransfer:
    """Stateless transfer engine; all methods are static."""

    # -- lookup ---------------------------------------------------------------

    @staticmethod
    def locate(board: Board, card_id: str) -> CardLocation | None:
        """Find *card_id* in the open pile, then the columns, then the slots.

        The draw pile is never searched.
        """
        for pos, card in enumerate(board.open_pile):
            if card.id == card_id:
                return CardLocation(ZoneKind.OPEN_PILE, 0, pos)
        for kind, zones in (
            (ZoneKind.HOLDING, board.holding_columns),
            (ZoneKind.COLLECTION, board.collection_slots),
        ):
            for i, zone in enumerate(zones):
                for pos, card in enumerate(zone):
                    if card.id == card_id:
                        return CardLocation(kind, i, pos)
        return None

    @staticmethod
    def movable_run_start(column: list[Card]) -> int | None:
        """Position of the lowest card that can be lifted with everything above it.

        The run is face-up and each card above its bottom stacks legally on
        the card beneath it.  ``None`` for an empty column.
        """
        if not column:
            return None
        start = len(column) - 1
        while start > 0:
            below, above = column[start - 1], column[start]
            if not below.face_up or below.is_key:
                break
            if below.category_id != above.category_id:
                break
            start -= 1
        return start

    # -- validation -----------------------------------------------------------

    @staticmethod
    def validate_drop(
        board: Board, card: Card, target_kind: ZoneKind, target_index: int
    ) -> bool:
        """Return True if *card* may be dropped on the given zone."""
        if target_kind == ZoneKind.COLLECTION:
            if not 0 <= target_index < len(board.collection_slots):
                return False
            slot = board.collection_slots[target_index]
            if not slot:
                return card.kind is CardKind.KEY
            return (
                card.kind is CardKind.SUB
                and card.category_id == slot[0].category_id
            )

        if target_kind == ZoneKind.HOLDING:
            if not 0 <= target_index < len(board.holding_columns):
                return False
            column = board.holding_columns[target_index]
            if not column:
                return True
            top = column[-1]
            # Nothing stacks on a KEY.
            if top.is_key:
                return False
            return card.category_id == top.category_id

        return False

    @staticmethod
    def _continues_slot(group: list[Card]) -> bool:
        bottom = group[0]
        return all(
            c.kind is CardKind.SUB and c.category_id == bottom.category_id
            for c in group[1:]
        )

    # -- actions --------------------------------------------------------------

    @staticmethod
    def handle_drop(
        state: GameState, card_id: str, target_kind: ZoneKind, target_index: int
    ) -> DropResult:
        """Move *card_id* (and, from a column, every card above it) to a zone.

        Rejected drops leave *state* untouched.
        """
        board = state.board
        source = ZoneTransfer.locate(board, card_id)
        if source is None:
            return REJECTED
        if source.kind == target_kind and source.zone_index == target_index:
            return REJECTED

        pile = board.zone(source.kind, source.zone_index)
        card = pile[source.position]
        if not card.face_up:
            return REJECTED
        # Only columns allow lifting a run; other zones expose their top card.
        if source.kind != ZoneKind.HOLDING and source.position != len(pile) - 1:
            return REJECTED
        if not ZoneTransfer.validate_drop(board, card, target_kind, target_index):
            return REJECTED

        group = pile[source.position:]
        if target_kind == ZoneKind.COLLECTION and not ZoneTransfer._continues_slot(group):
            return REJECTED

        del pile[source.position:]
        if source.kind == ZoneKind.HOLDING and pile:
            pile[-1].face_up = True
        for c in group:
            c.face_up = True

        target = board.zone(target_kind, target_index)
        target.extend(group)
        state.increment_moves()

        if target_kind == ZoneKind.COLLECTION:
            category_id = target[0].category_id
            if len(target) == state.capacity(category_id):
                state.cleared_cards += len(target)
                target.clear()
                return DropResult(accepted=True, completed_category=category_id)
        return DropResult(accepted=True)

    @staticmethod
    def draw(state: GameState) -> DrawOutcome:
        """Turn the draw pile's top card onto the open pile.

        An empty draw pile is refilled from the reversed open pile instead,
        which costs no turn.
        """
        if state.is_out_of_turns:
            return DrawOutcome.NO_TURNS_REMAINING

        board = state.board
        if not board.draw_pile:
            if not board.open_pile:
                return DrawOutcome.EMPTY
            board.draw_pile = board.open_pile[::-1]
            board.open_pile = []
            for c in board.draw_pile:
                c.face_up = False
            return DrawOutcome.RECYCLED

        card = board.draw_pile.pop()
        card.face_up = True
        board.open_pile.append(card)
        state.turns_remaining -= 1
        state.increment_moves()
        return DrawOutcome.DRAWN

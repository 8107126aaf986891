"""Zone transfer rules: locate, validate_drop, handle_drop and draw.

States are built by hand so each rule is exercised in isolation.
"""

from __future__ import annotations

import pytest

from backend.engine.gamerules import Evaluator, ZoneTransfer
from backend.engine.gamestate import GameState
from backend.models.board import Board, CardLocation, ZoneKind
from backend.models.card import Card, CardKind
from backend.models.category import CategoryConfig
from backend.models.events import DrawOutcome, GameEvent


# -- helpers ------------------------------------------------------------------


def _key(cat: str, face_up: bool = True) -> Card:
    return Card(f"KEY_{cat}", CardKind.KEY, cat, cat, face_up=face_up)


def _sub(cat: str, idx: int, face_up: bool = True) -> Card:
    return Card(f"SUB_{cat}_{idx}", CardKind.SUB, cat, f"{cat.lower()}{idx}", face_up=face_up)


def _config(cat: str, item_count: int) -> CategoryConfig:
    items = tuple(f"{cat.lower()}{i}" for i in range(item_count))
    return CategoryConfig(cat, cat, "#ffffff", item_count, False, items, ())


def _state(
    columns: list[list[Card]] | None = None,
    slots: list[list[Card]] | None = None,
    draw: list[Card] | None = None,
    open_pile: list[Card] | None = None,
    turns: int = 10,
    item_counts: dict[str, int] | None = None,
) -> GameState:
    columns = (columns or []) + [[] for _ in range(4 - len(columns or []))]
    slots = (slots or []) + [[] for _ in range(4 - len(slots or []))]
    board = Board(
        draw_pile=draw or [],
        open_pile=open_pile or [],
        holding_columns=columns,
        collection_slots=slots,
    )
    counts = item_counts or {"A": 3, "B": 3}
    categories = {cat: _config(cat, n) for cat, n in counts.items()}
    return GameState(board, categories, turns_remaining=turns)


def _frozen(state: GameState) -> tuple[Board, int]:
    return state.board.copy(), state.turns_remaining


# -- locate -------------------------------------------------------------------


def test_locate_searches_open_pile_columns_then_slots() -> None:
    state = _state(
        columns=[[], [_sub("A", 0), _sub("A", 1)]],
        slots=[[], [], [_key("B")]],
        open_pile=[_sub("B", 0)],
        draw=[_sub("B", 1)],
    )
    board = state.board

    assert ZoneTransfer.locate(board, "SUB_B_0") == CardLocation(ZoneKind.OPEN_PILE, 0, 0)
    assert ZoneTransfer.locate(board, "SUB_A_1") == CardLocation(ZoneKind.HOLDING, 1, 1)
    assert ZoneTransfer.locate(board, "KEY_B") == CardLocation(ZoneKind.COLLECTION, 2, 0)


def test_locate_never_finds_draw_pile_cards() -> None:
    state = _state(draw=[_sub("A", 0)])
    assert ZoneTransfer.locate(state.board, "SUB_A_0") is None
    assert ZoneTransfer.locate(state.board, "NOPE") is None


# -- validate_drop ------------------------------------------------------------


@pytest.mark.parametrize(
    ("card", "slot", "expected"),
    [
        (_key("A"), [], True),
        (_sub("A", 0), [], False),
        (_sub("A", 0), [_key("A")], True),
        (_sub("B", 0), [_key("A")], False),
        (_key("B"), [_key("A")], False),
        (_sub("A", 1), [_key("A"), _sub("A", 0)], True),
    ],
    ids=[
        "key-on-empty",
        "sub-on-empty",
        "sub-on-own-key",
        "sub-on-other-key",
        "key-on-key",
        "sub-on-partial-slot",
    ],
)
def test_validate_collection_slot(card: Card, slot: list[Card], expected: bool) -> None:
    state = _state(slots=[slot])
    assert ZoneTransfer.validate_drop(state.board, card, ZoneKind.COLLECTION, 0) is expected


@pytest.mark.parametrize(
    ("card", "column", "expected"),
    [
        (_key("A"), [], True),
        (_sub("B", 0), [], True),
        (_sub("A", 1), [_sub("A", 0)], True),
        (_key("A"), [_sub("A", 0)], True),
        (_sub("B", 0), [_sub("A", 0)], False),
        (_sub("A", 0), [_key("A")], False),
    ],
    ids=[
        "key-on-empty",
        "sub-on-empty",
        "matching-sub",
        "matching-key",
        "other-category",
        "anything-on-key",
    ],
)
def test_validate_holding_column(card: Card, column: list[Card], expected: bool) -> None:
    state = _state(columns=[column])
    assert ZoneTransfer.validate_drop(state.board, card, ZoneKind.HOLDING, 0) is expected


@pytest.mark.parametrize(
    ("kind", "index"),
    [
        (ZoneKind.OPEN_PILE, 0),
        (ZoneKind.DRAW_PILE, 0),
        (ZoneKind.HOLDING, 4),
        (ZoneKind.COLLECTION, -1),
    ],
    ids=["open-pile", "draw-pile", "column-out-of-range", "slot-out-of-range"],
)
def test_validate_rejects_other_targets(kind: ZoneKind, index: int) -> None:
    state = _state()
    assert not ZoneTransfer.validate_drop(state.board, _key("A"), kind, index)


# -- handle_drop --------------------------------------------------------------


def test_sub_onto_empty_slot_changes_nothing() -> None:
    state = _state(open_pile=[_sub("A", 0)])
    before = _frozen(state)

    result = ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.COLLECTION, 0)

    assert not result
    assert _frozen(state) == before
    assert state.moves == 0


def test_group_move_lifts_run_and_reveals() -> None:
    hidden = _sub("B", 0, face_up=False)
    state = _state(
        columns=[
            [hidden, _sub("A", 0), _sub("A", 1)],
            [_sub("A", 2)],
        ]
    )

    assert ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.HOLDING, 1)

    cols = state.board.holding_columns
    assert [c.id for c in cols[1]] == ["SUB_A_2", "SUB_A_0", "SUB_A_1"]
    assert [c.id for c in cols[0]] == ["SUB_B_0"]
    assert cols[0][-1].face_up, "new top must be revealed"
    assert all(c.face_up for c in cols[1])


def test_group_move_validates_bottom_card_only() -> None:
    # The lifted run is [A, B]; only A is checked against the target top.
    state = _state(
        columns=[
            [_sub("A", 0), _sub("B", 0)],
            [_sub("A", 1)],
        ]
    )
    assert ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.HOLDING, 1)
    assert [c.id for c in state.board.holding_columns[1]] == [
        "SUB_A_1",
        "SUB_A_0",
        "SUB_B_0",
    ]


def test_group_onto_slot_must_continue_the_slot() -> None:
    # A mixed run can sit in a column, but a slot only takes its own SUBs.
    state = _state(
        columns=[[_sub("A", 0), _sub("B", 0)]],
        slots=[[_key("A")]],
    )
    before = _frozen(state)

    assert not ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.COLLECTION, 0)
    assert _frozen(state) == before


def test_open_pile_only_top_card_moves() -> None:
    state = _state(open_pile=[_key("A"), _key("B")])
    before = _frozen(state)

    assert not ZoneTransfer.handle_drop(state, "KEY_A", ZoneKind.COLLECTION, 0)
    assert _frozen(state) == before

    assert ZoneTransfer.handle_drop(state, "KEY_B", ZoneKind.COLLECTION, 0)
    assert [c.id for c in state.board.collection_slots[0]] == ["KEY_B"]


def test_face_down_cards_do_not_move() -> None:
    state = _state(columns=[[_key("A", face_up=False), _sub("B", 0)]])
    before = _frozen(state)

    assert not ZoneTransfer.handle_drop(state, "KEY_A", ZoneKind.COLLECTION, 0)
    assert _frozen(state) == before


def test_drop_on_own_zone_is_rejected() -> None:
    state = _state(columns=[[_sub("A", 0), _sub("A", 1)]])
    before = _frozen(state)

    assert not ZoneTransfer.handle_drop(state, "SUB_A_1", ZoneKind.HOLDING, 0)
    assert _frozen(state) == before


def test_slot_top_can_return_to_a_column() -> None:
    state = _state(slots=[[_key("A"), _sub("A", 0)]])

    assert ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.HOLDING, 2)
    assert [c.id for c in state.board.collection_slots[0]] == ["KEY_A"]
    assert [c.id for c in state.board.holding_columns[2]] == ["SUB_A_0"]


def test_slot_key_under_items_does_not_move() -> None:
    state = _state(slots=[[_key("A"), _sub("A", 0)]])
    before = _frozen(state)

    assert not ZoneTransfer.handle_drop(state, "KEY_A", ZoneKind.HOLDING, 0)
    assert _frozen(state) == before


def test_full_slot_clears_itself() -> None:
    state = _state(
        slots=[[_key("A"), _sub("A", 0), _sub("A", 1)]],
        open_pile=[_sub("A", 2)],
    )

    result = ZoneTransfer.handle_drop(state, "SUB_A_2", ZoneKind.COLLECTION, 0)

    assert result
    assert result.completed_category == "A"
    assert state.board.collection_slots[0] == []
    assert state.cleared_cards == 4
    assert state.board.card_count() + state.cleared_cards == state.total_cards


def test_partial_slot_does_not_clear() -> None:
    state = _state(slots=[[_key("A")]], open_pile=[_sub("A", 0)])

    result = ZoneTransfer.handle_drop(state, "SUB_A_0", ZoneKind.COLLECTION, 0)

    assert result
    assert result.completed_category is None
    assert len(state.board.collection_slots[0]) == 2


def test_accepted_drop_counts_a_move() -> None:
    state = _state(open_pile=[_key("A")])
    ZoneTransfer.handle_drop(state, "KEY_A", ZoneKind.HOLDING, 0)
    assert state.moves == 1


# -- draw ---------------------------------------------------------------------


def test_draw_moves_top_card_and_spends_a_turn() -> None:
    state = _state(draw=[_sub("A", 0, face_up=False), _sub("A", 1, face_up=False)], turns=5)

    assert ZoneTransfer.draw(state) == DrawOutcome.DRAWN

    assert [c.id for c in state.board.draw_pile] == ["SUB_A_0"]
    assert [c.id for c in state.board.open_pile] == ["SUB_A_1"]
    assert state.board.open_pile[-1].face_up
    assert state.turns_remaining == 4


def test_draw_with_no_turns_changes_nothing() -> None:
    state = _state(draw=[_sub("A", 0)], open_pile=[_sub("A", 1)], turns=0)
    before = _frozen(state)

    assert ZoneTransfer.draw(state) == DrawOutcome.NO_TURNS_REMAINING
    assert _frozen(state) == before


def test_empty_draw_pile_recycles_open_pile_for_free() -> None:
    open_cards = [_sub("A", i) for i in range(3)] + [_sub("B", i) for i in range(2)]
    state = _state(open_pile=list(open_cards), turns=7)

    assert ZoneTransfer.draw(state) == DrawOutcome.RECYCLED

    board = state.board
    assert len(board.draw_pile) == 5
    assert [c.id for c in board.draw_pile] == [c.id for c in reversed(open_cards)]
    assert board.open_pile == []
    assert state.turns_remaining == 7

    # The first card drawn after a recycle is the first one that was turned.
    assert ZoneTransfer.draw(state) == DrawOutcome.DRAWN
    assert board.open_pile[-1].id == "SUB_A_0"


def test_draw_with_both_piles_empty() -> None:
    state = _state(turns=3)
    assert ZoneTransfer.draw(state) == DrawOutcome.EMPTY
    assert state.turns_remaining == 3


@pytest.mark.parametrize(("turns", "out"), [(1, False), (0, True), (-2, True)])
def test_out_of_turns_guards_the_draw(turns: int, out: bool) -> None:
    state = _state(draw=[_sub("A", 0)], turns=turns)
    assert state.is_out_of_turns is out

    outcome = ZoneTransfer.draw(state)

    assert (outcome == DrawOutcome.NO_TURNS_REMAINING) is out
    assert state.is_out_of_turns


# -- evaluation ---------------------------------------------------------------


def test_board_cleared_only_when_nothing_is_left_outside_slots() -> None:
    state = _state(slots=[[_key("A"), _sub("A", 0)]])
    assert state.is_cleared
    assert Evaluator.after_drop(state) == GameEvent.BOARD_CLEARED

    state.board.open_pile.append(_sub("B", 0))
    assert not state.is_cleared
    assert Evaluator.after_drop(state) is None


# -- movable runs -------------------------------------------------------------


@pytest.mark.parametrize(
    ("column", "expected"),
    [
        ([], None),
        ([_sub("A", 0)], 0),
        ([_sub("B", 0, face_up=False), _sub("A", 0), _sub("A", 1)], 1),
        ([_key("A"), _sub("A", 0)], 1),
        ([_sub("A", 0), _sub("A", 1), _sub("A", 2)], 0),
        ([_sub("B", 0), _sub("A", 0)], 1),
    ],
    ids=["empty", "single", "hidden-base", "key-base", "whole-run", "mixed"],
)
def test_movable_run_start(column: list[Card], expected: int | None) -> None:
    assert ZoneTransfer.movable_run_start(column) == expected

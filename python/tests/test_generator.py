"""Deck building and dealing.

Every game is generated from a seeded ``random.Random`` so the assertions
below are reproducible.
"""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamegenerator.generator import DEAL_FRACTION
from backend.models.board import COLUMN_COUNT
from backend.models.card import CardKind
from backend.models.catalog import DEFAULT_CATALOG, MalformedCatalogError
from backend.models.category import CatalogEntry
from backend.models.difficulty import Difficulty


# -- helpers ------------------------------------------------------------------


def _entry(id: str, items: int) -> CatalogEntry:
    return CatalogEntry(
        id=id,
        label=id,
        color="#ffffff",
        items=tuple(f"{id.lower()}{i}" for i in range(items)),
    )


# -- category selection -------------------------------------------------------


@pytest.mark.parametrize(
    ("difficulty", "expected"),
    [
        (Difficulty.EASY, 5),
        (Difficulty.NORMAL, 5),
        (Difficulty.HARD, 6),
        (Difficulty.EXTREME, 8),
    ],
    ids=lambda v: v.value if isinstance(v, Difficulty) else str(v),
)
def test_category_count(difficulty: Difficulty, expected: int) -> None:
    assert GameGenerator.category_count(difficulty, len(DEFAULT_CATALOG)) == expected


def test_category_count_clamped_to_catalog() -> None:
    assert GameGenerator.category_count(Difficulty.EXTREME, 3) == 3


@pytest.mark.parametrize("seed", range(10))
def test_select_categories_item_counts(seed: int) -> None:
    configs = GameGenerator.select_categories(Difficulty.EXTREME, random.Random(seed))

    assert len(configs) == 8
    for cid, cfg in configs.items():
        entry = DEFAULT_CATALOG[cid]
        assert 3 <= cfg.item_count <= 8
        assert cfg.capacity == cfg.item_count + 1
        assert cfg.active_items == entry.items[: cfg.item_count]
        assert cfg.active_glyphs == entry.glyphs[: cfg.item_count]


def test_item_count_clamped_to_available_items() -> None:
    catalog = {"TINY": _entry("TINY", 3)}
    for seed in range(20):
        configs = GameGenerator.select_categories(
            Difficulty.NORMAL, random.Random(seed), catalog
        )
        assert configs["TINY"].item_count == 3


def test_image_mode_is_sometimes_set() -> None:
    rng = random.Random(3)
    flags = [
        cfg.image_mode
        for _ in range(40)
        for cfg in GameGenerator.select_categories(Difficulty.NORMAL, rng).values()
    ]
    assert any(flags)
    assert not all(flags)


def test_selection_is_reproducible() -> None:
    a = GameGenerator.select_categories(Difficulty.HARD, random.Random(99))
    b = GameGenerator.select_categories(Difficulty.HARD, random.Random(99))
    assert a == b


def test_short_category_is_malformed() -> None:
    catalog = {"SHORT": _entry("SHORT", 2)}
    with pytest.raises(MalformedCatalogError):
        GameGenerator.select_categories(Difficulty.NORMAL, random.Random(0), catalog)


def test_empty_catalog_is_malformed() -> None:
    with pytest.raises(MalformedCatalogError):
        GameGenerator.select_categories(Difficulty.NORMAL, random.Random(0), {})


def test_glyphs_longer_than_items_is_malformed() -> None:
    entry = CatalogEntry("ODD", "ODD", "#000000", ("a", "b", "c"), ("1", "2", "3", "4"))
    with pytest.raises(MalformedCatalogError):
        GameGenerator.select_categories(
            Difficulty.NORMAL, random.Random(0), {"ODD": entry}
        )


# -- deck ---------------------------------------------------------------------


def test_build_deck_has_one_key_per_category() -> None:
    configs = GameGenerator.select_categories(Difficulty.NORMAL, random.Random(5))
    deck = GameGenerator.build_deck(configs)

    assert len(deck) == sum(cfg.capacity for cfg in configs.values())
    assert len({c.id for c in deck}) == len(deck), "card ids must be unique"

    keys = Counter(c.category_id for c in deck if c.kind is CardKind.KEY)
    subs = Counter(c.category_id for c in deck if c.kind is CardKind.SUB)
    for cid, cfg in configs.items():
        assert keys[cid] == 1
        assert subs[cid] == cfg.item_count
        assert f"KEY_{cid}" in {c.id for c in deck}


def test_sub_glyph_falls_back_to_label() -> None:
    configs = {"PLAIN": GameGenerator.resolve(_entry("PLAIN", 4), 4)}
    deck = GameGenerator.build_deck(configs)
    for card in deck:
        if card.kind is CardKind.SUB:
            assert card.glyph == card.label


def test_shuffle_is_a_permutation() -> None:
    configs = GameGenerator.select_categories(Difficulty.EXTREME, random.Random(1))
    deck = GameGenerator.build_deck(configs)
    before = [c.id for c in deck]

    GameGenerator.shuffle(deck, random.Random(2))

    assert sorted(c.id for c in deck) == sorted(before)
    assert [c.id for c in deck] != before


# -- deal ---------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(10))
def test_deal_distribution(seed: int) -> None:
    rng = random.Random(seed)
    configs = GameGenerator.select_categories(Difficulty.NORMAL, rng)
    deck = GameGenerator.build_deck(configs)
    GameGenerator.shuffle(deck, rng)
    order = [c.id for c in deck]

    state = GameGenerator.deal(deck, configs)
    board = state.board
    deal_count = int(len(order) * DEAL_FRACTION)

    # Cards come off the end of the deck, round-robin.
    dealt = list(reversed(order))[:deal_count]
    for k, cid in enumerate(dealt):
        column = board.holding_columns[k % COLUMN_COUNT]
        assert column[k // COLUMN_COUNT].id == cid

    assert [c.id for c in board.draw_pile] == order[: len(order) - deal_count]
    assert board.open_pile == []
    assert all(not slot for slot in board.collection_slots)
    assert state.total_cards == len(order) == board.card_count()


def test_deal_face_flags() -> None:
    state = GameGenerator.generate(Difficulty.EXTREME, random.Random(11))
    for column in state.board.holding_columns:
        assert column, "EXTREME deals enough cards to reach every column"
        assert column[-1].face_up
        assert not any(c.face_up for c in column[:-1])
    assert not any(c.face_up for c in state.board.draw_pile)


def test_single_category_deal() -> None:
    catalog = {"SOLO": _entry("SOLO", 3)}
    state = GameGenerator.generate(Difficulty.NORMAL, random.Random(0), catalog)

    assert state.total_cards == 4
    assert len(state.board.holding_columns[0]) == 1
    assert all(not col for col in state.board.holding_columns[1:])
    assert len(state.board.draw_pile) == 3


def test_generate_is_reproducible() -> None:
    a = GameGenerator.generate(Difficulty.HARD, random.Random(42))
    b = GameGenerator.generate(Difficulty.HARD, random.Random(42))
    assert a.board == b.board
    assert a.categories == b.categories

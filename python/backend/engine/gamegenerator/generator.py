"""Builds shuffled decks and deals them into a starting board."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Mapping

from backend.engine.gamestate import GameState
from backend.models.board import COLUMN_COUNT, Board
from backend.models.card import Card, CardKind
from backend.models.catalog import (
    DEFAULT_CATALOG,
    MAX_ITEMS,
    MIN_ITEMS,
    validate_catalog,
    validate_entry,
)
from backend.models.category import CatalogEntry, CategoryConfig
from backend.models.difficulty import DIFFICULTY_SETTINGS, Difficulty

logger = logging.getLogger(__name__)

BASE_SLOTS = 4
DEAL_FRACTION = 0.4
IMAGE_MODE_CHANCE = 0.2
KEY_GLYPH = "\U0001F511"


class GameGenerator:
    """Creates a session's categories, its deck, and the initial deal.

    Every random choice is drawn from the ``rng`` passed in, so a seeded
    ``random.Random`` reproduces the same game.
    """

    @staticmethod
    def category_count(difficulty: Difficulty, catalog_size: int) -> int:
        multiplier = DIFFICULTY_SETTINGS[difficulty].category_multiplier
        return min(math.floor(BASE_SLOTS * multiplier), catalog_size)

    @staticmethod
    def select_categories(
        difficulty: Difficulty,
        rng: random.Random,
        catalog: Mapping[str, CatalogEntry] = DEFAULT_CATALOG,
    ) -> dict[str, CategoryConfig]:
        """Pick the active categories and resolve their item counts.

        Raises ``MalformedCatalogError`` if the catalog is empty or a
        selected category cannot supply ``MIN_ITEMS`` items.
        """
        validate_catalog(catalog)
        keys = list(catalog)
        rng.shuffle(keys)
        count = GameGenerator.category_count(difficulty, len(keys))

        configs: dict[str, CategoryConfig] = {}
        for key in keys[:count]:
            entry = catalog[key]
            validate_entry(entry)
            item_count = min(rng.randint(MIN_ITEMS, MAX_ITEMS), len(entry.items))
            image_mode = rng.random() < IMAGE_MODE_CHANCE
            configs[entry.id] = GameGenerator.resolve(entry, item_count, image_mode)
        return configs

    @staticmethod
    def resolve(
        entry: CatalogEntry, item_count: int, image_mode: bool = False
    ) -> CategoryConfig:
        return CategoryConfig(
            id=entry.id,
            label=entry.label,
            color=entry.color,
            item_count=item_count,
            image_mode=image_mode,
            active_items=entry.items[:item_count],
            active_glyphs=entry.glyphs[:item_count],
        )

    @staticmethod
    def build_deck(categories: Mapping[str, CategoryConfig]) -> list[Card]:
        """Return one KEY plus ``item_count`` SUB cards per category, unshuffled."""
        cards: list[Card] = []
        for cat in categories.values():
            cards.append(
                Card(
                    id=f"KEY_{cat.id}",
                    kind=CardKind.KEY,
                    category_id=cat.id,
                    label=cat.label,
                    glyph=KEY_GLYPH,
                )
            )
            for idx, item in enumerate(cat.active_items):
                glyph = cat.active_glyphs[idx] if idx < len(cat.active_glyphs) else item
                cards.append(
                    Card(
                        id=f"SUB_{cat.id}_{idx}",
                        kind=CardKind.SUB,
                        category_id=cat.id,
                        label=item,
                        glyph=glyph,
                    )
                )
        return cards

    @staticmethod
    def shuffle(cards: list[Card], rng: random.Random) -> None:
        """Fisher-Yates shuffle *cards* in-place."""
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    @staticmethod
    def deal(
        deck: list[Card], categories: Mapping[str, CategoryConfig]
    ) -> GameState:
        """Deal 40% of *deck* round-robin into the holding columns.

        Cards come off the end of *deck*.  Each column's last card is
        face-up, the rest face-down; what remains becomes the draw pile.
        """
        pile = list(deck)
        board = Board()
        deal_count = math.floor(len(pile) * DEAL_FRACTION)

        for k in range(deal_count):
            board.holding_columns[k % COLUMN_COUNT].append(pile.pop())

        for column in board.holding_columns:
            for card in column:
                card.face_up = False
            if column:
                column[-1].face_up = True

        for card in pile:
            card.face_up = False
        board.draw_pile = pile
        return GameState(board, categories)

    @staticmethod
    def generate(
        difficulty: Difficulty,
        rng: random.Random,
        catalog: Mapping[str, CatalogEntry] = DEFAULT_CATALOG,
    ) -> GameState:
        """Return a freshly dealt game for *difficulty*."""
        categories = GameGenerator.select_categories(difficulty, rng, catalog)
        deck = GameGenerator.build_deck(categories)
        GameGenerator.shuffle(deck, rng)
        logger.debug(
            "Setup %s: categories=%d cards=%d",
            difficulty.value,
            len(categories),
            len(deck),
        )
        return GameGenerator.deal(deck, categories)

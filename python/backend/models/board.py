"""Board model: the four zone kinds a card can occupy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.card import Card

COLUMN_COUNT = 4
SLOT_COUNT = 4


class ZoneKind(StrEnum):
    DRAW_PILE = "draw_pile"
    OPEN_PILE = "open_pile"
    HOLDING = "holding"
    COLLECTION = "collection"


@dataclass(frozen=True)
class CardLocation:
    """Where a card sits: zone kind, zone index and position in the zone.

    Piles have a single zone, so their ``zone_index`` is always 0.
    """

    kind: ZoneKind
    zone_index: int
    position: int


def _empty_zones(count: int) -> list[list[Card]]:
    return [[] for _ in range(count)]


@dataclass
class Board:
    """All zones of a dealt game.

    Every pile is a list whose last element is its top.  The draw pile is
    hidden and never searchable; the open pile only exposes its top card.
    """

    draw_pile: list[Card] = field(default_factory=list)
    open_pile: list[Card] = field(default_factory=list)
    holding_columns: list[list[Card]] = field(
        default_factory=lambda: _empty_zones(COLUMN_COUNT)
    )
    collection_slots: list[list[Card]] = field(
        default_factory=lambda: _empty_zones(SLOT_COUNT)
    )

    # -- queries --------------------------------------------------------------

    def zone(self, kind: ZoneKind, index: int = 0) -> list[Card]:
        if kind == ZoneKind.DRAW_PILE:
            return self.draw_pile
        if kind == ZoneKind.OPEN_PILE:
            return self.open_pile
        if kind == ZoneKind.HOLDING:
            return self.holding_columns[index]
        if kind == ZoneKind.COLLECTION:
            return self.collection_slots[index]
        raise ValueError(f"Unknown zone kind: {kind!r}")

    def card_count(self) -> int:
        return (
            len(self.draw_pile)
            + len(self.open_pile)
            + sum(len(c) for c in self.holding_columns)
            + sum(len(s) for s in self.collection_slots)
        )

    def unsorted_count(self) -> int:
        """Cards outside the collection slots."""
        return (
            len(self.draw_pile)
            + len(self.open_pile)
            + sum(len(c) for c in self.holding_columns)
        )

    def is_cleared(self) -> bool:
        return self.unsorted_count() == 0

    def slot_for(self, category_id: str) -> int | None:
        """Index of the collection slot locked to *category_id*, if any."""
        for i, slot in enumerate(self.collection_slots):
            if slot and slot[0].category_id == category_id:
                return i
        return None

    def copy(self) -> Board:
        return Board(
            draw_pile=[c.copy() for c in self.draw_pile],
            open_pile=[c.copy() for c in self.open_pile],
            holding_columns=[[c.copy() for c in col] for col in self.holding_columns],
            collection_slots=[[c.copy() for c in s] for s in self.collection_slots],
        )

"""Card model for the category-sort game."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class CardKind(StrEnum):
    KEY = "KEY"
    SUB = "SUB"


@dataclass
class Card:
    """A single card.

    A KEY card heads a category; SUB cards are its collectible items.
    Only ``face_up`` changes after creation.
    """

    id: str
    kind: CardKind
    category_id: str
    label: str
    glyph: str | None = None
    face_up: bool = False

    @property
    def is_key(self) -> bool:
        return self.kind is CardKind.KEY

    def copy(self) -> Card:
        return replace(self)

from backend.models.board import Board, CardLocation, ZoneKind
from backend.models.card import Card, CardKind
from backend.models.catalog import DEFAULT_CATALOG, MalformedCatalogError
from backend.models.category import CatalogEntry, CategoryConfig
from backend.models.difficulty import DIFFICULTY_SETTINGS, Difficulty, DifficultySettings
from backend.models.events import DrawOutcome, EventRecord, GameEvent

__all__ = [
    "Board",
    "Card",
    "CardKind",
    "CardLocation",
    "CatalogEntry",
    "CategoryConfig",
    "DEFAULT_CATALOG",
    "DIFFICULTY_SETTINGS",
    "Difficulty",
    "DifficultySettings",
    "DrawOutcome",
    "EventRecord",
    "GameEvent",
    "MalformedCatalogError",
    "ZoneKind",
]

"""Bundled category catalog and catalog validation."""

from __future__ import annotations

from collections.abc import Mapping

from backend.models.category import CatalogEntry

MIN_ITEMS = 3
MAX_ITEMS = 8


class MalformedCatalogError(ValueError):
    """Raised when the catalog cannot supply a playable category."""


def _entry(
    id: str, color: str, items: list[str], glyphs: list[str]
) -> CatalogEntry:
    return CatalogEntry(
        id=id, label=id, color=color, items=tuple(items), glyphs=tuple(glyphs)
    )


DEFAULT_CATALOG: dict[str, CatalogEntry] = {
    e.id: e
    for e in (
        _entry(
            "FRUIT", "#e57373",
            ["Apple", "Banana", "Cherry", "Grape", "Lemon", "Orange", "Peach", "Pear"],
            ["\U0001F34E", "\U0001F34C", "\U0001F352", "\U0001F347",
             "\U0001F34B", "\U0001F34A", "\U0001F351", "\U0001F350"],
        ),
        _entry(
            "ANIMAL", "#81c784",
            ["Cat", "Dog", "Bear", "Lion", "Tiger", "Rabbit", "Fox", "Wolf"],
            ["\U0001F431", "\U0001F436", "\U0001F43B", "\U0001F981",
             "\U0001F42F", "\U0001F430", "\U0001F98A", "\U0001F43A"],
        ),
        _entry(
            "VEHICLE", "#64b5f6",
            ["Car", "Bus", "Train", "Bike", "Ship", "Plane", "Truck", "Taxi"],
            ["\U0001F697", "\U0001F68C", "\U0001F686", "\U0001F6B2",
             "\U0001F6A2", "✈", "\U0001F69A", "\U0001F695"],
        ),
        _entry(
            "FURNITURE", "#ffb74d",
            ["Chair", "Desk", "Bed", "Sofa", "Table", "Lamp", "Shelf", "Closet"],
            ["\U0001FA91", "\U0001F5A5", "\U0001F6CF", "\U0001F6CB",
             "\U0001F37D", "\U0001F4A1", "\U0001F4DA", "\U0001F6AA"],
        ),
        _entry(
            "SPORT", "#ba68c8",
            ["Soccer", "Tennis", "Golf", "Rugby", "Boxing", "Hockey", "Skiing", "Rowing"],
            ["⚽", "\U0001F3BE", "⛳", "\U0001F3C9",
             "\U0001F94A", "\U0001F3D2", "⛷", "\U0001F6A3"],
        ),
        _entry(
            "WEATHER", "#4dd0e1",
            ["Sun", "Rain", "Snow", "Wind", "Fog", "Storm", "Hail", "Cloud"],
            ["☀", "\U0001F327", "❄", "\U0001F32C",
             "\U0001F32B", "⛈", "\U0001F9CA", "☁"],
        ),
        _entry(
            "MUSIC", "#f06292",
            ["Piano", "Guitar", "Drum", "Violin", "Flute", "Trumpet", "Harp", "Banjo"],
            ["\U0001F3B9", "\U0001F3B8", "\U0001F941", "\U0001F3BB",
             "\U0001FA88", "\U0001F3BA", "\U0001FA95", "\U0001FA95"],
        ),
        _entry(
            "TOOL", "#a1887f",
            ["Hammer", "Saw", "Drill", "Wrench", "Pliers", "Axe", "Ruler", "Chisel"],
            ["\U0001F528", "\U0001FA9A", "\U0001FA9B", "\U0001F527",
             "\U0001F5DC", "\U0001FA93", "\U0001F4CF", "\U0001F6E0"],
        ),
        _entry(
            "FLOWER", "#aed581",
            ["Rose", "Tulip", "Lily", "Daisy", "Orchid", "Lotus", "Iris", "Poppy"],
            ["\U0001F339", "\U0001F337", "\U0001F33C", "\U0001F33C",
             "\U0001FAB7", "\U0001FAB7", "\U0001F490", "\U0001F33A"],
        ),
        _entry(
            "CLOTHING", "#90a4ae",
            ["Shirt", "Pants", "Dress", "Coat", "Scarf", "Socks", "Hat", "Gloves"],
            ["\U0001F455", "\U0001F456", "\U0001F457", "\U0001F9E5",
             "\U0001F9E3", "\U0001F9E6", "\U0001F452", "\U0001F9E4"],
        ),
    )
}


def validate_entry(entry: CatalogEntry) -> None:
    """Raise ``MalformedCatalogError`` if *entry* cannot be dealt."""
    if len(entry.items) < MIN_ITEMS:
        raise MalformedCatalogError(
            f"Category {entry.id!r} has {len(entry.items)} items; "
            f"at least {MIN_ITEMS} are required."
        )
    if len(entry.glyphs) > len(entry.items):
        raise MalformedCatalogError(
            f"Category {entry.id!r} has more glyphs ({len(entry.glyphs)}) "
            f"than items ({len(entry.items)})."
        )


def validate_catalog(catalog: Mapping[str, CatalogEntry]) -> None:
    if not catalog:
        raise MalformedCatalogError("Catalog is empty.")
    for key, entry in catalog.items():
        if key != entry.id:
            raise MalformedCatalogError(
                f"Catalog key {key!r} does not match entry id {entry.id!r}."
            )

"""Category definitions: catalog entries and per-session configs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    """A read-only category as supplied by the catalog."""

    id: str
    label: str
    color: str
    items: tuple[str, ...]
    glyphs: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryConfig:
    """A category resolved for one session.

    ``capacity`` is the length at which a collection slot holding this
    category auto-clears: the KEY card plus every active item.
    """

    id: str
    label: str
    color: str
    item_count: int
    image_mode: bool
    active_items: tuple[str, ...]
    active_glyphs: tuple[str, ...]

    @property
    def capacity(self) -> int:
        return self.item_count + 1

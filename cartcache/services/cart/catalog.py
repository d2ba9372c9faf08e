"""Helpers that relate persisted identifiers back to catalog items."""

from __future__ import annotations

from collections.abc import Sequence

from cartcache.schemas.catalog import CatalogItem


class CatalogIndex:
    """Lookup of catalog items by id, keeping the first occurrence of each id.

    Built once per restore so resolving N rows against M items costs O(N + M)
    instead of a linear scan per row.
    """

    def __init__(self, catalog: Sequence[CatalogItem]) -> None:
        self._items: dict[str, CatalogItem] = {}
        for item in catalog:
            self._items.setdefault(item.id, item)

    def resolve(self, item_id: str | None) -> CatalogItem | None:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def __len__(self) -> int:
        return len(self._items)


def select_favorite(catalog: Sequence[CatalogItem]) -> CatalogItem | None:
    """Return the most ordered item, or ``None`` when nothing was ever ordered.

    Ties go to whichever item appears first in ``catalog``.
    """

    favorite: CatalogItem | None = None
    for item in catalog:
        if favorite is None or item.times_ordered > favorite.times_ordered:
            favorite = item
    if favorite is None or favorite.times_ordered == 0:
        return None
    return favorite

"""In-process cache holding the cart, the last order, and the favorite item."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cartcache.schemas.cart import CartEntry
from cartcache.schemas.catalog import CatalogItem

logger = logging.getLogger(__name__)


class CartMemoryCache:
    """Keyed cart entries plus two single-value slots.

    Cart keys keep the order in which they were first inserted; re-putting an
    existing id replaces the value in place. Nothing is ever evicted except by
    an explicit ``remove`` or ``clear``.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CartEntry] = {}
        self._last_order: list[CartEntry] | None = None
        self._favorite: CatalogItem | None = None

    # -- Cart entries ---------------------------------------------------------

    def put(self, entry: CartEntry) -> None:
        self._entries[entry.id] = entry
        logger.debug(f"Cart entry {entry.id} cached. Cache size: {len(self._entries)}")

    def get(self, entry_id: str) -> CartEntry | None:
        return self._entries.get(entry_id)

    def remove(self, entry_id: str) -> bool:
        """Drop ``entry_id``; return whether anything was cached under it."""

        removed = self._entries.pop(entry_id, None) is not None
        if removed:
            logger.debug(f"Cart entry {entry_id} evicted. Cache size: {len(self._entries)}")
        return removed

    def clear(self) -> None:
        self._entries.clear()

    def all(self) -> list[CartEntry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    # -- Favorite -------------------------------------------------------------

    def set_favorite(self, item: CatalogItem | None) -> None:
        self._favorite = item

    def get_favorite(self) -> CatalogItem | None:
        return self._favorite

    def clear_favorite(self) -> None:
        self._favorite = None

    # -- Last order -----------------------------------------------------------

    def set_last_order(self, entries: Iterable[CartEntry]) -> None:
        """Store a copy of ``entries``; an empty order clears the slot."""

        snapshot = list(entries)
        self._last_order = snapshot or None

    def get_last_order(self) -> list[CartEntry] | None:
        if self._last_order is None:
            return None
        return list(self._last_order)

    def clear_last_order(self) -> None:
        self._last_order = None

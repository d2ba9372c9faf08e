"""Write-through cache coordinating the in-memory cart with its SQLite mirror.

Persistence-oriented operations delegated to :class:`CartPersistence`:
* ``upsert_cart``/``delete_cart``/``clear_cart`` – cart row mutations.
* ``update_cart_quantity`` – targeted single-column update.
* ``replace_last_order``/``clear_last_order`` – last order table rewrites.
* ``load_cart``/``load_last_order``/``count_cart_rows`` – full scans used by
  restores and diagnostics.

In-memory responsibilities handled by :class:`CartMemoryCache`:
* cart entries keyed by id in insertion order.
* single slots for the last order and the favorite item.

Every mutation hits the cache first and the store second. A store failure is
returned as a :class:`StoreResult` and never undoes the cache write, so the two
can drift apart until the next restore.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from types import TracebackType

from cartcache.db.models import CartRecord, LastOrderRecord
from cartcache.schemas.cart import CartEntry
from cartcache.schemas.catalog import CatalogItem
from cartcache.schemas.results import StoreResult, combine
from cartcache.services.cart import (
    CartMemoryCache,
    CartPersistence,
    CatalogIndex,
    select_favorite,
)

logger = logging.getLogger(__name__)

PersistedRow = CartRecord | LastOrderRecord


def _resolve_rows(
    records: Iterable[PersistedRow], catalog: Sequence[CatalogItem], kind: str
) -> Iterator[tuple[PersistedRow, CatalogItem, int]]:
    """Yield each persisted row with its catalog item and a usable quantity.

    Rows whose item id is not in ``catalog`` or whose quantity is missing or
    below one are logged and skipped.
    """

    index = CatalogIndex(catalog)
    for record in records:
        item = index.resolve(record.item_id)
        if item is None:
            logger.warning(
                f"Item with id {record.item_id} not found in catalog; "
                f"skipping {kind} {record.id}"
            )
            continue
        if record.quantity is None or record.quantity < 1:
            logger.warning(
                f"{kind.capitalize()} {record.id} has invalid quantity "
                f"{record.quantity}; skipping"
            )
            continue
        yield record, item, record.quantity


class CartCacheService:
    """Orchestrates persistence and in-memory caching of cart state."""

    def __init__(
        self,
        *,
        persistence: CartPersistence,
        cache: CartMemoryCache,
    ) -> None:
        self._persistence = persistence
        self._cache = cache

    # -- Cart -----------------------------------------------------------------

    def add_cart_item(self, entry: CartEntry) -> StoreResult[None]:
        self._cache.put(entry)
        return self._persistence.upsert_cart(entry)

    def get_cart_item(self, entry_id: str) -> CartEntry | None:
        return self._cache.get(entry_id)

    def remove_cart_item(self, entry_id: str) -> StoreResult[int]:
        self._cache.remove(entry_id)
        return self._persistence.delete_cart(entry_id)

    def clear_cart(self) -> StoreResult[int]:
        self._cache.clear()
        result = self._persistence.clear_cart()
        logger.debug("Cart cache cleared")
        return result

    def get_all_cart_items(self) -> list[CartEntry]:
        return self._cache.all()

    def count_cart_rows(self) -> int:
        """Return the number of persisted cart rows, or 0 if the count failed."""

        return self._persistence.count_cart_rows().unwrap_or(0)

    def update_cart_item_quantity(self, entry_id: str, quantity: int) -> StoreResult[int]:
        """Set the quantity of a cart line in both the cache and the store."""

        if quantity < 1:
            raise ValueError("quantity must be a positive integer")

        cached = self._cache.get(entry_id)
        if cached is not None:
            cached.quantity = quantity
        return self._persistence.update_cart_quantity(entry_id, quantity)

    def cart_total(self) -> float:
        return sum((entry.line_total for entry in self._cache.all()), 0.0)

    def restore_cart_from_store(
        self, catalog: Sequence[CatalogItem]
    ) -> StoreResult[list[CartEntry]]:
        """Rebuild the cart cache from the store, resolving item ids in ``catalog``.

        Rows whose item is missing from ``catalog`` are skipped with a warning.
        Restored entries keep their persisted id and quantity, and the matching
        catalog items are flagged as added.
        """

        self._cache.clear()
        loaded = self._persistence.load_cart()
        if not loaded.ok:
            return StoreResult(error=loaded.error)

        restored: list[CartEntry] = []
        rows = _resolve_rows(loaded.value or [], catalog, "cart row")
        for record, item, quantity in rows:
            item.mark_added()
            entry = CartEntry.for_item(item, quantity, entry_id=record.id)
            self._cache.put(entry)
            restored.append(entry)

        logger.info(f"Restored {len(restored)} cart entries from store")
        return StoreResult.success(restored)

    # -- Last order -----------------------------------------------------------

    def add_order(self, entries: Sequence[CartEntry]) -> StoreResult[None]:
        """Replace the last order with ``entries`` in cache and store."""

        self._cache.set_last_order(entries)
        result = self._persistence.replace_last_order(entries)
        logger.debug(f"Last order saved with {len(entries)} lines")
        return result

    def get_last_order(self) -> list[CartEntry] | None:
        return self._cache.get_last_order()

    def clear_last_order(self) -> StoreResult[int]:
        self._cache.clear_last_order()
        return self._persistence.clear_last_order()

    def restore_last_order_from_store(
        self, catalog: Sequence[CatalogItem]
    ) -> StoreResult[list[CartEntry]]:
        """Rebuild the last order slot from the store.

        Lines are resolved against ``catalog`` like cart rows. When nothing
        resolves, the slot is left empty, which reads the same as never having
        ordered.
        """

        self._cache.clear_last_order()
        loaded = self._persistence.load_last_order()
        if not loaded.ok:
            return StoreResult(error=loaded.error)

        order = [
            CartEntry.for_item(item, quantity, entry_id=record.id)
            for record, item, quantity in _resolve_rows(
                loaded.value or [], catalog, "last order line"
            )
        ]

        if order:
            self._cache.set_last_order(order)
            logger.info(f"Restored last order with {len(order)} lines from store")
        else:
            logger.info("No last order found in store")
        return StoreResult.success(order)

    def get_or_restore_last_order(
        self, catalog: Sequence[CatalogItem]
    ) -> list[CartEntry] | None:
        """Return the cached last order, restoring it from the store on a miss."""

        cached = self._cache.get_last_order()
        if cached is not None:
            return cached

        logger.debug("No last order in cache; attempting to restore from store")
        self.restore_last_order_from_store(catalog)
        return self._cache.get_last_order()

    def reorder_last_order(
        self, catalog: Sequence[CatalogItem]
    ) -> StoreResult[list[CartEntry]]:
        """Put every item of the last order back into the cart.

        The last order is read from the cache, or restored from the store on a
        miss. Each line whose item is in ``catalog`` and not already in the
        cart becomes a new entry with quantity 1, and the catalog item is
        flagged as added. Returns the added entries; a lost store write is
        reported through ``error`` while ``value`` still lists what was
        cached.
        """

        order = self.get_or_restore_last_order(catalog)
        if order is None:
            logger.info("No last order found to add to cart")
            return StoreResult.success([])

        index = CatalogIndex(catalog)
        in_cart = {entry.item_id for entry in self._cache.all()}
        added: list[CartEntry] = []
        results: list[StoreResult] = []
        for line in order:
            item = index.resolve(line.item_id)
            if item is None:
                logger.warning(
                    f"Item with id {line.item_id} not found in catalog; "
                    f"not re-adding {line.item.item_name}"
                )
                continue
            if item.id in in_cart:
                continue

            item.mark_added()
            entry = CartEntry.for_item(item)
            results.append(self.add_cart_item(entry))
            in_cart.add(item.id)
            added.append(entry)

        logger.info(f"Added {len(added)} last order items to cart")
        return StoreResult(value=added, error=combine(*results).error)

    def finalize_order(
        self, catalog: Sequence[CatalogItem] | None = None
    ) -> StoreResult[None]:
        """Move every cart line into the last order and empty the cart.

        The lines become the new last order, the cart is cleared in cache and
        store, and the ordered items (snapshots and, when given, the live
        ``catalog`` entries) are flagged as no longer added.
        """

        entries = self._cache.all()
        if not entries:
            raise ValueError("Cannot finalize an empty cart")

        for entry in entries:
            entry.item.mark_removed()
        if catalog is not None:
            index = CatalogIndex(catalog)
            for entry in entries:
                item = index.resolve(entry.item_id)
                if item is not None:
                    item.mark_removed()

        order_result = self.add_order(entries)
        clear_result = self.clear_cart()
        logger.info(f"Order finalized with {len(entries)} lines")
        return combine(order_result, clear_result)

    # -- Favorite -------------------------------------------------------------

    def get_favorite_item(self) -> CatalogItem | None:
        return self._cache.get_favorite()

    def set_favorite_item(self, item: CatalogItem | None) -> None:
        if item is None:
            logger.debug("Favorite item is None; cache left unchanged")
            return
        self._cache.set_favorite(item)

    def clear_favorite(self) -> None:
        self._cache.clear_favorite()

    def refresh_favorite(self, catalog: Sequence[CatalogItem]) -> CatalogItem | None:
        """Cache and return the most ordered item in ``catalog``, if any."""

        favorite = select_favorite(catalog)
        self.set_favorite_item(favorite)
        return favorite

    # -- Lifecycle ------------------------------------------------------------

    def close(self) -> None:
        self._persistence.close()

    def __enter__(self) -> CartCacheService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

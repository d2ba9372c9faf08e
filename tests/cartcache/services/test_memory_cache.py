"""Unit tests for the in-process cart cache."""

from __future__ import annotations

from cartcache.schemas.cart import CartEntry
from cartcache.services.cart import CartMemoryCache
from tests.cartcache.support.builders import make_item


def _entry(entry_id: str, item_id: str = "i1", quantity: int = 1) -> CartEntry:
    return CartEntry.for_item(make_item(item_id, f"Item {item_id}"), quantity, entry_id=entry_id)


def test_put_get_and_contains() -> None:
    cache = CartMemoryCache()
    entry = _entry("c1")

    cache.put(entry)

    assert cache.get("c1") is entry
    assert "c1" in cache
    assert cache.get("missing") is None
    assert len(cache) == 1


def test_all_keeps_first_insertion_order() -> None:
    """Re-putting an id replaces the value without moving it to the end."""

    cache = CartMemoryCache()
    cache.put(_entry("a"))
    cache.put(_entry("b"))
    cache.put(_entry("c"))
    replacement = _entry("a", quantity=5)

    cache.put(replacement)

    assert [entry.id for entry in cache.all()] == ["a", "b", "c"]
    assert cache.get("a") is replacement


def test_remove_reports_whether_anything_was_cached() -> None:
    cache = CartMemoryCache()
    cache.put(_entry("c1"))

    assert cache.remove("c1") is True
    assert cache.remove("c1") is False
    assert len(cache) == 0


def test_clear_leaves_other_slots_untouched() -> None:
    cache = CartMemoryCache()
    favorite = make_item("i2", "Fries")
    cache.put(_entry("c1"))
    cache.set_favorite(favorite)
    cache.set_last_order([_entry("o1")])

    cache.clear()

    assert cache.all() == []
    assert cache.get_favorite() is favorite
    assert cache.get_last_order() is not None


def test_last_order_is_copied_in_and_out() -> None:
    cache = CartMemoryCache()
    order = [_entry("o1"), _entry("o2")]

    cache.set_last_order(order)
    order.append(_entry("o3"))
    fetched = cache.get_last_order()
    assert fetched is not None
    fetched.clear()

    again = cache.get_last_order()
    assert again is not None
    assert [entry.id for entry in again] == ["o1", "o2"]


def test_empty_last_order_reads_as_absent() -> None:
    cache = CartMemoryCache()
    cache.set_last_order([_entry("o1")])

    cache.set_last_order([])

    assert cache.get_last_order() is None


def test_favorite_slot_round_trip() -> None:
    cache = CartMemoryCache()
    favorite = make_item("i2", "Fries")

    assert cache.get_favorite() is None
    cache.set_favorite(favorite)
    assert cache.get_favorite() is favorite
    cache.clear_favorite()
    assert cache.get_favorite() is None

"""Building the service from settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cartcache import CartEntry, StoreUnavailableError, build_cart_cache_service
from cartcache.services.dependencies import load_configured_catalog
from cartcache.settings import AppSettings
from tests.cartcache.support.builders import make_item


def test_build_service_over_settings_path(tmp_path: Path) -> None:
    settings = AppSettings(db_path=str(tmp_path / "store.sqlite"))
    catalog = [make_item("i1", "Burger")]

    with build_cart_cache_service(settings) as service:
        service.add_cart_item(CartEntry.for_item(catalog[0], 2, entry_id="c1"))

    with build_cart_cache_service(settings) as service:
        service.restore_cart_from_store(catalog)
        assert [entry.id for entry in service.get_all_cart_items()] == ["c1"]


def test_build_service_in_memory() -> None:
    with build_cart_cache_service(AppSettings(db_path=":memory:")) as service:
        service.add_cart_item(CartEntry.for_item(make_item("i1", "Burger"), entry_id="c1"))
        assert service.count_cart_rows() == 1


def test_build_service_fails_fast_when_store_cannot_open(tmp_path: Path) -> None:
    settings = AppSettings(db_path=str(tmp_path / "missing" / "store.sqlite"))

    with pytest.raises(StoreUnavailableError):
        build_cart_cache_service(settings)


def test_slow_statements_are_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    settings = AppSettings(db_path=str(tmp_path / "store.sqlite"), slow_query_threshold=-1.0)

    with build_cart_cache_service(settings) as service:
        with caplog.at_level(logging.WARNING, logger="cartcache.monitoring"):
            service.count_cart_rows()

    assert "Slow store statement" in caplog.text


def test_load_configured_catalog(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps([{"id": "i1", "item_name": "Burger", "item_cost": 5.0}]),
        encoding="utf-8",
    )

    assert load_configured_catalog(AppSettings(catalog_path=None)) == []
    (item,) = load_configured_catalog(AppSettings(catalog_path=str(path)))
    assert item.item_name == "Burger"

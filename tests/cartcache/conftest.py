"""Shared fixtures: a small catalog and services over temporary SQLite files."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from cartcache.db.connection import create_engine
from cartcache.schemas.catalog import CatalogItem
from cartcache.services.cart import CartMemoryCache, CartPersistence
from cartcache.services.cart_cache_service import CartCacheService
from tests.cartcache.support.builders import make_item


@pytest.fixture
def catalog() -> list[CatalogItem]:
    """Deterministic three-item menu."""

    return [
        make_item("i1", "Burger", 5.0, times_ordered=3),
        make_item("i2", "Fries", 2.5, times_ordered=7),
        make_item("i3", "Soda", 1.25, times_ordered=7),
    ]


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "CacheManager.sqlite"


@pytest.fixture
def service_factory(store_path: Path) -> Iterator[Callable[[], CartCacheService]]:
    """Open services over the same file; each call simulates a fresh process."""

    opened: list[CartCacheService] = []

    def _open() -> CartCacheService:
        engine = create_engine(f"sqlite:///{store_path}")
        service = CartCacheService(
            persistence=CartPersistence(engine),
            cache=CartMemoryCache(),
        )
        opened.append(service)
        return service

    yield _open

    for service in opened:
        service.close()


@pytest.fixture
def service(service_factory: Callable[[], CartCacheService]) -> CartCacheService:
    return service_factory()


@pytest.fixture
def persistence(store_path: Path) -> Iterator[CartPersistence]:
    store = CartPersistence(create_engine(f"sqlite:///{store_path}"))
    yield store
    store.close()

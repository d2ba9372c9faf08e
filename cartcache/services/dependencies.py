"""Explicit wiring for the cart cache service.

The service is built once at process start and handed to whoever needs it,
instead of living behind a module-level singleton. Tests build their own
instances over temporary files.
"""

from __future__ import annotations

import logging

from cartcache.db.connection import create_engine
from cartcache.monitoring import setup_query_monitoring
from cartcache.schemas.catalog import CatalogItem
from cartcache.services.cart import CartMemoryCache, CartPersistence
from cartcache.services.cart_cache_service import CartCacheService
from cartcache.services.catalog_client import JsonFileCatalogClient
from cartcache.settings import AppSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure root logging from settings and surface configuration warnings."""

    active_settings = settings or get_settings()
    logging.basicConfig(level=active_settings.log_level_numeric, format=LOG_FORMAT)

    warnings = active_settings.optional_config_warnings()
    if warnings:
        logger.warning("Cart cache configuration warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")


def build_cart_cache_service(settings: AppSettings | None = None) -> CartCacheService:
    """Open the store and return a fully-wired :class:`CartCacheService`.

    Raises :class:`cartcache.errors.StoreUnavailableError` when the SQLite file
    cannot be opened.
    """

    active_settings = settings or get_settings()
    engine = create_engine(
        active_settings.resolved_database_url, echo=active_settings.sql_echo
    )
    setup_query_monitoring(
        engine, slow_query_threshold=active_settings.slow_query_threshold
    )
    return CartCacheService(
        persistence=CartPersistence(engine),
        cache=CartMemoryCache(),
    )


def load_configured_catalog(settings: AppSettings | None = None) -> list[CatalogItem]:
    """Return the catalog exported at ``CATALOG_PATH``, or an empty list."""

    active_settings = settings or get_settings()
    if not active_settings.catalog_path:
        return []
    return JsonFileCatalogClient(active_settings.catalog_path).fetch_catalog()


__all__ = [
    "LOG_FORMAT",
    "build_cart_cache_service",
    "configure_logging",
    "load_configured_catalog",
]

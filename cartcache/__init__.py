"""Write-through cart cache backed by an on-device SQLite file."""

from cartcache.errors import StoreUnavailableError
from cartcache.schemas import CartEntry, CatalogItem, StoreResult
from cartcache.services import CartCacheService
from cartcache.services.dependencies import build_cart_cache_service

__all__ = [
    "CartCacheService",
    "CartEntry",
    "CatalogItem",
    "StoreResult",
    "StoreUnavailableError",
    "build_cart_cache_service",
]

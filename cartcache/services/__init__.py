from .cart_cache_service import CartCacheService
from .catalog_client import (
    CatalogClientProtocol,
    InMemoryCatalogClient,
    JsonFileCatalogClient,
)

__all__ = [
    "CartCacheService",
    "CatalogClientProtocol",
    "InMemoryCatalogClient",
    "JsonFileCatalogClient",
]

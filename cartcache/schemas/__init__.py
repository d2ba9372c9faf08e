from .cart import CartEntry
from .catalog import CatalogItem
from .results import StoreError, StoreErrorKind, StoreResult, combine

__all__ = [
    "CartEntry",
    "CatalogItem",
    "StoreError",
    "StoreErrorKind",
    "StoreResult",
    "combine",
]

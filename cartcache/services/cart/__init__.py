"""Cart cache components split by responsibility.

``CartPersistence`` owns the SQLite tables, ``CartMemoryCache`` the in-process
copies, and the catalog helpers turn persisted item ids back into items. The
orchestrating service composes them.
"""

from .cache import CartMemoryCache
from .catalog import CatalogIndex, select_favorite
from .persistence import CartPersistence

__all__ = [
    "CartMemoryCache",
    "CartPersistence",
    "CatalogIndex",
    "select_favorite",
]

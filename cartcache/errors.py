"""Exceptions raised by the cart cache."""

from __future__ import annotations


class StoreUnavailableError(RuntimeError):
    """The SQLite file backing the cache could not be opened or initialised.

    Raised only while constructing the store. A cache without its backing file
    is unusable, so callers are expected to let this propagate.
    """

    def __init__(self, database_url: str, reason: str) -> None:
        self.database_url = database_url
        self.reason = reason
        super().__init__(f"Unable to open cart store at {database_url}: {reason}")

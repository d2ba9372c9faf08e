"""Sources of the orderable item catalog used to rehydrate persisted rows.

The production catalog lives in a remote document database that this package
does not talk to directly. Callers hand over whatever implements
:class:`CatalogClientProtocol`; the two implementations here cover tests,
offline use, and catalog exports written to disk.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from cartcache.schemas.catalog import CatalogItem

logger = logging.getLogger(__name__)


class CatalogClientProtocol(Protocol):
    """Minimal catalog surface required to restore the cart."""

    def fetch_catalog(self) -> list[CatalogItem]:
        """Return every orderable item in catalog order."""


class InMemoryCatalogClient(CatalogClientProtocol):
    """Catalog backed by a fixed list, used in tests and during local development."""

    def __init__(self, items: Iterable[CatalogItem]) -> None:
        self._items = list(items)

    def fetch_catalog(self) -> list[CatalogItem]:
        return list(self._items)


def parse_catalog_documents(documents: Iterable[dict[str, Any]]) -> list[CatalogItem]:
    """Validate raw item documents, skipping any that are malformed."""

    items: list[CatalogItem] = []
    for index, document in enumerate(documents):
        try:
            items.append(CatalogItem.model_validate(document))
        except ValidationError as exc:
            document_id = None
            if isinstance(document, dict):
                document_id = document.get("id") or document.get("documentID")
            logger.warning(
                f"Skipping catalog document #{index} ({document_id or 'no id'}): "
                f"{exc.error_count()} validation error(s)"
            )
    return items


class JsonFileCatalogClient(CatalogClientProtocol):
    """Catalog read from a JSON array of item documents on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def fetch_catalog(self) -> list[CatalogItem]:
        payload = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(
                f"Catalog file {self._path} must contain a JSON array of item documents"
            )
        items = parse_catalog_documents(payload)
        logger.info(f"Loaded {len(items)} catalog items from {self._path}")
        return items

"""Pydantic schemas for cart lines and completed orders."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

from .catalog import CatalogItem


def _new_entry_id() -> str:
    return str(uuid.uuid4()).upper()


class CartEntry(BaseModel):
    """One line of the shopping cart: an item snapshot and a quantity."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        default_factory=_new_entry_id,
        min_length=1,
        description="Cache key and primary key of the persisted row",
    )
    item: CatalogItem = Field(
        ..., description="Value snapshot of the catalog item at the time it was added"
    )
    quantity: int = Field(1, ge=1)

    @classmethod
    def for_item(
        cls, item: CatalogItem, quantity: int = 1, *, entry_id: str | None = None
    ) -> CartEntry:
        """Build an entry holding a detached copy of ``item``."""

        payload: dict[str, object] = {"item": item.snapshot(), "quantity": quantity}
        if entry_id is not None:
            payload["id"] = entry_id
        return cls(**payload)

    @property
    def item_id(self) -> str:
        return self.item.id

    @property
    def line_total(self) -> float:
        return self.item.item_cost * self.quantity

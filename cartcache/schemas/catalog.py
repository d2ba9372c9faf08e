"""Pydantic schema for orderable catalog items."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    """An orderable item as served by the remote catalog.

    Every field except ``is_added`` and ``times_ordered`` is business data owned
    by the catalog. ``is_added`` tracks whether the item currently sits in the
    cart; ``times_ordered`` only ever grows.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("id", "documentID"),
        description="Document identifier in the remote catalog",
    )
    item_name: str = Field(..., description="Display name shown on menus")
    item_cost: float = Field(..., ge=0, description="Unit price")
    item_details: str = ""
    item_image: str = ""
    item_ratings: str = ""
    item_ingredients: str = ""
    item_star_products: str = Field(
        "",
        validation_alias=AliasChoices("item_star_products", "item_starProducts"),
        description="Promoted-item marker carried through from the catalog documents.",
    )
    times_ordered: int = Field(0, ge=0)
    is_added: bool = Field(
        False,
        validation_alias=AliasChoices("is_added", "isAdded"),
        description="True while the item is in the cart.",
    )

    def mark_added(self) -> None:
        self.is_added = True

    def mark_removed(self) -> None:
        self.is_added = False

    def snapshot(self) -> CatalogItem:
        """Return an independent copy safe to store alongside a cart entry."""

        return self.model_copy(deep=True)

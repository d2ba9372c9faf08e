"""SQLAlchemy ORM models for the on-device cart store.

Column names match the layout the mobile client has always written, including
the two snake_case item columns it added last, so an existing
``CacheManager.sqlite`` file opens without a migration.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class CartRecord(Base):
    """A persisted cart line with a flattened copy of its catalog item."""

    __tablename__ = "Cart"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    item_id: Mapped[str | None] = mapped_column("itemId", String)
    item_name: Mapped[str | None] = mapped_column("itemName", String)
    item_cost: Mapped[float | None] = mapped_column("itemCost", Float)
    item_details: Mapped[str | None] = mapped_column("itemDetails", String)
    item_image: Mapped[str | None] = mapped_column("itemImage", String)
    item_ratings: Mapped[str | None] = mapped_column("itemRatings", String)
    is_added: Mapped[bool | None] = mapped_column("isAdded", Boolean)
    times_ordered: Mapped[int | None] = mapped_column("timesOrdered", Integer)
    quantity: Mapped[int | None] = mapped_column(Integer)
    item_ingredients: Mapped[str | None] = mapped_column(String)
    item_star_products: Mapped[str | None] = mapped_column(
        "item_starProducts",
        String,
        doc="Promoted-item marker copied from the catalog document.",
    )

    def __repr__(self) -> str:
        return (
            f"CartRecord(id={self.id!r}, item_id={self.item_id!r}, "
            f"quantity={self.quantity!r})"
        )


class LastOrderRecord(Base):
    """One line of the most recently completed order."""

    __tablename__ = "LastOrder"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    item_id: Mapped[str | None] = mapped_column("itemId", String)
    item_name: Mapped[str | None] = mapped_column("itemName", String)
    quantity: Mapped[int | None] = mapped_column(Integer)

    def __repr__(self) -> str:
        return (
            f"LastOrderRecord(id={self.id!r}, item_id={self.item_id!r}, "
            f"quantity={self.quantity!r})"
        )


__all__ = ["Base", "CartRecord", "LastOrderRecord"]

"""SQLite persistence for the cart cache."""

from .models import Base, CartRecord, LastOrderRecord

__all__ = ["Base", "CartRecord", "LastOrderRecord"]

"""Database-oriented helpers for the cart and last order tables."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TypeVar

from sqlalchemy import delete, func, literal_column, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cartcache.db.connection import create_session_factory, session_scope
from cartcache.db.models import CartRecord, LastOrderRecord
from cartcache.schemas.cart import CartEntry
from cartcache.schemas.results import StoreErrorKind, StoreResult, combine

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rows come back in the order they were first written.
_INSERTION_ORDER = literal_column("rowid")


def _cart_values(entry: CartEntry) -> dict[str, object]:
    item = entry.item
    return {
        "item_id": item.id,
        "item_name": item.item_name,
        "item_cost": item.item_cost,
        "item_details": item.item_details,
        "item_image": item.item_image,
        "item_ratings": item.item_ratings,
        "is_added": item.is_added,
        "times_ordered": item.times_ordered,
        "quantity": entry.quantity,
        "item_ingredients": item.item_ingredients,
        "item_star_products": item.item_star_products,
    }


class CartPersistence:
    """Encapsulates SQLAlchemy operations against the on-device store.

    Every public method is best-effort: a failing statement is logged, rolled
    back, and reported through :class:`StoreResult` instead of raised. One
    re-entrant lock guards the shared engine because the SQLite handle must
    not be used concurrently.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._lock = threading.RLock()

    @property
    def engine(self) -> Engine:
        return self._engine

    def _run(self, operation: str, work: Callable[[Session], T]) -> StoreResult[T]:
        with self._lock:
            try:
                with session_scope(self._session_factory) as session:
                    value = work(session)
            except IntegrityError as exc:
                logger.error(f"Store operation '{operation}' violated a constraint: {exc}")
                return StoreResult.failure(
                    operation, str(exc), kind=StoreErrorKind.INTEGRITY_ERROR
                )
            except SQLAlchemyError as exc:
                logger.error(f"Store operation '{operation}' failed: {exc}")
                return StoreResult.failure(operation, str(exc))
        return StoreResult.success(value)

    # -- Cart -----------------------------------------------------------------

    def upsert_cart(self, entry: CartEntry) -> StoreResult[None]:
        """Insert ``entry`` or overwrite the row sharing its id."""

        values = _cart_values(entry)

        def _upsert(session: Session) -> None:
            record = session.get(CartRecord, entry.id)
            if record is None:
                session.add(CartRecord(id=entry.id, **values))
                return
            for attribute, value in values.items():
                setattr(record, attribute, value)

        result = self._run("upsert_cart", _upsert)
        if result.ok:
            logger.debug(f"Persisted cart entry {entry.id}")
        return result

    def delete_cart(self, entry_id: str) -> StoreResult[int]:
        """Remove the row for ``entry_id``; absent ids delete nothing."""

        def _delete(session: Session) -> int:
            outcome = session.execute(delete(CartRecord).where(CartRecord.id == entry_id))
            return outcome.rowcount or 0

        return self._run("delete_cart", _delete)

    def clear_cart(self) -> StoreResult[int]:
        def _clear(session: Session) -> int:
            outcome = session.execute(delete(CartRecord))
            return outcome.rowcount or 0

        result = self._run("clear_cart", _clear)
        if result.ok:
            logger.debug(f"Cleared {result.value} cart rows")
        return result

    def load_cart(self) -> StoreResult[list[CartRecord]]:
        def _load(session: Session) -> list[CartRecord]:
            query = select(CartRecord).order_by(_INSERTION_ORDER)
            return list(session.execute(query).scalars().all())

        return self._run("load_cart", _load)

    def count_cart_rows(self) -> StoreResult[int]:
        def _count(session: Session) -> int:
            return int(session.execute(select(func.count()).select_from(CartRecord)).scalar_one())

        return self._run("count_cart_rows", _count)

    def update_cart_quantity(self, entry_id: str, quantity: int) -> StoreResult[int]:
        """Rewrite only the ``quantity`` column; absent ids update nothing."""

        def _update(session: Session) -> int:
            outcome = session.execute(
                update(CartRecord)
                .where(CartRecord.id == entry_id)
                .values(quantity=quantity)
            )
            return outcome.rowcount or 0

        return self._run("update_cart_quantity", _update)

    # -- Last order -----------------------------------------------------------

    def clear_last_order(self) -> StoreResult[int]:
        def _clear(session: Session) -> int:
            outcome = session.execute(delete(LastOrderRecord))
            return outcome.rowcount or 0

        return self._run("clear_last_order", _clear)

    def replace_last_order(self, entries: Iterable[CartEntry]) -> StoreResult[None]:
        """Clear the last order table, then write each line separately.

        The clear and the inserts are separate transactions, so a crash in
        between can leave a partial order behind. A failing line is logged and
        the remaining lines are still attempted.
        """

        with self._lock:
            results: list[StoreResult] = [self.clear_last_order()]
            for entry in entries:
                record = LastOrderRecord(
                    id=entry.id,
                    item_id=entry.item.id,
                    item_name=entry.item.item_name,
                    quantity=entry.quantity,
                )
                results.append(self._run("replace_last_order", lambda s, r=record: s.add(r)))
        return combine(*results)

    def load_last_order(self) -> StoreResult[list[LastOrderRecord]]:
        def _load(session: Session) -> list[LastOrderRecord]:
            query = select(LastOrderRecord).order_by(_INSERTION_ORDER)
            return list(session.execute(query).scalars().all())

        return self._run("load_last_order", _load)

    def close(self) -> None:
        """Release the SQLite handle."""

        with self._lock:
            self._engine.dispose()
        logger.info("Cart store closed")

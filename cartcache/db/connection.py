from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cartcache.db.models import Base
from cartcache.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def _validate_sqlite_url(database_url: str) -> str:
    """Normalize and validate the SQLite connection string.

    Only SQLite is supported: the store is a single local file owned by one
    process.
    """

    normalized_url = database_url.strip()
    if not normalized_url:
        raise RuntimeError("Cart store URL is empty. Provide a sqlite:/// URL.")

    if not normalized_url.startswith("sqlite"):
        raise RuntimeError(
            "The cart store must use SQLite. "
            "Expected a URL beginning with 'sqlite://' or 'sqlite:///'."
        )

    return normalized_url


def _is_in_memory(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create the SQLite engine and make sure both tables exist.

    Opening the file is the one failure that is fatal: any error while
    connecting or creating tables raises :class:`StoreUnavailableError`.
    """

    url = _validate_sqlite_url(database_url)

    engine_kwargs: dict[str, object] = {
        "future": True,
        "echo": echo,
        # The handle is shared by whoever owns the service; the store
        # serializes access itself.
        "connect_args": {"check_same_thread": False},
    }
    if _is_in_memory(url):
        # A single connection keeps the in-memory database alive between sessions.
        engine_kwargs["poolclass"] = StaticPool

    try:
        engine = sa_create_engine(url, **engine_kwargs)
        with engine.begin() as connection:
            Base.metadata.create_all(connection)
    except SQLAlchemyError as exc:
        logger.error(f"Error opening cart store at {url}: {exc}")
        raise StoreUnavailableError(url, str(exc)) from exc

    logger.info(f"Cart store ready at {url}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False, class_=Session)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""

    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

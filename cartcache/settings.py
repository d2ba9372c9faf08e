"""Centralized configuration management for the cart cache."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`cartcache.settings` sees the
# same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_DB_PATH = "./data/CacheManager.sqlite"
IN_MEMORY_DB_PATH = ":memory:"
SQLITE_PREFIX = "sqlite:///"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SLOW_QUERY_THRESHOLD = 0.1


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    The store is a single on-device SQLite file, so the only database knob is
    its path. Helpers translate that path into the SQLAlchemy URL the engine
    factory expects.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    db_path: str = Field(
        default=DEFAULT_DB_PATH,
        alias="CART_CACHE_DB_PATH",
        description=(
            "Filesystem location of the SQLite file backing the cart and last"
            " order tables. ``:memory:`` keeps everything in process."
        ),
    )
    sql_echo: bool = Field(
        default=False,
        alias="CART_CACHE_SQL_ECHO",
        description="Echo every SQL statement through the SQLAlchemy logger.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    slow_query_threshold: float = Field(
        default=DEFAULT_SLOW_QUERY_THRESHOLD,
        alias="SLOW_QUERY_THRESHOLD",
        description="Seconds after which a store statement is logged as slow.",
    )
    catalog_path: str | None = Field(
        default=None,
        alias="CATALOG_PATH",
        description="Optional JSON export of the remote item catalog.",
    )

    @property
    def is_in_memory(self) -> bool:
        """Return ``True`` when the store lives only for the process lifetime."""

        return self.db_path.strip() == IN_MEMORY_DB_PATH

    @property
    def resolved_database_url(self) -> str:
        """Return the SQLAlchemy URL for the configured SQLite file."""

        path = self.db_path.strip()
        if not path:
            raise RuntimeError(
                "CART_CACHE_DB_PATH is set but empty. Provide a file path or ':memory:'."
            )
        if path == IN_MEMORY_DB_PATH:
            return "sqlite://"
        return f"{SQLITE_PREFIX}{Path(path).expanduser()}"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if self.is_in_memory:
            warnings.append(
                "CART_CACHE_DB_PATH is ':memory:' - cart state will not survive "
                "a process restart"
            )

        if not self.catalog_path:
            warnings.append(
                "CATALOG_PATH is not set - restores need a catalog supplied by the caller"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_DB_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SLOW_QUERY_THRESHOLD",
    "IN_MEMORY_DB_PATH",
    "get_settings",
]

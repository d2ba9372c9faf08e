"""Unit tests covering the typed application settings implementation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cartcache.services.dependencies import configure_logging
from cartcache.settings import DEFAULT_DB_PATH, AppSettings


@pytest.fixture(autouse=True)
def _clear_cart_cache_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CART_CACHE_DB_PATH",
        "CART_CACHE_SQL_ECHO",
        "LOG_LEVEL",
        "SLOW_QUERY_THRESHOLD",
        "CATALOG_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_app_settings_defaults() -> None:
    """Without overrides the store lives in the default on-disk file."""

    configured = AppSettings()

    assert configured.db_path == DEFAULT_DB_PATH
    assert configured.resolved_database_url.startswith("sqlite:///")
    assert configured.resolved_database_url.endswith("CacheManager.sqlite")
    assert configured.sql_echo is False
    assert configured.slow_query_threshold == pytest.approx(0.1)


def test_app_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CART_CACHE_DB_PATH", "/var/lib/cart/store.sqlite")
    monkeypatch.setenv("CART_CACHE_SQL_ECHO", "true")
    monkeypatch.setenv("SLOW_QUERY_THRESHOLD", "0.5")

    configured = AppSettings()

    assert configured.resolved_database_url == "sqlite:////var/lib/cart/store.sqlite"
    assert configured.sql_echo is True
    assert configured.slow_query_threshold == pytest.approx(0.5)


def test_in_memory_path_maps_to_memory_url() -> None:
    configured = AppSettings(db_path=":memory:")

    assert configured.is_in_memory
    assert configured.resolved_database_url == "sqlite://"


def test_home_directory_is_expanded() -> None:
    configured = AppSettings(db_path="~/cart.sqlite")

    assert configured.resolved_database_url == f"sqlite:///{Path.home() / 'cart.sqlite'}"


def test_empty_db_path_is_rejected() -> None:
    configured = AppSettings(db_path="  ")

    with pytest.raises(RuntimeError):
        _ = configured.resolved_database_url


@pytest.mark.parametrize(
    ("level", "expected"),
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
)
def test_log_level_numeric(level: str, expected: int) -> None:
    assert AppSettings(log_level=level).log_level_numeric == expected


def test_optional_config_warnings_default() -> None:
    """An unset catalog path is reported; the default file store is not."""

    warnings = AppSettings().optional_config_warnings()

    assert any("CATALOG_PATH" in warning for warning in warnings)
    assert not any("CART_CACHE_DB_PATH" in warning for warning in warnings)


def test_optional_config_warnings_in_memory_and_clear(tmp_path: Path) -> None:
    in_memory = AppSettings(db_path=":memory:", catalog_path=str(tmp_path / "c.json"))
    assert [w for w in in_memory.optional_config_warnings() if "memory" in w]

    on_disk = AppSettings(
        db_path=str(tmp_path / "store.sqlite"), catalog_path=str(tmp_path / "c.json")
    )
    assert on_disk.optional_config_warnings() == []


def test_configure_logging_reports_warnings(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        configure_logging(AppSettings(db_path=":memory:"))

    assert "configuration warnings" in caplog.text
    assert "CATALOG_PATH is not set" in caplog.text

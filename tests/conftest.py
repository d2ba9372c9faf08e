"""Pytest configuration helpers for the cart cache project.

Pytest imports ``tests.conftest`` automatically; the import of ``tests`` places
the repository root on ``sys.path`` before any test module imports
``cartcache``.
"""

from __future__ import annotations

import pytest

from tests import _ensure_repo_on_path


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()

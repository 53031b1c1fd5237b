"""Shared fixtures: temporary SQLite stores and data contexts for both paths."""
from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kipkuliah.core.config import Settings  # noqa: E402
from kipkuliah.repositories.context import DataContext  # noqa: E402
from kipkuliah.repositories.fallback import Connected, Unavailable  # noqa: E402
from kipkuliah.repositories.sql_repository import SQLStore  # noqa: E402


def make_settings(**overrides) -> Settings:
    values = {
        "app_env": "test",
        "database_url": "",
        "cors_origins": ("*",),
        "log_level": "INFO",
        "host": "127.0.0.1",
        "port": 5000,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def sql_store(sqlite_url):
    """A connected, seeded SQLite store disposed after the test."""
    store = SQLStore.connect(sqlite_url)
    store.seed_if_empty()
    yield store
    store.close()


@pytest.fixture()
def sql_context(sql_store) -> DataContext:
    return DataContext(Connected(sql_store))


@pytest.fixture()
def memory_context() -> DataContext:
    return DataContext(Unavailable("no database in tests"))


@pytest.fixture(params=["sql", "memory"])
def context(request) -> DataContext:
    """Runs a test once against each store."""
    if request.param == "sql":
        return request.getfixturevalue("sql_context")
    return request.getfixturevalue("memory_context")


@pytest.fixture()
def clock():
    """Deterministic clock advancing one minute per call."""
    start = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)
    calls = {"n": 0}

    def _now() -> datetime:
        calls["n"] += 1
        return start + timedelta(minutes=calls["n"])

    return _now

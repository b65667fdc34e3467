"""
Pytest configuration for SQLHelper.

Provides fixtures for:
- Fake pool and driver collaborators patched into the façade
- Settings cache isolation
- Temporary SQLite database paths for integration tests
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Optional

import pytest

from sqlhelper.config import get_settings


class FakeCursor:
    """DB-API cursor stand-in that records executed SQL and serves canned rows."""

    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection
        self.executed: List[str] = []
        self.closed = False
        self.close_calls = 0
        self._rows = list(connection.rows)

    def execute(self, sql: str) -> None:
        if self.connection.fail_execute:
            raise RuntimeError("syntax error near 'FROM'")
        self.executed.append(sql)

    def fetchone(self) -> Optional[tuple]:
        return self._rows.pop(0) if self._rows else None

    def fetchmany(self, size: int) -> List[tuple]:
        batch, self._rows = self._rows[:size], self._rows[size:]
        return batch

    def fetchall(self) -> List[tuple]:
        rows, self._rows = self._rows, []
        return rows

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


class FakeConnection:
    """Connection stand-in; when borrowed from a FakePool, close() returns it."""

    def __init__(self, pool: Optional["FakePool"] = None, rows: Optional[List[tuple]] = None) -> None:
        self.pool = pool
        self.rows = rows if rows is not None else [(1, "alpha"), (2, "beta")]
        self.cursors: List[FakeCursor] = []
        self.fail_cursor = False
        self.fail_execute = False
        self.fail_close = False
        self.closed = False
        self.close_calls = 0

    def cursor(self) -> FakeCursor:
        if self.fail_cursor:
            raise RuntimeError("cannot prepare statement")
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise OSError("socket already closed")
        self.closed = True
        if self.pool is not None:
            self.pool.outstanding -= 1


class FakePool:
    """QueuePool stand-in counting outstanding borrows."""

    def __init__(self) -> None:
        self.configs: List[Any] = []
        self.borrowed: List[FakeConnection] = []
        self.outstanding = 0
        self.exhausted = False
        self.fail_execute = False
        self.fail_cursor = False
        self.disposed = False
        self.dispose_calls = 0

    def build(self, config: Any) -> "FakePool":
        self.configs.append(config)
        self.disposed = False
        return self

    def connect(self) -> FakeConnection:
        if self.exhausted:
            raise TimeoutError("QueuePool limit reached")
        conn = FakeConnection(pool=self)
        conn.fail_execute = self.fail_execute
        conn.fail_cursor = self.fail_cursor
        self.borrowed.append(conn)
        self.outstanding += 1
        return conn

    def dispose(self) -> None:
        self.dispose_calls += 1
        self.disposed = True


class FakeDriver:
    """Records driver registration and direct connection requests."""

    def __init__(self) -> None:
        self.registered: List[str] = []
        self.opened: List[tuple] = []
        self.connections: List[FakeConnection] = []
        self.register_error: Optional[Exception] = None

    def register(self, driver: str) -> None:
        self.registered.append(driver)
        if self.register_error is not None:
            raise self.register_error

    def open(self, url: str, properties: dict) -> FakeConnection:
        self.opened.append((url, dict(properties)))
        conn = FakeConnection()
        self.connections.append(conn)
        return conn


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees the environment as it is when the test runs."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_pool(monkeypatch) -> FakePool:
    """Replace the pool factory used by the façade with a FakePool."""
    pool = FakePool()
    monkeypatch.setattr("sqlhelper.helper.create_pool", pool.build)
    return pool


@pytest.fixture
def fake_driver(monkeypatch) -> FakeDriver:
    """Replace driver registration and direct connection opening."""
    driver = FakeDriver()
    monkeypatch.setattr("sqlhelper.helper.register_driver", driver.register)
    monkeypatch.setattr("sqlhelper.helper.open_connection", driver.open)
    return driver


@pytest.fixture
def sqlite_path(tmp_path: Path) -> str:
    """Path of a not-yet-created SQLite database file."""
    return str(tmp_path / "sqlhelper-test.db")


@pytest.fixture(scope="session")
def mysql_settings() -> dict:
    """
    MySQL connection options for integration tests.

    Can be overridden via environment variables in CI or local testing.
    """
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": os.getenv("DB_PORT", "3306"),
        "database": os.getenv("DB_NAME", "sqlhelper_test"),
        "username": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
    }

"""
Shared pytest fixtures and fakes for schemashift tests.

This module provides:
- Recording fakes for raw DB-API connections and data sources
- A minimal Configuration implementation
- SQLite settings for integration paths
- Patched retry sleeps so retry tests run instantly

Usage:
    Fixtures are auto-discovered by pytest. Fakes are importable:

    from conftest import FakeRawConnection, FakeDataSource
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

# Ensure schemashift package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schemashift.adapters.base import DataSource
from schemashift.adapters.types import DatabaseConfig, DatabaseType


# =============================================================================
# Raw connection fakes
# =============================================================================


class FakeCursor:
    """DB-API cursor answering queries from its connection's canned results."""

    def __init__(self, connection: FakeRawConnection):
        self._connection = connection
        self._rows: list[tuple[Any, ...]] = []
        self.description: list[tuple[Any, ...]] | None = None
        self.rowcount = -1
        self.closed = False

    def execute(self, sql: str, params: Any = None) -> None:
        self._connection.executed.append(sql)
        for fragment, error in self._connection.failures.items():
            if fragment in sql:
                raise error
        self._rows = []
        self.description = None
        self.rowcount = 0
        for fragment, rows in self._connection.results.items():
            if fragment in sql:
                self._rows = list(rows)
                self.description = [("value",)]
                self.rowcount = len(self._rows)
                break

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._rows.pop(0) if self._rows else None

    def fetchall(self) -> list[tuple[Any, ...]]:
        rows, self._rows = self._rows, []
        return rows

    def close(self) -> None:
        self.closed = True


class FakeRawConnection:
    """
    Recording stand-in for a DB-API connection.

    ``results`` maps SQL fragments to the rows a matching query returns;
    ``failures`` maps SQL fragments to the exception a matching statement
    raises.
    """

    def __init__(
        self,
        results: dict[str, list[tuple[Any, ...]]] | None = None,
        failures: dict[str, Exception] | None = None,
        autocommit: bool = False,
    ):
        self.results = results or {}
        self.failures = failures or {}
        self.autocommit = autocommit
        self.executed: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.close_calls += 1


def postgres_connection(version: str = "15.4", user: str = "migrator", **kwargs: Any) -> FakeRawConnection:
    """Fake raw connection answering the PostgreSQL metadata queries."""
    results = {
        "SHOW server_version": [(version,)],
        "SELECT current_user": [(user,)],
        "SELECT current_schema()": [("public",)],
    }
    results.update(kwargs.pop("results", {}))
    return FakeRawConnection(results=results, **kwargs)


class FakeDataSource(DataSource):
    """
    Data source handing out fake connections.

    The first ``fail_times`` calls raise ``error``; later calls return a
    fresh connection from ``factory``.
    """

    def __init__(
        self,
        factory: Any = postgres_connection,
        fail_times: int = 0,
        error: Exception | None = None,
    ):
        super().__init__(DatabaseConfig(db_type=DatabaseType.POSTGRESQL, database="fake"))
        self._factory = factory
        self._fail_times = fail_times
        self._error = error or OSError("connection refused")
        self.calls = 0
        self.opened: list[Any] = []

    def get_connection(self) -> Any:
        self.calls += 1
        if self.calls <= self._fail_times:
            raise self._error
        connection = self._factory()
        self.opened.append(connection)
        return connection


@dataclass
class FakeConfiguration:
    """Plain object satisfying the Configuration protocol."""

    data_source: Any = field(default_factory=FakeDataSource)
    init_sql: str | None = None
    connect_retries: int = 0


class FakeMetadata:
    """DatabaseMetadata returning fixed values, or raising ``error``."""

    def __init__(self, major: int = 15, minor: int = 4, user: str = "migrator", error: Exception | None = None):
        self._major = major
        self._minor = minor
        self._user = user
        self._error = error

    def get_database_major_version(self) -> int:
        if self._error:
            raise self._error
        return self._major

    def get_database_minor_version(self) -> int:
        if self._error:
            raise self._error
        return self._minor

    def get_user_name(self) -> str:
        if self._error:
            raise self._error
        return self._user


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Patch retry sleeps; returns the list of requested delays."""
    delays: list[float] = []
    monkeypatch.setattr("schemashift.retry.time.sleep", delays.append)
    return delays


@pytest.fixture
def fake_data_source() -> FakeDataSource:
    return FakeDataSource()


@pytest.fixture
def fake_configuration(fake_data_source: FakeDataSource) -> FakeConfiguration:
    return FakeConfiguration(data_source=fake_data_source)


@pytest.fixture
def sqlite_db_path(tmp_path: Path) -> Path:
    """Path for a throwaway SQLite database file."""
    return tmp_path / "schemashift.db"


@pytest.fixture(autouse=True)
def _clean_schemashift_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SCHEMASHIFT_* variables from the host out of settings tests."""
    for key in list(os.environ):
        if key.startswith("SCHEMASHIFT_"):
            monkeypatch.delenv(key)

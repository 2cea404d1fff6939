"""SQLite data source."""

from __future__ import annotations

import sqlite3
from typing import Any

from schemashift.errors import DatabaseConnectionError

from .base import DataSource
from .types import DatabaseConfig, DatabaseType


class SQLiteDataSource(DataSource):
    """
    SQLite data source.

    Uses the built-in sqlite3 module. Every ``:memory:`` connection is a
    separate database, which is why the SQLite dialect runs in
    single-connection mode.
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        timeout: float = 5.0,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.SQLITE,
            path=path,
            options=kwargs,
        )
        super().__init__(config)
        self._timeout = timeout

    def get_connection(self) -> sqlite3.Connection:
        """Open a new SQLite connection."""
        path = self._config.path or ":memory:"
        uri = path.startswith("file:")

        try:
            conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=uri,
            )
            conn.execute("PRAGMA foreign_keys = ON")
            return conn
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ) from e


__all__ = [
    "SQLiteDataSource",
]

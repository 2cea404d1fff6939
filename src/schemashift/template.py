"""Thin query helper over a raw DB-API connection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from schemashift.protocols import RawConnection


class SqlTemplate:
    """
    Runs SQL against one raw connection with cursor bookkeeping handled.

    Parameters are only passed to the driver when given, so statements
    containing a literal ``%`` survive drivers with ``format`` paramstyle.
    """

    def __init__(self, connection: RawConnection):
        self._connection = connection

    @property
    def connection(self) -> RawConnection:
        return self._connection

    def _run(self, cursor: Any, sql: str, params: Sequence[Any] | None) -> None:
        if params is None:
            cursor.execute(sql)
        else:
            cursor.execute(sql, params)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> int:
        """Execute a statement and return the driver's row count."""
        cursor = self._connection.cursor()
        try:
            self._run(cursor, sql, params)
            return cursor.rowcount
        finally:
            cursor.close()

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        cursor = self._connection.cursor()
        try:
            self._run(cursor, sql, params)
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row, strict=False)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def query_for_string(self, sql: str, params: Sequence[Any] | None = None) -> str | None:
        """First column of the first row as a string, or ``None``."""
        cursor = self._connection.cursor()
        try:
            self._run(cursor, sql, params)
            row = cursor.fetchone()
        finally:
            cursor.close()
        if row is None or row[0] is None:
            return None
        return str(row[0])


__all__ = ["SqlTemplate"]

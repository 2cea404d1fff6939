"""Lazy main and migration connections for one database.

Manifesto:
    Schema-history bookkeeping and migration scripts normally run on two
    separate connections so a failing migration cannot take the history
    table's transaction down with it.  Some engines (SQLite in-memory
    databases) only exist on a single connection; for those the migration
    connection IS the main connection.

Architecture::

    ConnectionLifecycleManager
        get_main_connection()       init SQL on the raw main connection,
                                    wrap, cache
        get_migration_connection()  single-connection: alias of main
                                    otherwise: open_connection() with the
                                    retry budget, init SQL, wrap, cache
        close()                     migration (if distinct), then main

Guardrails:
    ❌ DON'T: Close a shared connection twice or open a second raw
       connection in single-connection mode
    ✅ DO: Compare identities before closing the migration connection

    Not thread-safe: first access is check-then-create, so callers that
    fan out across threads must warm both connections up front.

Tags:
    schemashift, connection, lifecycle, lazy, single-connection
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from schemashift.connection import Connection, open_connection
from schemashift.logging import get_logger
from schemashift.protocols import Configuration, RawConnection, SqlScriptExecutor
from schemashift.resource import StringResource
from schemashift.sqlscript import DefaultSqlScriptExecutor, SqlScript
from schemashift.template import SqlTemplate

if TYPE_CHECKING:
    from schemashift.dialects.base import Dialect

logger = get_logger(__name__)

ScriptExecutorFactory = Callable[[RawConnection], SqlScriptExecutor]

INIT_SQL_FILENAME = "<init_sql>"


class ConnectionLifecycleManager:
    """Creates each connection wrapper at most once and closes them in order."""

    def __init__(
        self,
        dialect: Dialect,
        configuration: Configuration,
        raw_main: RawConnection,
        original_autocommit: Any = None,
        *,
        script_executor_factory: ScriptExecutorFactory | None = None,
        log: Any = None,
    ):
        self._dialect = dialect
        self._configuration = configuration
        self._raw_main = raw_main
        self._original_autocommit = original_autocommit
        self._log = log or logger
        self._script_executor_factory = script_executor_factory or self._default_executor
        self._main: Connection | None = None
        self._migration: Connection | None = None

    def _default_executor(self, raw: RawConnection) -> SqlScriptExecutor:
        return DefaultSqlScriptExecutor(SqlTemplate(raw), log=self._log)

    def _run_init_sql(self, raw: RawConnection) -> None:
        init_sql = self._configuration.init_sql
        if not init_sql:
            return
        script = SqlScript(
            StringResource(init_sql, filename=INIT_SQL_FILENAME),
            self._dialect.default_delimiter,
        )
        self._script_executor_factory(raw).execute(script)

    def get_main_connection(self) -> Connection:
        """Connection for schema-history reads and writes."""
        if self._main is None:
            self._run_init_sql(self._raw_main)
            self._main = self._dialect.wrap(self._raw_main, self._original_autocommit)
        return self._main

    def get_migration_connection(self) -> Connection:
        """Connection migration scripts run on.

        Raises:
            DatabaseConnectionError: A second connection could not be opened
                within ``connect_retries`` retries.
            ScriptExecutionError: Init SQL failed on the new connection.
        """
        if self._migration is None:
            if self._dialect.use_single_connection:
                self._migration = self.get_main_connection()
            else:
                raw = open_connection(
                    self._configuration.data_source,
                    self._configuration.connect_retries,
                    log=self._log,
                )
                try:
                    self._run_init_sql(raw)
                except Exception:
                    raw.close()
                    raise
                self._migration = self._dialect.wrap(raw, getattr(raw, "autocommit", None))
        return self._migration

    @property
    def has_main_connection(self) -> bool:
        return self._main is not None

    @property
    def has_migration_connection(self) -> bool:
        return self._migration is not None

    def close(self) -> None:
        """Close the migration connection (unless it is main), then main."""
        try:
            if self._migration is not None and self._migration is not self._main:
                self._migration.close()
        finally:
            if self._main is not None:
                self._main.close()

    def __repr__(self) -> str:
        return (
            f"ConnectionLifecycleManager({self._dialect.name}, "
            f"main={self.has_main_connection}, migration={self.has_migration_connection})"
        )


__all__ = [
    "ConnectionLifecycleManager",
    "ScriptExecutorFactory",
]

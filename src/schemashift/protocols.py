"""
Canonical protocol definitions for schemashift.

Every collaborator the database layer consumes but does not own is
described here as a structural protocol, so callers can hand in their
own implementations (or test doubles) without inheriting from anything.

Architecture:
    ::

        protocols.py
        ├── RawConnection       DB-API 2.0 connection (sqlite3, psycopg2, ...)
        ├── Configuration       data source + init SQL + connect retries
        ├── DatabaseMetadata    engine version and current user
        └── SqlScriptExecutor   runs the statements of a SqlScript

Guardrails:
    ❌ DON'T: Duplicate these protocols in other modules
    ✅ DO: Import from schemashift.protocols

Tags:
    protocol, connection, configuration, metadata, schemashift, contracts
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from schemashift.adapters.base import DataSource
    from schemashift.sqlscript import SqlScript


@runtime_checkable
class RawConnection(Protocol):
    """
    Minimal DB-API 2.0 connection interface.

    ``sqlite3.Connection``, ``psycopg2`` connections, ``oracledb``
    connections and friends all satisfy it.
    """

    def cursor(self) -> Any:
        """Return a new DB-API cursor."""
        ...

    def commit(self) -> None:
        """Commit the current transaction."""
        ...

    def rollback(self) -> None:
        """Roll back the current transaction."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...


@runtime_checkable
class Configuration(Protocol):
    """What the database layer needs from the migration configuration.

    ``MigrationSettings`` satisfies it; so does any object with these
    three attributes.
    """

    @property
    def data_source(self) -> DataSource:
        """Opens additional raw connections to the migration target."""
        ...

    @property
    def init_sql(self) -> str | None:
        """SQL run against every new connection, or ``None``."""
        ...

    @property
    def connect_retries(self) -> int:
        """Retries allowed after a failed connection attempt."""
        ...


@runtime_checkable
class DatabaseMetadata(Protocol):
    """Engine metadata read from a raw connection."""

    def get_database_major_version(self) -> int:
        ...

    def get_database_minor_version(self) -> int:
        ...

    def get_user_name(self) -> str:
        ...


@runtime_checkable
class SqlScriptExecutor(Protocol):
    """Executes every statement of a script against one connection."""

    def execute(self, script: SqlScript) -> None:
        ...


__all__ = [
    "RawConnection",
    "Configuration",
    "DatabaseMetadata",
    "SqlScriptExecutor",
]

"""Dialect lookup by engine name, and engine detection from a live connection."""

from __future__ import annotations

from schemashift.adapters.types import DatabaseType
from schemashift.errors import UnknownDialectError
from schemashift.protocols import RawConnection

from .base import Dialect
from .db2 import DB2Dialect
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

_ALIASES = {"postgres", "mariadb", "mssql"}

_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),  # alias
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),  # alias
    "oracle": OracleDialect(),
    "db2": DB2Dialect(),
    "sqlserver": SQLServerDialect(),
    "mssql": SQLServerDialect(),  # alias
}

# Driver module prefix -> engine
_DRIVER_MODULES: list[tuple[str, DatabaseType]] = [
    ("sqlite3", DatabaseType.SQLITE),
    ("psycopg2", DatabaseType.POSTGRESQL),
    ("psycopg", DatabaseType.POSTGRESQL),
    ("mysql", DatabaseType.MYSQL),
    ("pymysql", DatabaseType.MYSQL),
    ("MySQLdb", DatabaseType.MYSQL),
    ("oracledb", DatabaseType.ORACLE),
    ("cx_Oracle", DatabaseType.ORACLE),
    ("ibm_db_dbi", DatabaseType.DB2),
    ("pymssql", DatabaseType.SQLSERVER),
]


def get_dialect(db_type: str | DatabaseType) -> Dialect:
    """Get a dialect by database type name.

    Args:
        db_type: One of ``'sqlite'``, ``'postgresql'``, ``'mysql'``,
                 ``'oracle'``, ``'db2'``, ``'sqlserver'`` (or an alias),
                 or a :class:`DatabaseType`.

    Raises:
        UnknownDialectError: If ``db_type`` is not recognised.

    Example:
        >>> from schemashift.dialects import get_dialect
        >>> get_dialect("postgres").do_quote("schema_history")
        '"schema_history"'
    """
    key = db_type.value if isinstance(db_type, DatabaseType) else db_type.lower()
    if key not in _DIALECTS:
        raise UnknownDialectError(str(db_type), sorted(set(_DIALECTS) - _ALIASES))
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation.

    Useful for third-party database drivers or test doubles.
    """
    _DIALECTS[name.lower()] = dialect


def detect_database_type(connection: RawConnection) -> DatabaseType:
    """Infer the engine from the module that defined the connection's class.

    Raises:
        UnknownDialectError: The driver is not one schemashift knows.
    """
    module = type(connection).__module__ or ""
    for prefix, db_type in _DRIVER_MODULES:
        if module == prefix or module.startswith(prefix + "."):
            return db_type
    raise UnknownDialectError(module, [t.value for t in DatabaseType])


__all__ = [
    "get_dialect",
    "register_dialect",
    "detect_database_type",
]

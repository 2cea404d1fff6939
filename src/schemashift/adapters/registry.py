"""Data source registry and URL factory.

Manifesto:
    Consumers should never hard-code data source class names.  The registry
    maps engine names to data source classes and ``data_source_from_url()``
    builds a configured instance from the URL a user typed into a config
    file.

Supported URL forms
-------------------
==================================  ======================
``:memory:`` / ``memory`` / ``""``   SQLite RAM
``sqlite:///path/to/file.db``        SQLite file
``./data/my.db``                     SQLite file (bare path)
``postgresql://u:pw@host:5432/db``   PostgreSQL (``postgres``)
``mysql://u:pw@host:3306/db``        MySQL (``mariadb``)
``oracle://u:pw@host:1521/service``  Oracle
``db2://u:pw@host:50000/db``         DB2
``mssql://u:pw@host:1433/db``        SQL Server (``sqlserver``)
==================================  ======================

Driver suffixes (``postgresql+psycopg2://``) are accepted and ignored.
Query-string parameters are passed to the driver as keyword arguments.

Tags:
    schemashift, database, registry, factory, url-parsing
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, unquote, urlsplit

from schemashift.errors import ConfigError, UnknownDialectError

from .base import DataSource
from .db2 import DB2DataSource
from .mysql import MySQLDataSource
from .oracle import OracleDataSource
from .postgresql import PostgreSQLDataSource
from .sqlite import SQLiteDataSource
from .sqlserver import SQLServerDataSource
from .types import DatabaseType


class DataSourceRegistry:
    """
    Registry for data source factories.

    Pre-registered data sources:
    - ``sqlite``: :class:`SQLiteDataSource`
    - ``postgresql`` / ``postgres``: :class:`PostgreSQLDataSource`
    - ``mysql`` / ``mariadb``: :class:`MySQLDataSource`
    - ``oracle``: :class:`OracleDataSource`
    - ``db2``: :class:`DB2DataSource`
    - ``sqlserver`` / ``mssql``: :class:`SQLServerDataSource`
    """

    def __init__(self):
        self._factories: dict[str, type[DataSource]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default data sources."""
        self._factories["sqlite"] = SQLiteDataSource
        self._factories["postgresql"] = PostgreSQLDataSource
        self._factories["postgres"] = PostgreSQLDataSource  # Alias
        self._factories["mysql"] = MySQLDataSource
        self._factories["mariadb"] = MySQLDataSource  # Alias
        self._factories["oracle"] = OracleDataSource
        self._factories["db2"] = DB2DataSource
        self._factories["sqlserver"] = SQLServerDataSource
        self._factories["mssql"] = SQLServerDataSource  # Alias

    def register(self, name: str, data_source_class: type[DataSource]) -> None:
        """Register a data source factory."""
        self._factories[name.lower()] = data_source_class

    def create(self, name: str, **kwargs: Any) -> DataSource:
        """Create a data source by name."""
        name = name.lower()
        if name not in self._factories:
            raise UnknownDialectError(name, self.list_data_sources())
        return self._factories[name](**kwargs)

    def list_data_sources(self) -> list[str]:
        """List registered data source names."""
        return sorted(self._factories.keys())


# Global registry
data_source_registry = DataSourceRegistry()


def get_data_source(db_type: DatabaseType | str, **kwargs: Any) -> DataSource:
    """
    Get a data source by type.

    Usage:
        ds = get_data_source(DatabaseType.SQLITE, path="data.db")
        ds = get_data_source("postgresql", host="localhost", database="app")
    """
    name = db_type.value if isinstance(db_type, DatabaseType) else db_type
    return data_source_registry.create(name, **kwargs)


def data_source_from_url(
    url: str | None,
    *,
    user: str | None = None,
    password: str | None = None,
) -> DataSource:
    """Build a data source from a database URL.

    ``user`` / ``password`` override credentials embedded in the URL.

    Raises:
        ConfigError: The URL is malformed.
        UnknownDialectError: The scheme names no registered engine.
    """
    if url is None or url in ("", "memory", ":memory:"):
        return get_data_source(DatabaseType.SQLITE, path=":memory:")

    if "://" not in url:
        # Bare file path, treat as SQLite file
        return get_data_source(DatabaseType.SQLITE, path=url)

    scheme, rest = url.split("://", 1)
    scheme = scheme.split("+", 1)[0].lower()

    if scheme == "sqlite":
        path = rest[1:] if rest.startswith("/") else rest
        return get_data_source(DatabaseType.SQLITE, path=path or ":memory:")

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid database URL: {url!r}", cause=e) from e

    kwargs: dict[str, Any] = dict(parse_qsl(parts.query))
    if parts.hostname:
        kwargs["host"] = parts.hostname
    if port is not None:
        kwargs["port"] = port
    database = parts.path.lstrip("/")
    if database:
        kwargs["database"] = unquote(database)

    if parts.username is not None:
        kwargs["username"] = unquote(parts.username)
    if parts.password is not None:
        kwargs["password"] = unquote(parts.password)
    if user is not None:
        kwargs["username"] = user
    if password is not None:
        kwargs["password"] = password

    return get_data_source(scheme, **kwargs)


__all__ = [
    "DataSourceRegistry",
    "data_source_registry",
    "get_data_source",
    "data_source_from_url",
]

"""PostgreSQL data source.

Uses ``psycopg2``. Install the driver::

    pip install schemashift[postgresql]
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from .base import ServerDataSource
from .types import DatabaseType


class PostgreSQLDataSource(ServerDataSource):
    """PostgreSQL data source backed by psycopg2."""

    db_type_value = DatabaseType.POSTGRESQL
    default_port = 5432
    driver_module = "psycopg2"
    install_hint = "psycopg2-binary"
    label = "PostgreSQL"

    def _connect(self, driver: ModuleType) -> Any:
        config = self._config
        return driver.connect(
            host=config.host,
            port=config.port,
            dbname=config.database,
            user=config.username,
            password=config.password,
            connect_timeout=config.connect_timeout,
            **config.options,
        )


__all__ = [
    "PostgreSQLDataSource",
]

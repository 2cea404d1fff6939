"""Microsoft SQL Server data source.

Uses ``pymssql``::

    pip install schemashift[sqlserver]
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from .base import ServerDataSource
from .types import DatabaseType


class SQLServerDataSource(ServerDataSource):
    """SQL Server data source backed by pymssql."""

    db_type_value = DatabaseType.SQLSERVER
    default_port = 1433
    driver_module = "pymssql"
    install_hint = "pymssql"
    label = "SQL Server"

    def _connect(self, driver: ModuleType) -> Any:
        config = self._config
        return driver.connect(
            server=config.host,
            port=str(config.port),
            user=config.username,
            password=config.password,
            database=config.database,
            login_timeout=config.connect_timeout,
            **config.options,
        )


__all__ = [
    "SQLServerDataSource",
]

"""MySQL / MariaDB data source.

Uses ``mysql.connector`` from ``mysql-connector-python``::

    pip install schemashift[mysql]

Connections default to the ``utf8mb4`` character set; pass ``charset=`` to
override it.
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from .base import ServerDataSource
from .types import DatabaseType


class MySQLDataSource(ServerDataSource):
    db_type_value = DatabaseType.MYSQL
    default_port = 3306
    driver_module = "mysql.connector"
    install_hint = "mysql-connector-python"
    label = "MySQL"

    def _connect(self, driver: ModuleType) -> Any:
        config = self._config
        return driver.connect(
            host=config.host,
            port=config.port,
            # empty string would select a database named ""
            database=config.database or None,
            user=config.username,
            password=config.password,
            connection_timeout=config.connect_timeout,
            **{"charset": "utf8mb4", **config.options},
        )


__all__ = [
    "MySQLDataSource",
]

"""Oracle data source.

Uses ``oracledb`` (python-oracledb) in thin mode, so no Oracle client
libraries are needed::

    pip install schemashift[oracle]
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from .base import ServerDataSource
from .types import DatabaseType


class OracleDataSource(ServerDataSource):
    """Oracle data source. ``database`` is the service name."""

    db_type_value = DatabaseType.ORACLE
    default_port = 1521
    driver_module = "oracledb"
    install_hint = "oracledb"
    label = "Oracle"

    def _connect(self, driver: ModuleType) -> Any:
        config = self._config
        dsn = driver.makedsn(config.host, config.port, service_name=config.database)
        params = {"tcp_connect_timeout": config.connect_timeout, **config.options}
        return driver.connect(user=config.username, password=config.password, dsn=dsn, **params)


__all__ = [
    "OracleDataSource",
]

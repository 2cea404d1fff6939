"""IBM DB2 data source.

Uses ``ibm_db_dbi`` from the ``ibm-db`` package, the DB-API 2.0 layer over
the native ``ibm_db`` driver::

    pip install schemashift[db2]

Credentials travel inside the connection string built by
:meth:`~schemashift.adapters.types.DatabaseConfig.to_connection_string`.
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from .base import ServerDataSource
from .types import DatabaseType


class DB2DataSource(ServerDataSource):
    db_type_value = DatabaseType.DB2
    default_port = 50000
    driver_module = "ibm_db_dbi"
    install_hint = "ibm-db"
    label = "DB2"

    def _connect(self, driver: ModuleType) -> Any:
        conn_str = self._config.to_connection_string()
        return driver.connect(conn_str, "", "")


__all__ = [
    "DB2DataSource",
]

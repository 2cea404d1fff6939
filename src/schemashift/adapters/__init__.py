"""Data sources -- open raw DB-API connections for 6 database engines.

Manifesto:
    The database layer receives one raw connection from its caller and
    must be able to open a second, identical one for applying migrations.
    A data source captures how to do that for one engine.

    Each data source is **import-guarded**: the database driver is only
    required at ``get_connection()`` time, not at import time.  Install the
    corresponding extra::

        pip install schemashift[postgresql]   # psycopg2-binary
        pip install schemashift[mysql]        # mysql-connector-python
        pip install schemashift[oracle]       # oracledb
        pip install schemashift[db2]          # ibm-db
        pip install schemashift[sqlserver]    # pymssql

Architecture::

    DataSource (base.py)                 Abstract base with get_connection()
        |-- SQLiteDataSource             stdlib sqlite3 (always available)
        |-- ServerDataSource (base.py)   driver import and error mapping
              |-- PostgreSQLDataSource   psycopg2 (optional)
              |-- MySQLDataSource        mysql.connector (optional)
              |-- OracleDataSource       oracledb (optional)
              |-- DB2DataSource          ibm_db_dbi (optional)
              |-- SQLServerDataSource    pymssql (optional)

    DataSourceRegistry (registry.py)     engine name -> data source class
    DatabaseConfig (types.py)            connection parameters
    DatabaseType (types.py)              Enum of supported engines

Guardrails:
    ❌ Importing optional drivers at module scope
    ✅ Import-guarded at ``get_connection()`` time with clear ``ConfigError``
    ❌ ``ds = PostgreSQLDataSource(...)`` scattered through callers
    ✅ ``ds = data_source_from_url(settings.url)``

Tags:
    schemashift, database, data-source, multi-backend, import-guarded,
    registry-pattern
"""

from .base import DataSource, ServerDataSource
from .db2 import DB2DataSource
from .mysql import MySQLDataSource
from .oracle import OracleDataSource
from .postgresql import PostgreSQLDataSource
from .registry import (
    DataSourceRegistry,
    data_source_from_url,
    data_source_registry,
    get_data_source,
)
from .sqlite import SQLiteDataSource
from .sqlserver import SQLServerDataSource
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    # Base class
    "DataSource",
    "ServerDataSource",
    # Implementations
    "SQLiteDataSource",
    "PostgreSQLDataSource",
    "MySQLDataSource",
    "OracleDataSource",
    "DB2DataSource",
    "SQLServerDataSource",
    # Registry
    "DataSourceRegistry",
    "data_source_registry",
    "get_data_source",
    "data_source_from_url",
]

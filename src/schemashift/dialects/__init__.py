"""Dialects -- one capability set per engine family.

Architecture::

    Dialect (base.py)            quoting, booleans, DDL transactions,
        |                        schema model, version floor/ceiling,
        |                        create-table template, connection class
        |-- SQLiteDialect        single connection, "main" schema
        |-- PostgreSQLDialect    TRUE/FALSE, search_path
        |-- MySQLDialect         backticks, USE db
        |-- OracleDialect        ALTER SESSION SET CURRENT_SCHEMA
        |-- DB2Dialect           SET SCHEMA
        |-- SQLServerDialect     [brackets], GO batches

    get_dialect(name)            registry lookup (aliases: postgres,
                                 mariadb, mssql)
    detect_database_type(conn)   engine from the driver module

Tags:
    schemashift, dialect, registry-pattern
"""

from .base import Dialect, double_quote
from .db2 import DB2Connection, DB2Dialect
from .mysql import MySQLConnection, MySQLDialect
from .oracle import OracleConnection, OracleDialect
from .postgresql import PostgreSQLConnection, PostgreSQLDialect
from .registry import detect_database_type, get_dialect, register_dialect
from .sqlite import SQLiteConnection, SQLiteDialect
from .sqlserver import SQLServerConnection, SQLServerDialect

__all__ = [
    # Base
    "Dialect",
    "double_quote",
    # Implementations
    "SQLiteDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "OracleDialect",
    "DB2Dialect",
    "SQLServerDialect",
    # Connections
    "SQLiteConnection",
    "PostgreSQLConnection",
    "MySQLConnection",
    "OracleConnection",
    "DB2Connection",
    "SQLServerConnection",
    # Factory
    "get_dialect",
    "register_dialect",
    "detect_database_type",
]

"""
schemashift - database abstraction core for schema migrations.

Everything a migration engine needs to know about the database it is
migrating, behind one object:

- dialects: quoting, booleans, DDL transactions, schema model per engine
- versioning: fatal version floors, advisory ceilings
- lifecycle: lazy main and migration connections
- history: create/insert/select SQL for the schema-history table

Example::

    from schemashift import MigrationSettings, create_database

    with create_database(MigrationSettings(url=":memory:")) as db:
        print(db.dialect.name)  # sqlite
"""

__version__ = "0.1.0"

from schemashift.adapters import DataSource, data_source_from_url
from schemashift.connection import Connection
from schemashift.database import Database, create_database
from schemashift.dialects import Dialect, detect_database_type, get_dialect, register_dialect
from schemashift.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    EditionUpgradeRequiredError,
    MetadataUnavailableError,
    PlaceholderError,
    SchemashiftError,
    ScriptExecutionError,
    UnknownDialectError,
    UnsupportedDatabaseVersionError,
    VersionError,
)
from schemashift.history import SchemaHistorySQLBuilder
from schemashift.lifecycle import ConnectionLifecycleManager
from schemashift.logging import configure_logging, configure_logging_from_settings, get_logger
from schemashift.resource import FileResource, PackageResource, Resource, StringResource
from schemashift.settings import MigrationSettings
from schemashift.sqlscript import DefaultSqlScriptExecutor, Delimiter, SqlScript
from schemashift.table import Table
from schemashift.version import DatabaseVersion, Edition
from schemashift.versioning import VersionGate

__all__ = [
    "__version__",
    # Database
    "Database",
    "create_database",
    "ConnectionLifecycleManager",
    "Connection",
    "VersionGate",
    "SchemaHistorySQLBuilder",
    "Table",
    "DatabaseVersion",
    "Edition",
    # Dialects
    "Dialect",
    "get_dialect",
    "register_dialect",
    "detect_database_type",
    # Data sources and configuration
    "DataSource",
    "data_source_from_url",
    "MigrationSettings",
    # Scripts
    "Resource",
    "StringResource",
    "FileResource",
    "PackageResource",
    "SqlScript",
    "Delimiter",
    "DefaultSqlScriptExecutor",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    # Errors
    "SchemashiftError",
    "DatabaseError",
    "DatabaseConnectionError",
    "MetadataUnavailableError",
    "ScriptExecutionError",
    "VersionError",
    "UnsupportedDatabaseVersionError",
    "EditionUpgradeRequiredError",
    "ConfigError",
    "UnknownDialectError",
    "PlaceholderError",
]

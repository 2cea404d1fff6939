"""Database -- one migration target.

Manifesto:
    A migration run talks to exactly one database through exactly one
    object.  It knows which engine it is talking to, which version that
    engine runs (read once, never again), which connections are open, and
    how to spell the schema-history SQL for that engine.

Architecture::

    create_database(configuration)
        open_connection(data_source, connect_retries)
        Database(configuration, raw)
            dialect   = get_dialect(detect_database_type(raw))
            version   = determine_version(dialect.metadata(raw))
            gate      = VersionGate(dialect, version)
            lifecycle = ConnectionLifecycleManager(dialect, configuration, raw)
            history   = SchemaHistorySQLBuilder(dialect, metadata)
        database.ensure_supported()

Guardrails:
    ❌ DON'T: Re-read the version or keep references to connections
       after ``close()``
    ✅ DO: ``with create_database(settings) as db: ...``

Tags:
    schemashift, database, aggregate-root, dialect, version, connections
"""

from __future__ import annotations

from typing import Any

from schemashift.connection import Connection, open_connection
from schemashift.dialects import Dialect, detect_database_type, get_dialect
from schemashift.history import SchemaHistorySQLBuilder
from schemashift.lifecycle import ConnectionLifecycleManager, ScriptExecutorFactory
from schemashift.logging import get_logger
from schemashift.protocols import Configuration, DatabaseMetadata, RawConnection
from schemashift.resource import Resource
from schemashift.sqlscript import Delimiter, SqlScript
from schemashift.table import Table
from schemashift.version import DatabaseVersion
from schemashift.versioning import VersionGate, determine_version

logger = get_logger(__name__)


class Database:
    """
    A migration target reached through one raw connection.

    The version is determined during construction; a failure there
    raises and no instance is returned.  Connections are opened lazily
    and closed by :meth:`close` (or on leaving a ``with`` block).

    Example::

        settings = MigrationSettings(url=":memory:")
        with Database(settings, sqlite3.connect(":memory:")) as db:
            table = db.table("main", "schema_history")
            db.get_insert_statement(table)
            # INSERT INTO "main"."schema_history" ("installed_rank","version",...
    """

    def __init__(
        self,
        configuration: Configuration,
        connection: RawConnection,
        original_autocommit: Any = None,
        *,
        dialect: Dialect | str | None = None,
        log: Any = None,
        script_executor_factory: ScriptExecutorFactory | None = None,
    ):
        if dialect is None:
            dialect = get_dialect(detect_database_type(connection))
        elif isinstance(dialect, str):
            dialect = get_dialect(dialect)
        self._dialect = dialect
        self._configuration = configuration
        self._original_autocommit = original_autocommit
        self._log = (log or logger).bind(database=dialect.name)

        self._metadata = dialect.metadata(connection)
        self._gate = VersionGate(dialect, determine_version(self._metadata), log=self._log)
        self._lifecycle = ConnectionLifecycleManager(
            dialect,
            configuration,
            connection,
            original_autocommit,
            script_executor_factory=script_executor_factory,
            log=self._log,
        )
        self._history = SchemaHistorySQLBuilder(dialect, self._metadata)

        self._log.debug(
            "database.version_detected",
            version=str(self.version),
            display_version=self.version_display_name,
        )

    # -- Identity and version ---------------------------------------------

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def metadata(self) -> DatabaseMetadata:
        return self._metadata

    @property
    def original_autocommit(self) -> Any:
        return self._original_autocommit

    @property
    def version_gate(self) -> VersionGate:
        return self._gate

    @property
    def version(self) -> DatabaseVersion:
        return self._gate.get_version()

    def get_version(self) -> DatabaseVersion:
        return self._gate.get_version()

    @property
    def version_display_name(self) -> str:
        return self._gate.version_display_name

    def ensure_supported(self) -> None:
        """Apply the dialect's version floor and ceiling.

        Raises:
            UnsupportedDatabaseVersionError: No edition supports this version.
            EditionUpgradeRequiredError: A higher edition supports it.
        """
        self._dialect.ensure_supported(self._gate)

    # -- Capabilities -----------------------------------------------------

    @property
    def supports_ddl_transactions(self) -> bool:
        return self._dialect.supports_ddl_transactions

    @property
    def supports_changing_current_schema(self) -> bool:
        return self._dialect.supports_changing_current_schema

    @property
    def catalog_is_schema(self) -> bool:
        return self._dialect.catalog_is_schema

    @property
    def use_single_connection(self) -> bool:
        return self._dialect.use_single_connection

    @property
    def boolean_true(self) -> str:
        return self._dialect.boolean_true

    @property
    def boolean_false(self) -> str:
        return self._dialect.boolean_false

    # -- Connections ------------------------------------------------------

    def get_main_connection(self) -> Connection:
        return self._lifecycle.get_main_connection()

    def get_migration_connection(self) -> Connection:
        return self._lifecycle.get_migration_connection()

    def close(self) -> None:
        self._lifecycle.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # -- Schema history SQL -----------------------------------------------

    def quote(self, *identifiers: str) -> str:
        return self._history.quote(*identifiers)

    def table(self, schema: str, name: str) -> Table:
        """Table reference with its quoted name computed once."""
        return self._history.table(schema, name)

    def get_raw_create_script(self) -> Resource:
        return self._dialect.get_raw_create_script()

    def get_create_script(self, table: Table) -> SqlScript:
        return self._history.get_create_script(table)

    def get_insert_statement(self, table: Table) -> str:
        return self._history.get_insert_statement(table)

    def get_select_statement(self, table: Table, watermark: int) -> str:
        return self._history.get_select_statement(table, watermark)

    def get_default_delimiter(self) -> Delimiter:
        return self._history.get_default_delimiter()

    def get_current_user(self) -> str:
        return self._history.get_current_user()

    def __repr__(self) -> str:
        return f"Database({self._dialect.display_name} {self.version_display_name})"


def create_database(
    configuration: Configuration,
    *,
    dialect: Dialect | str | None = None,
    log: Any = None,
    script_executor_factory: ScriptExecutorFactory | None = None,
) -> Database:
    """Open the main connection and build a supported :class:`Database`.

    The main connection is closed again if anything after opening it fails.

    Raises:
        DatabaseConnectionError: The main connection could not be opened.
        MetadataUnavailableError: The engine did not report its version.
        UnsupportedDatabaseVersionError: The engine is too old.
        EditionUpgradeRequiredError: The engine needs a higher edition.
    """
    log = log or logger
    raw = open_connection(configuration.data_source, configuration.connect_retries, log=log)
    try:
        database = Database(
            configuration,
            raw,
            getattr(raw, "autocommit", None),
            dialect=dialect,
            log=log,
            script_executor_factory=script_executor_factory,
        )
        database.ensure_supported()
    except Exception:
        raw.close()
        raise
    return database


__all__ = [
    "Database",
    "create_database",
]

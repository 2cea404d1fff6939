"""SQL for the schema-history table.

The insert and select statements are part of the contract with the
migration engine: it binds nine positional parameters to the insert and
reads the ten select columns by position, so both column lists are fixed.

Example:
    >>> from schemashift.dialects import get_dialect
    >>> builder = SchemaHistorySQLBuilder(get_dialect("postgresql"))
    >>> builder.quote("public", "schema_history")
    '"public"."schema_history"'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.errors import MetadataUnavailableError
from schemashift.protocols import DatabaseMetadata
from schemashift.sqlscript import Delimiter, SqlScript
from schemashift.table import Table

if TYPE_CHECKING:
    from schemashift.dialects.base import Dialect

INSERT_COLUMNS = (
    "installed_rank",
    "version",
    "description",
    "type",
    "script",
    "checksum",
    "installed_by",
    "execution_time",
    "success",
)

SELECT_COLUMNS = (
    "installed_rank",
    "version",
    "description",
    "type",
    "script",
    "checksum",
    "installed_on",
    "installed_by",
    "execution_time",
    "success",
)


class SchemaHistorySQLBuilder:
    """Quoted identifiers and history-table SQL for one dialect."""

    def __init__(self, dialect: Dialect, metadata: DatabaseMetadata | None = None):
        self._dialect = dialect
        self._metadata = metadata

    def quote(self, *identifiers: str) -> str:
        """Quote each identifier and join with ``.``; no identifiers gives ``""``."""
        return ".".join(self._dialect.do_quote(identifier) for identifier in identifiers)

    def table(self, schema: str, name: str) -> Table:
        return Table(schema, name, self.quote(schema, name))

    def get_create_script(self, table: Table) -> SqlScript:
        placeholders = {
            "schema": table.schema,
            "table": table.name,
            "table_quoted": table.quoted,
        }
        return self._dialect.get_create_script(placeholders)

    def get_insert_statement(self, table: Table) -> str:
        columns = ",".join(self.quote(c) for c in INSERT_COLUMNS)
        return f"INSERT INTO {table} ({columns}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"

    def get_select_statement(self, table: Table, watermark: int) -> str:
        """Rows with ``installed_rank`` above ``watermark``, in rank order."""
        columns = ",".join(self.quote(c) for c in SELECT_COLUMNS)
        rank = self.quote("installed_rank")
        return (
            f"SELECT {columns} FROM {table} "
            f"WHERE {rank} > {int(watermark)} ORDER BY {rank}"
        )

    def get_default_delimiter(self) -> Delimiter:
        return self._dialect.default_delimiter

    def get_current_user(self, metadata: DatabaseMetadata | None = None) -> str:
        """User recorded as ``installed_by``.

        Raises:
            MetadataUnavailableError: The engine could not report the user.
        """
        metadata = metadata or self._metadata
        if metadata is None:
            raise MetadataUnavailableError("No metadata provider for the current user")
        try:
            return self._dialect.get_current_user(metadata)
        except Exception as e:
            raise MetadataUnavailableError(
                f"Unable to retrieve the current user for the connection: {e}",
                cause=e,
            ).with_context(database=self._dialect.name) from e

    def __repr__(self) -> str:
        return f"SchemaHistorySQLBuilder({self._dialect.name})"


__all__ = [
    "SchemaHistorySQLBuilder",
    "INSERT_COLUMNS",
    "SELECT_COLUMNS",
]

"""PostgreSQL dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection
from schemashift.version import Edition

from .base import Dialect, double_quote

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate


class PostgreSQLConnection(Connection):
    current_schema_sql = "SELECT current_schema()"

    def _change_current_schema_sql(self, schema: str) -> str:
        return f"SET search_path TO {self.dialect.do_quote(schema)}"


class PostgreSQLDialect(Dialect):
    """PostgreSQL: transactional DDL, ``TRUE``/``FALSE`` booleans.

    Versions older than five years are left to the Enterprise edition.
    """

    connection_class = PostgreSQLConnection
    user_sql = "SELECT current_user"

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def display_name(self) -> str:
        return "PostgreSQL"

    @property
    def supports_ddl_transactions(self) -> bool:
        return True

    @property
    def supports_changing_current_schema(self) -> bool:
        return True

    @property
    def catalog_is_schema(self) -> bool:
        return False

    @property
    def boolean_true(self) -> str:
        return "TRUE"

    @property
    def boolean_false(self) -> str:
        return "FALSE"

    def do_quote(self, identifier: str) -> str:
        return double_quote(identifier)

    @property
    def oldest_supported_version(self) -> str:
        return "9.0"

    @property
    def version_sql(self) -> str:
        return "SHOW server_version"

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.ensure_not_older_than_otherwise_recommend_edition_upgrade("11", Edition.ENTERPRISE)
        gate.recommend_upgrade_if_necessary_for_major_version("17")


__all__ = ["PostgreSQLDialect", "PostgreSQLConnection"]

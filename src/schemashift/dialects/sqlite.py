"""SQLite dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection

from .base import Dialect, double_quote

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate


class SQLiteConnection(Connection):
    """SQLite has no per-connection schema switching; ``main`` is always current."""

    def get_current_schema_name(self) -> str | None:
        return "main"


class SQLiteDialect(Dialect):
    """SQLite: ``"`` quoting, ``1``/``0`` booleans, single connection.

    Every ``:memory:`` connection is its own database, so history
    management and migrations must share the connection handed in.
    """

    connection_class = SQLiteConnection

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def display_name(self) -> str:
        return "SQLite"

    @property
    def supports_ddl_transactions(self) -> bool:
        return True

    @property
    def supports_changing_current_schema(self) -> bool:
        return False

    @property
    def catalog_is_schema(self) -> bool:
        return True

    @property
    def boolean_true(self) -> str:
        return "1"

    @property
    def boolean_false(self) -> str:
        return "0"

    @property
    def use_single_connection(self) -> bool:
        return True

    def do_quote(self, identifier: str) -> str:
        return double_quote(identifier)

    @property
    def oldest_supported_version(self) -> str:
        return "3.7"

    @property
    def version_sql(self) -> str:
        return "SELECT sqlite_version()"

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.recommend_upgrade_if_necessary("3.47")


__all__ = ["SQLiteDialect", "SQLiteConnection"]

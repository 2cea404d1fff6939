"""MySQL / MariaDB dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection
from schemashift.version import Edition

from .base import Dialect

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate


class MySQLConnection(Connection):
    current_schema_sql = "SELECT DATABASE()"

    def _change_current_schema_sql(self, schema: str) -> str:
        return f"USE {self.dialect.do_quote(schema)}"


class MySQLDialect(Dialect):
    """MySQL: backtick quoting, no transactional DDL, databases as schemas."""

    connection_class = MySQLConnection
    # USER() is 'name@host'; only the name is recorded in the history table
    user_sql = "SELECT SUBSTRING_INDEX(USER(), '@', 1)"

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def display_name(self) -> str:
        return "MySQL"

    @property
    def supports_ddl_transactions(self) -> bool:
        return False

    @property
    def supports_changing_current_schema(self) -> bool:
        return True

    @property
    def catalog_is_schema(self) -> bool:
        return True

    @property
    def boolean_true(self) -> str:
        return "1"

    @property
    def boolean_false(self) -> str:
        return "0"

    def do_quote(self, identifier: str) -> str:
        return "`" + identifier.replace("`", "``") + "`"

    @property
    def oldest_supported_version(self) -> str:
        return "5.1"

    @property
    def version_sql(self) -> str:
        return "SELECT VERSION()"

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.ensure_not_older_than_otherwise_recommend_edition_upgrade("5.7", Edition.ENTERPRISE)
        gate.recommend_upgrade_if_necessary("8.4")


__all__ = ["MySQLDialect", "MySQLConnection"]

"""IBM DB2 dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection
from schemashift.version import Edition

from .base import Dialect, double_quote

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate


class DB2Connection(Connection):
    current_schema_sql = "SELECT CURRENT_SCHEMA FROM SYSIBM.SYSDUMMY1"

    def _change_current_schema_sql(self, schema: str) -> str:
        return f"SET SCHEMA {self.dialect.do_quote(schema)}"


class DB2Dialect(Dialect):
    connection_class = DB2Connection
    user_sql = "SELECT CURRENT_USER FROM SYSIBM.SYSDUMMY1"

    @property
    def name(self) -> str:
        return "db2"

    @property
    def display_name(self) -> str:
        return "DB2"

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
        return "1"

    @property
    def boolean_false(self) -> str:
        return "0"

    def do_quote(self, identifier: str) -> str:
        return double_quote(identifier)

    @property
    def oldest_supported_version(self) -> str:
        return "9.7"

    @property
    def version_sql(self) -> str:
        return "SELECT service_level FROM TABLE (sysproc.env_get_inst_info())"

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.ensure_not_older_than_otherwise_recommend_edition_upgrade("11.1", Edition.ENTERPRISE)
        gate.recommend_upgrade_if_necessary("11.5")


__all__ = ["DB2Dialect", "DB2Connection"]

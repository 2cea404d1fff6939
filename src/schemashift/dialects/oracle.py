"""Oracle dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection
from schemashift.version import Edition

from .base import Dialect, double_quote

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate


class OracleConnection(Connection):
    current_schema_sql = "SELECT SYS_CONTEXT('USERENV', 'CURRENT_SCHEMA') FROM DUAL"

    def _change_current_schema_sql(self, schema: str) -> str:
        return f"ALTER SESSION SET CURRENT_SCHEMA={self.dialect.do_quote(schema)}"


class OracleDialect(Dialect):
    """Oracle: ``"`` quoting, ``1``/``0`` booleans, DDL auto-commits."""

    connection_class = OracleConnection
    user_sql = "SELECT USER FROM DUAL"

    @property
    def name(self) -> str:
        return "oracle"

    @property
    def display_name(self) -> str:
        return "Oracle"

    @property
    def supports_ddl_transactions(self) -> bool:
        return False

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
        return "10"

    @property
    def version_sql(self) -> str:
        return (
            "SELECT VERSION FROM PRODUCT_COMPONENT_VERSION "
            "WHERE PRODUCT LIKE 'Oracle%' AND ROWNUM = 1"
        )

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.ensure_not_older_than_otherwise_recommend_edition_upgrade("12.2", Edition.ENTERPRISE)
        gate.recommend_upgrade_if_necessary_for_major_version("23")


__all__ = ["OracleDialect", "OracleConnection"]

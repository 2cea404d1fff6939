"""Microsoft SQL Server dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemashift.connection import Connection
from schemashift.sqlscript import GO, Delimiter
from schemashift.version import DatabaseVersion, Edition

from .base import Dialect

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate

# Major version -> product year. 10.50 is 2008 R2.
_PRODUCT_YEARS = {
    8: "2000",
    9: "2005",
    10: "2008",
    11: "2012",
    12: "2014",
    13: "2016",
    14: "2017",
    15: "2019",
    16: "2022",
    17: "2025",
}


class SQLServerConnection(Connection):
    current_schema_sql = "SELECT SCHEMA_NAME()"


class SQLServerDialect(Dialect):
    """SQL Server: ``[bracket]`` quoting, ``GO`` batches, product-year versions."""

    connection_class = SQLServerConnection
    user_sql = "SELECT SUSER_SNAME()"

    @property
    def name(self) -> str:
        return "sqlserver"

    @property
    def display_name(self) -> str:
        return "SQL Server"

    @property
    def supports_ddl_transactions(self) -> bool:
        return True

    @property
    def supports_changing_current_schema(self) -> bool:
        return False

    @property
    def catalog_is_schema(self) -> bool:
        return False

    @property
    def boolean_true(self) -> str:
        return "1"

    @property
    def boolean_false(self) -> str:
        return "0"

    @property
    def default_delimiter(self) -> Delimiter:
        return GO

    def do_quote(self, identifier: str) -> str:
        return "[" + identifier.replace("]", "]]") + "]"

    @property
    def oldest_supported_version(self) -> str:
        return "10"

    @property
    def version_sql(self) -> str:
        return "SELECT CAST(SERVERPROPERTY('ProductVersion') AS VARCHAR(128))"

    def compute_version_display_name(self, version: DatabaseVersion) -> str:
        if version.major == 10 and version.minor >= 50:
            return "2008 R2"
        return _PRODUCT_YEARS.get(version.major, version.version)

    def ensure_supported(self, gate: VersionGate) -> None:
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)
        gate.ensure_not_older_than_otherwise_recommend_edition_upgrade("12", Edition.ENTERPRISE)
        gate.recommend_upgrade_if_necessary_for_major_version("17")


__all__ = ["SQLServerDialect", "SQLServerConnection"]

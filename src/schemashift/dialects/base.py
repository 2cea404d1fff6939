"""Dialect base class: the per-engine capability set.

Manifesto:
    Migration bookkeeping must run identically against every supported
    engine.  Everything that differs between engines (identifier quoting,
    boolean literals, whether DDL can be rolled back, whether a schema is
    really a catalog, which versions are supported, how to read the server
    version) is answered by exactly one object: the engine's ``Dialect``.

Architecture::

    Dialect (ABC)
        required:  name, display_name, supports_ddl_transactions,
                   supports_changing_current_schema, catalog_is_schema,
                   boolean_true, boolean_false, do_quote(),
                   oldest_supported_version, version_sql
        defaults:  use_single_connection (False), default_delimiter (;),
                   get_current_user(), compute_version_display_name(),
                   ensure_supported(), wrap(), metadata(),
                   get_raw_create_script(), get_create_script()

Guardrails:
    ❌ DON'T: ``if dialect.name == "mysql"`` in callers
    ✅ DO: Add a capability here and answer it in each dialect

Tags:
    dialect, capability-set, sql, quoting, version-gating, schemashift
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from schemashift.connection import Connection
from schemashift.metadata import QueryMetadata
from schemashift.protocols import DatabaseMetadata, RawConnection
from schemashift.resource import PackageResource, Resource
from schemashift.sqlscript import SEMICOLON, Delimiter, SqlScript
from schemashift.version import DatabaseVersion

if TYPE_CHECKING:
    from schemashift.versioning import VersionGate

CREATE_SCRIPT_NAME = "create_history_table.sql"


def double_quote(identifier: str) -> str:
    """ANSI quoting: wrap in ``"`` and double any embedded ``"``."""
    return '"' + identifier.replace('"', '""') + '"'


class Dialect(ABC):
    """Capability set of one engine family."""

    connection_class: type[Connection] = Connection
    user_sql: str | None = None

    # -- Identity ----------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key (e.g. ``'postgresql'``)."""
        ...

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable engine name (e.g. ``'PostgreSQL'``)."""
        ...

    # -- Capabilities ------------------------------------------------------

    @property
    @abstractmethod
    def supports_ddl_transactions(self) -> bool:
        """Whether DDL statements can be rolled back."""
        ...

    @property
    @abstractmethod
    def supports_changing_current_schema(self) -> bool:
        """Whether a connection can switch its current schema."""
        ...

    @property
    @abstractmethod
    def catalog_is_schema(self) -> bool:
        """Whether the engine uses a catalog to represent a schema."""
        ...

    @property
    @abstractmethod
    def boolean_true(self) -> str:
        """Literal for ``True`` in a boolean column."""
        ...

    @property
    @abstractmethod
    def boolean_false(self) -> str:
        """Literal for ``False`` in a boolean column."""
        ...

    @property
    def use_single_connection(self) -> bool:
        """Whether history management and migrations share one connection."""
        return False

    @property
    def default_delimiter(self) -> Delimiter:
        return SEMICOLON

    @abstractmethod
    def do_quote(self, identifier: str) -> str:
        """Quote a single identifier."""
        ...

    # -- Versions ----------------------------------------------------------

    @property
    @abstractmethod
    def oldest_supported_version(self) -> str:
        """Versions below this are rejected outright."""
        ...

    @property
    @abstractmethod
    def version_sql(self) -> str:
        """Query returning a banner that contains ``major.minor``."""
        ...

    def ensure_supported(self, gate: VersionGate) -> None:
        """Apply this engine's version floor (and ceiling) through ``gate``."""
        gate.ensure_database_is_recent_enough(self.oldest_supported_version)

    def compute_version_display_name(self, version: DatabaseVersion) -> str:
        return version.version

    # -- Connections and metadata -----------------------------------------

    def wrap(self, raw: RawConnection, original_autocommit: Any = None) -> Connection:
        """Wrap a raw connection in this engine's connection class."""
        return self.connection_class(self, raw, original_autocommit)

    def metadata(self, raw: RawConnection) -> DatabaseMetadata:
        return QueryMetadata(raw, self.version_sql, self.user_sql)

    def get_current_user(self, metadata: DatabaseMetadata) -> str:
        return metadata.get_user_name()

    # -- Schema history DDL -----------------------------------------------

    def get_raw_create_script(self) -> Resource:
        """Unexpanded create-table template shipped with the package."""
        return PackageResource("schemashift", f"resources/{self.name}/{CREATE_SCRIPT_NAME}")

    def get_create_script(self, placeholders: Mapping[str, str]) -> SqlScript:
        """Create-table script with ``${schema}``, ``${table}``, ``${table_quoted}`` expanded."""
        return SqlScript(self.get_raw_create_script(), self.default_delimiter, placeholders)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = [
    "Dialect",
    "double_quote",
]

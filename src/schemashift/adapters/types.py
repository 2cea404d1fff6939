"""Database types and data-source configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schemashift.errors import ConfigError


class DatabaseType(str, Enum):
    """Supported database engine families."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"
    DB2 = "db2"
    SQLSERVER = "sqlserver"


@dataclass
class DatabaseConfig:
    """
    Connection parameters for a data source.

    Different fields are used by different database types.
    """

    db_type: DatabaseType = DatabaseType.SQLITE

    # SQLite
    path: str | None = None

    # Server engines
    host: str = "localhost"
    port: int = 0
    database: str = ""
    username: str | None = None
    password: str | None = None

    connect_timeout: int = 10

    # Driver-specific keyword arguments
    options: dict[str, Any] = field(default_factory=dict)

    def to_connection_string(self) -> str:
        """Driver connection string for the database type."""
        match self.db_type:
            case DatabaseType.SQLITE:
                return self.path or ":memory:"
            case DatabaseType.DB2:
                return (
                    f"DATABASE={self.database};"
                    f"HOSTNAME={self.host};"
                    f"PORT={self.port};"
                    f"PROTOCOL=TCPIP;"
                    f"UID={self.username or ''};"
                    f"PWD={self.password or ''};"
                )
            case DatabaseType.ORACLE:
                return f"{self.host}:{self.port}/{self.database}"
            case DatabaseType.POSTGRESQL | DatabaseType.MYSQL | DatabaseType.SQLSERVER:
                user = self.username or ""
                return f"{self.db_type.value}://{user}@{self.host}:{self.port}/{self.database}"
            case _:
                raise ConfigError(f"Connection string not supported for: {self.db_type}")

    def to_display_string(self) -> str:
        """Connection target without the password, for logs and errors."""
        if self.db_type == DatabaseType.SQLITE:
            return self.path or ":memory:"
        user = f"{self.username}@" if self.username else ""
        return f"{self.db_type.value}://{user}{self.host}:{self.port}/{self.database}"


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]

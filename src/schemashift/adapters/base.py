"""Data source base class.

Manifesto:
    A migration run needs more than one raw connection to the same
    target: the main connection handed in by the caller, and (for most
    engines) a second one for applying scripts.  A data source is the
    recipe for opening those connections, so every adapter exposes a
    single ``get_connection()`` that opens a **fresh** DB-API connection
    on every call.

Features:
    - Abstract ``get_connection()``
    - Config-driven construction from ``DatabaseConfig``
    - Import-guarded drivers: missing packages raise ``ConfigError`` at
      connect time, never at import time

Tags:
    schemashift, database, abstract-base, adapter-pattern, data-source
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from types import ModuleType
from typing import Any, ClassVar

from schemashift.errors import ConfigError, DatabaseConnectionError
from schemashift.protocols import RawConnection

from .types import DatabaseConfig, DatabaseType


class DataSource(ABC):
    """
    Abstract base class for data sources.

    Subclasses own driver import, connection parameters and the mapping of
    driver errors onto :class:`~schemashift.errors.DatabaseConnectionError`.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config

    @property
    def config(self) -> DatabaseConfig:
        """Connection parameters."""
        return self._config

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @abstractmethod
    def get_connection(self) -> RawConnection:
        """Open a new raw DB-API connection.

        Raises:
            ConfigError: The driver package is not installed.
            DatabaseConnectionError: The driver refused the connection.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config.to_display_string()!r})"


class ServerDataSource(DataSource):
    """
    Data source for a networked engine reached through an optional driver.

    Subclasses set the class attributes and implement :meth:`_connect`.
    Driver exceptions raised inside ``_connect`` become
    :class:`~schemashift.errors.DatabaseConnectionError`.
    """

    db_type_value: ClassVar[DatabaseType]
    default_port: ClassVar[int]
    driver_module: ClassVar[str]
    install_hint: ClassVar[str]
    label: ClassVar[str]

    def __init__(
        self,
        host: str = "localhost",
        port: int | None = None,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        connect_timeout: int = 10,
        **kwargs: Any,
    ):
        super().__init__(
            DatabaseConfig(
                db_type=self.db_type_value,
                host=host,
                port=self.default_port if port is None else int(port),
                database=database,
                username=username,
                password=password,
                connect_timeout=int(connect_timeout),
                options=kwargs,
            )
        )

    def _load_driver(self) -> ModuleType:
        try:
            return importlib.import_module(self.driver_module)
        except ImportError:
            raise ConfigError(
                f"{self.driver_module} is required for {self.label}. "
                f"Install with: pip install {self.install_hint}"
            ) from None

    @abstractmethod
    def _connect(self, driver: ModuleType) -> RawConnection:
        """Call the driver's connect function with this config."""
        ...

    def get_connection(self) -> RawConnection:
        driver = self._load_driver()
        try:
            return self._connect(driver)
        except Exception as e:
            raise DatabaseConnectionError(
                f"Failed to connect to {self.label}: {e}",
                cause=e,
            ) from e


__all__ = [
    "DataSource",
    "ServerDataSource",
]

"""Migration settings read from the environment.

Manifesto:
    Where the target database lives and how hard to try reaching it are
    deployment concerns.  They come from ``SCHEMASHIFT_*`` environment
    variables (or a ``.env`` file), are validated once at startup, and are
    handed to :func:`~schemashift.database.create_database` as the
    configuration.

Features:
    - **MigrationSettings:** url, credentials, init SQL, connect retries,
      schema-history location, logging
    - **data_source:** DB-API data source built from ``url``
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from schemashift.settings import MigrationSettings
    >>> settings = MigrationSettings(url="sqlite:///app.db", connect_retries=3)
    >>> settings.data_source
    SQLiteDataSource('app.db')

Tags:
    settings, configuration, pydantic, environment, schemashift
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemashift.adapters.base import DataSource
from schemashift.adapters.registry import data_source_from_url


class MigrationSettings(BaseSettings):
    """Settings for one migration target.

    Satisfies :class:`~schemashift.protocols.Configuration`.

    Fields
    ──────
    url             : Database URL, ``:memory:`` or a SQLite file path
    user, password  : Credentials overriding those in ``url``
    init_sql        : SQL run on every new connection before use
    connect_retries : Retries after a failed connection attempt
    schema_name     : Schema holding the history table (engine default if unset)
    table           : Schema-history table name
    log_level       : Structlog log level
    log_json        : JSON logs (None = auto-detect from the terminal)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHEMASHIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    url: str = ":memory:"
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    init_sql: str | None = None
    connect_retries: int = Field(default=0, ge=0)

    # ── Schema history ───────────────────────────────────────────
    schema_name: str | None = None
    table: str = "schema_history"

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def data_source(self) -> DataSource:
        return data_source_from_url(self.url, user=self.user, password=self.password)

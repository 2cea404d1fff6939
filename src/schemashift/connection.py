"""Connection wrappers and retrying connection opening.

A :class:`Connection` wraps one raw DB-API connection on behalf of a
:class:`~schemashift.database.Database`.  Dialects subclass it to teach
it how to read and switch the current schema; everything else (query
helper, state restoration, idempotent close) is shared.

``open_connection()`` is the single place raw connections are obtained
from a data source, with the configured retry budget applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schemashift.errors import (
    ConfigError,
    DatabaseConnectionError,
    MetadataUnavailableError,
    SchemashiftError,
)
from schemashift.logging import get_logger
from schemashift.protocols import RawConnection
from schemashift.retry import ExponentialBackoff, RetryContext
from schemashift.template import SqlTemplate

if TYPE_CHECKING:
    from schemashift.adapters.base import DataSource
    from schemashift.dialects.base import Dialect

logger = get_logger(__name__)

# Wait 1s after the first failure, doubling up to two minutes.
CONNECT_RETRY_BASE_DELAY = 1.0
CONNECT_RETRY_MAX_DELAY = 120.0


class Connection:
    """
    Dialect-aware wrapper around a raw connection.

    Subclasses set ``current_schema_sql`` and override
    :meth:`_change_current_schema_sql` when the engine can switch schemas
    per connection.
    """

    current_schema_sql: str | None = None

    def __init__(
        self,
        dialect: Dialect,
        raw: RawConnection,
        original_autocommit: Any = None,
    ):
        self._dialect = dialect
        self._raw = raw
        self._template = SqlTemplate(raw)
        self._original_autocommit = original_autocommit
        self._original_schema: str | None = None
        self._closed = False

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def raw(self) -> RawConnection:
        return self._raw

    @property
    def template(self) -> SqlTemplate:
        return self._template

    @property
    def closed(self) -> bool:
        return self._closed

    # -- Schema ------------------------------------------------------------

    def get_current_schema_name(self) -> str | None:
        """Schema unqualified names resolve against, if the engine has one."""
        if self.current_schema_sql is None:
            return None
        try:
            return self._template.query_for_string(self.current_schema_sql)
        except Exception as e:
            raise MetadataUnavailableError(
                "Unable to retrieve the current schema for the connection",
                cause=e,
            ).with_context(database=self._dialect.name) from e

    def change_current_schema_to(self, schema: str) -> None:
        """Switch this connection's current schema.

        The schema in effect before the first switch is restored by
        :meth:`restore_original_state`.
        """
        if not self._dialect.supports_changing_current_schema:
            raise ConfigError(
                f"{self._dialect.display_name} does not support changing the current schema"
            )
        if self._original_schema is None:
            self._original_schema = self.get_current_schema_name()
        self._template.execute(self._change_current_schema_sql(schema))

    def _change_current_schema_sql(self, schema: str) -> str:
        raise NotImplementedError

    # -- Lifecycle ---------------------------------------------------------

    def restore_original_state(self) -> None:
        """Undo schema switches and autocommit changes made through this wrapper."""
        if self._original_schema is not None:
            self._template.execute(self._change_current_schema_sql(self._original_schema))
            self._original_schema = None
        if self._original_autocommit is not None and hasattr(self._raw, "autocommit"):
            if self._raw.autocommit != self._original_autocommit:
                self._raw.autocommit = self._original_autocommit

    def close(self) -> None:
        """Restore original state and close the raw connection. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            self.restore_original_state()
        finally:
            self._raw.close()
            logger.debug("connection.closed", database=self._dialect.name)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"{type(self).__name__}({self._dialect.name}, {state})"


def open_connection(
    data_source: DataSource,
    connect_retries: int,
    log: Any = None,
) -> RawConnection:
    """Open a raw connection, retrying up to ``connect_retries`` times.

    Raises:
        ConfigError: The data source is misconfigured (never retried).
        DatabaseConnectionError: Every attempt failed.
    """
    log = log or logger

    def _connect() -> RawConnection:
        try:
            return data_source.get_connection()
        except SchemashiftError:
            raise
        except Exception as e:
            raise DatabaseConnectionError(f"Failed to connect: {e}", cause=e) from e

    def _on_retry(attempt: int, error: Exception, delay: float) -> None:
        log.warning(
            "connection.retry",
            attempt=attempt,
            connect_retries=connect_retries,
            delay_seconds=delay,
            error=str(error),
        )

    strategy = ExponentialBackoff(
        max_retries=max(connect_retries, 0),
        base_delay=CONNECT_RETRY_BASE_DELAY,
        max_delay=CONNECT_RETRY_MAX_DELAY,
        retryable_errors=(DatabaseConnectionError,),
    )
    ctx = RetryContext(strategy, on_retry=_on_retry)
    try:
        raw = ctx.run(_connect)
    except DatabaseConnectionError as e:
        raise DatabaseConnectionError(
            f"Unable to obtain connection from {data_source!r} "
            f"after {ctx.attempt} attempt(s): {e.message}",
            retryable=False,
            cause=e,
        ) from e
    log.debug("connection.opened", data_source=repr(data_source), attempts=ctx.attempt)
    return raw


__all__ = [
    "Connection",
    "open_connection",
]

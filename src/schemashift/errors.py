"""
Structured error types for schemashift.

Every failure raised by the database abstraction layer carries enough
metadata for the migration engine to decide what to tell the operator:
which engine, which version, which table, and the underlying driver
exception that caused it.

Manifesto:
    - **Typed Error Hierarchy:** Version floors, metadata failures and
      script failures are different problems with different remedies
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry metadata for logging and alerting
    - **Error Chaining:** Preserve driver exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                     SchemashiftError                             │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  DatabaseError            VersionError         ConfigError      │
        │  (DATABASE)               (VERSION)            (CONFIG)         │
        │       │                        │                    │           │
        │  MetadataUnavailable      UnsupportedVersion   UnknownDialect   │
        │  ScriptExecution          EditionUpgrade       Placeholder      │
        │                                                                  │
        │  DatabaseConnectionError (DATABASE, retryable)                   │
        └─────────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Raise a floor violation as a warning
    ✅ DO: Raise UnsupportedDatabaseVersionError / EditionUpgradeRequiredError

    ❌ DON'T: Swallow the driver exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, schemashift,
    database, version-gating
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    - **DATABASE:** connection, metadata and statement failures
    - **VERSION:** engine version outside what this build supports
    - **CONFIG:** unknown engine, missing driver, bad template
    - **INTERNAL / UNKNOWN:** everything else
    """

    DATABASE = "DATABASE"
    VERSION = "VERSION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only fields that are set are emitted by :meth:`to_dict`, so the
    context can be splatted straight into a structured log event.

    Attributes:
        database: Engine identifier (``"postgresql"``, ``"sqlite"``, ...)
        version: Display string of the engine version involved
        table: Fully qualified schema-history table
        statement: SQL statement being executed when the error occurred
        line: 1-based line number of ``statement`` within its script
        metadata: Additional key-value pairs
    """

    database: str | None = None
    version: str | None = None
    table: str | None = None
    statement: str | None = None
    line: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["database", "version", "table", "statement", "line"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SchemashiftError(Exception):
    """
    Base exception for all schemashift errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    call sites only pass what is specific to the failure.

    Examples:
        >>> error = SchemashiftError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(database="postgresql").context.database
        'postgresql'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SchemashiftError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DatabaseError("Failed").with_context(database="oracle")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(SchemashiftError):
    """Database query or metadata error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class DatabaseConnectionError(DatabaseError):
    """A raw connection could not be opened within the retry budget."""

    default_retryable = True


class MetadataUnavailableError(DatabaseError):
    """Engine metadata (version, current user) could not be retrieved."""


class ScriptExecutionError(DatabaseError):
    """A statement of a SQL script failed to execute."""

    def __init__(
        self,
        message: str,
        *,
        statement: str | None = None,
        line: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.statement = statement
        self.line = line
        if statement is not None:
            self.context.statement = statement
        if line is not None:
            self.context.line = line


# =============================================================================
# VERSION ERRORS
# =============================================================================


class VersionError(SchemashiftError):
    """Engine version is outside the supported range. Never retryable."""

    default_category = ErrorCategory.VERSION
    default_retryable = False


class UnsupportedDatabaseVersionError(VersionError):
    """Engine is older than the oldest version any edition supports."""

    def __init__(self, database: str, actual: str, required: str):
        self.database = database
        self.actual = actual
        self.required = required
        super().__init__(
            f"Unsupported database version: {database} {actual} is outdated "
            f"and no longer supported by schemashift. "
            f"schemashift currently supports {database} {required} and newer.",
            context=ErrorContext(database=database, version=actual),
        )


class EditionUpgradeRequiredError(VersionError):
    """Engine is too old for this edition but a higher edition supports it."""

    def __init__(self, edition: Any, database: str, actual: str):
        self.edition = edition
        self.database = database
        self.actual = actual
        super().__init__(
            f"schemashift {edition} or newer is required for {database} {actual}. "
            f"Upgrade the edition or the database.",
            context=ErrorContext(database=database, version=actual),
        )


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(SchemashiftError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class UnknownDialectError(ConfigError):
    """No dialect or data source is registered for the requested engine."""

    def __init__(self, name: str, supported: list[str]):
        self.name = name
        self.supported = supported
        super().__init__(f"Unknown database type '{name}'. Supported: {supported}")


class PlaceholderError(ConfigError):
    """A ``${...}`` placeholder in a SQL template has no value."""

    def __init__(self, placeholder: str, resource: str | None = None):
        self.placeholder = placeholder
        self.resource = resource
        where = f" in {resource}" if resource else ""
        super().__init__(
            f"No value provided for placeholder: ${{{placeholder}}}{where}"
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SchemashiftError",
    # Database
    "DatabaseError",
    "DatabaseConnectionError",
    "MetadataUnavailableError",
    "ScriptExecutionError",
    # Version
    "VersionError",
    "UnsupportedDatabaseVersionError",
    "EditionUpgradeRequiredError",
    # Config
    "ConfigError",
    "UnknownDialectError",
    "PlaceholderError",
]

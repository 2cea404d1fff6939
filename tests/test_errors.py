"""Tests for schemashift.errors module."""

import pytest

from schemashift.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    EditionUpgradeRequiredError,
    ErrorCategory,
    ErrorContext,
    MetadataUnavailableError,
    PlaceholderError,
    SchemashiftError,
    ScriptExecutionError,
    UnknownDialectError,
    UnsupportedDatabaseVersionError,
    VersionError,
)
from schemashift.version import Edition


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.database is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_includes_set_fields(self):
        """to_dict includes only non-None fields."""
        ctx = ErrorContext(database="postgresql", line=3, metadata={"key": "value"})
        d = ctx.to_dict()
        assert d == {"database": "postgresql", "line": 3, "key": "value"}
        assert "version" not in d


class TestSchemashiftError:
    """Test the base error."""

    def test_defaults(self):
        error = SchemashiftError("boom")
        assert str(error) == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = OSError("disk")
        error = SchemashiftError("boom", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "disk"

    def test_with_context_is_fluent(self):
        error = DatabaseError("failed").with_context(database="oracle", attempt=2)
        assert error.context.database == "oracle"
        assert error.context.metadata == {"attempt": 2}

    def test_to_dict(self):
        d = DatabaseError("failed").with_context(table='"public"."h"').to_dict()
        assert d["error_type"] == "DatabaseError"
        assert d["category"] == "DATABASE"
        assert d["retryable"] is False
        assert d["context"] == {"table": '"public"."h"'}


class TestDatabaseErrors:
    def test_connection_error_is_retryable(self):
        assert DatabaseConnectionError("refused").retryable is True

    def test_connection_error_retryable_override(self):
        assert DatabaseConnectionError("gave up", retryable=False).retryable is False

    def test_metadata_unavailable_is_database_error(self):
        error = MetadataUnavailableError("no version")
        assert isinstance(error, DatabaseError)
        assert error.category == ErrorCategory.DATABASE

    def test_script_execution_error_carries_statement(self):
        error = ScriptExecutionError("failed", statement="SELECT 1", line=7)
        assert error.statement == "SELECT 1"
        assert error.line == 7
        assert error.context.to_dict() == {"statement": "SELECT 1", "line": 7}


class TestVersionErrors:
    def test_unsupported_version_message(self):
        error = UnsupportedDatabaseVersionError("PostgreSQL", "8.4", "9.0")
        assert isinstance(error, VersionError)
        assert error.category == ErrorCategory.VERSION
        assert "PostgreSQL 8.4 is outdated" in error.message
        assert "PostgreSQL 9.0 and newer" in error.message
        assert (error.database, error.actual, error.required) == ("PostgreSQL", "8.4", "9.0")

    def test_edition_upgrade_message(self):
        error = EditionUpgradeRequiredError(Edition.ENTERPRISE, "MySQL", "5.6")
        assert error.edition is Edition.ENTERPRISE
        assert "Enterprise Edition or newer is required for MySQL 5.6" in error.message
        assert error.retryable is False


class TestConfigErrors:
    def test_unknown_dialect(self):
        error = UnknownDialectError("informix", ["postgresql", "sqlite"])
        assert isinstance(error, ConfigError)
        assert "informix" in str(error)
        assert error.supported == ["postgresql", "sqlite"]

    @pytest.mark.parametrize(
        "resource, expected",
        [
            (None, "No value provided for placeholder: ${schema}"),
            ("create.sql", "No value provided for placeholder: ${schema} in create.sql"),
        ],
    )
    def test_placeholder_message(self, resource, expected):
        assert str(PlaceholderError("schema", resource)) == expected

"""Tests for schemashift.settings."""

import pytest
from pydantic import ValidationError

from schemashift.adapters import PostgreSQLDataSource, SQLiteDataSource
from schemashift.protocols import Configuration
from schemashift.settings import MigrationSettings


class TestMigrationSettings:
    def test_defaults(self):
        settings = MigrationSettings()
        assert settings.url == ":memory:"
        assert settings.connect_retries == 0
        assert settings.init_sql is None
        assert settings.table == "schema_history"
        assert settings.log_level == "INFO"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SCHEMASHIFT_URL", "postgresql://db.local/app")
        monkeypatch.setenv("SCHEMASHIFT_CONNECT_RETRIES", "5")
        monkeypatch.setenv("SCHEMASHIFT_LOG_LEVEL", "debug")
        settings = MigrationSettings()
        assert settings.url == "postgresql://db.local/app"
        assert settings.connect_retries == 5
        assert settings.log_level == "DEBUG"

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            MigrationSettings(connect_retries=-1)

    def test_unknown_keys_ignored(self, monkeypatch):
        monkeypatch.setenv("SCHEMASHIFT_NOT_A_FIELD", "x")
        MigrationSettings()

    def test_password_not_in_repr(self):
        assert "hunter2" not in repr(MigrationSettings(password="hunter2"))


class TestDataSource:
    def test_sqlite_default(self):
        assert isinstance(MigrationSettings().data_source, SQLiteDataSource)

    def test_credentials_applied(self):
        settings = MigrationSettings(url="postgresql://db.local/app", user="bob", password="pw")
        ds = settings.data_source
        assert isinstance(ds, PostgreSQLDataSource)
        assert (ds.config.username, ds.config.password) == ("bob", "pw")

    def test_satisfies_configuration_protocol(self):
        assert isinstance(MigrationSettings(), Configuration)

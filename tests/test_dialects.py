"""Tests for schemashift.dialects."""

import sqlite3

import pytest

from conftest import FakeConfiguration, FakeRawConnection, postgres_connection
from schemashift.adapters.types import DatabaseType
from schemashift.connection import Connection
from schemashift.database import Database
from schemashift.dialects import (
    DB2Dialect,
    Dialect,
    MySQLDialect,
    OracleDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    SQLServerDialect,
    detect_database_type,
    get_dialect,
    register_dialect,
)
from schemashift.dialects.registry import _DIALECTS
from schemashift.errors import ConfigError, MetadataUnavailableError, UnknownDialectError
from schemashift.metadata import parse_major_minor
from schemashift.sqlscript import GO, SEMICOLON
from schemashift.version import DatabaseVersion

ALL_DIALECTS = [
    SQLiteDialect(),
    PostgreSQLDialect(),
    MySQLDialect(),
    OracleDialect(),
    DB2Dialect(),
    SQLServerDialect(),
]


class TestRegistry:
    @pytest.mark.parametrize(
        "name, cls",
        [
            ("sqlite", SQLiteDialect),
            ("postgresql", PostgreSQLDialect),
            ("postgres", PostgreSQLDialect),
            ("POSTGRESQL", PostgreSQLDialect),
            ("mysql", MySQLDialect),
            ("mariadb", MySQLDialect),
            ("oracle", OracleDialect),
            ("db2", DB2Dialect),
            ("sqlserver", SQLServerDialect),
            ("mssql", SQLServerDialect),
        ],
    )
    def test_get_dialect(self, name, cls):
        assert isinstance(get_dialect(name), cls)

    def test_get_dialect_by_type(self):
        assert isinstance(get_dialect(DatabaseType.DB2), DB2Dialect)

    def test_unknown(self):
        with pytest.raises(UnknownDialectError) as exc_info:
            get_dialect("informix")
        assert "postgres" not in exc_info.value.supported
        assert "postgresql" in exc_info.value.supported

    def test_register_custom(self):
        custom = PostgreSQLDialect()
        try:
            register_dialect("CockroachDB", custom)
            assert get_dialect("cockroachdb") is custom
        finally:
            _DIALECTS.pop("cockroachdb", None)

    def test_detect_sqlite(self):
        conn = sqlite3.connect(":memory:")
        try:
            assert detect_database_type(conn) is DatabaseType.SQLITE
        finally:
            conn.close()

    def test_detect_unknown_driver(self):
        with pytest.raises(UnknownDialectError):
            detect_database_type(FakeRawConnection())


class TestCapabilities:
    @pytest.mark.parametrize("dialect", ALL_DIALECTS, ids=lambda d: d.name)
    def test_every_dialect_is_complete(self, dialect):
        assert isinstance(dialect, Dialect)
        assert dialect.display_name
        assert DatabaseVersion.parse(dialect.oldest_supported_version)
        assert dialect.boolean_true != dialect.boolean_false
        assert dialect.get_raw_create_script().read().strip()

    @pytest.mark.parametrize(
        "dialect, expected",
        [
            (SQLiteDialect(), '"a""b"'),
            (PostgreSQLDialect(), '"a""b"'),
            (OracleDialect(), '"a""b"'),
            (DB2Dialect(), '"a""b"'),
        ],
        ids=lambda v: getattr(v, "name", v),
    )
    def test_double_quote_escaping(self, dialect, expected):
        assert dialect.do_quote('a"b') == expected

    def test_mysql_backticks(self):
        assert MySQLDialect().do_quote("a`b") == "`a``b`"

    def test_sqlserver_brackets(self):
        assert SQLServerDialect().do_quote("a]b") == "[a]]b]"

    def test_booleans(self):
        assert (PostgreSQLDialect().boolean_true, PostgreSQLDialect().boolean_false) == ("TRUE", "FALSE")
        assert (MySQLDialect().boolean_true, MySQLDialect().boolean_false) == ("1", "0")

    def test_single_connection_only_sqlite(self):
        assert [d.name for d in ALL_DIALECTS if d.use_single_connection] == ["sqlite"]

    def test_ddl_transactions(self):
        assert PostgreSQLDialect().supports_ddl_transactions
        assert not MySQLDialect().supports_ddl_transactions
        assert not OracleDialect().supports_ddl_transactions

    def test_catalog_is_schema(self):
        assert MySQLDialect().catalog_is_schema
        assert not PostgreSQLDialect().catalog_is_schema

    def test_delimiters(self):
        assert PostgreSQLDialect().default_delimiter == SEMICOLON
        assert SQLServerDialect().default_delimiter == GO


class TestVersionDisplay:
    @pytest.mark.parametrize(
        "version, expected",
        [("10.0", "2008"), ("10.50", "2008 R2"), ("14.0", "2017"), ("16.0", "2022"), ("99.1", "99.1")],
    )
    def test_sqlserver_product_years(self, version, expected):
        assert SQLServerDialect().compute_version_display_name(DatabaseVersion.parse(version)) == expected

    def test_default_is_dotted_text(self):
        assert PostgreSQLDialect().compute_version_display_name(DatabaseVersion.parse("15.4")) == "15.4"


class TestCreateScript:
    def test_placeholders_expanded(self):
        script = PostgreSQLDialect().get_create_script(
            {"schema": "public", "table": "schema_history", "table_quoted": '"public"."schema_history"'}
        )
        sql = [s.sql for s in script.statements]
        assert sql[0].startswith('CREATE TABLE "public"."schema_history" (')
        assert any('"schema_history_pk"' in s for s in sql)
        assert not any("${" in s for s in sql)

    def test_sqlserver_uses_go_batches(self):
        script = SQLServerDialect().get_create_script(
            {"schema": "dbo", "table": "h", "table_quoted": "[dbo].[h]"}
        )
        assert len(script) == 2
        assert script.statements[0].sql.startswith("CREATE TABLE [dbo].[h] (")


class TestConnections:
    def test_wrap_uses_dialect_connection_class(self):
        conn = PostgreSQLDialect().wrap(postgres_connection())
        assert isinstance(conn, Connection)
        assert type(conn).__name__ == "PostgreSQLConnection"

    def test_current_schema(self):
        conn = PostgreSQLDialect().wrap(postgres_connection())
        assert conn.get_current_schema_name() == "public"

    def test_current_schema_failure_wrapped(self):
        raw = FakeRawConnection(failures={"current_schema": RuntimeError("gone")})
        with pytest.raises(MetadataUnavailableError):
            PostgreSQLDialect().wrap(raw).get_current_schema_name()

    def test_change_and_restore_schema(self):
        raw = postgres_connection()
        conn = PostgreSQLDialect().wrap(raw)
        conn.change_current_schema_to("app")
        conn.close()
        assert 'SET search_path TO "app"' in raw.executed
        assert raw.executed[-1] == 'SET search_path TO "public"'
        assert raw.close_calls == 1

    def test_mysql_use(self):
        raw = FakeRawConnection(results={"DATABASE()": [("shop",)]})
        MySQLDialect().wrap(raw).change_current_schema_to("audit")
        assert raw.executed[-1] == "USE `audit`"

    def test_change_schema_unsupported(self):
        with pytest.raises(ConfigError):
            SQLServerDialect().wrap(FakeRawConnection()).change_current_schema_to("dbo")

    def test_close_is_idempotent_and_restores_autocommit(self):
        raw = FakeRawConnection(autocommit=True)
        conn = PostgreSQLDialect().wrap(raw, original_autocommit=False)
        conn.close()
        conn.close()
        assert raw.close_calls == 1
        assert raw.autocommit is False
        assert conn.closed

    def test_sqlite_current_schema_is_main(self):
        raw = sqlite3.connect(":memory:")
        conn = SQLiteDialect().wrap(raw)
        assert conn.get_current_schema_name() == "main"
        conn.close()


class TestMetadata:
    def test_postgres_metadata(self):
        metadata = PostgreSQLDialect().metadata(postgres_connection("12.17 (Debian 12.17-1)", "alice"))
        assert metadata.get_database_major_version() == 12
        assert metadata.get_database_minor_version() == 17
        assert PostgreSQLDialect().get_current_user(metadata) == "alice"

    def test_sqlite_metadata(self):
        raw = sqlite3.connect(":memory:")
        try:
            metadata = SQLiteDialect().metadata(raw)
            assert metadata.get_database_major_version() == 3
            assert metadata.get_user_name() == ""
        finally:
            raw.close()


class TestVersionBanners:
    @pytest.mark.parametrize(
        "name, banner, expected",
        [
            ("sqlite", "3.45.1", "3.45"),
            ("postgresql", "16.2 (Ubuntu 16.2-1.pgdg22.04+1)", "16.2"),
            ("mysql", "8.0.36-0ubuntu0.22.04.1", "8.0"),
            ("mariadb", "10.11.2-MariaDB", "10.11"),
            ("oracle", "19.0.0.0.0", "19.0"),
            ("db2", "DB2 v11.5.7.0", "11.5"),
            ("sqlserver", "16.0.1000.6", "16.0"),
        ],
    )
    def test_version_query_answer_becomes_database_version(self, name, banner, expected):
        dialect = get_dialect(name)
        raw = FakeRawConnection(results={dialect.version_sql: [(banner,)]})
        db = Database(FakeConfiguration(), raw, dialect=dialect)
        assert db.get_version() == DatabaseVersion.parse(expected)
        assert dialect.version_sql in raw.executed

    def test_db2_banner_passes_version_floor(self):
        raw = FakeRawConnection(results={"env_get_inst_info": [("DB2 v11.5.7.0",)]})
        db = Database(FakeConfiguration(), raw, dialect="db2")
        db.ensure_supported()
        assert str(db.get_version()) == "11.5"

    @pytest.mark.parametrize(
        "banner, expected",
        [
            ("DB2 v9.7.0.0", (9, 7)),
            ("PostgreSQL 15.4 on x86_64-pc-linux-gnu", (15, 4)),
            ("17devel", (17, 0)),
        ],
    )
    def test_parse_major_minor(self, banner, expected):
        assert parse_major_minor(banner) == expected

    def test_banner_without_digits(self):
        with pytest.raises(ValueError):
            parse_major_minor("unknown")

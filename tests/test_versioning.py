"""Tests for version gating."""

import pytest
from structlog.testing import capture_logs

from conftest import FakeMetadata
from schemashift.dialects import PostgreSQLDialect, SQLServerDialect
from schemashift.errors import (
    EditionUpgradeRequiredError,
    MetadataUnavailableError,
    UnsupportedDatabaseVersionError,
)
from schemashift.version import DatabaseVersion, Edition
from schemashift.versioning import VersionGate, determine_version


def gate(version: str, dialect=None) -> VersionGate:
    return VersionGate(dialect or PostgreSQLDialect(), DatabaseVersion.parse(version))


class TestDetermineVersion:
    def test_major_minor_joined(self):
        assert determine_version(FakeMetadata(11, 3)) == DatabaseVersion.parse("11.3")

    def test_metadata_failure_is_wrapped(self):
        cause = RuntimeError("socket closed")
        with pytest.raises(MetadataUnavailableError) as exc_info:
            determine_version(FakeMetadata(error=cause))
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause


class TestGetVersion:
    def test_same_value_every_call(self):
        g = gate("9.6")
        first = g.get_version()
        assert g.get_version() is first
        assert g.get_version() is first


class TestFloors:
    def test_recent_enough_fails_below_floor(self):
        with pytest.raises(UnsupportedDatabaseVersionError) as exc_info:
            gate("8.9").ensure_database_is_recent_enough("9.0")
        error = exc_info.value
        assert (error.database, error.actual, error.required) == ("PostgreSQL", "8.9", "9.0")

    @pytest.mark.parametrize("actual", ["9.0", "9.1", "16.2"])
    def test_recent_enough_passes_at_or_above_floor(self, actual):
        gate(actual).ensure_database_is_recent_enough("9.0")

    def test_edition_floor_fails_below(self):
        with pytest.raises(EditionUpgradeRequiredError) as exc_info:
            gate("10.5").ensure_not_older_than_otherwise_recommend_edition_upgrade(
                "11", Edition.ENTERPRISE
            )
        error = exc_info.value
        assert error.edition is Edition.ENTERPRISE
        assert error.database == "PostgreSQL"
        assert error.actual == "10.5"

    def test_edition_floor_passes(self):
        gate("11.0").ensure_not_older_than_otherwise_recommend_edition_upgrade(
            "11", Edition.ENTERPRISE
        )

    def test_floor_uses_display_names(self):
        with pytest.raises(UnsupportedDatabaseVersionError) as exc_info:
            gate("9.0", SQLServerDialect()).ensure_database_is_recent_enough("10")
        assert exc_info.value.actual == "2005"
        assert exc_info.value.required == "2008"


class TestCeilings:
    def test_major_ceiling_warns_without_raising(self):
        with capture_logs() as logs:
            gate("11.3").recommend_upgrade_if_necessary_for_major_version("10.0")
        assert [e["event"] for e in logs] == ["database.upgrade_recommended"]
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["newest_supported"] == "10.0"

    def test_major_ceiling_ignores_minor(self):
        with capture_logs() as logs:
            gate("10.9").recommend_upgrade_if_necessary_for_major_version("10.0")
        assert logs == []

    def test_ceiling_compares_minor(self):
        with capture_logs() as logs:
            gate("8.5").recommend_upgrade_if_necessary("8.4")
            gate("8.4").recommend_upgrade_if_necessary("8.4")
        assert len(logs) == 1
        assert logs[0]["version"] == "8.5"

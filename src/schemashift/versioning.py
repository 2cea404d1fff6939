"""Version gating: fatal floors, advisory ceilings.

Manifesto:
    An engine that is too old breaks migrations in ways that are hard to
    diagnose, so floors fail fast with an error telling the operator what
    to upgrade.  An engine that is newer than anything tested usually
    works, so ceilings only log a recommendation.

Architecture::

    determine_version(metadata)  ->  DatabaseVersion("major.minor")
                                       |
    VersionGate(dialect, version)      v
        ensure_database_is_recent_enough(floor)          -> UnsupportedDatabaseVersionError
        ensure_not_older_than_otherwise_recommend_edition_upgrade(floor, edition)
                                                         -> EditionUpgradeRequiredError
        recommend_upgrade_if_necessary(ceiling)          -> warning log
        recommend_upgrade_if_necessary_for_major_version(ceiling)
                                                         -> warning log (major only)

Guardrails:
    ❌ DON'T: Raise on ceiling violations
    ✅ DO: Log ``database.upgrade_recommended`` and carry on

Tags:
    schemashift, version, gate, floor, ceiling
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schemashift.errors import (
    EditionUpgradeRequiredError,
    MetadataUnavailableError,
    UnsupportedDatabaseVersionError,
)
from schemashift.logging import get_logger
from schemashift.protocols import DatabaseMetadata
from schemashift.version import DatabaseVersion, Edition

if TYPE_CHECKING:
    from schemashift.dialects.base import Dialect

logger = get_logger(__name__)


def determine_version(metadata: DatabaseMetadata) -> DatabaseVersion:
    """Read ``major.minor`` from the engine.

    Raises:
        MetadataUnavailableError: The engine could not report its version.
    """
    try:
        major = metadata.get_database_major_version()
        minor = metadata.get_database_minor_version()
    except Exception as e:
        raise MetadataUnavailableError(
            f"Unable to determine database version: {e}", cause=e
        ) from e
    return DatabaseVersion.of(major, minor)


class VersionGate:
    """Compares one engine's version against floors and ceilings.

    The version is fixed at construction and never re-read.
    """

    def __init__(self, dialect: Dialect, version: DatabaseVersion, log: Any = None):
        self._dialect = dialect
        self._version = version
        self._log = log or logger

    def get_version(self) -> DatabaseVersion:
        return self._version

    def _display(self, version: str | DatabaseVersion) -> str:
        return self._dialect.compute_version_display_name(DatabaseVersion.parse(version))

    @property
    def version_display_name(self) -> str:
        return self._display(self._version)

    def ensure_database_is_recent_enough(self, floor: str) -> None:
        """Raise if the engine is older than any edition supports."""
        if not self._version.is_at_least(floor):
            raise UnsupportedDatabaseVersionError(
                self._dialect.display_name,
                self.version_display_name,
                self._display(floor),
            )

    def ensure_not_older_than_otherwise_recommend_edition_upgrade(
        self, floor: str, required_edition: Edition
    ) -> None:
        """Raise if the engine is older than this edition supports."""
        if not self._version.is_at_least(floor):
            raise EditionUpgradeRequiredError(
                required_edition,
                self._dialect.display_name,
                self.version_display_name,
            )

    def recommend_upgrade_if_necessary(self, ceiling: str) -> None:
        if self._version.is_newer_than(ceiling):
            self._recommend_upgrade(ceiling)

    def recommend_upgrade_if_necessary_for_major_version(self, ceiling: str) -> None:
        if self._version.is_major_newer_than(ceiling):
            self._recommend_upgrade(ceiling)

    def _recommend_upgrade(self, ceiling: str) -> None:
        database = self._dialect.display_name
        self._log.warning(
            "database.upgrade_recommended",
            database=database,
            version=self.version_display_name,
            newest_supported=ceiling,
            message=(
                f"schemashift upgrade recommended: {database} {self.version_display_name} "
                f"is newer than this version of schemashift and support has not been "
                f"tested. The latest supported version of {database} is {ceiling}."
            ),
        )

    def __repr__(self) -> str:
        return f"VersionGate({self._dialect.name}, {self._version})"


__all__ = [
    "VersionGate",
    "determine_version",
]

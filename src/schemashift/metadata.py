"""Engine metadata read through SQL.

DB-API has no equivalent of a driver metadata object, so each dialect
names the queries that report the server version and the session user
and :class:`QueryMetadata` turns their answers into numbers.
"""

from __future__ import annotations

import re

from schemashift.protocols import RawConnection
from schemashift.template import SqlTemplate

_DOTTED_VERSION_RE = re.compile(r"(\d+)\.(\d+)")
_BARE_VERSION_RE = re.compile(r"\d+")


def parse_major_minor(text: str) -> tuple[int, int]:
    """Pull ``(major, minor)`` out of a server version banner.

    The first dotted number wins, so engine names with digits in them
    are skipped. A banner with no dot yields ``(major, 0)``.

    >>> parse_major_minor("PostgreSQL 15.4 on x86_64-pc-linux-gnu")
    (15, 4)
    >>> parse_major_minor("DB2 v11.5.7.0")
    (11, 5)
    >>> parse_major_minor("16beta1")
    (16, 0)
    """
    match = _DOTTED_VERSION_RE.search(text)
    if match is not None:
        return int(match.group(1)), int(match.group(2))
    bare = _BARE_VERSION_RE.search(text)
    if bare is None:
        raise ValueError(f"No version number found in {text!r}")
    return int(bare.group(0)), 0


class QueryMetadata:
    """:class:`~schemashift.protocols.DatabaseMetadata` backed by two queries.

    The version banner is fetched once and reused for major and minor.
    ``user_sql`` may be ``None`` for engines without users (SQLite).
    """

    def __init__(self, connection: RawConnection, version_sql: str, user_sql: str | None):
        self._template = SqlTemplate(connection)
        self._version_sql = version_sql
        self._user_sql = user_sql
        self._version: tuple[int, int] | None = None

    def _major_minor(self) -> tuple[int, int]:
        if self._version is None:
            banner = self._template.query_for_string(self._version_sql)
            if banner is None:
                raise ValueError(f"Version query returned no rows: {self._version_sql}")
            self._version = parse_major_minor(banner)
        return self._version

    def get_database_major_version(self) -> int:
        return self._major_minor()[0]

    def get_database_minor_version(self) -> int:
        return self._major_minor()[1]

    def get_user_name(self) -> str:
        if self._user_sql is None:
            return ""
        return self._template.query_for_string(self._user_sql) or ""


__all__ = [
    "QueryMetadata",
    "parse_major_minor",
]

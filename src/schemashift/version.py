"""Engine versions and product editions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")


@total_ordering
@dataclass(frozen=True, eq=False)
class DatabaseVersion:
    """Immutable dotted engine version such as ``9.4`` or ``3.7.2``.

    Comparison is part-by-part on the integers with missing trailing
    parts treated as zero, so ``9`` == ``9.0`` and ``9.10`` > ``9.9``.

    Example:
        >>> v = DatabaseVersion.parse("11.3")
        >>> v.major, v.minor
        (11, 3)
        >>> v.is_at_least("9.0"), v.is_major_newer_than("10.0")
        (True, True)
    """

    parts: tuple[int, ...]
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, version: str | DatabaseVersion) -> DatabaseVersion:
        """Parse dotted text. Already-parsed versions are returned as is."""
        if isinstance(version, DatabaseVersion):
            return version
        text = str(version).strip()
        if not _VERSION_RE.match(text):
            raise ValueError(f"Invalid database version: {version!r}")
        return cls(tuple(int(p) for p in text.split(".")), text)

    @classmethod
    def of(cls, major: int, minor: int) -> DatabaseVersion:
        """Version from engine-reported major and minor numbers."""
        return cls.parse(f"{major}.{minor}")

    @property
    def major(self) -> int:
        return self.parts[0]

    @property
    def minor(self) -> int:
        return self.parts[1] if len(self.parts) > 1 else 0

    @property
    def version(self) -> str:
        return self.text or ".".join(str(p) for p in self.parts)

    def _key(self) -> tuple[int, ...]:
        parts = list(self.parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatabaseVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: DatabaseVersion) -> bool:
        if not isinstance(other, DatabaseVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def is_at_least(self, other: str | DatabaseVersion) -> bool:
        return self >= DatabaseVersion.parse(other)

    def is_newer_than(self, other: str | DatabaseVersion) -> bool:
        return self > DatabaseVersion.parse(other)

    def is_major_newer_than(self, other: str | DatabaseVersion) -> bool:
        return self.major > DatabaseVersion.parse(other).major

    def __str__(self) -> str:
        return self.version


class Edition(str, Enum):
    """Product editions, in ascending order of database coverage."""

    COMMUNITY = "Community Edition"
    PRO = "Pro Edition"
    ENTERPRISE = "Enterprise Edition"

    def __str__(self) -> str:
        return self.value


__all__ = [
    "DatabaseVersion",
    "Edition",
]

"""Table references used to parameterize generated SQL."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Table:
    """A schema-qualified table.

    ``quoted`` is computed once by the owning database's quoting rule and
    interpolated verbatim into SQL, so identifiers are never quoted twice.
    Build instances through :meth:`Database.table` rather than by hand.
    """

    schema: str
    name: str
    quoted: str

    def __str__(self) -> str:
        return self.quoted


__all__ = ["Table"]

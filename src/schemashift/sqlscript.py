"""SQL scripts: statement splitting, placeholders, and execution.

A :class:`SqlScript` turns a :class:`~schemashift.resource.Resource` into
an ordered list of statements, splitting on the dialect's delimiter.
:class:`DefaultSqlScriptExecutor` runs those statements against one raw
connection and is what the connection lifecycle uses for init SQL.

Splitting rules:
    - ``--`` comment lines and blank lines between statements are dropped
    - a statement ends at a line ending with the delimiter, unless the
      delimiter sits inside an open single-quoted literal
    - delimiters flagged ``alone_on_line`` (``GO``) only match a line
      consisting of nothing but the delimiter
    - a trailing unterminated statement is kept

Placeholders use ``${name}`` syntax; every placeholder must have a value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from schemashift.errors import PlaceholderError, ScriptExecutionError
from schemashift.logging import get_logger
from schemashift.resource import Resource
from schemashift.template import SqlTemplate

logger = get_logger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z0-9_.:-]+)\}")


@dataclass(frozen=True)
class Delimiter:
    """Statement terminator."""

    delimiter: str
    alone_on_line: bool = False

    def terminates(self, line: str) -> bool:
        stripped = line.strip()
        if self.alone_on_line:
            return stripped.upper() == self.delimiter.upper()
        return stripped.endswith(self.delimiter)

    def __str__(self) -> str:
        return self.delimiter


SEMICOLON = Delimiter(";")
GO = Delimiter("GO", alone_on_line=True)


@dataclass(frozen=True)
class SqlStatement:
    """One statement and the 1-based line it starts on."""

    line: int
    sql: str


def replace_placeholders(
    text: str,
    placeholders: Mapping[str, str],
    resource_name: str | None = None,
) -> str:
    """Expand ``${name}`` placeholders.

    Raises:
        PlaceholderError: A placeholder has no value in ``placeholders``.
    """

    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in placeholders:
            raise PlaceholderError(key, resource_name)
        return placeholders[key]

    return _PLACEHOLDER_RE.sub(_sub, text)


def _strip_line_comment(line: str, in_literal: bool) -> str:
    """Drop a trailing ``--`` comment that starts outside a string literal."""
    for index, char in enumerate(line):
        if char == "'":
            in_literal = not in_literal
        elif not in_literal and line.startswith("--", index):
            return line[:index]
    return line


def split_statements(sql: str, delimiter: Delimiter = SEMICOLON) -> list[SqlStatement]:
    """Split a SQL script into individual statements."""
    statements: list[SqlStatement] = []
    current: list[str] = []
    start_line = 0
    quotes = 0

    def _flush(strip_delimiter: bool) -> None:
        text = "\n".join(current).strip()
        if strip_delimiter:
            text = text[: len(text) - len(delimiter.delimiter)].rstrip()
        if text:
            statements.append(SqlStatement(start_line, text))

    for number, line in enumerate(sql.splitlines(), start=1):
        stripped = line.strip()
        if not current and (not stripped or stripped.startswith("--")):
            continue
        if delimiter.alone_on_line and delimiter.terminates(line) and quotes % 2 == 0:
            _flush(strip_delimiter=False)
            current = []
            quotes = 0
            continue
        if not current:
            start_line = number
        code = _strip_line_comment(line, in_literal=quotes % 2 == 1)
        current.append(line)
        quotes += code.count("'")
        if not delimiter.alone_on_line and quotes % 2 == 0 and delimiter.terminates(code):
            current[-1] = code
            _flush(strip_delimiter=True)
            current = []
            quotes = 0

    if current:
        _flush(strip_delimiter=False)
    return statements


class SqlScript:
    """A resource parsed into statements, with placeholders expanded."""

    def __init__(
        self,
        resource: Resource,
        delimiter: Delimiter = SEMICOLON,
        placeholders: Mapping[str, str] | None = None,
    ):
        self._resource = resource
        self._delimiter = delimiter
        text = resource.read()
        if placeholders is not None:
            text = replace_placeholders(text, placeholders, resource.filename)
        self._statements = split_statements(text, delimiter)

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def delimiter(self) -> Delimiter:
        return self._delimiter

    @property
    def statements(self) -> list[SqlStatement]:
        return list(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __repr__(self) -> str:
        return f"SqlScript({self._resource.filename!r}, statements={len(self._statements)})"


class DefaultSqlScriptExecutor:
    """Executes each statement of a script in order, then commits.

    The first failing statement aborts the script with
    :class:`~schemashift.errors.ScriptExecutionError`.
    """

    def __init__(self, template: SqlTemplate, log: Any = None):
        self._template = template
        self._log = log or logger

    def execute(self, script: SqlScript) -> None:
        filename = script.resource.filename
        for statement in script.statements:
            try:
                self._template.execute(statement.sql)
            except Exception as e:
                raise ScriptExecutionError(
                    f"Script {filename} failed at line {statement.line}: {e}",
                    statement=statement.sql,
                    line=statement.line,
                    cause=e,
                ) from e
        self._template.connection.commit()
        self._log.debug("sqlscript.executed", script=filename, statements=len(script))


__all__ = [
    "Delimiter",
    "SEMICOLON",
    "GO",
    "SqlStatement",
    "SqlScript",
    "DefaultSqlScriptExecutor",
    "replace_placeholders",
    "split_statements",
]

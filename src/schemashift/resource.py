"""Loadable SQL resources: inline text, files, and bundled package data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path


class Resource(ABC):
    """Something SQL text can be read from."""

    @property
    @abstractmethod
    def filename(self) -> str:
        """Name used in log events and error messages."""
        ...

    @abstractmethod
    def read(self) -> str:
        """Return the full text of the resource."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.filename!r})"


class StringResource(Resource):
    """SQL held in memory, e.g. the configured init SQL."""

    def __init__(self, text: str, filename: str = "<inline>"):
        self._text = text
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def read(self) -> str:
        return self._text


class FileResource(Resource):
    """SQL read from a file on disk."""

    def __init__(self, path: Path | str, encoding: str = "utf-8"):
        self._path = Path(path)
        self._encoding = encoding

    @property
    def filename(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        return self._path.read_text(encoding=self._encoding)


class PackageResource(Resource):
    """SQL shipped inside an installed package.

    Example:
        >>> PackageResource("schemashift", "resources/postgresql/create_history_table.sql")
        PackageResource('create_history_table.sql')
    """

    def __init__(self, package: str, path: str, encoding: str = "utf-8"):
        self._package = package
        self._path = path
        self._encoding = encoding

    @property
    def filename(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    def read(self) -> str:
        node = resources.files(self._package)
        for part in self._path.split("/"):
            node = node.joinpath(part)
        return node.read_text(encoding=self._encoding)


__all__ = [
    "Resource",
    "StringResource",
    "FileResource",
    "PackageResource",
]

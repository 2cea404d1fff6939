"""Docstring examples must run as written."""

import doctest
import importlib

import pytest

MODULES = [
    "schemashift",
    "schemashift.database",
    "schemashift.dialects.registry",
    "schemashift.errors",
    "schemashift.history",
    "schemashift.logging",
    "schemashift.metadata",
    "schemashift.resource",
    "schemashift.retry",
    "schemashift.settings",
    "schemashift.version",
]


@pytest.mark.parametrize("name", MODULES)
def test_docstring_examples(name):
    result = doctest.testmod(importlib.import_module(name))
    assert result.failed == 0

"""Shared pytest fixtures for xmldoccheck tests."""

import textwrap

import pytest

from xmldoccheck.csharp import CSharpSourceUnit


@pytest.fixture
def parse():
    """Parse a C# snippet (dedented) into a source unit."""

    def _parse(source: str, path: str = "Test.cs") -> CSharpSourceUnit:
        return CSharpSourceUnit.from_source(textwrap.dedent(source), path)

    return _parse


@pytest.fixture
def write_file(tmp_path):
    """Write a dedented file below tmp_path and return its path."""

    def _write(relative: str, content: str = ""):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write

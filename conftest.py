"""
Global test configuration and fixtures
"""

import ast
import textwrap
from collections.abc import Callable

import pytest

from bzlmod_edit.manifest import parse_manifest


@pytest.fixture
def manifest_from() -> Callable[[str], ast.Module]:
    """Parse dedented MODULE.bazel source."""

    def _parse(source: str, path: str = "MODULE.bazel") -> ast.Module:
        return parse_manifest(textwrap.dedent(source), path)

    return _parse


@pytest.fixture
def memory_provider() -> Callable[[dict[str, str]], Callable[[str], ast.Module | None]]:
    """In-memory fragment provider over {path: source}; records every read."""

    def _provider(files: dict[str, str]):
        def read(path: str) -> ast.Module | None:
            read.calls.append(path)
            if path not in files:
                return None
            return parse_manifest(textwrap.dedent(files[path]), path)

        read.calls = []
        return read

    return _provider


# Pytest hooks
def pytest_configure(config):
    """pytest setup"""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Tests touching the file system")


def pytest_collection_modifyitems(config, items):
    """Mark tests by their fixtures."""
    for item in items:
        if "tmp_path" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)

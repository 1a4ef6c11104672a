"""Pytest configuration and shared fixtures for dirstat tests.

This module provides an auto-use fixture that keeps DIRSTAT_* environment
variables from leaking into tests, and helpers to build directory trees.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that clears dirstat configuration variables.

    This ensures a developer's DIRSTAT_WORKERS or DIRSTAT_TOP does not
    change what the tests observe.
    """
    for key in ('DIRSTAT_WORKERS', 'DIRSTAT_TOP', 'DIRSTAT_LOG_LEVEL', 'DIRSTAT_COLOR'):
        monkeypatch.delenv(key, raising=False)
    yield


def write_file(path, size: int) -> str:
    """Create a file of exactly ``size`` bytes, creating parent directories."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'wb') as f:
        f.write(b'x' * size)
    return str(path)


@pytest.fixture
def make_tree(tmp_path):
    """Factory fixture: build a tree from {relative_path: size} under tmp_path.

    Returns:
        Callable taking the layout dict and returning the root as str
    """

    def _make(layout: dict[str, int]) -> str:
        for rel, size in layout.items():
            write_file(os.path.join(tmp_path, rel), size)
        return str(tmp_path)

    return _make


@pytest.fixture
def sample_tree(make_tree):
    """Small nested tree with mixed-case extensions and no-extension files."""
    return make_tree(
        {
            'a.txt': 100,
            'b.TXT': 50,
            'c': 10,
            'docs/readme.md': 300,
            'docs/notes/todo.MD': 25,
            'docs/notes/archive.tar.gz': 4096,
            'src/main.py': 1200,
            'src/pkg/__init__.py': 0,
            'src/pkg/util.py': 640,
            'empty_dir_sibling/.hidden': 7,
        }
    )

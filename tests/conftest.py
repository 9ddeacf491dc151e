"""
Shared pytest fixtures for shadowmap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os

import pytest as _pytest

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "SHADOWMAP_INITIAL_CAPACITY",
    "SHADOWMAP_SEMANTICS",
    "SHADOWMAP_ENV_FILE",
]


@_pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Keep the developer's SHADOWMAP_* variables out of every test."""
    for key in ENV_KEYS_TO_CLEAR:
        if key in _os.environ:
            monkeypatch.delenv(key)

"""
Shared fixtures for ShadowedMap tests.
"""

import typing as _typing

import pytest as _pytest

import shadowmap.shadowed_map as shadowed_map


@_pytest.fixture
def base() -> dict[str, int]:
    """The mapping being shadowed: {a: 1, b: 2}."""
    return {"a": 1, "b": 2}


@_pytest.fixture
def shadow(base: dict[str, int]) -> shadowed_map.ShadowedMap[str, int]:
    """Compatible-semantics map over base, no overlay yet."""
    return shadowed_map.ShadowedMap(base)


@_pytest.fixture
def corrected(base: dict[str, int]) -> shadowed_map.ShadowedMap[str, int]:
    """Corrected-semantics map over base, no overlay yet."""
    return shadowed_map.ShadowedMap(base, semantics="corrected")


@_pytest.fixture(params=["compatible", "corrected"])
def any_semantics(request: _pytest.FixtureRequest) -> _typing.Any:
    """Run a test under both semantics."""
    return request.param

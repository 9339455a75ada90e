"""
Shared pytest fixtures for typeref tests.

This module provides:
- Auto-marking of unmarked tests as ``unit``
- Registry/settings cleanup fixtures for test isolation
- The standard five-entity scenario registry (qualname segments)
"""

from typing import Generator

import pytest

from typeref.core.identifier import qualname_segments
from typeref.core.registry import Registry
from typeref.core.settings import reset_settings
from typeref.orm.registry import clear_registry as clear_type_registry

from tests._support.entities import SCENARIO, StrategyA


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_type_registry_fixture() -> Generator[None, None, None]:
    """Clear the ORM type table and cached settings around each test."""
    clear_type_registry()
    reset_settings()
    yield
    clear_type_registry()
    reset_settings()


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> Registry:
    """StrategyA, StrategyB, Nested::StrategyA, Nested::MyClass,
    Nested::MyClass::MoreNesting -- in that order."""
    return Registry(SCENARIO, segments_of=qualname_segments)


@pytest.fixture
def compat_registry() -> Registry:
    return Registry(SCENARIO, compat_mode=True, segments_of=qualname_segments)


@pytest.fixture
def mapped_registry() -> Registry:
    """Scenario registry with StrategyA stored as ``"s1"``."""
    return Registry(SCENARIO, {StrategyA: "s1"}, segments_of=qualname_segments)

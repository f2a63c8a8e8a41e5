"""Shared pytest fixtures for dynaSQL unit and integration tests."""
from __future__ import annotations

import pytest

from dynasql.schema.registry import SchemaRegistry
from tests.fixtures import load_schema_registry


@pytest.fixture(scope="session")
def registry() -> SchemaRegistry:
    """Canonical schema registry shared across all tests."""
    return load_schema_registry()

"""Test fixtures: sample schema definitions and DDL."""

from __future__ import annotations

import json
from pathlib import Path

from dynasql.schema.registry import SchemaRegistry, TableDefinition

_FIXTURES_DIR = Path(__file__).parent


def load_schema_registry() -> SchemaRegistry:
    """Load the canonical sample SchemaRegistry from schema.json."""
    data = json.loads((_FIXTURES_DIR / "schema.json").read_text())
    return SchemaRegistry.from_definitions([TableDefinition.model_validate(t) for t in data])


def load_ddl() -> str:
    """Return the sample SQLite DDL."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()

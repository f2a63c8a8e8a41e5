"""Unit tests for SqlTable / SqlColumn, SchemaRegistry and the error hierarchy."""
from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from dynasql.errors import (
    CompilationError,
    DynaSQLError,
    MalformedConditionError,
    SchemaError,
    UnsupportedDialectError,
)
from dynasql.schema.column_reference import ColumnReference
from dynasql.schema.registry import (
    ColumnDefinition,
    SchemaRegistry,
    TableDefinition,
)
from dynasql.schema.table import SortSpecification, SqlTable, to_sort_specification


# ---------------------------------------------------------------------------
# Tables and columns
# ---------------------------------------------------------------------------


class TestSqlTable:
    def test_str_includes_alias(self):
        assert str(SqlTable("person", alias="p")) == "person p"
        assert str(SqlTable("person")) == "person"

    @pytest.mark.parametrize("name", ["", "1person", "person; DROP TABLE x", "a b", "p.id"])
    def test_invalid_table_names(self, name):
        with pytest.raises(SchemaError):
            SqlTable(name)

    def test_invalid_alias(self):
        with pytest.raises(SchemaError):
            SqlTable("person", alias="p--")

    def test_invalid_column_name(self):
        with pytest.raises(SchemaError):
            SqlTable("person").column("first name")

    def test_tables_are_values(self):
        assert SqlTable("person", "p") == SqlTable("person", "p")
        assert SqlTable("person", "p") != SqlTable("person")


class TestSqlColumn:
    def test_alias_copy(self):
        col = SqlTable("person").column("first_name", str)
        aliased = col.as_("name")
        assert aliased.alias == "name"
        assert col.alias is None
        assert aliased.table == col.table

    def test_descending(self):
        col = SqlTable("person").column("id", int)
        assert col.descending() == SortSpecification(col, descending=True)
        assert to_sort_specification(col) == SortSpecification(col)

    def test_accepts(self):
        table = SqlTable("t")
        assert table.column("a", int).accepts(3)
        assert not table.column("a", int).accepts("3")
        assert not table.column("a", int).accepts(True)
        assert table.column("f", bool).accepts(False)
        assert table.column("x", float).accepts(3)
        assert table.column("d", datetime.date).accepts(datetime.date(2020, 1, 1))
        assert table.column("any").accepts(object())

    def test_none_always_accepted(self):
        assert SqlTable("t").column("a", int).accepts(None)

    def test_type_name(self):
        table = SqlTable("t")
        assert table.column("a", int).type_name == "int"
        assert table.column("b").type_name == "any"

    def test_qualified_name(self):
        assert SqlTable("person", "p").column("id").qualified_name == "person.id"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestSchemaRegistry:
    def test_loaded_from_fixture(self, registry: SchemaRegistry):
        assert registry.table_names == ["person", "address"]
        assert registry.table("person").alias == "p"
        assert "address" in registry
        assert "invoice" not in registry

    def test_columns_in_definition_order(self, registry: SchemaRegistry):
        names = [c.name for c in registry.columns("address")]
        assert names == ["id", "street", "city", "notes"]

    def test_column_type_tags(self, registry: SchemaRegistry):
        assert registry.column("person", "salary").value_type is float
        assert registry.column("address", "notes").value_type is None

    def test_columns_share_the_registered_table(self, registry: SchemaRegistry):
        assert registry.column("person", "id").table is registry.table("person")

    def test_unknown_table(self, registry: SchemaRegistry):
        with pytest.raises(SchemaError) as exc:
            registry.table("invoice")
        assert exc.value.details["allowed_tables"] == ["person", "address"]

    def test_unknown_column(self, registry: SchemaRegistry):
        with pytest.raises(SchemaError) as exc:
            registry.column("person", "age")
        assert "first_name" in exc.value.details["allowed_columns"]

    def test_resolve(self, registry: SchemaRegistry):
        assert registry.resolve("address.city") == registry.column("address", "city")

    def test_resolve_requires_qualifier(self, registry: SchemaRegistry):
        with pytest.raises(SchemaError):
            registry.resolve("city")

    def test_builder(self):
        reg = (
            SchemaRegistry.builder()
            .table("animal", alias="a")
            .column("id", int)
            .column("name", str)
            .build()
        )
        assert [c.name for c in reg.columns("animal")] == ["id", "name"]

    def test_duplicate_table(self):
        with pytest.raises(SchemaError):
            SchemaRegistry.builder().table("a").table("a")

    def test_duplicate_column(self):
        with pytest.raises(SchemaError):
            SchemaRegistry.builder().table("a").column("x").column("x")

    def test_column_before_table(self):
        with pytest.raises(SchemaError):
            SchemaRegistry.builder().column("x")

    def test_definition_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            TableDefinition.model_validate({"name": "a", "schema": "public"})

    def test_definition_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            ColumnDefinition(name="x", type="uuid")  # type: ignore[arg-type]

    def test_definition_with_bad_identifier(self):
        definitions = [TableDefinition(name="a-b", columns=[ColumnDefinition(name="x")])]
        with pytest.raises(SchemaError):
            SchemaRegistry.from_definitions(definitions)


def test_column_reference_parse():
    ref = ColumnReference.parse("person.id")
    assert ref.qualified
    assert str(ref) == "person.id"
    assert not ColumnReference.parse("id").qualified


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_all_errors_share_a_base(self):
        assert issubclass(SchemaError, DynaSQLError)
        assert issubclass(UnsupportedDialectError, CompilationError)

    def test_error_response(self):
        err = MalformedConditionError("bad", operator="IN", expected="at least 1", actual=0)
        assert err.to_error_response() == {
            "error": "MALFORMED_CONDITION",
            "message": "bad",
            "details": {"operator": "IN", "expected": "at least 1", "actual": 0},
        }

    def test_compilation_error_clause(self):
        err = CompilationError("no table", clause="FROM")
        assert err.details == {"clause": "FROM"}
        assert CompilationError("plain").details == {}

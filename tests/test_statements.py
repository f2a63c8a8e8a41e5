"""Unit tests for the statement builders, assemblers and support values."""
from __future__ import annotations

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from dynasql import (
    BuilderStateError,
    ColumnTypeError,
    CompilationError,
    CompilerFactory,
    DeleteAssembler,
    GenericCompiler,
    RenderOptions,
    SchemaError,
    SelectAssembler,
    SQLCompiler,
    StatementKind,
    UnsupportedDialectError,
    UpdateAssembler,
    WhereAssembler,
    and_,
    delete_from,
    insert_into,
    is_between,
    is_equal_to,
    is_equal_to_when_present,
    is_greater_than,
    is_in,
    is_null,
    select,
    select_count,
    update,
    where,
)
from dynasql.compile.supports import _SupportMixin
from tests.fixtures import load_schema_registry

REGISTRY = load_schema_registry()
PERSON = REGISTRY.table("person")
ADDRESS = REGISTRY.table("address")
ID = REGISTRY.column("person", "id")
FIRST_NAME = REGISTRY.column("person", "first_name")
LAST_NAME = REGISTRY.column("person", "last_name")
OCCUPATION = REGISTRY.column("person", "occupation")
EMPLOYED = REGISTRY.column("person", "employed")
CITY = REGISTRY.column("address", "city")


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


class TestSelect:
    def test_aliases_are_honoured(self):
        support = (
            select(ID, FIRST_NAME.as_("name"))
            .from_(PERSON)
            .where(ID, is_greater_than(2))
            .build()
        )
        assert support.statement == "SELECT p.id, p.first_name AS name FROM person p WHERE p.id > ?"
        assert dict(support.parameters) == {"p1": 2}

    def test_no_columns_selects_star(self):
        support = select().from_(ADDRESS).build()
        assert support.statement == "SELECT * FROM address"
        assert support.where_clause == ""

    def test_distinct_and_order_by(self):
        support = (
            select(LAST_NAME)
            .distinct()
            .from_(PERSON)
            .order_by(LAST_NAME.descending(), FIRST_NAME)
            .build()
        )
        assert support.is_distinct
        assert support.statement == (
            "SELECT DISTINCT p.last_name FROM person p ORDER BY p.last_name DESC, p.first_name"
        )

    def test_order_by_uses_column_alias(self):
        support = select(FIRST_NAME.as_("name")).from_(PERSON).order_by(FIRST_NAME.as_("name")).build()
        assert support.order_by_clause == "ORDER BY name"

    def test_order_by_unselected_alias_uses_column(self):
        support = select(ID).from_(PERSON).order_by(FIRST_NAME.as_("name").descending()).build()
        assert support.statement == "SELECT p.id FROM person p ORDER BY p.first_name DESC"

    def test_order_by_alias_differing_from_select_list(self):
        support = (
            select(FIRST_NAME.as_("name"))
            .from_(PERSON)
            .order_by(FIRST_NAME.as_("other"))
            .build()
        )
        assert support.order_by_clause == "ORDER BY p.first_name"

    def test_full_select_with_grouped_where(self):
        support = (
            select(ID, FIRST_NAME)
            .from_(PERSON)
            .where(ID, is_between(1, 4))
            .or_(OCCUPATION, is_null(), and_(LAST_NAME, is_in("Flintstone", "Rubble")))
            .order_by(ID)
            .build()
        )
        assert support.statement == (
            "SELECT p.id, p.first_name FROM person p "
            "WHERE p.id BETWEEN ? AND ? OR (p.occupation IS NULL AND p.last_name IN (?, ?)) "
            "ORDER BY p.id"
        )
        assert support.parameter_values() == [1, 4, "Flintstone", "Rubble"]

    def test_when_present_filter_disappears(self):
        support = (
            select(ID)
            .from_(PERSON)
            .where(FIRST_NAME, is_equal_to_when_present(None))
            .and_(LAST_NAME, is_equal_to_when_present(None))
            .build()
        )
        assert support.statement == "SELECT p.id FROM person p"
        assert dict(support.parameters) == {}

    def test_when_present_keeps_supplied_filters(self):
        support = (
            select(ID)
            .from_(PERSON)
            .where(FIRST_NAME, is_equal_to_when_present(None))
            .and_(LAST_NAME, is_equal_to_when_present("Rubble"))
            .build()
        )
        assert support.where_clause == "WHERE p.last_name = ?"
        assert dict(support.parameters) == {"p1": "Rubble"}

    def test_limit_and_offset(self):
        support = select(ID).from_(PERSON).order_by(ID).limit(10).offset(20).build()
        assert support.statement.endswith("ORDER BY p.id LIMIT 10 OFFSET 20")

    def test_negative_limit_is_rejected(self):
        with pytest.raises(CompilationError):
            select(ID).from_(PERSON).limit(-1).build()

    def test_missing_from_is_rejected(self):
        with pytest.raises(CompilationError):
            select(ID).build()

    def test_column_from_another_table_is_rejected(self):
        with pytest.raises(SchemaError):
            select(ID).from_(PERSON).where(CITY, is_equal_to("Bedrock")).build()

    def test_select_count(self):
        support = select_count().from_(PERSON).where(OCCUPATION, is_null()).build()
        assert support.statement == "SELECT count(*) FROM person p WHERE p.occupation IS NULL"

    def test_select_count_rejects_order_by(self):
        with pytest.raises(CompilationError):
            select_count().from_(PERSON).order_by(ID).build()

    def test_where_twice_is_rejected(self):
        builder = select(ID).from_(PERSON).where(ID, is_equal_to(1))
        with pytest.raises(CompilationError):
            builder.where(ID, is_equal_to(2))

    def test_and_before_where_is_rejected(self):
        with pytest.raises(CompilationError):
            select(ID).from_(PERSON).and_(ID, is_equal_to(1))

    def test_postgres_dialect(self):
        support = (
            select(ID, FIRST_NAME.as_("name"))
            .from_(PERSON)
            .where(ID, is_equal_to(3))
            .build(RenderOptions(target="postgres"))
        )
        assert support.statement == (
            'SELECT "p"."id", "p"."first_name" AS "name" FROM "person" "p" '
            'WHERE "p"."id" = %(p1)s'
        )


# ---------------------------------------------------------------------------
# DELETE
# ---------------------------------------------------------------------------


class TestDelete:
    def test_aliases_are_not_rendered(self):
        support = delete_from(PERSON).where(ID, is_equal_to(3)).build()
        assert support.statement == "DELETE FROM person WHERE id = ?"
        assert dict(support.parameters) == {"p1": 3}

    def test_delete_without_where(self):
        assert delete_from(ADDRESS).build().statement == "DELETE FROM address"

    def test_sqlite_dialect(self):
        support = delete_from(PERSON).where(ID, is_in(1, 2)).build(RenderOptions(target="sqlite"))
        assert support.statement == 'DELETE FROM "person" WHERE "id" IN (:p1, :p2)'


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------


class TestInsert:
    def test_full_insert_binds_none(self):
        support = (
            insert_into(PERSON)
            .set(ID, 22)
            .set(FIRST_NAME, "Fred")
            .set(OCCUPATION, None)
            .build()
        )
        assert support.statement == (
            "INSERT INTO person (id, first_name, occupation) VALUES (?, ?, ?)"
        )
        assert dict(support.parameters) == {"p1": 22, "p2": "Fred", "p3": None}

    def test_selective_insert_skips_none(self):
        support = (
            insert_into(PERSON)
            .values({ID: 22, FIRST_NAME: "Fred", OCCUPATION: None})
            .selective()
            .build()
        )
        assert support.statement == "INSERT INTO person (id, first_name) VALUES (?, ?)"
        assert dict(support.parameters) == {"p1": 22, "p2": "Fred"}

    def test_selective_insert_with_nothing_to_write(self):
        with pytest.raises(CompilationError):
            insert_into(PERSON).set(OCCUPATION, None).selective().build()

    def test_wrong_value_type(self):
        with pytest.raises(ColumnTypeError):
            insert_into(PERSON).set(EMPLOYED, "yes").build()

    def test_foreign_column(self):
        with pytest.raises(SchemaError):
            insert_into(PERSON).set(CITY, "Bedrock").build()


# ---------------------------------------------------------------------------
# UPDATE
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_full_update_shares_parameter_counter(self):
        support = (
            update(PERSON)
            .set(FIRST_NAME, "Fred")
            .set(OCCUPATION, None)
            .where(ID, is_equal_to(3))
            .build()
        )
        assert support.statement == "UPDATE person SET first_name = ?, occupation = ? WHERE id = ?"
        assert dict(support.parameters) == {"p1": "Fred", "p2": None, "p3": 3}

    def test_selective_update(self):
        support = (
            update(PERSON)
            .set(FIRST_NAME, "Fred")
            .set(OCCUPATION, None)
            .selective()
            .where(ID, is_equal_to(3))
            .build()
        )
        assert support.statement == "UPDATE person SET first_name = ? WHERE id = ?"
        assert dict(support.parameters) == {"p1": "Fred", "p2": 3}

    def test_set_after_where(self):
        support = update(PERSON).where(ID, is_equal_to(3)).set(FIRST_NAME, "Fred").build()
        assert support.statement == "UPDATE person SET first_name = ? WHERE id = ?"
        assert dict(support.parameters) == {"p1": "Fred", "p2": 3}

    def test_update_without_where(self):
        support = update(ADDRESS).set(CITY, "Bedrock").build()
        assert support.statement == "UPDATE address SET city = ?"

    def test_assembler_directly(self):
        assembler = UpdateAssembler(GenericCompiler(), parameter_prefix="v")
        support = assembler.assemble(
            PERSON, {LAST_NAME: "Slate"}, where(ID, is_equal_to(1)).build()
        )
        assert support.set_clause == "SET last_name = ?"
        assert dict(support.parameters) == {"v1": "Slate", "v2": 1}


# ---------------------------------------------------------------------------
# Supports, options and registry
# ---------------------------------------------------------------------------


class TestSupports:
    def test_slots(self):
        support = select(ID).from_(PERSON).where(ID, is_equal_to(1)).build()
        assert support.slots() == {
            "distinct": "",
            "columnList": "p.id",
            "tableName": "person p",
            "whereClause": "WHERE p.id = ?",
            "orderByClause": "",
            "limitClause": "",
        }

    def test_render_template(self):
        support = select(ID).distinct().from_(PERSON).where(ID, is_equal_to(1)).build()
        text = support.render_template("select ${distinct} ${columnList} from ${tableName} ${whereClause}")
        assert text == "select DISTINCT p.id from person p WHERE p.id = ?"

    def test_render_template_unknown_slot(self):
        support = delete_from(PERSON).build()
        with pytest.raises(KeyError):
            support.render_template("${setClause}")

    def test_support_without_slots_cannot_be_created(self):
        class Partial(_SupportMixin):
            parameters = {}

        with pytest.raises(TypeError):
            Partial()

    def test_parameters_are_read_only(self):
        support = delete_from(PERSON).where(ID, is_equal_to(1)).build()
        with pytest.raises(TypeError):
            support.parameters["p1"] = 2  # type: ignore[index]

    def test_where_assembler(self):
        support = WhereAssembler(GenericCompiler()).assemble(
            where(ID, is_equal_to(1)).build(), StatementKind.DELETE
        )
        assert support.where_clause == "WHERE id = ?"
        assert support.slots() == {"whereClause": "WHERE id = ?"}

    def test_empty_where_assembler(self):
        support = WhereAssembler(GenericCompiler()).assemble(())
        assert support.where_clause == ""

    def test_assemblers_are_pure(self):
        assembler = DeleteAssembler(GenericCompiler())
        conditions = where(ID, is_equal_to(1)).build()
        first = assembler.assemble(PERSON, conditions)
        second = assembler.assemble(PERSON, conditions)
        assert first == second

    def test_count_assembler(self):
        support = SelectAssembler(GenericCompiler()).assemble_count(ADDRESS)
        assert support.statement == "SELECT count(*) FROM address"


class TestOptions:
    def test_parameter_prefix(self):
        support = (
            delete_from(PERSON)
            .where(ID, is_equal_to(1))
            .build(RenderOptions(target="sqlite", parameter_prefix="arg"))
        )
        assert support.statement == 'DELETE FROM "person" WHERE "id" = :arg1'
        assert dict(support.parameters) == {"arg1": 1}

    def test_invalid_prefix(self):
        with pytest.raises(ValidationError):
            RenderOptions(parameter_prefix="1x")

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            RenderOptions(dialect="postgres")  # type: ignore[call-arg]

    def test_unknown_target(self):
        with pytest.raises(UnsupportedDialectError) as exc:
            delete_from(PERSON).build(RenderOptions(target="oracle"))
        assert exc.value.code == "UNSUPPORTED_DIALECT"
        assert "generic" in exc.value.details["registered_targets"]

    def test_registered_custom_compiler(self):
        @CompilerFactory.register("dollar")
        class DollarCompiler(SQLCompiler):
            def param_placeholder(self, name: str) -> str:
                return f"${name}"

            def quote_identifier(self, name: str) -> str:
                return name

            @property
            def dialect_name(self) -> str:
                return "dollar"

        support = delete_from(PERSON).where(ID, is_equal_to(1)).build(RenderOptions(target="dollar"))
        assert support.statement == "DELETE FROM person WHERE id = $p1"


    def test_register_class(self):
        class UpperCompiler(GenericCompiler):
            def quote_identifier(self, name: str) -> str:
                return name.upper()

            @property
            def dialect_name(self) -> str:
                return "upper"

        CompilerFactory.register_class("upper", UpperCompiler)
        assert "upper" in CompilerFactory.registered_targets()
        support = delete_from(PERSON).where(ID, is_equal_to(1)).build(RenderOptions(target="upper"))
        assert support.statement == "DELETE FROM PERSON WHERE ID = ?"


class TestBuilderState:
    def test_builder_is_single_use(self):
        builder = delete_from(PERSON).where(ID, is_equal_to(1))
        builder.build()
        with pytest.raises(BuilderStateError):
            builder.build()

    def test_no_changes_after_build(self):
        builder = insert_into(PERSON).set(ID, 1)
        builder.build()
        with pytest.raises(BuilderStateError):
            builder.set(FIRST_NAME, "Wilma")


def test_assembly_logs_counts():
    with capture_logs() as logs:
        update(PERSON).set(FIRST_NAME, "Fred").where(ID, is_equal_to(3)).build()
    event = next(e for e in logs if e["event"] == "statement_assembled")
    assert event["kind"] == "UPDATE"
    assert event["table"] == "person"
    assert event["dialect"] == "generic"
    assert event["parameter_count"] == 2
    assert "Fred" not in event.values()


def test_where_assembly_logs_counts():
    with capture_logs() as logs:
        WhereAssembler(GenericCompiler()).assemble(
            where(ID, is_in(1, 2)).build(), StatementKind.DELETE
        )
    event = next(e for e in logs if e["event"] == "statement_assembled")
    assert event["kind"] == "DELETE"
    assert event["where_only"] is True
    assert event["parameter_count"] == 2

"""Fluent statement builders.

Each builder collects the pieces of one statement, then hands them to the
matching assembler in ``build()``::

    support = (
        select(person_id, first_name.as_("name"))
        .distinct()
        .from_(person)
        .where(person_id, is_between(1, 4))
        .or_(occupation, is_null())
        .order_by(last_name.descending(), first_name)
        .build()
    )
    cursor.execute(support.statement, support.parameter_values())

``build()`` accepts optional :class:`~dynasql.schema.options.RenderOptions`;
the dialect compiler is looked up in
:class:`~dynasql.compile.registry.CompilerFactory`.  Builders are single-use.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from dynasql.compile.assemblers import (
    DeleteAssembler,
    InsertAssembler,
    SelectAssembler,
    UpdateAssembler,
)
from dynasql.compile.base import SQLCompiler
from dynasql.compile.registry import CompilerFactory
from dynasql.compile.supports import DeleteSupport, InsertSupport, SelectSupport, UpdateSupport
from dynasql.dsl.where import ConditionListBuilder
from dynasql.errors import BuilderStateError, CompilationError
from dynasql.schema.conditions import Condition, ConditionList
from dynasql.schema.criteria import Criterion
from dynasql.schema.options import RenderOptions
from dynasql.schema.table import SortSpecification, SqlColumn, SqlTable


_Where = TypeVar("_Where", bound="_WhereClauseMixin")
_Values = TypeVar("_Values", bound="_ValuesMixin")


def _compiler(options: RenderOptions) -> SQLCompiler:
    return CompilerFactory.create(options.target)


class _StatementBuilder:
    """Single-use guard shared by every statement builder."""

    def __init__(self) -> None:
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            raise BuilderStateError(type(self).__name__)

    def _consume(self, options: RenderOptions | None) -> RenderOptions:
        self._ensure_open()
        self._built = True
        return options or RenderOptions()


class _WhereClauseMixin(_StatementBuilder):
    """``where`` / ``and_`` / ``or_`` chaining for statements with a WHERE."""

    def __init__(self) -> None:
        super().__init__()
        self._where = ConditionListBuilder()

    def where(
        self: _Where, column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
    ) -> _Where:
        """Start the WHERE clause.

        Raises:
            CompilationError: If ``where()`` was already called.
        """
        self._ensure_open()
        if len(self._where):
            raise CompilationError("where() may only be called once.", clause="WHERE")
        self._where._start(column, criterion, sub_conditions)
        return self

    def and_(
        self: _Where, column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
    ) -> _Where:
        self._require_where()
        self._where.and_(column, criterion, *sub_conditions)
        return self

    def or_(
        self: _Where, column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
    ) -> _Where:
        self._require_where()
        self._where.or_(column, criterion, *sub_conditions)
        return self

    def and_group(self: _Where, *conditions: Condition) -> _Where:
        self._require_where()
        self._where.and_group(*conditions)
        return self

    def or_group(self: _Where, *conditions: Condition) -> _Where:
        self._require_where()
        self._where.or_group(*conditions)
        return self

    def _require_where(self) -> None:
        self._ensure_open()
        if not len(self._where):
            raise CompilationError("Call where() before and_() / or_().", clause="WHERE")

    def _conditions(self) -> ConditionList:
        return self._where.build()


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


class SelectBuilder(_WhereClauseMixin):
    """Builds a :class:`SelectSupport`; obtained via :func:`select`."""

    def __init__(self, columns: tuple[SqlColumn, ...], count: bool = False) -> None:
        super().__init__()
        self._columns = columns
        self._count = count
        self._table: SqlTable | None = None
        self._distinct = False
        self._order_by: tuple[SqlColumn | SortSpecification, ...] = ()
        self._limit: int | None = None
        self._offset: int | None = None

    def distinct(self) -> SelectBuilder:
        self._ensure_open()
        self._distinct = True
        return self

    def from_(self, table: SqlTable) -> SelectBuilder:
        self._ensure_open()
        self._table = table
        return self

    def order_by(self, *items: SqlColumn | SortSpecification) -> SelectBuilder:
        self._ensure_open()
        self._order_by = items
        return self

    def limit(self, value: int) -> SelectBuilder:
        self._ensure_open()
        self._limit = value
        return self

    def offset(self, value: int) -> SelectBuilder:
        self._ensure_open()
        self._offset = value
        return self

    def build(self, options: RenderOptions | None = None) -> SelectSupport:
        """Render the statement.

        Raises:
            CompilationError: If no table was given, or a count query was
                combined with DISTINCT / ORDER BY / LIMIT / OFFSET.
        """
        options = self._consume(options)
        if self._table is None:
            raise CompilationError("SELECT requires from_(table).", clause="FROM")
        assembler = SelectAssembler(_compiler(options), options.parameter_prefix)
        if self._count:
            if self._distinct or self._order_by or self._limit is not None or self._offset is not None:
                raise CompilationError(
                    "select_count() does not support distinct, order_by, limit or offset.",
                    clause="SELECT",
                )
            return assembler.assemble_count(self._table, self._conditions())
        return assembler.assemble(
            self._table,
            self._columns,
            self._conditions(),
            distinct=self._distinct,
            order_by=self._order_by,
            limit=self._limit,
            offset=self._offset,
        )


def select(*columns: SqlColumn) -> SelectBuilder:
    """Start a SELECT of ``columns`` (``*`` when none are given)."""
    return SelectBuilder(columns)


def select_count() -> SelectBuilder:
    """Start a ``SELECT count(*)``."""
    return SelectBuilder((), count=True)


# ---------------------------------------------------------------------------
# DELETE
# ---------------------------------------------------------------------------


class DeleteBuilder(_WhereClauseMixin):
    """Builds a :class:`DeleteSupport`; obtained via :func:`delete_from`."""

    def __init__(self, table: SqlTable) -> None:
        super().__init__()
        self._table = table

    def build(self, options: RenderOptions | None = None) -> DeleteSupport:
        options = self._consume(options)
        assembler = DeleteAssembler(_compiler(options), options.parameter_prefix)
        return assembler.assemble(self._table, self._conditions())


def delete_from(table: SqlTable) -> DeleteBuilder:
    return DeleteBuilder(table)


# ---------------------------------------------------------------------------
# INSERT / UPDATE
# ---------------------------------------------------------------------------


class _ValuesMixin(_StatementBuilder):
    """Ordered column to value collection with full / selective mode."""

    def __init__(self) -> None:
        super().__init__()
        self._values: dict[SqlColumn, Any] = {}
        self._selective = False

    def set(self: _Values, column: SqlColumn, value: Any) -> _Values:
        """Write ``value`` to ``column`` (``None`` writes NULL in full mode)."""
        self._ensure_open()
        self._values[column] = value
        return self

    def values(self: _Values, mapping: Mapping[SqlColumn, Any]) -> _Values:
        """Write every ``column: value`` pair of ``mapping`` in order."""
        for column, value in mapping.items():
            self.set(column, value)
        return self

    def selective(self: _Values) -> _Values:
        """Leave ``None``-valued columns out of the statement."""
        self._ensure_open()
        self._selective = True
        return self


class InsertBuilder(_ValuesMixin):
    """Builds an :class:`InsertSupport`; obtained via :func:`insert_into`."""

    def __init__(self, table: SqlTable) -> None:
        super().__init__()
        self._table = table

    def build(self, options: RenderOptions | None = None) -> InsertSupport:
        options = self._consume(options)
        assembler = InsertAssembler(_compiler(options), options.parameter_prefix)
        return assembler.assemble(self._table, self._values, selective=self._selective)


def insert_into(table: SqlTable) -> InsertBuilder:
    return InsertBuilder(table)


class UpdateBuilder(_ValuesMixin, _WhereClauseMixin):
    """Builds an :class:`UpdateSupport`; obtained via :func:`update`."""

    def __init__(self, table: SqlTable) -> None:
        super().__init__()
        self._table = table

    def build(self, options: RenderOptions | None = None) -> UpdateSupport:
        options = self._consume(options)
        assembler = UpdateAssembler(_compiler(options), options.parameter_prefix)
        return assembler.assemble(
            self._table, self._values, self._conditions(), selective=self._selective
        )


def update(table: SqlTable) -> UpdateBuilder:
    return UpdateBuilder(table)

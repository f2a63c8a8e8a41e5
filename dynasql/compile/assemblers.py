"""Statement assemblers.

Each assembler handles exactly one statement kind.  An assembler is a pure
function of its inputs: ``assemble()`` creates a fresh
:class:`~dynasql.compile.context.RenderContext`, renders every clause with
it, and returns an immutable support value.

Classes
-------
WhereAssembler    - ``WHERE …``
SelectAssembler   - ``SELECT [DISTINCT] … FROM … WHERE … ORDER BY … LIMIT …``
DeleteAssembler   - ``DELETE FROM … WHERE …``
InsertAssembler   - ``INSERT INTO … (…) VALUES (…)``
UpdateAssembler   - ``UPDATE … SET … WHERE …``

INSERT and UPDATE run in *full* mode (every supplied column is written,
``None`` bound as NULL) or *selective* mode (``None``-valued columns are
left out of the statement entirely).
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from dynasql.compile.base import SQLCompiler
from dynasql.compile.context import ParameterCounter, RenderContext, StatementKind
from dynasql.compile.renderer import ConditionRenderer
from dynasql.compile.supports import (
    DeleteSupport,
    InsertSupport,
    SelectSupport,
    UpdateSupport,
    WhereSupport,
)
from dynasql.errors import ColumnTypeError, CompilationError, SchemaError
from dynasql.schema.conditions import Condition, Group, Leaf
from dynasql.schema.table import (
    SortSpecification,
    SqlColumn,
    SqlTable,
    to_sort_specification,
)

logger = structlog.get_logger(__name__)


class _Assembler:
    """Shared plumbing: compiler, parameter prefix, and clause helpers.

    Args:
        compiler: Dialect-specific compiler instance.
        parameter_prefix: Prefix of generated parameter names.
    """

    kind: StatementKind

    def __init__(self, compiler: SQLCompiler, parameter_prefix: str = "p") -> None:
        self._compiler = compiler
        self._prefix = parameter_prefix

    def _context(self, kind: StatementKind | None = None) -> RenderContext:
        return RenderContext(
            compiler=self._compiler,
            kind=kind or self.kind,
            counter=ParameterCounter(self._prefix),
        )

    @staticmethod
    def _where_clause(ctx: RenderContext, where: Sequence[Condition]) -> str:
        sql = ConditionRenderer(ctx).render(where)
        return f"WHERE {sql}" if sql else ""

    @staticmethod
    def _check_table(table: SqlTable, columns: Iterable[SqlColumn], clause: str) -> None:
        for col in columns:
            if col.table != table:
                raise SchemaError(
                    f"Column '{col.qualified_name}' does not belong to table "
                    f"'{table.name}' ({clause}).",
                    details={"table": table.name, "column": col.qualified_name},
                )

    @classmethod
    def _where_columns(cls, where: Sequence[Condition]) -> list[SqlColumn]:
        columns: list[SqlColumn] = []
        for cond in where:
            if isinstance(cond, Leaf):
                columns.append(cond.column)
            elif isinstance(cond, Group):
                columns.extend(cls._where_columns(cond.conditions))
        return columns

    def _log(self, ctx: RenderContext, table: SqlTable | None, **extra: Any) -> None:
        logger.debug(
            "statement_assembled",
            kind=ctx.kind.value,
            table=table.name if table is not None else None,
            dialect=self._compiler.dialect_name,
            parameter_count=len(ctx.counter.params),
            **extra,
        )


class WhereAssembler(_Assembler):
    """Renders a stand-alone ``WHERE`` clause."""

    kind = StatementKind.SELECT

    def assemble(
        self,
        where: Sequence[Condition],
        kind: StatementKind = StatementKind.SELECT,
    ) -> WhereSupport:
        ctx = self._context(kind)
        support = WhereSupport(
            where_clause=self._where_clause(ctx, where), parameters=ctx.counter.params
        )
        self._log(ctx, None, where_only=True)
        return support


class SelectAssembler(_Assembler):
    """Builds SELECT statements; table and column aliases are honoured."""

    kind = StatementKind.SELECT

    def assemble(
        self,
        table: SqlTable,
        columns: Sequence[SqlColumn] = (),
        where: Sequence[Condition] = (),
        *,
        distinct: bool = False,
        order_by: Sequence[SqlColumn | SortSpecification] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> SelectSupport:
        """Assemble a SELECT.

        Args:
            table: FROM table.
            columns: Select list in order; empty selects ``*``.
            where: Condition list; empty omits the WHERE clause.
            distinct: Emit ``DISTINCT``.
            order_by: Columns or sort specifications in order.
            limit: Optional non-negative row limit.
            offset: Optional non-negative row offset.

        Raises:
            SchemaError: If a column belongs to another table.
            MalformedConditionError: If the condition tree is malformed.
            CompilationError: If ``limit`` / ``offset`` is not a
                non-negative integer.
        """
        sorts = [to_sort_specification(item) for item in order_by]
        self._check_table(table, columns, "select list")
        self._check_table(table, self._where_columns(where), "where")
        self._check_table(table, (s.column for s in sorts), "order by")

        ctx = self._context()
        column_list = ", ".join(self._select_item(ctx, col) for col in columns) or "*"
        support = SelectSupport(
            table=ctx.table_ref(table),
            distinct="DISTINCT" if distinct else "",
            column_list=column_list,
            where_clause=self._where_clause(ctx, where),
            order_by_clause=self._order_by_clause(ctx, sorts, columns),
            limit_clause=self._limit_clause(limit, offset),
            parameters=ctx.counter.params,
        )
        self._log(ctx, table, distinct=distinct)
        return support

    def assemble_count(self, table: SqlTable, where: Sequence[Condition] = ()) -> SelectSupport:
        """Assemble ``SELECT count(*) FROM table [WHERE ...]``."""
        self._check_table(table, self._where_columns(where), "where")
        ctx = self._context()
        support = SelectSupport(
            table=ctx.table_ref(table),
            distinct="",
            column_list="count(*)",
            where_clause=self._where_clause(ctx, where),
            order_by_clause="",
            limit_clause="",
            parameters=ctx.counter.params,
        )
        self._log(ctx, table, count=True)
        return support

    # ------------------------------------------------------------------
    # Clause helpers
    # ------------------------------------------------------------------

    def _select_item(self, ctx: RenderContext, column: SqlColumn) -> str:
        ref = ctx.column_ref(column)
        if column.alias:
            return f"{ref} AS {self._compiler.quote_identifier(column.alias)}"
        return ref

    def _order_by_clause(
        self,
        ctx: RenderContext,
        sorts: list[SortSpecification],
        columns: Sequence[SqlColumn],
    ) -> str:
        if not sorts:
            return ""
        items = []
        for sort in sorts:
            col = sort.column
            # an alias is only visible when the aliased column is selected
            if col.alias and col in columns:
                ref = self._compiler.quote_identifier(col.alias)
            else:
                ref = ctx.column_ref(col)
            items.append(f"{ref} DESC" if sort.descending else ref)
        return f"ORDER BY {', '.join(items)}"

    @staticmethod
    def _limit_clause(limit: int | None, offset: int | None) -> str:
        parts = []
        for keyword, value in (("LIMIT", limit), ("OFFSET", offset)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise CompilationError(
                    f"{keyword} must be a non-negative integer, got {value!r}.",
                    clause=keyword,
                )
            parts.append(f"{keyword} {value}")
        return " ".join(parts)


class DeleteAssembler(_Assembler):
    """Builds DELETE statements; aliases are never rendered."""

    kind = StatementKind.DELETE

    def assemble(self, table: SqlTable, where: Sequence[Condition] = ()) -> DeleteSupport:
        self._check_table(table, self._where_columns(where), "where")
        ctx = self._context()
        support = DeleteSupport(
            table=ctx.table_ref(table),
            where_clause=self._where_clause(ctx, where),
            parameters=ctx.counter.params,
        )
        self._log(ctx, table)
        return support


class _WriteAssembler(_Assembler):
    """Column/value handling shared by INSERT and UPDATE."""

    def _writable(
        self,
        table: SqlTable,
        values: Mapping[SqlColumn, Any],
        selective: bool,
        clause: str,
    ) -> list[tuple[SqlColumn, Any]]:
        self._check_table(table, values.keys(), clause)
        seen: set[str] = set()
        rows: list[tuple[SqlColumn, Any]] = []
        for col, value in values.items():
            if col.name in seen:
                raise CompilationError(
                    f"Column '{col.qualified_name}' is written more than once.",
                    clause=clause,
                )
            seen.add(col.name)
            if not col.accepts(value):
                raise ColumnTypeError(col.qualified_name, value, col.type_name)
            if selective and value is None:
                continue
            rows.append((col, value))
        if not rows:
            raise CompilationError(
                f"{self.kind.value} on '{table.name}' has no columns to write.",
                clause=clause,
            )
        return rows


class InsertAssembler(_WriteAssembler):
    """Builds INSERT statements."""

    kind = StatementKind.INSERT

    def assemble(
        self,
        table: SqlTable,
        values: Mapping[SqlColumn, Any],
        *,
        selective: bool = False,
    ) -> InsertSupport:
        """Assemble an INSERT.

        Args:
            table: Target table.
            values: Ordered column to value mapping.
            selective: Leave ``None``-valued columns out of the statement.

        Raises:
            SchemaError: If a column belongs to another table.
            ColumnTypeError: If a value does not fit its column.
            CompilationError: If no column is left to write.
        """
        rows = self._writable(table, values, selective, "insert")
        ctx = self._context()
        support = InsertSupport(
            table=ctx.table_ref(table),
            column_list=", ".join(ctx.column_ref(col) for col, _ in rows),
            values_list=", ".join(ctx.bind(value) for _, value in rows),
            parameters=ctx.counter.params,
        )
        self._log(ctx, table, selective=selective)
        return support


class UpdateAssembler(_WriteAssembler):
    """Builds UPDATE statements; SET and WHERE share one parameter counter."""

    kind = StatementKind.UPDATE

    def assemble(
        self,
        table: SqlTable,
        values: Mapping[SqlColumn, Any],
        where: Sequence[Condition] = (),
        *,
        selective: bool = False,
    ) -> UpdateSupport:
        """Assemble an UPDATE.

        Args:
            table: Target table.
            values: Ordered column to value mapping for the SET clause.
            where: Condition list; empty omits the WHERE clause.
            selective: Leave ``None``-valued columns out of the SET clause.

        Raises:
            SchemaError: If a column belongs to another table.
            ColumnTypeError: If a value does not fit its column.
            CompilationError: If no column is left to write.
            MalformedConditionError: If the condition tree is malformed.
        """
        rows = self._writable(table, values, selective, "set")
        self._check_table(table, self._where_columns(where), "where")
        ctx = self._context()
        assignments = [f"{ctx.column_ref(col)} = {ctx.bind(value)}" for col, value in rows]
        support = UpdateSupport(
            table=ctx.table_ref(table),
            set_clause=f"SET {', '.join(assignments)}",
            where_clause=self._where_clause(ctx, where),
            parameters=ctx.counter.params,
        )
        self._log(ctx, table, selective=selective)
        return support

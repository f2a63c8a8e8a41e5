"""Condition list → SQL text and parameter map.

``ConditionRenderer`` walks a condition list left to right.  Every operand is
registered with the shared :class:`~dynasql.compile.context.ParameterCounter`
and replaced by a dialect placeholder, so no value ever appears in the SQL
text.

Rendering rules
---------------
* A Leaf renders as ``<connector> <column> <operator> <placeholder(s)>``.
* A Group renders as ``<connector> (<inner list>)``; the inner list's first
  element never renders its connector.
* The first element of the top-level list never renders its connector.
* An empty list renders as empty SQL with no parameters.
"""
from __future__ import annotations

from collections.abc import Sequence

import structlog

from dynasql.compile.base import RenderedFragment, SQLCompiler
from dynasql.compile.context import ParameterCounter, RenderContext, StatementKind
from dynasql.errors import MalformedConditionError, UnsupportedOperatorError
from dynasql.schema.conditions import Condition, Group, Leaf, prune_skipped
from dynasql.schema.operators import (
    CASE_INSENSITIVE_OPS,
    OPERATOR_ARITY,
    OPERATOR_SQL,
    Arity,
    OperatorKind,
)
from dynasql.validate.condition_validator import validate_conditions

logger = structlog.get_logger(__name__)


class ConditionRenderer:
    """Renders condition lists within one :class:`RenderContext`.

    Args:
        ctx: Compiler, statement kind and parameter counter for this run.
    """

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, conditions: Sequence[Condition]) -> str:
        """Render ``conditions`` to SQL text; parameters go to the counter.

        Raises:
            MalformedConditionError: If the tree has an arity mismatch or an
                empty group.
            UnsupportedOperatorError: If an operator has no SQL mapping.
        """
        pruned = prune_skipped(tuple(conditions))
        validate_conditions(pruned)
        return self._render_list(pruned)

    # ------------------------------------------------------------------
    # Tree walk
    # ------------------------------------------------------------------

    def _render_list(self, conditions: Sequence[Condition]) -> str:
        parts: list[str] = []
        for index, cond in enumerate(conditions):
            body = self._render_node(cond)
            if index == 0:
                parts.append(body)
            else:
                parts.append(f"{cond.connector.value} {body}")
        return " ".join(parts)

    def _render_node(self, cond: Condition) -> str:
        if isinstance(cond, Group):
            return f"({self._render_list(cond.conditions)})"
        if isinstance(cond, Leaf):
            return self._render_leaf(cond)
        raise MalformedConditionError(f"Unknown condition node: {type(cond).__name__}.")

    def _render_leaf(self, leaf: Leaf) -> str:
        criterion = leaf.criterion
        column = self._ctx.column_ref(leaf.column)
        placeholders = [self._ctx.bind(value) for value in criterion.operands]

        if criterion.operator is OperatorKind.CUSTOM:
            return criterion.custom.render(column, placeholders)

        sql_op = OPERATOR_SQL.get(criterion.operator)
        arity = OPERATOR_ARITY.get(criterion.operator)
        if sql_op is None or arity is None:
            raise UnsupportedOperatorError(criterion.operator)

        if criterion.operator in CASE_INSENSITIVE_OPS:
            column = f"upper({column})"
            placeholders = [f"upper({ph})" for ph in placeholders]

        if arity is Arity.NONE:
            return f"{column} {sql_op}"
        if arity is Arity.RANGE:
            return f"{column} {sql_op} {placeholders[0]} AND {placeholders[1]}"
        if arity is Arity.LIST:
            return f"{column} {sql_op} ({', '.join(placeholders)})"
        return f"{column} {sql_op} {placeholders[0]}"


def render_where(
    conditions: Sequence[Condition],
    compiler: SQLCompiler,
    kind: StatementKind = StatementKind.SELECT,
    parameter_prefix: str = "p",
) -> RenderedFragment:
    """Render a condition list on its own, with a fresh parameter counter.

    Args:
        conditions: The condition list to render.
        compiler: Dialect compiler.
        kind: Statement kind; aliases are only honoured for SELECT.
        parameter_prefix: Prefix of generated parameter names.

    Returns:
        :class:`RenderedFragment` with condition SQL (no ``WHERE`` keyword).
    """
    ctx = RenderContext(compiler=compiler, kind=kind, counter=ParameterCounter(parameter_prefix))
    sql = ConditionRenderer(ctx).render(conditions)
    logger.debug(
        "conditions_rendered",
        kind=kind.value,
        dialect=compiler.dialect_name,
        parameter_count=len(ctx.counter.params),
    )
    return RenderedFragment(sql=sql, parameters=ctx.counter.params)

"""Fluent construction of condition lists.

``where()`` starts an append-only :class:`ConditionListBuilder`::

    conditions = (
        where(person_id, is_greater_than(2))
        .and_(occupation, is_null())
        .or_(last_name, is_in("Flintstone", "Rubble"), and_(first_name, is_like("B%")))
        .build()
    )

Every append is validated immediately; ``build()`` returns an immutable
condition list and consumes the builder.
"""
from __future__ import annotations

from dynasql.errors import BuilderStateError
from dynasql.schema.conditions import (
    Condition,
    ConditionList,
    Connector,
    Group,
    make_condition,
    prune_skipped,
)
from dynasql.schema.criteria import Criterion
from dynasql.schema.table import SqlColumn
from dynasql.validate.condition_validator import validate_conditions, validate_criterion


class ConditionListBuilder:
    """Append-only builder for a :data:`ConditionList`."""

    def __init__(self) -> None:
        self._conditions: list[Condition] = []
        self._built = False

    # ------------------------------------------------------------------
    # Appending
    # ------------------------------------------------------------------

    def and_(
        self, column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
    ) -> ConditionListBuilder:
        """Append an AND-attached leaf, or a group when sub conditions are given."""
        return self._append(Connector.AND, column, criterion, sub_conditions)

    def or_(
        self, column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
    ) -> ConditionListBuilder:
        """Append an OR-attached leaf, or a group when sub conditions are given."""
        return self._append(Connector.OR, column, criterion, sub_conditions)

    def and_group(self, *conditions: Condition) -> ConditionListBuilder:
        """Append an AND-attached group of pre-built conditions."""
        return self._append_group(Connector.AND, conditions)

    def or_group(self, *conditions: Condition) -> ConditionListBuilder:
        """Append an OR-attached group of pre-built conditions."""
        return self._append_group(Connector.OR, conditions)

    def build(self) -> ConditionList:
        """Return the immutable condition list.

        Raises:
            BuilderStateError: If the builder was already built.
        """
        self._ensure_open()
        self._built = True
        return prune_skipped(tuple(self._conditions))

    def __len__(self) -> int:
        return len(self._conditions)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start(
        self, column: SqlColumn, criterion: Criterion, sub_conditions: tuple[Condition, ...]
    ) -> ConditionListBuilder:
        return self._append(Connector.NONE, column, criterion, sub_conditions)

    def _append(
        self,
        connector: Connector,
        column: SqlColumn,
        criterion: Criterion,
        sub_conditions: tuple[Condition, ...],
    ) -> ConditionListBuilder:
        self._ensure_open()
        if not self._conditions:
            connector = Connector.NONE
        validate_criterion(criterion)
        cond = make_condition(connector, column, criterion, sub_conditions)
        validate_conditions(prune_skipped((cond,)))
        self._conditions.append(cond)
        return self

    def _append_group(
        self, connector: Connector, conditions: tuple[Condition, ...]
    ) -> ConditionListBuilder:
        self._ensure_open()
        if not self._conditions:
            connector = Connector.NONE
        group = Group(conditions=tuple(conditions), connector=connector)
        validate_conditions(prune_skipped((group,)))
        self._conditions.append(group)
        return self

    def _ensure_open(self) -> None:
        if self._built:
            raise BuilderStateError(type(self).__name__)


def where(
    column: SqlColumn, criterion: Criterion, *sub_conditions: Condition
) -> ConditionListBuilder:
    """Start a condition list.

    With sub conditions the first node is a parenthesised group::

        where(a, is_equal_to(1), or_(b, is_equal_to(2)))  # (a = ? OR b = ?)
    """
    return ConditionListBuilder()._start(column, criterion, sub_conditions)


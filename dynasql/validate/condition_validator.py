"""Condition tree validation.

Used twice: by the builders when a condition is appended, and defensively by
the renderer before any SQL is produced, so that trees assembled by hand
(outside the builders) still fail before rendering starts.
"""
from __future__ import annotations

from collections.abc import Iterable

from dynasql.errors import ColumnTypeError, MalformedConditionError
from dynasql.schema.conditions import Condition, Connector, Group, Leaf
from dynasql.schema.criteria import Criterion
from dynasql.schema.operators import STRING_OPS, OperatorKind, check_arity


def validate_criterion(criterion: Criterion) -> None:
    """Check the criterion's operand count against its operator.

    Raises:
        MalformedConditionError: On an arity mismatch.
        UnsupportedOperatorError: On an unknown operator.
    """
    if not isinstance(criterion, Criterion):
        raise MalformedConditionError(
            f"Expected a Criterion, got {type(criterion).__name__}."
        )
    if criterion.skip:
        return
    check_arity(criterion.operator, len(criterion.operands), criterion.custom)


def validate_leaf(leaf: Leaf) -> None:
    """Check arity and every operand against the column's type tag.

    Raises:
        MalformedConditionError: On an arity mismatch.
        ColumnTypeError: When an operand does not fit the column.
    """
    criterion = leaf.criterion
    validate_criterion(criterion)
    if criterion.operator is OperatorKind.CUSTOM:
        return
    for value in criterion.operands:
        if criterion.operator in STRING_OPS:
            if not isinstance(value, str):
                raise ColumnTypeError(leaf.column.qualified_name, value, "str")
        elif not leaf.column.accepts(value):
            raise ColumnTypeError(leaf.column.qualified_name, value, leaf.column.type_name)


def validate_conditions(conditions: Iterable[Condition]) -> None:
    """Recursively validate a condition list.

    Raises:
        MalformedConditionError: On an arity mismatch, an empty group, a
            connector-less node after the first, or a node that is neither
            a Leaf nor a Group.
        ColumnTypeError: When an operand does not fit its column.
    """
    for index, cond in enumerate(conditions):
        if index and getattr(cond, "connector", None) is Connector.NONE:
            raise MalformedConditionError(
                "Only the first condition of a list may omit its connector."
            )
        if isinstance(cond, Leaf):
            validate_leaf(cond)
        elif isinstance(cond, Group):
            if not cond.conditions:
                raise MalformedConditionError("Condition groups cannot be empty.")
            validate_conditions(cond.conditions)
        else:
            raise MalformedConditionError(
                f"Unknown condition node: {type(cond).__name__}."
            )

"""The condition tree.

A condition list is a flat tuple of :class:`Leaf` and :class:`Group` nodes.
Each node records, in :attr:`connector`, how it attaches to its left
sibling; the first node of any list attaches with :attr:`Connector.NONE`.
A :class:`Group` is a parenthesised sub-list with the same shape.

``and_`` / ``or_`` build nodes to embed in another condition::

    where(a, is_equal_to(1)).or_(b, is_equal_to(2), and_(c, is_equal_to(3)))
    # a = ? OR (b = ? AND c = ?)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from dynasql.schema.criteria import Criterion
from dynasql.schema.table import SqlColumn


class Connector(str, Enum):
    """How a condition joins its predecessor."""

    AND = "AND"
    OR = "OR"
    NONE = "NONE"


@dataclass(frozen=True)
class Leaf:
    """A single ``column operator operand(s)`` test."""

    column: SqlColumn
    criterion: Criterion
    connector: Connector = Connector.NONE


@dataclass(frozen=True)
class Group:
    """A parenthesised sequence of conditions."""

    conditions: tuple[Condition, ...]
    connector: Connector = Connector.NONE


Condition = Union[Leaf, Group]

#: An immutable, ready-to-render condition list.
ConditionList = tuple[Condition, ...]


def make_condition(
    connector: Connector,
    column: SqlColumn,
    criterion: Criterion,
    sub_conditions: tuple[Condition, ...] = (),
) -> Condition:
    """Return a Leaf, or a Group led by the leaf when sub conditions exist."""
    if not sub_conditions:
        return Leaf(column=column, criterion=criterion, connector=connector)
    head = Leaf(column=column, criterion=criterion)
    return Group(conditions=(head, *sub_conditions), connector=connector)


def and_(column: SqlColumn, criterion: Criterion, *sub_conditions: Condition) -> Condition:
    """An AND-attached condition for embedding in another condition."""
    return make_condition(Connector.AND, column, criterion, sub_conditions)


def or_(column: SqlColumn, criterion: Criterion, *sub_conditions: Condition) -> Condition:
    """An OR-attached condition for embedding in another condition."""
    return make_condition(Connector.OR, column, criterion, sub_conditions)


def prune_skipped(conditions: tuple[Condition, ...]) -> ConditionList:
    """Drop skipped leaves and any group they leave empty, recursively.

    Groups that were empty to begin with are kept so validation reports them.
    """
    kept: list[Condition] = []
    for cond in conditions:
        if isinstance(cond, Group):
            inner = prune_skipped(cond.conditions)
            if inner or not cond.conditions:
                kept.append(Group(conditions=inner, connector=cond.connector))
        elif not (isinstance(cond, Leaf) and cond.criterion.skip):
            kept.append(cond)
    return tuple(kept)


def operand_count(conditions: tuple[Condition, ...]) -> int:
    """Total number of bound operands in a condition list."""
    total = 0
    for cond in conditions:
        if isinstance(cond, Leaf):
            total += len(cond.criterion.operands)
        else:
            total += operand_count(cond.conditions)
    return total

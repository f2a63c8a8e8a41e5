"""Operator kinds, their operand arity, and their SQL renderings.

Every condition operator is a member of the closed :class:`OperatorKind`
enumeration.  Two fixed tables describe each kind:

* :data:`OPERATOR_ARITY` – how many operands the operator binds.
* :data:`OPERATOR_SQL` – the SQL keyword(s) the renderer emits.

The single open extension point is :attr:`OperatorKind.CUSTOM`, whose SQL
template and arity travel with the condition in a :class:`CustomOperator`.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from dynasql.errors import MalformedConditionError, UnsupportedOperatorError


class OperatorKind(str, Enum):
    """All condition operators."""

    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT_BETWEEN"
    IN = "IN"
    NOT_IN = "NOT_IN"
    LIKE = "LIKE"
    NOT_LIKE = "NOT_LIKE"
    LIKE_CASE_INSENSITIVE = "LIKE_CASE_INSENSITIVE"
    NOT_LIKE_CASE_INSENSITIVE = "NOT_LIKE_CASE_INSENSITIVE"
    IN_CASE_INSENSITIVE = "IN_CASE_INSENSITIVE"
    NOT_IN_CASE_INSENSITIVE = "NOT_IN_CASE_INSENSITIVE"
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"
    CUSTOM = "CUSTOM"


class Arity(str, Enum):
    """Operand count families."""

    NONE = "NONE"  # exactly 0
    SINGLE = "SINGLE"  # exactly 1
    RANGE = "RANGE"  # exactly 2
    LIST = "LIST"  # 1 or more


OPERATOR_ARITY: dict[OperatorKind, Arity] = {
    OperatorKind.EQUAL: Arity.SINGLE,
    OperatorKind.NOT_EQUAL: Arity.SINGLE,
    OperatorKind.GREATER_THAN: Arity.SINGLE,
    OperatorKind.GREATER_THAN_OR_EQUAL: Arity.SINGLE,
    OperatorKind.LESS_THAN: Arity.SINGLE,
    OperatorKind.LESS_THAN_OR_EQUAL: Arity.SINGLE,
    OperatorKind.BETWEEN: Arity.RANGE,
    OperatorKind.NOT_BETWEEN: Arity.RANGE,
    OperatorKind.IN: Arity.LIST,
    OperatorKind.NOT_IN: Arity.LIST,
    OperatorKind.LIKE: Arity.SINGLE,
    OperatorKind.NOT_LIKE: Arity.SINGLE,
    OperatorKind.LIKE_CASE_INSENSITIVE: Arity.SINGLE,
    OperatorKind.NOT_LIKE_CASE_INSENSITIVE: Arity.SINGLE,
    OperatorKind.IN_CASE_INSENSITIVE: Arity.LIST,
    OperatorKind.NOT_IN_CASE_INSENSITIVE: Arity.LIST,
    OperatorKind.IS_NULL: Arity.NONE,
    OperatorKind.IS_NOT_NULL: Arity.NONE,
}

OPERATOR_SQL: dict[OperatorKind, str] = {
    OperatorKind.EQUAL: "=",
    OperatorKind.NOT_EQUAL: "<>",
    OperatorKind.GREATER_THAN: ">",
    OperatorKind.GREATER_THAN_OR_EQUAL: ">=",
    OperatorKind.LESS_THAN: "<",
    OperatorKind.LESS_THAN_OR_EQUAL: "<=",
    OperatorKind.BETWEEN: "BETWEEN",
    OperatorKind.NOT_BETWEEN: "NOT BETWEEN",
    OperatorKind.IN: "IN",
    OperatorKind.NOT_IN: "NOT IN",
    OperatorKind.LIKE: "LIKE",
    OperatorKind.NOT_LIKE: "NOT LIKE",
    OperatorKind.LIKE_CASE_INSENSITIVE: "LIKE",
    OperatorKind.NOT_LIKE_CASE_INSENSITIVE: "NOT LIKE",
    OperatorKind.IN_CASE_INSENSITIVE: "IN",
    OperatorKind.NOT_IN_CASE_INSENSITIVE: "NOT IN",
    OperatorKind.IS_NULL: "IS NULL",
    OperatorKind.IS_NOT_NULL: "IS NOT NULL",
}

#: Operators that compare ``upper(column)`` against ``upper(value)``.
CASE_INSENSITIVE_OPS: frozenset[OperatorKind] = frozenset({
    OperatorKind.LIKE_CASE_INSENSITIVE,
    OperatorKind.NOT_LIKE_CASE_INSENSITIVE,
    OperatorKind.IN_CASE_INSENSITIVE,
    OperatorKind.NOT_IN_CASE_INSENSITIVE,
})

#: Operators whose operands must be strings.
STRING_OPS: frozenset[OperatorKind] = CASE_INSENSITIVE_OPS | {
    OperatorKind.LIKE,
    OperatorKind.NOT_LIKE,
}


def describe_arity(arity: Arity | int) -> str:
    """Human-readable operand count used in error messages."""
    if isinstance(arity, int):
        return f"exactly {arity}"
    return {
        Arity.NONE: "exactly 0",
        Arity.SINGLE: "exactly 1",
        Arity.RANGE: "exactly 2",
        Arity.LIST: "at least 1",
    }[arity]


def arity_matches(arity: Arity | int, count: int) -> bool:
    if isinstance(arity, int):
        return count == arity
    if arity is Arity.LIST:
        return count >= 1
    return count == {Arity.NONE: 0, Arity.SINGLE: 1, Arity.RANGE: 2}[arity]


@dataclass(frozen=True)
class CustomOperator:
    """A caller-defined operator.

    The template receives the rendered column reference as ``{column}`` and
    one placeholder per operand as ``{0}``, ``{1}``, ...::

        JSON_CONTAINS = CustomOperator("{column} @> {0}", arity=1)
        MASKED_EQUALS = CustomOperator("({column} & {0}) = {1}", arity=2)

    Each positional field appears exactly once and in ascending order, so
    positional (``?``) placeholders line up with the bound operands.

    Attributes:
        template: SQL template text.
        arity: Exact number of operands the operator binds.
    """

    template: str
    arity: int

    def __post_init__(self) -> None:
        if self.arity < 0:
            raise MalformedConditionError(
                f"Custom operator arity must be non-negative, got {self.arity}.",
                operator=OperatorKind.CUSTOM.value,
            )
        positional: list[int] = []
        for _, field_name, _, _ in string.Formatter().parse(self.template):
            if field_name is None or field_name == "column":
                continue
            if not field_name.isdigit():
                raise MalformedConditionError(
                    f"Custom operator template has unknown field '{{{field_name}}}'.",
                    operator=OperatorKind.CUSTOM.value,
                )
            positional.append(int(field_name))
        if positional != list(range(self.arity)):
            raise MalformedConditionError(
                f"Custom operator template must reference placeholders "
                f"{{0}}..{{{self.arity - 1}}} once each, in order; found {positional}.",
                operator=OperatorKind.CUSTOM.value,
                expected=describe_arity(self.arity),
                actual=len(positional),
            )

    def render(self, column: str, placeholders: list[str]) -> str:
        return self.template.format(*placeholders, column=column)


def check_arity(
    operator: OperatorKind,
    operand_count: int,
    custom: CustomOperator | None = None,
) -> None:
    """Raise :class:`MalformedConditionError` on an operand count mismatch.

    Raises:
        MalformedConditionError: If the count does not fit the operator, or a
            CUSTOM operator has no :class:`CustomOperator` attached.
        UnsupportedOperatorError: If the operator has no arity entry.
    """
    if operator is OperatorKind.CUSTOM:
        if custom is None:
            raise MalformedConditionError(
                "CUSTOM conditions require a CustomOperator.",
                operator=operator.value,
            )
        arity: Arity | int = custom.arity
    else:
        found = OPERATOR_ARITY.get(operator)
        if found is None:
            raise UnsupportedOperatorError(operator)
        arity = found
    if not arity_matches(arity, operand_count):
        raise MalformedConditionError(
            f"{operator.value} takes {describe_arity(arity)} operand(s), "
            f"got {operand_count}.",
            operator=operator.value,
            expected=describe_arity(arity),
            actual=operand_count,
        )

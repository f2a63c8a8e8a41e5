"""Operator-with-operands values and their factory functions.

A :class:`Criterion` is the right-hand side of one condition: the operator
and the values it binds.  Factories validate operand counts immediately, so
a malformed criterion never reaches a condition tree::

    where(person_id, is_between(1, 4))
    where(last_name, is_in("Flintstone", "Rubble"))
    where(birth_date, is_null())

"When present" factories mark the criterion as skipped when the value is
``None``; condition builders drop skipped leaves instead of rendering them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from dynasql.errors import MalformedConditionError
from dynasql.schema.operators import CustomOperator, OperatorKind, check_arity


@dataclass(frozen=True)
class Criterion:
    """An operator and its bound operands.

    Attributes:
        operator: The operator kind.
        operands: Values bound in placeholder order.
        custom: Template and arity for :attr:`OperatorKind.CUSTOM`.
        skip: True when a "when present" criterion received no value.
    """

    operator: OperatorKind
    operands: tuple[Any, ...] = ()
    custom: CustomOperator | None = None
    skip: bool = False

    def __post_init__(self) -> None:
        if self.skip:
            return
        check_arity(self.operator, len(self.operands), self.custom)
        if self.operator is not OperatorKind.CUSTOM and any(
            value is None for value in self.operands
        ):
            raise MalformedConditionError(
                f"{self.operator.value} cannot bind None; "
                "use is_null() / is_not_null() or a *_when_present criterion.",
                operator=self.operator.value,
            )


def _values(values: tuple[Any, ...]) -> tuple[Any, ...]:
    # is_in([1, 2, 3]) and is_in(1, 2, 3) are equivalent
    if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(
        values[0], (str, bytes)
    ):
        return tuple(values[0])
    return values


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def is_equal_to(value: Any) -> Criterion:
    return Criterion(OperatorKind.EQUAL, (value,))


def is_not_equal_to(value: Any) -> Criterion:
    return Criterion(OperatorKind.NOT_EQUAL, (value,))


def is_greater_than(value: Any) -> Criterion:
    return Criterion(OperatorKind.GREATER_THAN, (value,))


def is_greater_than_or_equal_to(value: Any) -> Criterion:
    return Criterion(OperatorKind.GREATER_THAN_OR_EQUAL, (value,))


def is_less_than(value: Any) -> Criterion:
    return Criterion(OperatorKind.LESS_THAN, (value,))


def is_less_than_or_equal_to(value: Any) -> Criterion:
    return Criterion(OperatorKind.LESS_THAN_OR_EQUAL, (value,))


# ---------------------------------------------------------------------------
# Range and membership
# ---------------------------------------------------------------------------


def is_between(*bounds: Any) -> Criterion:
    """``BETWEEN low AND high``; exactly two bounds are required."""
    return Criterion(OperatorKind.BETWEEN, bounds)


def is_not_between(*bounds: Any) -> Criterion:
    return Criterion(OperatorKind.NOT_BETWEEN, bounds)


def is_in(*values: Any) -> Criterion:
    """``IN (...)``; accepts values as arguments or as one iterable."""
    return Criterion(OperatorKind.IN, _values(values))


def is_not_in(*values: Any) -> Criterion:
    return Criterion(OperatorKind.NOT_IN, _values(values))


def is_in_case_insensitive(*values: Any) -> Criterion:
    return Criterion(OperatorKind.IN_CASE_INSENSITIVE, _values(values))


def is_not_in_case_insensitive(*values: Any) -> Criterion:
    return Criterion(OperatorKind.NOT_IN_CASE_INSENSITIVE, _values(values))


# ---------------------------------------------------------------------------
# Pattern matching
# ---------------------------------------------------------------------------


def is_like(pattern: str) -> Criterion:
    return Criterion(OperatorKind.LIKE, (pattern,))


def is_not_like(pattern: str) -> Criterion:
    return Criterion(OperatorKind.NOT_LIKE, (pattern,))


def is_like_case_insensitive(pattern: str) -> Criterion:
    return Criterion(OperatorKind.LIKE_CASE_INSENSITIVE, (pattern,))


def is_not_like_case_insensitive(pattern: str) -> Criterion:
    return Criterion(OperatorKind.NOT_LIKE_CASE_INSENSITIVE, (pattern,))


# ---------------------------------------------------------------------------
# Null checks
# ---------------------------------------------------------------------------


def is_null() -> Criterion:
    return Criterion(OperatorKind.IS_NULL)


def is_not_null() -> Criterion:
    return Criterion(OperatorKind.IS_NOT_NULL)


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------


def custom(operator: CustomOperator, *values: Any) -> Criterion:
    """Bind ``values`` to a caller-defined :class:`CustomOperator`."""
    return Criterion(OperatorKind.CUSTOM, values, custom=operator)


# ---------------------------------------------------------------------------
# "When present" variants
# ---------------------------------------------------------------------------


def _when_present(operator: OperatorKind, value: Any) -> Criterion:
    if value is None:
        return Criterion(operator, skip=True)
    return Criterion(operator, (value,))


def is_equal_to_when_present(value: Any) -> Criterion:
    return _when_present(OperatorKind.EQUAL, value)


def is_not_equal_to_when_present(value: Any) -> Criterion:
    return _when_present(OperatorKind.NOT_EQUAL, value)


def is_greater_than_when_present(value: Any) -> Criterion:
    return _when_present(OperatorKind.GREATER_THAN, value)


def is_less_than_when_present(value: Any) -> Criterion:
    return _when_present(OperatorKind.LESS_THAN, value)


def is_like_when_present(pattern: str | None) -> Criterion:
    return _when_present(OperatorKind.LIKE, pattern)


def is_in_when_present(*values: Any) -> Criterion:
    """``IN (...)`` over the non-``None`` values; skipped when none remain."""
    present = tuple(v for v in _values(values) if v is not None)
    if not present:
        return Criterion(OperatorKind.IN, skip=True)
    return Criterion(OperatorKind.IN, present)

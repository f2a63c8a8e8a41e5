"""Statement support values: the output of the assemblers.

Each support bundles the independently retrievable text slots of one
statement with the merged parameter map.  Supports are immutable; the
parameter map is exposed through a read-only mapping and may be bound and
re-executed any number of times.

Slot names used by template-driven mappers (see :meth:`slots`):

=================  ==========================================================
``distinct``       ``"DISTINCT"`` or ``""``
``whereClause``    ``"WHERE ..."`` or ``""`` when there are no conditions
``orderByClause``  ``"ORDER BY ..."`` or ``""`` when no ordering is requested
=================  ==========================================================
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from string import Template
from types import MappingProxyType
from typing import Any


def _freeze(obj: Any) -> None:
    if not isinstance(obj.parameters, MappingProxyType):
        object.__setattr__(obj, "parameters", MappingProxyType(dict(obj.parameters)))


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


class _SupportMixin(ABC):
    """Behaviour shared by every support value."""

    parameters: Mapping[str, Any]

    def parameter_values(self) -> list[Any]:
        """Parameter values in placeholder order, for positional drivers."""
        return list(self.parameters.values())

    @abstractmethod
    def slots(self) -> dict[str, str]:
        """Slot name to slot text, for template-driven mappers."""

    def render_template(self, template: str) -> str:
        """Substitute ``${slot}`` markers with this support's slot text.

        Raises:
            KeyError: If the template names an unknown slot.
        """
        return Template(template).substitute(self.slots())


@dataclass(frozen=True)
class WhereSupport(_SupportMixin):
    """A stand-alone WHERE clause.

    Attributes:
        where_clause: ``"WHERE <conditions>"`` or ``""``.
        parameters: Parameter name to value.
    """

    where_clause: str
    parameters: Mapping[str, Any]

    def __post_init__(self) -> None:
        _freeze(self)

    def slots(self) -> dict[str, str]:
        return {"whereClause": self.where_clause}


@dataclass(frozen=True)
class SelectSupport(_SupportMixin):
    """A rendered SELECT statement.

    Attributes:
        table: FROM target, with its alias.
        distinct: ``"DISTINCT"`` or ``""``.
        column_list: Comma-joined select list.
        where_clause: ``"WHERE ..."`` or ``""``.
        order_by_clause: ``"ORDER BY ..."`` or ``""``.
        limit_clause: ``"LIMIT n"`` / ``"OFFSET n"`` text or ``""``.
        parameters: Parameter name to value.
    """

    table: str
    distinct: str
    column_list: str
    where_clause: str
    order_by_clause: str
    limit_clause: str
    parameters: Mapping[str, Any]

    def __post_init__(self) -> None:
        _freeze(self)

    @property
    def is_distinct(self) -> bool:
        return bool(self.distinct)

    @property
    def statement(self) -> str:
        return _join(
            "SELECT",
            self.distinct,
            self.column_list,
            "FROM",
            self.table,
            self.where_clause,
            self.order_by_clause,
            self.limit_clause,
        )

    def slots(self) -> dict[str, str]:
        return {
            "distinct": self.distinct,
            "columnList": self.column_list,
            "tableName": self.table,
            "whereClause": self.where_clause,
            "orderByClause": self.order_by_clause,
            "limitClause": self.limit_clause,
        }


@dataclass(frozen=True)
class DeleteSupport(_SupportMixin):
    """A rendered DELETE statement.

    Attributes:
        table: Bare table name.
        where_clause: ``"WHERE ..."`` or ``""``.
        parameters: Parameter name to value.
    """

    table: str
    where_clause: str
    parameters: Mapping[str, Any]

    def __post_init__(self) -> None:
        _freeze(self)

    @property
    def statement(self) -> str:
        return _join("DELETE FROM", self.table, self.where_clause)

    def slots(self) -> dict[str, str]:
        return {"tableName": self.table, "whereClause": self.where_clause}


@dataclass(frozen=True)
class InsertSupport(_SupportMixin):
    """A rendered INSERT statement.

    Attributes:
        table: Bare table name.
        column_list: Comma-joined column names.
        values_list: Comma-joined placeholders, one per column.
        parameters: Parameter name to value.
    """

    table: str
    column_list: str
    values_list: str
    parameters: Mapping[str, Any]

    def __post_init__(self) -> None:
        _freeze(self)

    @property
    def statement(self) -> str:
        return f"INSERT INTO {self.table} ({self.column_list}) VALUES ({self.values_list})"

    def slots(self) -> dict[str, str]:
        return {
            "tableName": self.table,
            "columnList": self.column_list,
            "valuesList": self.values_list,
        }


@dataclass(frozen=True)
class UpdateSupport(_SupportMixin):
    """A rendered UPDATE statement.

    SET and WHERE parameters share one counter, so their names never collide.

    Attributes:
        table: Bare table name.
        set_clause: ``"SET col = ?, ..."``.
        where_clause: ``"WHERE ..."`` or ``""``.
        parameters: Parameter name to value, SET parameters first.
    """

    table: str
    set_clause: str
    where_clause: str
    parameters: Mapping[str, Any]

    def __post_init__(self) -> None:
        _freeze(self)

    @property
    def statement(self) -> str:
        return _join("UPDATE", self.table, self.set_clause, self.where_clause)

    def slots(self) -> dict[str, str]:
        return {
            "tableName": self.table,
            "setClause": self.set_clause,
            "whereClause": self.where_clause,
        }

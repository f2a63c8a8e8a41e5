"""Immutable table and column descriptors.

Tables and columns are created once at schema-definition time and shared by
reference across every statement built against them.  Identifier names are
checked when the descriptor is created, so no caller-supplied text ever
reaches rendered SQL unvalidated.

Usage::

    person = SqlTable("person", alias="p")
    person_id = person.column("id", int)
    first_name = person.column("first_name", str)
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any

from dynasql.errors import SchemaError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def check_identifier(name: str, kind: str) -> str:
    """Return ``name`` unchanged, or raise :class:`SchemaError` if unsafe."""
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise SchemaError(
            f"Invalid {kind} name: {name!r}.",
            details={kind: name, "pattern": _IDENTIFIER.pattern},
        )
    return name


@dataclass(frozen=True)
class SqlTable:
    """A table and its optional alias.

    Attributes:
        name: Table name.
        alias: Alias used in SELECT statements only.
    """

    name: str
    alias: str | None = None

    def __post_init__(self) -> None:
        check_identifier(self.name, "table")
        if self.alias is not None:
            check_identifier(self.alias, "alias")

    def column(self, name: str, value_type: type | None = None) -> SqlColumn:
        """Create a column owned by this table."""
        return SqlColumn(name=name, table=self, value_type=value_type)

    def __str__(self) -> str:
        return f"{self.name} {self.alias}" if self.alias else self.name


@dataclass(frozen=True)
class SqlColumn:
    """A queryable column.

    Attributes:
        name: Column name.
        table: Owning table.
        value_type: Python type tag for bound values, ``None`` for any.
        alias: Column alias rendered as ``AS alias`` in SELECT lists.
    """

    name: str
    table: SqlTable
    value_type: type | None = None
    alias: str | None = None

    def __post_init__(self) -> None:
        check_identifier(self.name, "column")
        if self.alias is not None:
            check_identifier(self.alias, "alias")

    # ------------------------------------------------------------------
    # Derived descriptors
    # ------------------------------------------------------------------

    def as_(self, alias: str) -> SqlColumn:
        """Return a copy of this column carrying a SELECT column alias."""
        return dataclasses.replace(self, alias=alias)

    def descending(self) -> SortSpecification:
        """Return a descending sort on this column."""
        return SortSpecification(column=self, descending=True)

    # ------------------------------------------------------------------
    # Type tag
    # ------------------------------------------------------------------

    def accepts(self, value: Any) -> bool:
        """True when ``value`` may be bound to this column."""
        if value is None or self.value_type is None:
            return True
        if isinstance(value, bool) and self.value_type is not bool:
            return False
        if self.value_type is float and isinstance(value, int):
            return True
        return isinstance(value, self.value_type)

    @property
    def type_name(self) -> str:
        return self.value_type.__name__ if self.value_type is not None else "any"

    @property
    def qualified_name(self) -> str:
        return f"{self.table.name}.{self.name}"

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class SortSpecification:
    """An ORDER BY entry.

    Attributes:
        column: Column to sort on.
        descending: Emit ``DESC`` after the column when True.
    """

    column: SqlColumn
    descending: bool = False


def to_sort_specification(item: SqlColumn | SortSpecification) -> SortSpecification:
    """Normalise a bare column to an ascending :class:`SortSpecification`."""
    if isinstance(item, SortSpecification):
        return item
    return SortSpecification(column=item)

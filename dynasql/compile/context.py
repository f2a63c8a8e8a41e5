"""Render context value objects.

``RenderContext`` packages the ``(compiler, statement kind, parameter
counter)`` data clump shared by the renderer and every assembler for one
render call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dynasql.compile.base import SQLCompiler
from dynasql.schema.table import SqlColumn, SqlTable


class StatementKind(str, Enum):
    """The statement a fragment is rendered for."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    @property
    def honors_aliases(self) -> bool:
        """Table and column aliases are only rendered in SELECT."""
        return self is StatementKind.SELECT


@dataclass
class ParameterCounter:
    """Mints parameter names during a single render call.

    One instance is created per render invocation and shared by every clause
    of that statement (e.g. UPDATE's SET and WHERE), so names are unique
    within the statement and never shared across calls.
    """

    prefix: str = "p"
    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, value: Any) -> str:
        """Store a value and return its freshly minted parameter name."""
        self._counter += 1
        name = f"{self.prefix}{self._counter}"
        self.params[name] = value
        return name


@dataclass(frozen=True)
class RenderContext:
    """Immutable context for a single render run.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
        kind: Statement kind being rendered.
        counter: Parameter accumulator for this run.
    """

    compiler: SQLCompiler
    kind: StatementKind
    counter: ParameterCounter = field(default_factory=ParameterCounter)

    def bind(self, value: Any) -> str:
        """Register ``value`` and return its placeholder text."""
        return self.compiler.param_placeholder(self.counter.add_value(value))

    def column_ref(self, column: SqlColumn) -> str:
        """Column reference for WHERE / SET / ORDER BY positions."""
        quote = self.compiler.quote_identifier
        alias = column.table.alias
        if self.kind.honors_aliases and alias:
            return f"{quote(alias)}.{quote(column.name)}"
        return quote(column.name)

    def table_ref(self, table: SqlTable) -> str:
        """Table reference for FROM / INTO / UPDATE / DELETE FROM positions."""
        quote = self.compiler.quote_identifier
        if self.kind.honors_aliases and table.alias:
            return f"{quote(table.name)} {quote(table.alias)}"
        return quote(table.name)

"""Compiler abstractions: RenderedFragment and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines the dialect-specific steps every renderer needs
  (parameter placeholder style and identifier quoting).
- ``GenericCompiler``, ``PostgresCompiler``, ``SQLiteCompiler`` and
  ``MySQLCompiler`` override them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class RenderedFragment:
    """SQL text plus the parameters its placeholders refer to.

    Attributes:
        sql: Rendered SQL with dialect placeholders; empty for an empty
            condition list.
        parameters: Parameter name to bound value, in placeholder order.
    """

    sql: str
    parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, MappingProxyType):
            object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def is_empty(self) -> bool:
        return not self.sql


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    Subclasses implement the dialect-specific methods; the renderer and the
    assemblers use this interface via the Strategy / Template Method patterns.
    """

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name (e.g. ``'p1'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table, alias or column name).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'postgres'``)."""

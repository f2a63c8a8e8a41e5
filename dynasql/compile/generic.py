"""Generic (qmark) compiler."""
from __future__ import annotations

from dynasql.compile.base import SQLCompiler


class GenericCompiler(SQLCompiler):
    """Renders positional ``?`` placeholders and unquoted identifiers.

    Parameter style: ``qmark`` – bind with
    ``cursor.execute(sql, support.parameter_values())``.  Identifiers are
    already restricted to ``[A-Za-z_][A-Za-z0-9_$]*`` when tables and columns
    are created, so they are emitted as-is.
    """

    @property
    def dialect_name(self) -> str:
        return "generic"

    def param_placeholder(self, name: str) -> str:
        return "?"

    def quote_identifier(self, name: str) -> str:
        return name

"""MySQL dialect compiler."""

from __future__ import annotations

from dynasql.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Renders MySQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"

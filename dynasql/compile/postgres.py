"""PostgreSQL dialect compiler."""

from __future__ import annotations

from dynasql.compile.base import SQLCompiler


class PostgresCompiler(SQLCompiler):
    """Renders PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``psycopg2`` and
    ``psycopg`` named-parameter execution.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

"""Caller-owned schema registry.

The registry replaces process-wide column singletons: the caller defines its
tables once, keeps the resulting :class:`SchemaRegistry`, and passes columns
out of it to builders and assemblers.  The registry is immutable after
``build()``.

Create a registry through the builder::

    registry = (
        SchemaRegistry.builder()
        .table("person", alias="p")
        .column("id", int)
        .column("first_name", str)
        .table("address")
        .column("id", int)
        .build()
    )
    first_name = registry.column("person", "first_name")

or from plain data (e.g. a JSON document)::

    registry = SchemaRegistry.from_definitions(
        [TableDefinition.model_validate(item) for item in json.load(fp)]
    )
"""
from __future__ import annotations

import datetime
import decimal
from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from dynasql.errors import SchemaError
from dynasql.schema.column_reference import ColumnReference
from dynasql.schema.table import SqlColumn, SqlTable

#: Type names accepted in :class:`ColumnDefinition`.
ColumnTypeName = Literal[
    "int", "str", "float", "bool", "decimal", "date", "datetime", "bytes", "any"
]

_TYPE_TAGS: dict[str, type | None] = {
    "int": int,
    "str": str,
    "float": float,
    "bool": bool,
    "decimal": decimal.Decimal,
    "date": datetime.date,
    "datetime": datetime.datetime,
    "bytes": bytes,
    "any": None,
}


class ColumnDefinition(BaseModel):
    """Plain-data description of a column.

    Attributes:
        name: Column name.
        type: Type tag name (``'int'``, ``'str'``, ...); ``'any'`` disables
            value type checks.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: ColumnTypeName = "any"


class TableDefinition(BaseModel):
    """Plain-data description of a table.

    Attributes:
        name: Table name.
        alias: Optional alias honoured in SELECT statements.
        columns: Ordered column definitions.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    alias: str | None = None
    columns: list[ColumnDefinition] = Field(default_factory=list)


class SchemaRegistry:
    """Immutable lookup of tables and their columns.

    Always created via :meth:`builder` or :meth:`from_definitions`.
    """

    def __init__(
        self,
        tables: Mapping[str, SqlTable],
        columns: Mapping[str, tuple[SqlColumn, ...]],
    ) -> None:
        self._tables = MappingProxyType(dict(tables))
        self._columns = MappingProxyType(dict(columns))

    @classmethod
    def builder(cls) -> SchemaRegistryBuilder:
        """Return a fresh :class:`SchemaRegistryBuilder`."""
        return SchemaRegistryBuilder()

    @classmethod
    def from_definitions(cls, definitions: list[TableDefinition]) -> SchemaRegistry:
        """Build a registry from pydantic table definitions."""
        builder = cls.builder()
        for table_def in definitions:
            builder.table(table_def.name, alias=table_def.alias)
            for col_def in table_def.columns:
                builder.column(col_def.name, _TYPE_TAGS[col_def.type])
        return builder.build()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def table_names(self) -> list[str]:
        """Returns all table names in definition order."""
        return list(self._tables)

    def table(self, name: str) -> SqlTable:
        """Returns the table called ``name``.

        Raises:
            SchemaError: If the table is not registered.
        """
        table = self._tables.get(name)
        if table is None:
            raise SchemaError(
                f"Table '{name}' is not registered.",
                details={"table": name, "allowed_tables": self.table_names},
            )
        return table

    def columns(self, table_name: str) -> tuple[SqlColumn, ...]:
        """Returns every column of ``table_name`` in definition order."""
        self.table(table_name)
        return self._columns[table_name]

    def column(self, table_name: str, column_name: str) -> SqlColumn:
        """Returns the column ``table_name.column_name``.

        Raises:
            SchemaError: If the table or the column is not registered.
        """
        for col in self.columns(table_name):
            if col.name == column_name:
                return col
        raise SchemaError(
            f"Column '{column_name}' does not exist on table '{table_name}'.",
            details={
                "table": table_name,
                "column": column_name,
                "allowed_columns": [c.name for c in self._columns[table_name]],
            },
        )

    def resolve(self, ref: str) -> SqlColumn:
        """Resolve a ``"table.column"`` reference string."""
        parsed = ColumnReference.parse(ref)
        if parsed.table is None:
            raise SchemaError(
                f"Column reference '{ref}' must be qualified as 'table.column'.",
                details={"reference": ref},
            )
        return self.column(parsed.table, parsed.column)

    def __contains__(self, name: object) -> bool:
        return name in self._tables


class SchemaRegistryBuilder:
    """Fluent builder for :class:`SchemaRegistry`.

    Columns are attached to the most recently declared table.
    """

    def __init__(self) -> None:
        self._tables: dict[str, SqlTable] = {}
        self._columns: dict[str, list[SqlColumn]] = {}
        self._current: SqlTable | None = None

    def table(self, name: str, alias: str | None = None) -> SchemaRegistryBuilder:
        """Declare a table; following :meth:`column` calls attach to it."""
        if name in self._tables:
            raise SchemaError(
                f"Table '{name}' is defined more than once.", details={"table": name}
            )
        table = SqlTable(name, alias=alias)
        self._tables[name] = table
        self._columns[name] = []
        self._current = table
        return self

    def column(self, name: str, value_type: type | None = None) -> SchemaRegistryBuilder:
        """Add a column to the current table."""
        if self._current is None:
            raise SchemaError(
                f"Column '{name}' declared before any table.", details={"column": name}
            )
        existing = self._columns[self._current.name]
        if any(c.name == name for c in existing):
            raise SchemaError(
                f"Column '{name}' is defined more than once on table "
                f"'{self._current.name}'.",
                details={"table": self._current.name, "column": name},
            )
        existing.append(self._current.column(name, value_type))
        return self

    def build(self) -> SchemaRegistry:
        """Return the immutable :class:`SchemaRegistry`."""
        return SchemaRegistry(
            tables=self._tables,
            columns={name: tuple(cols) for name, cols in self._columns.items()},
        )

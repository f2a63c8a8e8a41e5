"""dynaSQL – Dynamic SQL fragments with safe parameter binding.

Build conditions as data, render them as parameterized SQL.

Public API
----------
``where`` / ``and_`` / ``or_``
    Build an immutable condition list.

``select`` / ``select_count`` / ``insert_into`` / ``update`` / ``delete_from``
    Fluent statement builders returning immutable support values.

``SelectAssembler``, ``InsertAssembler``, ``UpdateAssembler``,
``DeleteAssembler``, ``WhereAssembler``
    The assemblers behind the builders, for callers that hold condition
    lists and column mappings directly.

Extensibility
-------------
New dialect compilers can be registered via::

    from dynasql.compile.registry import CompilerFactory

    @CompilerFactory.register("oracle")
    class OracleCompiler(SQLCompiler):
        ...

After registration, any ``RenderOptions`` with ``target="oracle"`` picks
it up.
"""

from __future__ import annotations

from dynasql.compile.assemblers import (
    DeleteAssembler,
    InsertAssembler,
    SelectAssembler,
    UpdateAssembler,
    WhereAssembler,
)
from dynasql.compile.base import RenderedFragment, SQLCompiler
from dynasql.compile.context import StatementKind
from dynasql.compile.generic import GenericCompiler
from dynasql.compile.mysql import MySQLCompiler
from dynasql.compile.postgres import PostgresCompiler
from dynasql.compile.registry import CompilerFactory
from dynasql.compile.renderer import ConditionRenderer, render_where
from dynasql.compile.sqlite import SQLiteCompiler
from dynasql.compile.supports import (
    DeleteSupport,
    InsertSupport,
    SelectSupport,
    UpdateSupport,
    WhereSupport,
)
from dynasql.dsl import (
    ConditionListBuilder,
    delete_from,
    insert_into,
    select,
    select_count,
    update,
    where,
)
from dynasql.errors import (
    BuilderStateError,
    ColumnTypeError,
    CompilationError,
    DynaSQLError,
    MalformedConditionError,
    SchemaError,
    UnsupportedDialectError,
    UnsupportedOperatorError,
)
from dynasql.schema.conditions import (
    Condition,
    ConditionList,
    Connector,
    Group,
    Leaf,
    and_,
    or_,
)
from dynasql.schema.criteria import (
    Criterion,
    custom,
    is_between,
    is_equal_to,
    is_equal_to_when_present,
    is_greater_than,
    is_greater_than_or_equal_to,
    is_greater_than_when_present,
    is_in,
    is_in_case_insensitive,
    is_in_when_present,
    is_less_than,
    is_less_than_or_equal_to,
    is_less_than_when_present,
    is_like,
    is_like_case_insensitive,
    is_like_when_present,
    is_not_between,
    is_not_equal_to,
    is_not_equal_to_when_present,
    is_not_in,
    is_not_in_case_insensitive,
    is_not_like,
    is_not_like_case_insensitive,
    is_not_null,
    is_null,
)
from dynasql.schema.operators import CustomOperator, OperatorKind
from dynasql.schema.options import RenderOptions
from dynasql.schema.registry import (
    ColumnDefinition,
    SchemaRegistry,
    SchemaRegistryBuilder,
    TableDefinition,
)
from dynasql.schema.table import SortSpecification, SqlColumn, SqlTable

# ---------------------------------------------------------------------------
# Register built-in compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("generic", GenericCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    # Schema model
    "SqlTable",
    "SqlColumn",
    "SortSpecification",
    "SchemaRegistry",
    "SchemaRegistryBuilder",
    "TableDefinition",
    "ColumnDefinition",
    # Conditions
    "Condition",
    "ConditionList",
    "Connector",
    "Leaf",
    "Group",
    "and_",
    "or_",
    "where",
    "ConditionListBuilder",
    # Criteria
    "Criterion",
    "CustomOperator",
    "OperatorKind",
    "custom",
    "is_between",
    "is_equal_to",
    "is_equal_to_when_present",
    "is_greater_than",
    "is_greater_than_or_equal_to",
    "is_greater_than_when_present",
    "is_in",
    "is_in_case_insensitive",
    "is_in_when_present",
    "is_less_than",
    "is_less_than_or_equal_to",
    "is_less_than_when_present",
    "is_like",
    "is_like_case_insensitive",
    "is_like_when_present",
    "is_not_between",
    "is_not_equal_to",
    "is_not_equal_to_when_present",
    "is_not_in",
    "is_not_in_case_insensitive",
    "is_not_like",
    "is_not_like_case_insensitive",
    "is_not_null",
    "is_null",
    # Statements
    "select",
    "select_count",
    "insert_into",
    "update",
    "delete_from",
    # Rendering
    "RenderOptions",
    "RenderedFragment",
    "StatementKind",
    "ConditionRenderer",
    "render_where",
    "SelectAssembler",
    "InsertAssembler",
    "UpdateAssembler",
    "DeleteAssembler",
    "WhereAssembler",
    "SelectSupport",
    "InsertSupport",
    "UpdateSupport",
    "DeleteSupport",
    "WhereSupport",
    # Compilers
    "SQLCompiler",
    "CompilerFactory",
    "GenericCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    # Errors
    "DynaSQLError",
    "MalformedConditionError",
    "UnsupportedOperatorError",
    "ColumnTypeError",
    "SchemaError",
    "BuilderStateError",
    "CompilationError",
    "UnsupportedDialectError",
]

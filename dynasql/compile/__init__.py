"""dynaSQL compilation layer: condition trees and statements → parameterized SQL."""
from dynasql.compile.assemblers import (
    DeleteAssembler,
    InsertAssembler,
    SelectAssembler,
    UpdateAssembler,
    WhereAssembler,
)
from dynasql.compile.base import RenderedFragment, SQLCompiler
from dynasql.compile.context import ParameterCounter, RenderContext, StatementKind
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

__all__ = [
    "DeleteAssembler",
    "InsertAssembler",
    "SelectAssembler",
    "UpdateAssembler",
    "WhereAssembler",
    "RenderedFragment",
    "SQLCompiler",
    "ParameterCounter",
    "RenderContext",
    "StatementKind",
    "GenericCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "CompilerFactory",
    "ConditionRenderer",
    "render_where",
    "SQLiteCompiler",
    "DeleteSupport",
    "InsertSupport",
    "SelectSupport",
    "UpdateSupport",
    "WhereSupport",
]

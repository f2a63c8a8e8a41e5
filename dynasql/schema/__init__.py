"""dynaSQL schema models: tables, columns, operators, and condition trees."""
from dynasql.schema.conditions import (
    Condition,
    ConditionList,
    Connector,
    Group,
    Leaf,
    and_,
    or_,
)
from dynasql.schema.criteria import Criterion
from dynasql.schema.operators import CustomOperator, OperatorKind
from dynasql.schema.options import RenderOptions
from dynasql.schema.registry import (
    ColumnDefinition,
    SchemaRegistry,
    SchemaRegistryBuilder,
    TableDefinition,
)
from dynasql.schema.table import SortSpecification, SqlColumn, SqlTable

__all__ = [
    "Condition",
    "ConditionList",
    "Connector",
    "Group",
    "Leaf",
    "and_",
    "or_",
    "Criterion",
    "CustomOperator",
    "OperatorKind",
    "RenderOptions",
    "ColumnDefinition",
    "SchemaRegistry",
    "SchemaRegistryBuilder",
    "TableDefinition",
    "SortSpecification",
    "SqlColumn",
    "SqlTable",
]

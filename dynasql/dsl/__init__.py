"""dynaSQL fluent builder API."""
from dynasql.dsl.statements import (
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
    delete_from,
    insert_into,
    select,
    select_count,
    update,
)
from dynasql.dsl.where import ConditionListBuilder, where

__all__ = [
    "DeleteBuilder",
    "InsertBuilder",
    "SelectBuilder",
    "UpdateBuilder",
    "delete_from",
    "insert_into",
    "select",
    "select_count",
    "update",
    "ConditionListBuilder",
    "where",
]

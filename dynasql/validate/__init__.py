"""dynaSQL validation layer: condition arity and value type checks."""
from dynasql.validate.condition_validator import (
    validate_conditions,
    validate_criterion,
    validate_leaf,
)

__all__ = [
    "validate_conditions",
    "validate_criterion",
    "validate_leaf",
]

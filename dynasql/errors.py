"""Custom exception hierarchy for dynaSQL.

All public errors inherit from DynaSQLError so callers can catch the base
class for any dynaSQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class DynaSQLError(Exception):
    """Base exception for all dynaSQL errors.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. MALFORMED_CONDITION).
        details: Extra context describing the failure.
    """

    def __init__(
        self,
        message: str,
        code: str = "DYNASQL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class MalformedConditionError(DynaSQLError):
    """Raised when a condition's operand count does not match its operator.

    Args:
        message: Human-readable description.
        operator: Name of the offending operator, if known.
        expected: Description of the expected operand count.
        actual: Number of operands supplied.
    """

    def __init__(
        self,
        message: str,
        operator: str | None = None,
        expected: str | None = None,
        actual: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if operator is not None:
            details["operator"] = operator
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, code="MALFORMED_CONDITION", details=details)
        self.operator = operator


class UnsupportedOperatorError(DynaSQLError):
    """Raised when an operator has no entry in the operator-to-SQL table."""

    def __init__(self, operator: Any) -> None:
        super().__init__(
            f"Operator '{operator}' has no SQL rendering.",
            code="UNSUPPORTED_OPERATOR",
            details={"operator": str(operator)},
        )
        self.operator = operator


class ColumnTypeError(DynaSQLError):
    """Raised when a bound value does not match a column's declared type."""

    def __init__(self, column: str, value: Any, expected: str) -> None:
        super().__init__(
            f"Column '{column}' expects {expected}, got {type(value).__name__}.",
            code="COLUMN_TYPE_MISMATCH",
            details={
                "column": column,
                "expected": expected,
                "actual": type(value).__name__,
            },
        )


class SchemaError(DynaSQLError):
    """Raised for invalid identifiers and unknown or duplicate tables/columns."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code="SCHEMA_ERROR", details=details or {})


class BuilderStateError(DynaSQLError):
    """Raised when a builder is used again after ``build()``."""

    def __init__(self, builder: str) -> None:
        super().__init__(
            f"{builder} has already been built and cannot be reused.",
            code="BUILDER_CONSUMED",
            details={"builder": builder},
        )


class CompilationError(DynaSQLError):
    """Raised when a statement cannot be assembled.

    Args:
        message: Human-readable description.
        clause: The clause being assembled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(
            message,
            code="COMPILATION_ERROR",
            details={"clause": clause} if clause else None,
        )
        self.clause = clause


class UnsupportedDialectError(CompilationError):
    """Raised when no compiler is registered for a dialect target."""

    def __init__(self, target: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect target: '{target}'. Registered targets: {registered}."
        )
        self.code = "UNSUPPORTED_DIALECT"
        self.details = {"target": target, "registered_targets": registered}

"""Parsed ``table.column`` reference strings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnReference:
    """A parsed ``table.column`` or bare ``column`` reference.

    Attributes:
        table: Table qualifier, or ``None`` for unqualified references.
        column: Column name.
    """

    table: str | None
    column: str

    @classmethod
    def parse(cls, ref: str) -> ColumnReference:
        """Parse a ``"table.column"`` or bare ``"column"`` string."""
        if "." in ref:
            table, column = ref.split(".", 1)
            return cls(table=table, column=column)
        return cls(table=None, column=ref)

    @property
    def qualified(self) -> bool:
        """True when the reference includes a table qualifier."""
        return self.table is not None

    def __str__(self) -> str:
        if self.table:
            return f"{self.table}.{self.column}"
        return self.column

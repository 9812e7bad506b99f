"""Data tables passed to steps as lists of column-keyed rows."""

from __future__ import annotations

from collections.abc import Sequence


class TableError(Exception):
    """Raised when a table is built inconsistently."""


class Table:
    """A table with fixed columns whose rows are stored as dictionaries."""

    def __init__(self) -> None:
        self.columns: list[str] = []
        self._rows: list[dict[str, str]] = []

    def add_column(self, column: str) -> None:
        if self._rows:
            raise TableError("Cannot alter columns after rows have been added")
        self.columns.append(column)

    def add_row(self, row: Sequence[str]) -> None:
        if not self.columns:
            raise TableError("No column defined yet")
        if len(row) != len(self.columns):
            raise TableError("Row size does not match the table column size")
        self._rows.append(dict(zip(self.columns, row)))

    def hashes(self) -> list[dict[str, str]]:
        """Return the rows, each mapping column name to cell value."""
        return [dict(row) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)
"""
Tabular Data

The uniform table shape exchanged with tabular parsing and query layers:
ordered column names, ordered rows of string cells and one type per column.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# Plain ASCII digits with an optional leading minus
INTEGER_CELL = re.compile(r"-?[0-9]+")


class ColumnType(Enum):
    """Coarse column types understood by downstream query engines."""

    TEXT = "TEXT"
    INTEGER = "INTEGER"
    REAL = "REAL"
    DATETIME = "DATETIME"

    def __str__(self) -> str:
        return self.value


def parse_value(value: str, column_type: ColumnType) -> Any:
    """
    Convert a string cell to a typed value.

    Integer and real cells that fail to parse are returned as the
    stripped string. Datetime cells stay strings. Empty cells are None.
    """
    value = value.strip()
    if not value:
        return None

    if column_type is ColumnType.INTEGER:
        if INTEGER_CELL.fullmatch(value):
            return int(value)
        return value
    if column_type is ColumnType.REAL:
        try:
            return float(value)
        except ValueError:
            return value
    return value


@dataclass
class TableData:
    """One named table of string cells."""

    headers: List[str] = field(default_factory=list)
    records: List[List[str]] = field(default_factory=list)
    column_types: List[ColumnType] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.records)

    def column_index(self) -> Dict[str, int]:
        """Map each column name to its position."""
        return {name: index for index, name in enumerate(self.headers)}

    def _position(self, column: Union[int, str]) -> int:
        if isinstance(column, int):
            return column
        try:
            return self.headers.index(column)
        except ValueError:
            raise KeyError(f"Unknown column '{column}'")

    def get_value(self, row: int, column: Union[int, str]) -> str:
        return self.records[row][self._position(column)]

    def set_value(self, row: int, column: Union[int, str], value: str) -> None:
        """Overwrite one cell; the only edit reconstruction honours."""
        self.records[row][self._position(column)] = value

    def typed_value(self, row: int, column: Union[int, str]) -> Any:
        position = self._position(column)
        return parse_value(self.records[row][position], self.column_types[position])

    def column_type(self, column: Union[int, str]) -> Optional[ColumnType]:
        position = self._position(column)
        if position < len(self.column_types):
            return self.column_types[position]
        return None

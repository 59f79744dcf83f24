"""
Positional row identity.

Rows of the flat tables are tied to the hierarchy only by their
zero-based batch, entry and addenda positions. ``RowIndexReader`` turns
index cells into a ``RowIndex`` and ``RowIndex`` resolves itself against
a file, so malformed and out-of-range indices fail here instead of deep
inside field dispatch.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from ach_tables.core.exceptions import IndexOutOfRangeError, MalformedIndexError
from ach_tables.tabular.schemas import ADDENDA_INDEX, BATCH_INDEX, ENTRY_INDEX, TableSchema
from ach_tables.tabular.table_data import INTEGER_CELL, TableData

T = TypeVar("T")


@dataclass(frozen=True)
class RowIndex:
    """Validated position of one flat row in the hierarchy."""

    table: str
    row: int
    batch: int
    entry: Optional[int] = None
    addenda: Optional[int] = None

    def _resolve(self, items: Sequence[T], column: str, value: int) -> T:
        if not 0 <= value < len(items):
            raise IndexOutOfRangeError(
                f"{column} {value} out of range for {self.table} row {self.row}"
                f" (have {len(items)})",
                table=self.table,
                row=self.row,
                column=column,
                value=value,
                bound=len(items),
            )
        return items[value]

    def resolve_batch(self, batches: Sequence[T]) -> T:
        """Return the batch this row refers to or raise IndexOutOfRangeError."""
        return self._resolve(batches, BATCH_INDEX, self.batch)

    def resolve_entry(self, batches: Sequence):
        """Return the entry this row refers to or raise IndexOutOfRangeError."""
        batch = self.resolve_batch(batches)
        return self._resolve(batch.entries, ENTRY_INDEX, self.entry)

    def find_entry(self, batches: Sequence):
        """Return the entry this row refers to, or None when it does not exist."""
        if not 0 <= self.batch < len(batches):
            return None
        entries = batches[self.batch].entries
        if not 0 <= self.entry < len(entries):
            return None
        return entries[self.entry]


class RowIndexReader:
    """Reads the index columns of one table."""

    def __init__(self, table: TableData, schema: TableSchema):
        self.table_name = schema.name
        positions = table.column_index()

        missing = [column for column in schema.index_columns if column not in positions]
        if missing and table.records:
            raise MalformedIndexError(
                f"Table {schema.name} is missing index column {missing[0]}",
                table=schema.name,
                column=missing[0],
            )

        self._columns = [
            (column, positions.get(column)) for column in schema.index_columns
        ]

    def read(self, row_number: int, row: List[str]) -> RowIndex:
        """
        Parse the index cells of one row.

        Raises:
            MalformedIndexError: If an index cell is empty or non-numeric
        """
        values = {}
        for column, position in self._columns:
            cell = row[position].strip() if position < len(row) else ""
            if not INTEGER_CELL.fullmatch(cell):
                raise MalformedIndexError(
                    f"Non-numeric {column} '{cell}' in {self.table_name} row {row_number}",
                    table=self.table_name,
                    row=row_number,
                    column=column,
                    value=cell,
                )
            values[column] = int(cell)

        return RowIndex(
            table=self.table_name,
            row=row_number,
            batch=values[BATCH_INDEX],
            entry=values.get(ENTRY_INDEX),
            addenda=values.get(ADDENDA_INDEX),
        )

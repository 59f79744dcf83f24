"""
Record field codec.

Moves scalar fields between record dataclasses and table rows. A column
maps to the record attribute of the same name; index, tag and derived
control columns are handled by the callers.
"""

from dataclasses import fields
from functools import lru_cache
from typing import Any, Dict, FrozenSet, List, Optional, Tuple
import logging

from ach_tables.core.exceptions import MalformedValueError
from ach_tables.tabular.schemas import ADDENDA_TYPE, TYPE_CODE, TableSchema
from ach_tables.tabular.table_data import INTEGER_CELL, TableData

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _column_positions(schema: TableSchema) -> Dict[str, int]:
    return {name: index for index, (name, _) in enumerate(schema.columns)}


@lru_cache(maxsize=None)
def _reserved_columns(schema: TableSchema) -> FrozenSet[str]:
    return frozenset(schema.index_columns) | schema.derived_columns | {ADDENDA_TYPE, TYPE_CODE}


def format_cell(value: Any, trim: bool = False) -> str:
    """Render a field value as a table cell."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip() if trim else value
    return str(value)


def encode_record(record: Any, schema: TableSchema, row: List[str], trim: bool = False) -> List[str]:
    """Write every field of ``record`` that has a column in ``schema`` into ``row``."""
    positions = _column_positions(schema)
    reserved = _reserved_columns(schema)
    trim = trim and schema.trim_text

    for f in fields(record):
        position = positions.get(f.name)
        if position is None or f.name in reserved:
            continue
        row[position] = format_cell(getattr(record, f.name), trim)

    return row


def set_cell(schema: TableSchema, row: List[str], column: str, value: Any) -> None:
    row[_column_positions(schema)[column]] = format_cell(value)


class RecordDecoder:
    """
    Applies the present columns of one edited table onto records.

    Column presence is resolved once per table and record type; columns
    missing from the table leave the matching fields untouched.
    """

    def __init__(self, table: TableData, schema: TableSchema, strict: bool = False):
        self.schema = schema
        self.strict = strict
        self._positions = table.column_index()
        self._bindings: Dict[type, List[Tuple[str, int, bool]]] = {}

    def _binding(self, record_type: type) -> List[Tuple[str, int, bool]]:
        binding = self._bindings.get(record_type)
        if binding is None:
            reserved = _reserved_columns(self.schema)
            integer_columns = self.schema.integer_columns
            binding = [
                (f.name, self._positions[f.name], f.name in integer_columns)
                for f in fields(record_type)
                if f.name in self._positions and f.name not in reserved
            ]
            self._bindings[record_type] = binding
        return binding

    def _parse_int(self, cell: str, column: str, row_number: int) -> Optional[int]:
        cell = cell.strip()
        if INTEGER_CELL.fullmatch(cell):
            return int(cell)
        if self.strict:
            raise MalformedValueError(
                f"Non-numeric {column} in {self.schema.name} row {row_number}",
                table=self.schema.name,
                row=row_number,
                column=column,
                value=cell,
            )
        logger.warning(
            "Ignoring non-numeric %s in %s row %d",
            column,
            self.schema.name,
            row_number,
        )
        return None

    def apply(self, record: Any, row: List[str], row_number: int) -> None:
        """
        Overwrite the fields of ``record`` from ``row``.

        On tables whose text is trimmed when flattening, a cell equal to the
        stripped current value is not an edit and keeps the padded value.
        """
        for name, position, is_integer in self._binding(type(record)):
            if position >= len(row):
                continue
            cell = row[position]
            if is_integer:
                value = self._parse_int(cell, name, row_number)
                if value is None:
                    continue
                setattr(record, name, value)
                continue

            current = getattr(record, name)
            if self.schema.trim_text and isinstance(current, str) and cell == current.strip():
                continue
            setattr(record, name, cell)

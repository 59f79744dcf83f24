"""
Flat table representation of ACH files.
"""

from ach_tables.tabular.table_data import ColumnType, TableData, parse_value
from ach_tables.tabular.schemas import SCHEMA_VERSION, SCHEMAS, TableSchema

__all__ = [
    "ColumnType",
    "TableData",
    "parse_value",
    "SCHEMA_VERSION",
    "SCHEMAS",
    "TableSchema",
]

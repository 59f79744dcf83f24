"""
ACH File / Table Conversion

Flattening of ACH files into seven flat tables and reconstruction of
ACH files from (edited) tables.
"""

from ach_tables.conversion.flatten import flatten
from ach_tables.conversion.reconstruct import reconstruct
from ach_tables.conversion.table_set import TABLE_NAMES, TableSet

__all__ = [
    "flatten",
    "reconstruct",
    "TABLE_NAMES",
    "TableSet",
]

"""
ACH Tables

Converts NACHA/ACH payment files into a flat multi-table representation
and reconstructs control-consistent ACH files from edited tables.
"""

import logging

from ach_tables.ach import ACHFile, AddendaType
from ach_tables.conversion import TableSet, flatten, reconstruct
from ach_tables.tabular import SCHEMA_VERSION, ColumnType, TableData

logger = logging.getLogger(__name__)

__version__ = "1.0.0"

__all__ = [
    "ACHFile",
    "AddendaType",
    "TableSet",
    "flatten",
    "reconstruct",
    "SCHEMA_VERSION",
    "ColumnType",
    "TableData",
]

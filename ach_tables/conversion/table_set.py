"""
TableSet

The seven-table flat projection of one ACH file, plus a reference to the
file it was flattened from. Only in-place cell edits of existing rows are
honoured on reconstruction: inserted rows fail index resolution and
deleted rows leave their records unchanged.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional

from ach_tables.ach.records import ACHFile
from ach_tables.tabular.schemas import (
    ADDENDA,
    BATCHES,
    ENTRIES,
    FILE_HEADER,
    IAT_ADDENDA,
    IAT_BATCHES,
    IAT_ENTRIES,
    SCHEMA_VERSION,
)
from ach_tables.tabular.table_data import TableData

if TYPE_CHECKING:
    from ach_tables.core.config import Config

TABLE_NAMES = (
    FILE_HEADER,
    BATCHES,
    ENTRIES,
    ADDENDA,
    IAT_BATCHES,
    IAT_ENTRIES,
    IAT_ADDENDA,
)


@dataclass
class TableSet:
    """Flat tables of one ACH file."""

    file_header: TableData
    batches: TableData
    entries: TableData
    addenda: TableData

    # None when the source file has no IAT batches
    iat_batches: Optional[TableData] = None
    iat_entries: Optional[TableData] = None
    iat_addenda: Optional[TableData] = None

    original: Optional[ACHFile] = field(default=None, repr=False, compare=False)
    schema_version: int = SCHEMA_VERSION

    @property
    def has_iat(self) -> bool:
        return self.iat_batches is not None

    def tables(self) -> Dict[str, TableData]:
        """Present tables by name, in schema order."""
        result = {}
        for name in TABLE_NAMES:
            table = getattr(self, name)
            if table is not None:
                result[name] = table
        return result

    def get_table(self, name: str) -> Optional[TableData]:
        """Return a table by name; None for an absent IAT table."""
        if name not in TABLE_NAMES:
            raise KeyError(f"Unknown table '{name}'")
        return getattr(self, name)

    def update_table(self, name: str, table: TableData) -> None:
        """Replace a table, typically with the result of an external query."""
        if name not in TABLE_NAMES:
            raise KeyError(f"Unknown table '{name}'")
        setattr(self, name, table)

    def to_file(self, config: Optional["Config"] = None) -> ACHFile:
        """Reconstruct the ACH file from the current tables."""
        from ach_tables.conversion.reconstruct import reconstruct

        return reconstruct(self, config=config)

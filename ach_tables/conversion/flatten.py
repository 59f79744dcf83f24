"""
Flattening Engine

Projects an ACH file onto seven flat tables. Every batch, entry and
addenda row carries its zero-based position in the hierarchy, which is
the only link used when the tables are applied back.
"""

import logging
import time
from typing import Dict, Optional, Sequence, Tuple

from ach_tables.ach.records import ACHFile, FileHeader
from ach_tables.conversion.addenda_codec import encode_entry_addenda
from ach_tables.conversion.field_codec import encode_record, set_cell
from ach_tables.conversion.metrics import CONVERSION_DURATION, FLATTEN_COUNTER
from ach_tables.conversion.table_set import TableSet
from ach_tables.core.config import Config, get_config
from ach_tables.core.structured_logging import LogCategory
from ach_tables.tabular.schemas import (
    ADDENDA_SCHEMA,
    BATCH_INDEX,
    BATCHES_SCHEMA,
    ENTRIES_SCHEMA,
    ENTRY_INDEX,
    FILE_HEADER_SCHEMA,
    IAT_ADDENDA_SCHEMA,
    IAT_BATCHES_SCHEMA,
    IAT_ENTRIES_SCHEMA,
    TableSchema,
)
from ach_tables.tabular.table_data import TableData

logger = logging.getLogger(__name__)


def _file_header_table(header: FileHeader, trim: bool) -> TableData:
    schema = FILE_HEADER_SCHEMA
    table = schema.new_table()
    table.records.append(encode_record(header, schema, schema.empty_row(), trim))
    return table


def _batch_tables(
    batches: Sequence,
    batch_schema: TableSchema,
    entry_schema: TableSchema,
    addenda_schema: TableSchema,
    trim: bool,
) -> Tuple[TableData, TableData, TableData]:
    """Build the batch, entry and addenda tables of one batch family."""
    batch_table = batch_schema.new_table()
    entry_table = entry_schema.new_table()
    addenda_table = addenda_schema.new_table()

    for batch_index, batch in enumerate(batches):
        row = encode_record(batch.header, batch_schema, batch_schema.empty_row(), trim)
        set_cell(batch_schema, row, BATCH_INDEX, batch_index)
        for column in batch_schema.derived_columns:
            set_cell(batch_schema, row, column, getattr(batch.control, column))
        batch_table.records.append(row)

        for entry_index, entry in enumerate(batch.entries):
            row = encode_record(entry, entry_schema, entry_schema.empty_row(), trim)
            set_cell(entry_schema, row, BATCH_INDEX, batch_index)
            set_cell(entry_schema, row, ENTRY_INDEX, entry_index)
            entry_table.records.append(row)

            addenda_table.records.extend(
                encode_entry_addenda(entry, batch_index, entry_index, addenda_schema, trim)
            )

    return batch_table, entry_table, addenda_table


def flatten(ach_file: Optional[ACHFile], config: Optional[Config] = None) -> Optional[TableSet]:
    """
    Convert an ACH file into its flat tables.

    Args:
        ach_file: File to project; never mutated
        config: Configuration, defaults to the global configuration

    Returns:
        TableSet referencing ``ach_file``, or None when ``ach_file`` is None.
        The IAT tables are None unless the file has IAT batches.
    """
    if ach_file is None:
        return None

    config = config or get_config()
    trim = config.conversion.trim_text_fields
    metrics_enabled = config.monitoring.enable_metrics
    start_time = time.time()

    try:
        batches, entries, addenda = _batch_tables(
            ach_file.batches, BATCHES_SCHEMA, ENTRIES_SCHEMA, ADDENDA_SCHEMA, trim
        )
        table_set = TableSet(
            file_header=_file_header_table(ach_file.header, trim),
            batches=batches,
            entries=entries,
            addenda=addenda,
            original=ach_file,
        )

        if ach_file.iat_batches:
            (
                table_set.iat_batches,
                table_set.iat_entries,
                table_set.iat_addenda,
            ) = _batch_tables(
                ach_file.iat_batches,
                IAT_BATCHES_SCHEMA,
                IAT_ENTRIES_SCHEMA,
                IAT_ADDENDA_SCHEMA,
                trim,
            )
    except Exception:
        if metrics_enabled:
            FLATTEN_COUNTER.labels(status="failure").inc()
        raise

    duration = time.time() - start_time
    if metrics_enabled:
        FLATTEN_COUNTER.labels(status="success").inc()
        CONVERSION_DURATION.labels(operation="flatten").observe(duration)

    logger.info(
        "Flattened ACH file into %d tables",
        len(table_set.tables()),
        extra={
            "category": LogCategory.CONVERSION,
            "operation": "flatten",
            "metadata": _row_counts(table_set.tables()),
            "performance_metrics": {"duration_ms": duration * 1000},
        },
    )
    return table_set


def _row_counts(tables: Dict[str, TableData]) -> Dict[str, int]:
    return {name: table.row_count for name, table in tables.items()}

"""
Reconstruction Engine

Applies (possibly edited) flat tables back onto a private clone of the
file they were flattened from, then recomputes control totals. The
caller's file is never mutated, and either a control-consistent file or
an exception is produced, never a partial result.
"""

import logging
import time
from typing import Optional, Sequence

from ach_tables.ach.isolation import isolate
from ach_tables.ach.records import ACHFile
from ach_tables.conversion.addenda_codec import decode_addenda, resolve_addenda
from ach_tables.conversion.field_codec import RecordDecoder
from ach_tables.conversion.indices import RowIndexReader
from ach_tables.conversion.metrics import (
    CONVERSION_DURATION,
    RECONSTRUCT_COUNTER,
    RECONSTRUCT_ERRORS,
)
from ach_tables.conversion.table_set import TableSet
from ach_tables.core.config import Config, ConversionConfig, get_config
from ach_tables.core.exceptions import (
    ACHTablesException,
    ACHValidationError,
    ControlRecalculationFailure,
    IndexOutOfRangeError,
    InvalidInputError,
    MalformedIndexError,
)
from ach_tables.core.structured_logging import LogCategory
from ach_tables.tabular.schemas import (
    ADDENDA_INDEX,
    ADDENDA_SCHEMA,
    ADDENDA_TYPE,
    BATCHES_SCHEMA,
    ENTRIES_SCHEMA,
    FILE_HEADER_SCHEMA,
    IAT_ADDENDA_SCHEMA,
    IAT_BATCHES_SCHEMA,
    IAT_ENTRIES_SCHEMA,
    TableSchema,
)
from ach_tables.tabular.table_data import TableData

logger = logging.getLogger(__name__)


def _has_rows(table: Optional[TableData]) -> bool:
    return table is not None and bool(table.records)


def apply_file_header(ach_file: ACHFile, table: Optional[TableData], strict: bool = False) -> None:
    """Overwrite header fields from row 0; an empty table keeps the header."""
    if not _has_rows(table):
        return
    decoder = RecordDecoder(table, FILE_HEADER_SCHEMA, strict)
    decoder.apply(ach_file.header, table.records[0], 0)


def apply_batches(
    batches: Sequence, table: Optional[TableData], schema: TableSchema, strict: bool = False
) -> None:
    """
    Apply batch header edits.

    Raises:
        MalformedIndexError: If a batch_index cell is not numeric
        IndexOutOfRangeError: If a batch_index does not resolve
    """
    if not _has_rows(table):
        return
    reader = RowIndexReader(table, schema)
    decoder = RecordDecoder(table, schema, strict)

    for row_number, row in enumerate(table.records):
        batch = reader.read(row_number, row).resolve_batch(batches)
        decoder.apply(batch.header, row, row_number)


def apply_entries(
    batches: Sequence, table: Optional[TableData], schema: TableSchema, strict: bool = False
) -> None:
    """
    Apply entry edits.

    Raises:
        MalformedIndexError: If an index cell is not numeric
        IndexOutOfRangeError: If a (batch_index, entry_index) pair does not resolve
    """
    if not _has_rows(table):
        return
    reader = RowIndexReader(table, schema)
    decoder = RecordDecoder(table, schema, strict)

    for row_number, row in enumerate(table.records):
        entry = reader.read(row_number, row).resolve_entry(batches)
        decoder.apply(entry, row, row_number)


def apply_addenda(
    batches: Sequence,
    table: Optional[TableData],
    schema: TableSchema,
    conversion: ConversionConfig,
) -> int:
    """
    Apply addenda edits.

    Rows whose indices or tag do not resolve to an existing addenda are
    skipped unless ``conversion.skip_unresolved_addenda`` is off.

    Returns:
        Number of rows applied

    Raises:
        MalformedIndexError: If an index cell is not numeric
    """
    if not _has_rows(table):
        return 0
    reader = RowIndexReader(table, schema)
    decoder = RecordDecoder(table, schema, conversion.strict_numeric_cells)

    tag_position = table.column_index().get(ADDENDA_TYPE)
    if tag_position is None:
        raise MalformedIndexError(
            f"Table {schema.name} is missing column {ADDENDA_TYPE}",
            table=schema.name,
            column=ADDENDA_TYPE,
        )

    applied = 0
    for row_number, row in enumerate(table.records):
        index = reader.read(row_number, row)
        tag = row[tag_position] if tag_position < len(row) else ""

        entry = index.find_entry(batches)
        addenda = resolve_addenda(entry, tag, index.addenda) if entry is not None else None

        if addenda is None:
            if not conversion.skip_unresolved_addenda:
                raise IndexOutOfRangeError(
                    f"Addenda row {row_number} of {schema.name} (type '{tag}') "
                    f"does not resolve to an existing addenda",
                    table=schema.name,
                    row=row_number,
                    column=ADDENDA_INDEX,
                    value=index.addenda,
                )
            logger.debug(
                "Skipping unresolved addenda row %d of %s (type '%s')",
                row_number,
                schema.name,
                tag,
            )
            continue

        decode_addenda(addenda, row, row_number, decoder)
        applied += 1

    return applied


def recalculate_controls(ach_file: ACHFile) -> None:
    """
    Recompute all control records.

    Raises:
        ControlRecalculationFailure: If the file fails validation
    """
    try:
        ach_file.create()
    except ACHValidationError as e:
        raise ControlRecalculationFailure(
            f"Control recalculation failed: {e.message}", e.errors
        ) from e


def reconstruct(
    table_set: Optional[TableSet],
    original: Optional[ACHFile] = None,
    config: Optional[Config] = None,
) -> ACHFile:
    """
    Rebuild an ACH file from its flat tables.

    Args:
        table_set: Tables produced by ``flatten`` and optionally edited
        original: File the tables were flattened from, defaults to
            ``table_set.original``; never mutated
        config: Configuration, defaults to the global configuration

    Returns:
        New ACHFile with the edits applied and controls recomputed

    Raises:
        InvalidInputError: If there is no TableSet or no original file
        DeepCopyFailure: If the working copy cannot be produced
        MalformedIndexError: If an index cell is missing or not numeric
        IndexOutOfRangeError: If a batch or entry row does not resolve
        MalformedValueError: If strict numeric cells are enabled and a
            value cell is not numeric
        ControlRecalculationFailure: If the result fails validation
    """
    config = config or get_config()
    conversion = config.conversion
    strict = conversion.strict_numeric_cells
    metrics_enabled = config.monitoring.enable_metrics
    start_time = time.time()

    try:
        if table_set is None:
            raise InvalidInputError("TableSet is required for reconstruction", operation="reconstruct")

        source = original if original is not None else table_set.original
        if source is None:
            raise InvalidInputError(
                "Original ACH file is required for reconstruction", operation="reconstruct"
            )

        working = isolate(source)

        apply_file_header(working, table_set.file_header, strict)
        apply_batches(working.batches, table_set.batches, BATCHES_SCHEMA, strict)
        apply_entries(working.batches, table_set.entries, ENTRIES_SCHEMA, strict)
        applied = apply_addenda(working.batches, table_set.addenda, ADDENDA_SCHEMA, conversion)

        if table_set.has_iat:
            apply_batches(working.iat_batches, table_set.iat_batches, IAT_BATCHES_SCHEMA, strict)
            apply_entries(working.iat_batches, table_set.iat_entries, IAT_ENTRIES_SCHEMA, strict)
            applied += apply_addenda(
                working.iat_batches, table_set.iat_addenda, IAT_ADDENDA_SCHEMA, conversion
            )

        recalculate_controls(working)

    except ACHTablesException as e:
        if metrics_enabled:
            RECONSTRUCT_COUNTER.labels(status="failure").inc()
            RECONSTRUCT_ERRORS.labels(error_code=e.error_code).inc()
        # Cell values stay out of logs; they may hold account data.
        location = {key: value for key, value in e.context.items() if key != "value"}
        logger.error(
            "ACH reconstruction failed: %s",
            e.message,
            extra={
                "category": LogCategory.CONVERSION,
                "operation": "reconstruct",
                "metadata": {"error_code": e.error_code, **location},
            },
        )
        raise

    duration = time.time() - start_time
    if metrics_enabled:
        RECONSTRUCT_COUNTER.labels(status="success").inc()
        CONVERSION_DURATION.labels(operation="reconstruct").observe(duration)

    logger.info(
        "Reconstructed ACH file with %d batches and %d IAT batches",
        len(working.batches),
        len(working.iat_batches),
        extra={
            "category": LogCategory.CONVERSION,
            "operation": "reconstruct",
            "metadata": {"addenda_rows_applied": applied},
            "performance_metrics": {"duration_ms": duration * 1000},
        },
    )
    return working

"""
Variant Addenda Encoder/Decoder

Every addenda variant maps to one row of a wide shared column layout.
Columns a variant does not use stay empty on encode and are ignored on
decode. ``addenda_index`` is the running position of an addenda in its
entry's traversal order (see ``STANDARD_ADDENDA_ORDER`` and
``IAT_ADDENDA_ORDER``); decoding maps it back to the occurrence of a
repeatable variant through ``AddendaSlots.find_addenda``.
"""

from typing import List, Optional

from ach_tables.ach.ach_codes import AddendaType
from ach_tables.ach.addenda import AddendaRecord
from ach_tables.ach.records import AddendaSlots
from ach_tables.conversion.field_codec import RecordDecoder, encode_record, set_cell
from ach_tables.tabular.schemas import (
    ADDENDA_INDEX,
    ADDENDA_TYPE,
    BATCH_INDEX,
    ENTRY_INDEX,
    TYPE_CODE,
    TableSchema,
)


def encode_addenda(
    addenda: AddendaRecord,
    batch_index: int,
    entry_index: int,
    addenda_index: int,
    schema: TableSchema,
    trim: bool = False,
) -> List[str]:
    """
    Build the table row of one addenda record.

    Args:
        addenda: Addenda variant instance
        batch_index: Position of the owning batch
        entry_index: Position of the owning entry in its batch
        addenda_index: Position of the addenda in the entry's traversal order
        schema: Standard or IAT addenda schema
        trim: Strip surrounding whitespace from text fields

    Returns:
        Row with one cell per schema column
    """
    row = schema.empty_row()
    set_cell(schema, row, BATCH_INDEX, batch_index)
    set_cell(schema, row, ENTRY_INDEX, entry_index)
    set_cell(schema, row, ADDENDA_INDEX, addenda_index)
    set_cell(schema, row, ADDENDA_TYPE, addenda.addenda_type.tag)
    set_cell(schema, row, TYPE_CODE, addenda.type_code)
    return encode_record(addenda, schema, row, trim)


def encode_entry_addenda(
    entry: AddendaSlots,
    batch_index: int,
    entry_index: int,
    schema: TableSchema,
    trim: bool = False,
) -> List[List[str]]:
    """Encode all addenda of one entry, numbering them in traversal order."""
    return [
        encode_addenda(addenda, batch_index, entry_index, addenda_index, schema, trim)
        for addenda_index, (_, addenda) in enumerate(entry.iter_addenda())
    ]


def resolve_addenda(
    entry: AddendaSlots, tag: str, addenda_index: int
) -> Optional[AddendaRecord]:
    """
    Find the addenda instance a row refers to.

    For a repeatable variant the occurrence is ``addenda_index`` minus the
    attached addenda preceding that variant: the 02 for a 05; the 10-16
    for a 17; the 10-16 and every 17 for an 18.

    Returns:
        The addenda, or None for an unknown tag, a tag the entry cannot
        carry, an empty slot or an occurrence past the end
    """
    addenda_type = AddendaType.from_tag(tag)
    if addenda_type is None:
        return None
    return entry.find_addenda(addenda_type, addenda_index)


def decode_addenda(
    addenda: AddendaRecord, row: List[str], row_number: int, decoder: RecordDecoder
) -> None:
    """Overwrite the variant's fields from ``row``; other columns are ignored."""
    decoder.apply(addenda, row, row_number)

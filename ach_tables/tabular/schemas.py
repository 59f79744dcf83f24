"""
Table Schemas

Column layouts of the seven flat ACH tables. Column names, order and
types are a published contract for downstream query consumers: renaming
or reordering a column is a breaking change and requires bumping
SCHEMA_VERSION.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from ach_tables.tabular.table_data import ColumnType, TableData

SCHEMA_VERSION = 1

TEXT = ColumnType.TEXT
INTEGER = ColumnType.INTEGER

# Table names
FILE_HEADER = "file_header"
BATCHES = "batches"
ENTRIES = "entries"
ADDENDA = "addenda"
IAT_BATCHES = "iat_batches"
IAT_ENTRIES = "iat_entries"
IAT_ADDENDA = "iat_addenda"

# Index columns
BATCH_INDEX = "batch_index"
ENTRY_INDEX = "entry_index"
ADDENDA_INDEX = "addenda_index"
ADDENDA_TYPE = "addenda_type"
TYPE_CODE = "type_code"


@dataclass(frozen=True)
class TableSchema:
    """Column layout of one flat table."""

    name: str
    columns: Tuple[Tuple[str, ColumnType], ...]
    index_columns: Tuple[str, ...] = ()
    # Control totals emitted for reading but never applied back
    derived_columns: FrozenSet[str] = frozenset()
    trim_text: bool = True

    @property
    def headers(self) -> List[str]:
        return [name for name, _ in self.columns]

    @property
    def column_types(self) -> List[ColumnType]:
        return [column_type for _, column_type in self.columns]

    @property
    def integer_columns(self) -> FrozenSet[str]:
        return frozenset(name for name, column_type in self.columns if column_type is INTEGER)

    def empty_row(self) -> List[str]:
        return [""] * len(self.columns)

    def new_table(self) -> TableData:
        return TableData(headers=self.headers, records=[], column_types=self.column_types)


FILE_HEADER_SCHEMA = TableSchema(
    name=FILE_HEADER,
    columns=(
        ("immediate_destination", TEXT),
        ("immediate_origin", TEXT),
        ("file_creation_date", TEXT),
        ("file_creation_time", TEXT),
        ("file_id_modifier", TEXT),
        ("immediate_destination_name", TEXT),
        ("immediate_origin_name", TEXT),
        ("reference_code", TEXT),
    ),
    trim_text=False,
)

_BATCH_CONTROL_COLUMNS = (
    ("entry_addenda_count", INTEGER),
    ("entry_hash", INTEGER),
    ("total_debit", INTEGER),
    ("total_credit", INTEGER),
)

BATCHES_SCHEMA = TableSchema(
    name=BATCHES,
    columns=(
        (BATCH_INDEX, INTEGER),
        ("service_class_code", INTEGER),
        ("company_name", TEXT),
        ("company_discretionary_data", TEXT),
        ("company_identification", TEXT),
        ("standard_entry_class_code", TEXT),
        ("company_entry_description", TEXT),
        ("company_descriptive_date", TEXT),
        ("effective_entry_date", TEXT),
        ("originator_status_code", INTEGER),
        ("odfi_identification", TEXT),
        ("batch_number", INTEGER),
    )
    + _BATCH_CONTROL_COLUMNS,
    index_columns=(BATCH_INDEX,),
    derived_columns=frozenset(name for name, _ in _BATCH_CONTROL_COLUMNS),
)

ENTRIES_SCHEMA = TableSchema(
    name=ENTRIES,
    columns=(
        (BATCH_INDEX, INTEGER),
        (ENTRY_INDEX, INTEGER),
        ("transaction_code", INTEGER),
        ("rdfi_identification", TEXT),
        ("check_digit", TEXT),
        ("dfi_account_number", TEXT),
        ("amount", INTEGER),
        ("identification_number", TEXT),
        ("individual_name", TEXT),
        ("discretionary_data", TEXT),
        ("addenda_record_indicator", INTEGER),
        ("trace_number", TEXT),
        ("category", TEXT),
    ),
    index_columns=(BATCH_INDEX, ENTRY_INDEX),
)

# Columns shared by related variants appear once: original_trace and
# original_rdfi serve 98, 98_refused and 99; dishonored_return_reason_code
# serves 99_dishonored and 99_contested.
ADDENDA_SCHEMA = TableSchema(
    name=ADDENDA,
    columns=(
        (BATCH_INDEX, INTEGER),
        (ENTRY_INDEX, INTEGER),
        (ADDENDA_INDEX, INTEGER),
        (ADDENDA_TYPE, TEXT),
        (TYPE_CODE, TEXT),
        # 05
        ("payment_related_information", TEXT),
        ("sequence_number", INTEGER),
        ("entry_detail_sequence_number", INTEGER),
        # 98 / 99
        ("original_trace", TEXT),
        ("original_rdfi", TEXT),
        ("corrected_data", TEXT),
        ("change_code", TEXT),
        ("return_code", TEXT),
        ("addenda_information", TEXT),
        ("trace_number", TEXT),
        # 02
        ("reference_information_one", TEXT),
        ("reference_information_two", TEXT),
        ("terminal_identification", TEXT),
        ("transaction_serial", TEXT),
        ("transaction_date", TEXT),
        ("authorization_code", TEXT),
        ("terminal_location", TEXT),
        ("terminal_city", TEXT),
        ("terminal_state", TEXT),
        # 98_refused
        ("refused_change_code", TEXT),
        ("trace_sequence_number", TEXT),
        # 99_dishonored / 99_contested
        ("dishonored_return_reason_code", TEXT),
        ("original_entry_trace_number", TEXT),
        ("original_receiving_dfi_identification", TEXT),
        ("return_trace_number", TEXT),
        ("return_settlement_date", TEXT),
        ("return_reason_code", TEXT),
        ("contested_return_code", TEXT),
        ("date_original_entry_returned", TEXT),
        ("original_settlement_date", TEXT),
        ("dishonored_return_trace_number", TEXT),
        ("dishonored_return_settlement_date", TEXT),
    ),
    index_columns=(BATCH_INDEX, ENTRY_INDEX, ADDENDA_INDEX),
)

IAT_BATCHES_SCHEMA = TableSchema(
    name=IAT_BATCHES,
    columns=(
        (BATCH_INDEX, INTEGER),
        ("service_class_code", INTEGER),
        ("iat_indicator", TEXT),
        ("foreign_exchange_indicator", TEXT),
        ("foreign_exchange_reference_indicator", INTEGER),
        ("foreign_exchange_reference", TEXT),
        ("iso_destination_country_code", TEXT),
        ("originator_identification", TEXT),
        ("standard_entry_class_code", TEXT),
        ("company_entry_description", TEXT),
        ("iso_originating_currency_code", TEXT),
        ("iso_destination_currency_code", TEXT),
        ("effective_entry_date", TEXT),
        ("originator_status_code", INTEGER),
        ("odfi_identification", TEXT),
        ("batch_number", INTEGER),
    )
    + _BATCH_CONTROL_COLUMNS,
    index_columns=(BATCH_INDEX,),
    derived_columns=frozenset(name for name, _ in _BATCH_CONTROL_COLUMNS),
)

IAT_ENTRIES_SCHEMA = TableSchema(
    name=IAT_ENTRIES,
    columns=(
        (BATCH_INDEX, INTEGER),
        (ENTRY_INDEX, INTEGER),
        ("transaction_code", INTEGER),
        ("rdfi_identification", TEXT),
        ("check_digit", TEXT),
        ("addenda_records", INTEGER),
        ("amount", INTEGER),
        ("dfi_account_number", TEXT),
        ("ofac_screening_indicator", TEXT),
        ("secondary_ofac_screening_indicator", TEXT),
        ("addenda_record_indicator", INTEGER),
        ("trace_number", TEXT),
        ("category", TEXT),
    ),
    index_columns=(BATCH_INDEX, ENTRY_INDEX),
)

IAT_ADDENDA_SCHEMA = TableSchema(
    name=IAT_ADDENDA,
    columns=(
        (BATCH_INDEX, INTEGER),
        (ENTRY_INDEX, INTEGER),
        (ADDENDA_INDEX, INTEGER),
        (ADDENDA_TYPE, TEXT),
        (TYPE_CODE, TEXT),
        ("entry_detail_sequence_number", INTEGER),
        # 10
        ("transaction_type_code", TEXT),
        ("foreign_payment_amount", INTEGER),
        ("foreign_trace_number", TEXT),
        ("receiving_company_name", TEXT),
        # 11
        ("originator_name", TEXT),
        ("originator_street_address", TEXT),
        # 12
        ("originator_city_state_province", TEXT),
        ("originator_country_postal_code", TEXT),
        # 13
        ("odfi_name", TEXT),
        ("odfi_identification_number_qualifier", TEXT),
        ("odfi_identification", TEXT),
        ("odfi_branch_country_code", TEXT),
        # 14
        ("rdfi_name", TEXT),
        ("rdfi_identification_number_qualifier", TEXT),
        ("rdfi_identification", TEXT),
        ("rdfi_branch_country_code", TEXT),
        # 15
        ("receiver_identification_number", TEXT),
        ("receiver_street_address", TEXT),
        # 16
        ("receiver_city_state_province", TEXT),
        ("receiver_country_postal_code", TEXT),
        # 17 / 18
        ("payment_related_information", TEXT),
        ("sequence_number", INTEGER),
        ("foreign_correspondent_bank_name", TEXT),
        ("foreign_correspondent_bank_id_number_qualifier", TEXT),
        ("foreign_correspondent_bank_id_number", TEXT),
        ("foreign_correspondent_bank_branch_country_code", TEXT),
        # 98 / 99
        ("original_trace", TEXT),
        ("original_rdfi", TEXT),
        ("corrected_data", TEXT),
        ("change_code", TEXT),
        ("return_code", TEXT),
        ("addenda_information", TEXT),
        ("trace_number", TEXT),
    ),
    index_columns=(BATCH_INDEX, ENTRY_INDEX, ADDENDA_INDEX),
)

SCHEMAS = {
    schema.name: schema
    for schema in (
        FILE_HEADER_SCHEMA,
        BATCHES_SCHEMA,
        ENTRIES_SCHEMA,
        ADDENDA_SCHEMA,
        IAT_BATCHES_SCHEMA,
        IAT_ENTRIES_SCHEMA,
        IAT_ADDENDA_SCHEMA,
    )
}

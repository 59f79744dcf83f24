"""
Tests for flattening ACH files into tables
"""

import pytest
from prometheus_client import REGISTRY

from ach_tables.ach.records import Batch
from ach_tables.conversion import TABLE_NAMES, flatten
from ach_tables.core.config import Config, ConversionConfig, MonitoringConfig
from ach_tables.tabular.schemas import (
    ADDENDA_SCHEMA,
    BATCHES_SCHEMA,
    ENTRIES_SCHEMA,
    IAT_ADDENDA_SCHEMA,
    SCHEMA_VERSION,
)
from ach_tables.tabular.table_data import ColumnType
from ach_tables.tests.factories import (
    make_ach_file,
    make_batch_header,
    make_entry,
)


def _column(table, name):
    return [table.get_value(row, name) for row in range(table.row_count)]


def _flatten_count(status):
    return REGISTRY.get_sample_value("ach_tables_flatten_total", {"status": status}) or 0.0


class TestFlattenShape:
    """Tests for the tables produced by flatten."""

    def test_none_file(self):
        """Test flattening nothing yields nothing."""
        assert flatten(None) is None

    def test_empty_file(self):
        """Test a file without batches still has a header row."""
        table_set = flatten(make_ach_file())

        assert table_set.file_header.row_count == 1
        assert table_set.batches is not None and table_set.batches.row_count == 0
        assert table_set.entries.row_count == 0
        assert table_set.addenda.row_count == 0
        assert table_set.has_iat is False
        assert table_set.iat_batches is None
        assert table_set.iat_entries is None
        assert table_set.iat_addenda is None

    def test_file_header_row(self, single_entry_file):
        """Test file header fields land in the single header row."""
        table = flatten(single_entry_file).file_header

        assert table.get_value(0, "immediate_destination") == "231380104"
        assert table.get_value(0, "immediate_origin") == "121042882"
        assert table.get_value(0, "file_id_modifier") == "A"

    def test_references_original(self, single_entry_file):
        """Test the TableSet keeps the source file and schema version."""
        table_set = flatten(single_entry_file)

        assert table_set.original is single_entry_file
        assert table_set.schema_version == SCHEMA_VERSION

    def test_headers_and_types_follow_schema(self, full_standard_file):
        """Test table layouts match the published schemas."""
        table_set = flatten(full_standard_file)

        assert table_set.batches.headers == BATCHES_SCHEMA.headers
        assert table_set.entries.headers == ENTRIES_SCHEMA.headers
        assert table_set.addenda.column_types == ADDENDA_SCHEMA.column_types
        assert table_set.entries.column_type("amount") is ColumnType.INTEGER
        assert table_set.entries.column_type("individual_name") is ColumnType.TEXT

    def test_rows_have_full_width(self, mixed_file):
        """Test every row has one cell per header."""
        for table in flatten(mixed_file).tables().values():
            for row in table.records:
                assert len(row) == len(table.headers)

    def test_does_not_mutate_file(self, mixed_file):
        """Test flattening leaves the file untouched."""
        snapshot = mixed_file.clone()
        flatten(mixed_file)
        assert mixed_file == snapshot


class TestFlattenRows:
    """Tests for row contents and positional indices."""

    def test_entry_rows(self, full_standard_file):
        """Test entry rows carry their positions and fields."""
        entries = flatten(full_standard_file).entries

        assert _column(entries, "batch_index") == ["0", "0"]
        assert _column(entries, "entry_index") == ["0", "1"]
        assert _column(entries, "amount") == ["100000000", "2500"]
        assert entries.get_value(1, "individual_name") == "Second Receiver"
        assert entries.typed_value(0, "transaction_code") == 27

    def test_batch_rows_show_controls(self, full_standard_file):
        """Test batch rows expose the computed control totals."""
        batches = flatten(full_standard_file).batches

        assert batches.get_value(0, "batch_index") == "0"
        assert batches.get_value(0, "company_name") == "Name on Account"
        assert batches.typed_value(0, "entry_addenda_count") == 11
        assert batches.typed_value(0, "entry_hash") == 46276020
        assert batches.typed_value(0, "total_debit") == 100002500
        assert batches.typed_value(0, "total_credit") == 0

    def test_standard_addenda_order(self, full_standard_file):
        """Test addenda rows follow the standard traversal order."""
        addenda = flatten(full_standard_file).addenda

        assert _column(addenda, "addenda_type") == [
            "02",
            "05",
            "05",
            "05",
            "98",
            "99",
            "98_refused",
            "99_dishonored",
            "99_contested",
        ]
        assert _column(addenda, "addenda_index") == [str(i) for i in range(9)]
        assert set(_column(addenda, "entry_index")) == {"0"}

    def test_type_code_column(self, full_standard_file):
        """Test refined variants keep their two-digit record type code."""
        addenda = flatten(full_standard_file).addenda

        assert _column(addenda, "type_code") == [
            "02", "05", "05", "05", "98", "99", "98", "99", "99",
        ]

    def test_variant_columns(self, full_standard_file):
        """Test each row fills only its variant's columns."""
        addenda = flatten(full_standard_file).addenda

        assert addenda.get_value(0, "terminal_city") == "PHILADELPHIA"
        assert addenda.get_value(0, "sequence_number") == ""
        assert addenda.get_value(2, "payment_related_information") == "Payment memo 2"
        assert addenda.get_value(2, "sequence_number") == "2"
        assert addenda.get_value(2, "terminal_city") == ""
        assert addenda.get_value(7, "dishonored_return_reason_code") == "R68"
        assert addenda.get_value(8, "dishonored_return_reason_code") == "R69"
        assert addenda.get_value(8, "contested_return_code") == "R71"

    @pytest.mark.iat
    def test_iat_tables(self, mixed_file):
        """Test IAT batches get their own three tables."""
        table_set = flatten(mixed_file)

        assert table_set.has_iat is True
        assert table_set.batches.row_count == 2
        assert table_set.iat_batches.row_count == 1
        assert table_set.iat_entries.row_count == 1
        assert table_set.iat_batches.get_value(0, "originator_identification") == "123456789"
        assert table_set.iat_batches.typed_value(0, "entry_addenda_count") == 15
        assert table_set.iat_entries.typed_value(0, "addenda_records") == 12
        assert list(table_set.tables()) == list(TABLE_NAMES)

    @pytest.mark.iat
    def test_iat_addenda_order(self, mixed_file):
        """Test IAT addenda rows follow the IAT traversal order."""
        iat_addenda = flatten(mixed_file).iat_addenda

        assert iat_addenda.headers == IAT_ADDENDA_SCHEMA.headers
        assert _column(iat_addenda, "addenda_type") == [
            "10", "11", "12", "13", "14", "15", "16",
            "17", "17", "18", "18", "18", "98", "99",
        ]
        assert _column(iat_addenda, "addenda_index") == [str(i) for i in range(14)]
        assert iat_addenda.get_value(8, "payment_related_information") == "Remittance 2"
        assert iat_addenda.get_value(10, "foreign_correspondent_bank_name") == "Correspondent Bank 2"
        assert iat_addenda.typed_value(0, "foreign_payment_amount") == 100000

    def test_second_batch_indices(self, mixed_file):
        """Test rows of later batches carry their batch position."""
        table_set = flatten(mixed_file)

        assert _column(table_set.entries, "batch_index") == ["0", "1"]
        assert _column(table_set.entries, "entry_index") == ["0", "0"]
        assert _column(table_set.batches, "service_class_code") == ["225", "220"]


class TestFlattenTrimming:
    """Tests for text trimming."""

    @pytest.fixture
    def padded_file(self):
        entry = make_entry(individual_name="  Padded Name  ")
        ach_file = make_ach_file([Batch(header=make_batch_header(), entries=[entry])])
        ach_file.header.immediate_origin_name = "  My Bank  "
        return ach_file

    def test_trims_text_by_default(self, padded_file):
        """Test surrounding whitespace is stripped from text fields."""
        table_set = flatten(padded_file)
        assert table_set.entries.get_value(0, "individual_name") == "Padded Name"

    def test_file_header_not_trimmed(self, padded_file):
        """Test file header cells keep their padding."""
        table_set = flatten(padded_file)
        assert table_set.file_header.get_value(0, "immediate_origin_name") == "  My Bank  "

    def test_trimming_disabled(self, padded_file):
        """Test text is kept verbatim when trimming is off."""
        config = Config(conversion=ConversionConfig(trim_text_fields=False))
        table_set = flatten(padded_file, config)
        assert table_set.entries.get_value(0, "individual_name") == "  Padded Name  "


class TestFlattenMetrics:
    """Tests for flatten metrics."""

    def test_success_counted(self, single_entry_file):
        """Test successful flattens are counted."""
        before = _flatten_count("success")
        flatten(single_entry_file)
        assert _flatten_count("success") == before + 1

    def test_metrics_disabled(self, single_entry_file):
        """Test nothing is counted with metrics off."""
        config = Config(monitoring=MonitoringConfig(enable_metrics=False))
        before = _flatten_count("success")
        flatten(single_entry_file, config)
        assert _flatten_count("success") == before

"""
Tests for the ACH file model: validation, control recomputation,
addenda lookup and cloning
"""

from dataclasses import fields, is_dataclass

import pytest

from ach_tables.ach import addenda as addenda_module
from ach_tables.ach import records as records_module
from ach_tables.ach.ach_codes import AddendaType
from ach_tables.ach.addenda import Addenda02, Addenda05, Addenda17, Addenda18
from ach_tables.ach.isolation import isolate
from ach_tables.ach.records import ACHFile, Batch, EntryDetail, calculate_check_digit
from ach_tables.core.exceptions import ACHValidationError, DeepCopyFailure, InvalidInputError
from ach_tables.tests.factories import (
    make_batch_header,
    make_entry,
    make_file_header,
    make_iat_batch,
    make_iat_entry,
    with_full_standard_addenda,
)

IMMUTABLE_TYPES = (str, int, float, bool, type(None))


def assert_no_shared_mutables(original, copy, path="file"):
    """Walk two object graphs and fail on any shared mutable object."""
    if isinstance(original, IMMUTABLE_TYPES):
        assert original == copy, f"{path} differs"
        return

    assert original is not copy, f"{path} is shared between original and clone"
    assert type(original) is type(copy), f"{path} changed type"

    if is_dataclass(original):
        for f in fields(original):
            assert_no_shared_mutables(
                getattr(original, f.name), getattr(copy, f.name), f"{path}.{f.name}"
            )
    elif isinstance(original, list):
        assert len(original) == len(copy), f"{path} changed length"
        for index, (a, b) in enumerate(zip(original, copy)):
            assert_no_shared_mutables(a, b, f"{path}[{index}]")
    else:
        pytest.fail(f"{path} holds {type(original).__name__}, which clone() does not cover")


class TestCheckDigit:
    """Tests for ABA check digit calculation."""

    def test_known_routing_numbers(self):
        """Test check digits of known routing numbers."""
        assert calculate_check_digit("23138010") == "4"
        assert calculate_check_digit("12104288") == "2"

    def test_invalid_input(self):
        """Test short or non-numeric input."""
        assert calculate_check_digit("1234") == ""
        assert calculate_check_digit("ABCDEFGH") == ""
        assert calculate_check_digit("2313801²") == ""


class TestControlRecalculation:
    """Tests for ACHFile.create."""

    def test_single_entry_with_addenda(self, single_entry_file):
        """Test batch and file controls of a one-entry file."""
        control = single_entry_file.batches[0].control
        assert control.entry_addenda_count == 2
        assert control.entry_hash == 23138010
        assert control.total_debit == 100000000
        assert control.total_credit == 0
        assert control.service_class_code == 225
        assert control.odfi_identification == "12104288"
        assert control.company_identification == "231380104"

        file_control = single_entry_file.control
        assert file_control.batch_count == 1
        assert file_control.entry_addenda_count == 2
        assert file_control.block_count == 1
        assert file_control.total_debit == 100000000

    def test_mixed_batches(self, mixed_file):
        """Test totals across standard and IAT batches."""
        debit, credit = mixed_file.batches
        iat = mixed_file.iat_batches[0]

        # 1 entry + 02 + three 05 + 98 + 99 + 98_refused + 99_dishonored + 99_contested
        assert debit.control.entry_addenda_count == 10
        assert credit.control.entry_addenda_count == 1
        assert credit.control.total_credit == 7500
        # 1 entry + 10..16 + two 17 + three 18 + 98 + 99
        assert iat.control.entry_addenda_count == 15
        assert iat.control.entry_hash == 12104288
        assert iat.control.company_identification == "123456789"

        file_control = mixed_file.control
        assert file_control.batch_count == 3
        assert file_control.entry_addenda_count == 26
        assert file_control.entry_hash == 23138010 * 2 + 12104288
        assert file_control.total_debit == 100000000
        assert file_control.total_credit == 7500 + 100000
        # 2 file records + 6 batch records + 26 entries/addenda
        assert file_control.block_count == 4

    def test_entry_hash_truncated(self):
        """Test the entry hash keeps only its low ten digits."""
        entries = []
        for n in range(200):
            entry = make_entry(transaction_code=27, amount=1, sequence=n)
            entry.rdfi_identification = "99999999"
            entry.check_digit = ""
            entries.append(entry)
        ach_file = ACHFile(header=make_file_header(), batches=[Batch(make_batch_header(), entries)])

        ach_file.create()

        assert ach_file.batches[0].control.entry_hash == 9999999800
        assert ach_file.control.entry_hash == 9999999800

    def test_empty_file(self):
        """Test a file with a header and no batches."""
        ach_file = ACHFile(header=make_file_header())
        ach_file.create()
        assert ach_file.control.batch_count == 0
        assert ach_file.control.block_count == 1

    def test_missing_destination(self):
        """Test required header fields are enforced."""
        header = make_file_header()
        header.immediate_destination = ""
        ach_file = ACHFile(header=header)

        with pytest.raises(ACHValidationError) as exc_info:
            ach_file.create()
        assert any("immediate destination" in e for e in exc_info.value.errors)

    def test_debit_in_credits_only_batch(self):
        """Test service class consistency with entry direction."""
        batch = Batch(header=make_batch_header(service_class_code=220), entries=[make_entry(27)])
        ach_file = ACHFile(header=make_file_header(), batches=[batch])

        with pytest.raises(ACHValidationError) as exc_info:
            ach_file.create()
        assert "Batch 0: Entry 0: debit entry in credits-only batch" in exc_info.value.errors

    def test_check_digit_mismatch(self):
        """Test check digit validation."""
        entry = make_entry()
        entry.check_digit = "9"
        ach_file = ACHFile(header=make_file_header(), batches=[Batch(make_batch_header(), [entry])])

        with pytest.raises(ACHValidationError):
            ach_file.create()

    @pytest.mark.iat
    def test_too_many_remittance_addenda(self):
        """Test the two-record limit of addenda 17."""
        entry = make_iat_entry(remittances=3)
        ach_file = ACHFile(header=make_file_header(), iat_batches=[make_iat_batch([entry])])

        with pytest.raises(ACHValidationError) as exc_info:
            ach_file.create()
        assert any("17" in e for e in exc_info.value.errors)

    @pytest.mark.iat
    def test_iat_batch_requires_iat_sec_code(self):
        """Test IAT batch header SEC code."""
        batch = make_iat_batch()
        batch.header.standard_entry_class_code = "PPD"
        ach_file = ACHFile(header=make_file_header(), iat_batches=[batch])

        with pytest.raises(ACHValidationError):
            ach_file.create()


class TestFindAddenda:
    """Tests for addenda lookup by traversal position."""

    def test_traversal_order(self):
        """Test iter_addenda yields the fixed standard order."""
        entry = with_full_standard_addenda(make_entry(), payments=2)
        tags = [t.tag for t, _ in entry.iter_addenda()]
        assert tags == ["02", "05", "05", "98", "99", "98_refused", "99_dishonored", "99_contested"]

    def test_payment_addenda_after_terminal_addenda(self):
        """Test 05 occurrences are offset by a present 02."""
        entry = with_full_standard_addenda(make_entry(), payments=3)

        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 1) is entry.addenda05[0]
        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 3) is entry.addenda05[2]
        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 0) is None
        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 4) is None

    def test_payment_addenda_without_terminal_addenda(self):
        """Test 05 occurrences start at zero without a 02."""
        entry = make_entry()
        entry.addenda05 = [Addenda05(payment_related_information="a"), Addenda05(payment_related_information="b")]

        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 0).payment_related_information == "a"
        assert entry.find_addenda(AddendaType.PAYMENT_RELATED, 1).payment_related_information == "b"

    def test_single_slots(self):
        """Test non-repeatable variants resolve by slot."""
        entry = with_full_standard_addenda(make_entry())
        assert entry.find_addenda(AddendaType.CONTESTED_DISHONORED_RETURN, 9) is entry.addenda99_contested
        assert entry.find_addenda(AddendaType.POINT_OF_SALE, 0) is entry.addenda02

        entry.addenda02 = None
        assert entry.find_addenda(AddendaType.POINT_OF_SALE, 0) is None

    def test_foreign_tag(self):
        """Test IAT tags do not resolve on standard entries."""
        entry = with_full_standard_addenda(make_entry())
        assert entry.find_addenda(AddendaType.IAT_REMITTANCE, 1) is None

    @pytest.mark.iat
    def test_iat_offsets(self):
        """Test 17 and 18 occurrences with all of 10-16 present."""
        entry = make_iat_entry(remittances=2, correspondents=3)

        assert entry.find_addenda(AddendaType.IAT_REMITTANCE, 7) is entry.addenda17[0]
        assert entry.find_addenda(AddendaType.IAT_REMITTANCE, 8) is entry.addenda17[1]
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 9) is entry.addenda18[0]
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 11) is entry.addenda18[2]
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 12) is None

    @pytest.mark.iat
    def test_iat_offsets_with_missing_mandatory_addenda(self):
        """Test offsets count only the 10-16 records actually present."""
        entry = make_iat_entry(remittances=1, correspondents=2)
        entry.addenda12 = None
        entry.addenda15 = None

        assert entry.find_addenda(AddendaType.IAT_REMITTANCE, 5) is entry.addenda17[0]
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 6) is entry.addenda18[0]
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 7) is entry.addenda18[1]

    @pytest.mark.iat
    def test_iat_correspondents_without_remittance(self):
        """Test 18 offsets when no 17 is present."""
        entry = make_iat_entry(remittances=0, correspondents=1)
        assert entry.find_addenda(AddendaType.IAT_FOREIGN_CORRESPONDENT, 7) is entry.addenda18[0]

    def test_addenda_count(self):
        """Test the attached addenda count."""
        assert make_entry().addenda_count() == 0
        assert with_full_standard_addenda(make_entry(), payments=2).addenda_count() == 8
        assert make_iat_entry().addenda_count() == 14


class TestClone:
    """Tests for per-type cloning."""

    def test_every_record_type_defines_clone(self):
        """Test each model dataclass has its own clone method."""
        for module in (records_module, addenda_module):
            for value in vars(module).values():
                if isinstance(value, type) and is_dataclass(value) and value.__module__ == module.__name__:
                    assert callable(getattr(value, "clone", None)), value.__name__

    def test_clone_shares_no_mutable_state(self, mixed_file):
        """Audit: no record or list is shared between a file and its clone."""
        clone = mixed_file.clone()
        assert clone == mixed_file
        assert_no_shared_mutables(mixed_file, clone)

    def test_clone_isolates_addenda_lists(self, full_standard_file):
        """Test mutating a cloned addenda list leaves the original intact."""
        clone = full_standard_file.clone()
        entry = clone.batches[0].entries[0]
        entry.addenda05.append(Addenda05(payment_related_information="extra"))
        entry.addenda05[0].payment_related_information = "changed"
        entry.addenda02 = Addenda02()

        original_entry = full_standard_file.batches[0].entries[0]
        assert len(original_entry.addenda05) == 3
        assert original_entry.addenda05[0].payment_related_information == "Payment memo 1"
        assert original_entry.addenda02.terminal_city == "PHILADELPHIA"

    @pytest.mark.iat
    def test_clone_isolates_iat_lists(self, mixed_file):
        """Test IAT repeatable addenda are deep copied."""
        clone = mixed_file.clone()
        clone.iat_batches[0].entries[0].addenda18[0].foreign_correspondent_bank_name = "X"
        clone.iat_batches[0].entries[0].addenda17.append(Addenda17())

        entry = mixed_file.iat_batches[0].entries[0]
        assert entry.addenda18[0].foreign_correspondent_bank_name == "Correspondent Bank 1"
        assert len(entry.addenda17) == 2


class TestIsolate:
    """Tests for the isolation boundary."""

    def test_isolate_returns_independent_copy(self, mixed_file):
        """Test isolate produces an equal, unshared copy."""
        working = isolate(mixed_file)
        assert working == mixed_file
        assert_no_shared_mutables(mixed_file, working)

    def test_isolate_rejects_non_file(self):
        """Test isolate requires an ACHFile."""
        with pytest.raises(InvalidInputError):
            isolate(None)

    def test_clone_failure(self, single_entry_file):
        """Test clone errors surface as DeepCopyFailure."""
        single_entry_file.batches[0].entries = None

        with pytest.raises(DeepCopyFailure) as exc_info:
            isolate(single_entry_file)
        assert exc_info.value.error_code == "DEEP_COPY_FAILURE"

"""
NACHA ACH File Model

In-memory hierarchy of an ACH file:

- File Header Record (1)
- Batch Header Record (5) [0..n], standard or IAT
- Entry Detail Record (6) [0..n per batch]
- Addenda Record (7) [0..n per entry]
- Batch Control Record (8)
- File Control Record (9)

Byte-level encoding is handled elsewhere; this module owns the
structure, per-type cloning and recomputation of control totals.
"""

from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterator, List, Optional, Tuple
import logging

from ach_tables.ach.ach_codes import (
    AddendaType,
    IAT_ADDENDA_ORDER,
    STANDARD_ADDENDA_ORDER,
    SECCode,
    ServiceClassCode,
    TransactionCode,
)
from ach_tables.ach.addenda import (
    AddendaRecord,
    Addenda02,
    Addenda05,
    Addenda98,
    Addenda98Refused,
    Addenda99,
    Addenda99Dishonored,
    Addenda99Contested,
    Addenda10,
    Addenda11,
    Addenda12,
    Addenda13,
    Addenda14,
    Addenda15,
    Addenda16,
    Addenda17,
    Addenda18,
)
from ach_tables.core.exceptions import ACHValidationError

logger = logging.getLogger(__name__)

# Records per physical block
BLOCKING_FACTOR = 10

# Entry hash and totals are truncated to these field widths
ENTRY_HASH_MODULUS = 10 ** 10


def _clone_optional(addenda: Optional[AddendaRecord]) -> Optional[AddendaRecord]:
    return addenda.clone() if addenda is not None else None


def calculate_check_digit(routing: str) -> str:
    """Calculate ABA routing number check digit."""
    if len(routing) < 8 or not (routing[:8].isascii() and routing[:8].isdigit()):
        return ""

    weights = [3, 7, 1, 3, 7, 1, 3, 7]
    total = sum(int(routing[i]) * weights[i] for i in range(8))
    check = (10 - (total % 10)) % 10
    return str(check)


@dataclass
class FileHeader:
    """
    NACHA File Header Record (Record Type 1).

    Identifies the file, immediate destination, and origin.
    """

    immediate_destination: str = ""  # 10 chars, space + 9-digit routing
    immediate_origin: str = ""  # 10 chars, space + 9-digit ID
    file_creation_date: str = ""  # YYMMDD
    file_creation_time: str = ""  # HHMM
    file_id_modifier: str = "A"  # A-Z, 0-9
    immediate_destination_name: str = ""  # 23 chars
    immediate_origin_name: str = ""  # 23 chars
    reference_code: str = ""  # 8 chars

    def validate(self) -> List[str]:
        """Validate file header."""
        errors = []

        if len(self.immediate_destination.strip()) < 9:
            errors.append("Invalid immediate destination routing number")

        if len(self.immediate_origin.strip()) < 9:
            errors.append("Invalid immediate origin ID")

        if not self.file_creation_date.strip():
            errors.append("File creation date is required")

        modifier = self.file_id_modifier.strip()
        if len(modifier) != 1 or not modifier.isalnum():
            errors.append("File ID modifier must be a single character A-Z or 0-9")

        return errors

    def clone(self) -> "FileHeader":
        return replace(self)


@dataclass
class FileControl:
    """
    NACHA File Control Record (Record Type 9).

    File-level totals, derived by ``ACHFile.create``.
    """

    batch_count: int = 0
    block_count: int = 0
    entry_addenda_count: int = 0
    entry_hash: int = 0
    total_debit: int = 0
    total_credit: int = 0

    def clone(self) -> "FileControl":
        return replace(self)


@dataclass
class BatchControl:
    """
    NACHA Batch Control Record (Record Type 8).

    Totals and hash for the batch, derived by ``ACHFile.create``.
    """

    service_class_code: int = 0
    entry_addenda_count: int = 0
    entry_hash: int = 0
    total_debit: int = 0
    total_credit: int = 0
    company_identification: str = ""
    odfi_identification: str = ""
    batch_number: int = 0

    def clone(self) -> "BatchControl":
        return replace(self)


@dataclass
class BatchHeader:
    """
    NACHA Batch Header Record (Record Type 5).

    Identifies the batch and its characteristics.
    """

    service_class_code: int = 200
    company_name: str = ""  # 16 chars
    company_discretionary_data: str = ""  # 20 chars
    company_identification: str = ""  # 10 chars
    standard_entry_class_code: str = "PPD"
    company_entry_description: str = ""  # 10 chars
    company_descriptive_date: str = ""  # 6 chars
    effective_entry_date: str = ""  # YYMMDD
    originator_status_code: int = 1
    odfi_identification: str = ""  # first 8 of routing
    batch_number: int = 1

    def validate(self) -> List[str]:
        """Validate batch header."""
        errors = []

        if ServiceClassCode.from_code(self.service_class_code) is None:
            errors.append(f"Unknown service class code {self.service_class_code}")

        if not self.company_name.strip():
            errors.append("Company name is required")

        if SECCode.from_code(self.standard_entry_class_code) is None:
            errors.append(
                f"Unknown standard entry class code '{self.standard_entry_class_code}'"
            )

        if len(self.odfi_identification.strip()) != 8:
            errors.append("ODFI identification must be 8 characters")

        return errors

    def clone(self) -> "BatchHeader":
        return replace(self)


class AddendaSlots:
    """
    Addenda attachment shared by standard and IAT entries.

    ``addenda_slots`` lists, in traversal order, each addenda type the
    entry can carry and the attribute holding it. Repeatable types are
    held in lists, the rest in optional single slots.
    """

    addenda_slots: ClassVar[Tuple[Tuple[AddendaType, str], ...]] = ()

    def slot_for(self, addenda_type: AddendaType) -> Optional[str]:
        for slot_type, attribute in self.addenda_slots:
            if slot_type is addenda_type:
                return attribute
        return None

    def iter_addenda(self) -> Iterator[Tuple[AddendaType, AddendaRecord]]:
        """Yield attached addenda in traversal order."""
        for addenda_type, attribute in self.addenda_slots:
            value = getattr(self, attribute)
            if addenda_type.is_repeatable:
                for addenda in value:
                    yield addenda_type, addenda
            elif value is not None:
                yield addenda_type, value

    def addenda_count(self) -> int:
        return sum(1 for _ in self.iter_addenda())

    def find_addenda(
        self, addenda_type: AddendaType, addenda_index: int
    ) -> Optional[AddendaRecord]:
        """
        Locate the addenda a flat row refers to.

        Single-slot types are found by type alone. For repeatable types the
        occurrence is ``addenda_index`` minus the number of attached addenda
        that precede the type in traversal order.

        Returns:
            The addenda instance, or None when it does not exist
        """
        attribute = self.slot_for(addenda_type)
        if attribute is None:
            return None

        if not addenda_type.is_repeatable:
            return getattr(self, attribute)

        preceding = 0
        for slot_type, slot_attribute in self.addenda_slots:
            if slot_type is addenda_type:
                break
            value = getattr(self, slot_attribute)
            if slot_type.is_repeatable:
                preceding += len(value)
            elif value is not None:
                preceding += 1

        occurrences = getattr(self, attribute)
        occurrence = addenda_index - preceding
        if 0 <= occurrence < len(occurrences):
            return occurrences[occurrence]
        return None

    def _validate_addenda(self) -> List[str]:
        errors = []
        for addenda_type, attribute in self.addenda_slots:
            limit = addenda_type.max_occurrences
            if addenda_type.is_repeatable and limit is not None:
                count = len(getattr(self, attribute))
                if count > limit:
                    errors.append(
                        f"At most {limit} addenda {addenda_type.tag} records allowed, got {count}"
                    )
        return errors


def _validate_entry_common(entry) -> List[str]:
    errors = []

    if TransactionCode.from_code(entry.transaction_code) is None:
        errors.append(f"Unknown transaction code {entry.transaction_code}")

    rdfi = entry.rdfi_identification.strip()
    if len(rdfi) != 8 or not (rdfi.isascii() and rdfi.isdigit()):
        errors.append("RDFI identification must be 8 digits")
    elif entry.check_digit and entry.check_digit != calculate_check_digit(rdfi):
        errors.append(
            f"Check digit mismatch: expected {calculate_check_digit(rdfi)}, got {entry.check_digit}"
        )

    if entry.amount < 0:
        errors.append("Amount cannot be negative")

    return errors


@dataclass
class EntryDetail(AddendaSlots):
    """
    NACHA Entry Detail Record (Record Type 6).

    Individual transaction within a batch.
    """

    addenda_slots: ClassVar[Tuple[Tuple[AddendaType, str], ...]] = tuple(
        zip(
            STANDARD_ADDENDA_ORDER,
            (
                "addenda02",
                "addenda05",
                "addenda98",
                "addenda99",
                "addenda98_refused",
                "addenda99_dishonored",
                "addenda99_contested",
            ),
        )
    )

    transaction_code: int = 22
    rdfi_identification: str = ""  # 8 digits
    check_digit: str = ""  # 1 char
    dfi_account_number: str = ""  # 17 chars
    amount: int = 0  # minor units
    identification_number: str = ""  # 15 chars
    individual_name: str = ""  # 22 chars
    discretionary_data: str = ""  # 2 chars
    addenda_record_indicator: int = 0
    trace_number: str = ""  # 15 chars
    category: str = "Forward"

    addenda02: Optional[Addenda02] = None
    addenda05: List[Addenda05] = field(default_factory=list)
    addenda98: Optional[Addenda98] = None
    addenda98_refused: Optional[Addenda98Refused] = None
    addenda99: Optional[Addenda99] = None
    addenda99_dishonored: Optional[Addenda99Dishonored] = None
    addenda99_contested: Optional[Addenda99Contested] = None

    def validate(self) -> List[str]:
        """Validate entry detail."""
        errors = _validate_entry_common(self)

        if not self.dfi_account_number.strip():
            errors.append("DFI account number is required")

        errors.extend(self._validate_addenda())
        return errors

    def clone(self) -> "EntryDetail":
        return replace(
            self,
            addenda02=_clone_optional(self.addenda02),
            addenda05=[addenda.clone() for addenda in self.addenda05],
            addenda98=_clone_optional(self.addenda98),
            addenda98_refused=_clone_optional(self.addenda98_refused),
            addenda99=_clone_optional(self.addenda99),
            addenda99_dishonored=_clone_optional(self.addenda99_dishonored),
            addenda99_contested=_clone_optional(self.addenda99_contested),
        )


@dataclass
class IATBatchHeader:
    """
    IAT Batch Header Record (Record Type 5, SEC code IAT).
    """

    service_class_code: int = 200
    iat_indicator: str = ""
    foreign_exchange_indicator: str = ""  # FV, VF, FF
    foreign_exchange_reference_indicator: int = 0  # 1, 2 or 3
    foreign_exchange_reference: str = ""
    iso_destination_country_code: str = ""
    originator_identification: str = ""
    standard_entry_class_code: str = "IAT"
    company_entry_description: str = ""
    iso_originating_currency_code: str = ""
    iso_destination_currency_code: str = ""
    effective_entry_date: str = ""
    originator_status_code: int = 1
    odfi_identification: str = ""
    batch_number: int = 1

    def validate(self) -> List[str]:
        """Validate IAT batch header."""
        errors = []

        if ServiceClassCode.from_code(self.service_class_code) is None:
            errors.append(f"Unknown service class code {self.service_class_code}")

        if self.standard_entry_class_code.strip().upper() != SECCode.IAT.code:
            errors.append("IAT batch standard entry class code must be IAT")

        if len(self.odfi_identification.strip()) != 8:
            errors.append("ODFI identification must be 8 characters")

        return errors

    def clone(self) -> "IATBatchHeader":
        return replace(self)


@dataclass
class IATEntryDetail(AddendaSlots):
    """
    IAT Entry Detail Record (Record Type 6).
    """

    addenda_slots: ClassVar[Tuple[Tuple[AddendaType, str], ...]] = tuple(
        zip(
            IAT_ADDENDA_ORDER,
            (
                "addenda10",
                "addenda11",
                "addenda12",
                "addenda13",
                "addenda14",
                "addenda15",
                "addenda16",
                "addenda17",
                "addenda18",
                "addenda98",
                "addenda99",
            ),
        )
    )

    transaction_code: int = 22
    rdfi_identification: str = ""
    check_digit: str = ""
    addenda_records: int = 0
    amount: int = 0
    dfi_account_number: str = ""  # 35 chars
    ofac_screening_indicator: str = ""
    secondary_ofac_screening_indicator: str = ""
    addenda_record_indicator: int = 1
    trace_number: str = ""
    category: str = "Forward"

    addenda10: Optional[Addenda10] = None
    addenda11: Optional[Addenda11] = None
    addenda12: Optional[Addenda12] = None
    addenda13: Optional[Addenda13] = None
    addenda14: Optional[Addenda14] = None
    addenda15: Optional[Addenda15] = None
    addenda16: Optional[Addenda16] = None
    addenda17: List[Addenda17] = field(default_factory=list)
    addenda18: List[Addenda18] = field(default_factory=list)
    addenda98: Optional[Addenda98] = None
    addenda99: Optional[Addenda99] = None

    def validate(self) -> List[str]:
        """Validate IAT entry detail."""
        errors = _validate_entry_common(self)
        errors.extend(self._validate_addenda())
        return errors

    def clone(self) -> "IATEntryDetail":
        return replace(
            self,
            addenda10=_clone_optional(self.addenda10),
            addenda11=_clone_optional(self.addenda11),
            addenda12=_clone_optional(self.addenda12),
            addenda13=_clone_optional(self.addenda13),
            addenda14=_clone_optional(self.addenda14),
            addenda15=_clone_optional(self.addenda15),
            addenda16=_clone_optional(self.addenda16),
            addenda17=[addenda.clone() for addenda in self.addenda17],
            addenda18=[addenda.clone() for addenda in self.addenda18],
            addenda98=_clone_optional(self.addenda98),
            addenda99=_clone_optional(self.addenda99),
        )


def _batch_totals(entries) -> Tuple[int, int, int, int]:
    """Return entry/addenda count, entry hash, total debit and total credit."""
    count = 0
    entry_hash = 0
    total_debit = 0
    total_credit = 0

    for entry in entries:
        count += 1 + entry.addenda_count()
        entry_hash += int(entry.rdfi_identification.strip()[:8])

        tc = TransactionCode.from_code(entry.transaction_code)
        if tc.is_credit:
            total_credit += entry.amount
        elif tc.is_debit:
            total_debit += entry.amount

    return count, entry_hash % ENTRY_HASH_MODULUS, total_debit, total_credit


def _validate_service_class(service_class_code: int, entries) -> List[str]:
    scc = ServiceClassCode.from_code(service_class_code)
    errors = []

    for index, entry in enumerate(entries):
        tc = TransactionCode.from_code(entry.transaction_code)
        if tc is None:
            continue
        if scc is ServiceClassCode.CREDITS_ONLY and tc.is_debit:
            errors.append(f"Entry {index}: debit entry in credits-only batch")
        if scc is ServiceClassCode.DEBITS_ONLY and tc.is_credit:
            errors.append(f"Entry {index}: credit entry in debits-only batch")

    return errors


@dataclass
class Batch:
    """Complete batch with header, entries, and control."""

    header: BatchHeader = field(default_factory=BatchHeader)
    entries: List[EntryDetail] = field(default_factory=list)
    control: BatchControl = field(default_factory=BatchControl)

    def validate(self) -> List[str]:
        """Validate batch and its entries."""
        errors = self.header.validate()

        for index, entry in enumerate(self.entries):
            errors.extend(f"Entry {index}: {error}" for error in entry.validate())

        errors.extend(_validate_service_class(self.header.service_class_code, self.entries))
        return errors

    def create(self) -> None:
        """Recompute the batch control from header and entries."""
        count, entry_hash, total_debit, total_credit = _batch_totals(self.entries)

        self.control = BatchControl(
            service_class_code=self.header.service_class_code,
            entry_addenda_count=count,
            entry_hash=entry_hash,
            total_debit=total_debit,
            total_credit=total_credit,
            company_identification=self.header.company_identification,
            odfi_identification=self.header.odfi_identification,
            batch_number=self.header.batch_number,
        )

    def clone(self) -> "Batch":
        return Batch(
            header=self.header.clone(),
            entries=[entry.clone() for entry in self.entries],
            control=self.control.clone(),
        )


@dataclass
class IATBatch:
    """IAT batch with header, entries, and control."""

    header: IATBatchHeader = field(default_factory=IATBatchHeader)
    entries: List[IATEntryDetail] = field(default_factory=list)
    control: BatchControl = field(default_factory=BatchControl)

    def validate(self) -> List[str]:
        """Validate IAT batch and its entries."""
        errors = self.header.validate()

        for index, entry in enumerate(self.entries):
            errors.extend(f"Entry {index}: {error}" for error in entry.validate())

        errors.extend(_validate_service_class(self.header.service_class_code, self.entries))
        return errors

    def create(self) -> None:
        """Recompute the batch control from header and entries."""
        count, entry_hash, total_debit, total_credit = _batch_totals(self.entries)

        self.control = BatchControl(
            service_class_code=self.header.service_class_code,
            entry_addenda_count=count,
            entry_hash=entry_hash,
            total_debit=total_debit,
            total_credit=total_credit,
            company_identification=self.header.originator_identification,
            odfi_identification=self.header.odfi_identification,
            batch_number=self.header.batch_number,
        )

    def clone(self) -> "IATBatch":
        return IATBatch(
            header=self.header.clone(),
            entries=[entry.clone() for entry in self.entries],
            control=self.control.clone(),
        )


@dataclass
class ACHFile:
    """Complete ACH file structure."""

    header: FileHeader = field(default_factory=FileHeader)
    batches: List[Batch] = field(default_factory=list)
    iat_batches: List[IATBatch] = field(default_factory=list)
    control: FileControl = field(default_factory=FileControl)

    def validate(self) -> List[str]:
        """Validate the file structure. Returns a list of error messages."""
        errors = [f"File header: {error}" for error in self.header.validate()]

        for index, batch in enumerate(self.batches):
            errors.extend(f"Batch {index}: {error}" for error in batch.validate())

        for index, batch in enumerate(self.iat_batches):
            errors.extend(f"IAT batch {index}: {error}" for error in batch.validate())

        return errors

    def create(self) -> None:
        """
        Recompute all batch and file control records.

        Raises:
            ACHValidationError: If the file fails structural validation
        """
        errors = self.validate()
        if errors:
            raise ACHValidationError(
                f"ACH file failed validation with {len(errors)} error(s)", errors
            )

        all_batches = list(self.batches) + list(self.iat_batches)
        for batch in all_batches:
            batch.create()

        entry_addenda_count = sum(b.control.entry_addenda_count for b in all_batches)
        # File header and control, plus a header and control per batch
        record_count = 2 + 2 * len(all_batches) + entry_addenda_count

        self.control = FileControl(
            batch_count=len(all_batches),
            block_count=(record_count + BLOCKING_FACTOR - 1) // BLOCKING_FACTOR,
            entry_addenda_count=entry_addenda_count,
            entry_hash=sum(b.control.entry_hash for b in all_batches) % ENTRY_HASH_MODULUS,
            total_debit=sum(b.control.total_debit for b in all_batches),
            total_credit=sum(b.control.total_credit for b in all_batches),
        )

        logger.debug(
            "Recomputed controls for %d batches, %d records",
            len(all_batches),
            record_count,
        )

    def clone(self) -> "ACHFile":
        return ACHFile(
            header=self.header.clone(),
            batches=[batch.clone() for batch in self.batches],
            iat_batches=[batch.clone() for batch in self.iat_batches],
            control=self.control.clone(),
        )

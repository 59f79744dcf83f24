"""
NACHA Addenda Records (Record Type 7)

One dataclass per addenda variant. Each variant carries only its own
fields; the ``addenda_type`` class attribute identifies the variant at
the table boundary. Field names match the column names of the addenda
tables.
"""

from dataclasses import dataclass, replace
from typing import ClassVar, TypeVar

from ach_tables.ach.ach_codes import AddendaType

A = TypeVar("A", bound="AddendaRecord")


@dataclass
class AddendaRecord:
    """Base class of all addenda variants."""

    addenda_type: ClassVar[AddendaType]

    @property
    def type_code(self) -> str:
        return self.addenda_type.type_code

    def clone(self: A) -> A:
        # Variants hold only str/int fields.
        return replace(self)


# Standard entry addenda


@dataclass
class Addenda02(AddendaRecord):
    """Point-of-sale terminal information (POS, SHR, MTE entries)."""

    addenda_type: ClassVar[AddendaType] = AddendaType.POINT_OF_SALE

    reference_information_one: str = ""  # 7 chars
    reference_information_two: str = ""  # 3 chars
    terminal_identification: str = ""  # 6 chars
    transaction_serial: str = ""  # 6 chars
    transaction_date: str = ""  # MMDD
    authorization_code: str = ""  # 6 chars, or card expiration date
    terminal_location: str = ""  # 27 chars
    terminal_city: str = ""  # 15 chars
    terminal_state: str = ""  # 2 chars
    trace_number: str = ""  # 15 chars


@dataclass
class Addenda05(AddendaRecord):
    """Payment related information; an entry may carry several."""

    addenda_type: ClassVar[AddendaType] = AddendaType.PAYMENT_RELATED

    payment_related_information: str = ""  # 80 chars
    sequence_number: int = 1  # 4 chars
    entry_detail_sequence_number: int = 0  # 7 chars, last 7 of entry trace


@dataclass
class Addenda98(AddendaRecord):
    """Notification of Change."""

    addenda_type: ClassVar[AddendaType] = AddendaType.NOTIFICATION_OF_CHANGE

    change_code: str = ""  # C01..C13
    original_trace: str = ""
    original_rdfi: str = ""
    corrected_data: str = ""  # 29 chars
    trace_number: str = ""


@dataclass
class Addenda98Refused(AddendaRecord):
    """Refused Notification of Change."""

    addenda_type: ClassVar[AddendaType] = AddendaType.REFUSED_NOTIFICATION_OF_CHANGE

    refused_change_code: str = ""  # C61..C69
    original_trace: str = ""
    original_rdfi: str = ""
    corrected_data: str = ""
    change_code: str = ""
    trace_sequence_number: str = ""
    trace_number: str = ""


@dataclass
class Addenda99(AddendaRecord):
    """Return entry."""

    addenda_type: ClassVar[AddendaType] = AddendaType.RETURN

    return_code: str = ""  # R01..R85
    original_trace: str = ""
    original_rdfi: str = ""
    addenda_information: str = ""  # 44 chars
    trace_number: str = ""


@dataclass
class Addenda99Dishonored(AddendaRecord):
    """Dishonored return entry."""

    addenda_type: ClassVar[AddendaType] = AddendaType.DISHONORED_RETURN

    dishonored_return_reason_code: str = ""  # R61..R77
    original_entry_trace_number: str = ""
    original_receiving_dfi_identification: str = ""
    return_trace_number: str = ""
    return_settlement_date: str = ""
    return_reason_code: str = ""
    addenda_information: str = ""
    trace_number: str = ""


@dataclass
class Addenda99Contested(AddendaRecord):
    """Contested dishonored return entry."""

    addenda_type: ClassVar[AddendaType] = AddendaType.CONTESTED_DISHONORED_RETURN

    contested_return_code: str = ""
    original_entry_trace_number: str = ""
    date_original_entry_returned: str = ""
    original_receiving_dfi_identification: str = ""
    original_settlement_date: str = ""
    return_trace_number: str = ""
    return_settlement_date: str = ""
    return_reason_code: str = ""
    dishonored_return_trace_number: str = ""
    dishonored_return_settlement_date: str = ""
    dishonored_return_reason_code: str = ""
    trace_number: str = ""


# IAT entry addenda. IAT entries reuse Addenda98 and Addenda99.


@dataclass
class Addenda10(AddendaRecord):
    """IAT transaction type, foreign amount and receiver name."""

    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_TRANSACTION

    transaction_type_code: str = ""  # ANN, BUS, DEP, ...
    foreign_payment_amount: int = 0
    foreign_trace_number: str = ""
    receiving_company_name: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda11(AddendaRecord):
    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_ORIGINATOR

    originator_name: str = ""
    originator_street_address: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda12(AddendaRecord):
    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_ORIGINATOR_LOCATION

    originator_city_state_province: str = ""
    originator_country_postal_code: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda13(AddendaRecord):
    """IAT originating DFI."""

    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_ODFI

    odfi_name: str = ""
    odfi_identification_number_qualifier: str = ""  # 01 national, 02 BIC, 03 IBAN
    odfi_identification: str = ""
    odfi_branch_country_code: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda14(AddendaRecord):
    """IAT receiving DFI."""

    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_RDFI

    rdfi_name: str = ""
    rdfi_identification_number_qualifier: str = ""
    rdfi_identification: str = ""
    rdfi_branch_country_code: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda15(AddendaRecord):
    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_RECEIVER

    receiver_identification_number: str = ""
    receiver_street_address: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda16(AddendaRecord):
    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_RECEIVER_LOCATION

    receiver_city_state_province: str = ""
    receiver_country_postal_code: str = ""
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda17(AddendaRecord):
    """IAT remittance information; at most two per entry."""

    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_REMITTANCE

    payment_related_information: str = ""
    sequence_number: int = 1
    entry_detail_sequence_number: int = 0


@dataclass
class Addenda18(AddendaRecord):
    """IAT foreign correspondent bank; at most five per entry."""

    addenda_type: ClassVar[AddendaType] = AddendaType.IAT_FOREIGN_CORRESPONDENT

    foreign_correspondent_bank_name: str = ""
    foreign_correspondent_bank_id_number_qualifier: str = ""
    foreign_correspondent_bank_id_number: str = ""
    foreign_correspondent_bank_branch_country_code: str = ""
    sequence_number: int = 1
    entry_detail_sequence_number: int = 0


ADDENDA_VARIANTS = {
    variant.addenda_type: variant
    for variant in (
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
}

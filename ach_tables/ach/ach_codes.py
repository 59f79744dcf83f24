"""
ACH/NACHA Code Definitions

Service class codes, transaction codes, Standard Entry Class codes and
the addenda type tags used by the flat table representation.
"""

from enum import Enum
from typing import Optional, Tuple, Union


class ServiceClassCode(Enum):
    """
    ACH Batch Service Class Codes.

    Indicates the type of entries in the batch.
    """

    MIXED = ("200", "Mixed Debits and Credits")
    CREDITS_ONLY = ("220", "Credits Only")
    DEBITS_ONLY = ("225", "Debits Only")
    AUTOMATED_ACCOUNTING_ADVICE = ("280", "Automated Accounting Advice")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: Union[int, str]) -> Optional["ServiceClassCode"]:
        code = str(code).strip()
        for scc in cls:
            if scc.code == code:
                return scc
        return None


class TransactionCode(Enum):
    """
    ACH Transaction Codes.

    Two-digit codes indicating the type of account and transaction.
    """

    # Checking Account - Credits
    CHECKING_RETURN_NOC_CREDIT = ("21", "Checking Return or NOC Credit")
    CHECKING_CREDIT = ("22", "Checking Credit (Deposit)")
    CHECKING_CREDIT_PRENOTE = ("23", "Checking Credit Prenote")
    CHECKING_CREDIT_ZERO_DOLLAR = ("24", "Checking Credit Zero Dollar with Remittance")

    # Checking Account - Debits
    CHECKING_RETURN_NOC_DEBIT = ("26", "Checking Return or NOC Debit")
    CHECKING_DEBIT = ("27", "Checking Debit (Payment)")
    CHECKING_DEBIT_PRENOTE = ("28", "Checking Debit Prenote")
    CHECKING_DEBIT_ZERO_DOLLAR = ("29", "Checking Debit Zero Dollar with Remittance")

    # Savings Account - Credits
    SAVINGS_RETURN_NOC_CREDIT = ("31", "Savings Return or NOC Credit")
    SAVINGS_CREDIT = ("32", "Savings Credit (Deposit)")
    SAVINGS_CREDIT_PRENOTE = ("33", "Savings Credit Prenote")
    SAVINGS_CREDIT_ZERO_DOLLAR = ("34", "Savings Credit Zero Dollar with Remittance")

    # Savings Account - Debits
    SAVINGS_RETURN_NOC_DEBIT = ("36", "Savings Return or NOC Debit")
    SAVINGS_DEBIT = ("37", "Savings Debit (Payment)")
    SAVINGS_DEBIT_PRENOTE = ("38", "Savings Debit Prenote")
    SAVINGS_DEBIT_ZERO_DOLLAR = ("39", "Savings Debit Zero Dollar with Remittance")

    # GL Account (General Ledger) - Credits
    GL_RETURN_NOC_CREDIT = ("41", "General Ledger Return or NOC Credit")
    GL_CREDIT = ("42", "General Ledger Credit")
    GL_CREDIT_PRENOTE = ("43", "General Ledger Credit Prenote")
    GL_CREDIT_ZERO_DOLLAR = ("44", "General Ledger Credit Zero Dollar")

    # GL Account - Debits
    GL_RETURN_NOC_DEBIT = ("46", "General Ledger Return or NOC Debit")
    GL_DEBIT = ("47", "General Ledger Debit")
    GL_DEBIT_PRENOTE = ("48", "General Ledger Debit Prenote")
    GL_DEBIT_ZERO_DOLLAR = ("49", "General Ledger Debit Zero Dollar")

    # Loan Account - Credits
    LOAN_RETURN_NOC_CREDIT = ("51", "Loan Account Return or NOC Credit")
    LOAN_CREDIT = ("52", "Loan Account Credit")
    LOAN_CREDIT_PRENOTE = ("53", "Loan Account Credit Prenote")
    LOAN_CREDIT_ZERO_DOLLAR = ("54", "Loan Account Credit Zero Dollar")

    # Loan Account - Debits (Reversal)
    LOAN_DEBIT = ("55", "Loan Account Debit (Reversal)")
    LOAN_RETURN_NOC_DEBIT = ("56", "Loan Account Return or NOC Debit")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @property
    def is_credit(self) -> bool:
        """Check if transaction is a credit."""
        return self.code[1] in ("1", "2", "3", "4")

    @property
    def is_debit(self) -> bool:
        """Check if transaction is a debit."""
        return self.code[1] in ("5", "6", "7", "8", "9")

    @classmethod
    def from_code(cls, code: Union[int, str]) -> Optional["TransactionCode"]:
        code = str(code).strip()
        for tc in cls:
            if tc.code == code:
                return tc
        return None


class SECCode(Enum):
    """
    Standard Entry Class (SEC) Codes.

    Three-letter codes identifying the type of ACH entry.
    """

    # Consumer Entries
    PPD = ("PPD", "Prearranged Payment and Deposit")
    WEB = ("WEB", "Internet-Initiated Entry")
    TEL = ("TEL", "Telephone-Initiated Entry")
    POP = ("POP", "Point of Purchase Entry")
    ARC = ("ARC", "Accounts Receivable Entry")
    BOC = ("BOC", "Back Office Conversion")
    RCK = ("RCK", "Re-presented Check Entry")

    # Corporate Entries
    CCD = ("CCD", "Corporate Credit or Debit")
    CTX = ("CTX", "Corporate Trade Exchange")
    CIE = ("CIE", "Customer-Initiated Entry")

    # Government Entries
    ACK = ("ACK", "Acknowledgment Entry")
    ATX = ("ATX", "Acknowledgment Entry with Addenda")

    # Financial Institution Entries
    IAT = ("IAT", "International ACH Transaction")
    ENR = ("ENR", "Automated Enrollment Entry")
    TRC = ("TRC", "Check Truncation Entry")
    TRX = ("TRX", "Truncated Entry")
    XCK = ("XCK", "Destroyed Check Entry")
    COR = ("COR", "Notification of Change or Refused Notification of Change")
    ADV = ("ADV", "Automated Accounting Advice")

    # Point of Sale
    POS = ("POS", "Point of Sale Entry")
    SHR = ("SHR", "Shared Network Entry")
    MTE = ("MTE", "Machine Transfer Entry")

    # Direct Deposit/Payment
    DNE = ("DNE", "Death Notification Entry")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["SECCode"]:
        code = code.strip().upper()
        for sec in cls:
            if sec.code == code:
                return sec
        return None


class AddendaType(Enum):
    """
    Addenda type tags.

    The tag is the discriminant stored in the ``addenda_type`` column of
    the addenda tables. Standard and IAT entries share the 98 and 99 tags.
    """

    # Standard entries
    POINT_OF_SALE = ("02", "Point of Sale / Terminal Information")
    PAYMENT_RELATED = ("05", "Payment Related Information")
    NOTIFICATION_OF_CHANGE = ("98", "Notification of Change")
    RETURN = ("99", "Return Entry")
    REFUSED_NOTIFICATION_OF_CHANGE = ("98_refused", "Refused Notification of Change")
    DISHONORED_RETURN = ("99_dishonored", "Dishonored Return Entry")
    CONTESTED_DISHONORED_RETURN = ("99_contested", "Contested Dishonored Return Entry")

    # IAT entries
    IAT_TRANSACTION = ("10", "IAT Transaction and Receiver Name")
    IAT_ORIGINATOR = ("11", "IAT Originator Name and Address")
    IAT_ORIGINATOR_LOCATION = ("12", "IAT Originator City and Country")
    IAT_ODFI = ("13", "IAT Originating DFI")
    IAT_RDFI = ("14", "IAT Receiving DFI")
    IAT_RECEIVER = ("15", "IAT Receiver Identification and Address")
    IAT_RECEIVER_LOCATION = ("16", "IAT Receiver City and Country")
    IAT_REMITTANCE = ("17", "IAT Remittance Information")
    IAT_FOREIGN_CORRESPONDENT = ("18", "IAT Foreign Correspondent Bank")

    def __init__(self, tag: str, description: str):
        self.tag = tag
        self.description = description

    @property
    def type_code(self) -> str:
        """Two-digit record type code written on the addenda record."""
        return self.tag[:2]

    @property
    def is_repeatable(self) -> bool:
        """Check if an entry may carry more than one addenda of this type."""
        return self.tag in ("05", "17", "18")

    @property
    def max_occurrences(self) -> Optional[int]:
        """Occurrence limit per entry, None when unbounded."""
        return {"05": None, "17": 2, "18": 5}.get(self.tag, 1)

    @classmethod
    def from_tag(cls, tag: str) -> Optional["AddendaType"]:
        tag = tag.strip()
        for addenda_type in cls:
            if addenda_type.tag == tag:
                return addenda_type
        return None


# Traversal order of addenda attached to one entry; addenda_index counts
# along this sequence.
STANDARD_ADDENDA_ORDER: Tuple[AddendaType, ...] = (
    AddendaType.POINT_OF_SALE,
    AddendaType.PAYMENT_RELATED,
    AddendaType.NOTIFICATION_OF_CHANGE,
    AddendaType.RETURN,
    AddendaType.REFUSED_NOTIFICATION_OF_CHANGE,
    AddendaType.DISHONORED_RETURN,
    AddendaType.CONTESTED_DISHONORED_RETURN,
)

IAT_ADDENDA_ORDER: Tuple[AddendaType, ...] = (
    AddendaType.IAT_TRANSACTION,
    AddendaType.IAT_ORIGINATOR,
    AddendaType.IAT_ORIGINATOR_LOCATION,
    AddendaType.IAT_ODFI,
    AddendaType.IAT_RDFI,
    AddendaType.IAT_RECEIVER,
    AddendaType.IAT_RECEIVER_LOCATION,
    AddendaType.IAT_REMITTANCE,
    AddendaType.IAT_FOREIGN_CORRESPONDENT,
    AddendaType.NOTIFICATION_OF_CHANGE,
    AddendaType.RETURN,
)

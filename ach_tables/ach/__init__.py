"""
ACH/NACHA File Model

Hierarchical ACH file records, addenda variants and NACHA code values.
"""

from ach_tables.ach.ach_codes import (
    AddendaType,
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
from ach_tables.ach.records import (
    ACHFile,
    Batch,
    BatchControl,
    BatchHeader,
    EntryDetail,
    FileControl,
    FileHeader,
    IATBatch,
    IATBatchHeader,
    IATEntryDetail,
)
from ach_tables.ach.isolation import isolate

__all__ = [
    # Codes
    "AddendaType",
    "SECCode",
    "ServiceClassCode",
    "TransactionCode",
    # Addenda
    "AddendaRecord",
    "Addenda02",
    "Addenda05",
    "Addenda98",
    "Addenda98Refused",
    "Addenda99",
    "Addenda99Dishonored",
    "Addenda99Contested",
    "Addenda10",
    "Addenda11",
    "Addenda12",
    "Addenda13",
    "Addenda14",
    "Addenda15",
    "Addenda16",
    "Addenda17",
    "Addenda18",
    # Records
    "ACHFile",
    "Batch",
    "BatchControl",
    "BatchHeader",
    "EntryDetail",
    "FileControl",
    "FileHeader",
    "IATBatch",
    "IATBatchHeader",
    "IATEntryDetail",
    # Isolation
    "isolate",
]

"""
Working-copy isolation for reconstruction.

Reconstruction only ever mutates a private clone of the caller's file.
Cloning is delegated to the ``clone()`` method each record type defines
next to its fields.
"""

import logging

from ach_tables.ach.records import ACHFile
from ach_tables.core.exceptions import DeepCopyFailure, InvalidInputError

logger = logging.getLogger(__name__)


def isolate(ach_file: ACHFile) -> ACHFile:
    """
    Produce a structurally independent copy of an ACH file.

    Args:
        ach_file: File owned by the caller; never mutated

    Returns:
        A copy sharing no mutable record or list with ``ach_file``

    Raises:
        InvalidInputError: If ``ach_file`` is not an ACHFile
        DeepCopyFailure: If any part of the file cannot be cloned
    """
    if not isinstance(ach_file, ACHFile):
        raise InvalidInputError(
            f"Cannot isolate {type(ach_file).__name__}, expected ACHFile",
            operation="isolate",
        )

    try:
        working_copy = ach_file.clone()
    except (AttributeError, TypeError, ValueError, RecursionError) as e:
        logger.error("Failed to clone ACH file: %s", e)
        raise DeepCopyFailure(
            f"Failed to clone ACH file: {e}", record_type=type(e).__name__
        ) from e

    logger.debug(
        "Cloned ACH file with %d batches and %d IAT batches",
        len(working_copy.batches),
        len(working_copy.iat_batches),
    )
    return working_copy

"""
ACH Tables - Custom Exceptions

This module defines the exception classes raised by the flatten and
reconstruct operations.
"""

from typing import Any, Dict, List, Optional


class ACHTablesException(Exception):
    """Base exception for all ACH table conversion errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "ACH_TABLES_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(ACHTablesException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class InvalidInputError(ACHTablesException):
    """Exception raised when a conversion receives no usable input."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message,
            error_code="INVALID_INPUT",
            context={"operation": operation} if operation else {},
        )


def _row_context(
    table: Optional[str],
    row: Optional[int],
    column: Optional[str],
    value: Any,
) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if table:
        context["table"] = table
    if row is not None:
        context["row"] = row
    if column:
        context["column"] = column
    if value is not None:
        context["value"] = value
    return context


class IndexOutOfRangeError(ACHTablesException, IndexError):
    """Exception raised when a row index no longer resolves into the file."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        row: Optional[int] = None,
        column: Optional[str] = None,
        value: Optional[int] = None,
        bound: Optional[int] = None,
    ):
        context = _row_context(table, row, column, value)
        if bound is not None:
            context["bound"] = bound
        super().__init__(message, error_code="INDEX_OUT_OF_RANGE", context=context)


class MalformedIndexError(ACHTablesException, ValueError):
    """Exception raised for a missing or non-numeric index cell."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        row: Optional[int] = None,
        column: Optional[str] = None,
        value: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code="MALFORMED_INDEX",
            context=_row_context(table, row, column, value),
        )


class MalformedValueError(ACHTablesException, ValueError):
    """Exception raised for an unparseable integer cell in strict mode."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        row: Optional[int] = None,
        column: Optional[str] = None,
        value: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code="MALFORMED_VALUE",
            context=_row_context(table, row, column, value),
        )


class DeepCopyFailure(ACHTablesException):
    """Exception raised when the working copy of a file cannot be produced."""

    def __init__(self, message: str, record_type: Optional[str] = None):
        super().__init__(
            message,
            error_code="DEEP_COPY_FAILURE",
            context={"record_type": record_type} if record_type else {},
        )


class ACHValidationError(ACHTablesException):
    """Exception raised when a file fails structural validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(
            message,
            error_code="ACH_VALIDATION_ERROR",
            context={"errors": self.errors} if self.errors else {},
        )


class ControlRecalculationFailure(ACHTablesException):
    """Exception raised when control totals cannot be recomputed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(
            message,
            error_code="CONTROL_RECALCULATION_FAILURE",
            context={"errors": self.errors} if self.errors else {},
        )

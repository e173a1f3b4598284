"""Shared domain error messages and error types."""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Machine-readable error kinds surfaced to callers."""

    CSV_FORMAT_NOT_SUPPORTED = "CSV_FORMAT_NOT_SUPPORTED"
    CSV_PARSING_ERROR = "CSV_PARSING_ERROR"
    TRANSACTION_DATE_TOO_OLD = "TRANSACTION_DATE_TOO_OLD"
    TRANSACTION_DATE_TOO_FAR_IN_FUTURE = "TRANSACTION_DATE_TOO_FAR_IN_FUTURE"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """

    code = ErrorCode.VALIDATION_ERROR


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = ErrorCode.NOT_FOUND


class CSVImportError(DomainError):
    """Error raised while importing CSV data.

    Carries enough context (file, line, column, raw value) for callers to
    render a user-facing message without re-deriving it.
    """

    code = ErrorCode.CSV_PARSING_ERROR

    def __init__(
        self,
        message: str,
        *,
        file_name: Optional[str] = None,
        line_number: Optional[int] = None,
        column: Optional[str] = None,
        raw_value: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.file_name = file_name
        self.line_number = line_number
        self.column = column
        self.raw_value = raw_value

    def to_dict(self) -> dict[str, Any]:
        """Return a structured representation of the error."""
        return {
            "code": self.code.value,
            "message": self.message,
            "file_name": self.file_name,
            "line_number": self.line_number,
            "column": self.column,
            "raw_value": self.raw_value,
        }


class CSVFormatNotSupportedError(CSVImportError):
    """The requested format key has no configuration."""

    code = ErrorCode.CSV_FORMAT_NOT_SUPPORTED

    def __init__(self, format_key: str):
        super().__init__(csv_format_not_supported(format_key))
        self.format_key = format_key


class CSVParsingError(CSVImportError):
    """Malformed row data or an unexpected failure during import."""


class TransactionDateTooOldError(CSVImportError):
    """Transaction date is before the supported range."""

    code = ErrorCode.TRANSACTION_DATE_TOO_OLD


class TransactionDateTooFarInFutureError(CSVImportError):
    """Transaction date is beyond the allowed future grace period."""

    code = ErrorCode.TRANSACTION_DATE_TOO_FAR_IN_FUTURE


def csv_format_not_supported(format_key: str) -> str:
    """Return message for a format key without configuration."""
    return f"No CSV configuration found for format: {format_key}"


def missing_required_value(column: str, line_number: int, file_name: str) -> str:
    """Return message for a blank or missing required column value."""
    return (
        f"Missing value for required column '{column}' "
        f"at line {line_number} in file '{file_name}'"
    )


def invalid_column_value(column: str, line_number: int, file_name: str) -> str:
    """Return message for a column value outside the accepted set."""
    return (
        f"Invalid value for required column '{column}' "
        f"at line {line_number} in file '{file_name}'"
    )


def invalid_amount(raw_amount: str, line_number: int, file_name: str) -> str:
    """Return message for an amount that is not a number."""
    return f"Invalid amount value '{raw_amount}' at line {line_number} in file '{file_name}'"


def invalid_date(raw_date: str, line_number: int, file_name: str) -> str:
    """Return message for a date matching neither the configured nor simplified pattern."""
    return f"Invalid date value '{raw_date}' at line {line_number} in file '{file_name}'"


def date_too_old(value: Any, line_number: int, file_name: str) -> str:
    """Return message for a transaction dated before the year 2000."""
    return (
        f"Transaction date '{value}' at line {line_number} in file '{file_name}' "
        "is prior to year 2000. Transactions before 2000 are not supported due to "
        "exchange rate data limitations and 2-digit year format ambiguity."
    )


def date_too_far_in_future(value: Any, line_number: int, file_name: str) -> str:
    """Return message for a transaction dated more than one day ahead."""
    return (
        f"Transaction date '{value}' at line {line_number} in file '{file_name}' "
        "is more than 1 day in the future. Future-dated transactions are not "
        "allowed to prevent data entry errors."
    )


def import_failed(reason: Any) -> str:
    """Return message for an unexpected failure while importing files."""
    return f"Failed to import CSV files: {reason}"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for a missing or deleted transaction."""
    return f"Transaction not found with id: {transaction_id}"

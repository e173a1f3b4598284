"""Domain layer for banktxn.

Services live in their own modules (``banktxn.domain.csv_import`` etc.) and are
imported from there; this package only re-exports entities and errors.
"""

from banktxn.domain.entities import (
    BulkDeleteResult,
    CSVConfig,
    CSVData,
    CSVRow,
    CSVUpload,
    Transaction,
    TransactionFilter,
    TransactionType,
)
from banktxn.domain.errors import (
    CSVFormatNotSupportedError,
    CSVImportError,
    CSVParsingError,
    DomainError,
    ErrorCode,
    NotFoundError,
    TransactionDateTooFarInFutureError,
    TransactionDateTooOldError,
    ValidationError,
)

__all__ = [
    "BulkDeleteResult",
    "CSVConfig",
    "CSVData",
    "CSVRow",
    "CSVUpload",
    "Transaction",
    "TransactionFilter",
    "TransactionType",
    "CSVFormatNotSupportedError",
    "CSVImportError",
    "CSVParsingError",
    "DomainError",
    "ErrorCode",
    "NotFoundError",
    "TransactionDateTooFarInFutureError",
    "TransactionDateTooOldError",
    "ValidationError",
]

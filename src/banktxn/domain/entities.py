"""Domain model entities for banktxn.

These are pure data classes representing business concepts, independent of
database schema and of the CSV layouts they are imported from.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are always positive magnitudes."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


@dataclass(frozen=True)
class CSVConfig:
    """Column layout and parsing rules for one bank's CSV export.

    ``debit_header`` and ``credit_header`` may name the same column for banks
    that export a single amount column. ``type_header`` is None when the
    transaction type is implied by which of the two columns is populated.
    """

    bank_name: str
    default_currency_iso_code: str
    date_header: str
    date_format: str
    description_header: str
    debit_header: str
    credit_header: str
    type_header: Optional[str] = None


@dataclass(frozen=True)
class CSVRow:
    """One data row of a CSV file, keyed by header name.

    ``line_number`` is 1-based and counts data rows only (the header is not
    counted).
    """

    line_number: int
    values: dict[str, str]


@dataclass(frozen=True)
class CSVData:
    """Parse result for a single CSV file."""

    file_name: str
    format: str
    rows: list[CSVRow] = field(default_factory=list)


@dataclass(frozen=True)
class CSVUpload:
    """An uploaded file awaiting import."""

    file_name: str
    content: bytes


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``id`` and the audit fields are None until the transaction is persisted.
    """

    id: Optional[int]
    account_id: Optional[str]
    bank_name: str
    currency_iso_code: str
    date: date
    amount: Decimal
    type: TransactionType
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None


@dataclass(frozen=True)
class TransactionFilter:
    """Search criteria for transactions. Unset fields do not constrain results."""

    id: Optional[int] = None
    account_id: Optional[str] = None
    bank_name: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    currency_iso_code: Optional[str] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    description: Optional[str] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    updated_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None


@dataclass(frozen=True)
class BulkDeleteResult:
    """Outcome of a bulk soft delete."""

    deleted_count: int
    not_found_ids: list[int]

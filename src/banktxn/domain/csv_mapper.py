"""Mapping of parsed CSV rows to Transaction entities.

Errors are raised as close to the failing value as possible so that every
error names the file, line and column it came from.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from banktxn.domain import errors
from banktxn.domain.csv_format import CSVFormatService
from banktxn.domain.entities import CSVConfig, CSVRow, Transaction, TransactionType
from banktxn.domain.errors import (
    CSVParsingError,
    TransactionDateTooFarInFutureError,
    TransactionDateTooOldError,
)
from banktxn.utils.amount_parser import parse_amount
from banktxn.utils.date_format import DateFormatterCache

logger = logging.getLogger(__name__)

MIN_TRANSACTION_YEAR = 2000
FUTURE_GRACE = relativedelta(days=1)

TRANSACTION_TYPE_ALIASES: dict[str, TransactionType] = {
    "credit": TransactionType.CREDIT,
    "deposit": TransactionType.CREDIT,
    "debit": TransactionType.DEBIT,
    "withdrawal": TransactionType.DEBIT,
}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def resolve_transaction_type(raw_type: str) -> Optional[TransactionType]:
    """Look up a type indicator such as "Debit" or " deposit "; None if unknown."""
    return TRANSACTION_TYPE_ALIASES.get(raw_type.strip().lower())


@dataclass(frozen=True)
class _RowContext:
    """File and line a row came from, for error messages."""

    file_name: str
    format_key: str
    row: CSVRow

    @property
    def line_number(self) -> int:
        return self.row.line_number

    def get(self, column: str) -> Optional[str]:
        return self.row.values.get(column)


class CSVTransactionMapper:
    """Maps CSV rows to transactions using per-format configuration."""

    def __init__(
        self,
        format_service: CSVFormatService,
        date_formatters: Optional[DateFormatterCache] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the mapper.

        Args:
            format_service: Registry of supported formats
            date_formatters: Shared formatter cache; one is created (and warmed
                with every configured date pattern) when omitted
            today: Clock used by the future-date check
        """
        self.format_service = format_service
        if date_formatters is None:
            date_formatters = DateFormatterCache(format_service.date_formats())
        self.date_formatters = date_formatters
        self._today = today

    def map(
        self, file_name: str, format_key: str, account_id: Optional[str], row: CSVRow
    ) -> Transaction:
        """Map one CSV row to an unsaved Transaction.

        Args:
            file_name: Name of the file the row came from
            format_key: Format the file is imported with
            account_id: Optional account tag supplied by the caller
            row: Parsed CSV row

        Returns:
            Transaction with id None

        Raises:
            CSVFormatNotSupportedError: If the format key is unknown
            CSVParsingError: If a required value is missing or malformed
            TransactionDateTooOldError: If the date is before 2000
            TransactionDateTooFarInFutureError: If the date is more than a day ahead
        """
        config = self.format_service.lookup(format_key)
        context = _RowContext(file_name=file_name, format_key=format_key, row=row)
        logger.debug(
            "Mapping line %d of '%s' (%s): %s", row.line_number, file_name, format_key, row.values
        )

        description = self._get_required_value(context, config.description_header)
        txn_date = self._parse_date(config, context)
        self._validate_date(txn_date, context)
        txn_type, amount = self._resolve_type_and_amount(config, context)

        return Transaction(
            id=None,
            account_id=account_id,
            bank_name=config.bank_name,
            # One currency per format; per-account currencies are not supported
            currency_iso_code=config.default_currency_iso_code,
            date=txn_date,
            amount=amount,
            type=txn_type,
            description=description,
        )

    def _get_required_value(self, context: _RowContext, column: str) -> str:
        value = context.get(column)
        if _is_blank(value):
            raise CSVParsingError(
                errors.missing_required_value(column, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                column=column,
            )
        return value

    def _parse_date(self, config: CSVConfig, context: _RowContext) -> date:
        raw_date = self._get_required_value(context, config.date_header)
        try:
            return self.date_formatters.parse(config.date_format, raw_date)
        except ValueError as e:
            raise CSVParsingError(
                errors.invalid_date(raw_date, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                column=config.date_header,
                raw_value=raw_date,
            ) from e

    def _validate_date(self, txn_date: date, context: _RowContext) -> None:
        """Reject dates outside the supported business window.

        Exchange-rate data and two-digit years are unreliable before 2000. One
        day of future grace covers timezone differences.
        """
        if txn_date.year < MIN_TRANSACTION_YEAR:
            raise TransactionDateTooOldError(
                errors.date_too_old(txn_date, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                raw_value=txn_date.isoformat(),
            )

        if txn_date > self._today() + FUTURE_GRACE:
            raise TransactionDateTooFarInFutureError(
                errors.date_too_far_in_future(txn_date, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                raw_value=txn_date.isoformat(),
            )

    def _resolve_type_and_amount(
        self, config: CSVConfig, context: _RowContext
    ) -> tuple[TransactionType, Decimal]:
        # Some banks export one amount column plus a type column, others a
        # debit and a credit column where the populated one implies the type.
        if config.type_header is not None:
            txn_type = self._parse_transaction_type(config, context)
            column = config.credit_header if txn_type == TransactionType.CREDIT else config.debit_header
        else:
            debit_value = context.get(config.debit_header)
            credit_value = context.get(config.credit_header)
            # Both blank and both populated fall through to DEBIT
            if _is_blank(debit_value) and not _is_blank(credit_value):
                txn_type, column = TransactionType.CREDIT, config.credit_header
            else:
                txn_type, column = TransactionType.DEBIT, config.debit_header

        return txn_type, self._parse_amount(context, column)

    def _parse_transaction_type(self, config: CSVConfig, context: _RowContext) -> TransactionType:
        raw_type = self._get_required_value(context, config.type_header)
        txn_type = resolve_transaction_type(raw_type)
        if txn_type is None:
            raise CSVParsingError(
                errors.invalid_column_value(config.type_header, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                column=config.type_header,
                raw_value=raw_type,
            )
        return txn_type

    def _parse_amount(self, context: _RowContext, column: str) -> Decimal:
        raw_amount = self._get_required_value(context, column)
        try:
            return parse_amount(raw_amount)
        except ValueError as e:
            raise CSVParsingError(
                errors.invalid_amount(raw_amount, context.line_number, context.file_name),
                file_name=context.file_name,
                line_number=context.line_number,
                column=column,
                raw_value=raw_amount,
            ) from e

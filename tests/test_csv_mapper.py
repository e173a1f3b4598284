"""Tests for mapping CSV rows to transactions."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from banktxn.domain.csv_mapper import (
    TRANSACTION_TYPE_ALIASES,
    CSVTransactionMapper,
    resolve_transaction_type,
)
from banktxn.domain.entities import CSVRow, TransactionType
from banktxn.domain.errors import (
    CSVFormatNotSupportedError,
    CSVParsingError,
    ErrorCode,
    TransactionDateTooFarInFutureError,
    TransactionDateTooOldError,
)
from conftest import TODAY


def capital_one_row(line_number=1, **overrides):
    values = {
        "Transaction Date": "11/15/24",
        "Transaction Description": "Coffee Shop",
        "Transaction Type": "Debit",
        "Transaction Amount": "4.50",
    }
    values.update(overrides)
    return CSVRow(line_number=line_number, values=values)


def dual_row(line_number=1, **overrides):
    values = {
        "Date": "15/11/2024 09:30",
        "Description": "Transfer",
        "Debit": "",
        "Credit": "",
    }
    values.update(overrides)
    return CSVRow(line_number=line_number, values=values)


class TestSingleAmountColumn:
    """Formats with an explicit type column."""

    def test_debit_row(self, mapper):
        txn = mapper.map("statement.csv", "capital-one", "checking", capital_one_row())

        assert txn.id is None
        assert txn.date == date(2024, 11, 15)
        assert txn.type == TransactionType.DEBIT
        assert txn.amount == Decimal("4.50")
        assert txn.description == "Coffee Shop"
        assert txn.currency_iso_code == "USD"
        assert txn.bank_name == "Capital One"
        assert txn.account_id == "checking"

    def test_credit_row(self, mapper):
        row = capital_one_row(**{"Transaction Type": "Credit", "Transaction Amount": "1,000.00"})

        txn = mapper.map("statement.csv", "capital-one", None, row)

        assert txn.type == TransactionType.CREDIT
        assert txn.amount == Decimal("1000.00")
        assert txn.account_id is None

    @pytest.mark.parametrize("raw_type, expected", [
        ("Deposit", TransactionType.CREDIT),
        (" WITHDRAWAL ", TransactionType.DEBIT),
        ("credit", TransactionType.CREDIT),
        ("dEbIt", TransactionType.DEBIT),
    ])
    def test_type_aliases(self, mapper, raw_type, expected):
        row = capital_one_row(**{"Transaction Type": raw_type})

        assert mapper.map("statement.csv", "capital-one", None, row).type == expected

    @pytest.mark.parametrize("raw_type", ["Payment", "refund", "C", "D"])
    def test_unknown_type(self, mapper, raw_type):
        row = capital_one_row(line_number=4, **{"Transaction Type": raw_type})

        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("statement.csv", "capital-one", None, row)

        error = excinfo.value
        assert error.column == "Transaction Type"
        assert error.raw_value == raw_type
        assert error.line_number == 4
        assert str(error) == (
            "Invalid value for required column 'Transaction Type' at line 4 in file 'statement.csv'"
        )

    def test_missing_type(self, mapper):
        row = capital_one_row(**{"Transaction Type": ""})

        with pytest.raises(CSVParsingError, match="Missing value for required column 'Transaction Type'"):
            mapper.map("statement.csv", "capital-one", None, row)

    def test_negative_amount_uses_type_for_direction(self, mapper):
        row = capital_one_row(**{"Transaction Type": "Credit", "Transaction Amount": "-25.00"})

        txn = mapper.map("statement.csv", "capital-one", None, row)

        assert txn.type == TransactionType.CREDIT
        assert txn.amount == Decimal("25.00")



def typed_row(line_number=1, **overrides):
    values = {"Date": "2024-06-01", "Memo": "Transfer", "Kind": "Credit", "In": "", "Out": ""}
    values.update(overrides)
    return CSVRow(line_number=line_number, values=values)


class TestTypeColumnWithSeparateAmounts:
    """Formats with a type column and distinct credit and debit columns."""

    def test_credit_reads_credit_column(self, mapper):
        txn = mapper.map("split.csv", "test-typed", None, typed_row(Kind="Deposit", In="20.00", Out="99.00"))

        assert txn.type == TransactionType.CREDIT
        assert txn.amount == Decimal("20.00")

    def test_debit_reads_debit_column(self, mapper):
        txn = mapper.map("split.csv", "test-typed", None, typed_row(Kind="Withdrawal", In="20.00", Out="99.00"))

        assert txn.type == TransactionType.DEBIT
        assert txn.amount == Decimal("99.00")

    def test_credit_with_only_debit_column_populated(self, mapper):
        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("split.csv", "test-typed", None, typed_row(line_number=5, Kind="Credit", Out="99.00"))

        assert excinfo.value.column == "In"
        assert str(excinfo.value) == (
            "Missing value for required column 'In' at line 5 in file 'split.csv'"
        )

    def test_debit_with_only_credit_column_populated(self, mapper):
        with pytest.raises(CSVParsingError, match="required column 'Out'"):
            mapper.map("split.csv", "test-typed", None, typed_row(Kind="Debit", In="20.00"))


def test_every_alias_resolves():
    for alias, expected in TRANSACTION_TYPE_ALIASES.items():
        assert resolve_transaction_type(alias) == expected
        assert resolve_transaction_type(f"  {alias.upper()} ") == expected


class TestDualAmountColumns:
    """Formats where the populated column implies the type."""

    def test_credit_only(self, mapper):
        row = dual_row(Credit="5,000.00")

        txn = mapper.map("export.csv", "test-dual", None, row)

        assert txn.type == TransactionType.CREDIT
        assert txn.amount == Decimal("5000.00")
        assert txn.currency_iso_code == "EUR"

    def test_debit_only(self, mapper):
        txn = mapper.map("export.csv", "test-dual", None, dual_row(Debit="12.00"))

        assert txn.type == TransactionType.DEBIT
        assert txn.amount == Decimal("12.00")

    def test_both_populated_defaults_to_debit(self, mapper):
        txn = mapper.map("export.csv", "test-dual", None, dual_row(Debit="12.00", Credit="3.00"))

        assert txn.type == TransactionType.DEBIT
        assert txn.amount == Decimal("12.00")

    def test_both_blank_defaults_to_debit_then_fails(self, mapper):
        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("export.csv", "test-dual", None, dual_row(line_number=2))

        assert excinfo.value.column == "Debit"
        assert str(excinfo.value) == (
            "Missing value for required column 'Debit' at line 2 in file 'export.csv'"
        )

    def test_missing_columns_treated_as_blank(self, mapper):
        row = CSVRow(line_number=1, values={"Date": "15/11/2024", "Description": "x", "Credit": "1"})

        assert mapper.map("export.csv", "test-dual", None, row).type == TransactionType.CREDIT

    @pytest.mark.parametrize("debit, credit, expected", [
        ("", "7.00", TransactionType.CREDIT),
        ("7.00", "", TransactionType.DEBIT),
        ("7.00", "7.00", TransactionType.DEBIT),
    ])
    def test_type_grid(self, mapper, debit, credit, expected):
        txn = mapper.map("export.csv", "test-dual", None, dual_row(Debit=debit, Credit=credit))

        assert txn.type == expected


class TestDates:
    """Date parsing and business date windows."""

    def test_fallback_to_date_only(self, mapper):
        txn = mapper.map("export.csv", "test-dual", None, dual_row(Date="15/11/2024", Debit="1"))

        assert txn.date == date(2024, 11, 15)

    def test_bangkok_date_with_time(self, mapper):
        row = CSVRow(
            line_number=1,
            values={"Date": "31 Oct 2025 22:42", "Description": "x", "Debit": "1,250.00", "Credit": ""},
        )

        assert mapper.map("f.csv", "bangkok-bank", None, row).date == date(2025, 10, 31)

    @pytest.mark.parametrize("raw_date", ["2024-11-15", "15/11/24", "not a date", "32/11/2024"])
    def test_unparseable_date(self, mapper, raw_date):
        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("export.csv", "test-dual", None, dual_row(line_number=3, Date=raw_date, Debit="1"))

        error = excinfo.value
        assert error.code == ErrorCode.CSV_PARSING_ERROR
        assert error.column == "Date"
        assert error.raw_value == raw_date
        assert str(error) == f"Invalid date value '{raw_date}' at line 3 in file 'export.csv'"

    def test_missing_date(self, mapper):
        with pytest.raises(CSVParsingError, match="Missing value for required column 'Date'"):
            mapper.map("export.csv", "test-dual", None, dual_row(Date="", Debit="1"))

    def test_year_2000_accepted(self, mapper):
        txn = mapper.map("export.csv", "test-dual", None, dual_row(Date="01/01/2000", Debit="1"))

        assert txn.date == date(2000, 1, 1)

    def test_before_2000_rejected(self, mapper):
        with pytest.raises(TransactionDateTooOldError) as excinfo:
            mapper.map("export.csv", "test-dual", None, dual_row(line_number=7, Date="31/12/1999", Debit="1"))

        error = excinfo.value
        assert error.code == ErrorCode.TRANSACTION_DATE_TOO_OLD
        assert error.line_number == 7
        assert "1999-12-31" in str(error)
        assert "prior to year 2000" in str(error)

    def test_tomorrow_accepted(self, mapper):
        tomorrow = TODAY + timedelta(days=1)
        row = dual_row(Date=tomorrow.strftime("%d/%m/%Y"), Debit="1")

        assert mapper.map("export.csv", "test-dual", None, row).date == tomorrow

    def test_two_days_ahead_rejected(self, mapper):
        ahead = TODAY + timedelta(days=2)
        row = dual_row(Date=ahead.strftime("%d/%m/%Y"), Debit="1")

        with pytest.raises(TransactionDateTooFarInFutureError) as excinfo:
            mapper.map("export.csv", "test-dual", None, row)

        assert excinfo.value.code == ErrorCode.TRANSACTION_DATE_TOO_FAR_IN_FUTURE
        assert "more than 1 day in the future" in str(excinfo.value)

    def test_date_checked_before_amount(self, mapper):
        row = dual_row(Date="31/12/1999", Debit="not money")

        with pytest.raises(TransactionDateTooOldError):
            mapper.map("export.csv", "test-dual", None, row)


class TestRequiredValues:
    """Missing and malformed values."""

    def test_missing_description_checked_first(self, mapper):
        row = capital_one_row(**{"Transaction Description": " ", "Transaction Date": "bad"})

        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("statement.csv", "capital-one", None, row)

        assert excinfo.value.column == "Transaction Description"
        assert excinfo.value.file_name == "statement.csv"

    def test_column_absent_from_row(self, mapper):
        row = CSVRow(line_number=1, values={"Transaction Date": "11/15/24"})

        with pytest.raises(CSVParsingError, match="Transaction Description"):
            mapper.map("statement.csv", "capital-one", None, row)

    @pytest.mark.parametrize("raw_amount", ["n/a", "1.2.3", "-"])
    def test_invalid_amount(self, mapper, raw_amount):
        row = capital_one_row(line_number=2, **{"Transaction Amount": raw_amount})

        with pytest.raises(CSVParsingError) as excinfo:
            mapper.map("statement.csv", "capital-one", None, row)

        error = excinfo.value
        assert error.raw_value == raw_amount
        assert error.column == "Transaction Amount"
        assert str(error) == f"Invalid amount value '{raw_amount}' at line 2 in file 'statement.csv'"
        assert error.to_dict()["raw_value"] == raw_amount

    def test_missing_amount(self, mapper):
        row = capital_one_row(**{"Transaction Amount": ""})

        with pytest.raises(CSVParsingError, match="Missing value for required column 'Transaction Amount'"):
            mapper.map("statement.csv", "capital-one", None, row)


def test_unsupported_format(mapper):
    with pytest.raises(CSVFormatNotSupportedError) as excinfo:
        mapper.map("statement.csv", "unknown-bank", None, capital_one_row())

    assert excinfo.value.format_key == "unknown-bank"
    assert "unknown-bank" in str(excinfo.value)


def test_mapper_warms_cache_with_configured_patterns(format_service):
    mapper = CSVTransactionMapper(format_service)

    for pattern in format_service.date_formats():
        assert pattern in mapper.date_formatters


def test_mapping_is_repeatable(mapper):
    row = capital_one_row()

    assert mapper.map("a.csv", "capital-one", None, row) == mapper.map("a.csv", "capital-one", None, row)

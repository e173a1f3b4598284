"""Shared pytest fixtures for banktxn tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from banktxn.database.factories import create_sqlite_database
from banktxn.domain.csv_format import CSVFormatService
from banktxn.domain.csv_import import CSVImportService
from banktxn.domain.csv_mapper import CSVTransactionMapper
from banktxn.domain.entities import CSVConfig, Transaction, TransactionType
from banktxn.domain.transaction import TransactionService
from banktxn.config import load_csv_configs


# Fixed clock so that date-window tests do not depend on when they run
TODAY = date(2025, 11, 20)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def dual_column_config():
    """A debit/credit column format with a time component in its date pattern."""
    return CSVConfig(
        bank_name="Test Bank",
        default_currency_iso_code="EUR",
        date_header="Date",
        date_format="dd/MM/uuuu HH:mm",
        description_header="Description",
        debit_header="Debit",
        credit_header="Credit",
    )


@pytest.fixture
def typed_split_config():
    """A format with a type column and separate money-in and money-out columns."""
    return CSVConfig(
        bank_name="Split Bank",
        default_currency_iso_code="CAD",
        date_header="Date",
        date_format="uuuu-MM-dd",
        description_header="Memo",
        debit_header="Out",
        credit_header="In",
        type_header="Kind",
    )


@pytest.fixture
def format_service(dual_column_config, typed_split_config):
    """Create a CSVFormatService with the bundled formats plus test formats."""
    configs = load_csv_configs()
    configs["test-dual"] = dual_column_config
    configs["test-typed"] = typed_split_config
    return CSVFormatService(configs)


@pytest.fixture
def mapper(format_service):
    """Create a CSVTransactionMapper with a fixed clock."""
    return CSVTransactionMapper(format_service, today=lambda: TODAY)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def import_service(temp_db, format_service, mapper):
    """Create a CSVImportService with a temporary database and fixed clock."""
    return CSVImportService(temp_db, format_service, mapper=mapper)


@pytest.fixture
def make_transaction():
    """Build unsaved transactions with sensible defaults."""

    def _make(**overrides):
        values = dict(
            id=None,
            account_id="checking",
            bank_name="Capital One",
            currency_iso_code="USD",
            date=date(2024, 11, 15),
            amount=Decimal("4.50"),
            type=TransactionType.DEBIT,
            description="Coffee Shop",
        )
        values.update(overrides)
        return Transaction(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"

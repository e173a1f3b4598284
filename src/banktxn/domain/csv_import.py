"""CSV import domain service."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from banktxn.database.base import Database
from banktxn.domain import errors
from banktxn.domain.csv_format import CSVFormatService
from banktxn.domain.csv_mapper import CSVTransactionMapper
from banktxn.domain.entities import CSVUpload, Transaction
from banktxn.domain.errors import CSVParsingError, DomainError
from banktxn.domain.transaction import TransactionService
from banktxn.utils.csv_reader import read_csv

logger = logging.getLogger(__name__)


def _read_upload(csv_path: Path) -> CSVUpload:
    if not csv_path.is_file():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")
    return CSVUpload(file_name=csv_path.name, content=csv_path.read_bytes())


class CSVImportService:
    """Service for importing bank CSV exports as a single all-or-nothing batch."""

    def __init__(
        self,
        db: Database,
        format_service: CSVFormatService,
        mapper: Optional[CSVTransactionMapper] = None,
    ):
        """Initialize CSV import service.

        Args:
            db: Database instance
            format_service: Registry of supported formats
            mapper: Row mapper; one sharing ``format_service`` is built if omitted
        """
        self.db = db
        self.format_service = format_service
        self.mapper = mapper or CSVTransactionMapper(format_service)
        self.transaction_service = TransactionService(db)

    def import_csv_files(
        self,
        format_key: str,
        account_id: Optional[str],
        uploads: Iterable[CSVUpload],
        created_by: Optional[str] = None,
    ) -> list[Transaction]:
        """Import every row of every file, or nothing at all.

        Empty files are skipped. Any bad row in any file aborts the whole
        batch before anything is written.

        Args:
            format_key: Format all files are exported in
            account_id: Optional account tag applied to every transaction
            uploads: Files to import
            created_by: Optional user recorded on every row

        Returns:
            Saved transactions in file-then-row order

        Raises:
            CSVFormatNotSupportedError: If the format key is unknown
            CSVParsingError: If a row is malformed or anything unexpected fails
            TransactionDateTooOldError: If a row is dated before 2000
            TransactionDateTooFarInFutureError: If a row is dated more than a day ahead
        """
        try:
            self.format_service.lookup(format_key)

            transactions: list[Transaction] = []
            file_count = 0
            for upload in uploads:
                if not upload.content:
                    logger.warning("Skipping empty file: %s", upload.file_name)
                    continue

                logger.info("Importing file '%s' with format '%s'", upload.file_name, format_key)
                data = read_csv(upload.content, upload.file_name, format_key)
                transactions.extend(
                    self.mapper.map(data.file_name, data.format, account_id, row)
                    for row in data.rows
                )
                file_count += 1

            saved = self.transaction_service.create_transactions(
                transactions, created_by=created_by
            )
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Unexpected error while importing CSV files")
            raise CSVParsingError(errors.import_failed(e)) from e

        logger.info("Imported %d transactions from %d files", len(saved), file_count)
        return saved

    def import_csv_paths(
        self,
        format_key: str,
        account_id: Optional[str],
        paths: Iterable[Union[str, Path]],
        created_by: Optional[str] = None,
    ) -> list[Transaction]:
        """Read files from disk and import them as one batch.

        Files are read lazily once the format is resolved, so an unreadable
        file fails the batch like any other unexpected error.

        Raises:
            CSVFormatNotSupportedError: If the format key is unknown
            CSVParsingError: If a file cannot be read or a row is malformed
        """
        uploads = (_read_upload(Path(path)) for path in paths)
        return self.import_csv_files(format_key, account_id, uploads, created_by=created_by)

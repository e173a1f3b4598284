"""Transaction domain service."""

import logging
from typing import Optional

from banktxn.database.base import Database
from banktxn.domain import errors
from banktxn.domain.entities import (
    BulkDeleteResult,
    Transaction as TransactionEntity,
    TransactionFilter,
)
from banktxn.domain.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transactions(
        self, transactions: list[TransactionEntity], created_by: Optional[str] = None
    ) -> list[TransactionEntity]:
        """Persist a batch of transactions atomically.

        Args:
            transactions: Unsaved transactions
            created_by: Optional user recorded on every row

        Returns:
            Saved transactions (with IDs) in input order
        """
        if not transactions:
            return []
        saved = self.db.create_transactions(transactions, created_by=created_by)
        logger.info("Saved %d transactions", len(saved))
        return saved

    def create_transaction(
        self, transaction: TransactionEntity, created_by: Optional[str] = None
    ) -> TransactionEntity:
        """Persist a single transaction."""
        return self.create_transactions([transaction], created_by=created_by)[0]

    def get_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get an active transaction by ID.

        Raises:
            NotFoundError: If no active transaction has the ID
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        description: Optional[str] = None,
        account_id: Optional[str] = None,
        updated_by: Optional[str] = None,
    ) -> TransactionEntity:
        """Update the description and/or account tag of a transaction.

        Args:
            transaction_id: Transaction ID
            description: New description, or None to keep the current one
            account_id: New account tag, or None to keep the current one
            updated_by: Optional user recorded on the row

        Returns:
            The updated transaction

        Raises:
            ValidationError: If nothing to update is given or the description is blank
            NotFoundError: If no active transaction has the ID
        """
        if description is None and account_id is None:
            raise ValidationError("Nothing to update: provide a description or an account ID")
        if description is not None and not description.strip():
            raise ValidationError("Description cannot be blank")

        txn = self.db.update_transaction(
            transaction_id,
            description=description,
            account_id=account_id,
            updated_by=updated_by,
        )
        if txn is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        logger.info("Updated transaction %d", transaction_id)
        return txn

    def delete_transaction(self, transaction_id: int, deleted_by: Optional[str] = None) -> None:
        """Soft-delete a transaction.

        Raises:
            NotFoundError: If no active transaction has the ID
        """
        deleted = self.db.soft_delete_transactions([transaction_id], deleted_by=deleted_by)
        if not deleted:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        logger.info("Deleted transaction %d", transaction_id)

    def bulk_delete_transactions(
        self, transaction_ids: list[int], deleted_by: Optional[str] = None
    ) -> BulkDeleteResult:
        """Soft-delete many transactions at once.

        Unknown and already deleted IDs are reported rather than raised.

        Returns:
            BulkDeleteResult with the number deleted and the IDs not found, in
            the order they were given
        """
        unique_ids = list(dict.fromkeys(transaction_ids))
        if not unique_ids:
            return BulkDeleteResult(deleted_count=0, not_found_ids=[])

        deleted = set(self.db.soft_delete_transactions(unique_ids, deleted_by=deleted_by))
        not_found = [txn_id for txn_id in unique_ids if txn_id not in deleted]
        logger.info("Bulk deleted %d transactions (%d not found)", len(deleted), len(not_found))
        return BulkDeleteResult(deleted_count=len(deleted), not_found_ids=not_found)

    def search(self, transaction_filter: Optional[TransactionFilter] = None) -> list[TransactionEntity]:
        """List active transactions matching a filter, newest first.

        Raises:
            ValidationError: If a range filter has its bounds reversed
        """
        f = transaction_filter or TransactionFilter()
        for low, high, label in (
            (f.date_from, f.date_to, "date"),
            (f.min_amount, f.max_amount, "amount"),
            (f.created_after, f.created_before, "created"),
            (f.updated_after, f.updated_before, "updated"),
        ):
            if low is not None and high is not None and low > high:
                raise ValidationError(f"Invalid {label} range: {low} is after {high}")
        return self.db.search_transactions(f)

"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from banktxn.domain.entities import Transaction, TransactionFilter


class Database(ABC):
    """Abstract database interface for banktxn."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def create_transactions(
        self, transactions: list[Transaction], created_by: Optional[str] = None
    ) -> list[Transaction]:
        """Persist transactions atomically. Returns saved entities in input order."""
        pass

    @abstractmethod
    def get_transaction(
        self, transaction_id: int, include_deleted: bool = False
    ) -> Optional[Transaction]:
        """Get transaction by ID. Soft-deleted rows are hidden unless requested."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        description: Optional[str] = None,
        account_id: Optional[str] = None,
        updated_by: Optional[str] = None,
    ) -> Optional[Transaction]:
        """Update the mutable fields of an active transaction.

        Returns the updated entity, or None if no active transaction has the ID.
        """
        pass

    @abstractmethod
    def soft_delete_transactions(
        self, transaction_ids: list[int], deleted_by: Optional[str] = None
    ) -> list[int]:
        """Mark active transactions as deleted in one commit.

        Returns the IDs that were deleted; unknown or already deleted IDs are
        left out.
        """
        pass

    @abstractmethod
    def search_transactions(self, transaction_filter: TransactionFilter) -> list[Transaction]:
        """List active transactions matching every set filter field."""
        pass

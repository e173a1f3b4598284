"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay
independent of the table layout.
"""

from typing import Optional

from banktxn.domain import entities as domain
from banktxn.database.models import Transaction as ORMTransaction


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        bank_name=orm_transaction.bank_name,
        currency_iso_code=orm_transaction.currency_iso_code,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        created_by=orm_transaction.created_by,
        updated_by=orm_transaction.updated_by,
        deleted=bool(orm_transaction.deleted),
        deleted_at=orm_transaction.deleted_at,
        deleted_by=orm_transaction.deleted_by,
    )


def transaction_to_orm(transaction: domain.Transaction, created_by: Optional[str] = None) -> ORMTransaction:
    """Build a new SQLAlchemy Transaction row from an unsaved domain entity."""
    return ORMTransaction(
        account_id=transaction.account_id,
        bank_name=transaction.bank_name,
        currency_iso_code=transaction.currency_iso_code,
        date=transaction.date,
        amount=transaction.amount,
        type=transaction.type.value,
        description=transaction.description,
        created_by=created_by,
    )

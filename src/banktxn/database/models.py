"""SQLAlchemy models for banktxn database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Transaction(Base):
    """Transaction model.

    Rows are never physically deleted; ``deleted`` marks a soft delete.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(String(255), nullable=True)
    bank_name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    currency_iso_code = Column(String(3), nullable=False)
    amount = Column(Numeric(38, 2), nullable=False)
    type = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)
    created_by = Column(String(50), nullable=True)
    updated_by = Column(String(50), nullable=True)
    deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(String(50), nullable=True)

    __table_args__ = (
        Index("idx_transaction_account_id", "account_id"),
        Index("idx_transaction_bank_name", "bank_name"),
        Index("idx_transaction_date", "date"),
        Index("idx_transaction_type", "type"),
        Index("idx_transaction_deleted", "deleted"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

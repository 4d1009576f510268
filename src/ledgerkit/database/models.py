"""SQLAlchemy models for ledgerkit database."""

from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    JSON,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class ExactDecimal(TypeDecorator):
    """Decimal stored as its canonical string.

    SQLite has no native decimal type and SQLAlchemy's Numeric round-trips
    through float there, so amounts are kept as text to stay exact.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False, index=True)
    parent_id = Column(String, ForeignKey("accounts.id"), nullable=True)
    balance = Column(ExactDecimal, nullable=False, default=Decimal("0"))
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class Transaction(Base):
    """Transaction header model."""

    __tablename__ = "transactions"

    # Surrogate key preserves insertion order for same-day transactions
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    reference = Column(String, nullable=True)
    meta = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    entries = relationship(
        "Entry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="Entry.position",
    )


class Entry(Base):
    """Debit or credit line belonging to a transaction."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    transaction_seq = Column(Integer, ForeignKey("transactions.seq"), nullable=False)
    position = Column(Integer, nullable=False)
    # Reference only: entries do not own accounts
    account_id = Column(String, nullable=False, index=True)
    entry_type = Column(String, nullable=False)
    amount = Column(ExactDecimal, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

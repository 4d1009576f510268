"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the table layout can change
without touching the ledger services.
"""

from datetime import UTC, datetime
from typing import Optional

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Entry as ORMEntry,
    Transaction as ORMTransaction,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Re-attach UTC to timestamps read back from a naive DateTime column."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        parent_id=orm_account.parent_id,
        balance=orm_account.balance,
        metadata=dict(orm_account.meta or {}),
        created_at=_as_utc(orm_account.created_at),
        updated_at=_as_utc(orm_account.updated_at),
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        account_id=orm_entry.account_id,
        entry_type=domain.EntryType(orm_entry.entry_type),
        amount=orm_entry.amount,
        description=orm_entry.description,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        entries=tuple(entry_to_domain(e) for e in orm_transaction.entries),
        description=orm_transaction.description,
        reference=orm_transaction.reference,
        metadata=dict(orm_transaction.meta or {}),
        created_at=_as_utc(orm_transaction.created_at),
        updated_at=_as_utc(orm_transaction.updated_at),
    )


def entries_to_orm(entries: tuple[domain.Entry, ...]) -> list[ORMEntry]:
    """Convert domain entries to ORM rows, recording their order."""
    return [
        ORMEntry(
            position=position,
            account_id=entry.account_id,
            entry_type=entry.entry_type.value,
            amount=entry.amount,
            description=entry.description,
        )
        for position, entry in enumerate(entries)
    ]

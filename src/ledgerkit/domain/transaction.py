"""Transaction domain service."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerkit.domain.entities import Entry, Transaction as TransactionEntity, utcnow
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    TransactionNotFoundError,
    ValidationError,
    duplicate_transaction,
)
from ledgerkit.domain.validators import DefaultTransactionValidator, TransactionValidator

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for recording transactions and keeping balances in step.

    Every change to the transaction history goes through this service, which
    applies the matching postings to the live account balances. Updates and
    deletes first reverse the stored transaction's postings.
    """

    def __init__(self, db: Database, validator: Optional[TransactionValidator] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            validator: Transaction validation rules (defaults to
                DefaultTransactionValidator)
        """
        self.db = db
        self.validator = validator or DefaultTransactionValidator()

    def record_transaction(self, transaction: TransactionEntity) -> TransactionEntity:
        """Validate, persist and post a new transaction.

        Args:
            transaction: Transaction to record

        Returns:
            The recorded transaction

        Raises:
            ValidationError: If the transaction is invalid or its ID already exists
            AccountNotFoundError: If an entry references a missing account
        """
        self._validate(transaction)

        if self.db.get_transaction(transaction.id) is not None:
            raise ValidationError(duplicate_transaction(transaction.id))

        recorded = replace(transaction, updated_at=utcnow())
        self.db.save_transaction(recorded)
        self._apply_entries(recorded.entries)

        logger.info(
            "transaction recorded: id=%s date=%s amount=%s",
            recorded.id,
            recorded.date.isoformat(),
            recorded.total_debits(),
        )
        return recorded

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: str) -> TransactionEntity:
        """Get transaction by ID, raising TransactionNotFoundError if missing."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise TransactionNotFoundError(transaction_id)
        return txn

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions within an inclusive date range."""
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def get_account_transactions(
        self,
        account_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions touching an account within an inclusive date range."""
        return self.db.get_account_transactions(
            account_id, start_date=start_date, end_date=end_date
        )

    def update_transaction(self, transaction: TransactionEntity) -> TransactionEntity:
        """Replace a stored transaction, re-posting its balance effects.

        The old entries are reversed and the new ones applied, one posting at a
        time, so an account that appears in both ends with the net change.

        Args:
            transaction: New version of the transaction (matched by ID)

        Returns:
            The stored transaction

        Raises:
            TransactionNotFoundError: If no transaction with this ID exists
            ValidationError: If the new version is invalid
            AccountNotFoundError: If the new version references a missing account
        """
        old = self.require_transaction(transaction.id)
        self._validate(transaction)

        self._apply_entries(old.entries, reverse=True)
        self._apply_entries(transaction.entries)

        updated = replace(transaction, created_at=old.created_at, updated_at=utcnow())
        self.db.update_transaction(updated)

        logger.info("transaction updated: id=%s", updated.id)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction and reverse its balance effects.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            TransactionNotFoundError: If the transaction does not exist
        """
        txn = self.require_transaction(transaction_id)
        self._apply_entries(txn.entries, reverse=True)
        self.db.delete_transaction(transaction_id)
        logger.info("transaction deleted: id=%s", transaction_id)

    def _validate(self, transaction: TransactionEntity) -> None:
        """Run validators and check every referenced account exists."""
        self.validator.validate_transaction(transaction)
        self.validator.validate_account_references(transaction)

        for account_id in transaction.account_ids():
            if self.db.get_account(account_id) is None:
                raise AccountNotFoundError(account_id)

    def _apply_entries(self, entries: Iterable[Entry], reverse: bool = False) -> None:
        """Post entries to their accounts, or undo them when reverse is set.

        Each account is loaded fresh for every entry so several postings to the
        same account accumulate.
        """
        for entry in entries:
            account = self.db.get_account(entry.account_id)
            if account is None:
                # Only reachable for reversals: the account was deleted after posting
                logger.warning(
                    "skipping reversal for missing account: id=%s", entry.account_id
                )
                continue

            entry_type = entry.entry_type.flipped() if reverse else entry.entry_type
            self.db.update_account(account.apply_entry(entry_type, entry.amount))

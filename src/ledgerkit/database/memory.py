"""In-memory database implementation."""

import copy
import threading
from datetime import date
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Account, AccountType, Transaction
from ledgerkit.domain.errors import AccountNotFoundError, TransactionNotFoundError


class MemoryDatabase(Database):
    """Dictionary-backed implementation of Database interface.

    Each collection has its own lock, so concurrent readers and writers never
    observe a half-written map. There is no atomicity across collections or
    across several calls.
    """

    def __init__(self):
        self._accounts: dict[str, Account] = {}
        self._transactions: dict[str, Transaction] = {}
        self._accounts_lock = threading.Lock()
        self._transactions_lock = threading.Lock()

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def clear(self) -> None:
        """Remove all accounts and transactions."""
        with self._accounts_lock:
            self._accounts.clear()
        with self._transactions_lock:
            self._transactions.clear()

    # Account operations
    def save_account(self, account: Account) -> None:
        with self._accounts_lock:
            self._accounts[account.id] = copy.deepcopy(account)

    def get_account(self, account_id: str) -> Optional[Account]:
        with self._accounts_lock:
            account = self._accounts.get(account_id)
            return copy.deepcopy(account) if account is not None else None

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        with self._accounts_lock:
            return [
                copy.deepcopy(account)
                for account_id, account in sorted(self._accounts.items())
                if account_type is None or account.account_type == account_type
            ]

    def update_account(self, account: Account) -> None:
        with self._accounts_lock:
            if account.id not in self._accounts:
                raise AccountNotFoundError(account.id)
            self._accounts[account.id] = copy.deepcopy(account)

    def delete_account(self, account_id: str) -> None:
        with self._accounts_lock:
            if self._accounts.pop(account_id, None) is None:
                raise AccountNotFoundError(account_id)

    # Transaction operations
    def save_transaction(self, transaction: Transaction) -> None:
        with self._transactions_lock:
            self._transactions[transaction.id] = copy.deepcopy(transaction)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with self._transactions_lock:
            txn = self._transactions.get(transaction_id)
            return copy.deepcopy(txn) if txn is not None else None

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        return self._select_transactions(None, start_date, end_date)

    def get_account_transactions(
        self,
        account_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        return self._select_transactions(account_id, start_date, end_date)

    def update_transaction(self, transaction: Transaction) -> None:
        with self._transactions_lock:
            if transaction.id not in self._transactions:
                raise TransactionNotFoundError(transaction.id)
            # Replacing the value keeps the original insertion position
            self._transactions[transaction.id] = copy.deepcopy(transaction)

    def delete_transaction(self, transaction_id: str) -> None:
        with self._transactions_lock:
            if self._transactions.pop(transaction_id, None) is None:
                raise TransactionNotFoundError(transaction_id)

    def _select_transactions(
        self,
        account_id: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> list[Transaction]:
        """Filter transactions by account and inclusive date range."""
        with self._transactions_lock:
            matches = [
                copy.deepcopy(txn)
                for txn in self._transactions.values()
                if (account_id is None or txn.affects(account_id))
                and (start_date is None or txn.date >= start_date)
                and (end_date is None or txn.date <= end_date)
            ]
        # sorted() is stable, so same-day transactions keep insertion order
        return sorted(matches, key=lambda txn: txn.date)

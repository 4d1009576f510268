"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    Transaction,
    TrialBalance,
)


class Database(ABC):
    """Abstract storage interface for the ledger.

    Account and transaction CRUD are abstract. The three balance queries have
    default implementations that run the ledger's own replay and report
    algorithms over the CRUD methods; a backend may override them with
    optimized queries as long as the results are identical.
    """

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

    # Account operations
    @abstractmethod
    def save_account(self, account: Account) -> None:
        """Persist a new account."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List all accounts, optionally filtered by type."""
        pass

    @abstractmethod
    def update_account(self, account: Account) -> None:
        """Replace a stored account.

        Raises:
            AccountNotFoundError: If no account with this ID is stored
        """
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> None:
        """Delete an account.

        Raises:
            AccountNotFoundError: If no account with this ID is stored
        """
        pass

    # Transaction operations
    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> None:
        """Persist a new transaction with its entries."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions within an inclusive date range.

        Results are ordered by date, then by insertion order.
        """
        pass

    @abstractmethod
    def get_account_transactions(
        self,
        account_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with at least one entry on the account."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> None:
        """Replace a stored transaction and its entries.

        Raises:
            TransactionNotFoundError: If no transaction with this ID is stored
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction and its entries.

        Raises:
            TransactionNotFoundError: If no transaction with this ID is stored
        """
        pass

    def get_account_transaction_count(self, account_id: str) -> int:
        """Get count of transactions referencing an account."""
        return len(self.get_account_transactions(account_id))

    # Balance queries
    def get_account_balance(self, account_id: str, as_of: Optional[date] = None) -> Decimal:
        """Get account balance, live or as of a date."""
        from ledgerkit.domain.balance import BalanceService

        return BalanceService(self).balance_as_of(account_id, as_of)

    def get_trial_balance(self, as_of: date) -> TrialBalance:
        """Get trial balance as of a date."""
        from ledgerkit.domain.reports import ReportService

        return ReportService(self).trial_balance(as_of)

    def get_account_balances_by_type(
        self, as_of: date
    ) -> dict[AccountType, list[AccountBalance]]:
        """Get trial balance rows grouped by account type."""
        from ledgerkit.domain.reports import ReportService

        return ReportService(self).balances_by_type(as_of)

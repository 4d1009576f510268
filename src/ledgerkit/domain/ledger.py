"""Ledger facade combining the account, transaction and report services."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.balance import BalanceService
from ledgerkit.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    BalanceSheet,
    CashFlowStatement,
    IncomeStatement,
    IntegrityReport,
    Transaction,
    TrialBalance,
)
from ledgerkit.domain.integrity import IntegrityService
from ledgerkit.domain.reports import ReportService
from ledgerkit.domain.transaction import TransactionService
from ledgerkit.domain.validators import AccountValidator, TransactionValidator

if TYPE_CHECKING:
    from ledgerkit.database.base import Database


class Ledger:
    """Single entry point for bookkeeping operations on one database.

    Validators are chosen once, here, and shared by every operation.
    """

    def __init__(
        self,
        db: Database,
        account_validator: Optional[AccountValidator] = None,
        transaction_validator: Optional[TransactionValidator] = None,
    ):
        self.db = db
        self.accounts = AccountService(db, account_validator)
        self.transactions = TransactionService(db, transaction_validator)
        self.balances = BalanceService(db)
        self.reports = ReportService(db)
        self.integrity = IntegrityService(db)

    # Accounts
    def create_account(
        self,
        account_id: str,
        name: str,
        account_type: AccountType,
        parent_id: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> Account:
        return self.accounts.create_account(account_id, name, account_type, parent_id, metadata)

    def get_account(self, account_id: str) -> Optional[Account]:
        return self.accounts.get_account(account_id)

    def list_accounts(self) -> list[Account]:
        return self.accounts.list_accounts()

    def list_accounts_by_type(self, account_type: AccountType) -> list[Account]:
        return self.accounts.list_accounts(account_type)

    def update_account(self, account: Account) -> Account:
        return self.accounts.update_account(account)

    def delete_account(self, account_id: str) -> None:
        self.accounts.delete_account(account_id)

    def setup_standard_chart_of_accounts(self) -> dict[str, Account]:
        return self.accounts.setup_standard_chart()

    # Transactions
    def record_transaction(self, transaction: Transaction) -> Transaction:
        return self.transactions.record_transaction(transaction)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.transactions.get_transaction(transaction_id)

    def get_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        return self.transactions.list_transactions(start_date, end_date)

    def get_account_transactions(
        self,
        account_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        return self.transactions.get_account_transactions(account_id, start_date, end_date)

    def update_transaction(self, transaction: Transaction) -> Transaction:
        return self.transactions.update_transaction(transaction)

    def delete_transaction(self, transaction_id: str) -> None:
        self.transactions.delete_transaction(transaction_id)

    # Balances and reports
    def get_account_balance(self, account_id: str, as_of: Optional[date] = None) -> Decimal:
        """Get an account balance through the database's balance query."""
        return self.db.get_account_balance(account_id, as_of)

    def get_trial_balance(self, as_of: date) -> TrialBalance:
        return self.db.get_trial_balance(as_of)

    def get_account_balances_by_type(
        self, as_of: date
    ) -> dict[AccountType, list[AccountBalance]]:
        return self.db.get_account_balances_by_type(as_of)

    def generate_balance_sheet(self, as_of: date) -> BalanceSheet:
        return self.reports.balance_sheet(as_of)

    def generate_income_statement(self, start_date: date, end_date: date) -> IncomeStatement:
        return self.reports.income_statement(start_date, end_date)

    def generate_cash_flow(self, start_date: date, end_date: date) -> CashFlowStatement:
        return self.reports.cash_flow(start_date, end_date)

    def validate_integrity(self, as_of: date, check_drift: bool = False) -> IntegrityReport:
        return self.integrity.validate(as_of, check_drift=check_drift)

"""Account domain service."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from ledgerkit.domain.entities import Account as AccountEntity, AccountType, utcnow
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ValidationError,
    duplicate_account,
    parent_account_not_found,
)
from ledgerkit.domain.validators import AccountValidator, DefaultAccountValidator

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

logger = logging.getLogger(__name__)

# Standard small-business chart: key -> (id, name, type)
STANDARD_CHART = {
    "cash": ("1000", "Cash", AccountType.ASSET),
    "accounts_receivable": ("1200", "Accounts Receivable", AccountType.ASSET),
    "inventory": ("1300", "Inventory", AccountType.ASSET),
    "accounts_payable": ("2000", "Accounts Payable", AccountType.LIABILITY),
    "loans_payable": ("2100", "Loans Payable", AccountType.LIABILITY),
    "owners_equity": ("3000", "Owner's Equity", AccountType.EQUITY),
    "retained_earnings": ("3200", "Retained Earnings", AccountType.EQUITY),
    "sales_revenue": ("4000", "Sales Revenue", AccountType.INCOME),
    "service_revenue": ("4100", "Service Revenue", AccountType.INCOME),
    "cost_of_goods_sold": ("5000", "Cost of Goods Sold", AccountType.EXPENSE),
    "rent_expense": ("6000", "Rent Expense", AccountType.EXPENSE),
    "utilities_expense": ("6100", "Utilities Expense", AccountType.EXPENSE),
}


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database, validator: Optional[AccountValidator] = None):
        """Initialize account service.

        Args:
            db: Database instance
            validator: Account validation rules (defaults to DefaultAccountValidator)
        """
        self.db = db
        self.validator = validator or DefaultAccountValidator()

    def create_account(
        self,
        account_id: str,
        name: str,
        account_type: AccountType,
        parent_id: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> AccountEntity:
        """Create a new account with a zero balance.

        Args:
            account_id: Unique account ID
            name: Display name
            account_type: Account classification
            parent_id: Optional parent account ID
            metadata: Optional free-form key/value pairs

        Returns:
            The created account

        Raises:
            ValidationError: If fields are invalid, the ID already exists, or
                the parent account does not exist
        """
        account = AccountEntity(
            id=account_id,
            name=name,
            account_type=account_type,
            parent_id=parent_id,
            metadata=dict(metadata or {}),
        )
        self.validator.validate_account(account)

        if self.db.get_account(account_id) is not None:
            raise ValidationError(duplicate_account(account_id))

        if parent_id is not None and self.db.get_account(parent_id) is None:
            raise ValidationError(parent_account_not_found(parent_id))

        self.db.save_account(account)
        logger.info("account created: id=%s type=%s", account_id, account_type.value)
        return account

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: str) -> AccountEntity:
        """Get account by ID, raising AccountNotFoundError if it is missing."""
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[AccountEntity]:
        """List all accounts.

        Args:
            account_type: Optional type filter

        Returns:
            List of account entities
        """
        return self.db.list_accounts(account_type)

    def update_account(self, account: AccountEntity) -> AccountEntity:
        """Replace an account's descriptive fields.

        The stored record is overwritten as given, including its balance, so
        callers should start from a freshly loaded account.

        Raises:
            AccountNotFoundError: If the account does not exist
            ValidationError: If fields are invalid or the parent is unusable
        """
        self.validator.validate_account(account)
        self.require_account(account.id)

        if account.parent_id is not None:
            if account.parent_id == account.id:
                raise ValidationError("Account cannot be its own parent")
            if self.db.get_account(account.parent_id) is None:
                raise ValidationError(parent_account_not_found(account.parent_id))

        updated = replace(account, updated_at=utcnow())
        self.db.update_account(updated)
        logger.info("account updated: id=%s", account.id)
        return updated

    def delete_account(self, account_id: str) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            AccountNotFoundError: If the account does not exist
            DependencyError: If the configured validator blocks the deletion
        """
        self.require_account(account_id)
        self.validator.validate_account_deletion(account_id)
        self.db.delete_account(account_id)
        logger.info("account deleted: id=%s", account_id)

    def get_child_accounts(self, parent_id: str) -> list[AccountEntity]:
        """List accounts whose parent is the given account."""
        return [acc for acc in self.db.list_accounts() if acc.parent_id == parent_id]

    def get_account_path(self, account_id: str) -> list[AccountEntity]:
        """Get the chain of accounts from the root down to this account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        path = [self.require_account(account_id)]
        seen = {account_id}
        while path[0].parent_id is not None and path[0].parent_id not in seen:
            parent = self.db.get_account(path[0].parent_id)
            if parent is None:
                break
            seen.add(parent.id)
            path.insert(0, parent)
        return path

    def setup_standard_chart(self) -> dict[str, AccountEntity]:
        """Create the standard small-business chart of accounts.

        Accounts that already exist are left untouched.

        Returns:
            Dictionary mapping chart keys (e.g. "cash") to accounts
        """
        chart = {}
        created = 0
        for key, (account_id, name, account_type) in STANDARD_CHART.items():
            existing = self.db.get_account(account_id)
            if existing is not None:
                chart[key] = existing
                continue
            chart[key] = self.create_account(account_id, name, account_type)
            created += 1

        logger.info("standard chart set up: %d accounts created", created)
        return chart

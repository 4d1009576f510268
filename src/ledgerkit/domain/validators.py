"""Pluggable account and transaction validation rules.

Validators are selected when a service is constructed. Any object with the
right methods can be used; the default implementations enforce only the basic
ledger invariants and the strict ones add field-level rules.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Protocol

from ledgerkit.domain.entities import Account, Transaction, ZERO
from ledgerkit.domain.errors import DependencyError, ValidationError, account_delete_blocked

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

MAX_ACCOUNT_ID_LENGTH = 50
MAX_ACCOUNT_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

_ACCOUNT_ID_PATTERN = re.compile(r"[\w-]+")


class AccountValidator(Protocol):
    """Validation hooks for account creation, update and deletion."""

    def validate_account(self, account: Account) -> None: ...

    def validate_account_deletion(self, account_id: str) -> None: ...


class TransactionValidator(Protocol):
    """Validation hooks run before a transaction is recorded or updated."""

    def validate_transaction(self, transaction: Transaction) -> None: ...

    def validate_account_references(self, transaction: Transaction) -> None: ...


def validate_positive_amount(amount: Decimal) -> None:
    """Raise ValidationError unless amount is strictly positive."""
    if amount <= ZERO:
        raise ValidationError("Amount must be positive")


def validate_account_id(account_id: str) -> None:
    """Check account ID length and character set.

    Raises:
        ValidationError: If the ID is blank, too long, or contains characters
            other than letters, digits, dashes and underscores
    """
    if not account_id.strip():
        raise ValidationError("Account ID cannot be empty")

    if len(account_id) > MAX_ACCOUNT_ID_LENGTH:
        raise ValidationError(
            f"Account ID cannot exceed {MAX_ACCOUNT_ID_LENGTH} characters"
        )

    if not _ACCOUNT_ID_PATTERN.fullmatch(account_id):
        raise ValidationError(
            "Account ID can only contain alphanumeric characters, dashes, and underscores"
        )


def validate_account_name(name: str) -> None:
    """Check account name is present and not too long."""
    if not name.strip():
        raise ValidationError("Account name cannot be empty")

    if len(name) > MAX_ACCOUNT_NAME_LENGTH:
        raise ValidationError(
            f"Account name cannot exceed {MAX_ACCOUNT_NAME_LENGTH} characters"
        )


def validate_transaction_description(description: str) -> None:
    """Check transaction description is present and not too long."""
    if not description.strip():
        raise ValidationError("Transaction description cannot be empty")

    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Transaction description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )


class DefaultAccountValidator:
    """Requires a non-blank ID and name; allows every deletion."""

    def validate_account(self, account: Account) -> None:
        if not account.id.strip():
            raise ValidationError("Account ID cannot be empty")

        if not account.name.strip():
            raise ValidationError("Account name cannot be empty")

    def validate_account_deletion(self, account_id: str) -> None:
        pass


class StrictAccountValidator:
    """Adds character set and length limits to account fields."""

    def validate_account(self, account: Account) -> None:
        validate_account_id(account.id)
        validate_account_name(account.name)

    def validate_account_deletion(self, account_id: str) -> None:
        pass


class ReferencedAccountDeletionValidator:
    """Blocks deletion of accounts that transactions still reference.

    Field validation is delegated to ``inner``.
    """

    def __init__(self, db: Database, inner: Optional[AccountValidator] = None):
        self.db = db
        self.inner = inner or DefaultAccountValidator()

    def validate_account(self, account: Account) -> None:
        self.inner.validate_account(account)

    def validate_account_deletion(self, account_id: str) -> None:
        self.inner.validate_account_deletion(account_id)
        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))


class DefaultTransactionValidator:
    """Enforces the double-entry invariants only."""

    def validate_transaction(self, transaction: Transaction) -> None:
        transaction.validate()

    def validate_account_references(self, transaction: Transaction) -> None:
        # The recorder checks account existence against storage itself
        pass


class StrictTransactionValidator:
    """Adds description, account ID and duplicate-line checks."""

    def validate_transaction(self, transaction: Transaction) -> None:
        transaction.validate()
        validate_transaction_description(transaction.description)

        for entry in transaction.entries:
            validate_account_id(entry.account_id)
            validate_positive_amount(entry.amount)

        seen = set()
        for entry in transaction.entries:
            key = (entry.account_id, entry.entry_type)
            if key in seen:
                raise ValidationError(
                    f"Account '{entry.account_id}' appears multiple times with the "
                    "same entry type in transaction"
                )
            seen.add(key)

    def validate_account_references(self, transaction: Transaction) -> None:
        pass

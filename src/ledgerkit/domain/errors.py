"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for ledger errors.

    Every failure raised by the ledger core is a subclass of this type, so
    callers can catch one exception to handle any typed ledger failure.
    """


class ValidationError(DomainError):
    """Malformed input or a violated ledger invariant."""


class DependencyError(ValidationError):
    """Operation blocked due to dependent ledger data."""


class NotFoundError(DomainError):
    """Requested ledger entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """Referenced account does not exist."""

    def __init__(self, account_id: str):
        super().__init__(account_not_found(account_id))
        self.account_id = account_id


class TransactionNotFoundError(NotFoundError):
    """Referenced transaction does not exist."""

    def __init__(self, transaction_id: str):
        super().__init__(transaction_not_found(transaction_id))
        self.transaction_id = transaction_id


class StorageError(DomainError):
    """Persistence backend failure."""


class TaxError(DomainError):
    """Invalid tax rate structure or unknown tax lookup."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account '{account_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def duplicate_account(account_id: str) -> str:
    """Return message for an account ID collision."""
    return f"Account with ID '{account_id}' already exists"


def duplicate_transaction(transaction_id: str) -> str:
    """Return message for a transaction ID collision."""
    return f"Transaction with ID '{transaction_id}' already exists"


def parent_account_not_found(parent_id: str) -> str:
    """Return message for a parent reference that does not resolve."""
    return f"Parent account '{parent_id}' does not exist"


def account_delete_blocked(account_id: str, transaction_count: int) -> str:
    """Return message when an account is still referenced by transactions."""
    noun = "transaction" if transaction_count == 1 else "transactions"
    return (
        f"Cannot delete account '{account_id}': it is referenced by "
        f"{transaction_count} {noun}. Please delete them first."
    )

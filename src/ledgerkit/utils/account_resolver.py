"""Utility for resolving account names to IDs."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import AccountNotFoundError, ValidationError


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account ID or display name to an account ID.

    An exact ID match wins; otherwise names are compared case-insensitively.

    Raises:
        AccountNotFoundError: If nothing matches
        ValidationError: If the name matches more than one account
    """
    if account_service.get_account(account) is not None:
        return account

    wanted = account.strip().casefold()
    matches = [acc for acc in account_service.list_accounts() if acc.name.casefold() == wanted]
    if len(matches) > 1:
        ids = ", ".join(acc.id for acc in matches)
        raise ValidationError(f"Account name '{account}' is ambiguous: matches {ids}")
    if not matches:
        raise AccountNotFoundError(account)
    return matches[0].id

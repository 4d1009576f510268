"""Historical balance reconstruction."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerkit.domain.entities import Account, Transaction, exact_sum, signed_amount
from ledgerkit.domain.errors import AccountNotFoundError

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

logger = logging.getLogger(__name__)


def replay_balance(account: Account, transactions: Iterable[Transaction]) -> Decimal:
    """Sum every posting to an account, starting from zero.

    Entries for other accounts are ignored, so the full transactions can be
    passed in.
    """
    return exact_sum(
        signed_amount(account.normal_balance, entry.entry_type, entry.amount)
        for txn in transactions
        for entry in txn.entries
        if entry.account_id == account.id
    )


class BalanceService:
    """Service for reading account balances at points in time."""

    def __init__(self, db: Database):
        self.db = db

    def _require_account(self, account_id: str) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def balance_as_of(self, account_id: str, as_of: Optional[date] = None) -> Decimal:
        """Get an account's balance, optionally as of a past date.

        Args:
            account_id: Account ID
            as_of: Inclusive cutoff date; None returns the live balance

        Returns:
            Balance signed relative to the account's normal side

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self._require_account(account_id)
        if as_of is None:
            return account.balance

        transactions = self.db.get_account_transactions(account_id, end_date=as_of)
        balance = replay_balance(account, transactions)
        logger.debug(
            "replayed balance: id=%s as_of=%s transactions=%d balance=%s",
            account_id,
            as_of.isoformat(),
            len(transactions),
            balance,
        )
        return balance

    def replayed_balance(self, account_id: str) -> Decimal:
        """Replay the account's complete history, ignoring the live balance."""
        account = self._require_account(account_id)
        return replay_balance(account, self.db.get_account_transactions(account_id))

    def balance_drift(self, account_id: str) -> Decimal:
        """Difference between the live balance and its full replay.

        A consistent ledger has zero drift on every account.
        """
        account = self._require_account(account_id)
        replayed = replay_balance(account, self.db.get_account_transactions(account_id))
        return exact_sum((account.balance, replayed.copy_negate()))

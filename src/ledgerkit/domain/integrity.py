"""Ledger integrity checks."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from ledgerkit.domain.balance import BalanceService
from ledgerkit.domain.entities import IntegrityReport, ZERO, exact_sum
from ledgerkit.domain.reports import ReportService

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

logger = logging.getLogger(__name__)


class IntegrityService:
    """Read-only audit of ledger consistency."""

    def __init__(self, db: Database):
        self.db = db
        self.reports = ReportService(db)
        self.balances = BalanceService(db)

    def validate(self, as_of: date, check_drift: bool = False) -> IntegrityReport:
        """Check that the trial balance and balance sheet both balance.

        Args:
            as_of: Inclusive cutoff date for both reports
            check_drift: Also compare every live balance with a full replay
                of its history

        Returns:
            IntegrityReport listing every failed check
        """
        trial_balance = self.db.get_trial_balance(as_of)
        balance_sheet = self.reports.balance_sheet(as_of)
        total_liabilities_equity = exact_sum(
            (balance_sheet.total_liabilities, balance_sheet.total_equity)
        )

        issues = []
        if not trial_balance.is_balanced:
            issues.append(
                f"Trial balance is not balanced: debits = {trial_balance.total_debits}, "
                f"credits = {trial_balance.total_credits}"
            )

        if not balance_sheet.is_balanced:
            issues.append(
                f"Balance sheet is not balanced: assets = {balance_sheet.total_assets}, "
                f"liabilities + equity = {total_liabilities_equity}"
            )

        if check_drift:
            for account in self.db.list_accounts():
                drift = self.balances.balance_drift(account.id)
                if drift != ZERO:
                    issues.append(
                        f"Account '{account.id}' balance {account.balance} does not match "
                        f"its transaction history (drift = {drift})"
                    )

        if issues:
            logger.warning("integrity check failed: as_of=%s issues=%d", as_of.isoformat(), len(issues))

        return IntegrityReport(
            as_of_date=as_of,
            is_valid=not issues,
            issues=tuple(issues),
            trial_balance_total_debits=trial_balance.total_debits,
            trial_balance_total_credits=trial_balance.total_credits,
            balance_sheet_total_assets=balance_sheet.total_assets,
            balance_sheet_total_liabilities_equity=total_liabilities_equity,
        )

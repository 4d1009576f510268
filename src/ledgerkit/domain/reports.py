"""Financial report generation."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from ledgerkit.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    BalanceSheet,
    CashFlowCategory,
    CashFlowItem,
    CashFlowStatement,
    EntryType,
    IncomeStatement,
    Transaction,
    TrialBalance,
    ZERO,
    exact_context,
    exact_sum,
)
from ledgerkit.domain.errors import ValidationError

if TYPE_CHECKING:
    from ledgerkit.database.base import Database

logger = logging.getLogger(__name__)

CASH_FLOW_CATEGORY_KEY = "cash_flow_category"

_FINANCING_ID_HINTS = ("payable", "loan", "equity", "capital")
_INVESTING_ID_HINTS = ("asset", "cash")
_FINANCING_TYPES = (AccountType.LIABILITY, AccountType.EQUITY)


def classify_balance(account: Account, balance: Decimal) -> AccountBalance:
    """Place a signed balance in the debit or credit column.

    A non-negative balance sits on the account's normal side; a negative one
    goes on the opposite side as its absolute value.
    """
    if balance >= ZERO:
        side = account.normal_balance
        amount = balance
    else:
        side = account.normal_balance.flipped()
        amount = balance.copy_negate()

    if side == EntryType.DEBIT:
        return AccountBalance(account=account, debit_balance=amount)
    return AccountBalance(account=account, credit_balance=amount)


def _sum_normal(rows: Iterable[AccountBalance]) -> Decimal:
    return exact_sum(row.normal_amount for row in rows)


class ReportService:
    """Service for building trial balances and financial statements.

    Every report is derived from the stored history on demand; nothing here
    writes to the database.
    """

    def __init__(self, db: Database):
        self.db = db

    def trial_balance(self, as_of: date) -> TrialBalance:
        """Build the trial balance as of a date.

        Args:
            as_of: Inclusive cutoff date

        Returns:
            TrialBalance with one row per account, in account listing order
        """
        balances: dict[str, AccountBalance] = {}
        for account in self.db.list_accounts():
            balance = self.db.get_account_balance(account.id, as_of)
            balances[account.id] = classify_balance(account, balance)

        total_debits = exact_sum(row.debit_balance or ZERO for row in balances.values())
        total_credits = exact_sum(row.credit_balance or ZERO for row in balances.values())

        logger.debug(
            "trial balance: as_of=%s debits=%s credits=%s",
            as_of.isoformat(),
            total_debits,
            total_credits,
        )
        return TrialBalance(
            as_of_date=as_of,
            balances=balances,
            total_debits=total_debits,
            total_credits=total_credits,
            is_balanced=total_debits == total_credits,
        )

    def balances_by_type(self, as_of: date) -> dict[AccountType, list[AccountBalance]]:
        """Group trial balance rows by account type."""
        grouped: dict[AccountType, list[AccountBalance]] = {}
        for row in self.db.get_trial_balance(as_of).balances.values():
            grouped.setdefault(row.account.account_type, []).append(row)
        return grouped

    def balance_sheet(self, as_of: date) -> BalanceSheet:
        """Build the balance sheet as of a date.

        Income and expense balances are folded into equity as a synthetic
        "Net Income" row so the statement balances before closing entries.
        """
        grouped = self.db.get_account_balances_by_type(as_of)
        assets = grouped.get(AccountType.ASSET, [])
        liabilities = grouped.get(AccountType.LIABILITY, [])
        equity = list(grouped.get(AccountType.EQUITY, []))

        with exact_context():
            net_income = _sum_normal(grouped.get(AccountType.INCOME, [])) - _sum_normal(
                grouped.get(AccountType.EXPENSE, [])
            )
        if net_income != ZERO:
            equity.append(
                classify_balance(
                    Account(id="net_income", name="Net Income", account_type=AccountType.EQUITY),
                    net_income,
                )
            )

        total_assets = _sum_normal(assets)
        total_liabilities = _sum_normal(liabilities)
        total_equity = _sum_normal(equity)

        logger.debug(
            "balance sheet: as_of=%s assets=%s liabilities=%s equity=%s",
            as_of.isoformat(),
            total_assets,
            total_liabilities,
            total_equity,
        )
        return BalanceSheet(
            as_of_date=as_of,
            assets=tuple(assets),
            liabilities=tuple(liabilities),
            equity=tuple(equity),
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            is_balanced=total_assets == exact_sum((total_liabilities, total_equity)),
        )

    def income_statement(self, start_date: date, end_date: date) -> IncomeStatement:
        """Build the income statement for an inclusive period.

        Each income and expense row holds the activity within the period: the
        balance at the end date minus the balance on the day before the start.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(
                f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
            )

        # Nothing can be posted before date.min, so the opening balance is zero
        opening_date = start_date - timedelta(days=1) if start_date > date.min else None
        revenue = []
        expenses = []
        for account_type, rows in ((AccountType.INCOME, revenue), (AccountType.EXPENSE, expenses)):
            for account in self.db.list_accounts(account_type):
                closing = self.db.get_account_balance(account.id, end_date)
                opening = (
                    self.db.get_account_balance(account.id, opening_date)
                    if opening_date is not None
                    else ZERO
                )
                rows.append(classify_balance(account, exact_sum((closing, opening.copy_negate()))))

        total_revenue = _sum_normal(revenue)
        total_expenses = _sum_normal(expenses)

        logger.debug(
            "income statement: start=%s end=%s revenue=%s expenses=%s",
            start_date.isoformat(),
            end_date.isoformat(),
            total_revenue,
            total_expenses,
        )
        return IncomeStatement(
            start_date=start_date,
            end_date=end_date,
            revenue=tuple(revenue),
            expenses=tuple(expenses),
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_income=exact_sum((total_revenue, total_expenses.copy_negate())),
        )

    def cash_flow(self, start_date: date, end_date: date) -> CashFlowStatement:
        """Build an approximate cash flow statement for an inclusive period.

        Transactions are classified by a declared ``cash_flow_category``
        metadata value when present, otherwise by the types and IDs of the
        accounts they touch. The result is a best-effort grouping, not a
        full indirect-method statement.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(
                f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
            )

        account_types = {acc.id: acc.account_type for acc in self.db.list_accounts()}
        sections: dict[CashFlowCategory, list[CashFlowItem]] = {
            category: [] for category in CashFlowCategory
        }

        for txn in self.db.list_transactions(start_date=start_date, end_date=end_date):
            category = self._classify_cash_flow(txn, account_types)
            sections[category].append(
                CashFlowItem(
                    transaction_id=txn.id,
                    description=txn.description,
                    amount=txn.total_debits(),
                    category=category,
                )
            )

        operating = sections[CashFlowCategory.OPERATING]
        investing = sections[CashFlowCategory.INVESTING]
        financing = sections[CashFlowCategory.FINANCING]
        net_operating = exact_sum(item.amount for item in operating)
        net_investing = exact_sum(item.amount for item in investing)
        net_financing = exact_sum(item.amount for item in financing)

        return CashFlowStatement(
            start_date=start_date,
            end_date=end_date,
            operating_activities=tuple(operating),
            investing_activities=tuple(investing),
            financing_activities=tuple(financing),
            net_operating_cash_flow=net_operating,
            net_investing_cash_flow=net_investing,
            net_financing_cash_flow=net_financing,
            net_cash_flow=exact_sum((net_operating, net_investing, net_financing)),
        )

    def _classify_cash_flow(
        self, txn: Transaction, account_types: dict[str, AccountType]
    ) -> CashFlowCategory:
        declared = txn.metadata.get(CASH_FLOW_CATEGORY_KEY)
        if declared:
            try:
                return CashFlowCategory(declared.strip().lower())
            except ValueError:
                logger.warning(
                    "ignoring unknown cash flow category: id=%s category=%s", txn.id, declared
                )

        account_ids = [entry.account_id.lower() for entry in txn.entries]

        if any(account_types.get(entry.account_id) in _FINANCING_TYPES for entry in txn.entries):
            return CashFlowCategory.FINANCING
        if any(hint in acc for acc in account_ids for hint in _FINANCING_ID_HINTS):
            return CashFlowCategory.FINANCING

        touches_asset = any(
            account_types.get(entry.account_id) == AccountType.ASSET for entry in txn.entries
        ) or any(hint in acc for acc in account_ids for hint in _INVESTING_ID_HINTS)
        if touches_asset and "equipment" in txn.description.lower():
            return CashFlowCategory.INVESTING

        return CashFlowCategory.OPERATING

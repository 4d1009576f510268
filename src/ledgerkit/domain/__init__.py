"""Domain layer for ledgerkit application."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.transaction import TransactionService
from ledgerkit.domain.balance import BalanceService
from ledgerkit.domain.reports import ReportService
from ledgerkit.domain.integrity import IntegrityService
from ledgerkit.domain.ledger import Ledger

__all__ = [
    "AccountService",
    "TransactionService",
    "BalanceService",
    "ReportService",
    "IntegrityService",
    "Ledger",
]

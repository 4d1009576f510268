"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import get_date_range, parse_date
from ledgerkit.utils.amount_parser import parse_amount, parse_entry_spec
from ledgerkit.utils.account_resolver import resolve_account

__all__ = ["get_date_range", "parse_date", "parse_amount", "parse_entry_spec", "resolve_account"]

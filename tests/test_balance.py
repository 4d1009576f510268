"""Tests for historical balance reconstruction."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.balance import replay_balance
from ledgerkit.domain.entities import Account, AccountType, Entry, Transaction
from ledgerkit.domain.errors import AccountNotFoundError


@pytest.fixture
def history(transaction_service, sample_chart, make_txn):
    """Three months of activity on the sample chart."""
    transaction_service.record_transaction(make_txn("T1", date(2024, 1, 1), "cash", "equity", "10000"))
    transaction_service.record_transaction(make_txn("T2", date(2024, 1, 15), "rent", "cash", "1500"))
    transaction_service.record_transaction(make_txn("T3", date(2024, 2, 1), "cash", "revenue", "4000"))
    transaction_service.record_transaction(make_txn("T4", date(2024, 3, 1), "rent", "cash", "1500"))


def test_replay_balance_ignores_other_accounts():
    cash = Account("cash", "Cash", AccountType.ASSET)
    txns = [
        Transaction(
            id="T1",
            date=date(2024, 1, 1),
            entries=(Entry.debit("cash", Decimal("5")), Entry.credit("equity", Decimal("5"))),
            description="x",
        ),
        Transaction(
            id="T2",
            date=date(2024, 1, 2),
            entries=(Entry.debit("rent", Decimal("2")), Entry.credit("cash", Decimal("2"))),
            description="y",
        ),
    ]
    assert replay_balance(cash, txns) == Decimal("3")


def test_balance_without_date_is_live(balance_service, history):
    assert balance_service.balance_as_of("cash") == Decimal("11000")


@pytest.mark.parametrize(
    "as_of,expected",
    [
        (date(2023, 12, 31), "0"),
        (date(2024, 1, 1), "10000"),
        (date(2024, 1, 31), "8500"),
        (date(2024, 2, 1), "12500"),
        (date(2024, 12, 31), "11000"),
    ],
)
def test_balance_as_of_date(balance_service, history, as_of, expected):
    assert balance_service.balance_as_of("cash", as_of) == Decimal(expected)


def test_storage_query_matches_replay(db, balance_service, history):
    for account in db.list_accounts():
        for as_of in (date(2024, 1, 14), date(2024, 2, 1), date(2024, 3, 1)):
            assert db.get_account_balance(account.id, as_of) == balance_service.balance_as_of(
                account.id, as_of
            )


def test_unknown_account(balance_service):
    with pytest.raises(AccountNotFoundError):
        balance_service.balance_as_of("nope", date(2024, 1, 1))


def test_no_drift_after_edits(db, balance_service, transaction_service, history, make_txn):
    transaction_service.update_transaction(make_txn("T2", date(2024, 1, 15), "rent", "payable", "1600"))
    transaction_service.delete_transaction("T3")

    for account in db.list_accounts():
        assert balance_service.replayed_balance(account.id) == account.balance
        assert balance_service.balance_drift(account.id) == Decimal("0")


def test_drift_detected_when_live_balance_tampered(db, balance_service, history):
    cash = db.get_account("cash")
    db.update_account(cash.apply_entry(cash.normal_balance, Decimal("1")))

    assert balance_service.balance_drift("cash") == Decimal("1")

"""Tests for the ledger integrity check."""

from datetime import date
from decimal import Decimal

from ledgerkit.domain.integrity import IntegrityService


def test_consistent_ledger_is_valid(db, transaction_service, sample_chart, make_txn):
    transaction_service.record_transaction(make_txn("T1", date(2024, 1, 1), "cash", "equity", "1000"))
    transaction_service.record_transaction(make_txn("T2", date(2024, 1, 2), "rent", "cash", "100"))

    report = IntegrityService(db).validate(date(2024, 1, 31), check_drift=True)

    assert report.is_valid
    assert report.issues == ()
    assert report.trial_balance_total_debits == Decimal("1000")
    assert report.trial_balance_total_credits == Decimal("1000")
    assert report.balance_sheet_total_assets == Decimal("900")
    assert report.balance_sheet_total_liabilities_equity == Decimal("900")


def test_empty_ledger_is_valid(db):
    assert IntegrityService(db).validate(date(2024, 1, 1)).is_valid


def test_drift_reported_only_when_requested(db, transaction_service, sample_chart, make_txn):
    transaction_service.record_transaction(make_txn("T1", date(2024, 1, 1), "cash", "equity", "1000"))
    cash = db.get_account("cash")
    db.update_account(cash.apply_entry(cash.normal_balance, Decimal("5")))

    service = IntegrityService(db)
    assert service.validate(date(2024, 1, 31)).is_valid

    report = service.validate(date(2024, 1, 31), check_drift=True)
    assert not report.is_valid
    assert len(report.issues) == 1
    assert "Account 'cash'" in report.issues[0]
    assert "drift = 5" in report.issues[0]


def test_unbalanced_history_reported(db, sample_chart):
    from ledgerkit.domain.entities import Entry, Transaction

    # Written straight to storage, bypassing the recorder's checks
    db.save_transaction(
        Transaction(
            id="BAD",
            date=date(2024, 1, 1),
            entries=(Entry.debit("cash", Decimal("10")), Entry.credit("equity", Decimal("7"))),
            description="Corrupt",
        )
    )

    report = IntegrityService(db).validate(date(2024, 1, 31))

    assert not report.is_valid
    assert report.issues[0] == "Trial balance is not balanced: debits = 10, credits = 7"
    assert report.issues[1] == (
        "Balance sheet is not balanced: assets = 10, liabilities + equity = 7"
    )

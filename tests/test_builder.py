"""Tests for TransactionBuilder and posting patterns."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain import builder
from ledgerkit.domain.builder import TransactionBuilder
from ledgerkit.domain.entities import EntryType
from ledgerkit.domain.errors import ValidationError

DAY = date(2024, 4, 1)


def test_builder_collects_fields():
    txn = (
        TransactionBuilder("T1", DAY, "Invoice 42")
        .reference("INV-42")
        .metadata("customer", "Acme")
        .debit("receivable", Decimal("100"), "Gross")
        .credit("revenue", Decimal("100"))
        .build()
    )

    assert txn.reference == "INV-42"
    assert txn.metadata == {"customer": "Acme"}
    assert [e.entry_type for e in txn.entries] == [EntryType.DEBIT, EntryType.CREDIT]
    assert txn.entries[0].description == "Gross"


def test_builder_validates_on_build():
    partial = TransactionBuilder("T1", DAY, "Half").debit("cash", Decimal("5"))
    with pytest.raises(ValidationError):
        partial.build()


def test_invoice_with_gst():
    txn = builder.create_invoice_with_gst(
        "INV1", DAY, "Sale", "receivable", "revenue", "gst_payable", Decimal("10000"), Decimal("1800")
    )
    amounts = {(e.account_id, e.entry_type): e.amount for e in txn.entries}

    assert amounts[("receivable", EntryType.DEBIT)] == Decimal("11800")
    assert amounts[("revenue", EntryType.CREDIT)] == Decimal("10000")
    assert amounts[("gst_payable", EntryType.CREDIT)] == Decimal("1800")


def test_bill_payment_with_gst():
    txn = builder.create_bill_payment_with_gst(
        "B1", DAY, "Supplies", "supplies", "gst_input", "cash", Decimal("500"), Decimal("90")
    )
    assert txn.total_debits() == txn.total_credits() == Decimal("590")
    assert len(txn.entries) == 3


@pytest.mark.parametrize(
    "pattern,debit,credit",
    [
        (builder.create_expense_payment, "expense", "cash"),
        (builder.create_sales_transaction, "cash", "revenue"),
        (builder.create_asset_purchase, "equipment", "cash"),
        (builder.create_loan_received, "cash", "loan"),
        (builder.create_owner_investment, "cash", "equity"),
    ],
)
def test_two_line_patterns(pattern, debit, credit):
    txn = pattern("T1", DAY, "Pattern", debit, credit, Decimal("250"))

    assert txn.entries[0].account_id == debit
    assert txn.entries[0].entry_type == EntryType.DEBIT
    assert txn.entries[1].account_id == credit
    assert txn.entries[1].entry_type == EntryType.CREDIT
    assert txn.total_debits() == Decimal("250")


def test_pattern_rejects_non_positive_amount():
    with pytest.raises(ValidationError):
        builder.create_expense_payment("T1", DAY, "Zero", "rent", "cash", Decimal("0"))

"""Fluent transaction construction and common posting patterns."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerkit.domain.entities import Entry, EntryType, Transaction, exact_sum


class TransactionBuilder:
    """Assemble a transaction entry by entry.

    Example:
        txn = (
            TransactionBuilder("T1", date(2024, 1, 1), "Owner investment")
            .debit("1000", Decimal("50000"))
            .credit("3000", Decimal("50000"))
            .build()
        )
    """

    def __init__(self, transaction_id: str, txn_date: date, description: str):
        self._id = transaction_id
        self._date = txn_date
        self._description = description
        self._reference: Optional[str] = None
        self._metadata: dict[str, str] = {}
        self._entries: list[Entry] = []

    def reference(self, reference: str) -> "TransactionBuilder":
        self._reference = reference
        return self

    def metadata(self, key: str, value: str) -> "TransactionBuilder":
        self._metadata[key] = value
        return self

    def debit(
        self, account_id: str, amount: Decimal, description: Optional[str] = None
    ) -> "TransactionBuilder":
        return self.entry(Entry(account_id, EntryType.DEBIT, amount, description))

    def credit(
        self, account_id: str, amount: Decimal, description: Optional[str] = None
    ) -> "TransactionBuilder":
        return self.entry(Entry(account_id, EntryType.CREDIT, amount, description))

    def entry(self, entry: Entry) -> "TransactionBuilder":
        self._entries.append(entry)
        return self

    def build(self) -> Transaction:
        """Create the transaction, checking the double-entry invariants.

        Raises:
            ValidationError: If the entries do not form a valid transaction
        """
        txn = Transaction(
            id=self._id,
            date=self._date,
            entries=tuple(self._entries),
            description=self._description,
            reference=self._reference,
            metadata=dict(self._metadata),
        )
        txn.validate()
        return txn


def create_expense_payment(
    transaction_id: str,
    txn_date: date,
    description: str,
    expense_account_id: str,
    cash_account_id: str,
    amount: Decimal,
) -> Transaction:
    """Debit an expense, credit cash."""
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(expense_account_id, amount)
        .credit(cash_account_id, amount)
        .build()
    )


def create_sales_transaction(
    transaction_id: str,
    txn_date: date,
    description: str,
    cash_or_receivables_account_id: str,
    revenue_account_id: str,
    amount: Decimal,
) -> Transaction:
    """Debit cash or receivables, credit revenue."""
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(cash_or_receivables_account_id, amount)
        .credit(revenue_account_id, amount)
        .build()
    )


def create_asset_purchase(
    transaction_id: str,
    txn_date: date,
    description: str,
    asset_account_id: str,
    cash_or_payables_account_id: str,
    amount: Decimal,
) -> Transaction:
    """Debit an asset, credit cash or payables."""
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(asset_account_id, amount)
        .credit(cash_or_payables_account_id, amount)
        .build()
    )


def create_invoice_with_gst(
    transaction_id: str,
    txn_date: date,
    description: str,
    receivables_account_id: str,
    revenue_account_id: str,
    gst_payable_account_id: str,
    base_amount: Decimal,
    gst_amount: Decimal,
) -> Transaction:
    """Invoice a customer: receivable for the gross total, revenue and GST owed."""
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(receivables_account_id, exact_sum((base_amount, gst_amount)), "Total including GST")
        .credit(revenue_account_id, base_amount, "Revenue amount")
        .credit(gst_payable_account_id, gst_amount, "GST payable")
        .build()
    )


def create_bill_payment_with_gst(
    transaction_id: str,
    txn_date: date,
    description: str,
    expense_account_id: str,
    gst_recoverable_account_id: str,
    cash_or_payables_account_id: str,
    base_amount: Decimal,
    gst_amount: Decimal,
) -> Transaction:
    """Pay a supplier bill, splitting the expense from recoverable GST."""
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(expense_account_id, base_amount, "Expense amount")
        .debit(gst_recoverable_account_id, gst_amount, "GST recoverable")
        .credit(cash_or_payables_account_id, exact_sum((base_amount, gst_amount)), "Total payment")
        .build()
    )


def create_loan_received(
    transaction_id: str,
    txn_date: date,
    description: str,
    cash_account_id: str,
    loan_payable_account_id: str,
    amount: Decimal,
) -> Transaction:
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(cash_account_id, amount, "Cash received from loan")
        .credit(loan_payable_account_id, amount, "Loan payable")
        .build()
    )


def create_owner_investment(
    transaction_id: str,
    txn_date: date,
    description: str,
    cash_account_id: str,
    equity_account_id: str,
    amount: Decimal,
) -> Transaction:
    return (
        TransactionBuilder(transaction_id, txn_date, description)
        .debit(cash_account_id, amount, "Cash invested by owner")
        .credit(equity_account_id, amount, "Owner's equity contribution")
        .build()
    )

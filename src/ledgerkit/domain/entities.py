"""Domain model entities for ledgerkit.

These are pure data classes representing bookkeeping concepts, independent of
the storage schema. Entities are immutable: operations that change an account
balance return a new ``Account`` which the caller persists.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date, UTC
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    Rounded,
    localcontext,
)
from enum import Enum
from typing import Iterable, Optional

from ledgerkit.domain.errors import ValidationError

ZERO = Decimal("0")

# Additions and subtractions are never rounded in this context; anything that
# would round raises instead.
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact, Rounded],
)


def exact_context():
    """Context manager running ledger arithmetic without rounding."""
    return localcontext(EXACT_CONTEXT)


def exact_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Sum amounts exactly, whatever their magnitude."""
    with exact_context():
        return sum(amounts, ZERO)


def utcnow() -> datetime:
    """Return the current UTC timestamp."""
    return datetime.now(UTC)


class EntryType(str, Enum):
    """Side of a double-entry posting."""

    DEBIT = "debit"
    CREDIT = "credit"

    def flipped(self) -> "EntryType":
        """Return the opposite side, used to reverse a posting."""
        return EntryType.CREDIT if self is EntryType.DEBIT else EntryType.DEBIT


class AccountType(str, Enum):
    """Account classification following standard accounting principles."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def normal_balance(self) -> EntryType:
        """Entry type that increases an account of this type."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return EntryType.DEBIT
        return EntryType.CREDIT


def signed_amount(normal_side: EntryType, entry_type: EntryType, amount: Decimal) -> Decimal:
    """Apply the balance-update rule to a single posting.

    A posting on the account's normal side increases the balance, a posting
    on the opposite side decreases it. Posting, reversal and historical
    replay all go through this function.

    Args:
        normal_side: Normal balance side of the affected account
        entry_type: Side of the posting
        amount: Positive posting amount

    Returns:
        Signed change to the account balance
    """
    return amount if entry_type == normal_side else amount.copy_negate()


@dataclass(frozen=True)
class Account:
    """Ledger account with a running balance."""

    id: str
    name: str
    account_type: AccountType
    parent_id: Optional[str] = None
    balance: Decimal = ZERO
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def normal_balance(self) -> EntryType:
        return self.account_type.normal_balance

    def apply_entry(self, entry_type: EntryType, amount: Decimal) -> "Account":
        """Return a copy of the account with one posting applied."""
        return replace(
            self,
            balance=exact_sum((self.balance, signed_amount(self.normal_balance, entry_type, amount))),
            updated_at=utcnow(),
        )


@dataclass(frozen=True)
class Entry:
    """Single debit or credit line of a transaction."""

    account_id: str
    entry_type: EntryType
    amount: Decimal
    description: Optional[str] = None

    @classmethod
    def debit(cls, account_id: str, amount: Decimal, description: Optional[str] = None) -> "Entry":
        return cls(account_id, EntryType.DEBIT, amount, description)

    @classmethod
    def credit(cls, account_id: str, amount: Decimal, description: Optional[str] = None) -> "Entry":
        return cls(account_id, EntryType.CREDIT, amount, description)

    def reversed(self) -> "Entry":
        """Return the entry with its side flipped."""
        return replace(self, entry_type=self.entry_type.flipped())


@dataclass(frozen=True)
class Transaction:
    """Balanced set of entries posted on a single date."""

    id: str
    date: date
    entries: tuple[Entry, ...]
    description: str
    reference: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        # Accept any sequence of entries but always store an ordered tuple
        object.__setattr__(self, "entries", tuple(self.entries))

    def total_debits(self) -> Decimal:
        return exact_sum(e.amount for e in self.entries if e.entry_type == EntryType.DEBIT)

    def total_credits(self) -> Decimal:
        return exact_sum(e.amount for e in self.entries if e.entry_type == EntryType.CREDIT)

    def is_balanced(self) -> bool:
        """Check that debits equal credits exactly."""
        return self.total_debits() == self.total_credits()

    def account_ids(self) -> list[str]:
        """Distinct account IDs referenced by the entries, in entry order."""
        return list(dict.fromkeys(e.account_id for e in self.entries))

    def affects(self, account_id: str) -> bool:
        return any(e.account_id == account_id for e in self.entries)

    def validate(self) -> None:
        """Check the double-entry invariants.

        Raises:
            ValidationError: If the transaction has fewer than two entries,
                is unbalanced, or has a non-positive amount
        """
        if not self.entries:
            raise ValidationError("Transaction must have at least one entry")

        if len(self.entries) < 2:
            raise ValidationError(
                "Transaction must have at least two entries for double-entry bookkeeping"
            )

        if not self.is_balanced():
            raise ValidationError(
                f"Transaction is not balanced: debits = {self.total_debits()}, "
                f"credits = {self.total_credits()}"
            )

        for entry in self.entries:
            if entry.amount <= ZERO:
                raise ValidationError("Entry amounts must be positive")


@dataclass(frozen=True)
class AccountBalance:
    """Account balance placed on its debit or credit column."""

    account: Account
    debit_balance: Optional[Decimal] = None
    credit_balance: Optional[Decimal] = None

    @property
    def balance_amount(self) -> Decimal:
        """Column amount regardless of side."""
        if self.debit_balance is not None:
            return self.debit_balance
        if self.credit_balance is not None:
            return self.credit_balance
        return ZERO

    @property
    def normal_amount(self) -> Decimal:
        """Balance signed relative to the account's normal side."""
        debit = self.debit_balance or ZERO
        credit = self.credit_balance or ZERO
        if self.account.normal_balance == EntryType.DEBIT:
            return exact_sum((debit, credit.copy_negate()))
        return exact_sum((credit, debit.copy_negate()))


@dataclass(frozen=True)
class TrialBalance:
    """Snapshot of every account balance at a point in time."""

    as_of_date: date
    balances: dict[str, AccountBalance]
    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class BalanceSheet:
    """Assets, liabilities and equity as of a date."""

    as_of_date: date
    assets: tuple[AccountBalance, ...]
    liabilities: tuple[AccountBalance, ...]
    equity: tuple[AccountBalance, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class IncomeStatement:
    """Revenue and expenses for a period."""

    start_date: date
    end_date: date
    revenue: tuple[AccountBalance, ...]
    expenses: tuple[AccountBalance, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


class CashFlowCategory(str, Enum):
    """Cash flow statement section."""

    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


@dataclass(frozen=True)
class CashFlowItem:
    """Single transaction placed in a cash flow section."""

    transaction_id: str
    description: str
    amount: Decimal
    category: CashFlowCategory


@dataclass(frozen=True)
class CashFlowStatement:
    """Approximate cash flow statement for a period."""

    start_date: date
    end_date: date
    operating_activities: tuple[CashFlowItem, ...]
    investing_activities: tuple[CashFlowItem, ...]
    financing_activities: tuple[CashFlowItem, ...]
    net_operating_cash_flow: Decimal
    net_investing_cash_flow: Decimal
    net_financing_cash_flow: Decimal
    net_cash_flow: Decimal


@dataclass(frozen=True)
class IntegrityReport:
    """Result of a ledger consistency audit."""

    as_of_date: date
    is_valid: bool
    issues: tuple[str, ...]
    trial_balance_total_debits: Decimal
    trial_balance_total_credits: Decimal
    balance_sheet_total_assets: Decimal
    balance_sheet_total_liabilities_equity: Decimal

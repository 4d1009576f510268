"""Shared pytest fixtures for ledgerkit tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_memory_database, create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.balance import BalanceService
from ledgerkit.domain.entities import AccountType, Entry, Transaction
from ledgerkit.domain.ledger import Ledger
from ledgerkit.domain.reports import ReportService
from ledgerkit.domain.transaction import TransactionService
from ledgerkit.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    """Undo CLI logging setup between tests."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(params=["memory", "sqlite"])
def db(request):
    """Run the test against each storage backend."""
    if request.param == "memory":
        return create_memory_database()
    return request.getfixturevalue("temp_db")


@pytest.fixture
def account_service(db):
    return AccountService(db)


@pytest.fixture
def transaction_service(db):
    return TransactionService(db)


@pytest.fixture
def balance_service(db):
    return BalanceService(db)


@pytest.fixture
def report_service(db):
    return ReportService(db)


@pytest.fixture
def ledger(db):
    return Ledger(db)


@pytest.fixture
def sample_chart(account_service):
    """Create a small chart of accounts keyed by ID."""
    specs = [
        ("cash", "Cash", AccountType.ASSET),
        ("receivable", "Accounts Receivable", AccountType.ASSET),
        ("equipment", "Equipment", AccountType.ASSET),
        ("payable", "Accounts Payable", AccountType.LIABILITY),
        ("gst_payable", "GST Payable", AccountType.LIABILITY),
        ("equity", "Owner's Equity", AccountType.EQUITY),
        ("revenue", "Sales Revenue", AccountType.INCOME),
        ("rent", "Rent Expense", AccountType.EXPENSE),
    ]
    return {
        account_id: account_service.create_account(account_id, name, account_type)
        for account_id, name, account_type in specs
    }


@pytest.fixture
def make_txn():
    """Build two-line transactions moving an amount from credit to debit."""

    def _make(
        transaction_id: str,
        txn_date: date,
        debit: str,
        credit: str,
        amount: str,
        description: str = "Test transaction",
    ) -> Transaction:
        value = Decimal(amount)
        return Transaction(
            id=transaction_id,
            date=txn_date,
            entries=(Entry.debit(debit, value), Entry.credit(credit, value)),
            description=description,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

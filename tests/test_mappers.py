"""Tests for database mappers."""

from datetime import UTC, date, datetime
from decimal import Decimal

from ledgerkit.database.mappers import (
    account_to_domain,
    entries_to_orm,
    entry_to_domain,
    transaction_to_domain,
)
from ledgerkit.database.models import (
    Account as ORMAccount,
    Entry as ORMEntry,
    Transaction as ORMTransaction,
)
from ledgerkit.domain.entities import Account, AccountType, Entry, EntryType, Transaction


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        created = datetime(2024, 1, 1, 9, 30)
        orm_account = ORMAccount(
            id="1000",
            name="Cash",
            account_type="asset",
            parent_id=None,
            balance=Decimal("10.50"),
            meta={"cash_flow_category": "operating"},
            created_at=created,
            updated_at=created,
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.id == "1000"
        assert domain_account.account_type == AccountType.ASSET
        assert domain_account.balance == Decimal("10.50")
        assert domain_account.metadata == {"cash_flow_category": "operating"}
        # Naive timestamps from SQLite come back as UTC
        assert domain_account.created_at == created.replace(tzinfo=UTC)

    def test_aware_timestamp_kept(self):
        created = datetime(2024, 1, 1, tzinfo=UTC)
        orm_account = ORMAccount(
            id="1000",
            name="Cash",
            account_type="asset",
            balance=Decimal("0"),
            meta=None,
            created_at=created,
            updated_at=created,
        )
        domain_account = account_to_domain(orm_account)

        assert domain_account.created_at is created
        assert domain_account.metadata == {}


class TestTransactionMapper:
    """Tests for Transaction and Entry mappers."""

    def test_entry_to_domain(self):
        orm_entry = ORMEntry(
            position=0, account_id="cash", entry_type="debit", amount=Decimal("5"), description="x"
        )
        assert entry_to_domain(orm_entry) == Entry.debit("cash", Decimal("5"), "x")

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction with entries to domain Transaction."""
        stamp = datetime(2024, 3, 1, 12, 0)
        orm_txn = ORMTransaction(
            id="T1",
            date=date(2024, 3, 1),
            description="Rent",
            reference="R-1",
            meta={},
            created_at=stamp,
            updated_at=stamp,
            entries=[
                ORMEntry(position=0, account_id="rent", entry_type="debit", amount=Decimal("100")),
                ORMEntry(position=1, account_id="cash", entry_type="credit", amount=Decimal("100")),
            ],
        )
        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.id == "T1"
        assert txn.reference == "R-1"
        assert txn.entries == (
            Entry.debit("rent", Decimal("100")),
            Entry.credit("cash", Decimal("100")),
        )
        assert txn.updated_at.tzinfo is UTC

    def test_entries_to_orm_records_order(self):
        rows = entries_to_orm(
            (Entry.debit("a", Decimal("1")), Entry.credit("b", Decimal("1"), "memo"))
        )

        assert [row.position for row in rows] == [0, 1]
        assert [row.entry_type for row in rows] == [EntryType.DEBIT.value, EntryType.CREDIT.value]
        assert rows[1].description == "memo"

"""Tests for AccountService."""

from dataclasses import replace
from decimal import Decimal

import pytest

from ledgerkit.domain.account import AccountService, STANDARD_CHART
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import AccountNotFoundError, DependencyError, ValidationError
from ledgerkit.domain.validators import ReferencedAccountDeletionValidator


class TestCreateAccount:
    def test_create_account(self, account_service):
        account = account_service.create_account("1000", "Cash", AccountType.ASSET)

        assert account.id == "1000"
        assert account.balance == Decimal("0")
        stored = account_service.get_account("1000")
        assert stored.name == "Cash"
        assert stored.account_type == AccountType.ASSET

    def test_create_with_metadata(self, account_service):
        account_service.create_account(
            "1000", "Cash", AccountType.ASSET, metadata={"bank": "HDFC"}
        )
        assert account_service.get_account("1000").metadata == {"bank": "HDFC"}

    def test_duplicate_id_rejected(self, account_service):
        account_service.create_account("1000", "Cash", AccountType.ASSET)
        with pytest.raises(ValidationError, match="already exists"):
            account_service.create_account("1000", "Other", AccountType.ASSET)

    def test_missing_parent_rejected(self, account_service):
        with pytest.raises(ValidationError, match="Parent account 'nope' does not exist"):
            account_service.create_account("1010", "Petty Cash", AccountType.ASSET, parent_id="nope")

    def test_blank_name_rejected(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account("1000", "", AccountType.ASSET)

    def test_list_filters_by_type(self, account_service, sample_chart):
        assets = account_service.list_accounts(AccountType.ASSET)
        assert {a.id for a in assets} == {"cash", "receivable", "equipment"}
        assert len(account_service.list_accounts()) == len(sample_chart)


class TestHierarchy:
    def test_children_and_path(self, account_service):
        account_service.create_account("1000", "Cash", AccountType.ASSET)
        account_service.create_account("1010", "Petty Cash", AccountType.ASSET, parent_id="1000")
        account_service.create_account("1011", "Office Float", AccountType.ASSET, parent_id="1010")

        assert [a.id for a in account_service.get_child_accounts("1000")] == ["1010"]
        assert [a.id for a in account_service.get_account_path("1011")] == ["1000", "1010", "1011"]

    def test_path_of_missing_account(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.get_account_path("nope")


class TestUpdateAccount:
    def test_rename(self, account_service):
        account = account_service.create_account("1000", "Cash", AccountType.ASSET)
        account_service.update_account(replace(account, name="Cash on Hand"))
        assert account_service.get_account("1000").name == "Cash on Hand"

    def test_update_missing(self, account_service):
        account = account_service.create_account("1000", "Cash", AccountType.ASSET)
        with pytest.raises(AccountNotFoundError):
            account_service.update_account(replace(account, id="2000"))

    def test_cannot_be_own_parent(self, account_service):
        account = account_service.create_account("1000", "Cash", AccountType.ASSET)
        with pytest.raises(ValidationError, match="own parent"):
            account_service.update_account(replace(account, parent_id="1000"))


class TestDeleteAccount:
    def test_delete(self, account_service):
        account_service.create_account("1000", "Cash", AccountType.ASSET)
        account_service.delete_account("1000")
        assert account_service.get_account("1000") is None

    def test_delete_missing(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.delete_account("1000")

    def test_delete_blocked_when_referenced(self, db, sample_chart, transaction_service, make_txn):
        from datetime import date

        transaction_service.record_transaction(
            make_txn("T1", date(2024, 1, 1), "cash", "equity", "100")
        )
        service = AccountService(db, ReferencedAccountDeletionValidator(db))

        with pytest.raises(DependencyError):
            service.delete_account("cash")
        service.delete_account("rent")
        assert service.get_account("cash") is not None


class TestStandardChart:
    def test_setup_standard_chart(self, account_service):
        chart = account_service.setup_standard_chart()

        assert set(chart) == set(STANDARD_CHART)
        assert chart["cash"].id == "1000"
        assert chart["owners_equity"].name == "Owner's Equity"
        assert chart["utilities_expense"].account_type == AccountType.EXPENSE
        assert len(account_service.list_accounts()) == 12

    def test_setup_is_repeatable(self, account_service):
        account_service.setup_standard_chart()
        chart = account_service.setup_standard_chart()
        assert len(chart) == 12
        assert len(account_service.list_accounts()) == 12

"""Tests for individual CLI commands."""

from decimal import Decimal

import pytest

from ledgerkit.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _invoke


@pytest.fixture
def basic_accounts(invoke):
    for args in (
        ("cash", "Cash", "--type", "asset"),
        ("equity", "Owner Capital", "--type", "equity"),
        ("rent", "Rent", "--type", "expense"),
    ):
        result = invoke("account", "create", *args)
        assert result.exit_code == 0, result.output


class TestAccountCommands:
    def test_create_and_list(self, invoke, basic_accounts):
        result = invoke("account", "list")
        assert result.exit_code == 0
        assert "cash" in result.output
        assert "Owner Capital" in result.output

        result = invoke("account", "list", "--type", "expense")
        assert "rent" in result.output
        assert "cash" not in result.output

    def test_create_output(self, invoke):
        result = invoke("account", "create", "1000", "Cash", "--type", "Asset")
        assert result.exit_code == 0
        assert "Created asset account 'Cash' (ID: 1000)" in result.output

    def test_create_with_parent(self, invoke, basic_accounts, temp_db):
        result = invoke("account", "create", "petty", "Petty Cash", "--type", "asset", "--parent", "Cash")
        assert result.exit_code == 0
        assert temp_db.get_account("petty").parent_id == "cash"

        result = invoke("account", "show", "petty")
        assert "Cash > Petty Cash" in result.output

    def test_duplicate_account_fails(self, invoke, basic_accounts):
        result = invoke("account", "create", "cash", "Cash again", "--type", "asset")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_list_empty(self, invoke):
        result = invoke("account", "list")
        assert "No accounts found." in result.output

    def test_show_unknown_account(self, invoke):
        result = invoke("account", "show", "nope")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_delete(self, invoke, basic_accounts, temp_db):
        result = invoke("account", "delete", "rent", "--yes")
        assert result.exit_code == 0
        assert "Deleted account 'Rent'" in result.output
        assert temp_db.get_account("rent") is None

    def test_delete_cancelled(self, invoke, basic_accounts, temp_db):
        result = invoke("account", "delete", "rent", input="n\n")
        assert "Deletion cancelled." in result.output
        assert temp_db.get_account("rent") is not None

    def test_delete_referenced_account_fails(self, invoke, basic_accounts, temp_db):
        invoke(
            "transaction", "record", "T1", "--date", "2024-01-01", "--description", "Capital",
            "--debit", "cash=10", "--credit", "equity=10",
        )
        result = invoke("account", "delete", "cash", "--yes")
        assert result.exit_code == 1
        assert temp_db.get_account("cash") is not None

    def test_init_chart_is_idempotent(self, invoke, temp_db):
        assert invoke("account", "init-chart").exit_code == 0
        result = invoke("account", "init-chart")
        assert result.exit_code == 0
        assert len(temp_db.list_accounts()) == 12


class TestTransactionCommands:
    def test_record_and_show(self, invoke, basic_accounts, temp_db):
        result = invoke(
            "transaction", "record", "T1", "--date", "2024-02-01", "--description", "Capital",
            "--debit", "cash=1,000.50", "--credit", "Owner Capital=1000.50", "--reference", "DEP-1",
        )
        assert result.exit_code == 0, result.output
        assert temp_db.get_account("cash").balance == Decimal("1000.50")

        result = invoke("transaction", "show", "T1")
        assert result.exit_code == 0
        assert "DEP-1" in result.output
        assert "1,000.50" in result.output

    def test_unbalanced_rejected(self, invoke, basic_accounts, temp_db):
        result = invoke(
            "transaction", "record", "T1", "--description", "Broken",
            "--debit", "cash=10", "--credit", "equity=9",
        )
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert temp_db.get_transaction("T1") is None
        assert temp_db.get_account("cash").balance == 0

    def test_bad_entry_spec(self, invoke, basic_accounts):
        result = invoke("transaction", "record", "T1", "--description", "x", "--debit", "cash")
        assert result.exit_code == 1
        assert "ACCOUNT=AMOUNT" in result.output

    def test_update_description_only(self, invoke, basic_accounts, temp_db):
        invoke(
            "transaction", "record", "T1", "--date", "2024-01-01", "--description", "Capital",
            "--debit", "cash=10", "--credit", "equity=10",
        )
        result = invoke("transaction", "update", "T1", "--description", "Opening capital")
        assert result.exit_code == 0
        assert temp_db.get_transaction("T1").description == "Opening capital"
        assert temp_db.get_account("cash").balance == 10

    def test_update_nothing(self, invoke, basic_accounts):
        invoke(
            "transaction", "record", "T1", "--description", "Capital",
            "--debit", "cash=10", "--credit", "equity=10",
        )
        result = invoke("transaction", "update", "T1")
        assert "Nothing to update." in result.output

    def test_list_filters(self, invoke, basic_accounts):
        invoke(
            "transaction", "record", "T1", "--date", "2024-01-01", "--description", "Capital",
            "--debit", "cash=100", "--credit", "equity=100",
        )
        invoke(
            "transaction", "record", "T2", "--date", "2024-03-01", "--description", "March rent",
            "--debit", "rent=40", "--credit", "cash=40",
        )

        result = invoke("transaction", "list", "--start-date", "2024-02-01")
        assert "T2" in result.output
        assert "T1" not in result.output

        result = invoke("transaction", "list", "--account", "equity")
        assert "T1" in result.output
        assert "T2" not in result.output

        result = invoke("transaction", "list", "--end-date", "2023-12-31")
        assert "No transactions found." in result.output

    def test_delete_unknown(self, invoke):
        result = invoke("transaction", "delete", "T404", "--yes")
        assert result.exit_code == 1


class TestReportCommands:
    def test_validate_empty_ledger(self, invoke):
        result = invoke("report", "validate")
        assert result.exit_code == 0
        assert "Ledger is consistent." in result.output

    def test_validate_reports_drift(self, invoke, basic_accounts, temp_db):
        invoke(
            "transaction", "record", "T1", "--date", "2024-01-01", "--description", "Capital",
            "--debit", "cash=100", "--credit", "equity=100",
        )
        cash = temp_db.get_account("cash")
        temp_db.update_account(cash.apply_entry(cash.normal_balance, Decimal("1")))

        result = invoke("report", "validate", "--as-of", "2024-01-31", "--check-drift")
        assert result.exit_code == 1
        assert "drift = 1" in result.output

    def test_period_flags_conflict(self, invoke):
        result = invoke("report", "income-statement", "--this-month", "--last-year")
        assert result.exit_code == 1
        assert "Only one period option" in result.output

    def test_inverted_period_rejected(self, invoke):
        result = invoke(
            "report", "cash-flow", "--start-date", "2024-02-01", "--end-date", "2024-01-01"
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_cash_flow(self, invoke, basic_accounts):
        invoke(
            "transaction", "record", "T1", "--date", "2024-01-01", "--description", "Capital",
            "--debit", "cash=100", "--credit", "equity=100",
        )
        result = invoke(
            "report", "cash-flow", "--start-date", "2024-01-01", "--end-date", "2024-01-31"
        )
        assert result.exit_code == 0
        assert "Financing" in result.output
        assert "100.00" in result.output


class TestTaxCommands:
    def test_gst_intra_state(self, cli_runner):
        result = cli_runner.invoke(cli, ["tax", "gst", "10000"])
        assert result.exit_code == 0
        assert "CGST (9%)" in result.output
        assert "11,800.00" in result.output

    def test_gst_inter_state_reverse(self, cli_runner):
        result = cli_runner.invoke(cli, ["tax", "gst", "1050", "--category", "reduced", "--inter-state", "--reverse"])
        assert result.exit_code == 0
        assert "IGST (5%)" in result.output
        assert "1,000.00" in result.output

    def test_gst_bad_amount(self, cli_runner):
        result = cli_runner.invoke(cli, ["tax", "gst", "lots"])
        assert result.exit_code == 1
        assert "Error:" in result.output


def test_log_level_option(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--log-level", "debug", "--db-path", temp_db.database_path, "account", "list"],
    )
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, ["--log-level", "chatty", "account", "list"])
    assert result.exit_code == 2

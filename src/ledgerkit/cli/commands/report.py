"""Financial report commands."""

from datetime import date
from decimal import Decimal

import click

from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import AccountBalance, CashFlowItem, exact_sum
from ledgerkit.domain.errors import DomainError

WIDTH = 72


def _money(amount: Decimal | None) -> str:
    return f"{amount:,.2f}" if amount is not None else ""


def _echo_section(title: str, rows: tuple[AccountBalance, ...], total: Decimal) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * WIDTH)
    for row in rows:
        click.echo(f"  {row.account.id:10s} {row.account.name:35s} {row.normal_amount:>20,.2f}")
    click.echo(f"  {'Total ' + title:46s} {total:>20,.2f}")


def _echo_cash_flow_section(title: str, items: tuple[CashFlowItem, ...], total: Decimal) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * WIDTH)
    for item in items:
        click.echo(f"  {item.transaction_id:10s} {item.description[:35]:35s} {item.amount:>20,.2f}")
    click.echo(f"  {'Net ' + title.lower():46s} {total:>20,.2f}")


def _as_of_or_today(ctx, as_of: str | None) -> date:
    return parse_date_or_exit(ctx, as_of, "as-of date") or date.today()


def _period_or_exit(ctx, start_date, end_date, periods) -> tuple[date, date]:
    """Resolve a report period, defaulting to January 1 of this year through today."""
    today = date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        periods=periods,
        default_range=(today.replace(month=1, day=1), today),
    )
    return start or today.replace(month=1, day=1), end or today


@click.group()
def report_group():
    """Generate financial reports."""
    pass


@report_group.command("trial-balance")
@click.option("--as-of", help="Report date (YYYY-MM-DD or relative; defaults to today)")
@click.pass_context
def trial_balance(ctx, as_of: str | None) -> None:
    """Show every account's debit or credit balance."""
    ledger = ctx.obj["ledger"]
    as_of_date = _as_of_or_today(ctx, as_of)

    try:
        tb = ledger.get_trial_balance(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nTrial Balance as of {as_of_date.isoformat()}")
    click.echo("=" * WIDTH)
    click.echo(f"{'Account':40s} {'Debit':>15s} {'Credit':>15s}")
    click.echo("-" * WIDTH)
    for row in tb.balances.values():
        label = f"{row.account.id} {row.account.name}"
        click.echo(f"{label[:40]:40s} {_money(row.debit_balance):>15s} {_money(row.credit_balance):>15s}")
    click.echo("-" * WIDTH)
    click.echo(f"{'Total':40s} {tb.total_debits:>15,.2f} {tb.total_credits:>15,.2f}")
    click.echo("Balanced" if tb.is_balanced else "NOT BALANCED")


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (YYYY-MM-DD or relative; defaults to today)")
@click.pass_context
def balance_sheet(ctx, as_of: str | None) -> None:
    """Show assets, liabilities and equity."""
    ledger = ctx.obj["ledger"]
    as_of_date = _as_of_or_today(ctx, as_of)

    try:
        sheet = ledger.generate_balance_sheet(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBalance Sheet as of {as_of_date.isoformat()}")
    click.echo("=" * WIDTH)
    _echo_section("Assets", sheet.assets, sheet.total_assets)
    _echo_section("Liabilities", sheet.liabilities, sheet.total_liabilities)
    _echo_section("Equity", sheet.equity, sheet.total_equity)
    click.echo("=" * WIDTH)
    click.echo(
        f"{'Total liabilities and equity':48s} "
        f"{exact_sum((sheet.total_liabilities, sheet.total_equity)):>20,.2f}"
    )
    click.echo("Balanced" if sheet.is_balanced else "NOT BALANCED")


@report_group.command("income-statement")
@click.option("--start-date", help="Period start (defaults to January 1 of this year)")
@click.option("--end-date", help="Period end (defaults to today)")
@period_options
@click.pass_context
def income_statement(ctx, start_date: str | None, end_date: str | None, periods: tuple[str, ...]) -> None:
    """Show revenue, expenses and net income for a period."""
    ledger = ctx.obj["ledger"]
    start, end = _period_or_exit(ctx, start_date, end_date, periods)

    try:
        statement = ledger.generate_income_statement(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nIncome Statement {start.isoformat()} to {end.isoformat()}")
    click.echo("=" * WIDTH)
    _echo_section("Revenue", statement.revenue, statement.total_revenue)
    _echo_section("Expenses", statement.expenses, statement.total_expenses)
    click.echo("=" * WIDTH)
    click.echo(f"{'Net income':48s} {statement.net_income:>20,.2f}")


@report_group.command("cash-flow")
@click.option("--start-date", help="Period start (defaults to January 1 of this year)")
@click.option("--end-date", help="Period end (defaults to today)")
@period_options
@click.pass_context
def cash_flow(ctx, start_date: str | None, end_date: str | None, periods: tuple[str, ...]) -> None:
    """Show an approximate cash flow statement for a period.

    Transactions are grouped as operating, investing or financing from the
    accounts they touch, or from a "cash_flow_category" metadata value.
    """
    ledger = ctx.obj["ledger"]
    start, end = _period_or_exit(ctx, start_date, end_date, periods)

    try:
        statement = ledger.generate_cash_flow(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nCash Flow {start.isoformat()} to {end.isoformat()}")
    click.echo("=" * WIDTH)
    _echo_cash_flow_section("Operating", statement.operating_activities, statement.net_operating_cash_flow)
    _echo_cash_flow_section("Investing", statement.investing_activities, statement.net_investing_cash_flow)
    _echo_cash_flow_section("Financing", statement.financing_activities, statement.net_financing_cash_flow)
    click.echo("=" * WIDTH)
    click.echo(f"{'Net cash flow':48s} {statement.net_cash_flow:>20,.2f}")


@report_group.command("validate")
@click.option("--as-of", help="Check date (YYYY-MM-DD or relative; defaults to today)")
@click.option("--check-drift", is_flag=True, help="Also compare live balances with their history")
@click.pass_context
def validate(ctx, as_of: str | None, check_drift: bool) -> None:
    """Check that the books balance.

    Exits with status 1 if any check fails.
    """
    ledger = ctx.obj["ledger"]
    as_of_date = _as_of_or_today(ctx, as_of)

    try:
        result = ledger.validate_integrity(as_of_date, check_drift=check_drift)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Trial balance:  debits {result.trial_balance_total_debits:,.2f}, "
               f"credits {result.trial_balance_total_credits:,.2f}")
    click.echo(f"Balance sheet:  assets {result.balance_sheet_total_assets:,.2f}, "
               f"liabilities + equity {result.balance_sheet_total_liabilities_equity:,.2f}")

    if result.is_valid:
        click.echo("Ledger is consistent.")
        return

    for issue in result.issues:
        click.echo(f"Issue: {issue}", err=True)
    ctx.exit(1)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")

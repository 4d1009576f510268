"""Account management commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import parse_date_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("account_id", metavar="ID")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    required=True,
    help="Account type",
)
@click.option("--parent", help="Parent account name or ID")
@click.pass_context
def create_account(ctx, account_id: str, name: str, account_type: str, parent: str | None):
    """Create a new account with a zero balance.

    Examples:
        ledgerkit account create 1000 "Cash" --type asset
        ledgerkit account create 1010 "Petty Cash" --type asset --parent 1000
    """
    ledger = ctx.obj["ledger"]

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, ledger.accounts, parent)

    try:
        account = ledger.create_account(
            account_id, name, AccountType(account_type.lower()), parent_id=parent_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {account.account_type.value} account '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Only show accounts of this type",
)
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List accounts with their current balances."""
    ledger = ctx.obj["ledger"]

    if account_type is not None:
        accounts = ledger.list_accounts_by_type(AccountType(account_type.lower()))
    else:
        accounts = ledger.list_accounts()

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 78)
    for acc in accounts:
        parent = f" (parent: {acc.parent_id})" if acc.parent_id else ""
        click.echo(
            f"{acc.id:10s} | {acc.name:30s} | {acc.account_type.value:9s} | "
            f"{acc.balance:>15,.2f}{parent}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Show the balance as of this date (YYYY-MM-DD or relative)")
@click.pass_context
def show_account(ctx, account: str, as_of: str | None):
    """Show an account and its balance.

    ACCOUNT can be an account name or ID.
    """
    ledger = ctx.obj["ledger"]
    account_id = resolve_account_or_exit(ctx, ledger.accounts, account)
    as_of_date = parse_date_or_exit(ctx, as_of, "as-of date")

    try:
        acc = ledger.accounts.require_account(account_id)
        balance = ledger.get_account_balance(account_id, as_of_date)
        path = ledger.accounts.get_account_path(account_id)
        transaction_count = ledger.db.get_account_transaction_count(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"ID:             {acc.id}")
    click.echo(f"Name:           {acc.name}")
    click.echo(f"Type:           {acc.account_type.value}")
    click.echo(f"Normal balance: {acc.normal_balance.value}")
    if len(path) > 1:
        click.echo(f"Path:           {' > '.join(a.name for a in path)}")
    click.echo(f"Transactions:   {transaction_count}")
    label = f"Balance ({as_of_date.isoformat()})" if as_of_date else "Balance"
    click.echo(f"{label + ':':16s}{balance:,.2f}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transaction references it. Use
    'transaction delete' to remove them first.
    """
    ledger = ctx.obj["ledger"]
    account_id = resolve_account_or_exit(ctx, ledger.accounts, account)
    account_obj = ledger.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("init-chart")
@click.pass_context
def init_chart(ctx) -> None:
    """Create the standard small-business chart of accounts.

    Existing accounts with the same IDs are kept as they are.
    """
    ledger = ctx.obj["ledger"]

    try:
        chart = ledger.setup_standard_chart_of_accounts()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Chart of accounts ready ({len(chart)} accounts):")
    for acc in chart.values():
        click.echo(f"  {acc.id:6s} {acc.name:25s} {acc.account_type.value}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

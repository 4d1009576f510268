"""Transaction management commands."""

from dataclasses import replace

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import parse_date_or_exit, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import Entry, EntryType, Transaction
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_entry_spec


@click.group()
def transaction_group():
    """Record and manage transactions."""
    pass


def _parse_entries(ctx, ledger, debits: tuple[str, ...], credits: tuple[str, ...]) -> list[Entry]:
    """Turn repeated --debit/--credit ACCOUNT=AMOUNT options into entries."""
    entries = []
    for entry_type, specs in ((EntryType.DEBIT, debits), (EntryType.CREDIT, credits)):
        for spec in specs:
            try:
                account, amount = parse_entry_spec(spec)
            except ValueError as e:
                handle_domain_error(ctx, e)
            account_id = resolve_account_or_exit(ctx, ledger.accounts, account)
            entries.append(Entry(account_id, entry_type, amount))
    return entries


def _echo_transaction(txn: Transaction) -> None:
    click.echo(f"ID:          {txn.id}")
    click.echo(f"Date:        {txn.date.isoformat()}")
    click.echo(f"Description: {txn.description}")
    if txn.reference:
        click.echo(f"Reference:   {txn.reference}")
    click.echo("-" * 60)
    for entry in txn.entries:
        debit = f"{entry.amount:,.2f}" if entry.entry_type == EntryType.DEBIT else ""
        credit = f"{entry.amount:,.2f}" if entry.entry_type == EntryType.CREDIT else ""
        click.echo(f"{entry.account_id:12s} | {debit:>15s} | {credit:>15s}")
    click.echo("-" * 60)
    click.echo(f"{'Total':12s} | {txn.total_debits():>15,.2f} | {txn.total_credits():>15,.2f}")


@transaction_group.command("record")
@click.argument("transaction_id", metavar="ID")
@click.option("--date", "txn_date", default="today", help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--description", required=True, help="Transaction description")
@click.option("--debit", "debits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Debit entry (repeatable)")
@click.option("--credit", "credits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Credit entry (repeatable)")
@click.option("--reference", help="External reference (invoice number, cheque, ...)")
@click.pass_context
def record_transaction(
    ctx,
    transaction_id: str,
    txn_date: str,
    description: str,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
    reference: str | None,
) -> None:
    """Record a balanced transaction.

    Each --debit and --credit takes ACCOUNT=AMOUNT, where ACCOUNT is an
    account name or ID. Debits must equal credits.

    Examples:
        ledgerkit transaction record T1 --description "Owner investment" \\
            --debit 1000=50000 --credit 3000=50000
        ledgerkit transaction record T2 --date 2024-01-31 --description "Rent" \\
            --debit "Rent Expense=1200" --credit Cash=1200
    """
    ledger = ctx.obj["ledger"]
    parsed_date = parse_date_or_exit(ctx, txn_date, "date")
    entries = _parse_entries(ctx, ledger, debits, credits)

    try:
        txn = ledger.record_transaction(
            Transaction(
                id=transaction_id,
                date=parsed_date,
                entries=entries,
                description=description,
                reference=reference,
            )
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded transaction {txn.id} ({txn.total_debits():,.2f})")


@transaction_group.command("update")
@click.argument("transaction_id", metavar="ID")
@click.option("--date", "txn_date", help="New transaction date")
@click.option("--description", help="New description")
@click.option("--reference", help="New reference")
@click.option("--debit", "debits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Replacement debit entry (repeatable)")
@click.option("--credit", "credits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Replacement credit entry (repeatable)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    txn_date: str | None,
    description: str | None,
    reference: str | None,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
) -> None:
    """Update a transaction.

    Only the given fields change. Passing any --debit or --credit replaces
    all entries, so give the complete new set.

    Examples:
        ledgerkit transaction update T2 --description "January rent"
        ledgerkit transaction update T2 --debit 6000=1300 --credit 1000=1300
    """
    ledger = ctx.obj["ledger"]

    try:
        existing = ledger.transactions.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    changes = {}
    if txn_date is not None:
        changes["date"] = parse_date_or_exit(ctx, txn_date, "date")
    if description is not None:
        changes["description"] = description
    if reference is not None:
        changes["reference"] = reference or None
    if debits or credits:
        changes["entries"] = _parse_entries(ctx, ledger, debits, credits)

    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        ledger.update_transaction(replace(existing, **changes))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("show")
@click.argument("transaction_id", metavar="ID")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show a transaction and its entries."""
    ledger = ctx.obj["ledger"]

    try:
        txn = ledger.transactions.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _echo_transaction(txn)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--account", help="Only transactions touching this account (name or ID)")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, account: str | None):
    """List transactions, oldest first."""
    ledger = ctx.obj["ledger"]
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    if account is not None:
        account_id = resolve_account_or_exit(ctx, ledger.accounts, account)
        transactions = ledger.get_account_transactions(account_id, start, end)
    else:
        transactions = ledger.get_transactions(start, end)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'Date':10s} | {'ID':12s} | {'Amount':>15s} | Description")
    click.echo("-" * 78)
    for txn in transactions:
        click.echo(
            f"{txn.date.isoformat():10s} | {txn.id:12s} | {txn.total_debits():>15,.2f} | "
            f"{txn.description}"
        )
    click.echo(f"\n{len(transactions)} transaction(s)")


@transaction_group.command("delete")
@click.argument("transaction_id", metavar="ID")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction and reverse its effect on balances."""
    ledger = ctx.obj["ledger"]

    try:
        txn = ledger.transactions.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes:
        _echo_transaction(txn)
        if not click.confirm("Are you sure you want to delete this transaction?"):
            click.echo("Deletion cancelled.")
            return

    try:
        ledger.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")

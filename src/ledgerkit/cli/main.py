"""Main CLI entry point."""

import click

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.errors import StorageError
from ledgerkit.domain.ledger import Ledger
from ledgerkit.domain.validators import (
    DefaultTransactionValidator,
    ReferencedAccountDeletionValidator,
    StrictAccountValidator,
    StrictTransactionValidator,
)
from ledgerkit.logging_config import configure_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import account, report, tax, transaction

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERKIT_LOG_LEVEL",
    help="Logging verbosity (written to stderr)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Enforce account ID, name and description format rules",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, strict: bool):
    """Ledgerkit - Double-entry bookkeeping ledger.

    Record balanced transactions against a chart of accounts and produce
    trial balances, balance sheets, income and cash flow statements.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and ctx.invoked_subcommand != "tax":
        try:
            db = create_sqlite_database(database_path=db_path)
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        if strict:
            account_validator = ReferencedAccountDeletionValidator(db, StrictAccountValidator())
            transaction_validator = StrictTransactionValidator()
        else:
            account_validator = ReferencedAccountDeletionValidator(db)
            transaction_validator = DefaultTransactionValidator()

        ctx.obj["db"] = db
        ctx.obj["ledger"] = Ledger(
            db,
            account_validator=account_validator,
            transaction_validator=transaction_validator,
        )


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)
tax.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

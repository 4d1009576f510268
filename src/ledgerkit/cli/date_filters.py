"""CLI helpers for date options."""

import functools
from datetime import date
from typing import Callable

import click

from ledgerkit.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func: Callable) -> Callable:
    """Add --this-month, --last-year, ... flags to a command.

    The flags arrive in the command as a single ``periods`` keyword holding
    the names of the flags that were given.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        periods = tuple(p for p in PERIODS if kwargs.pop(p.replace("-", "_"), False))
        return func(*args, periods=periods, **kwargs)

    for period in reversed(PERIODS):
        wrapper = click.option(
            f"--{period}", is_flag=True, help=f"Use {period.replace('-', ' ')} as the date range"
        )(wrapper)
    return wrapper


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str) -> date | None:
    """Parse an optional date option, exiting with a CLI error if invalid."""
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    periods: tuple[str, ...] = (),
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from a period flag or explicit dates."""
    if len(periods) > 1:
        flags = ", ".join(f"--{p}" for p in PERIODS)
        click.echo(
            f"Error: Only one period option ({flags}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if periods and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if periods:
        return get_date_range(periods[0])

    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")
    if start is None and end is None and default_range is not None:
        return default_range
    return start, end

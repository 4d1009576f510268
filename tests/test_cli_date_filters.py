"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from ledgerkit.cli.date_filters import period_options, resolve_cli_date_range
from ledgerkit.utils.date_parser import get_date_range, parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            periods=("this-month", "last-month"),
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            periods=("this-month",),
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_date_range_returns_period_range():
    expected_start, expected_end = get_date_range("this-month")
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        periods=("this-month",),
    )

    assert start == expected_start
    assert end == expected_end


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="2024-01-05",
    )

    assert start == parse_date("2024-01-02")
    assert end == parse_date("2024-01-05")


def test_resolve_cli_date_range_applies_default_range():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        default_range=default_range,
    )

    assert (start, end) == default_range


def test_resolve_cli_date_range_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date="garbage", end_date=None)

    assert "Invalid start date" in capsys.readouterr().err


def test_period_options_collects_flags():
    @click.command()
    @period_options
    def show(periods):
        click.echo(",".join(periods) or "none")

    runner = CliRunner()
    assert runner.invoke(show, []).output.strip() == "none"
    assert runner.invoke(show, ["--last-year"]).output.strip() == "last-year"
    result = runner.invoke(show, ["--this-week", "--last-month"])
    assert result.output.strip() == "this-week,last-month"

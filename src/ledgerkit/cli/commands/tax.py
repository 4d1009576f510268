"""Tax calculation commands."""

import click

from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.tax import GstCalculator, GstCategory
from ledgerkit.utils.amount_parser import parse_amount


@click.group()
def tax_group():
    """Tax calculations."""
    pass


@tax_group.command("gst")
@click.argument("amount")
@click.option(
    "--category",
    type=click.Choice([c.value for c in GstCategory], case_sensitive=False),
    default=GstCategory.HIGHER.value,
    show_default=True,
    help="GST slab",
)
@click.option("--inter-state", is_flag=True, help="Charge IGST instead of CGST + SGST")
@click.option("--reverse", is_flag=True, help="AMOUNT already includes GST")
@click.pass_context
def gst(ctx, amount: str, category: str, inter_state: bool, reverse: bool) -> None:
    """Break down GST on an amount.

    Examples:
        ledgerkit tax gst 10000
        ledgerkit tax gst 11800 --reverse
        ledgerkit tax gst 5000 --category luxury --inter-state
    """
    calculator = GstCalculator(default_is_inter_state=inter_state)
    slab = GstCategory(category.lower())

    try:
        value = parse_amount(amount)
        if reverse:
            calc = calculator.reverse_calculate_by_category(value, slab)
        else:
            calc = calculator.calculate_by_category(value, slab)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Base amount: {calc.base_amount:>15,.2f}")
    if inter_state:
        click.echo(f"IGST ({calc.gst_rate.igst_rate}%): {calc.igst_amount:>15,.2f}")
    else:
        click.echo(f"CGST ({calc.gst_rate.cgst_rate}%): {calc.cgst_amount:>15,.2f}")
        click.echo(f"SGST ({calc.gst_rate.sgst_rate}%): {calc.sgst_amount:>15,.2f}")
    click.echo(f"Total GST:   {calc.total_gst_amount:>15,.2f}")
    click.echo(f"Total:       {calc.total_amount:>15,.2f}")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_group, name="tax")

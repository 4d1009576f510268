"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₹]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into an exact Decimal.

    Accepts plain numbers ("1234.56"), currency symbols ("₹1,234.56",
    "$12"), thousands separators and accounting negatives ("(12.00)").

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount.copy_negate() if negative else amount


def parse_entry_spec(spec: str) -> tuple[str, Decimal]:
    """Split an "ACCOUNT=AMOUNT" posting into its parts.

    Raises:
        ValueError: If the spec has no "=" or either side is empty
    """
    account, sep, amount = spec.rpartition("=")
    if not sep or not account.strip() or not amount.strip():
        raise ValueError(f"Invalid entry '{spec}': expected ACCOUNT=AMOUNT")
    return account.strip(), parse_amount(amount)

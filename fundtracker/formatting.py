"""Display formatting for amounts."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


CENTS = Decimal("0.01")
NBSP = "\u00a0"


def format_amount(value: Union[Decimal, float, int], currency_symbol: str = "€") -> str:
    """
    Format an amount with thousands separators and 0 to 2 decimals.

        format_amount(Decimal("1234.50")) -> "1,234.5 €"
        format_amount(5)                  -> "5 €"

    The symbol is separated by a non-breaking space.
    """
    amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    text = f"{amount:,.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    elif text.endswith("0"):
        text = text[:-1]
    return f"{text}{NBSP}{currency_symbol}"

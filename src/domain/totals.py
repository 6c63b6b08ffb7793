"""Invoice Totals Calculator

Pure derivation of subtotal, tax and grand total from line items.
No state is kept between calls, so it can run on every edit.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable
from pydantic import BaseModel

MONEY_PLACES = Decimal("0.01")
MIN_TAX_RATE = Decimal("0")
MAX_TAX_RATE = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string to Decimal without float artifacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a numeric value: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Not a numeric value: {value!r}")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places for display (half-up)"""
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def validate_tax_rate(tax_rate: Any) -> Decimal:
    rate = to_decimal(tax_rate)
    if rate < MIN_TAX_RATE or rate > MAX_TAX_RATE:
        raise ValueError(f"Tax rate must be between 0 and 100, got {rate}")
    return rate


class InvoiceTotals(BaseModel):
    """
    Derived invoice amounts

    Values are unrounded; use rounded() for presentation.
    """

    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal

    def rounded(self) -> "InvoiceTotals":
        return InvoiceTotals(
            subtotal=round_money(self.subtotal),
            tax_rate=self.tax_rate,
            tax_amount=round_money(self.tax_amount),
            total=round_money(self.total),
        )


def calculate_totals(items: Iterable[Any], tax_rate: Any) -> InvoiceTotals:
    """
    Calculate invoice totals

    Args:
        items: Line items exposing an `amount` attribute
        tax_rate: Tax percentage in [0, 100]

    Returns:
        InvoiceTotals with subtotal, tax_amount and total

    Raises:
        ValueError: If tax_rate is out of range or an amount is not numeric
    """
    rate = validate_tax_rate(tax_rate)
    subtotal = sum((to_decimal(item.amount) for item in items), Decimal("0"))
    tax_amount = subtotal * rate / Decimal("100")
    return InvoiceTotals(
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )

"""Field validation shared by CreateInvoice and UpdateInvoice

Errors are collected into a details dict keyed by field path
(e.g. "recipient_email", "items.0.quantity") instead of failing fast.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from libs.result import Error
from src.domain.ledger import LineItem
from src.domain.totals import to_decimal, validate_tax_rate
from .dtos import LineItemInputDTO


def validate_recipient_email(email: Optional[str], errors: Dict[str, str]) -> None:
    if not email or not email.strip():
        errors["recipient_email"] = "Recipient email is required"
        return
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        errors["recipient_email"] = f"Recipient email is not a valid address: {e}"


def validate_title(title: Optional[str], errors: Dict[str, str]) -> None:
    if not title or not title.strip():
        errors["title"] = "Title is required"


def validate_tax(tax_rate: Any, errors: Dict[str, str]) -> Optional[Decimal]:
    try:
        return validate_tax_rate(tax_rate)
    except ValueError:
        errors["tax_rate"] = "Tax rate must be between 0 and 100"
        return None


def build_line_items(
    items: List[LineItemInputDTO],
    errors: Dict[str, str],
    offset: int = 0,
) -> List[LineItem]:
    """
    Validate submitted items and turn them into ledger items

    Args:
        items: Submitted items
        errors: Details dict to collect errors into
        offset: Position of the first submitted item (a listing item may precede it)
    """
    line_items = []
    for index, item in enumerate(items, start=offset):
        if not item.description or not item.description.strip():
            errors[f"items.{index}.description"] = "Description is required"
        if to_decimal(item.quantity) <= 0:
            errors[f"items.{index}.quantity"] = "Quantity must be greater than 0"
        if to_decimal(item.unit_price) < 0:
            errors[f"items.{index}.unit_price"] = "Unit price cannot be negative"
        line_items.append(
            LineItem.build(
                (item.description or "").strip(), item.quantity, item.unit_price
            )
        )
    return line_items


def validation_error(errors: Dict[str, str]) -> Error:
    return Error(
        code="VALIDATION_ERROR",
        message="Invoice is invalid",
        reason=", ".join(sorted(errors)),
        details=errors,
    )


def check_items_present(line_items: List[LineItem], errors: Dict[str, str]) -> None:
    if not line_items:
        errors["items"] = "At least one line item is required"

"""Line Item Ledger

Ordered, mutable collection of line items used while an invoice is being
composed, before it is persisted.

Domain Rules:
- The ledger always holds at least one line item
- amount is always quantity * unit_price and is never edited directly
- amount is recomputed in the same call that changes its inputs
"""

from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel

from .totals import InvoiceTotals, calculate_totals, to_decimal

EDITABLE_FIELDS = ("description", "quantity", "unit_price")


class LineItem(BaseModel):
    """A single invoice line during composition"""

    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")

    @classmethod
    def build(cls, description: str, quantity: Any, unit_price: Any) -> "LineItem":
        item = cls(
            description=description or "",
            quantity=to_decimal(quantity),
            unit_price=to_decimal(unit_price),
        )
        item.recompute()
        return item

    def recompute(self) -> None:
        self.amount = self.quantity * self.unit_price


class LineItemLedger:
    """
    Ordered list of line items with the minimum-one-item invariant

    Usage:
        ledger = LineItemLedger()
        ledger.update_item(0, "description", "Widget")
        ledger.update_item(0, "quantity", 3)
        ledger.update_item(0, "unit_price", "10.00")
        ledger.totals(tax_rate=10).total  # Decimal("33.00")
    """

    def __init__(self, items: Optional[List[LineItem]] = None):
        self._items: List[LineItem] = [item.model_copy() for item in items or []]
        for item in self._items:
            item.recompute()
        if not self._items:
            self._items.append(LineItem())

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> List[LineItem]:
        return [item.model_copy() for item in self._items]

    def add_item(self) -> LineItem:
        item = LineItem()
        self._items.append(item)
        return item.model_copy()

    def append(self, item: LineItem) -> None:
        added = item.model_copy()
        added.recompute()
        self._items.append(added)

    def remove_item(self, index: int) -> None:
        """Remove the item at index; a no-op when only one item is left"""
        if len(self._items) <= 1:
            return
        del self._items[index]

    def update_item(self, index: int, field: str, value: Any) -> LineItem:
        """
        Set description, quantity or unit_price on the item at index

        Raises:
            IndexError: If index is out of range
            ValueError: If field is not editable or value is not numeric
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be edited")

        item = self._items[index]
        if field == "description":
            item.description = "" if value is None else str(value)
        else:
            setattr(item, field, to_decimal(value))
            item.recompute()
        return item.model_copy()

    def totals(self, tax_rate: Any = 0) -> InvoiceTotals:
        return calculate_totals(self._items, tax_rate)

    @classmethod
    def from_listing(cls, title: str, price: Any) -> "LineItemLedger":
        """Seed a ledger whose first item is a snapshot of a listing"""
        return cls([LineItem.build(title, 1, price)])

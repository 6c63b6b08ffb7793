"""Unit tests for the totals calculator"""

import pytest
from decimal import Decimal
from src.domain.ledger import LineItem
from src.domain.totals import calculate_totals, round_money, to_decimal


def _items(*pairs):
    return [LineItem.build("item", quantity, price) for quantity, price in pairs]


class TestCalculateTotals:

    def test_widget_example(self):
        """
        Given: Widget x 3 @ 10.00 with 10% tax
        When: totals are calculated
        Then: 30.00 / 3.00 / 33.00
        """
        totals = calculate_totals(_items((3, "10.00")), 10).rounded()

        assert totals.subtotal == Decimal("30.00")
        assert totals.tax_amount == Decimal("3.00")
        assert totals.total == Decimal("33.00")

    def test_subtotal_is_exact_sum(self):
        totals = calculate_totals(_items((2, "19.99"), ("1.5", "4.10"), (7, "0.01")), 0)

        assert totals.subtotal == Decimal("2") * Decimal("19.99") + Decimal("1.5") * Decimal("4.10") + Decimal("0.07")

    def test_zero_tax_rate_gives_zero_tax(self):
        totals = calculate_totals(_items((1, "99.99")), 0)

        assert totals.tax_amount == Decimal("0")
        assert totals.total == totals.subtotal

    def test_total_is_subtotal_plus_tax(self):
        totals = calculate_totals(_items((3, "33.33")), "7.25")

        assert totals.tax_amount == totals.subtotal * Decimal("7.25") / Decimal("100")
        assert totals.total == totals.subtotal + totals.tax_amount

    @pytest.mark.parametrize("rate", [-1, "100.01", 250])
    def test_tax_rate_out_of_range_rejected(self, rate):
        with pytest.raises(ValueError):
            calculate_totals(_items((1, 1)), rate)

    def test_empty_items_sum_to_zero(self):
        totals = calculate_totals([], 10)

        assert totals.subtotal == Decimal("0")
        assert totals.total == Decimal("0")


class TestMoneyHelpers:

    def test_round_money_is_half_up(self):
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("2.665")) == Decimal("2.67")

    def test_to_decimal_avoids_float_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", [None, True, "abc"])
    def test_to_decimal_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

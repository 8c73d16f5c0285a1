from __future__ import annotations

from decimal import Decimal

"""Revenue allocation of order-level tax to line items."""

__all__ = [
    "allocate_revenue",
]


def allocate_revenue(
    line_item_subtotal: Decimal, order_sub_total: Decimal, order_tax_amount: Decimal
) -> Decimal:
    """Return a line item's share of order revenue.

    The line keeps its own subtotal plus the fraction of the order's tax that
    matches its share of the order subtotal. Orders without a positive subtotal
    get no tax allocated.

    Summed over every line of an order the result equals
    ``order_sub_total + order_tax_amount`` (up to rounding).

    >>> allocate_revenue(Decimal("30"), Decimal("100"), Decimal("10"))
    Decimal('33.0')
    """
    if order_sub_total > 0:
        return line_item_subtotal + (line_item_subtotal / order_sub_total) * order_tax_amount
    return line_item_subtotal

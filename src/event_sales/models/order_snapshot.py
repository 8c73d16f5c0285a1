from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

__all__ = [
    "OrderSnapshot",
]


@dataclass(frozen=True)
class OrderSnapshot:
    """Order-level totals captured from the first qualifying row of an order.

    Later rows for the same order id never replace it, so every line item of
    the order is allocated against one stable set of totals.
    """
    order_sub_total: Decimal
    order_tax_amount: Decimal
    order_total_amount: Decimal
    source_name: str

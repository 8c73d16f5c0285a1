from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

"""ParsedOrder model: one clean record per qualifying line item."""

__all__ = [
    "ParsedOrder",
]


@dataclass(frozen=True)
class ParsedOrder:
    """A single purchased line item, scoped to one event/city.

    Customer fields are resolved from the order's primary row when the line
    itself is a continuation row. Order-level totals and ``source_name`` are
    copied from the order's snapshot, not from the line.
    """
    order_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    status: str
    source_name: str
    order_date: str
    order_time: str
    class_name: str  # canonicalized
    quantity: int
    price: Decimal
    line_item_subtotal: Decimal
    order_sub_total: Decimal
    order_tax_amount: Decimal
    order_total_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

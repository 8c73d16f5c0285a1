from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal

from .parsed_order import ParsedOrder
from .skip_record import SkipRecord

"""ParseResult: engine output plus diagnostics for one reconcile() call."""

__all__ = [
    "SkipReason",
    "ParseResult",
]


class SkipReason:
    """Row skip classifications."""
    SHORT_ROW = "SHORT_ROW"
    MISSING_ORDER_ID = "MISSING_ORDER_ID"
    MISSING_SOURCE = "MISSING_SOURCE"
    SOURCE_MISMATCH = "SOURCE_MISMATCH"
    STATUS_NOT_COMPLETED = "STATUS_NOT_COMPLETED"
    NOT_QUALIFIED = "NOT_QUALIFIED"
    MISSING_CLASS_NAME = "MISSING_CLASS_NAME"
    MISSING_SNAPSHOT = "MISSING_SNAPSHOT"
    MISSING_CUSTOMER = "MISSING_CUSTOMER"


@dataclass(frozen=True)
class ParseResult:
    """Records emitted for one export together with what was skipped."""
    records: list[ParsedOrder]
    city: str | None = None
    data_rows: int = 0  # header を除く行数
    qualified_orders: int = 0
    skipped: list[SkipRecord] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def skip_counts(self) -> Counter[str]:
        """Skip record count per reason."""
        return Counter(s.reason for s in self.skipped)

    @property
    def order_ids(self) -> list[str]:
        """Distinct order ids among the records, in first-seen order."""
        return list(dict.fromkeys(r.order_id for r in self.records))

    @property
    def total_revenue(self) -> Decimal:
        """Sum of allocated revenue over all records."""
        from ..services.allocation import allocate_revenue

        return sum(
            (
                allocate_revenue(r.line_item_subtotal, r.order_sub_total, r.order_tax_amount)
                for r in self.records
            ),
            Decimal("0"),
        )

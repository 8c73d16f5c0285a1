from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from ..errors import MissingColumnError

"""Header resolution for sales exports.

Each logical field is located by a case-insensitive substring match of its
label against the header row. The first matching header wins. Resolution runs
once per parse; rows are read by index afterwards.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "ColumnSchema",
    "resolve_schema",
]

# logical field -> header label, in resolution order
REQUIRED_COLUMNS: Mapping[str, str] = MappingProxyType({
    "order_id": "Internal order id",
    "customer_name": "Customer name",
    "customer_email": "Customer email",
    "customer_phone": "Customer phone",
    "status": "Status",
    "source_name": "Source name",
    "order_date": "Order date",
    "order_time": "Order time",
    "class_name": "Line item Name",
    "quantity": "Line item Quantity",
    "price": "Line item Price",
    "line_item_subtotal": "Line item Subtotal",
    "order_sub_total": "Sub total",
    "order_tax_amount": "Tax Amount",
    "order_total_amount": "Total Amount",
})


@dataclass(frozen=True)
class ColumnSchema:
    """Immutable logical field -> column index mapping."""
    indices: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "indices", MappingProxyType(dict(self.indices)))

    @property
    def min_width(self) -> int:
        """Fields a row needs before any required column can be read."""
        return max(self.indices.values(), default=-1) + 1

    def index_of(self, name: str) -> int:
        return self.indices[name]

    def get(self, row: Sequence[str], name: str) -> str:
        """Trimmed value of a logical field in a tokenized row."""
        return row[self.indices[name]].strip()

    def fits(self, row: Sequence[str]) -> bool:
        return len(row) >= self.min_width


def resolve_schema(
    header_fields: Sequence[str], labels: Mapping[str, str] = REQUIRED_COLUMNS
) -> ColumnSchema:
    """Resolve every required label against the header row.

    Raises:
        MissingColumnError: for the first label no header contains
    """
    lowered = [h.lower() for h in header_fields]
    indices: dict[str, int] = {}
    for name, label in labels.items():
        needle = label.lower()
        index = next((i for i, h in enumerate(lowered) if needle in h), None)
        if index is None:
            raise MissingColumnError(label)
        indices[name] = index
    return ColumnSchema(indices)

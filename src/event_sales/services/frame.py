from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields

import pandas as pd

from ..models.parsed_order import ParsedOrder
from .allocation import allocate_revenue

"""Tabular view of parsed records for export and inspection."""

__all__ = [
    "FRAME_COLUMNS",
    "orders_to_frame",
]

FRAME_COLUMNS = [f.name for f in fields(ParsedOrder)] + ["allocated_revenue"]


def orders_to_frame(records: Sequence[ParsedOrder]) -> pd.DataFrame:
    """Build a DataFrame with one row per record plus its allocated revenue.

    Money columns stay Decimal (object dtype) so totals are not rounded
    through float before export.
    """
    rows = []
    for r in records:
        row = r.to_dict()
        row["allocated_revenue"] = allocate_revenue(
            r.line_item_subtotal, r.order_sub_total, r.order_tax_amount
        )
        rows.append(row)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)

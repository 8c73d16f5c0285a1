from __future__ import annotations

from decimal import Decimal

import pytest

from event_sales.models.parse_result import ParseResult
from event_sales.models.parsed_order import ParsedOrder
from event_sales.models.skip_record import SkipRecord


def _order(order_id: str, line: str, sub: str, tax: str) -> ParsedOrder:
    return ParsedOrder(
        order_id=order_id,
        customer_name="Jane Doe",
        customer_email="jane@example.com",
        customer_phone="",
        status="Completed",
        source_name="Ebony Fit Weekend - DC",
        order_date="2025-09-06",
        order_time="09:15",
        class_name="SPIN CLASS",
        quantity=1,
        price=Decimal(line),
        line_item_subtotal=Decimal(line),
        order_sub_total=Decimal(sub),
        order_tax_amount=Decimal(tax),
        order_total_amount=Decimal(sub) + Decimal(tax),
    )


def test_parsed_order_is_immutable():
    order = _order("1", "10", "10", "1")
    with pytest.raises(AttributeError):
        order.quantity = 2  # type: ignore[misc]


def test_parsed_order_to_dict():
    data = _order("1", "10", "10", "1").to_dict()
    assert data["order_id"] == "1"
    assert data["order_total_amount"] == Decimal("11")
    assert len(data) == 15


def test_parse_result_aggregates():
    result = ParseResult(
        records=[_order("1", "30", "80", "8"), _order("1", "50", "80", "8"), _order("2", "20", "0", "5")],
        city="dc",
        data_rows=5,
        qualified_orders=2,
        skipped=[SkipRecord(4, "3", "SOURCE_MISMATCH"), SkipRecord(5, "", "SHORT_ROW")],
    )
    assert result.order_ids == ["1", "2"]
    assert result.total_revenue == Decimal("108")
    assert result.skip_counts == {"SOURCE_MISMATCH": 1, "SHORT_ROW": 1}


def test_parse_result_empty():
    result = ParseResult(records=[])
    assert result.total_revenue == Decimal("0")
    assert result.order_ids == []
    assert not result.skip_counts

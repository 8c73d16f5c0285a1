from __future__ import annotations

from decimal import Decimal

import pytest

from event_sales.parsing.numbers import parse_amount, parse_quantity


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$1,234.50", Decimal("1234.50")),
        ("30", Decimal("30")),
        ("-5.25", Decimal("-5.25")),
        ("USD 12.00", Decimal("12.00")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        ("n/a", Decimal("0")),
        ("1.2.3", Decimal("1.2")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("2", 2), (" 3 ", 3), ("2.0", 2), ("", 0), (None, 0), ("abc", 0), ("-1", -1)],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

"""Numeric field parsing.

Amount columns carry currency formatting ("$1,234.50"). Everything except
digits, '.' and '-' is stripped; the longest leading number of what remains is
used. Blank or non-numeric values read as zero.
"""

__all__ = [
    "parse_amount",
    "parse_quantity",
]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_DECIMAL = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_LEADING_INT = re.compile(r"[+-]?\d+")

ZERO = Decimal("0")


def parse_amount(raw: str | None) -> Decimal:
    """Parse a money field, e.g. ``"$1,234.50"`` -> ``Decimal("1234.50")``."""
    if not raw:
        return ZERO
    cleaned = _NON_NUMERIC.sub("", raw)
    m = _LEADING_DECIMAL.match(cleaned)
    if m is None:
        return ZERO
    try:
        return Decimal(m.group(0))
    except InvalidOperation:  # pragma: no cover - regex guarantees a number
        return ZERO


def parse_quantity(raw: str | None) -> int:
    """Parse a quantity field; reads the leading integer (``"2.0"`` -> 2)."""
    if not raw:
        return 0
    m = _LEADING_INT.match(raw.strip())
    return int(m.group(0)) if m else 0
